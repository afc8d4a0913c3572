"""
ELF Format Detection
=====================

Validates the 4-byte magic and reads the identification bytes that decide
which on-disk layout (32- or 64-bit) and which byte order every later
structure uses.
"""

from __future__ import annotations

from pathlib import Path

from elfscope.core.errors import (
    ElfFileNotFoundError,
    NotAnElfFileError,
    TruncatedReadError,
    UnsupportedClassError,
)
from elfscope.core.models import ElfClass
from elfscope.parsers.constants import (
    EI_CLASS,
    EI_DATA,
    ELF_MAGIC,
    ELFCLASS32,
    ELFCLASS64,
    ELFDATA2MSB,
)
from elfscope.parsers.source import ByteSource


def open_source(path: str | Path, *, chunk_size: int = 64) -> ByteSource:
    """Open *path* and confirm it starts with the ELF magic.

    Raises:
        ElfFileNotFoundError: If the path does not exist.
        NotAnElfFileError: If the magic bytes are wrong (or the file is
            shorter than four bytes).  The handle is closed first.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ElfFileNotFoundError(str(path))

    source = ByteSource.from_path(file_path, chunk_size=chunk_size)
    try:
        check_magic(source)
    except BaseException:
        source.close()
        raise
    return source


def check_magic(source: ByteSource) -> None:
    """Raise :class:`NotAnElfFileError` unless bytes 0-3 are the ELF magic."""
    try:
        magic = source.read_at(0, len(ELF_MAGIC))
    except TruncatedReadError:
        raise NotAnElfFileError(source.name) from None
    if magic != ELF_MAGIC:
        raise NotAnElfFileError(source.name)


def detect_class(source: ByteSource) -> ElfClass:
    """Read ``e_ident[EI_CLASS]``.

    Raises:
        UnsupportedClassError: For any value other than 1 or 2.
    """
    value = source.read_at(EI_CLASS, 1)[0]
    if value == ELFCLASS32:
        return ElfClass.ELF32
    if value == ELFCLASS64:
        return ElfClass.ELF64
    raise UnsupportedClassError(value)


def detect_byte_order(source: ByteSource) -> str:
    """Return the :mod:`struct` byte-order prefix from ``e_ident[EI_DATA]``.

    ELFDATA2MSB selects big-endian; every other value is read as
    little-endian.
    """
    value = source.read_at(EI_DATA, 1)[0]
    return ">" if value == ELFDATA2MSB else "<"
