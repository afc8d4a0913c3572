"""
ELFScope Error Kinds
=====================

Exception hierarchy raised by the decode engine.  Structural failures
(bad magic, unsupported class, short reads) abort decoding of a single
file and propagate to the caller; the batch engine catches them per file.

Unknown numeric codes are *not* errors: every lookup table renders them
with a generic ``"unknown (0x..)"`` label instead.
"""

from __future__ import annotations


class ElfError(Exception):
    """Base class for every error raised while decoding an ELF file."""


class ElfFileNotFoundError(ElfError, FileNotFoundError):
    """The input path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"'{path}': No such file")
        self.path = path


class NotAnElfFileError(ElfError):
    """The first four bytes are not ``7F 'E' 'L' 'F'``."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"'{path}': Not an ELF file - it has the wrong magic bytes at the start"
        )
        self.path = path


class UnsupportedClassError(ElfError):
    """Identification byte 4 is neither ELFCLASS32 nor ELFCLASS64."""

    def __init__(self, value: int) -> None:
        super().__init__(f"Unsupported ELF class: 0x{value:x}")
        self.value = value


class TruncatedReadError(ElfError):
    """Fewer bytes were available than a fixed-size record requires."""

    def __init__(self, offset: int, wanted: int, got: int) -> None:
        super().__init__(
            f"Truncated read at offset 0x{offset:x}: wanted {wanted} bytes, got {got}"
        )
        self.offset = offset
        self.wanted = wanted
        self.got = got


class TruncatedNameError(ElfError):
    """No NUL terminator was found before end-of-file."""

    def __init__(self, offset: int) -> None:
        super().__init__(f"Unterminated string at offset 0x{offset:x}")
        self.offset = offset


class MissingStringTableError(ElfError):
    """An expected string table (.strtab, .dynstr, shstrtab) is absent."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Missing string table: {table}")
        self.table = table


class FileTooLargeError(ElfError):
    """The input is larger than the configured ``max_file_size``."""

    def __init__(self, path: str, size: int, limit: int) -> None:
        super().__init__(f"'{path}': File too large: {size:,} bytes (max: {limit:,} bytes)")
        self.path = path
        self.size = size
        self.limit = limit
