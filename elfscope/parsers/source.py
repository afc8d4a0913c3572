"""
Positioned Byte Source
=======================

:class:`ByteSource` wraps one seekable binary handle per decoded file.  All
reads go through :meth:`ByteSource.scoped`, which saves the cursor, seeks,
and restores the cursor afterwards, so an indirect read (a section name
looked up while a symbol table is being walked) never disturbs the caller's
position.

Short reads and offsets the handle cannot seek to are hard errors
(:class:`TruncatedReadError`); nothing is retried and no partial record
is returned.
"""

from __future__ import annotations

import io
import struct
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Generator

from elfscope.core.errors import TruncatedNameError, TruncatedReadError


class ByteSource:
    """Seekable, readable view over the bytes of one ELF file.

    Usage::

        with ByteSource.from_path("/bin/ls") as src:
            magic = src.read_at(0, 4)
            name = src.read_cstring(0x3a8)

    Args:
        handle: Binary file object opened for reading.
        name: Display name used in error messages.
        chunk_size: Block size used when scanning for a NUL terminator.
    """

    def __init__(
        self,
        handle: BinaryIO,
        name: str = "<memory>",
        *,
        chunk_size: int = 64,
    ) -> None:
        self._handle = handle
        self._name = name
        self._chunk_size = max(1, chunk_size)

    @classmethod
    def from_path(cls, path: str | Path, *, chunk_size: int = 64) -> ByteSource:
        return cls(open(path, "rb"), str(path), chunk_size=chunk_size)

    @classmethod
    def from_bytes(cls, data: bytes, *, chunk_size: int = 64) -> ByteSource:
        return cls(io.BytesIO(data), chunk_size=chunk_size)

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> ByteSource:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    #  Positioned reads
    # ------------------------------------------------------------------ #

    @property
    def size(self) -> int:
        """Total length of the underlying file in bytes."""
        with self.scoped(0):
            return self._handle.seek(0, io.SEEK_END)

    @contextmanager
    def scoped(self, offset: int) -> Generator[BinaryIO, None, None]:
        """Seek to *offset* for the duration of the block, then restore."""
        saved = self._handle.tell()
        try:
            self._handle.seek(offset)
        except (ValueError, OverflowError) as exc:
            # offset does not fit the platform's file offset type
            raise TruncatedReadError(offset, 0, 0) from exc
        try:
            yield self._handle
        finally:
            self._handle.seek(saved)

    def read_at(self, offset: int, size: int) -> bytes:
        """Read exactly *size* bytes at *offset*.

        Raises:
            TruncatedReadError: If end-of-file comes first.
        """
        with self.scoped(offset) as fh:
            data = fh.read(size)
        if len(data) != size:
            raise TruncatedReadError(offset, size, len(data))
        return data

    def unpack_at(self, fmt: str, offset: int) -> tuple:
        """Read one fixed-size record at *offset* and unpack it with *fmt*."""
        return struct.unpack(fmt, self.read_at(offset, struct.calcsize(fmt)))

    def unpack_table(self, fmt: str, offset: int, count: int, stride: int = 0) -> list[tuple]:
        """Unpack *count* records of *fmt* starting at *offset*.

        Records are *stride* bytes apart; a stride of 0 means packed.
        """
        step = stride or struct.calcsize(fmt)
        return [self.unpack_at(fmt, offset + i * step) for i in range(count)]

    def read_cstring(self, offset: int) -> bytes:
        """Read bytes from *offset* up to (not including) the next NUL.

        Raises:
            TruncatedNameError: If no terminator is found before EOF.
        """
        parts: list[bytes] = []
        with self.scoped(offset) as fh:
            while True:
                chunk = fh.read(self._chunk_size)
                if not chunk:
                    raise TruncatedNameError(offset)
                end = chunk.find(b"\x00")
                if end != -1:
                    parts.append(chunk[:end])
                    return b"".join(parts)
                parts.append(chunk)
