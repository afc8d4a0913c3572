"""
Note Section Decoding
======================

Every section whose name starts with ``.note`` holds a packed sequence of
note records::

    namesz(4) descsz(4) type(4) name[namesz] <pad> desc[descsz] <pad>

Name and descriptor are each padded to a 4-byte boundary before the next
field or record.  All records in a section are decoded.

Well-known GNU types are interpreted:

    1  NT_GNU_ABI_TAG          OS enumerator + major.minor.subminor
    2  NT_GNU_HWCAP            named only
    3  NT_GNU_BUILD_ID         hex digest of the descriptor
    4  NT_GNU_GOLD_VERSION     named only
    5  NT_GNU_PROPERTY_TYPE_0  named only
"""

from __future__ import annotations

import struct
from typing import Sequence, Union

from elfscope.core.models import NoteEntry, Section32, Section64
from elfscope.parsers.constants import (
    ABI_TAG_OS_NAMES,
    NT_GNU_ABI_TAG,
    NT_GNU_BUILD_ID,
    NT_GNU_NAMES,
    lookup,
)
from elfscope.parsers.source import ByteSource

NOTE_PREFIX: str = ".note"
NOTE_ALIGN: int = 4
_NOTE_HEADER = "III"
_NOTE_HEADER_SIZE: int = struct.calcsize(_NOTE_HEADER)


def align(value: int, alignment: int = NOTE_ALIGN) -> int:
    """Round *value* up to the next multiple of *alignment*."""
    return (value + alignment - 1) & ~(alignment - 1)


def desc_words(desc: bytes, byte_order: str = "<") -> tuple[int, ...]:
    """Split a descriptor into 32-bit words, zero-filling a short tail."""
    padded = desc.ljust(align(len(desc)), b"\x00")
    return struct.unpack(f"{byte_order}{len(padded) // 4}I", padded)


def abi_tag(words: Sequence[int]) -> tuple[str, str]:
    """Return ``(os, "major.minor.subminor")`` from an ABI-tag descriptor."""
    padded = list(words[:4]) + [0] * (4 - len(words[:4]))
    os_name = lookup(ABI_TAG_OS_NAMES, padded[0])
    return os_name, "{}.{}.{}".format(*padded[1:4])


def describe(note_type: int, words: Sequence[int], desc: bytes) -> tuple[str, str]:
    """Return ``(type_name, description)`` for a note."""
    if note_type not in NT_GNU_NAMES:
        raw = " ".join(f"{w:08x}" for w in words)
        return f"Unknown note type: (0x{note_type:08x})", raw

    type_name = NT_GNU_NAMES[note_type]
    if note_type == NT_GNU_ABI_TAG:
        os_name, abi = abi_tag(words)
        return type_name, f"OS: {os_name}, ABI: {abi}"
    if note_type == NT_GNU_BUILD_ID:
        return type_name, f"Build ID: {desc.hex()}"
    return type_name, ""


def decode_notes(
    source: ByteSource,
    offset: int,
    size: int,
    byte_order: str = "<",
    *,
    encoding: str = "utf-8",
) -> list[NoteEntry]:
    """Decode every note record in ``[offset, offset + size)``."""
    entries: list[NoteEntry] = []
    cursor = offset
    end = offset + size

    while end - cursor >= _NOTE_HEADER_SIZE:
        name_size, desc_size, note_type = source.unpack_at(byte_order + _NOTE_HEADER, cursor)
        cursor += _NOTE_HEADER_SIZE

        raw_name = source.read_at(cursor, name_size) if name_size else b""
        cursor += align(name_size)

        desc = source.read_at(cursor, desc_size) if desc_size else b""
        cursor += align(desc_size)

        words = desc_words(desc, byte_order)
        type_name, description = describe(note_type, words, desc)
        entries.append(NoteEntry(
            name_size=name_size,
            desc_size=desc_size,
            type=note_type,
            name=raw_name.split(b"\x00", 1)[0].decode(encoding, errors="replace"),
            words=words,
            desc=desc,
            type_name=type_name,
            description=description,
        ))

    return entries


def notes(
    source: ByteSource,
    sections: Sequence[Union[Section32, Section64]],
    names: Sequence[str],
    byte_order: str = "<",
    prefix: str = NOTE_PREFIX,
    *,
    encoding: str = "utf-8",
) -> dict[str, list[NoteEntry]]:
    """Decode all note sections, keyed by section name.

    Files without note sections give an empty mapping.
    """
    result: dict[str, list[NoteEntry]] = {}
    for sh, name in zip(sections, names):
        if not name.startswith(prefix):
            continue
        result[name] = decode_notes(source, sh.offset, sh.size, byte_order, encoding=encoding)
    return result
