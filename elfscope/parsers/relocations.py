"""
Relocation Section Decoding
============================

Decodes every ``.rel*`` section of type ``SHT_REL`` or ``SHT_RELA``.  Other
sections sharing the prefix (``.relro_padding`` is NOBITS, ``.relr.dyn`` is
RELR) are skipped.  Sections of type ``SHT_RELA`` (or named ``.rela*``)
carry a signed addend after ``info``.

Record layouts::

    Elf32_Rel:  offset(4) info(4)            Elf32_Rela: ... addend(4, signed)
    Elf64_Rel:  offset(8) info(8)            Elf64_Rela: ... addend(8, signed)

``info`` packs the symbol index with the relocation type::

    32-bit: sym = info >> 8,   type = info & 0xff
    64-bit: sym = info >> 32,  type = info & 0xffffffff

The type code is named through the table for the file's ``e_machine``.
"""

from __future__ import annotations

import struct
from typing import Sequence, Union

from elfscope.core.models import (
    ElfClass,
    Header32,
    Header64,
    RelocationEntry,
    RelocationSection,
    Section32,
    Section64,
)
from elfscope.parsers.constants import SHT_REL, SHT_RELA
from elfscope.parsers.header import HeaderView
from elfscope.parsers.reloc_types import relocation_type_name
from elfscope.parsers.source import ByteSource

RELOCATION_PREFIX: str = ".rel"
RELOCATION_TYPES: frozenset[int] = frozenset({SHT_REL, SHT_RELA})

_RELOCATION_FORMATS: dict[tuple[ElfClass, bool], str] = {
    (ElfClass.ELF32, False): "II",
    (ElfClass.ELF32, True): "IIi",
    (ElfClass.ELF64, False): "QQ",
    (ElfClass.ELF64, True): "QQq",
}


def split_info(info: int, elf_class: ElfClass) -> tuple[int, int]:
    """Return ``(symbol_index, type)`` from a packed ``r_info``."""
    if elf_class is ElfClass.ELF64:
        return info >> 32, info & 0xFFFFFFFF
    return info >> 8, info & 0xFF


def has_addend(section: Union[Section32, Section64], name: str) -> bool:
    return section.type == SHT_RELA or name.startswith(".rela")


def decode_relocation_section(
    source: ByteSource,
    section: Union[Section32, Section64],
    name: str,
    header: Union[Header32, Header64],
) -> RelocationSection:
    """Decode one relocation section into a :class:`RelocationSection`."""
    view = HeaderView(header)
    elf_class = view.elf_class
    addend = has_addend(section, name)
    fmt = _RELOCATION_FORMATS[(elf_class, addend)]
    # a trailing partial record is dropped
    entsize = max(section.entsize, struct.calcsize(fmt))
    count = section.size // entsize

    entries = []
    for row in source.unpack_table(view.byte_order + fmt, section.offset, count, entsize):
        symbol_index, code = split_info(row[1], elf_class)
        entries.append(RelocationEntry(
            offset=row[0],
            info=row[1],
            addend=row[2] if addend else None,
            symbol_index=symbol_index,
            type=code,
            type_name=relocation_type_name(view.machine_code, code),
        ))

    return RelocationSection(
        name=name,
        offset=section.offset,
        has_addend=addend,
        entries=tuple(entries),
    )


def relocations(
    source: ByteSource,
    sections: Sequence[Union[Section32, Section64]],
    names: Sequence[str],
    header: Union[Header32, Header64],
    prefix: str = RELOCATION_PREFIX,
) -> list[RelocationSection]:
    """Decode every REL/RELA section whose name starts with *prefix*, in table order."""
    return [
        decode_relocation_section(source, sh, name, header)
        for sh, name in zip(sections, names)
        if name.startswith(prefix) and sh.type in RELOCATION_TYPES
    ]
