"""
Program and Section Header Tables
==================================

Loads the program header table and section header table at the offsets and
counts declared in the file header, and renders segment / section types and
flags.

Field order differs between layouts for program headers::

    Elf32_Phdr: type offset vaddr paddr filesz memsz flags align
    Elf64_Phdr: type flags offset vaddr paddr filesz memsz align
"""

from __future__ import annotations

from typing import Union

from elfscope.core.models import (
    ElfClass,
    Header32,
    Header64,
    Section32,
    Section64,
    Segment32,
    Segment64,
)
from elfscope.parsers.constants import (
    PF_R,
    PF_W,
    PF_X,
    PT_HIOS,
    PT_HIPROC,
    PT_LOOS,
    PT_LOPROC,
    PT_NAMES,
    SHF_EXCLUDE,
    SHF_LETTERS,
    SHF_MASKOS,
    SHF_MASKPROC,
    SHT_HIOS,
    SHT_HIPROC,
    SHT_HIUSER,
    SHT_LOOS,
    SHT_LOPROC,
    SHT_LOUSER,
    SHT_NAMES,
    unknown,
)
from elfscope.parsers.header import HeaderView
from elfscope.parsers.source import ByteSource

_SEGMENT_LAYOUTS: dict[ElfClass, tuple[str, tuple[str, ...]]] = {
    ElfClass.ELF32: (
        "IIIIIIII",
        ("type", "offset", "vaddr", "paddr", "filesz", "memsz", "flags", "align"),
    ),
    ElfClass.ELF64: (
        "IIQQQQQQ",
        ("type", "flags", "offset", "vaddr", "paddr", "filesz", "memsz", "align"),
    ),
}

_SECTION_FORMATS: dict[ElfClass, str] = {
    ElfClass.ELF32: "IIIIIIIIII",  # 40 bytes
    ElfClass.ELF64: "IIQQQQIIQQ",  # 64 bytes
}

_SECTION_FIELDS: tuple[str, ...] = (
    "name", "type", "flags", "addr", "offset",
    "size", "link", "info", "addralign", "entsize",
)


def load_program_headers(
    source: ByteSource,
    header: Union[Header32, Header64],
) -> list[Union[Segment32, Segment64]]:
    """Read the program header table.

    Returns an empty list when ``phoff`` is 0 (relocatable objects have no
    program headers).
    """
    if header.phoff == 0 or header.phnum == 0:
        return []

    view = HeaderView(header)
    fmt, fields = _SEGMENT_LAYOUTS[view.elf_class]
    model = Segment64 if view.elf_class is ElfClass.ELF64 else Segment32
    rows = source.unpack_table(
        view.byte_order + fmt,
        header.phoff,
        header.phnum,
        header.phentsize,
    )
    return [model(**dict(zip(fields, row))) for row in rows]


def load_section_headers(
    source: ByteSource,
    header: Union[Header32, Header64],
) -> list[Union[Section32, Section64]]:
    """Read the section header table, keeping the null entry at index 0."""
    if header.shoff == 0 or header.shnum == 0:
        return []

    view = HeaderView(header)
    model = Section64 if view.elf_class is ElfClass.ELF64 else Section32
    rows = source.unpack_table(
        view.byte_order + _SECTION_FORMATS[view.elf_class],
        header.shoff,
        header.shnum,
        header.shentsize,
    )
    return [model(**dict(zip(_SECTION_FIELDS, row))) for row in rows]


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def segment_type_name(value: int) -> str:
    """Name a ``p_type`` code; OS / processor ranges render generically."""
    if value in PT_NAMES:
        return PT_NAMES[value]
    if PT_LOOS <= value <= PT_HIOS:
        return f"LOOS+0x{value - PT_LOOS:x}"
    if PT_LOPROC <= value <= PT_HIPROC:
        return f"LOPROC+0x{value - PT_LOPROC:x}"
    return unknown(value)


def segment_flags(value: int) -> str:
    """Render ``p_flags`` as ``R``/``W``/``X`` letters, always in that order."""
    letters = ""
    if value & PF_R:
        letters += "R"
    if value & PF_W:
        letters += "W"
    if value & PF_X:
        letters += "X"
    return letters


def section_type_name(value: int) -> str:
    if value in SHT_NAMES:
        return SHT_NAMES[value]
    if SHT_LOOS <= value <= SHT_HIOS:
        return f"LOOS+0x{value - SHT_LOOS:x}"
    if SHT_LOPROC <= value <= SHT_HIPROC:
        return f"LOPROC+0x{value - SHT_LOPROC:x}"
    if SHT_LOUSER <= value <= SHT_HIUSER:
        return f"LOUSER+0x{value - SHT_LOUSER:x}"
    return unknown(value)


def section_flags(value: int) -> str:
    """Render ``sh_flags`` with readelf's key letters (``"WAX"``...)."""
    letters = "".join(letter for bit, letter in SHF_LETTERS if value & bit)
    if value & SHF_MASKOS:
        letters += "o"
    if value & SHF_EXCLUDE:
        letters += "E"
    if value & SHF_MASKPROC:
        letters += "p"
    return letters
