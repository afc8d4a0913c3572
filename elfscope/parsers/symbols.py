"""
Symbol Table Extraction
========================

Locates ``.symtab`` (by section type) or ``.dynsym`` (by name) and decodes
its fixed-size entries.

Entry layouts::

    Elf32_Sym: name(4) value(4) size(4) info(1) other(1) shndx(2)   16 bytes
    Elf64_Sym: name(4) info(1) other(1) shndx(2) value(8) size(8)   24 bytes

``info`` packs type (low nibble) and binding (high nibble); the low two
bits of ``other`` hold the visibility.
"""

from __future__ import annotations

import struct
from typing import Optional, Sequence, Union

from elfscope.core.models import (
    ElfClass,
    Section32,
    Section64,
    Symbol32,
    Symbol64,
    SymbolKind,
)
from elfscope.parsers.constants import (
    SHN_ABS,
    SHN_COMMON,
    SHN_LORESERVE,
    SHN_UNDEF,
    SHT_SYMTAB,
    ST_HIOS,
    ST_HIPROC,
    ST_LOOS,
    ST_LOPROC,
    STB_NAMES,
    STT_NAMES,
    STV_NAMES,
    unknown,
)
from elfscope.parsers.names import find_section
from elfscope.parsers.source import ByteSource

_SYMBOL_LAYOUTS: dict[ElfClass, tuple[str, tuple[str, ...]]] = {
    ElfClass.ELF32: ("IIIBBH", ("name", "value", "size", "info", "other", "shndx")),
    ElfClass.ELF64: ("IBBHQQ", ("name", "info", "other", "shndx", "value", "size")),
}

DYNAMIC_SYMBOL_TABLE: str = ".dynsym"


def find_symbol_table(
    sections: Sequence[Union[Section32, Section64]],
    names: Sequence[str],
    kind: SymbolKind,
) -> Optional[int]:
    """Index of the symbol table section for *kind*, or ``None``."""
    if kind is SymbolKind.DYNAMIC:
        return find_section(names, DYNAMIC_SYMBOL_TABLE)
    for index, sh in enumerate(sections):
        if sh.type == SHT_SYMTAB:
            return index
    return None


def symbols(
    source: ByteSource,
    sections: Sequence[Union[Section32, Section64]],
    names: Sequence[str],
    kind: SymbolKind,
    elf_class: ElfClass,
    byte_order: str = "<",
) -> list[Union[Symbol32, Symbol64]]:
    """Decode every entry of the static or dynamic symbol table.

    A missing table is not an error; the result is simply empty.

    Args:
        source: Byte source of the file.
        sections: Section headers in table order.
        names: Resolved section names, parallel to *sections*.
        kind: :attr:`SymbolKind.STATIC` or :attr:`SymbolKind.DYNAMIC`.
        elf_class: Selects the entry layout.
        byte_order: :mod:`struct` prefix from the file header.

    Returns:
        One record per entry, including the null symbol at index 0.
    """
    index = find_symbol_table(sections, names, kind)
    if index is None:
        return []

    table = sections[index]
    fmt, fields = _SYMBOL_LAYOUTS[elf_class]
    entsize = table.entsize or struct.calcsize(fmt)
    count = table.size // entsize
    model = Symbol64 if elf_class is ElfClass.ELF64 else Symbol32

    rows = source.unpack_table(byte_order + fmt, table.offset, count, entsize)
    return [model(**dict(zip(fields, row))) for row in rows]


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def _ranged(table: dict[int, str], value: int) -> str:
    if value in table:
        return table[value]
    if ST_LOOS <= value <= ST_HIOS:
        return f"OS specific ({value})"
    if ST_LOPROC <= value <= ST_HIPROC:
        return f"processor specific ({value})"
    return unknown(value)


def symbol_type_name(value: int) -> str:
    """Name the low nibble of ``st_info`` (``FUNC``, ``OBJECT``...)."""
    return _ranged(STT_NAMES, value)


def symbol_bind_name(value: int) -> str:
    """Name the high nibble of ``st_info`` (``LOCAL``, ``GLOBAL``...)."""
    return _ranged(STB_NAMES, value)


def symbol_visibility_name(value: int) -> str:
    return STV_NAMES.get(value & 0x3, unknown(value))


def section_index_name(shndx: int, names: Sequence[str] = ()) -> str:
    """Render ``st_shndx``: ``UND``/``ABS``/``COM``, else the section name.

    Falls back to the decimal index when the name is empty or out of range.
    """
    if shndx == SHN_UNDEF:
        return "UND"
    if shndx == SHN_ABS:
        return "ABS"
    if shndx == SHN_COMMON:
        return "COM"
    if shndx >= SHN_LORESERVE:
        return f"RSV[0x{shndx:x}]"
    if shndx < len(names) and names[shndx]:
        return names[shndx]
    return str(shndx)
