"""
Section and Symbol Name Resolution
===================================

Names in ELF are byte offsets into string-table sections.  Section names go
through the section-header string table (``e_shstrndx``); symbol names go
through ``.strtab`` or ``.dynstr``, which are themselves found by scanning
the already-resolved section names.  Resolution is therefore two-phase:
materialise the section headers first, then resolve names by linear scan.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from elfscope.core.errors import MissingStringTableError
from elfscope.core.models import Section32, Section64, SymbolKind
from elfscope.parsers.constants import SHN_UNDEF
from elfscope.parsers.source import ByteSource

STRING_TABLES: dict[SymbolKind, str] = {
    SymbolKind.STATIC: ".strtab",
    SymbolKind.DYNAMIC: ".dynstr",
}

_Sections = Sequence[Union[Section32, Section64]]


def section_name(
    source: ByteSource,
    sections: _Sections,
    string_table_index: int,
    name_offset: int,
    *,
    encoding: str = "utf-8",
) -> str:
    """Read the NUL-terminated name at *name_offset* in the given string table.

    Raises:
        MissingStringTableError: If *string_table_index* is not a valid index.
        TruncatedNameError: If the string runs to end-of-file.
    """
    if not 0 <= string_table_index < len(sections):
        raise MissingStringTableError(f"section #{string_table_index}")
    table = sections[string_table_index]
    return source.read_cstring(table.offset + name_offset).decode(encoding, errors="replace")


def section_names(
    source: ByteSource,
    sections: _Sections,
    string_table_index: int,
    *,
    encoding: str = "utf-8",
) -> list[str]:
    """Resolve every section's name, in table order.

    ``e_shstrndx == SHN_UNDEF`` means the file has no section name table;
    every name is then empty.
    """
    if string_table_index == SHN_UNDEF:
        return ["" for _ in sections]
    return [
        section_name(source, sections, string_table_index, sh.name, encoding=encoding)
        for sh in sections
    ]


def find_section(names: Sequence[str], wanted: str) -> Optional[int]:
    """Index of the first section called *wanted*, or ``None``."""
    for index, name in enumerate(names):
        if name == wanted:
            return index
    return None


def symbol_name(
    source: ByteSource,
    sections: _Sections,
    names: Sequence[str],
    name_offset: int,
    kind: SymbolKind = SymbolKind.STATIC,
    *,
    encoding: str = "utf-8",
) -> str:
    """Resolve a symbol's ``st_name`` via ``.strtab`` or ``.dynstr``.

    Raises:
        MissingStringTableError: If the string table for *kind* is absent.
    """
    table_name = STRING_TABLES[kind]
    index = find_section(names, table_name)
    if index is None:
        raise MissingStringTableError(table_name)
    return source.read_cstring(sections[index].offset + name_offset).decode(
        encoding, errors="replace"
    )
