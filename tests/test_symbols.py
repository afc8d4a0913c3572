from __future__ import annotations

import pytest

from elfscope.core.models import Symbol32, Symbol64, SymbolKind
from elfscope.parsers.elf_parser import ELFParser
from elfscope.parsers.symbols import (
    section_index_name,
    symbol_bind_name,
    symbol_type_name,
    symbol_visibility_name,
)

from elfbuild import SHT_PROGBITS, SHT_STRTAB, SHT_SYMTAB, ElfBuilder, string_table, symbol


def test_entry_count_is_size_over_entsize():
    strtab, offsets = string_table("a", "b")
    builder = ElfBuilder(bits=64)
    builder.add_section(
        ".symtab", SHT_SYMTAB,
        symbol(64, offsets["a"], 0x10, 4, 0x12) + symbol(64, offsets["b"], 0x20, 8, 0x11),
        entsize=24,
    )
    builder.add_section(".strtab", SHT_STRTAB, strtab)

    with ELFParser.from_bytes(builder.build()) as elf:
        table = elf.section_headers()[1]
        assert (table.entsize, table.size) == (24, 48)
        entries = elf.symbols(SymbolKind.STATIC)

    assert len(entries) == 2
    assert [e.value for e in entries] == [0x10, 0x20]


def test_static_symbols_64(elf64):
    entries = elf64.symbols(SymbolKind.STATIC)
    assert len(entries) == 3
    assert all(isinstance(e, Symbol64) for e in entries)
    main = entries[1]
    assert (main.value, main.size, main.shndx) == (0x401000, 16, 1)
    assert (main.st_type, main.st_bind, main.st_visibility) == (2, 1, 0)


def test_static_symbols_32(elf32):
    entries = elf32.symbols()
    assert all(isinstance(e, Symbol32) for e in entries)
    counter = entries[2]
    assert (counter.value, counter.size, counter.other) == (0x404000, 8, 2)


def test_dynamic_symbols_found_by_name(elf64):
    entries = elf64.dynamic_symbols()
    assert len(entries) == 2
    assert entries[1].shndx == 0


def test_missing_table_is_empty_not_an_error():
    builder = ElfBuilder(bits=32)
    builder.add_section(".text", SHT_PROGBITS, b"\x90")
    with ELFParser.from_bytes(builder.build()) as elf:
        assert elf.symbols(SymbolKind.STATIC) == []
        assert elf.get_symbols(SymbolKind.DYNAMIC) == []


def test_rendered_symbols(elf64):
    rendered = elf64.get_symbols(SymbolKind.STATIC)
    assert [s.name for s in rendered] == ["", "main", "counter"]

    main, counter = rendered[1], rendered[2]
    assert (main.type, main.bind, main.visibility, main.section) == (
        "FUNC", "GLOBAL", "DEFAULT", ".text",
    )
    assert (counter.type, counter.bind, counter.visibility, counter.section) == (
        "OBJECT", "GLOBAL", "HIDDEN", ".data",
    )
    assert rendered[0].section == "UND"


def test_rendered_dynamic_symbols(elf32):
    rendered = elf32.get_symbols(SymbolKind.DYNAMIC)
    assert rendered[1].name == "puts"
    assert rendered[1].section == "UND"


@pytest.mark.parametrize("value, expected", [
    (0, "NOTYPE"),
    (2, "FUNC"),
    (10, "GNU_IFUNC"),
    (11, "OS specific (11)"),
    (13, "processor specific (13)"),
    (15, "processor specific (15)"),
    (8, "unknown (0x8)"),
])
def test_symbol_type_name(value, expected):
    assert symbol_type_name(value) == expected


@pytest.mark.parametrize("value, expected", [
    (0, "LOCAL"),
    (2, "WEAK"),
    (10, "GNU_UNIQUE"),
    (12, "OS specific (12)"),
    (14, "processor specific (14)"),
])
def test_symbol_bind_name(value, expected):
    assert symbol_bind_name(value) == expected


def test_symbol_visibility_name():
    assert [symbol_visibility_name(v) for v in range(4)] == [
        "DEFAULT", "INTERNAL", "HIDDEN", "PROTECTED",
    ]


@pytest.mark.parametrize("shndx, expected", [
    (0, "UND"),
    (0xFFF1, "ABS"),
    (0xFFF2, "COM"),
    (1, ".text"),
    (7, "7"),
    (0xFF05, "RSV[0xff05]"),
])
def test_section_index_name(shndx, expected):
    assert section_index_name(shndx, ["", ".text"]) == expected
