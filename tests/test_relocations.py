from __future__ import annotations

import struct

import pytest

from elfscope.core.models import ElfClass
from elfscope.parsers.elf_parser import ELFParser
from elfscope.parsers.reloc_types import relocation_type_name
from elfscope.parsers.relocations import split_info

from elfbuild import (
    EM_386,
    EM_AARCH64,
    EM_X86_64,
    SHT_NOBITS,
    SHT_PROGBITS,
    SHT_REL,
    SHT_RELA,
    SHT_RELR,
    ElfBuilder,
    r_info,
    relocation,
)


def test_machine_selects_table():
    assert relocation_type_name(EM_X86_64, 2) == "R_X86_64_PC32"
    assert relocation_type_name(EM_386, 2) == "R_386_PC32"
    assert relocation_type_name(EM_AARCH64, 257) == "R_AARCH64_ABS64"


def test_unknown_codes_and_machines():
    assert relocation_type_name(EM_X86_64, 0xFFFF) == "Unknown"
    assert relocation_type_name(0x7777, 1) == "Unknown"


def test_split_info():
    assert split_info(0x0000000500000002, ElfClass.ELF64) == (5, 2)
    assert split_info(0x502, ElfClass.ELF32) == (5, 2)


def test_rela_64(elf64):
    sections = elf64.relocations()
    assert [s.name for s in sections] == [".rela.text"]

    rela = sections[0]
    assert rela.has_addend
    entry = rela.entries[0]
    assert (entry.offset, entry.symbol_index, entry.type) == (0x401004, 1, 2)
    assert entry.addend == -4
    assert entry.type_name == "R_X86_64_PC32"


def test_rel_32(elf32):
    rel = elf32.relocations()[0]
    assert rel.name == ".rel.text"
    assert not rel.has_addend
    entry = rel.entries[0]
    assert entry.addend is None
    assert entry.info == 0x102
    assert entry.type_name == "R_386_PC32"


@pytest.mark.parametrize("machine, expected", [
    (EM_386, "R_386_PC32"),
    (EM_X86_64, "R_X86_64_PC32"),
    (EM_AARCH64, "Unknown"),
])
def test_same_low_byte_differs_by_machine(machine, expected):
    builder = ElfBuilder(bits=32, machine=machine)
    builder.add_section(".rel.text", SHT_REL, relocation(32, 0x10, r_info(32, 3, 2)), entsize=8)
    with ELFParser.from_bytes(builder.build()) as elf:
        entry = elf.relocations()[0].entries[0]
    assert entry.type_name == expected


def test_rela_by_name_and_entry_count():
    builder = ElfBuilder(bits=64, machine=EM_AARCH64, big_endian=True)
    payload = b"".join(
        relocation(64, 0x1000 + 8 * i, r_info(64, i, 257), i, big_endian=True)
        for i in range(3)
    )
    builder.add_section(".rela.dyn", SHT_REL, payload, entsize=24)
    with ELFParser.from_bytes(builder.build()) as elf:
        rela = elf.relocations()[0]

    assert rela.has_addend
    assert len(rela.entries) == 3
    assert [e.addend for e in rela.entries] == [0, 1, 2]
    assert {e.type_name for e in rela.entries} == {"R_AARCH64_ABS64"}


def test_no_relocation_sections():
    builder = ElfBuilder(bits=64)
    builder.add_section(".text", SHT_PROGBITS, b"\x90")
    with ELFParser.from_bytes(builder.build()) as elf:
        assert elf.relocations() == []


def test_non_relocation_sections_with_the_prefix_are_skipped():
    builder = ElfBuilder(bits=64)
    builder.add_section(".rela.text", SHT_RELA, relocation(64, 0x10, r_info(64, 1, 2), -4), entsize=24)
    builder.add_section(".relr.dyn", SHT_RELR, struct.pack("<QQ", 0x4000, 7), entsize=8)
    builder.add_section(".relro_padding", SHT_NOBITS, size=0x1000)
    with ELFParser.from_bytes(builder.build()) as elf:
        sections = elf.relocations()

    assert [s.name for s in sections] == [".rela.text"]
    assert len(sections[0].entries) == 1


def test_trailing_partial_record_is_dropped():
    payload = relocation(32, 0x10, r_info(32, 1, 1)) + relocation(32, 0x14, r_info(32, 2, 2))
    builder = ElfBuilder(bits=32, machine=EM_386)
    builder.add_section(".rel.text", SHT_REL, payload + b"\xff\xff\xff", entsize=8)
    with ELFParser.from_bytes(builder.build()) as elf:
        rel = elf.relocations()[0]

    assert [e.offset for e in rel.entries] == [0x10, 0x14]
    assert [e.type_name for e in rel.entries] == ["R_386_32", "R_386_PC32"]


def test_entsize_smaller_than_a_record_uses_the_record_size():
    payload = relocation(64, 0x20, r_info(64, 1, 2)) + relocation(64, 0x28, r_info(64, 2, 2))
    builder = ElfBuilder(bits=64)
    builder.add_section(".rel.dyn", SHT_REL, payload, entsize=8)
    with ELFParser.from_bytes(builder.build()) as elf:
        rel = elf.relocations()[0]

    assert [(e.offset, e.symbol_index) for e in rel.entries] == [(0x20, 1), (0x28, 2)]
