from __future__ import annotations

import pytest

from elfscope.core.models import ElfClass, Header32, Header64
from elfscope.parsers.header import HeaderView, decode_header, object_type_name
from elfscope.parsers.source import ByteSource

from elfbuild import EM_386, EM_AARCH64, ET_EXEC, ElfBuilder, sample_builder


def _decode(builder: ElfBuilder, elf_class: ElfClass):
    source = ByteSource.from_bytes(builder.build())
    return source, decode_header(source, elf_class)


def test_elf64_little_endian_round_trip():
    builder = sample_builder(64)
    _, header = _decode(builder, ElfClass.ELF64)
    view = HeaderView(header)

    assert isinstance(header, Header64)
    assert view.file_class == "ELF64"
    assert view.data_encoding == "2's complement, little endian"
    assert view.program_header_offset == builder.phoff == 64
    assert view.section_header_offset == builder.shoff
    assert view.entry_point == 0x401000
    assert view.header_size == 64
    assert view.program_header_size == 56
    assert view.section_header_entry_size == 64
    assert view.num_program_headers == 3


@pytest.mark.parametrize("bits, elf_class", [(32, ElfClass.ELF32), (64, ElfClass.ELF64)])
def test_record_literal_maps_to_enum(bits, elf_class):
    _, header = _decode(sample_builder(bits), elf_class)
    assert header.elf_class == bits == elf_class.bits
    assert HeaderView(header).elf_class is elf_class
    assert ElfClass.from_bits(bits) is elf_class


def test_elf32_layout():
    builder = sample_builder(32, machine=EM_386)
    _, header = _decode(builder, ElfClass.ELF32)
    view = HeaderView(header)

    assert isinstance(header, Header32)
    assert view.file_class == "ELF32"
    assert view.machine == "Intel 80386"
    assert view.header_size == 52
    assert view.program_header_offset == 52
    assert view.section_header_offset == builder.shoff


def test_big_endian_fields_decode():
    builder = sample_builder(64, big_endian=True, machine=EM_AARCH64)
    _, header = _decode(builder, ElfClass.ELF64)
    view = HeaderView(header)

    assert view.byte_order == ">"
    assert view.data_encoding == "2's complement, big endian"
    assert view.machine == "AArch64"
    assert view.section_header_offset == builder.shoff
    assert view.num_section_headers == len(builder.sections) + 2


def test_decode_is_idempotent_regardless_of_cursor():
    source, first = _decode(sample_builder(64), ElfClass.ELF64)
    with source.scoped(100):
        second = decode_header(source, ElfClass.ELF64)
    assert first == second


def test_symbolic_accessors():
    _, header = _decode(sample_builder(64), ElfClass.ELF64)
    view = HeaderView(header)

    assert view.object_type == "Executable file"
    assert view.machine == "AMD x86-64"
    assert view.os_abi == "UNIX System V ABI"
    assert view.file_version == "1 (Current)"
    assert view.abi_version == 0
    assert view.version == 1


def test_unmapped_codes_render_generically():
    builder = ElfBuilder(bits=64, machine=0x7777, osabi=0x42)
    _, header = _decode(builder, ElfClass.ELF64)
    view = HeaderView(header)

    assert view.machine == "unknown (0x7777)"
    assert view.os_abi == "unknown (0x42)"


@pytest.mark.parametrize("value, expected", [
    (ET_EXEC, "Executable file"),
    (0xFE01, "OS Specific: (0xfe01)"),
    (0xFF10, "Processor Specific: (0xff10)"),
    (0x1234, "unknown (0x1234)"),
])
def test_object_type_name(value, expected):
    assert object_type_name(value) == expected


def test_summary_collects_every_field():
    _, header = _decode(sample_builder(64), ElfClass.ELF64)
    summary = HeaderView(header).summary()

    assert summary.magic.startswith("7f 45 4c 46 02 01 01")
    assert summary.file_class == "ELF64"
    assert summary.section_header_string_table_index == header.shstrndx
