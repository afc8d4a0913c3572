from __future__ import annotations

import pytest

from elfscope.parsers.elf_parser import ELFParser
from elfscope.parsers.notes import abi_tag, align, decode_notes, desc_words, describe
from elfscope.parsers.source import ByteSource

from elfbuild import BUILD_ID, SHT_NOTE, SHT_PROGBITS, ElfBuilder, note, sample_builder, words


def test_abi_tag_renders_os_and_version():
    assert abi_tag([0, 3, 2, 0]) == ("GNU", "3.2.0")


def test_abi_tag_note_through_parser(elf64):
    entries = elf64.notes()[".note.ABI-tag"]
    assert len(entries) == 1
    tag = entries[0]
    assert tag.name == "GNU"
    assert tag.type == 1
    assert tag.type_name == "NT_GNU_ABI_TAG"
    assert tag.words == (0, 3, 2, 0)
    assert tag.description == "OS: GNU, ABI: 3.2.0"


def test_build_id_is_hex_digest(elf32):
    entry = elf32.notes()[".note.gnu.build-id"][0]
    assert entry.type_name == "NT_GNU_BUILD_ID"
    assert entry.desc == BUILD_ID
    assert entry.desc_size == 20
    assert len(entry.words) == 5
    assert entry.description == f"Build ID: {BUILD_ID.hex()}"


def test_notes_keyed_by_section_name(elf64):
    assert sorted(elf64.notes()) == [".note.ABI-tag", ".note.gnu.build-id"]


def test_big_endian_notes():
    data = sample_builder(64, big_endian=True).build()
    with ELFParser.from_bytes(data) as elf:
        tag = elf.notes()[".note.ABI-tag"][0]
    assert tag.words == (0, 3, 2, 0)


def test_padding_between_consecutive_notes():
    # "GNU\0" needs no padding; "Go\0" (3 bytes) and a 6-byte descriptor do
    payload = (
        note(b"Go", 4, b"go1.21")
        + note(b"GNU", 1, words(3, 2, 6, 32))
    )
    source = ByteSource.from_bytes(payload)
    entries = decode_notes(source, 0, len(payload))

    assert [e.name for e in entries] == ["Go", "GNU"]
    assert entries[0].desc == b"go1.21"
    assert entries[0].words == (0x2E316F67, 0x3132)
    assert entries[1].description == "OS: FreeBSD, ABI: 2.6.32"


def test_named_but_undecoded_types():
    for code, name in [(2, "NT_GNU_HWCAP"), (4, "NT_GNU_GOLD_VERSION"),
                       (5, "NT_GNU_PROPERTY_TYPE_0")]:
        assert describe(code, (), b"") == (name, "")


def test_unknown_type_shows_code_and_raw_words():
    type_name, description = describe(0x99, (0xDEADBEEF, 1), b"")
    assert type_name == "Unknown note type: (0x00000099)"
    assert description == "deadbeef 00000001"


def test_word_count_rounds_up():
    assert desc_words(b"\x01\x02\x03\x04\x05") == (0x04030201, 0x05)
    assert desc_words(b"") == ()


@pytest.mark.parametrize("value, expected", [(0, 0), (1, 4), (4, 4), (5, 8)])
def test_align(value, expected):
    assert align(value) == expected


def test_no_note_sections():
    builder = ElfBuilder(bits=64)
    builder.add_section(".text", SHT_PROGBITS, b"\x90")
    with ELFParser.from_bytes(builder.build()) as elf:
        assert elf.notes() == {}


def test_custom_note_prefix():
    builder = ElfBuilder(bits=64)
    builder.add_section(".vendor.id", SHT_NOTE, note(b"GNU", 3, b"\xaa\xbb"))
    with ELFParser.from_bytes(builder.build(), note_prefix=".vendor") as elf:
        entries = elf.notes()[".vendor.id"]
    assert entries[0].description == "Build ID: aabb"
