from __future__ import annotations

import pytest

from elfscope.core.errors import (
    ElfFileNotFoundError,
    NotAnElfFileError,
    TruncatedReadError,
    UnsupportedClassError,
)
from elfscope.core.models import ElfClass
from elfscope.parsers.detector import check_magic, detect_byte_order, detect_class, open_source
from elfscope.parsers.elf_parser import ELFParser
from elfscope.parsers.source import ByteSource

from elfbuild import sample_builder


def test_missing_path_raises_not_found(tmp_path):
    with pytest.raises(ElfFileNotFoundError):
        open_source(tmp_path / "does-not-exist")


def test_missing_path_is_a_file_not_found_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        ELFParser.open(tmp_path / "nope")


def test_bad_magic_raises(not_elf_path):
    with pytest.raises(NotAnElfFileError) as excinfo:
        ELFParser.open(not_elf_path)
    assert "README.md" in str(excinfo.value)


def test_file_shorter_than_magic_is_not_elf(write_file):
    with pytest.raises(NotAnElfFileError):
        open_source(write_file("tiny", b"\x7fE"))


def test_valid_magic_returns_open_source(elf64_path):
    source = open_source(elf64_path)
    try:
        assert not source.closed
        check_magic(source)
    finally:
        source.close()


@pytest.mark.parametrize("bits, expected", [(32, ElfClass.ELF32), (64, ElfClass.ELF64)])
def test_detect_class(bits, expected):
    source = ByteSource.from_bytes(sample_builder(bits).build())
    assert detect_class(source) is expected
    assert expected.bits == bits


def test_unsupported_class_is_an_error():
    data = bytearray(sample_builder(64).build())
    data[4] = 3
    with pytest.raises(UnsupportedClassError) as excinfo:
        detect_class(ByteSource.from_bytes(bytes(data)))
    assert excinfo.value.value == 3


def test_unsupported_class_through_parser_closes_file(write_file):
    data = bytearray(sample_builder(64).build())
    data[4] = 0
    path = write_file("badclass", bytes(data))
    with pytest.raises(UnsupportedClassError):
        ELFParser.open(path)


def test_byte_order():
    little = ByteSource.from_bytes(sample_builder(64).build())
    big = ByteSource.from_bytes(sample_builder(64, big_endian=True).build())
    assert detect_byte_order(little) == "<"
    assert detect_byte_order(big) == ">"


def test_truncated_header_raises():
    data = sample_builder(64).build()[:40]
    with pytest.raises(TruncatedReadError):
        ELFParser.from_bytes(data)
