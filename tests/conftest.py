from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from elfbuild import EM_386, sample_builder

from elfscope.parsers.elf_parser import ELFParser


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write


@pytest.fixture
def elf64_path(write_file) -> Path:
    return write_file("sample64", sample_builder(64).build())


@pytest.fixture
def elf32_path(write_file) -> Path:
    return write_file("sample32", sample_builder(32, machine=EM_386).build())


@pytest.fixture
def not_elf_path(write_file) -> Path:
    return write_file("README.md", b"# not an ELF file\n")


@pytest.fixture
def elf64(elf64_path):
    with ELFParser.open(elf64_path) as parser:
        yield parser


@pytest.fixture
def elf32(elf32_path):
    with ELFParser.open(elf32_path) as parser:
        yield parser
