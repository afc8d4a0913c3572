"""
ELFScope Data Models
=====================

Pydantic-based models for the structures decoded from an ELF file and for
the per-file report assembled by the engine.

Every on-disk structure has a 32-bit and a 64-bit layout.  Each layout is a
separate frozen model carrying an ``elf_class`` literal (``32`` or ``64``),
and the pair is exposed as a discriminated union (``FileHeader``,
``ProgramHeaderEntry``, ``SectionHeaderEntry``, ``SymbolEntry``).  Field
order inside each model mirrors the on-disk field order of that layout.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ElfClass(int, enum.Enum):
    """File class from identification byte 4."""
    ELF32 = 1
    ELF64 = 2

    @property
    def bits(self) -> int:
        return 64 if self is ElfClass.ELF64 else 32

    @classmethod
    def from_bits(cls, bits: int) -> ElfClass:
        """Map a record's ``elf_class`` literal (32 or 64) back to the enum."""
        return cls.ELF64 if bits == 64 else cls.ELF32


class SymbolKind(str, enum.Enum):
    """Which symbol table (and matching string table) to read."""
    STATIC = "static"    # .symtab / .strtab
    DYNAMIC = "dynamic"  # .dynsym / .dynstr


_RECORD_CONFIG = ConfigDict(frozen=True, ser_json_bytes="hex")


# ---------------------------------------------------------------------------
# File header
# ---------------------------------------------------------------------------

class Header32(BaseModel):
    """Elf32_Ehdr."""
    model_config = _RECORD_CONFIG

    elf_class: Literal[32] = 32
    ident: bytes = b""
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0


class Header64(BaseModel):
    """Elf64_Ehdr.  Same field order as 32-bit; entry/phoff/shoff widened."""
    model_config = _RECORD_CONFIG

    elf_class: Literal[64] = 64
    ident: bytes = b""
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0


FileHeader = Annotated[Union[Header32, Header64], Field(discriminator="elf_class")]


# ---------------------------------------------------------------------------
# Program header (segment) entries
# ---------------------------------------------------------------------------

class Segment32(BaseModel):
    """Elf32_Phdr: flags come after memsz."""
    model_config = _RECORD_CONFIG

    elf_class: Literal[32] = 32
    type: int = 0
    offset: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    flags: int = 0
    align: int = 0


class Segment64(BaseModel):
    """Elf64_Phdr: flags come right after type."""
    model_config = _RECORD_CONFIG

    elf_class: Literal[64] = 64
    type: int = 0
    flags: int = 0
    offset: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0


ProgramHeaderEntry = Annotated[
    Union[Segment32, Segment64], Field(discriminator="elf_class")
]


# ---------------------------------------------------------------------------
# Section header entries
# ---------------------------------------------------------------------------

class Section32(BaseModel):
    """Elf32_Shdr."""
    model_config = _RECORD_CONFIG

    elf_class: Literal[32] = 32
    name: int = 0
    type: int = 0
    flags: int = 0
    addr: int = 0
    offset: int = 0
    size: int = 0
    link: int = 0
    info: int = 0
    addralign: int = 0
    entsize: int = 0


class Section64(BaseModel):
    """Elf64_Shdr."""
    model_config = _RECORD_CONFIG

    elf_class: Literal[64] = 64
    name: int = 0
    type: int = 0
    flags: int = 0
    addr: int = 0
    offset: int = 0
    size: int = 0
    link: int = 0
    info: int = 0
    addralign: int = 0
    entsize: int = 0


SectionHeaderEntry = Annotated[
    Union[Section32, Section64], Field(discriminator="elf_class")
]


# ---------------------------------------------------------------------------
# Symbol table entries
# ---------------------------------------------------------------------------

class _SymbolBits:
    """Bit decomposition of the packed ``info`` / ``other`` bytes."""

    @property
    def st_type(self) -> int:
        return self.info & 0xF

    @property
    def st_bind(self) -> int:
        return self.info >> 4

    @property
    def st_visibility(self) -> int:
        return self.other & 0x3


class Symbol32(_SymbolBits, BaseModel):
    """Elf32_Sym: value/size precede info/other/shndx."""
    model_config = _RECORD_CONFIG

    elf_class: Literal[32] = 32
    name: int = 0
    value: int = 0
    size: int = 0
    info: int = 0
    other: int = 0
    shndx: int = 0


class Symbol64(_SymbolBits, BaseModel):
    """Elf64_Sym: info/other/shndx follow the name directly."""
    model_config = _RECORD_CONFIG

    elf_class: Literal[64] = 64
    name: int = 0
    info: int = 0
    other: int = 0
    shndx: int = 0
    value: int = 0
    size: int = 0


SymbolEntry = Annotated[Union[Symbol32, Symbol64], Field(discriminator="elf_class")]


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

class NoteEntry(BaseModel):
    """A single note record from a ``.note*`` section.

    Attributes:
        name_size: ``namesz`` from the note header (includes the NUL).
        desc_size: ``descsz`` from the note header, in bytes.
        type: Note type code.
        name: Owner name (e.g. ``"GNU"``), NUL stripped.
        words: Descriptor as 32-bit words, ``ceil(desc_size / 4)`` of them.
        desc: Raw descriptor bytes (``desc_size`` long).
        type_name: Symbolic type (``NT_GNU_BUILD_ID``...) or a generic label.
        description: Human-readable interpretation of the descriptor.
    """
    model_config = _RECORD_CONFIG

    name_size: int = 0
    desc_size: int = 0
    type: int = 0
    name: str = ""
    words: tuple[int, ...] = ()
    desc: bytes = b""
    type_name: str = ""
    description: str = ""


# ---------------------------------------------------------------------------
# Relocations
# ---------------------------------------------------------------------------

class RelocationEntry(BaseModel):
    """A decoded ``Elf*_Rel`` / ``Elf*_Rela`` record."""
    model_config = _RECORD_CONFIG

    offset: int = 0
    info: int = 0
    addend: Optional[int] = None
    symbol_index: int = 0
    type: int = 0
    type_name: str = "Unknown"


class RelocationSection(BaseModel):
    """All relocation records of one ``.rel*`` / ``.rela*`` section."""
    model_config = _RECORD_CONFIG

    name: str = ""
    offset: int = 0
    has_addend: bool = False
    entries: tuple[RelocationEntry, ...] = ()


# ---------------------------------------------------------------------------
# Report models (consumed by the console / JSON output layer)
# ---------------------------------------------------------------------------

class HeaderSummary(BaseModel):
    """Symbolic rendering of every file-header field."""
    magic: str = ""
    file_class: str = ""
    data_encoding: str = ""
    file_version: str = ""
    os_abi: str = ""
    abi_version: int = 0
    object_type: str = ""
    machine: str = ""
    version: int = 0
    entry_point: int = 0
    program_header_offset: int = 0
    section_header_offset: int = 0
    flags: int = 0
    header_size: int = 0
    program_header_size: int = 0
    num_program_headers: int = 0
    section_header_entry_size: int = 0
    num_section_headers: int = 0
    section_header_string_table_index: int = 0


class SegmentInfo(BaseModel):
    """A program header with its type and flags rendered."""
    type: str = ""
    offset: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    flags: str = ""
    align: int = 0


class SectionInfo(BaseModel):
    """A section header with its name, type and flags resolved.

    Attributes:
        index: Position in the section header table.
        name: Section name (e.g. ``.text``, ``.data``).
        type: Section type name.
        flags: readelf-style flag letters.
    """
    index: int = 0
    name: str = ""
    type: str = ""
    addr: int = 0
    offset: int = 0
    size: int = 0
    entsize: int = 0
    flags: str = ""
    link: int = 0
    info: int = 0
    addralign: int = 0


class SymbolInfo(BaseModel):
    """A symbol entry with its name and classification resolved.

    Attributes:
        index: Position in the symbol table.
        name: Symbol name.
        value: Symbol value (usually an address).
        size: Size of the object the symbol refers to.
        type: Symbol type (FUNC, OBJECT, NOTYPE, etc.).
        bind: Binding (LOCAL, GLOBAL, WEAK).
        visibility: DEFAULT, INTERNAL, HIDDEN or PROTECTED.
        section: UND / ABS / COM or the owning section's index.
    """
    index: int = 0
    name: str = ""
    value: int = 0
    size: int = 0
    type: str = ""
    bind: str = ""
    visibility: str = ""
    section: str = ""


class FileReport(BaseModel):
    """Everything decoded from a single input file.

    ``error`` is set (and the structural fields left empty) when decoding
    failed; batch processing continues with the next file.
    """
    path: str = ""
    size: int = 0
    header: Optional[HeaderSummary] = None
    segments: list[SegmentInfo] = Field(default_factory=list)
    sections: list[SectionInfo] = Field(default_factory=list)
    symbols: list[SymbolInfo] = Field(default_factory=list)
    dynamic_symbols: list[SymbolInfo] = Field(default_factory=list)
    notes: dict[str, list[NoteEntry]] = Field(default_factory=dict)
    relocations: list[RelocationSection] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
