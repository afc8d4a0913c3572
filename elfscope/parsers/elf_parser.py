"""
ELF Parser Facade
==================

:class:`ELFParser` ties the decoders together for one file.  Decoding runs
in two phases:

    1. On construction: magic check, class detection, file header.
    2. On first use: section headers and their resolved names, cached.

Everything else (symbols, notes, relocations) is read on demand and
re-seeks the underlying :class:`ByteSource` on every call, so the parser
must stay open while those accessors are used.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - Linux man page: elf(5).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from elfscope.core.models import (
    ElfClass,
    Header32,
    Header64,
    HeaderSummary,
    NoteEntry,
    RelocationSection,
    Section32,
    Section64,
    SectionInfo,
    Segment32,
    Segment64,
    SegmentInfo,
    Symbol32,
    Symbol64,
    SymbolInfo,
    SymbolKind,
)
from elfscope.parsers import names as _names
from elfscope.parsers.detector import check_magic, detect_class, open_source
from elfscope.parsers.header import HeaderView, decode_header
from elfscope.parsers.notes import NOTE_PREFIX, notes
from elfscope.parsers.relocations import RELOCATION_PREFIX, relocations
from elfscope.parsers.source import ByteSource
from elfscope.parsers.symbols import (
    section_index_name,
    symbol_bind_name,
    symbol_type_name,
    symbol_visibility_name,
    symbols,
)
from elfscope.parsers.tables import (
    load_program_headers,
    load_section_headers,
    section_flags,
    section_type_name,
    segment_flags,
    segment_type_name,
)


class ELFParser:
    """Decoder for a single ELF file.

    Owns its :class:`ByteSource`; close it (or use the parser as a context
    manager) when done.

    Usage::

        with ELFParser.open("/bin/ls") as elf:
            elf.view.file_class          # "ELF64"
            elf.get_sections()           # list[SectionInfo]
            elf.get_symbols(SymbolKind.DYNAMIC)
            elf.notes()                  # {".note.gnu.build-id": [...]}

    Args:
        source: Byte source positioned anywhere; all reads are absolute.
        encoding: Codec for section and symbol names.
        note_prefix: Section-name prefix selecting note sections.
        relocation_prefix: Section-name prefix selecting relocation sections.

    Raises:
        NotAnElfFileError: Bad magic.
        UnsupportedClassError: Class byte not 1 or 2.
        TruncatedReadError: File shorter than its header.
    """

    def __init__(
        self,
        source: ByteSource,
        *,
        encoding: str = "utf-8",
        note_prefix: str = NOTE_PREFIX,
        relocation_prefix: str = RELOCATION_PREFIX,
    ) -> None:
        self._source = source
        self._encoding = encoding
        self._note_prefix = note_prefix
        self._relocation_prefix = relocation_prefix

        check_magic(source)
        self._elf_class: ElfClass = detect_class(source)
        self._header: Union[Header32, Header64] = decode_header(source, self._elf_class)
        self._view = HeaderView(self._header)

        self._sections: Optional[list[Union[Section32, Section64]]] = None
        self._section_names: Optional[list[str]] = None

    @classmethod
    def open(cls, path: str | Path, *, chunk_size: int = 64, **kwargs: str) -> ELFParser:
        """Open *path* and decode its header.

        The file is closed again if anything past the open fails, so a
        failed call leaves no handle or partial header behind.
        """
        source = open_source(path, chunk_size=chunk_size)
        try:
            return cls(source, **kwargs)
        except BaseException:
            source.close()
            raise

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs: str) -> ELFParser:
        return cls(ByteSource.from_bytes(data), **kwargs)

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    @property
    def source(self) -> ByteSource:
        return self._source

    def close(self) -> None:
        self._source.close()

    def __enter__(self) -> ELFParser:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    #  Header
    # ------------------------------------------------------------------ #

    @property
    def header(self) -> Union[Header32, Header64]:
        return self._header

    @property
    def view(self) -> HeaderView:
        return self._view

    @property
    def elf_class(self) -> ElfClass:
        return self._elf_class

    def get_header_summary(self) -> HeaderSummary:
        return self._view.summary()

    # ------------------------------------------------------------------ #
    #  Tables and names
    # ------------------------------------------------------------------ #

    def program_headers(self) -> list[Union[Segment32, Segment64]]:
        return load_program_headers(self._source, self._header)

    def section_headers(self) -> list[Union[Section32, Section64]]:
        """Section headers in table order, index 0 included (cached)."""
        if self._sections is None:
            self._sections = load_section_headers(self._source, self._header)
        return self._sections

    def section_names(self) -> list[str]:
        """Resolved section names, parallel to :meth:`section_headers` (cached)."""
        if self._section_names is None:
            self._section_names = _names.section_names(
                self._source,
                self.section_headers(),
                self._header.shstrndx,
                encoding=self._encoding,
            )
        return self._section_names

    def section_name(self, name_offset: int, string_table_index: Optional[int] = None) -> str:
        """Read a name from a string table, ``e_shstrndx`` by default."""
        if string_table_index is None:
            string_table_index = self._header.shstrndx
        return _names.section_name(
            self._source,
            self.section_headers(),
            string_table_index,
            name_offset,
            encoding=self._encoding,
        )

    def symbol_name(self, name_offset: int, kind: SymbolKind = SymbolKind.STATIC) -> str:
        return _names.symbol_name(
            self._source,
            self.section_headers(),
            self.section_names(),
            name_offset,
            kind,
            encoding=self._encoding,
        )

    # ------------------------------------------------------------------ #
    #  On-demand extraction
    # ------------------------------------------------------------------ #

    def symbols(self, kind: SymbolKind = SymbolKind.STATIC) -> list[Union[Symbol32, Symbol64]]:
        return symbols(
            self._source,
            self.section_headers(),
            self.section_names(),
            kind,
            self._elf_class,
            self._view.byte_order,
        )

    def dynamic_symbols(self) -> list[Union[Symbol32, Symbol64]]:
        return self.symbols(SymbolKind.DYNAMIC)

    def notes(self) -> dict[str, list[NoteEntry]]:
        return notes(
            self._source,
            self.section_headers(),
            self.section_names(),
            self._view.byte_order,
            self._note_prefix,
            encoding=self._encoding,
        )

    def relocations(self) -> list[RelocationSection]:
        return relocations(
            self._source,
            self.section_headers(),
            self.section_names(),
            self._header,
            self._relocation_prefix,
        )

    # ------------------------------------------------------------------ #
    #  Rendered views
    # ------------------------------------------------------------------ #

    def get_segments(self) -> list[SegmentInfo]:
        return [
            SegmentInfo(
                type=segment_type_name(ph.type),
                offset=ph.offset,
                vaddr=ph.vaddr,
                paddr=ph.paddr,
                filesz=ph.filesz,
                memsz=ph.memsz,
                flags=segment_flags(ph.flags),
                align=ph.align,
            )
            for ph in self.program_headers()
        ]

    def get_sections(self) -> list[SectionInfo]:
        return [
            SectionInfo(
                index=index,
                name=name,
                type=section_type_name(sh.type),
                addr=sh.addr,
                offset=sh.offset,
                size=sh.size,
                entsize=sh.entsize,
                flags=section_flags(sh.flags),
                link=sh.link,
                info=sh.info,
                addralign=sh.addralign,
            )
            for index, (sh, name) in enumerate(zip(self.section_headers(), self.section_names()))
        ]

    def get_symbols(self, kind: SymbolKind = SymbolKind.STATIC) -> list[SymbolInfo]:
        """Symbols of *kind* with names and classifications resolved.

        Raises:
            MissingStringTableError: If the table has entries but its string
                table (``.strtab`` / ``.dynstr``) is absent.
        """
        entries = self.symbols(kind)
        section_names = self.section_names()
        return [
            SymbolInfo(
                index=index,
                name=self.symbol_name(sym.name, kind),
                value=sym.value,
                size=sym.size,
                type=symbol_type_name(sym.st_type),
                bind=symbol_bind_name(sym.st_bind),
                visibility=symbol_visibility_name(sym.st_visibility),
                section=section_index_name(sym.shndx, section_names),
            )
            for index, sym in enumerate(entries)
        ]
