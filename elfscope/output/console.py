"""
ELFScope Console Output
========================

readelf-style terminal rendering of a :class:`FileReport` using the
:class:`ScopeConsole` abstraction.

References:
    - GNU Binutils. readelf(1).
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Iterable

from shared.console import ScopeConsole

from elfscope.core.engine import ALL_PARTS, Part
from elfscope.core.models import (
    FileReport,
    HeaderSummary,
    NoteEntry,
    RelocationSection,
    SectionInfo,
    SegmentInfo,
    SymbolInfo,
)

_SECTION_FLAG_KEY = (
    "W (write), A (alloc), X (execute), M (merge), S (strings), I (info), "
    "L (link order), O (extra OS processing required), G (group), T (TLS), "
    "C (compressed), o (OS specific), E (exclude), p (processor specific)"
)


def _hex(value: int, width: int = 0) -> str:
    return f"0x{value:0{width}x}"


class ElfConsoleOutput:
    """Terminal display for decoded ELF files.

    Usage::

        output = ElfConsoleOutput()
        for report in engine.decode_many(paths):
            output.display(report)
    """

    def __init__(self, console: ScopeConsole | None = None) -> None:
        self._console: ScopeConsole = console or ScopeConsole()

    @property
    def console(self) -> ScopeConsole:
        return self._console

    def display(
        self,
        report: FileReport,
        *,
        show_header: bool = True,
        parts: Iterable[Part] = ALL_PARTS,
    ) -> None:
        """Render every selected part of *report*, or its error."""
        if not report.ok:
            self._console.error(report.error or "")
            return

        wanted = frozenset(parts)
        self._console.section(f"File: {report.path}")

        if show_header and report.header is not None:
            self.display_header(report.header)
        if Part.SEGMENTS in wanted:
            self.display_segments(report.segments)
        if Part.SECTIONS in wanted:
            self.display_sections(report.sections)
        if Part.SYMBOLS in wanted:
            self.display_symbols(".symtab", report.symbols)
        if Part.DYNAMIC_SYMBOLS in wanted:
            self.display_symbols(".dynsym", report.dynamic_symbols)
        if Part.NOTES in wanted:
            self.display_notes(report.notes)
        if Part.RELOCATIONS in wanted:
            self.display_relocations(report.relocations)

    # ------------------------------------------------------------------ #
    #  Header and tables
    # ------------------------------------------------------------------ #

    def display_header(self, header: HeaderSummary) -> None:
        self._console.info("ELF Header:")
        self._console.key_values([
            ("Magic", header.magic),
            ("Class", header.file_class),
            ("Data", header.data_encoding),
            ("Version", header.file_version),
            ("OS/ABI", header.os_abi),
            ("ABI Version", header.abi_version),
            ("Type", header.object_type),
            ("Machine", header.machine),
            ("Version", _hex(header.version)),
            ("Entry point address", _hex(header.entry_point)),
            ("Start of program headers", f"{header.program_header_offset} (bytes into file)"),
            ("Start of section headers", f"{header.section_header_offset} (bytes into file)"),
            ("Flags", _hex(header.flags)),
            ("Size of this header", f"{header.header_size} (bytes)"),
            ("Size of program headers", f"{header.program_header_size} (bytes)"),
            ("Number of program headers", header.num_program_headers),
            ("Size of section headers", f"{header.section_header_entry_size} (bytes)"),
            ("Number of section headers", header.num_section_headers),
            ("Section header string table index", header.section_header_string_table_index),
        ])
        self._console.blank()

    def display_segments(self, segments: list[SegmentInfo]) -> None:
        if not segments:
            self._console.info("There are no program headers in this file.")
            return
        self._console.table(
            "Program Headers",
            ["Type", "Offset", "VirtAddr", "PhysAddr", "FileSiz", "MemSiz", "Flg", "Align"],
            [
                (
                    seg.type,
                    _hex(seg.offset, 6),
                    _hex(seg.vaddr, 16),
                    _hex(seg.paddr, 16),
                    _hex(seg.filesz, 6),
                    _hex(seg.memsz, 6),
                    seg.flags,
                    _hex(seg.align),
                )
                for seg in segments
            ],
        )

    def display_sections(self, sections: list[SectionInfo]) -> None:
        if not sections:
            self._console.info("There are no sections in this file.")
            return
        self._console.table(
            "Section Headers",
            ["Nr", "Name", "Type", "Address", "Off", "Size", "ES", "Flg", "Lk", "Inf", "Al"],
            [
                (
                    f"[{sec.index:2}]",
                    sec.name,
                    sec.type,
                    _hex(sec.addr, 16),
                    _hex(sec.offset, 6),
                    _hex(sec.size, 6),
                    f"{sec.entsize:02x}",
                    sec.flags,
                    sec.link,
                    sec.info,
                    sec.addralign,
                )
                for sec in sections
            ],
            caption=f"Key to Flags: {_SECTION_FLAG_KEY}",
            justify=["right"],
        )

    def display_symbols(self, table_name: str, symbols: list[SymbolInfo]) -> None:
        if not symbols:
            self._console.info(f"No symbols in '{table_name}'.")
            return
        self._console.table(
            f"Symbol table '{table_name}' contains {len(symbols)} entries",
            ["Num", "Value", "Size", "Type", "Bind", "Vis", "Ndx", "Name"],
            [
                (
                    f"{sym.index}:",
                    f"{sym.value:016x}",
                    sym.size,
                    sym.type,
                    sym.bind,
                    sym.visibility,
                    sym.section,
                    sym.name,
                )
                for sym in symbols
            ],
            justify=["right", "left", "right"],
        )

    # ------------------------------------------------------------------ #
    #  Notes and relocations
    # ------------------------------------------------------------------ #

    def display_notes(self, notes: dict[str, list[NoteEntry]]) -> None:
        if not notes:
            self._console.info("There are no notes in this file.")
            return
        for section_name, entries in notes.items():
            self._console.table(
                f"Displaying notes found in: {section_name}",
                ["Owner", "Data size", "Description"],
                [
                    (
                        note.name,
                        _hex(note.desc_size, 8),
                        f"{note.type_name}\n{note.description}".rstrip(),
                    )
                    for note in entries
                ],
            )

    def display_relocations(self, sections: list[RelocationSection]) -> None:
        if not sections:
            self._console.info("There are no relocations in this file.")
            return
        for rel in sections:
            columns = ["Offset", "Info", "Type", "Sym. Index"]
            if rel.has_addend:
                columns.append("Addend")
            rows = []
            for entry in rel.entries:
                row = [
                    f"{entry.offset:012x}",
                    f"{entry.info:012x}",
                    entry.type_name,
                    entry.symbol_index,
                ]
                if rel.has_addend:
                    row.append(f"{entry.addend:+#x}" if entry.addend is not None else "")
                rows.append(row)
            self._console.table(
                f"Relocation section '{rel.name}' at offset {_hex(rel.offset)} "
                f"contains {len(rel.entries)} entries",
                columns,
                rows,
            )
