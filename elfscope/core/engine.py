"""
ELFScope Decode Engine
=======================

Runs the decoders over one or more files and assembles a
:class:`FileReport` per file.

Pipeline per file:
    1. Size check against ``reader.max_file_size``
    2. Open and validate magic, detect class, decode header
    3. Decode each requested part (segments, sections, symbols, notes,
       relocations)

Files are decoded independently.  In :meth:`ElfScopeEngine.decode_many` a
failure is recorded on that file's report and the batch moves on.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Iterable, Optional

from shared.config import ElfScopeConfig
from shared.logger import ScopeLogger

from elfscope.core.errors import ElfError, ElfFileNotFoundError, FileTooLargeError
from elfscope.core.models import FileReport, SymbolKind
from elfscope.parsers.elf_parser import ELFParser


class Part(str, enum.Enum):
    """Decodable parts of a file; the header is always decoded."""
    SEGMENTS = "segments"
    SECTIONS = "sections"
    SYMBOLS = "symbols"
    DYNAMIC_SYMBOLS = "dynamic_symbols"
    NOTES = "notes"
    RELOCATIONS = "relocations"


ALL_PARTS: frozenset[Part] = frozenset(Part)


class ElfScopeEngine:
    """Batch front end over :class:`ELFParser`.

    Usage::

        engine = ElfScopeEngine()
        for report in engine.decode_many(["/bin/ls", "README.md"]):
            print(report.path, report.error or report.header.machine)
    """

    def __init__(
        self,
        config: ElfScopeConfig | None = None,
        logger: ScopeLogger | None = None,
    ) -> None:
        self._config: ElfScopeConfig = config or ElfScopeConfig()
        self._logger: ScopeLogger = logger or ScopeLogger(
            "engine",
            log_level=self._config.global_settings.log_level,
            log_file=self._config.global_settings.log_file or None,
            json_logs=self._config.global_settings.log_json,
        )

    @property
    def config(self) -> ElfScopeConfig:
        return self._config

    # ------------------------------------------------------------------ #
    #  Single file
    # ------------------------------------------------------------------ #

    def open(self, path: str | Path) -> ELFParser:
        """Open *path* with the reader settings from the configuration.

        Raises:
            ElfFileNotFoundError: Missing path.
            FileTooLargeError: File exceeds ``reader.max_file_size``.
            NotAnElfFileError, UnsupportedClassError, TruncatedReadError:
                Structural failures from the header decode.
        """
        reader = self._config.reader
        file_path = Path(path)
        if not file_path.exists():
            raise ElfFileNotFoundError(str(path))

        size = file_path.stat().st_size
        if size > reader.max_file_size:
            raise FileTooLargeError(str(path), size, reader.max_file_size)

        return ELFParser.open(
            file_path,
            chunk_size=reader.read_chunk_size,
            encoding=reader.name_encoding,
            note_prefix=reader.note_section_prefix,
            relocation_prefix=reader.relocation_section_prefix,
        )

    def decode_file(
        self,
        path: str | Path,
        parts: Iterable[Part] = ALL_PARTS,
    ) -> FileReport:
        """Decode *path* into a :class:`FileReport`.

        Errors propagate; see :meth:`decode_many` for the collecting form.
        """
        wanted = frozenset(parts)
        with self._logger.for_file(path), self.open(path) as elf:
            report = FileReport(
                path=str(path),
                size=elf.source.size,
                header=elf.get_header_summary(),
            )
            self._logger.debug(
                "Decoded header",
                elf_class=elf.view.file_class,
                machine=elf.view.machine,
            )

            if Part.SEGMENTS in wanted:
                report.segments = elf.get_segments()
            if Part.SECTIONS in wanted:
                report.sections = elf.get_sections()
            if Part.SYMBOLS in wanted:
                report.symbols = elf.get_symbols(SymbolKind.STATIC)
            if Part.DYNAMIC_SYMBOLS in wanted:
                report.dynamic_symbols = elf.get_symbols(SymbolKind.DYNAMIC)
            if Part.NOTES in wanted:
                report.notes = elf.notes()
            if Part.RELOCATIONS in wanted:
                report.relocations = elf.relocations()

            self._logger.debug(
                "Decoded %d sections, %d symbols, %d dynamic symbols",
                len(report.sections),
                len(report.symbols),
                len(report.dynamic_symbols),
            )
        return report

    # ------------------------------------------------------------------ #
    #  Batch
    # ------------------------------------------------------------------ #

    def decode_many(
        self,
        paths: Iterable[str | Path],
        parts: Iterable[Part] = ALL_PARTS,
    ) -> list[FileReport]:
        """Decode every path in order; one report per input.

        A file that fails to decode yields a report whose ``error`` holds
        the message; the remaining files are still processed.
        """
        wanted = frozenset(parts)
        reports: list[FileReport] = []
        with self._logger.timed("decode batch"):
            for path in paths:
                reports.append(self._decode_or_record(path, wanted))
        failed = sum(1 for r in reports if not r.ok)
        if failed:
            self._logger.warning("%d of %d file(s) failed to decode", failed, len(reports))
        return reports

    def _decode_or_record(self, path: str | Path, parts: frozenset[Part]) -> FileReport:
        try:
            return self.decode_file(path, parts)
        except (ElfError, OSError) as exc:
            with self._logger.for_file(path):
                self._logger.error("%s", exc)
            return FileReport(path=str(path), error=str(exc))


def decode(path: str | Path, config: Optional[ElfScopeConfig] = None) -> FileReport:
    """Decode one file with default settings and every part selected."""
    return ElfScopeEngine(config).decode_file(path)
