"""
ELFScope -- ELF Binary Decoder
===============================

Decodes ELF object files, executables and shared objects into structured
metadata: file header, program and section header tables, static and
dynamic symbols, notes and relocations.  32- and 64-bit layouts in either
byte order are supported.

Capabilities:
    - Magic and class detection with typed errors
    - Header fields raw and rendered (class, data, OS/ABI, machine...)
    - Section and symbol name resolution through string tables
    - GNU note interpretation (ABI tag, build ID)
    - Machine-selected relocation type names (i386, x86-64, AArch64)
    - Batch decoding with per-file error isolation
    - Rich terminal output and JSON reports

References:
    - TIS Committee. (1995). ELF Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
"""

__version__ = "1.0.0"
__all__ = [
    "ELFParser",
    "ElfScopeEngine",
    "FileReport",
    "ElfConsoleOutput",
    "ElfReportGenerator",
]


def __getattr__(name: str):
    if name == "ELFParser":
        from elfscope.parsers.elf_parser import ELFParser
        return ELFParser
    if name == "ElfScopeEngine":
        from elfscope.core.engine import ElfScopeEngine
        return ElfScopeEngine
    if name == "FileReport":
        from elfscope.core.models import FileReport
        return FileReport
    if name == "ElfConsoleOutput":
        from elfscope.output.console import ElfConsoleOutput
        return ElfConsoleOutput
    if name == "ElfReportGenerator":
        from elfscope.output.report import ElfReportGenerator
        return ElfReportGenerator
    raise AttributeError(f"module 'elfscope' has no attribute {name!r}")
