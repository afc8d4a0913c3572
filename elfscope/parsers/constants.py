"""
ELF Constants and Lookup Tables
================================

Numeric codes from the ELF specification and the static tables that map
them to display strings.  Every table is consulted through :func:`lookup`,
which always has a fallback: an unmapped code renders as
``"unknown (0x..)"`` rather than failing.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Linux man page: elf(5).
"""

from __future__ import annotations

from typing import Mapping, Optional


def unknown(value: int) -> str:
    """Generic label for a code with no table entry."""
    return f"unknown (0x{value:x})"


def lookup(table: Mapping[int, str], value: int, default: Optional[str] = None) -> str:
    """Map *value* through *table*, falling back to *default* or :func:`unknown`."""
    name = table.get(value)
    if name is not None:
        return name
    return default if default is not None else unknown(value)


# ---------------------------------------------------------------------------
# Identification
# ---------------------------------------------------------------------------

# Magic number
ELF_MAGIC: bytes = b"\x7fELF"

EI_NIDENT: int = 16

# e_ident indices
EI_CLASS: int = 4
EI_DATA: int = 5
EI_VERSION: int = 6
EI_OSABI: int = 7
EI_ABIVERSION: int = 8

# ELF Class (32-bit vs 64-bit)
ELFCLASSNONE: int = 0
ELFCLASS32: int = 1
ELFCLASS64: int = 2

CLASS_NAMES: dict[int, str] = {
    ELFCLASSNONE: "None",
    ELFCLASS32: "ELF32",
    ELFCLASS64: "ELF64",
}

# Data encoding (endianness)
ELFDATANONE: int = 0
ELFDATA2LSB: int = 1  # Little-endian
ELFDATA2MSB: int = 2  # Big-endian

DATA_NAMES: dict[int, str] = {
    ELFDATANONE: "None",
    ELFDATA2LSB: "2's complement, little endian",
    ELFDATA2MSB: "2's complement, big endian",
}

# File version
EV_NONE: int = 0
EV_CURRENT: int = 1

VERSION_NAMES: dict[int, str] = {
    EV_NONE: "0 (Invalid)",
    EV_CURRENT: "1 (Current)",
}

# OS/ABI
OSABI_NAMES: dict[int, str] = {
    0: "UNIX System V ABI",
    1: "HP-UX",
    2: "NetBSD",
    3: "Object uses GNU ELF extensions",
    6: "Sun Solaris",
    7: "IBM AIX",
    8: "SGI Irix",
    9: "FreeBSD",
    10: "Compaq TRU64 UNIX",
    11: "Novell Modesto",
    12: "OpenBSD",
    64: "ARM EABI",
    97: "ARM",
    255: "Standalone (embedded) application",
}

# ---------------------------------------------------------------------------
# Object file type
# ---------------------------------------------------------------------------

ET_NONE: int = 0
ET_REL: int = 1   # Relocatable
ET_EXEC: int = 2  # Executable
ET_DYN: int = 3   # Shared object / PIE
ET_CORE: int = 4  # Core dump
ET_LOOS: int = 0xFE00
ET_HIOS: int = 0xFEFF
ET_LOPROC: int = 0xFF00
ET_HIPROC: int = 0xFFFF

ET_NAMES: dict[int, str] = {
    ET_NONE: "No file type",
    ET_REL: "Relocatable file",
    ET_EXEC: "Executable file",
    ET_DYN: "Shared object file",
    ET_CORE: "Core file",
}

# ---------------------------------------------------------------------------
# Machine architectures
# ---------------------------------------------------------------------------

EM_NONE: int = 0
EM_SPARC: int = 2
EM_386: int = 3
EM_MIPS: int = 8
EM_PPC: int = 20
EM_PPC64: int = 21
EM_ARM: int = 40
EM_X86_64: int = 62
EM_AARCH64: int = 183
EM_RISCV: int = 243

MACHINE_NAMES: dict[int, str] = {
    EM_NONE: "An unknown machine",
    1: "AT&T WE 32100",
    EM_SPARC: "Sun Microsystems SPARC",
    EM_386: "Intel 80386",
    4: "Motorola 68000",
    5: "Motorola 88000",
    6: "Intel MCU",
    7: "Intel 80860",
    EM_MIPS: "MIPS R3000 (big-endian only)",
    10: "MIPS R3000 little-endian",
    15: "HP/PA",
    18: "SPARC with enhanced instruction set",
    19: "Intel 80960",
    EM_PPC: "PowerPC",
    EM_PPC64: "PowerPC 64-bit",
    22: "IBM S/390",
    EM_ARM: "Advanced RISC Machines",
    42: "Renesas SuperH",
    43: "SPARC v9 64-bit",
    50: "Intel Itanium",
    EM_X86_64: "AMD x86-64",
    75: "DEC Vax",
    EM_AARCH64: "AArch64",
    EM_RISCV: "RISC-V",
    247: "Linux BPF",
    258: "LoongArch",
}

# ---------------------------------------------------------------------------
# Section header types and flags
# ---------------------------------------------------------------------------

SHT_NULL: int = 0
SHT_PROGBITS: int = 1
SHT_SYMTAB: int = 2
SHT_STRTAB: int = 3
SHT_RELA: int = 4
SHT_HASH: int = 5
SHT_DYNAMIC: int = 6
SHT_NOTE: int = 7
SHT_NOBITS: int = 8
SHT_REL: int = 9
SHT_SHLIB: int = 10
SHT_DYNSYM: int = 11
SHT_INIT_ARRAY: int = 14
SHT_FINI_ARRAY: int = 15
SHT_PREINIT_ARRAY: int = 16
SHT_GROUP: int = 17
SHT_SYMTAB_SHNDX: int = 18
SHT_LOOS: int = 0x60000000
SHT_HIOS: int = 0x6FFFFFFF
SHT_LOPROC: int = 0x70000000
SHT_HIPROC: int = 0x7FFFFFFF
SHT_LOUSER: int = 0x80000000
SHT_HIUSER: int = 0xFFFFFFFF

SHT_NAMES: dict[int, str] = {
    SHT_NULL: "NULL",
    SHT_PROGBITS: "PROGBITS",
    SHT_SYMTAB: "SYMTAB",
    SHT_STRTAB: "STRTAB",
    SHT_RELA: "RELA",
    SHT_HASH: "HASH",
    SHT_DYNAMIC: "DYNAMIC",
    SHT_NOTE: "NOTE",
    SHT_NOBITS: "NOBITS",
    SHT_REL: "REL",
    SHT_SHLIB: "SHLIB",
    SHT_DYNSYM: "DYNSYM",
    SHT_INIT_ARRAY: "INIT_ARRAY",
    SHT_FINI_ARRAY: "FINI_ARRAY",
    SHT_PREINIT_ARRAY: "PREINIT_ARRAY",
    SHT_GROUP: "GROUP",
    SHT_SYMTAB_SHNDX: "SYMTAB_SHNDX",
    0x6FFFFFF5: "GNU_ATTRIBUTES",
    0x6FFFFFF6: "GNU_HASH",
    0x6FFFFFF7: "GNU_LIBLIST",
    0x6FFFFFF8: "CHECKSUM",
    0x6FFFFFFA: "SUNW_move",
    0x6FFFFFFB: "SUNW_COMDAT",
    0x6FFFFFFC: "SUNW_syminfo",
    0x6FFFFFFD: "GNU_verdef",
    0x6FFFFFFE: "GNU_verneed",
    0x6FFFFFFF: "GNU_versym",
}

# (bit, letter) in readelf's display order
SHF_LETTERS: tuple[tuple[int, str], ...] = (
    (0x1, "W"),      # writable
    (0x2, "A"),      # occupies memory during execution
    (0x4, "X"),      # executable
    (0x10, "M"),     # might be merged
    (0x20, "S"),     # nul-terminated strings
    (0x40, "I"),     # sh_info holds a section index
    (0x80, "L"),     # preserve order after combining
    (0x100, "O"),    # OS-specific handling required
    (0x200, "G"),    # member of a group
    (0x400, "T"),    # thread-local data
    (0x800, "C"),    # compressed
)
SHF_WRITE: int = 0x1
SHF_ALLOC: int = 0x2
SHF_EXECINSTR: int = 0x4
SHF_MASKOS: int = 0x0FF00000
SHF_EXCLUDE: int = 0x80000000
SHF_MASKPROC: int = 0x70000000  # processor bits other than SHF_EXCLUDE

# ---------------------------------------------------------------------------
# Program header types and flags
# ---------------------------------------------------------------------------

PT_NULL: int = 0
PT_LOAD: int = 1
PT_DYNAMIC: int = 2
PT_INTERP: int = 3
PT_NOTE: int = 4
PT_SHLIB: int = 5
PT_PHDR: int = 6
PT_TLS: int = 7
PT_LOOS: int = 0x60000000
PT_HIOS: int = 0x6FFFFFFF
PT_LOPROC: int = 0x70000000
PT_HIPROC: int = 0x7FFFFFFF
PT_GNU_EH_FRAME: int = 0x6474E550
PT_GNU_STACK: int = 0x6474E551
PT_GNU_RELRO: int = 0x6474E552
PT_GNU_PROPERTY: int = 0x6474E553
PT_SUNWBSS: int = 0x6FFFFFFA
PT_SUNWSTACK: int = 0x6FFFFFFB

PT_NAMES: dict[int, str] = {
    PT_NULL: "NULL",
    PT_LOAD: "LOAD",
    PT_DYNAMIC: "DYNAMIC",
    PT_INTERP: "INTERP",
    PT_NOTE: "NOTE",
    PT_SHLIB: "SHLIB",
    PT_PHDR: "PHDR",
    PT_TLS: "TLS",
    PT_GNU_EH_FRAME: "GNU_EH_FRAME",
    PT_GNU_STACK: "GNU_STACK",
    PT_GNU_RELRO: "GNU_RELRO",
    PT_GNU_PROPERTY: "GNU_PROPERTY",
    PT_SUNWBSS: "SUNWBSS",
    PT_SUNWSTACK: "SUNWSTACK",
}

# Program header flags
PF_X: int = 0x1  # Execute
PF_W: int = 0x2  # Write
PF_R: int = 0x4  # Read

# ---------------------------------------------------------------------------
# Symbols
# ---------------------------------------------------------------------------

# Symbol binding
STB_LOCAL: int = 0
STB_GLOBAL: int = 1
STB_WEAK: int = 2
STB_GNU_UNIQUE: int = 10

STB_NAMES: dict[int, str] = {
    STB_LOCAL: "LOCAL",
    STB_GLOBAL: "GLOBAL",
    STB_WEAK: "WEAK",
    STB_GNU_UNIQUE: "GNU_UNIQUE",
}

# Symbol types
STT_NOTYPE: int = 0
STT_OBJECT: int = 1
STT_FUNC: int = 2
STT_SECTION: int = 3
STT_FILE: int = 4
STT_COMMON: int = 5
STT_TLS: int = 6
STT_GNU_IFUNC: int = 10

STT_NAMES: dict[int, str] = {
    STT_NOTYPE: "NOTYPE",
    STT_OBJECT: "OBJECT",
    STT_FUNC: "FUNC",
    STT_SECTION: "SECTION",
    STT_FILE: "FILE",
    STT_COMMON: "COMMON",
    STT_TLS: "TLS",
    STT_GNU_IFUNC: "GNU_IFUNC",
}

# Shared by type and binding: [LOOS, HIOS] and [LOPROC, HIPROC]
ST_LOOS: int = 10
ST_HIOS: int = 12
ST_LOPROC: int = 13
ST_HIPROC: int = 15

# Symbol visibility
STV_NAMES: dict[int, str] = {
    0: "DEFAULT",
    1: "INTERNAL",
    2: "HIDDEN",
    3: "PROTECTED",
}

# Special section indices
SHN_UNDEF: int = 0
SHN_LORESERVE: int = 0xFF00
SHN_ABS: int = 0xFFF1
SHN_COMMON: int = 0xFFF2

# ---------------------------------------------------------------------------
# GNU notes
# ---------------------------------------------------------------------------

NT_GNU_ABI_TAG: int = 1
NT_GNU_HWCAP: int = 2
NT_GNU_BUILD_ID: int = 3
NT_GNU_GOLD_VERSION: int = 4
NT_GNU_PROPERTY_TYPE_0: int = 5

NT_GNU_NAMES: dict[int, str] = {
    NT_GNU_ABI_TAG: "NT_GNU_ABI_TAG",
    NT_GNU_HWCAP: "NT_GNU_HWCAP",
    NT_GNU_BUILD_ID: "NT_GNU_BUILD_ID",
    NT_GNU_GOLD_VERSION: "NT_GNU_GOLD_VERSION",
    NT_GNU_PROPERTY_TYPE_0: "NT_GNU_PROPERTY_TYPE_0",
}

# Word 0 of an NT_GNU_ABI_TAG descriptor
ABI_TAG_OS_NAMES: dict[int, str] = {
    0: "GNU",
    1: "Hurd",
    2: "Solaris2",
    3: "FreeBSD",
}
