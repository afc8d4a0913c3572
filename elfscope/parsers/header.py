"""
ELF File Header Decoding
=========================

Reads the fixed-size file header in the layout chosen by the file class and
exposes every field both raw and classified into a display string.

Layouts (after the 16 identification bytes)::

    ELF32: type(2) machine(2) version(4) entry(4) phoff(4) shoff(4) flags(4)
           ehsize(2) phentsize(2) phnum(2) shentsize(2) shnum(2) shstrndx(2)
    ELF64: same order; entry/phoff/shoff widened to 8 bytes
"""

from __future__ import annotations

from typing import Union

from elfscope.core.models import ElfClass, Header32, Header64, HeaderSummary
from elfscope.parsers.constants import (
    CLASS_NAMES,
    DATA_NAMES,
    EI_ABIVERSION,
    EI_CLASS,
    EI_DATA,
    EI_OSABI,
    EI_VERSION,
    ELFDATA2MSB,
    ET_HIOS,
    ET_HIPROC,
    ET_LOOS,
    ET_LOPROC,
    ET_NAMES,
    MACHINE_NAMES,
    OSABI_NAMES,
    VERSION_NAMES,
    lookup,
    unknown,
)
from elfscope.parsers.detector import detect_byte_order
from elfscope.parsers.source import ByteSource

_HEADER_FORMATS: dict[ElfClass, str] = {
    ElfClass.ELF32: "16sHHIIIIIHHHHHH",  # 52 bytes
    ElfClass.ELF64: "16sHHIQQQIHHHHHH",  # 64 bytes
}

_HEADER_FIELDS: tuple[str, ...] = (
    "ident", "type", "machine", "version", "entry",
    "phoff", "shoff", "flags", "ehsize",
    "phentsize", "phnum", "shentsize", "shnum", "shstrndx",
)


def decode_header(source: ByteSource, elf_class: ElfClass) -> Union[Header32, Header64]:
    """Read the file header at offset 0 in the layout for *elf_class*.

    Always reads from offset 0 regardless of the current cursor, so calling
    it again yields an equal header.
    """
    byte_order = detect_byte_order(source)
    values = source.unpack_at(byte_order + _HEADER_FORMATS[elf_class], 0)
    fields = dict(zip(_HEADER_FIELDS, values))
    if elf_class is ElfClass.ELF64:
        return Header64(**fields)
    return Header32(**fields)


def object_type_name(value: int) -> str:
    if value in ET_NAMES:
        return ET_NAMES[value]
    if ET_LOOS <= value <= ET_HIOS:
        return f"OS Specific: (0x{value:x})"
    if ET_LOPROC <= value <= ET_HIPROC:
        return f"Processor Specific: (0x{value:x})"
    return unknown(value)


class HeaderView:
    """Read-only accessors over a decoded file header.

    Usage::

        view = HeaderView(decode_header(src, ElfClass.ELF64))
        view.file_class     # "ELF64"
        view.machine        # "AMD x86-64"
    """

    def __init__(self, header: Union[Header32, Header64]) -> None:
        self._header = header

    @property
    def raw(self) -> Union[Header32, Header64]:
        return self._header

    # -- identification ------------------------------------------------ #

    @property
    def identification(self) -> bytes:
        """The 16 ``e_ident`` bytes."""
        return self._header.ident

    @property
    def elf_class(self) -> ElfClass:
        return ElfClass.from_bits(self._header.elf_class)

    @property
    def byte_order(self) -> str:
        """:mod:`struct` prefix, ``"<"`` or ``">"``."""
        return ">" if self._header.ident[EI_DATA] == ELFDATA2MSB else "<"

    @property
    def file_class(self) -> str:
        return lookup(CLASS_NAMES, self._header.ident[EI_CLASS])

    @property
    def data_encoding(self) -> str:
        return lookup(DATA_NAMES, self._header.ident[EI_DATA])

    @property
    def file_version(self) -> str:
        return lookup(VERSION_NAMES, self._header.ident[EI_VERSION])

    @property
    def os_abi(self) -> str:
        return lookup(OSABI_NAMES, self._header.ident[EI_OSABI])

    @property
    def abi_version(self) -> int:
        return self._header.ident[EI_ABIVERSION]

    # -- header fields ------------------------------------------------- #

    @property
    def object_type(self) -> str:
        return object_type_name(self._header.type)

    @property
    def machine(self) -> str:
        return lookup(MACHINE_NAMES, self._header.machine)

    @property
    def machine_code(self) -> int:
        return self._header.machine

    @property
    def version(self) -> int:
        return self._header.version

    @property
    def entry_point(self) -> int:
        return self._header.entry

    @property
    def program_header_offset(self) -> int:
        return self._header.phoff

    @property
    def section_header_offset(self) -> int:
        return self._header.shoff

    @property
    def flags(self) -> int:
        return self._header.flags

    @property
    def header_size(self) -> int:
        return self._header.ehsize

    @property
    def program_header_size(self) -> int:
        return self._header.phentsize

    @property
    def num_program_headers(self) -> int:
        return self._header.phnum

    @property
    def section_header_entry_size(self) -> int:
        return self._header.shentsize

    @property
    def num_section_headers(self) -> int:
        return self._header.shnum

    @property
    def section_header_string_table_index(self) -> int:
        return self._header.shstrndx

    def summary(self) -> HeaderSummary:
        """Every field rendered into a :class:`HeaderSummary`."""
        return HeaderSummary(
            magic=" ".join(f"{b:02x}" for b in self.identification),
            file_class=self.file_class,
            data_encoding=self.data_encoding,
            file_version=self.file_version,
            os_abi=self.os_abi,
            abi_version=self.abi_version,
            object_type=self.object_type,
            machine=self.machine,
            version=self.version,
            entry_point=self.entry_point,
            program_header_offset=self.program_header_offset,
            section_header_offset=self.section_header_offset,
            flags=self.flags,
            header_size=self.header_size,
            program_header_size=self.program_header_size,
            num_program_headers=self.num_program_headers,
            section_header_entry_size=self.section_header_entry_size,
            num_section_headers=self.num_section_headers,
            section_header_string_table_index=self.section_header_string_table_index,
        )
