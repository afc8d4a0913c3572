"""
ELFScope Configuration Management
==================================

Dataclass configuration with TOML-based persistence.  A missing default
file means pure defaults; keys a section does not declare are ignored.

Example ``elfscope.toml``::

    [global]
    log_level = "DEBUG"

    [reader]
    max_file_size = 104857600
    name_encoding = "latin-1"

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "elfscope.toml"


@dataclass(frozen=False, slots=True)
class ReaderConfig:
    """Settings for the ELF decoders.

    ``max_file_size`` is checked before a file is opened; larger inputs are
    reported as failed without being read.
    """

    max_file_size: int = 268_435_456  # 256 MiB
    name_encoding: str = "utf-8"
    note_section_prefix: str = ".note"
    relocation_section_prefix: str = ".rel"
    read_chunk_size: int = 64


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging verbosity and general operational parameters."""

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


@dataclass(frozen=False, slots=True)
class ElfScopeConfig:
    """Master configuration.

    Usage:
        >>> config = ElfScopeConfig.load()                  # from default path
        >>> config = ElfScopeConfig.load("custom.toml")     # from custom path
        >>> config.reader.name_encoding
        'utf-8'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    reader: ReaderConfig = field(default_factory=ReaderConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> ElfScopeConfig:
        """Load configuration from a TOML file.

        Args:
            path: Filesystem path to a TOML configuration file.
                  Defaults to ``<project_root>/elfscope.toml``.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does not
                exist.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            reader=cls._build_section(ReaderConfig, raw.get("reader", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate dataclass *cls* from the keys of *data* it declares."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        return cls(**{k: v for k, v in data.items() if k in valid_keys})


def get_config(path: str | Path | None = None) -> ElfScopeConfig:
    """Cached wrapper around :meth:`ElfScopeConfig.load`.

    Passing *path* always reloads and replaces the cached instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = ElfScopeConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
