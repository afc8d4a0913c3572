from __future__ import annotations

import pytest

from shared.config import ElfScopeConfig, get_config


def test_defaults():
    config = ElfScopeConfig()
    assert config.reader.name_encoding == "utf-8"
    assert config.reader.note_section_prefix == ".note"
    assert config.reader.relocation_section_prefix == ".rel"
    assert config.global_settings.log_json is False


def test_load_from_toml(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text(
        '[global]\nlog_level = "DEBUG"\nunused = 1\n'
        '[reader]\nmax_file_size = 1024\nname_encoding = "latin-1"\n',
        encoding="utf-8",
    )
    config = ElfScopeConfig.load(path)

    assert config.global_settings.log_level == "DEBUG"
    assert config.reader.max_file_size == 1024
    assert config.reader.name_encoding == "latin-1"
    assert config.reader.read_chunk_size == 64


def test_explicit_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ElfScopeConfig.load(tmp_path / "absent.toml")


def test_get_config_caches_until_a_path_is_given(tmp_path):
    path = tmp_path / "c.toml"
    path.write_text("[reader]\nread_chunk_size = 7\n", encoding="utf-8")

    first = get_config(path)
    assert get_config() is first
    assert first.reader.read_chunk_size == 7
    assert get_config(path) is not first


def test_to_dict_round_trip():
    data = ElfScopeConfig().to_dict()
    assert set(data) == {"global_settings", "reader"}
    assert data["reader"]["max_file_size"] == 268_435_456
