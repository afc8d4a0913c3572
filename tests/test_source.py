from __future__ import annotations

import io

import pytest

from elfscope.core.errors import TruncatedReadError
from elfscope.parsers.source import ByteSource


def test_scoped_read_restores_cursor():
    handle = io.BytesIO(b"0123\x00456789")
    handle.seek(3)
    source = ByteSource(handle)

    assert source.read_at(8, 2) == b"78"
    assert source.read_cstring(0) == b"0123"
    assert handle.tell() == 3


def test_nested_scopes():
    handle = io.BytesIO(b"abcdef\x00ghi\x00")
    source = ByteSource(handle)
    with source.scoped(1) as fh:
        assert fh.read(2) == b"bc"
        assert source.read_cstring(7) == b"ghi"
        assert fh.read(1) == b"d"
    assert handle.tell() == 0


def test_short_read_is_an_error():
    source = ByteSource.from_bytes(b"\x00" * 8)
    with pytest.raises(TruncatedReadError) as excinfo:
        source.read_at(4, 8)
    assert (excinfo.value.offset, excinfo.value.wanted, excinfo.value.got) == (4, 8, 4)


def test_unpack_table_with_stride():
    source = ByteSource.from_bytes(bytes(range(12)))
    assert source.unpack_table("<BB", 0, 3, 4) == [(0, 1), (4, 5), (8, 9)]
    assert source.unpack_table("<H", 0, 2) == [(0x0100,), (0x0302,)]


def test_size_and_close(tmp_path):
    path = tmp_path / "blob"
    path.write_bytes(b"x" * 33)
    with ByteSource.from_path(path) as source:
        assert source.size == 33
        assert source.name == str(path)
    assert source.closed


@pytest.mark.parametrize("offset", [1 << 63, 1 << 64])
def test_offset_beyond_seek_range_is_a_truncated_read(offset):
    handle = io.BytesIO(b"\x7fELF")
    handle.seek(2)
    source = ByteSource(handle)

    with pytest.raises(TruncatedReadError) as excinfo:
        source.read_at(offset, 4)
    assert excinfo.value.offset == offset
    assert handle.tell() == 2
    with pytest.raises(TruncatedReadError):
        source.read_cstring(offset)
