"""Tests for the decoded-sample reader."""

from __future__ import annotations

import io
import shutil

import pytest

from pixdecode.jpeg.reader import JpegReader

_DATA = bytes(range(256)) * 4


class TestFullRead:
    def test_read_all_hands_over_buffer(self) -> None:
        reader = JpegReader(_DATA)
        data = reader.read()
        assert data is _DATA
        assert reader.remaining == 0
        assert reader.position == len(_DATA)
        assert reader.read() == b""

    def test_readall_hands_over_buffer(self) -> None:
        reader = JpegReader(_DATA)
        assert reader.readall() is _DATA
        assert reader.position == len(_DATA)
        assert reader.readall() == b""
        assert reader.position == len(_DATA)

    def test_oversized_read_hands_over_buffer(self) -> None:
        reader = JpegReader(_DATA)
        assert reader.read(len(_DATA) + 10) is _DATA

    def test_read_all_after_partial_read_copies_rest(self) -> None:
        reader = JpegReader(_DATA)
        head = reader.read(100)
        rest = reader.read()
        assert rest is not _DATA
        assert head + rest == _DATA


class TestPartialRead:
    def test_chunks_advance_cursor(self) -> None:
        reader = JpegReader(_DATA)
        chunks = []
        while chunk := reader.read(300):
            chunks.append(chunk)
        assert [len(c) for c in chunks] == [300, 300, 300, 124]
        assert b"".join(chunks) == _DATA
        assert reader.position == len(_DATA)

    def test_readinto_copies(self) -> None:
        reader = JpegReader(_DATA)
        buf = bytearray(10)
        assert reader.readinto(buf) == 10
        assert bytes(buf) == _DATA[:10]
        assert reader.remaining == len(_DATA) - 10

    def test_readinto_short_at_end(self) -> None:
        reader = JpegReader(b"abc")
        buf = bytearray(8)
        assert reader.readinto(buf) == 3
        assert buf[:3] == b"abc"
        assert reader.readinto(buf) == 0

    def test_zero_size_read(self) -> None:
        reader = JpegReader(_DATA)
        reader.read(1)
        assert reader.read(0) == b""
        assert reader.position == 1


class TestIoIntegration:
    def test_buffered_reader_wrapping(self) -> None:
        buffered = io.BufferedReader(JpegReader(_DATA), buffer_size=64)
        assert buffered.read() == _DATA

    def test_copyfileobj(self) -> None:
        out = io.BytesIO()
        shutil.copyfileobj(JpegReader(_DATA), out, 100)
        assert out.getvalue() == _DATA

    def test_closed_reader_raises(self) -> None:
        reader = JpegReader(_DATA)
        reader.close()
        with pytest.raises(ValueError, match="closed"):
            reader.read()

    def test_context_manager_closes(self) -> None:
        with JpegReader(_DATA) as reader:
            assert reader.readable()
        assert reader.closed
