"""Tests for pi_edit.buffer"""
import pytest

from pi_edit.buffer import Buffer, split_lines


class TestSplitLines:
    def test_trailing_newline_adds_no_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_no_trailing_newline(self):
        assert split_lines("a\nb") == ["a", "b"]

    def test_crlf(self):
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_blank_lines_kept(self):
        assert split_lines("a\n\n\nb") == ["a", "", "", "b"]

    def test_empty(self):
        assert split_lines("") == []


class TestBuffer:
    def test_default_is_empty(self):
        buf = Buffer()
        assert buf.is_empty()
        assert len(buf) == 0
        assert buf.line_at(0) is None

    def test_load(self, tmp_path):
        path = tmp_path / "hello.txt"
        path.write_text("first\nsecond\n", encoding="utf-8")
        buf = Buffer.load(path)
        assert not buf.is_empty()
        assert buf.lines == ["first", "second"]

    def test_line_at(self):
        buf = Buffer(["a", "b"])
        assert buf.line_at(0) == "a"
        assert buf.line_at(1) == "b"
        assert buf.line_at(2) is None
        assert buf.line_at(-1) is None

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        assert Buffer.load(path).is_empty()

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Buffer.load(tmp_path / "missing.txt")

    def test_load_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            Buffer.load(tmp_path)

    def test_load_invalid_utf8_raises(self, tmp_path):
        path = tmp_path / "bin.dat"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(UnicodeDecodeError):
            Buffer.load(path)
