"""Tests for wb2kk.io."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from wb2kk.io import read_input, write_output


class _FakeStdio:
    """Stand-in for sys.stdin/sys.stdout exposing a binary ``buffer``."""

    def __init__(self, data: bytes = b"") -> None:
        self.buffer = io.BytesIO(data)


class TestReadInput:
    """Tests for read_input."""

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "export.json"
        path.write_bytes(b"[]")
        assert read_input(str(path)) == b"[]"

    def test_reads_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """'-' reads standard input."""
        monkeypatch.setattr(sys, "stdin", _FakeStdio(b'[{"url": "http://a"}]'))
        assert read_input("-") == b'[{"url": "http://a"}]'

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_input(str(tmp_path / "nope.json"))


class TestWriteOutput:
    """Tests for write_output."""

    def test_writes_file_and_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "out.json"
        write_output(b'{"bookmarks": []}\n', path)
        assert path.read_bytes() == b'{"bookmarks": []}\n'

    def test_writes_stdout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = _FakeStdio()
        monkeypatch.setattr(sys, "stdout", fake)
        write_output(b"data")
        assert fake.buffer.getvalue() == b"data"

    def test_unwritable_path(self, tmp_path: Path) -> None:
        """Writing over a directory raises OSError."""
        with pytest.raises(OSError):
            write_output(b"[]", tmp_path)
