# tests/test_output.py
"""Tests for writing rendered output."""
from pathlib import Path
from unittest.mock import patch

import pyperclip
import pytest

from runtpl.core.output import copy_to_clipboard, write_to_file, write_to_stdout
from runtpl.exceptions import OutputError


def test_write_to_stdout(capsys):
    write_to_stdout("hello\nworld")
    assert capsys.readouterr().out == "hello\nworld"


def test_write_to_file(tmp_path: Path):
    target = tmp_path / "out.txt"
    write_to_file(target, "käse")
    assert target.read_text(encoding="utf-8") == "käse"


def test_write_to_file_failure(tmp_path: Path):
    with pytest.raises(OutputError, match="failed to write to file"):
        write_to_file(tmp_path / "missing" / "out.txt", "x")


def test_copy_to_clipboard(capsys):
    with patch("runtpl.core.output.pyperclip.copy") as mock_copy:
        assert copy_to_clipboard("text") is True
    mock_copy.assert_called_once_with("text")
    assert "(Result copied to clipboard)" in capsys.readouterr().err


def test_copy_to_clipboard_failure_is_reported(capsys):
    with patch("runtpl.core.output.pyperclip.copy", side_effect=pyperclip.PyperclipException("no clipboard")):
        assert copy_to_clipboard("text") is False
    assert "Warning: Could not copy to clipboard: no clipboard" in capsys.readouterr().err
