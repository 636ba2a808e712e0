# tests/test_interactive.py
"""Tests for filling template variables through an editor."""
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from runtpl.core.interactive import run_interactive
from runtpl.core.templating.shapes import SCAFFOLD_COMMENT
from runtpl.exceptions import ContextError, InteractiveAbort

TEMPLATE = "{{title}}\n{{foreach u in users}}- {{u.name}}\n{{endfor}}"


def test_no_variables_skips_editor():
    with patch("runtpl.core.interactive.edit_file") as mock_edit:
        assert run_interactive("static text") == {}
    mock_edit.assert_not_called()


def test_edited_scaffold_becomes_context():
    seen = {}

    def fake_edit(path, editor=None):
        seen["path"] = Path(path)
        seen["scaffold"] = json.loads(Path(path).read_text(encoding="utf-8"))
        Path(path).write_text(json.dumps({"title": "Team", "users": [{"name": "Ada"}]}), encoding="utf-8")

    with patch("runtpl.core.interactive.edit_file", side_effect=fake_edit):
        context = run_interactive(TEMPLATE, editor="nano")

    assert context == {"title": "Team", "users": [{"name": "Ada"}]}
    assert seen["scaffold"] == {"__comment": SCAFFOLD_COMMENT, "title": "", "users": [{"name": ""}]}
    assert seen["path"].name.startswith("template-vars-")
    assert not seen["path"].exists()


def test_unchanged_scaffold_aborts():
    with patch("runtpl.core.interactive.edit_file"):
        with pytest.raises(InteractiveAbort, match="No changes detected"):
            run_interactive(TEMPLATE)


def test_invalid_json_from_editor():
    def fake_edit(path, editor=None):
        Path(path).write_text("{ oops", encoding="utf-8")

    with patch("runtpl.core.interactive.edit_file", side_effect=fake_edit):
        with pytest.raises(ContextError, match="Invalid JSON data"):
            run_interactive(TEMPLATE)
