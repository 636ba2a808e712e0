# tests/test_syntax.py
"""Tests for tag recognition and open/close pairing."""
import pytest

from runtpl.core.templating.syntax import (
    VARIABLE_PATTERN,
    find_loop_open,
    iter_loop_blocks,
    line_of,
    match_loop_block,
)
from runtpl.exceptions import TemplateSyntaxError


def test_variable_pattern_captures_path():
    assert [m.group(1) for m in VARIABLE_PATTERN.finditer("{{ a }} {{b.c_1}} {{ bad path }}")] == ["a", "b.c_1"]


def test_loop_open_with_path_source():
    tag = find_loop_open("x {{foreach item in data.items}} y")
    assert (tag.item, tag.source, tag.args) == ("item", "data.items", None)
    assert not tag.is_function_call
    assert tag.source_segments == ["data", "items"]


def test_loop_open_with_function_call():
    tag = find_loop_open('{{foreach f in files(source: "./src", recursive: false)}}\n')
    assert tag.source == "files"
    assert tag.args == 'source: "./src", recursive: false'
    assert tag.is_function_call


def test_loop_open_with_empty_call():
    tag = find_loop_open("{{foreach f in files()}}")
    assert tag.args == ""
    assert tag.is_function_call


def test_loop_open_on_its_own_line_spans_indentation_and_newline():
    template = "a\n    {{foreach x in xs}}   \nb"
    tag = find_loop_open(template)
    assert template[tag.start:tag.end] == "    {{foreach x in xs}}   \n"


def test_match_pairs_at_same_depth():
    template = "{{foreach a in x}}1{{foreach b in a}}2{{endfor}}3{{endfor}}4"
    block = match_loop_block(template, find_loop_open(template))
    assert template[block.body_start:block.body_end] == "1{{foreach b in a}}2{{endfor}}3"
    assert template[block.end:] == "4"


def test_iter_loop_blocks_yields_outermost_loops_only():
    template = (
        "{{foreach a in x}}{{foreach b in a}}{{endfor}}{{endfor}}"
        "-{{foreach c in y}}{{endfor}}"
    )
    blocks = list(iter_loop_blocks(template))
    assert [block.open_tag.item for block in blocks] == ["a", "c"]


def test_unmatched_open_raises():
    template = "ok\n\n{{foreach a in x}}"
    with pytest.raises(TemplateSyntaxError) as exc_info:
        match_loop_block(template, find_loop_open(template))
    assert exc_info.value.line == 3


def test_line_of():
    assert line_of("a\nb\nc", 0) == 1
    assert line_of("a\nb\nc", 4) == 3
