# tests/test_arguments.py
"""Tests for function-call argument splitting and value resolution."""
import pytest

from runtpl.core.templating.arguments import parse_function_args, resolve_argument_value, split_arguments
from runtpl.exceptions import ArgumentError


class TestSplitArguments:
    def test_comma_inside_brackets_is_not_a_separator(self):
        parts = split_arguments('exclude_names: ["a,b"], recursive: true')
        assert parts == ['exclude_names: ["a,b"]', "recursive: true"]

    def test_comma_inside_quotes_and_objects(self):
        parts = split_arguments('a: "x, y", b: {"k": [1, 2]}, c: 3')
        assert parts == ['a: "x, y"', 'b: {"k": [1, 2]}', "c: 3"]

    def test_escaped_quote_inside_string(self):
        parts = split_arguments(r'a: "say \"hi, there\"", b: 1')
        assert parts == [r'a: "say \"hi, there\""', "b: 1"]

    def test_trailing_comma_is_ignored(self):
        assert split_arguments("a: 1, ") == ["a: 1"]

    def test_empty_argument_between_commas(self):
        with pytest.raises(ArgumentError, match="Empty argument"):
            split_arguments("a: 1,, b: 2")

    def test_blank_text(self):
        assert split_arguments("   ") == []


class TestParseFunctionArgs:
    def test_literals(self):
        args = parse_function_args('source: "./src", recursive: false, names: ["a"], depth: 2, extra: null', {})
        assert args == {"source": "./src", "recursive": False, "names": ["a"], "depth": 2, "extra": None}

    def test_context_path_value(self):
        args = parse_function_args("source: cfg.dirs", {"cfg": {"dirs": ["x", "y"]}})
        assert args == {"source": ["x", "y"]}

    def test_literal_wins_over_context_path(self):
        assert parse_function_args("flag: true", {"true": "shadowed"}) == {"flag": True}

    def test_escaped_string_value(self):
        args = parse_function_args(r'text: "say \"hi, there\""', {})
        assert args == {"text": 'say "hi, there"'}

    def test_later_duplicate_key_wins(self):
        assert parse_function_args("a: 1, a: 2", {}) == {"a": 2}

    def test_empty_text(self):
        assert parse_function_args("", {}) == {}

    def test_missing_separator(self):
        with pytest.raises(ArgumentError, match="Argument 'source' is missing a value"):
            parse_function_args("source", {})

    def test_empty_value(self):
        with pytest.raises(ArgumentError, match="Argument 'source' has an empty value"):
            parse_function_args("source: ", {})

    def test_empty_key(self):
        with pytest.raises(ArgumentError, match="Invalid argument part"):
            parse_function_args(": 1", {})

    def test_unresolvable_value(self):
        with pytest.raises(ArgumentError, match="'./src' is not a valid JSON literal nor a known variable"):
            parse_function_args("source: ./src", {})


def test_resolve_argument_value_keeps_context_null():
    assert resolve_argument_value("value", {"value": None}) is None


@pytest.mark.parametrize("name", ["NaN", "Infinity", "-Infinity"])
def test_non_standard_constants_resolve_as_paths(name):
    assert parse_function_args(f"v: {name}", {name: "from context"}) == {"v": "from context"}
    with pytest.raises(ArgumentError, match="not a valid JSON literal nor a known variable"):
        resolve_argument_value(name, {})
