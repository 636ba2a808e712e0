# runtpl/core/templating/arguments.py
"""
Parses the argument text of a function call used as a loop source, e.g.
`source: "./src", exclude_names: ["a,b"], recursive: flag`.

Each value is a json literal or, failing that, a dotted path into the
current scope.
"""
import json
from typing import Any, Dict, List, Mapping

from runtpl.exceptions import ArgumentError
from .paths import MISSING, resolve_path


def split_arguments(args_text: str) -> List[str]:
    # splits on commas outside of brackets, braces and double-quoted strings.
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    in_quotes = False
    escaped = False

    for char in args_text:
        if in_quotes:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_quotes = False
            continue

        if char == '"':
            in_quotes = True
        elif char in "[{":
            depth += 1
        elif char in "]}":
            depth -= 1
        elif char == "," and depth == 0:
            part = "".join(current).strip()
            if not part:
                raise ArgumentError(f"Empty argument in '{args_text.strip()}'")
            parts.append(part)
            current = []
            continue
        current.append(char)

    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


def _reject_constant(name: str) -> Any:
    raise ValueError(f"'{name}' is not a JSON literal")


def parse_json_literal(value_text: str) -> Any:
    # strict json: NaN, Infinity and -Infinity are left for path lookup.
    return json.loads(value_text, parse_constant=_reject_constant)


def resolve_argument_value(value_text: str, scope: Mapping[str, Any]) -> Any:
    value_text = value_text.strip()
    try:
        return parse_json_literal(value_text)
    except ValueError:
        pass
    value = resolve_path(scope, value_text)
    if value is MISSING:
        raise ArgumentError(f"Argument value '{value_text}' is not a valid JSON literal nor a known variable.")
    return value


def parse_function_args(args_text: str, scope: Mapping[str, Any]) -> Dict[str, Any]:
    """Turns `key: value, ...` into a dict, resolving each value against `scope`."""
    args: Dict[str, Any] = {}
    for part in split_arguments(args_text):
        key, separator, value_text = part.partition(":")
        key = key.strip()
        if not separator:
            raise ArgumentError(f"Argument '{key}' is missing a value")
        if not key:
            raise ArgumentError(f"Invalid argument part: '{part}'")
        value_text = value_text.strip()
        if not value_text:
            raise ArgumentError(f"Argument '{key}' has an empty value")
        args[key] = resolve_argument_value(value_text, scope)
    return args
