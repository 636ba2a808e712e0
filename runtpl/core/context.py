# runtpl/core/context.py
"""
Builds the data context handed to the renderer from command-line style
arguments or from a JSON document.

    name=Ada            -> {"name": "Ada"}
    tags=a, b           -> {"tags": ["a", "b"]}
    data@=data.json     -> {"data": <parsed json, or the file text>}
    notes@-             -> {"notes": <parsed json, or stdin text>}
"""
import json
import sys
from pathlib import Path
from typing import Any, Iterable, Optional, TextIO
import structlog

from runtpl.exceptions import ContextError
from runtpl.util import normalize_text, parse_json_or_text

log = structlog.get_logger(__name__)


class Context(dict):
    """Root mapping of variable names to JSON-like values."""

    @classmethod
    def from_args(cls, args: Iterable[str], stdin: Optional[TextIO] = None) -> "Context":
        context = cls()
        stdin_used = False

        for arg in args:
            if arg.endswith("@-"):
                key = arg[: -len("@-")]
                if stdin_used:
                    raise ContextError(f"Argument '{arg}': standard input can only be read once.")
                stream = stdin if stdin is not None else sys.stdin
                context[key] = parse_json_or_text(normalize_text(stream.read()))
                stdin_used = True
                log.debug("context_value_read_from_stdin", key=key)
            elif "@=" in arg:
                key, path = arg.split("@=", 1)
                context[key] = parse_json_or_text(normalize_text(_read_data_file(Path(path))))
                log.debug("context_value_read_from_file", key=key, path=path)
            elif "=" in arg:
                key, raw_value = arg.split("=", 1)
                value = normalize_text(raw_value)
                if "," in value:
                    context[key] = [item.strip() for item in value.split(",")]
                else:
                    context[key] = value
            else:
                raise ContextError(
                    f"Argument '{arg}' is not in a valid format (key=value, key@=filepath, or key@-)"
                )

        return context

    @classmethod
    def from_json_document(cls, json_text: str) -> "Context":
        try:
            value: Any = json.loads(json_text)
        except ValueError as e:
            raise ContextError(f"Invalid JSON data: {e}") from e
        if not isinstance(value, dict):
            raise ContextError("Root of the data file must be a JSON object.")
        return cls(value)


def _read_data_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContextError(f"Could not read data file '{path}': {e}") from e
