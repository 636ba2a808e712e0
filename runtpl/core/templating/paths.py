# runtpl/core/templating/paths.py
"""Dotted-path lookup into context values."""
import json
from typing import Any, Mapping


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


# returned by resolve_path when a segment does not exist; distinct from a json null.
MISSING: Any = _Missing()


def resolve_path(scope: Mapping[str, Any], path: str) -> Any:
    current: Any = scope
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]
    return current


def value_to_string(value: Any) -> str:
    # strings render verbatim; every other value renders as compact json.
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
