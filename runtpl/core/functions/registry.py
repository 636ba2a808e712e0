# runtpl/core/functions/registry.py
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from .files import files

BuiltinFunction = Callable[[Dict[str, Any]], Any]

BUILTIN_FUNCTIONS: Mapping[str, BuiltinFunction] = MappingProxyType({
    "files": files,
})


class FunctionRegistry:
    """Read-only table of functions callable as loop sources.

    Built once and handed to the engine; `with_functions` derives a new
    registry instead of changing this one.
    """

    def __init__(self, functions: Optional[Mapping[str, BuiltinFunction]] = None):
        self._functions: Mapping[str, BuiltinFunction] = MappingProxyType(dict(functions or {}))

    @classmethod
    def default(cls) -> "FunctionRegistry":
        return cls(BUILTIN_FUNCTIONS)

    def with_functions(self, **extra: BuiltinFunction) -> "FunctionRegistry":
        return FunctionRegistry({**self._functions, **extra})

    def get(self, name: str) -> Optional[BuiltinFunction]:
        return self._functions.get(name)

    def names(self) -> Iterator[str]:
        return iter(sorted(self._functions))

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)
