# runtpl/core/functions/__init__.py
"""
Builtin functions usable as loop sources: `{{foreach f in files(source: "./src")}}`.
"""
from .files import files
from .registry import BUILTIN_FUNCTIONS, BuiltinFunction, FunctionRegistry

__all__ = ["BUILTIN_FUNCTIONS", "BuiltinFunction", "FunctionRegistry", "files"]
