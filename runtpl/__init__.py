# runtpl/__init__.py
"""runtpl: a small text-templating tool with nestable loops and builtin functions."""
__version__ = "0.1.0"

from runtpl.core.context import Context
from runtpl.core.functions import FunctionRegistry
from runtpl.core.templating import (
    TemplateEngine,
    UsageKind,
    VarUsage,
    build_scaffold,
    build_scaffold_document,
    extract_variables,
    render,
)

__all__ = [
    "Context",
    "FunctionRegistry",
    "TemplateEngine",
    "UsageKind",
    "VarUsage",
    "__version__",
    "build_scaffold",
    "build_scaffold_document",
    "extract_variables",
    "render",
]
