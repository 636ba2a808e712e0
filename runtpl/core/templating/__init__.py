# runtpl/core/templating/__init__.py
"""
Template rendering core.

Provides the TemplateEngine for expanding templates against a context and
extract_variables / build_scaffold_document for inferring the context a
template expects.
"""
from .renderer import TemplateEngine, render
from .shapes import UsageKind, VarUsage, build_scaffold, build_scaffold_document, extract_variables

__all__ = [
    "TemplateEngine",
    "UsageKind",
    "VarUsage",
    "build_scaffold",
    "build_scaffold_document",
    "extract_variables",
    "render",
]
