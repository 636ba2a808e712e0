# runtpl/core/templating/renderer.py
"""
Contains the TemplateEngine class that expands `{{foreach}}` blocks and
substitutes `{{ path }}` placeholders against a context.
"""
from collections import ChainMap
from typing import Any, List, Mapping, Optional
import structlog

from runtpl.core.functions import FunctionRegistry
from runtpl.exceptions import ArgumentError, FunctionCallError, FunctionError, UnknownFunctionError

from .arguments import parse_function_args
from .paths import MISSING, resolve_path, value_to_string
from .syntax import VARIABLE_PATTERN, LoopBlock, check_no_stray_close, iter_loop_blocks

log = structlog.get_logger(__name__)


class TemplateEngine:
    """Renders templates against a context using an injected function registry."""

    def __init__(self, functions: Optional[FunctionRegistry] = None):
        self.functions = functions if functions is not None else FunctionRegistry.default()

    def render(self, template: str, context: Mapping[str, Any]) -> str:
        """Renders `template` in full, or raises; the context is never modified."""
        log.debug("rendering_template", length=len(template), context_keys=list(context.keys()))
        rendered = self._render_range(template, 0, len(template), ChainMap(context))
        log.debug("template_rendered", length=len(rendered))
        return rendered

    def _render_range(self, template: str, start: int, end: int, scope: ChainMap) -> str:
        # outermost loops are expanded left to right; text between them is substituted.
        parts: List[str] = []
        pos = start
        for block in iter_loop_blocks(template, start, end):
            parts.append(self._substitute_variables(template, pos, block.start, scope))
            parts.append(self._expand_loop(template, block, scope))
            pos = block.end
        parts.append(self._substitute_variables(template, pos, end, scope))
        return "".join(parts)

    def _substitute_variables(self, template: str, start: int, end: int, scope: Mapping[str, Any]) -> str:
        if start >= end:
            return ""
        check_no_stray_close(template, start, end)

        def replace(match) -> str:
            value = resolve_path(scope, match.group(1))
            return "" if value is MISSING else value_to_string(value)

        return VARIABLE_PATTERN.sub(replace, template[start:end])

    def _expand_loop(self, template: str, block: LoopBlock, scope: ChainMap) -> str:
        tag = block.open_tag
        collection = self._resolve_collection(tag.source, tag.args, scope)
        items = list(collection) if isinstance(collection, (list, tuple)) else [collection]
        log.debug("expanding_loop", item=tag.item, source=tag.source, iterations=len(items))

        rendered_iterations: List[str] = []
        for item in items:
            item_scope = scope.new_child({tag.item: item})
            rendered_iterations.append(self._render_range(template, block.body_start, block.body_end, item_scope))
        return "".join(rendered_iterations)

    def _resolve_collection(self, source: str, args_text: Optional[str], scope: Mapping[str, Any]) -> Any:
        if args_text is None:
            value = resolve_path(scope, source)
            return [] if value is MISSING else value

        function = self.functions.get(source)
        if function is None:
            raise UnknownFunctionError(source)
        try:
            args = parse_function_args(args_text, scope)
            log.debug("calling_function", function=source, arguments=sorted(args))
            return function(args)
        except (ArgumentError, FunctionError) as e:
            log.error("function_call_failed", function=source, error=str(e))
            raise FunctionCallError(source, str(e)) from e


def render(template: str, context: Mapping[str, Any], functions: Optional[FunctionRegistry] = None) -> str:
    return TemplateEngine(functions).render(template, context)
