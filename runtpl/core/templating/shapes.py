# runtpl/core/templating/shapes.py
"""
Static analysis of a template: infers how every top-level variable is used
(scalar, list of scalars, list of records, or a record reached through a
property path) and turns the result into an editable JSON scaffold.

    {{foreach m in team.members}}{{m.name}}{{endfor}}

yields `team: {members: list of {name: simple}}` and the scaffold
`{"team": {"members": [{"name": ""}]}}`.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple
import structlog

from runtpl.exceptions import ArgumentError

from .arguments import parse_json_literal, split_arguments
from .syntax import (
    LOOP_OPEN_PATTERN,
    RESERVED_WORDS,
    VARIABLE_PATTERN,
    LoopTag,
    iter_loop_blocks,
    match_loop_block,
)

log = structlog.get_logger(__name__)

SCAFFOLD_COMMENT = "Please fill in the values. An example structure is provided for lists of objects."
_PATH_PATTERN = re.compile(r"^[a-zA-Z0-9_]+(?:\.[a-zA-Z0-9_]+)*$")


class UsageKind(Enum):
    SIMPLE = "simple"
    COLLECTION_OF_SIMPLE = "collection_of_simple"
    COLLECTION_OF_OBJECTS = "collection_of_objects"
    OBJECT = "object"


@dataclass
class VarUsage:
    kind: UsageKind
    fields: Dict[str, "VarUsage"] = field(default_factory=dict)

    @classmethod
    def simple(cls) -> "VarUsage":
        return cls(UsageKind.SIMPLE)

    @classmethod
    def collection(cls, fields: Optional[Dict[str, "VarUsage"]] = None) -> "VarUsage":
        if not fields:
            return cls(UsageKind.COLLECTION_OF_SIMPLE)
        return cls(UsageKind.COLLECTION_OF_OBJECTS, dict(fields))

    @classmethod
    def object(cls, fields: Dict[str, "VarUsage"]) -> "VarUsage":
        return cls(UsageKind.OBJECT, dict(fields))

    def merge(self, other: "VarUsage") -> "VarUsage":
        """Combines two observed usages of the same variable; the richer shape wins."""
        if other.kind is UsageKind.SIMPLE:
            return self
        if self.kind is UsageKind.SIMPLE:
            return other
        fields = _merge_fields(self.fields, other.fields)
        if UsageKind.OBJECT in (self.kind, other.kind):
            return VarUsage.object(fields)
        return VarUsage.collection(fields)


def _merge_fields(left: Dict[str, VarUsage], right: Dict[str, VarUsage]) -> Dict[str, VarUsage]:
    merged = dict(left)
    for name, usage in right.items():
        merged[name] = merged[name].merge(usage) if name in merged else usage
    return merged


def _nest(segments: List[str], leaf: VarUsage) -> VarUsage:
    # wraps `leaf` in one record layer per property segment.
    for segment in reversed(segments):
        leaf = VarUsage.object({segment: leaf})
    return leaf


def _record(target: Dict[str, VarUsage], name: str, usage: VarUsage) -> None:
    target[name] = target[name].merge(usage) if name in target else usage


class ShapeAnalyzer:
    """Read-only pass over a template; never needs a context."""

    def __init__(self, template: str):
        self.template = template
        self.loop_items: Set[str] = {m.group("item") for m in LOOP_OPEN_PATTERN.finditer(template)}

    def analyze(self) -> Dict[str, VarUsage]:
        variables: Dict[str, VarUsage] = {}
        events: List[Tuple[int, str, Any]] = [
            (m.start(), "loop", m) for m in LOOP_OPEN_PATTERN.finditer(self.template)
        ]
        events.extend((m.start(), "variable", m) for m in VARIABLE_PATTERN.finditer(self.template))
        events.sort(key=lambda event: event[0])

        for _, kind, match in events:
            if kind == "variable":
                self._record_top_level_reference(variables, match.group(1))
                continue
            tag = LoopTag.from_match(match)
            # every loop must be closed, whatever its source.
            block = match_loop_block(self.template, tag)
            if tag.is_function_call:
                for path in self._argument_paths(tag):
                    self._record_top_level_reference(variables, path)
                continue
            segments = tag.source_segments
            if "" in segments or segments[0] in self.loop_items:
                continue
            usage = VarUsage.collection(self._collect_fields(block.body_start, block.body_end, tag.item))
            _record(variables, segments[0], _nest(segments[1:], usage))

        log.debug("template_variables_extracted", variables=list(variables))
        return variables

    def _record_top_level_reference(self, variables: Dict[str, VarUsage], path: str) -> None:
        segments = path.split(".")
        base = segments[0]
        if "" in segments or base in self.loop_items or base in RESERVED_WORDS:
            return
        _record(variables, base, _nest(segments[1:], VarUsage.simple()))

    def _collect_fields(self, start: int, end: int, item: str) -> Dict[str, VarUsage]:
        fields: Dict[str, VarUsage] = {}
        self._walk(start, end, {item: fields})
        return fields

    def _walk(self, start: int, end: int, tracked: Dict[str, Dict[str, VarUsage]]) -> None:
        """Records field usages of every item in `tracked` within [start, end).

        `tracked` maps each loop item visible in the range to the field table
        being built for it; an inner loop adds its own item and hides an outer
        one of the same name. Each range is scanned once.
        """
        pos = start
        for block in iter_loop_blocks(self.template, start, end):
            self._collect_references(pos, block.start, tracked)
            tag = block.open_tag
            inner_tracked = {name: fields for name, fields in tracked.items() if name != tag.item}
            if tag.is_function_call:
                for path in self._argument_paths(tag):
                    self._add_item_path(tracked, path.split("."), VarUsage.simple())
                self._walk(block.body_start, block.body_end, inner_tracked)
            else:
                inner_fields: Dict[str, VarUsage] = {}
                inner_tracked[tag.item] = inner_fields
                self._walk(block.body_start, block.body_end, inner_tracked)
                self._add_item_path(tracked, tag.source_segments, VarUsage.collection(inner_fields))
            pos = block.end
        self._collect_references(pos, end, tracked)

    def _collect_references(self, start: int, end: int, tracked: Dict[str, Dict[str, VarUsage]]) -> None:
        for match in VARIABLE_PATTERN.finditer(self.template, start, end):
            self._add_item_path(tracked, match.group(1).split("."), VarUsage.simple())

    @staticmethod
    def _add_item_path(tracked: Dict[str, Dict[str, VarUsage]], segments: List[str], leaf: VarUsage) -> None:
        if len(segments) < 2 or "" in segments or segments[0] not in tracked:
            return
        _record(tracked[segments[0]], segments[1], _nest(segments[2:], leaf))

    @staticmethod
    def _argument_paths(tag: LoopTag) -> List[str]:
        # argument values that are not json literals are context paths.
        paths: List[str] = []
        try:
            parts = split_arguments(tag.args or "")
        except ArgumentError:
            return paths
        for part in parts:
            _, _, value_text = part.partition(":")
            value_text = value_text.strip()
            try:
                parse_json_literal(value_text)
            except ValueError:
                if _PATH_PATTERN.match(value_text):
                    paths.append(value_text)
        return paths


def extract_variables(template: str) -> Dict[str, VarUsage]:
    return ShapeAnalyzer(template).analyze()


def build_scaffold(usage: VarUsage) -> Any:
    """Returns an example value for `usage`: "", [], [{...}] or {...}."""
    if usage.kind is UsageKind.SIMPLE:
        return ""
    if usage.kind is UsageKind.COLLECTION_OF_SIMPLE:
        return []
    record = {name: build_scaffold(field_usage) for name, field_usage in usage.fields.items()}
    if usage.kind is UsageKind.COLLECTION_OF_OBJECTS:
        return [record]
    return record


def build_scaffold_document(variables: Dict[str, VarUsage]) -> Dict[str, Any]:
    document: Dict[str, Any] = {"__comment": SCAFFOLD_COMMENT}
    for name, usage in variables.items():
        document[name] = build_scaffold(usage)
    return document
