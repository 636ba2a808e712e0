# runtpl/core/templating/syntax.py
"""
Lexical recognizers for the three template tags and the nesting-aware
pairing of loop-open and loop-close tags.

Tags:
    {{ path }}                                  variable reference
    {{foreach item in source}}                  loop over a context path
    {{foreach item in name(key: value, ...)}}   loop over a function result
    {{endfor}}                                  loop close

A loop tag that starts its line swallows its indentation, and any loop tag
swallows trailing blanks plus one line break, so tag-only lines vanish from
the output.
"""
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from runtpl.exceptions import TemplateSyntaxError

VARIABLE_PATTERN = re.compile(r"\{\{\s*([a-zA-Z0-9_.]+)\s*\}\}")
LOOP_OPEN_PATTERN = re.compile(
    r"(?:^[ \t]*)?"
    r"\{\{foreach\s+(?P<item>[a-zA-Z0-9_]+)\s+in\s+(?P<source>[a-zA-Z0-9_.]+)"
    r"(?:\((?P<args>[^)]*)\))?\s*\}\}"
    r"(?:[ \t]*\r?\n)?",
    re.MULTILINE,
)
LOOP_CLOSE_PATTERN = re.compile(r"(?:^[ \t]*)?\{\{endfor\}\}(?:[ \t]*\r?\n)?", re.MULTILINE)

RESERVED_WORDS = frozenset({"endfor", "in", "foreach"})


@dataclass(frozen=True)
class LoopTag:
    """A recognized `{{foreach ...}}` tag and its span in the template."""
    item: str
    source: str
    args: Optional[str]
    start: int
    end: int

    @classmethod
    def from_match(cls, match: re.Match) -> "LoopTag":
        return cls(
            item=match.group("item"),
            source=match.group("source"),
            args=match.group("args"),
            start=match.start(),
            end=match.end(),
        )

    @property
    def is_function_call(self) -> bool:
        return self.args is not None

    @property
    def source_segments(self) -> List[str]:
        return self.source.split(".")


@dataclass(frozen=True)
class LoopBlock:
    """An open tag paired with its matching close tag."""
    open_tag: LoopTag
    body_start: int
    body_end: int
    end: int

    @property
    def start(self) -> int:
        return self.open_tag.start


def line_of(template: str, pos: int) -> int:
    return template.count("\n", 0, pos) + 1


def find_loop_open(template: str, pos: int = 0, endpos: Optional[int] = None) -> Optional[LoopTag]:
    if endpos is None:
        endpos = len(template)
    match = LOOP_OPEN_PATTERN.search(template, pos, endpos)
    if match is None:
        return None
    return LoopTag.from_match(match)


def find_loop_close(template: str, pos: int = 0, endpos: Optional[int] = None) -> Optional[re.Match]:
    if endpos is None:
        endpos = len(template)
    return LOOP_CLOSE_PATTERN.search(template, pos, endpos)


def match_loop_block(template: str, open_tag: LoopTag, endpos: Optional[int] = None) -> LoopBlock:
    """Pairs `open_tag` with the close tag at the same nesting depth.

    Every open and close tag after the opening one is visited in text order;
    opens raise the depth, closes lower it, and the first close seen at depth
    zero belongs to `open_tag`.
    """
    if endpos is None:
        endpos = len(template)
    events: List[Tuple[int, bool, re.Match]] = [
        (m.start(), True, m) for m in LOOP_OPEN_PATTERN.finditer(template, open_tag.end, endpos)
    ]
    events.extend((m.start(), False, m) for m in LOOP_CLOSE_PATTERN.finditer(template, open_tag.end, endpos))
    events.sort(key=lambda event: event[0])

    depth = 0
    for _, is_open, match in events:
        if is_open:
            depth += 1
        elif depth > 0:
            depth -= 1
        else:
            return LoopBlock(open_tag=open_tag, body_start=open_tag.end, body_end=match.start(), end=match.end())

    raise TemplateSyntaxError(
        f"Loop '{{{{foreach {open_tag.item} in {open_tag.source}}}}}' has no matching {{{{endfor}}}}",
        line_of(template, open_tag.start),
    )


def iter_loop_blocks(template: str, start: int = 0, end: Optional[int] = None) -> Iterator[LoopBlock]:
    # yields the outermost loops of [start, end) from left to right.
    if end is None:
        end = len(template)
    pos = start
    while True:
        open_tag = find_loop_open(template, pos, end)
        if open_tag is None:
            return
        block = match_loop_block(template, open_tag, end)
        yield block
        pos = block.end


def check_no_stray_close(template: str, start: int, end: int) -> None:
    # a range without loop opens must not contain a close tag either.
    stray = find_loop_close(template, start, end)
    if stray is not None:
        raise TemplateSyntaxError("Found {{endfor}} without a matching {{foreach}}", line_of(template, stray.start()))
