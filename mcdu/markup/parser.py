"""Markup parser: one raw MCDU text field -> ordered styled runs.

The field is scanned left to right. Every opening tag creates a child scope
under the current one carrying the parent's formatters plus its own; ``{end}``
moves back to the parent scope. Literal text becomes a leaf under the scope it
was read in, numbered in discovery order, so sorting leaves by that number
restores reading order no matter how deep they sit:

    {green}V1{end} {red}100{end}
      root
       +- scope(green) -- leaf#0 "V1"
       +- leaf#1 " "
       +- scope(red) ---- leaf#2 "100"

Scopes left open at the end of the field are simply dropped; only text leaves
survive flattening.
"""
from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from mcdu.utils.exceptions import UnbalancedMarkupError
from mcdu.utils.graph import Graph

from .formatter import SPACE_MARKER, FormatterTag

TAG_RE = re.compile(r"\{([A-Za-z]+)\}")

ROOT_ID = 0


@dataclass(slots=True)
class SpanNode:
    """Vertex payload: a formatting scope (text is None) or a text leaf."""
    tag: FormatterTag | None
    formatters: tuple[FormatterTag, ...]
    text: str | None = None
    position: int | None = None


@dataclass(frozen=True, slots=True)
class TextRun:
    text: str
    formatters: tuple[FormatterTag, ...] = ()

    def _innermost(self, kind: str) -> FormatterTag | None:
        for tag in reversed(self.formatters):
            if getattr(tag, kind):
                return tag
        return None

    @property
    def color(self) -> FormatterTag | None:
        return self._innermost("is_color")

    @property
    def font(self) -> FormatterTag | None:
        return self._innermost("is_font")

    @property
    def alignment(self) -> FormatterTag | None:
        return self._innermost("is_alignment")


class ParsedText:
    """Tree of scopes and text leaves built from one field.

    The tree is private to this object; ``runs()`` is the flattened view
    handed to renderers.
    """

    __slots__ = ("graph", "_runs")

    def __init__(self, graph: Graph[int, SpanNode, bool]):
        self.graph = graph
        leaves = [n for n in graph.vertices.values() if n.text is not None]
        leaves.sort(key=lambda n: n.position)
        self._runs = tuple(TextRun(n.text, n.formatters) for n in leaves)

    @classmethod
    def empty(cls) -> ParsedText:
        graph: Graph[int, SpanNode, bool] = Graph()
        graph.new_vertex(ROOT_ID, SpanNode(tag=None, formatters=()))
        return cls(graph)

    def runs(self) -> list[TextRun]:
        return list(self._runs)

    @property
    def plain_text(self) -> str:
        return "".join(r.text for r in self._runs)

    def __iter__(self) -> Iterator[TextRun]:
        return iter(self._runs)

    def __len__(self) -> int:
        return len(self._runs)

    def __bool__(self) -> bool:
        return bool(self._runs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedText):
            return NotImplemented
        return self._runs == other._runs

    def __hash__(self) -> int:
        return hash(self._runs)

    def __repr__(self) -> str:
        return f"ParsedText({list(self._runs)!r})"


def parse_markup(raw: str, strict: bool = True) -> ParsedText:
    """Parse one text field.

    Raises UnknownTagError for tags outside the vocabulary (unless
    ``strict`` is False) and UnbalancedMarkupError for an ``{end}`` with no
    open scope.
    """
    raw = raw.replace(SPACE_MARKER, " ")

    graph: Graph[int, SpanNode, bool] = Graph()
    scope = SpanNode(tag=None, formatters=())
    graph.new_vertex(ROOT_ID, scope)
    current = ROOT_ID
    next_id = ROOT_ID + 1
    position = 0
    offset = 0
    length = len(raw)

    while offset < length:
        m = TAG_RE.match(raw, offset)
        if m is not None:
            tag = FormatterTag.from_token(m.group(1), strict=strict)
            if tag is FormatterTag.CLOSE:
                parent = graph.get_parent(current)
                parent_scope = graph.get_vertex(parent) if parent is not None else None
                if parent_scope is None:
                    raise UnbalancedMarkupError(f"{{end}} at offset {offset} closes no open tag")
                current, scope = parent, parent_scope
            else:
                child = SpanNode(tag=tag, formatters=scope.formatters + (tag,))
                graph.new_vertex(next_id, child)
                graph.push_edge(current, next_id, False)
                graph.push_edge(next_id, current, True)
                current, scope = next_id, child
                next_id += 1
            offset = m.end()
            continue

        nxt = TAG_RE.search(raw, offset + 1)
        stop = nxt.start() if nxt is not None else length
        # a tag opener never extends a grapheme cluster, so slicing here
        # keeps multi-code-point glyphs whole
        text = raw[offset:stop]
        graph.new_vertex(next_id, SpanNode(tag=None, formatters=scope.formatters, text=text, position=position))
        graph.push_edge(current, next_id, False)
        graph.push_edge(next_id, current, True)
        next_id += 1
        position += 1
        offset += len(text)

    return ParsedText(graph)


__all__ = ["ParsedText", "SpanNode", "TextRun", "parse_markup", "ROOT_ID"]
