from __future__ import annotations

import re
from dataclasses import dataclass, field

"""Markup normalizer for rich-text export fields.

Converts the small HTML subset found in exported test-case fields into compact
newline-delimited text:

- ``<br>`` / ``<br/>`` / ``<br />`` become newlines
- ``<ul>`` / ``<ol>`` items become ``* item`` / ``1. item`` lines
- ``<p>``, ``<span>``, ``<div>`` and stray ``<li>`` tags are stripped, content kept
- any other tag, and a ``<`` never closed by ``>``, is left as text

The scanner walks tags left to right with an explicit list stack, so nesting is
handled by the stack rather than by the order of substitutions. It never raises
on malformed markup.
"""

__all__ = [
    "normalize_markup",
]

_TAG_RE = re.compile(r"<[ \t]*(/?)[ \t]*([A-Za-z][A-Za-z0-9]*)\b[^<>\n]*>")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")

_LIST_MARKERS = {"ul": "* ", "ol": "1. "}
_STRIPPED_TAGS = frozenset({"p", "span", "div"})


@dataclass
class _ListFrame:
    marker: str
    items: list[str] = field(default_factory=list)
    item: list[str] | None = None  # 開いている <li> の中身

    def close_item(self) -> None:
        if self.item is not None:
            self.items.append("".join(self.item).strip())
            self.item = None

    def render(self) -> str:
        self.close_item()
        return "\n" + "\n".join(self.marker + item for item in self.items)


class _Scanner:
    def __init__(self) -> None:
        self.out: list[str] = []
        self.lists: list[_ListFrame] = []

    def sink(self) -> list[str] | None:
        """Buffer receiving text at the current position (None = discarded)."""
        if not self.lists:
            return self.out
        return self.lists[-1].item

    def text(self, chunk: str) -> None:
        target = self.sink()
        if target is not None and chunk:
            target.append(chunk)

    def tag(self, name: str, closing: bool, raw: str) -> None:
        if name == "br":
            self.text("\n")
        elif name in _LIST_MARKERS:
            if closing:
                self.close_list()
            else:
                self.lists.append(_ListFrame(_LIST_MARKERS[name]))
        elif name == "li":
            if not self.lists:
                return
            frame = self.lists[-1]
            frame.close_item()
            if not closing:
                frame.item = []
        elif name in _STRIPPED_TAGS:
            return
        else:
            self.text(raw)

    def close_list(self) -> None:
        if not self.lists:
            return
        frame = self.lists.pop()
        self.text(frame.render())

    def finish(self) -> str:
        while self.lists:
            self.close_list()
        return "".join(self.out)


def normalize_markup(text: str | None) -> str:
    """Normalize a markup fragment into trimmed, newline-delimited text.

    Empty or missing input yields an empty string. Applying it to its own
    output changes nothing.
    """
    if not text:
        return ""
    result = _scan(text)
    # 除去したタグの前後が連結して新しいタグになる場合 ("<<span>p>") は再走査
    while True:
        again = _scan(result)
        if again == result:
            return result
        result = again


def _scan(text: str) -> str:
    scanner = _Scanner()
    pos = 0
    for match in _TAG_RE.finditer(text):
        scanner.text(text[pos:match.start()])
        scanner.tag(match.group(2).lower(), bool(match.group(1)), match.group(0))
        pos = match.end()
    scanner.text(text[pos:])
    result = _BLANK_LINES_RE.sub("\n", scanner.finish())
    return result.strip()
