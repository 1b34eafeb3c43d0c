from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .source_format import SourceFormat

"""CaseRecord domain model and its parts.

A CaseRecord is one normalized test case, ready for projection onto the
destination import columns. It is immutable once finalized.
"""

__all__ = [
    "Priority",
    "Section",
    "CaseRecord",
]


class Priority(Enum):
    """Destination priority vocabulary."""
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


@dataclass(frozen=True)
class Section:
    """A titled block of a composed description (Precondition, Steps, ...)."""
    title: str
    lines: tuple[str, ...] = ()

    @property
    def body(self) -> str:
        return "\n".join(self.lines)

    def append(self, *lines: str) -> Section:
        return Section(self.title, self.lines + lines)

    def render(self) -> str:
        return f"## {self.title}\n{self.body}"


# FlatCase セクションは空行区切り、GroupedSteps はステップバッファをそのまま改行連結
_SECTION_SEPARATORS = {
    SourceFormat.FLAT_CASE: "\n\n",
    SourceFormat.GROUPED_STEPS: "\n",
}


@dataclass(frozen=True)
class CaseRecord:
    """Normalized test case (post-aggregation).

    ``id`` is never empty: zero-padded ``Case ID`` for FlatCase exports,
    ``"TS" + Entity Key`` for GroupedSteps exports. ``sections`` keeps insertion
    order and never contains a section with an empty body.
    """
    id: str
    title: str
    folder: str
    priority: Priority
    tags: str
    owner: str
    sections: tuple[Section, ...]
    labels: str
    source_format: SourceFormat
    row_number: int = -1  # 元データ行 (診断用)

    @property
    def description(self) -> str:
        separator = _SECTION_SEPARATORS[self.source_format]
        return separator.join(section.render() for section in self.sections)
