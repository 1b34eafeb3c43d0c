from __future__ import annotations

from collections.abc import Mapping

from ..models.case_record import Priority
from ..models.source_format import SourceFormat

"""Priority label mapping per source format."""

__all__ = [
    "FLAT_PRIORITY_MAP",
    "GROUPED_PRIORITY_MAP",
    "map_priority",
]

FLAT_PRIORITY_MAP: dict[str, Priority] = {
    "P0-Critical": Priority.HIGH,
    "P1-High": Priority.HIGH,
    "P2-Medium": Priority.NORMAL,
    "P3-Moderate": Priority.NORMAL,
    "P4-Low": Priority.LOW,
}

GROUPED_PRIORITY_MAP: dict[str, Priority] = {
    "Blocker": Priority.HIGH,
    "Critical": Priority.HIGH,
    "Major": Priority.NORMAL,
    "Minor": Priority.NORMAL,
    "Trivial": Priority.LOW,
}

_MAPS = {
    SourceFormat.FLAT_CASE: FLAT_PRIORITY_MAP,
    SourceFormat.GROUPED_STEPS: GROUPED_PRIORITY_MAP,
}


def map_priority(
    label: str | None,
    source_format: SourceFormat,
    overrides: Mapping[str, str] | None = None,
) -> Priority:
    """Translate a source priority label into the destination vocabulary.

    Lookup is an exact string match. ``overrides`` (label -> "high" | "normal" |
    "low", from config) take precedence over the built-in table. Unknown or empty
    labels map to ``Priority.NORMAL``.
    """
    if not label:
        return Priority.NORMAL
    if overrides and label in overrides:
        return Priority(overrides[label])
    return _MAPS[source_format].get(label, Priority.NORMAL)
