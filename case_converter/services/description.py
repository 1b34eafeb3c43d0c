from __future__ import annotations

from ..models.case_record import Section
from ..models.raw_row import RawRow
from .markup import normalize_markup

"""Description composition for flat (one row per case) exports."""

# (section title, source column) - 出力順は固定
DESCRIPTION_FIELDS: tuple[tuple[str, str], ...] = (
    ("Precondition", "Pre-condition"),
    ("Description", "Description"),
    ("Expected Results", "Expected"),
)


def compose_sections(row: RawRow) -> tuple[Section, ...]:
    """Build the description sections of a flat export row.

    A section is emitted only when its source column holds non-blank text, and
    the order is always Precondition, Description, Expected Results.
    """
    sections: list[Section] = []
    for title, column in DESCRIPTION_FIELDS:
        raw = row.get(column)
        if not raw.strip():
            continue
        body = normalize_markup(raw)
        if body:
            sections.append(Section(title, (body,)))
    return tuple(sections)
