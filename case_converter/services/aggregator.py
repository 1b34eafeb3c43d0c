from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from functools import reduce

from ..errors import MalformedFieldError, OrphanStepRowError
from ..models.case_record import CaseRecord, Section
from ..models.raw_row import RawRow
from ..models.source_format import SourceFormat
from .priority import map_priority

"""Case aggregation for grouped-by-steps exports.

In these exports a test case is a metadata row (non-empty "Test Case Summary")
followed by any number of step rows. There is no explicit case key on the step
rows; a case ends where the next summary row starts or at end of input.

Aggregation is a fold over the rows with an explicit AggregatorState value:

    state = reduce(step, rows, AggregatorState())
    cases = finish(state)

``step`` never mutates its input state.
"""

__all__ = [
    "CaseDraft",
    "AggregatorState",
    "step",
    "finish",
    "aggregate_cases",
]

logger = logging.getLogger(__name__)

SUMMARY = "Test Case Summary"
ENTITY_KEY = "Entity Key"
FOLDER = "Test Case Folder Path"
PRIORITY = "Test Case Priority"
LABELS = "Label(s)"
CREATED_BY = "Created By"
STEP_DESCRIPTION = "Step Description"
STEP_EXPECTED = "Step Expected Outcome(Plain Text)"

PRECONDITION_MARKER = "Preconditions:"
ID_PREFIX = "TS"


@dataclass(frozen=True)
class CaseDraft:
    """A case whose step rows are still being collected."""
    id: str
    title: str
    folder: str
    priority_label: str
    tags: str
    owner: str
    row_number: int
    sections: tuple[Section, ...] = ()

    def add_precondition(self, text: str) -> CaseDraft:
        if not text:
            return self
        return replace(self, sections=self.sections + (Section("Precondition", (text,)),))

    def add_step(self, description: str, expected: str) -> CaseDraft:
        sections = self.sections
        if not any(s.title == "Steps" for s in sections):
            sections = sections + (Section("Steps"),)
        lines = [f"* {description}"]
        if expected:
            lines.append(f"  *Expected:* {expected}")
        # ステップ行はバッファ末尾 (最後のセクション) に追記
        sections = sections[:-1] + (sections[-1].append(*lines),)
        return replace(self, sections=sections)

    def finalize(self, priority_overrides: Mapping[str, str] | None = None) -> CaseRecord:
        return CaseRecord(
            id=self.id,
            title=self.title,
            folder=self.folder,
            priority=map_priority(self.priority_label, SourceFormat.GROUPED_STEPS, priority_overrides),
            tags=self.tags,
            owner=self.owner,
            sections=tuple(s for s in self.sections if s.lines),
            labels="",
            source_format=SourceFormat.GROUPED_STEPS,
            row_number=self.row_number,
        )


@dataclass(frozen=True)
class AggregatorState:
    finished: tuple[CaseDraft, ...] = ()
    current: CaseDraft | None = None


def _normalize_tags(raw: str) -> str:
    return ",".join(tag.strip() for tag in raw.split(",") if tag.strip())


def _owner_name(raw: str) -> str:
    # "Jane Doe [jdoe@example.com]" -> "Jane Doe"
    return raw.split("[", 1)[0].strip()


def open_case(row: RawRow) -> CaseDraft:
    entity_key = row.get(ENTITY_KEY).strip()
    if not entity_key:
        raise MalformedFieldError(ENTITY_KEY, row.row_number)
    return CaseDraft(
        id=ID_PREFIX + entity_key,
        title=row.get(SUMMARY),
        folder=row.get(FOLDER),
        priority_label=row.get(PRIORITY),
        tags=_normalize_tags(row.get(LABELS)),
        owner=_owner_name(row.get(CREATED_BY)),
        row_number=row.row_number,
    )


def step(state: AggregatorState, row: RawRow) -> AggregatorState:
    """Fold one row into the aggregation state."""
    finished, current = state.finished, state.current
    if row.get(SUMMARY).strip():
        if current is not None:
            finished = finished + (current,)
        current = open_case(row)

    description = row.get(STEP_DESCRIPTION)
    expected = row.get(STEP_EXPECTED).strip()
    if PRECONDITION_MARKER in description:
        if current is None:
            raise OrphanStepRowError(row.row_number)
        text = description.split(PRECONDITION_MARKER, 1)[1].strip()
        current = current.add_precondition(text)
    elif description.strip():
        if current is None:
            raise OrphanStepRowError(row.row_number)
        current = current.add_step(description.strip(), expected)

    return AggregatorState(finished=finished, current=current)


def finish(
    state: AggregatorState, priority_overrides: Mapping[str, str] | None = None
) -> list[CaseRecord]:
    """Flush the open case and finalize every collected draft."""
    drafts = state.finished
    if state.current is not None:
        drafts = drafts + (state.current,)
    return [draft.finalize(priority_overrides) for draft in drafts]


def aggregate_cases(
    rows: Iterable[RawRow], priority_overrides: Mapping[str, str] | None = None
) -> list[CaseRecord]:
    """Group step rows into test cases.

    Returns one CaseRecord per row with a non-empty "Test Case Summary", in
    input order.

    Raises:
        OrphanStepRowError: a step row precedes the first summary row
        MalformedFieldError: a summary row has an empty "Entity Key"
    """
    cases = finish(reduce(step, rows, AggregatorState()), priority_overrides)
    logger.debug(f"aggregated {len(cases)} grouped cases")
    return cases
