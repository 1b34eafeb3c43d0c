from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..errors import MalformedFieldError
from ..models.case_record import CaseRecord
from ..models.raw_row import RawRow
from ..models.source_format import SourceFormat
from .description import compose_sections
from .priority import map_priority

"""Case building for flat exports: every data row is one complete test case."""

logger = logging.getLogger(__name__)

ID_WIDTH = 8


def format_case_id(raw_id: str, row_number: int) -> str:
    """Left-pad the source case identifier with zeros to 8 characters.

    Identifiers already 8 characters or longer are returned unchanged.
    """
    case_id = raw_id.strip()
    if not case_id:
        raise MalformedFieldError("Case ID", row_number)
    return case_id.rjust(ID_WIDTH, "0")


def build_flat_case(row: RawRow, priority_overrides: Mapping[str, str] | None = None) -> CaseRecord:
    return CaseRecord(
        id=format_case_id(row.get("Case ID"), row.row_number),
        title=row.get("Case"),
        folder=row.get("Folder"),
        priority=map_priority(row.get("Priority"), SourceFormat.FLAT_CASE, priority_overrides),
        tags=row.get("Tags"),
        owner=row.get("Created by"),
        sections=compose_sections(row),
        labels=row.get("Test Type"),  # Test Type を Labels として使用
        source_format=SourceFormat.FLAT_CASE,
        row_number=row.row_number,
    )


def build_flat_cases(
    rows: Iterable[RawRow], priority_overrides: Mapping[str, str] | None = None
) -> list[CaseRecord]:
    cases = [build_flat_case(row, priority_overrides) for row in rows]
    logger.debug(f"built {len(cases)} flat cases")
    return cases
