from __future__ import annotations

from enum import Enum

"""SourceFormat enum and the closed column vocabularies of each export schema."""

__all__ = [
    "SourceFormat",
    "FLAT_REQUIRED_COLUMNS",
    "FLAT_OPTIONAL_COLUMNS",
    "GROUPED_REQUIRED_COLUMNS",
]

FLAT_REQUIRED_COLUMNS = ("Case ID", "Case", "Folder")
FLAT_OPTIONAL_COLUMNS = (
    "Priority",
    "Tags",
    "Created by",
    "Pre-condition",
    "Description",
    "Expected",
    "Test Type",
)

GROUPED_REQUIRED_COLUMNS = (
    "Entity Key",
    "Test Case Summary",
    "Test Case Folder Path",
    "Test Case Priority",
    "Label(s)",
    "Created By",
    "Step Description",
    "Step Expected Outcome(Plain Text)",
)


class SourceFormat(Enum):
    """Supported source export schemas.

    - FLAT_CASE: one row fully describes one test case
    - GROUPED_STEPS: a case row followed by its step rows
    """
    FLAT_CASE = "flat"
    GROUPED_STEPS = "grouped"

    @property
    def required_columns(self) -> tuple[str, ...]:
        if self is SourceFormat.FLAT_CASE:
            return FLAT_REQUIRED_COLUMNS
        return GROUPED_REQUIRED_COLUMNS

    @property
    def optional_columns(self) -> tuple[str, ...]:
        if self is SourceFormat.FLAT_CASE:
            return FLAT_OPTIONAL_COLUMNS
        return ()

    @property
    def known_columns(self) -> frozenset[str]:
        return frozenset(self.required_columns) | frozenset(self.optional_columns)
