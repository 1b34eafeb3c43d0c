from __future__ import annotations

from collections.abc import Iterable

"""Structured conversion errors.

Every failure raised by the conversion core derives from ConversionError so the
orchestrator can report it as a single diagnostic line plus an ErrorRecord.
None of these are retried: the input is static.
"""

__all__ = [
    "ConversionError",
    "HeaderNotFoundError",
    "MissingColumnsError",
    "NoRecordsError",
    "OrphanStepRowError",
    "MalformedFieldError",
    "UnreadableInputError",
    "OutputWriteError",
]


class ConversionError(Exception):
    """Base class for failures that abort the conversion of one input file."""

    error_type = "CONVERSION_ERROR"

    def __init__(self, message: str, *, columns: Iterable[str] = (), row: int = -1) -> None:
        super().__init__(message)
        self.message = message
        self.columns = list(columns)
        self.row = row  # 不明な場合 -1


class HeaderNotFoundError(ConversionError):
    """No line of the input contains every required column name."""

    error_type = "HEADER_NOT_FOUND"

    def __init__(self, required: Iterable[str], first_line: str) -> None:
        required = list(required)
        super().__init__(
            f"could not find header row with required columns: {', '.join(required)}"
            f" (first line: {first_line!r})",
            columns=required,
        )
        self.first_line = first_line


class MissingColumnsError(ConversionError):
    error_type = "MISSING_COLUMNS"

    def __init__(self, missing: Iterable[str]) -> None:
        missing = sorted(missing)
        super().__init__(f"missing required columns: {', '.join(missing)}", columns=missing)


class NoRecordsError(ConversionError):
    error_type = "NO_RECORDS"

    def __init__(self, message: str = "no data rows found") -> None:
        super().__init__(message)


class OrphanStepRowError(ConversionError):
    """A step or precondition row appeared before any case was opened."""

    error_type = "ORPHAN_STEP_ROW"

    def __init__(self, row: int) -> None:
        super().__init__(f"step row {row} appears before any test case summary row", row=row)


class MalformedFieldError(ConversionError):
    error_type = "MALFORMED_FIELD"

    def __init__(self, column: str, row: int) -> None:
        super().__init__(f"row {row}: required field '{column}' is empty", columns=[column], row=row)


class UnreadableInputError(ConversionError):
    error_type = "UNREADABLE_INPUT"


class OutputWriteError(ConversionError):
    error_type = "OUTPUT_WRITE_FAILED"
