from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime

from ..errors import ConversionError

"""ErrorRecord model for structured failure reporting.

Supports row=-1 as a sentinel for file-level errors where no specific row is
involved (header not found, missing columns, ...).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: input filename being converted
        row: data row number (1-based), -1 when not row specific
        error_type: error classification in UPPER_SNAKE_CASE
        message: human readable description
        columns: offending column names, if any
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str
    columns: list[str] = field(default_factory=list)

    @staticmethod
    def create(
        file: str, row: int, error_type: str, message: str, columns: list[str] | None = None
    ) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
            columns=list(columns or []),
        )

    @staticmethod
    def from_error(file: str, error: ConversionError) -> ErrorRecord:
        return ErrorRecord.create(
            file=file,
            row=error.row,
            error_type=error.error_type,
            message=error.message,
            columns=error.columns,
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line (fixed key set)."""
        return json.dumps(asdict(self), ensure_ascii=False)
