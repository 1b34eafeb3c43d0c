from __future__ import annotations

from dataclasses import dataclass

"""RawRow model.

RawRow represents a single parsed data row of the source export, keyed by the
trimmed header names. Values are always strings (empty when the cell is blank).
"""

__all__ = [
    "RawRow",
]


@dataclass(frozen=True)
class RawRow:
    """One data row of the source file after header trimming.

    The row_number is the 1-based ordinal of the data row (header excluded,
    blank rows not counted) and is only used for diagnostics.
    """
    row_number: int
    values: dict[str, str]

    def get(self, column: str) -> str:
        """Return the cell for ``column``; absent columns read as empty."""
        return self.values.get(column, "")

    def __getitem__(self, column: str) -> str:
        return self.get(column)
