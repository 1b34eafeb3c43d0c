from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Conversion result models.

FileStat describes one converted (or failed) input file; ConversionResult
aggregates a whole run for the SUMMARY line and the exit code.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file conversion statistics."""
    file_name: str
    status: str  # success/failed
    cases: int  # 出力したテストケース数
    elapsed_seconds: float
    source_format: str | None = None
    output_path: Path | None = None
    error_type: str | None = None


@dataclass(frozen=True)
class ConversionResult:
    """Aggregated results of a conversion run."""
    success_files: int
    failed_files: int
    total_cases: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
