from __future__ import annotations

from ..models.conversion_result import ConversionResult

"""SUMMARY line rendering."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_fields(result: ConversionResult) -> str:
    """Render the key=value fields of the SUMMARY line, without the prefix."""
    total = result.total_files
    return (
        f"files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"cases={result.total_cases} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_summary_line(result: ConversionResult) -> str:
    """Render the SUMMARY line of a conversion run.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed} cases={cases}
    elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ConversionResult(
        ...     success_files=1, failed_files=0, total_cases=12,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1/1 success=1 failed=0 cases=12 elapsed_sec=2'
    """
    return f"SUMMARY {render_summary_fields(result)}"
