from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..errors import ConversionError
from ..logging.error_log import ErrorLogBuffer
from ..models.case_record import CaseRecord
from ..models.config_models import ConvertConfig
from ..models.conversion_result import ConversionResult, FileStat
from ..models.error_record import ErrorRecord
from ..models.source_format import SourceFormat
from ..tabular.reader import detect_format, read_source, read_text
from ..tabular.writer import derive_output_path, write_frame
from .aggregator import aggregate_cases
from .flat_cases import build_flat_cases
from .progress import ProgressTracker
from .projector import project_frame

"""Conversion orchestration.

convert_file() runs the whole pipeline for one export:

    read -> detect format -> locate header / parse -> build cases -> project -> write

convert_all() converts a batch of files, isolating failures per file, and
returns a ConversionResult for the SUMMARY line and the exit code. Nothing is
written for a file whose conversion fails.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting (bad arguments)."""


def resolve_format(requested: str, text: str) -> SourceFormat:
    """Map ``auto`` / ``flat`` / ``grouped`` to a SourceFormat."""
    if requested == "auto":
        return detect_format(text)
    try:
        return SourceFormat(requested)
    except ValueError as e:
        raise ProcessingError(f"unknown source format: {requested}") from e


def build_cases(text: str, source_format: SourceFormat, config: ConvertConfig) -> list[CaseRecord]:
    """Parse export text and build its CaseRecords (no I/O)."""
    rows = read_source(text, source_format)
    overrides = config.priority_overrides(source_format.value)
    if source_format is SourceFormat.GROUPED_STEPS:
        return aggregate_cases(rows, overrides)
    return build_flat_cases(rows, overrides)


def convert_file(path: Path, config: ConvertConfig, requested_format: str | None = None) -> FileStat:
    """Convert one export file and write its ``<stem><suffix><ext>`` sibling.

    Raises:
        ConversionError: any structured conversion failure (no output written)
        ProcessingError: unknown requested format
    """
    start = datetime.now(UTC)
    text = read_text(path, config.encoding)
    source_format = resolve_format(requested_format or config.source_format, text)
    logger.debug(f"{path.name}: source format {source_format.value}")

    cases = build_cases(text, source_format, config)
    logger.info(f"{len(cases)} test cases processed")

    frame = project_frame(cases, source_format)
    output_path = write_frame(frame, derive_output_path(path, config.output_suffix))
    logger.info(f"Conversion complete. Output written to {output_path}")

    return FileStat(
        file_name=path.name,
        status="success",
        cases=len(cases),
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        source_format=source_format.value,
        output_path=output_path,
    )


def convert_all(
    paths: Sequence[Path], config: ConvertConfig, requested_format: str | None = None
) -> ConversionResult:
    """Convert every input file, continuing past per-file failures.

    Raises:
        ProcessingError: unknown requested format (checked before any file)
    """
    start_time = datetime.now(UTC)
    if requested_format and requested_format != "auto":
        resolve_format(requested_format, "")

    error_log = ErrorLogBuffer(Path(config.error_log_dir)) if config.error_log_dir else None
    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_cases = 0

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            file_start = datetime.now(UTC)
            try:
                stat = convert_file(path, config, requested_format)
            except ConversionError as e:
                logger.error(f"{e.error_type} {path.name}: {e.message}")
                if error_log is not None:
                    error_log.append(ErrorRecord.from_error(path.name, e))
                stat = FileStat(
                    file_name=path.name,
                    status="failed",
                    cases=0,
                    elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                    error_type=e.error_type,
                )
                failed_count += 1
            else:
                success_count += 1
                total_cases += stat.cases
            file_stats.append(stat)
            progress.set_postfix(success=success_count, failed=failed_count, cases=total_cases)
            progress.finish_file()

    if error_log is not None:
        try:
            written = error_log.flush()
        except OSError as e:
            logger.warning(f"failed to write error log: {e}")
        else:
            if written is not None:
                logger.info(f"error details written to {written}")

    end_time = datetime.now(UTC)
    return ConversionResult(
        success_files=success_count,
        failed_files=failed_count,
        total_cases=total_cases,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
