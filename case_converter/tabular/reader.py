from __future__ import annotations

import csv
import io
import logging
import re
import sys
import warnings
from collections.abc import Iterable, Sequence
from pathlib import Path

import pandas as pd

from ..errors import (
    HeaderNotFoundError,
    MissingColumnsError,
    NoRecordsError,
    UnreadableInputError,
)
from ..models.raw_row import RawRow
from ..models.source_format import SourceFormat

"""CSV export reader.

- Flat exports may carry preamble / noise lines above the real header row;
  locate_header() finds it with a coarse comma-or-semicolon split.
- parse_records() reads the retained text with pandas (python engine) in a
  relaxed mode: stray quotes and over-long rows never abort parsing.
- Required columns are validated unconditionally before any row is returned.
"""

__all__ = [
    "read_text",
    "detect_format",
    "locate_header",
    "parse_records",
    "read_source",
]

logger = logging.getLogger(__name__)

_HEADER_SPLIT_RE = re.compile(r"[,;]")
_EDGE_QUOTE_RE = re.compile(r"^[\"']|[\"']$")

_GROUPED_MARKERS = ("Test Case Summary", "Step Description")


def read_text(path: Path, encoding: str = "utf-8-sig") -> str:
    """Read the whole input file."""
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise UnreadableInputError(f"cannot decode {path.name} as {encoding}: {e.reason}") from e
    except LookupError as e:
        raise UnreadableInputError(f"unknown encoding: {encoding}") from e
    except OSError as e:
        raise UnreadableInputError(f"cannot read {path}: {e.strerror or e}") from e


def detect_format(text: str) -> SourceFormat:
    """Guess the export schema from the first non-blank line."""
    for line in text.splitlines():
        if not line.strip():
            continue
        if all(marker in line for marker in _GROUPED_MARKERS):
            return SourceFormat.GROUPED_STEPS
        return SourceFormat.FLAT_CASE
    return SourceFormat.FLAT_CASE


def _header_fields(line: str) -> set[str]:
    fields = set()
    for col in _HEADER_SPLIT_RE.split(line):
        # 前後の引用符を 1 つだけ外す (クォート内の区切り文字は考慮しない)
        fields.add(_EDGE_QUOTE_RE.sub("", col.strip()).strip())
    return fields


def locate_header(lines: Sequence[str], required: Iterable[str]) -> int:
    """Return the 0-based index of the first line containing every required column.

    Raises:
        HeaderNotFoundError: no such line exists
    """
    required = list(required)
    wanted = set(required)
    for index, line in enumerate(lines):
        if wanted <= _header_fields(line):
            return index
    first_line = lines[0] if lines else ""
    raise HeaderNotFoundError(required, first_line)


def _keep_bad_line(bad_line: list[str]) -> list[str]:
    # 列数超過行も捨てずに残す (余剰フィールドは pandas 側で切り捨て)
    return bad_line


def _raise_field_size_limit() -> None:
    # base64 画像などの巨大セルで行が黙って落ちないよう csv の上限を外す
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            limit //= 10


def _read_frame(text: str) -> pd.DataFrame:
    _raise_field_size_limit()
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(text),
                dtype=str,
                keep_default_na=False,
                na_filter=False,
                skip_blank_lines=True,
                engine="python",
                index_col=False,
                on_bad_lines=_keep_bad_line,
            )
    except pd.errors.EmptyDataError as e:
        raise NoRecordsError("input contains no header or data rows") from e
    except pd.errors.ParserError as e:
        raise UnreadableInputError(f"cannot parse input: {e}") from e
    for w in caught:
        if issubclass(w.category, pd.errors.ParserWarning):
            logger.warning(f"malformed line: {w.message}")
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)
    return df.fillna("")


def _check_columns(columns: list[str], source_format: SourceFormat) -> None:
    present = set(columns)
    missing = set(source_format.required_columns) - present
    if missing:
        raise MissingColumnsError(missing)
    absent_optional = [c for c in source_format.optional_columns if c not in present]
    if absent_optional:
        logger.warning(f"optional columns not found, left empty: {', '.join(absent_optional)}")
    unknown = sorted(present - source_format.known_columns)
    if unknown:
        logger.debug(f"ignoring unknown columns: {unknown}")


def parse_records(text: str, source_format: SourceFormat) -> list[RawRow]:
    """Parse delimited text whose first line is the header into RawRows.

    Steps:
    1. Read every cell as a string (no NA conversion), skipping blank lines
    2. Trim header names
    3. Validate the required column set of ``source_format``
    4. Drop rows whose cells are all blank

    Raises:
        MissingColumnsError: header lacks required columns
        NoRecordsError: no data rows remain
        UnreadableInputError: the text cannot be tokenized
    """
    df = _read_frame(text)
    columns = [str(c).strip() for c in df.columns]
    _check_columns(columns, source_format)

    rows: list[RawRow] = []
    for raw in df.itertuples(index=False, name=None):
        values = {col: str(val) for col, val in zip(columns, raw, strict=False)}
        if not any(v.strip() for v in values.values()):
            continue
        rows.append(RawRow(row_number=len(rows) + 1, values=values))

    if not rows:
        raise NoRecordsError()
    return rows


def read_source(text: str, source_format: SourceFormat) -> list[RawRow]:
    """Locate the header (flat exports only) and parse the records below it."""
    if source_format is SourceFormat.FLAT_CASE:
        lines = text.split("\n")
        index = locate_header(lines, source_format.required_columns)
        if index:
            logger.debug(f"header row located at line {index + 1}, skipped {index} preamble lines")
        text = "\n".join(lines[index:])
    return parse_records(text, source_format)
