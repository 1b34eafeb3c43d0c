from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from ..models.case_record import CaseRecord
from ..models.source_format import SourceFormat

"""Projection of CaseRecords onto the destination import columns.

The destination schema differs by source format: flat exports produce 10
columns with a fixed ``manual`` status, grouped exports produce 12 columns with
empty Examples / Url / Matched placeholders.
"""

FLAT_OUTPUT_COLUMNS = [
    "ID", "Title", "Status", "Folder", "Emoji", "Priority",
    "Tags", "Owner", "Description", "Labels",
]

GROUPED_OUTPUT_COLUMNS = [
    "ID", "Title", "Folder", "Emoji", "Priority", "Tags",
    "Owner", "Description", "Examples", "Labels", "Url", "Matched",
]

DEFAULT_STATUS = "manual"  # 自動化ステータスは無視して manual 固定


def output_columns(source_format: SourceFormat) -> list[str]:
    if source_format is SourceFormat.FLAT_CASE:
        return list(FLAT_OUTPUT_COLUMNS)
    return list(GROUPED_OUTPUT_COLUMNS)


def project(record: CaseRecord) -> dict[str, str]:
    """Map one record onto its destination columns, in destination order."""
    values = {
        "ID": record.id,
        "Title": record.title,
        "Status": DEFAULT_STATUS,
        "Folder": record.folder,
        "Emoji": "",
        "Priority": record.priority.value,
        "Tags": record.tags,
        "Owner": record.owner,
        "Description": record.description,
        "Examples": "",
        "Labels": record.labels,
        "Url": "",
        "Matched": "",
    }
    return {column: values[column] for column in output_columns(record.source_format)}


def project_frame(records: Iterable[CaseRecord], source_format: SourceFormat) -> pd.DataFrame:
    """Project records into a DataFrame with the destination column order."""
    rows = [project(record) for record in records]
    return pd.DataFrame(rows, columns=output_columns(source_format), dtype=str)
