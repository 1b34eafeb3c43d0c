"""Domain models for the test-case export converter.

This package contains the data classes passed between the reader, the
conversion services and the writer.
"""

from .case_record import CaseRecord, Priority, Section
from .config_models import ConvertConfig
from .conversion_result import ConversionResult, FileStat
from .error_record import ErrorRecord
from .raw_row import RawRow
from .source_format import SourceFormat

__all__ = [
    # Configuration models
    "ConvertConfig",
    # Processing models
    "RawRow",
    "SourceFormat",
    "CaseRecord",
    "Priority",
    "Section",
    # Result models
    "ConversionResult",
    "FileStat",
    "ErrorRecord",
]
