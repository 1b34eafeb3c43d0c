from __future__ import annotations

import os
from pathlib import Path

import pandas as pd

from ..errors import OutputWriteError

"""CSV output writer.

The frame is written to a temporary sibling file and moved into place only once
it is complete, so a failed run never leaves a partial output file behind.
"""


def derive_output_path(input_path: Path, suffix: str = "_Testomatio") -> Path:
    """``cases.csv`` -> ``cases_Testomatio.csv`` in the same directory."""
    return input_path.with_name(f"{input_path.stem}{suffix}{input_path.suffix}")


def write_frame(df: pd.DataFrame, output_path: Path) -> Path:
    tmp_path = output_path.with_name(output_path.name + ".tmp")
    try:
        df.to_csv(tmp_path, index=False, encoding="utf-8", lineterminator="\n")
        os.replace(tmp_path, output_path)
    except OSError as e:
        raise OutputWriteError(f"cannot write {output_path}: {e.strerror or e}") from e
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    return output_path
