from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclass for the converter.

The loader in case_converter/config/loader.py builds this from YAML; callers
that run without a config file use ConvertConfig() defaults.
"""

DEFAULT_OUTPUT_SUFFIX = "_Testomatio"
DEFAULT_ENCODING = "utf-8-sig"  # BOM 付き UTF-8 も受け付ける


@dataclass(frozen=True)
class ConvertConfig:
    """Root configuration object for a conversion run."""
    source_format: str = "auto"  # auto | flat | grouped
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    encoding: str = DEFAULT_ENCODING
    # "flat"/"grouped" -> {source label -> high|normal|low}
    priority_maps: dict[str, dict[str, str]] = field(default_factory=dict)
    error_log_dir: str | None = None  # None なら JSON Lines エラーログを出力しない

    def priority_overrides(self, source_format_value: str) -> dict[str, str]:
        return dict(self.priority_maps.get(source_format_value) or {})
