from __future__ import annotations

import codecs
import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_ENCODING, DEFAULT_OUTPUT_SUFFIX, ConvertConfig

"""Config loader.

Responsibilities:
- Resolve which YAML file to use (CLI flag > CASE_CONVERTER_CONFIG > config/convert.yml)
- Validate it against the bundled JSON schema
- Apply defaults for every omitted key
"""

SCHEMA_PATH = Path(__file__).with_name("convert_schema.json")
DEFAULT_CONFIG_PATH = Path("config/convert.yml")
CONFIG_ENV_VAR = "CASE_CONVERTER_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: the schema file is missing or invalid, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(cli_value: str | None) -> Path | None:
    """Pick the config file to load, or None to run on defaults.

    An explicitly requested file (flag or environment) is returned even when it
    does not exist so that load_config() reports it; the default location is
    only used when present.
    """
    if cli_value:
        return Path(cli_value)
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_config(path: Path | None) -> ConvertConfig:
    if path is None:
        return ConvertConfig()
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    encoding = data.get("encoding", DEFAULT_ENCODING)
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ConfigError(f"unknown encoding: {encoding}") from e

    priority_maps = data.get("priority_maps") or {}
    return ConvertConfig(
        source_format=data.get("source_format", "auto"),
        output_suffix=data.get("output_suffix", DEFAULT_OUTPUT_SUFFIX),
        encoding=encoding,
        priority_maps={k: dict(v or {}) for k, v in priority_maps.items()},
        error_log_dir=data.get("error_log_dir"),
    )
