from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ImportConfig

"""Config loader.

Responsibilities:
- Load the YAML config (config/import.yml by default)
- Validate it against the packaged JSON schema (unknown keys rejected)
- Apply defaults for every key that is left out
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or the data violates it
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


def load_config(path: Path | None = None, *, required: bool = False) -> ImportConfig:
    """Load an ImportConfig from YAML.

    Args:
        path: Config file (None = config/import.yml)
        required: When False a missing file yields the built-in defaults

    Raises:
        ConfigError: missing file (when required), invalid YAML or schema violation
    """
    path = path or DEFAULT_CONFIG_PATH
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return ImportConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = ImportConfig()
    return ImportConfig(
        input_path=data.get("input_path", defaults.input_path),
        output_path=data.get("output_path", defaults.output_path),
        sheet=data.get("sheet", defaults.sheet),
        header_row=data.get("header_row", defaults.header_row),
        dayfirst=data.get("dayfirst", defaults.dayfirst),
        id_prefix=data.get("id_prefix", defaults.id_prefix),
        default_stage=data.get("default_stage", defaults.default_stage),
        field_aliases={k: list(v) for k, v in (data.get("field_aliases") or {}).items()},
        tonnage_labels=list(data.get("tonnage_labels") or []),
        issue_log_dir=data.get("issue_log_dir", defaults.issue_log_dir),
    )
