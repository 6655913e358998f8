"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDSYNC_"


class Settings(BaseModel):
    app_name:           str   = "mdsync"
    db_url:             str   = "sqlite:///mdsync.db"
    parser_config:      str   = Field(default="gfm-like",    description="MarkdownIt parser preset name")
    font_family:        str   = Field(default="Inter",       description="Default text family; also the font fallback family")
    code_font_family:   str   = Field(default="Roboto Mono", description="Monospace family for code spans and blocks")
    base_size_pt:       float = Field(default=16.0, gt=0,    description="Body point size; heading sizes scale from it")
    list_inline_styles: bool  = Field(default=True,          description="Resolve bold/italic/code inside list items")
    create_missing:     bool  = Field(default=False,         description="Create text elements for unmatched files")
    log_level:          str   = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def _file_values(path: Path) -> dict[str, Any]:
    """Settings stored in the project config file; a missing file contributes nothing."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {path.name}: expected a mapping of settings, got {type(data).__name__}")
    return data


def _env_values() -> dict[str, str]:
    """Non-empty MDSYNC_<FIELD> variables, keyed by field name."""
    found = {name: os.getenv(f"{ENV_PREFIX}{name.upper()}") for name in Settings.model_fields}
    return {name: val for name, val in found.items() if val}


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Resolve the import settings.

    Later layers win: config.yaml in the working directory, then the
    environment, then command-line values that were actually given.
    """
    data = _file_values(Path(CONFIG_FILE))
    data.update(_env_values())
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return Settings(**data)
