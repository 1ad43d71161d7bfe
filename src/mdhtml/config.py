"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:          str = "mdhtml"
    max_depth:         int = Field(default=64, ge=1, description="Max block quote / list nesting depth")
    output_dir:        str = Field(default="dist", description="Directory for rendered .html files")
    fragment:          bool = Field(default=False, description="Emit bare HTML fragments instead of full pages")
    css:               Optional[str] = Field(default=None, description="Stylesheet href for full pages")
    strip_frontmatter: bool = Field(default=True, description="Remove a leading YAML frontmatter block")
    log_level:         str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDHTML_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDHTML_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
