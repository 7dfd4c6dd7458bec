"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from pensieve.core.urls import CANONICAL_BASE_URL


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:           str   = "pensieve"
    debug:              bool  = Field(default=False, description="Log at DEBUG level")
    development:        bool  = Field(default=False, description="Rewrite the canonical schema origin to local_base_url")
    local_base_url:     str   = Field(default="http://localhost:8080", description="Origin substituted in development mode")
    canonical_base_url: str   = Field(default=CANONICAL_BASE_URL, description="Schema origin rewritten in development mode")
    prefers_dark:       bool  = Field(default=False, description="Select the dark theme stylesheet")
    inline_mode:        str   = Field(default="source", pattern="^(source|live)$", description="Link escaping order")
    fetch_timeout:      float = Field(default=30.0, gt=0, description="Seconds before a schema/CSS fetch fails")
    output_dir:         str   = Field(default="dist", description="Directory for rendered HTML pages")

    def schema_location(self) -> dict[str, Any]:
        """Keyword arguments shared by every schema URL computation."""
        return {
            "development": self.development,
            "local_base_url": self.local_base_url,
            "canonical_base_url": self.canonical_base_url,
        }


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then PENSIEVE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"PENSIEVE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
