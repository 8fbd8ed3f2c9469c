"""
owo: Central Config Loader (Pydantic Settings)

Transport defaults (API root, timeout, CA bundle) and logging config are read
here from the environment (prefix ``OWO_``) or an optional ``.env`` file.

The service key is never read from settings; callers pass it explicitly.

Usage:

from owo.config import settings
from owo import OwoClient

client = OwoClient(key)
client.shorten_url("https://example.com")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

from owo.constants import DEFAULT_API_ROOT


class Settings(BaseSettings):
    """
    Central configuration using Pydantic Settings (v2).
    Overrides order:
    1. Environment variables (OWO_*)
    2. .env file (optional)
    3. Defaults below
    """

    # -----------------------------
    # Service
    # -----------------------------
    API_ROOT: str = Field(DEFAULT_API_ROOT, description="Base URL of the whats-this API")
    TIMEOUT_SECONDS: float = 30.0

    # -----------------------------
    # TLS (async bridge)
    # -----------------------------
    CA_BUNDLE: Optional[str] = Field(None, description="CA bundle path; certifi when unset")

    # -----------------------------
    # Logging
    # -----------------------------
    LOGGING_YAML: Optional[str] = None
    LOG_DIR: Optional[str] = None
    LOG_LEVEL: str = "WARNING"

    class Config:
        env_prefix = "OWO_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def load_yaml(self, path: str) -> Dict[str, Any]:
        """Load a YAML file (logging config)."""
        if not Path(path).exists():
            raise FileNotFoundError(f"YAML not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)


# Create global settings instance
settings = Settings()

__all__ = ["Settings", "settings"]
