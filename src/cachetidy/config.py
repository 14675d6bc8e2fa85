"""User configuration for cachetidy.

Read from ``~/.config/cachetidy/config.json`` (or ``$CACHETIDY_CONFIG``).
Every key is optional; command-line flags take precedence.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cachetidy.errors import ConfigError
from cachetidy.filters import parse_size

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CACHETIDY_CONFIG"


class CacheTidyConfig(BaseModel):
    """Defaults for the scan and clean commands."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    min_size: str = Field("1MB", description="Smallest target to offer, e.g. '500KB'")
    include_apple: bool = Field(False, description="Offer Apple caches")
    include_containers: bool = Field(False, description="Scan sandbox container caches")
    mode: Literal["select", "prompt"] = Field("select", description="Selection mode for clean")
    exclude: list[str] = Field(
        default_factory=list,
        description="Name or path substrings that are never offered",
    )

    @property
    def min_size_bytes(self) -> int:
        return parse_size(self.min_size)


def config_path() -> Path:
    """Location of the config file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(os.path.expanduser(override))
    return Path.home() / ".config" / "cachetidy" / "config.json"


def load_config(path: Optional[Path] = None) -> CacheTidyConfig:
    """
    Load the configuration file.

    A missing file gives the defaults.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values
    """
    path = path or config_path()
    if not path.exists():
        log.debug("No config file at %s, using defaults", path)
        return CacheTidyConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    try:
        config = CacheTidyConfig.model_validate(raw)
        parse_size(config.min_size)
    except (ValidationError, ValueError) as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e

    log.debug("Loaded config from %s", path)
    return config
