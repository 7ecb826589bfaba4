"""
Settings loader — reads an optional vcredist.yml into a Settings model.

The tool runs fine with no file at all; the file and the environment
only override defaults.  Precedence, highest first:

    CLI option  >  VCR_* env var  >  vcredist.yml  >  built-in default
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "vcredist.yml"

# Env var → settings field
_ENV_OVERRIDES = {
    "VCR_WINGET": "winget",
}


class ConfigError(Exception):
    """Raised when the settings file is unreadable or invalid."""


class Settings(BaseModel):
    """Tunables for a vcredist session."""

    model_config = ConfigDict(extra="forbid")

    winget: str = "winget"                          # executable name or path
    log_max_chars: int = Field(default=150_000, ge=2)
    output_max_lines: int = Field(default=200, ge=1)
    summary_max_lines: int = Field(default=6, ge=1)
    stream_output: bool = False                     # echo raw winget output


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for vcredist.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to vcredist.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(
    path: Path | None = None,
    *,
    search: bool = True,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to a settings file.  Must exist if given.
        search: When no path is given, look for vcredist.yml upward from cwd.
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    data: dict = {}

    if path is not None and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    if path is None and search:
        path = find_settings_file()

    if path is not None:
        logger.debug("Loading settings from %s", path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Expected a YAML mapping in {path}, got {type(loaded).__name__}")
        data.update(loaded)

    env = os.environ if environ is None else environ
    for var, field_name in _ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            data[field_name] = value

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    logger.info("Using winget executable '%s'", settings.winget)
    return settings
