"""
Configuration loader — reads pipegen.yml into GeneratorSettings.

The file is optional. When none is found the defaults apply; when one
is found it must be a valid YAML mapping matching the settings schema.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from pipegen.core.models.settings import GeneratorSettings

logger = logging.getLogger(__name__)

CONFIG_FILE = "pipegen.yml"


class ConfigError(Exception):
    """Raised when pipegen configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for pipegen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to pipegen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_settings(path: Path | None = None, *, start_dir: Path | None = None) -> GeneratorSettings:
    """Load generator settings.

    Args:
        path: Explicit path to pipegen.yml. If None, searches upward
            from ``start_dir``.
        start_dir: Where the upward search begins (default: cwd).

    Returns:
        Validated settings, defaults when no file exists.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(start_dir)
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return GeneratorSettings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return GeneratorSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = GeneratorSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid pipegen configuration: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
