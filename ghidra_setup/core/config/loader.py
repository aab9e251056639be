"""
Configuration loader — reads ghidra-setup.yml into InstallSettings.

The file is optional. Lookup order:
    --config path  >  GHIDRA_SETUP_CONFIG env var  >  ghidra-setup.yml
    found walking up from the cwd  >  built-in defaults
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from ghidra_setup.core.models.settings import InstallSettings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "ghidra-setup.yml"
CONFIG_ENV_VAR = "GHIDRA_SETUP_CONFIG"


class ConfigError(Exception):
    """Raised when the install configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for ghidra-setup.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to ghidra-setup.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def resolve_config_path(path: Path | None = None) -> Path | None:
    """Apply the lookup order; None means "use defaults"."""
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return find_config_file()


def load_settings(path: Path | None = None) -> InstallSettings:
    """Load and validate install settings.

    Args:
        path: Explicit path to a config file. If None, the env var and
            an upward search are tried, then defaults are used.

    Returns:
        Validated InstallSettings.

    Raises:
        ConfigError: If an explicitly named file is missing, or any
            file found is unreadable or invalid.
    """
    path = resolve_config_path(path)

    if path is None:
        logger.debug("No %s found; using defaults", CONFIG_FILE)
        return InstallSettings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading install config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "ghidra_setup" key or be flat
    settings_data = data.get("ghidra_setup", data)
    if settings_data is None:
        settings_data = {}

    try:
        settings = InstallSettings.model_validate(settings_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid install configuration in {path}: {e}") from e

    logger.info("Loaded install config from %s", path)
    return settings
