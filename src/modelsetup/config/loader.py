"""Configuration file discovery, loading and saving."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"
CONFIG_ENV_VAR = "MODELSETUP_CONFIG"


class ConfigError(Exception):
    """Raised when a configuration file cannot be parsed."""

    pass


@dataclass
class ConfigPaths:
    """Discovered configuration paths."""

    local_dir: Optional[Path] = None  # .modelsetup/ in current directory
    user_dir: Optional[Path] = None  # ~/.config/modelsetup/

    config_file: Optional[Path] = None

    def __post_init__(self):
        """Resolve the config file, local before user."""
        if self.config_file is None:
            self.config_file = self._find_file(CONFIG_FILENAME)

    def _find_file(self, filename: str) -> Optional[Path]:
        for directory in (self.local_dir, self.user_dir):
            if directory:
                candidate = directory / filename
                if candidate.exists():
                    return candidate
        return None


def get_config_paths() -> ConfigPaths:
    """
    Discover configuration paths.

    Priority order (highest to lowest):
    1. $MODELSETUP_CONFIG
    2. .modelsetup/ in current directory
    3. ~/.config/modelsetup/
    """
    local_dir = Path.cwd() / ".modelsetup"
    local_dir = local_dir if local_dir.exists() else None

    user_dir = Path.home() / ".config" / "modelsetup"
    user_dir = user_dir if user_dir.exists() else None

    override = os.getenv(CONFIG_ENV_VAR, "").strip()
    config_file = Path(override).expanduser() if override else None

    return ConfigPaths(local_dir=local_dir, user_dir=user_dir, config_file=config_file)


def default_config_file(location: str = "local", target_dir: Optional[Path] = None) -> Path:
    """Resolve config.yaml path for local/global location."""
    if location == "global":
        return Path.home() / ".config" / "modelsetup" / CONFIG_FILENAME

    base_dir = target_dir.resolve() if target_dir is not None else Path.cwd()
    return base_dir / ".modelsetup" / CONFIG_FILENAME


def load_config(file_path: Path) -> dict[str, Any]:
    """
    Load a configuration file as a dictionary.

    Missing or empty files yield an empty dict. A document that is not a
    mapping is ignored with a warning.

    Raises:
        ConfigError: If the file is not valid YAML or cannot be read
    """
    if not file_path.exists():
        return {}

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read {file_path}: {e}") from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        logger.warning(f"Ignoring {file_path}: expected a mapping, got {type(loaded).__name__}")
        return {}
    return loaded


def save_config(config: dict[str, Any], file_path: Path) -> None:
    """Write configuration to file_path, creating parent directories."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    logger.debug(f"Saved configuration to {file_path}")
