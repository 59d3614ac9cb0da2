"""
Configuration file support for Stable Manager.

Loads settings from ``~/.config/stable-manager/config.yaml`` (or
``$XDG_CONFIG_HOME/stable-manager/config.yaml``) and exposes them as typed
dataclasses. :class:`Settings` bundles the values every command needs and
is computed once per process.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from stable_manager.paths import DEFAULT_ROOT_MARKERS, find_project_root
from stable_manager.scanner import DEFAULT_EXCLUDE_DIRS

logger = logging.getLogger("stable_manager.config")

APP_DIR_NAME = "stable-manager"
CONFIG_FILE_NAME = "config.yaml"


def default_config_path() -> Path:
    """Return where the user-level config file lives.

    ``$XDG_CONFIG_HOME`` wins when it is set to a non-empty value; the
    conventional ``~/.config`` is used otherwise.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / APP_DIR_NAME / CONFIG_FILE_NAME


def _string_list(data: Dict[str, Any], key: str) -> Optional[List[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        logger.warning("Ignoring %s: expected a list, got %r", key, value)
        return None
    items = []
    for item in value:
        if not isinstance(item, str) or not item:
            logger.warning("Skipping invalid %s entry: %s", key, item)
            continue
        items.append(item)
    return items


@dataclass
class StableManagerConfig:
    """Top-level configuration loaded from the YAML file."""

    exclude_dirs: List[str] = field(
        default_factory=lambda: sorted(DEFAULT_EXCLUDE_DIRS)
    )
    root_markers: List[str] = field(
        default_factory=lambda: list(DEFAULT_ROOT_MARKERS)
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StableManagerConfig":
        """Construct a ``StableManagerConfig`` from a parsed YAML dictionary.

        Keys that are absent or invalid keep their defaults.
        """
        if not isinstance(data, dict):
            return cls()

        config = cls()
        exclude_dirs = _string_list(data, "exclude_dirs")
        if exclude_dirs is not None:
            config.exclude_dirs = exclude_dirs
        root_markers = _string_list(data, "root_markers")
        if root_markers is not None:
            config.root_markers = root_markers
        return config

    @classmethod
    def from_file(cls, path: Path) -> "StableManagerConfig":
        """Parse the YAML file at *path*.

        An unreadable or malformed file is logged and the defaults are
        returned.
        """
        try:
            data = yaml.safe_load(path.read_text())
        except OSError as e:
            logger.error("Cannot read config file %s: %s", path, e)
            return cls()
        except yaml.YAMLError as e:
            logger.error("Invalid YAML in config file %s: %s", path, e)
            return cls()
        return cls.from_dict(data or {})

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "StableManagerConfig":
        """Load config from *config_path* or the default location.

        Returns an empty config if the file does not exist.
        """
        path = config_path or default_config_path()
        if not path.exists():
            logger.debug("No config file at %s, using defaults", path)
            return cls()
        return cls.from_file(path)


@dataclass
class Settings:
    """Values resolved once at startup and handed to every command."""

    root: Path
    config: StableManagerConfig
    version: str

    @classmethod
    def resolve(
        cls,
        version: str,
        config_path: Optional[Path] = None,
        cwd: Optional[Path] = None,
    ) -> "Settings":
        config = StableManagerConfig.load(config_path)
        start = cwd or Path.cwd()
        root = find_project_root(start, config.root_markers)
        logger.debug("Resolved project root: %s", root)
        return cls(root=root, config=config, version=version)
