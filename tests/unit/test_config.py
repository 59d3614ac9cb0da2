"""
Tests for the config module.
"""

import os
from pathlib import Path
from unittest.mock import patch

from stable_manager.config import (
    Settings,
    StableManagerConfig,
    default_config_path,
)


def test_default_config_path() -> None:
    """default_config_path falls back to ~/.config/stable-manager/config.yaml."""
    env = {"HOME": str(Path.home())}
    with patch.dict(os.environ, env, clear=True):
        result = default_config_path()
        assert result == Path.home() / ".config" / "stable-manager" / "config.yaml"


def test_default_config_path_xdg() -> None:
    """default_config_path respects $XDG_CONFIG_HOME."""
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": "/custom/config"}):
        result = default_config_path()
        assert result == Path("/custom/config/stable-manager/config.yaml")


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    """Loading a non-existent file returns the default config."""
    cfg = StableManagerConfig.load(tmp_path / "nonexistent.yaml")
    assert cfg.exclude_dirs == ["build", "dist", "node_modules"]
    assert cfg.root_markers == ["package.json", "pyproject.toml", ".git"]


def test_empty_file_returns_defaults(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("")
    assert StableManagerConfig.from_file(p) == StableManagerConfig()


def test_full_config_parsing(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("""\
exclude_dirs:
  - node_modules
  - vendor
root_markers:
  - Cargo.toml
""")
    cfg = StableManagerConfig.from_file(p)
    assert cfg.exclude_dirs == ["node_modules", "vendor"]
    assert cfg.root_markers == ["Cargo.toml"]


def test_partial_config_keeps_other_defaults(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("exclude_dirs: []\n")
    cfg = StableManagerConfig.from_file(p)
    assert cfg.exclude_dirs == []
    assert cfg.root_markers == StableManagerConfig().root_markers


def test_invalid_entries_skipped(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text("""\
exclude_dirs:
  - vendor
  - 42
  - ""
root_markers: "package.json"
""")
    cfg = StableManagerConfig.from_file(p)
    assert cfg.exclude_dirs == ["vendor"]
    assert cfg.root_markers == StableManagerConfig().root_markers


def test_invalid_yaml_returns_defaults(tmp_path: Path) -> None:
    """Malformed YAML returns the default config instead of raising."""
    p = tmp_path / "config.yaml"
    p.write_text(": : : [invalid yaml")
    assert StableManagerConfig.from_file(p) == StableManagerConfig()


def test_from_dict_non_dict() -> None:
    cfg = StableManagerConfig.from_dict("not a dict")  # type: ignore[arg-type]
    assert cfg == StableManagerConfig()


def test_load_uses_default_path(tmp_path: Path) -> None:
    """load() without arguments uses default_config_path()."""
    p = tmp_path / "config.yaml"
    p.write_text("root_markers: [setup.cfg]\n")
    with patch("stable_manager.config.default_config_path", return_value=p):
        cfg = StableManagerConfig.load()
    assert cfg.root_markers == ["setup.cfg"]


def test_settings_resolve_finds_root(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{}")
    nested = tmp_path / "src"
    nested.mkdir()
    settings = Settings.resolve("1.2.3", tmp_path / "missing.yaml", cwd=nested)
    assert settings.root == tmp_path
    assert settings.version == "1.2.3"
    assert settings.config == StableManagerConfig()


def test_settings_resolve_uses_configured_markers(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{}")
    inner = tmp_path / "lib"
    inner.mkdir()
    (inner / "Cargo.toml").write_text("")
    config = tmp_path / "config.yaml"
    config.write_text("root_markers: [Cargo.toml]\n")
    settings = Settings.resolve("1.0", config, cwd=inner)
    assert settings.root == inner


def test_default_config_path_empty_xdg() -> None:
    """An empty $XDG_CONFIG_HOME is treated as unset."""
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
        result = default_config_path()
        assert result == Path.home() / ".config" / "stable-manager" / "config.yaml"


def test_unreadable_config_returns_defaults(tmp_path: Path) -> None:
    """A config path that cannot be read as a file falls back to defaults."""
    p = tmp_path / "config.yaml"
    p.mkdir()
    assert StableManagerConfig.load(p) == StableManagerConfig()
