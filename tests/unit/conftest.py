"""
Shared fixtures for the unit tests.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch) -> Path:
    """Keep the user's real config file out of every test."""
    config_home = tmp_path_factory.mktemp("config-home")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("STABLE_MANAGER_CONFIG", raising=False)
    return config_home


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """A project root (marked by package.json) used as the working directory."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "package.json").write_text('{"name": "demo"}')
    monkeypatch.chdir(root)
    return root
