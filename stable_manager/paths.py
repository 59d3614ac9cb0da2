"""
Path derivation helpers for Stable Manager.

Every working file has two siblings in the same directory: the stable
baseline (``name-stable.ext``) and the pre-restore backup
(``name-backup.ext``). This module computes those paths and locates the
project root that all displayed paths are relative to.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

STABLE_SUFFIX = "-stable"
BACKUP_SUFFIX = "-backup"

DEFAULT_ROOT_MARKERS = ["package.json", "pyproject.toml", ".git"]


def derive_sibling(path: Path, suffix: str) -> Path:
    """Insert *suffix* between the base name and the extension of *path*.

    ``src/app.js`` with ``-stable`` becomes ``src/app-stable.js``. A name
    without an extension simply gets the suffix appended.
    """
    base, ext = os.path.splitext(path.name)
    return path.with_name(f"{base}{suffix}{ext}")


@dataclass
class SnapshotPaths:
    """The working file and its two derived siblings."""

    working: Path
    stable: Path
    backup: Path

    @classmethod
    def for_file(cls, working: Path) -> "SnapshotPaths":
        return cls(
            working=working,
            stable=derive_sibling(working, STABLE_SUFFIX),
            backup=derive_sibling(working, BACKUP_SUFFIX),
        )


def resolve_path(arg: Union[str, Path], base: Path) -> Path:
    """Resolve a user-supplied path against *base*.

    Absolute paths are kept as they are. Only join and ``..`` collapsing
    are applied; symlinks are not resolved.
    """
    path = Path(arg).expanduser()
    if not path.is_absolute():
        path = base / path
    return Path(os.path.normpath(path))


def find_project_root(
    start: Path, markers: Iterable[str] = DEFAULT_ROOT_MARKERS
) -> Path:
    """Walk upward from *start* to the first directory holding a marker.

    Falls back to *start* itself when no ancestor contains any of the
    marker names.
    """
    markers = list(markers)
    cur = Path(os.path.abspath(start))
    while True:
        if any((cur / marker).exists() for marker in markers):
            return cur
        if cur.parent == cur:
            return Path(os.path.abspath(start))
        cur = cur.parent


def display_path(path: Path, root: Path) -> str:
    """Return *path* relative to *root* for user-facing messages."""
    try:
        return os.path.relpath(path, root)
    except ValueError:
        # Different drives on Windows have no relative form
        return str(path)
