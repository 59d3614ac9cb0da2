"""
Directory scanning for stable and backup files.

The scanner is the only way Stable Manager discovers its state: there is no
index, a file is tracked if and only if its name matches the naming pattern.
"""

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern

logger = logging.getLogger("stable_manager.scanner")

SPECIAL_FILE_PATTERN = re.compile(r"(?:-stable|-backup)\.[^.]+$")
STABLE_FILE_PATTERN = re.compile(r"-stable\.[^.]+$")

DEFAULT_EXCLUDE_DIRS = frozenset({"node_modules", "dist", "build"})


def is_special_file(name: str) -> bool:
    """Return True when *name* looks like a stable or backup file."""
    return SPECIAL_FILE_PATTERN.search(name) is not None


def should_skip(name: str, exclude_dirs: Iterable[str]) -> bool:
    """Hidden entries and excluded names are never inspected."""
    return name.startswith(".") or name in exclude_dirs


def scan_special_files(
    start: Path,
    root: Path,
    recursive: bool = True,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
    pattern: Optional[Pattern[str]] = None,
) -> List[Path]:
    """
    Collect files under *start* whose names match the stable/backup pattern.

    Args:
        start: Directory to scan
        root: Directory the returned paths are made relative to
        recursive: Descend into subdirectories when True
        exclude_dirs: Entry names that are skipped entirely
        pattern: Name pattern to match, defaults to stable or backup files

    Returns:
        Matching paths relative to *root*, in traversal order
    """
    excluded = frozenset(exclude_dirs)
    name_pattern = pattern or SPECIAL_FILE_PATTERN
    results: List[Path] = []
    _scan_dir(Path(start), Path(root), recursive, excluded, name_pattern, results)
    return results


def _scan_dir(
    directory: Path,
    root: Path,
    recursive: bool,
    excluded: frozenset,
    pattern: Pattern[str],
    results: List[Path],
) -> None:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {directory}: {e}")
        return

    for entry in entries:
        if should_skip(entry.name, excluded):
            continue

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue

        if is_dir:
            if recursive:
                _scan_dir(Path(entry.path), root, recursive, excluded, pattern, results)
        elif pattern.search(entry.name):
            results.append(Path(os.path.relpath(entry.path, root)))
