"""
Snapshot operations for Stable Manager.

This module does the filesystem work behind the ``promote``, ``restore``,
``clean`` and ``list`` commands. It never prompts or prints; the CLI layer
owns confirmation and output.
"""

import logging
import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Union

from stable_manager.paths import SnapshotPaths, display_path, resolve_path
from stable_manager.scanner import (
    DEFAULT_EXCLUDE_DIRS,
    STABLE_FILE_PATTERN,
    scan_special_files,
)

logger = logging.getLogger("stable_manager.manager")


class WorkingFileNotFoundError(FileNotFoundError):
    """Raised when promoting a file that does not exist."""

    def __init__(self, working: Path) -> None:
        super().__init__(f"Working file not found: {working}")
        self.working = working


class NoStableFileError(FileNotFoundError):
    """Raised when restoring a file that was never promoted."""

    def __init__(self, stable: Path) -> None:
        super().__init__(f"No stable file exists yet: {stable}")
        self.stable = stable


class SnapshotManager:
    """Promotes, restores and discovers snapshot files below a project root."""

    def __init__(
        self, root: Path, exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS
    ) -> None:
        self.root = Path(root)
        self.exclude_dirs = frozenset(exclude_dirs)

    def display(self, path: Path) -> str:
        """Format *path* relative to the project root."""
        return display_path(path, self.root)

    def paths_for(
        self, file_arg: Union[str, Path], cwd: Optional[Path] = None
    ) -> SnapshotPaths:
        """Derive the snapshot paths for a user-supplied file argument."""
        working = resolve_path(file_arg, cwd or Path.cwd())
        return SnapshotPaths.for_file(working)

    def check_promotable(self, paths: SnapshotPaths) -> None:
        if not paths.working.is_file():
            raise WorkingFileNotFoundError(paths.working)

    def check_restorable(self, paths: SnapshotPaths) -> None:
        if not paths.stable.exists():
            raise NoStableFileError(paths.stable)

    def promote(self, paths: SnapshotPaths) -> Path:
        """
        Copy the working file onto its stable sibling.

        Args:
            paths: Snapshot paths of the working file

        Returns:
            Path of the stable file that was written
        """
        self.check_promotable(paths)
        logger.info(f"Promoting {paths.working} to {paths.stable}")
        shutil.copyfile(paths.working, paths.stable)
        return paths.stable

    def restore(self, paths: SnapshotPaths) -> Optional[Path]:
        """
        Copy the stable file back onto the working file.

        The current working file, if any, is saved to the backup path first.

        Args:
            paths: Snapshot paths of the working file

        Returns:
            Path of the backup that was written, or None if the working file
            did not exist
        """
        self.check_restorable(paths)

        backup: Optional[Path] = None
        if paths.working.exists():
            logger.info(f"Backing up {paths.working} to {paths.backup}")
            shutil.copyfile(paths.working, paths.backup)
            backup = paths.backup

        logger.info(f"Restoring {paths.working} from {paths.stable}")
        shutil.copyfile(paths.stable, paths.working)
        return backup

    def find_special_files(
        self,
        start: Optional[Path] = None,
        recursive: bool = True,
        stable_only: bool = False,
    ) -> List[Path]:
        """List stable/backup files under *start* (default: the root).

        Returned paths are relative to the root.
        """
        return scan_special_files(
            start or self.root,
            self.root,
            recursive=recursive,
            exclude_dirs=self.exclude_dirs,
            pattern=STABLE_FILE_PATTERN if stable_only else None,
        )

    def remove(self, relative: Path) -> None:
        """Delete one file returned by :meth:`find_special_files`."""
        target = self.root / relative
        logger.info(f"Removing {target}")
        target.unlink()
