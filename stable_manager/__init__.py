"""
Stable Manager - paired working/stable snapshots of individual project files.

Promote a file to a stable baseline, restore it later, keep a backup of what
the restore overwrote.
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

try:
    __version__ = _version("stable-manager")
except PackageNotFoundError:
    __version__ = "unknown"
