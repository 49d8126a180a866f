"""Shared data types and defaults for deployfs."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "DEFAULT_DIR_MODE",
    "DEFAULT_FILE_MODE",
    "TEMP_DIR_PATTERN",
    "LocalFileInfo",
]

# Permissions used when the deployment logic writes to disk
DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755

TEMP_DIR_PATTERN = "deployfs-*"


@dataclass(frozen=True)
class LocalFileInfo:
    """File description returned by the production OS service.

    Attributes:
        name: Final path component.
        is_directory: True if the entry is a directory.
        size: Size in bytes.
        mode: Permission and type bits as reported by stat.
        mtime: Modification time in seconds since the epoch.
    """

    name: str
    is_directory: bool
    size: int = 0
    mode: int = 0
    mtime: float = 0.0

    def is_dir(self) -> bool:
        """Return True if the entry is a directory."""
        return self.is_directory
