"""Protocol definitions for the OS service abstraction.

Deployment logic depends on these Protocols rather than on the host
filesystem, so that a production implementation and a deterministic test
double can be substituted for each other at wiring time.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from deployfs.ctx import Context

StrPath = Union[str, os.PathLike]


@runtime_checkable
class FileInfo(Protocol):
    """Protocol for the file metadata consumed by deployment logic.

    Only the display name and the directory flag are part of the contract.
    """

    @property
    def name(self) -> str:
        """Final path component of the entry."""
        ...

    def is_dir(self) -> bool:
        """Return True if the entry is a directory."""
        ...


@runtime_checkable
class OSService(Protocol):
    """Protocol for filesystem operations used by deployment logic.

    Every operation takes a cancellable execution context first. Domain
    failures are raised as `OSError` subclasses.
    """

    def stat(self, ctx: Context, filename: StrPath) -> FileInfo:
        """Get a file description for a file.

        Args:
            ctx: Execution context.
            filename: Path to describe.

        Returns:
            Metadata for the path.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        ...

    def read_dir(self, ctx: Context, dirname: StrPath) -> list[FileInfo]:
        """Get file descriptions for all entries of a directory.

        Args:
            ctx: Execution context.
            dirname: Directory to list.

        Returns:
            Metadata for each entry, sorted by name.
        """
        ...

    def read_file(self, ctx: Context, filename: StrPath) -> bytes:
        """Read the entire contents of a file.

        Args:
            ctx: Execution context.
            filename: File to read.

        Returns:
            File content as bytes.
        """
        ...

    def write_file(self, ctx: Context, filename: StrPath, data: bytes, perm: int) -> None:
        """Write data to a file, creating it with `perm` if needed.

        Args:
            ctx: Execution context.
            filename: File to write.
            data: Content to write.
            perm: Permission bits for a newly created file.
        """
        ...

    def mkdir_all(self, ctx: Context, dirname: StrPath, perm: int) -> None:
        """Create a directory and any missing parents.

        Args:
            ctx: Execution context.
            dirname: Directory to create.
            perm: Permission bits for created directories.
        """
        ...

    def remove_all(self, ctx: Context, path: StrPath) -> None:
        """Remove a path and any children it contains.

        Args:
            ctx: Execution context.
            path: File or directory to remove.
        """
        ...

    def temp_dir(self, ctx: Context, dir: StrPath, pattern: str) -> str:
        """Create a new temporary directory.

        Args:
            ctx: Execution context.
            dir: Parent directory; the system temp directory when empty.
            pattern: Name pattern; the last "*" is replaced by a random string.

        Returns:
            Path of the new directory.
        """
        ...
