"""Filesystem abstraction for testability.

This module provides the production OS service. LocalOS wraps standard
library operations and satisfies the OSService protocol structurally; tests
substitute `deployfs.testservices.FakeOS` instead.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat as stat_mod
import tempfile
from pathlib import Path

from deployfs.ctx import Context
from deployfs.protocols import StrPath
from deployfs.types import LocalFileInfo

logger = logging.getLogger(__name__)


def _info(name: str, st: os.stat_result) -> LocalFileInfo:
    return LocalFileInfo(
        name=name,
        is_directory=stat_mod.S_ISDIR(st.st_mode),
        size=st.st_size,
        mode=st.st_mode,
        mtime=st.st_mtime,
    )


class LocalOS:
    """Production OS service backed by the host filesystem.

    Every call checks the context before touching the disk, so a cancelled
    or expired context raises `ContextError` without doing any I/O.
    """

    def stat(self, ctx: Context, filename: StrPath) -> LocalFileInfo:
        """Get a file description for a file."""
        ctx.check()
        if not os.fspath(filename):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), "")
        path = Path(filename)
        return _info(path.name or os.fspath(path), path.stat())

    def read_dir(self, ctx: Context, dirname: StrPath) -> list[LocalFileInfo]:
        """Get file descriptions for a directory, sorted by name."""
        ctx.check()
        with os.scandir(dirname) as it:
            entries = sorted(it, key=lambda e: e.name)
        return [_info(e.name, e.stat(follow_symlinks=False)) for e in entries]

    def read_file(self, ctx: Context, filename: StrPath) -> bytes:
        """Read the entire contents of a file."""
        ctx.check()
        return Path(filename).read_bytes()

    def write_file(self, ctx: Context, filename: StrPath, data: bytes, perm: int) -> None:
        """Write data to a file, creating it with `perm` if missing."""
        ctx.check()
        fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        logger.debug("Wrote %d bytes to %s", len(data), filename)

    def mkdir_all(self, ctx: Context, dirname: StrPath, perm: int) -> None:
        """Create a directory and any missing parents, all with `perm`."""
        ctx.check()
        target = os.fspath(dirname)
        if not target:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), "")

        missing = []
        path = Path(target)
        while not path.exists() and path != path.parent:
            missing.append(path)
            path = path.parent
        for p in reversed(missing):
            try:
                p.mkdir(mode=perm)
            except FileExistsError:
                if not p.is_dir():
                    raise
        if not Path(target).is_dir():
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), target)

    def remove_all(self, ctx: Context, path: StrPath) -> None:
        """Remove a path and any children; a missing path is not an error."""
        ctx.check()
        if not os.fspath(path):
            return
        target = Path(path)
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink(missing_ok=True)
        logger.debug("Removed %s", target)

    def temp_dir(self, ctx: Context, dir: StrPath, pattern: str) -> str:
        """Create a new temporary directory in `dir`.

        The last "*" in `pattern` is replaced by a random string; without
        one the random string is appended. An empty `dir` means the system
        temp directory.

        Raises:
            ValueError: If `pattern` contains a path separator.
        """
        ctx.check()
        if os.sep in pattern or (os.altsep and os.altsep in pattern):
            raise ValueError(f"pattern contains path separator: {pattern!r}")
        prefix, star, suffix = pattern.rpartition("*")
        if not star:
            prefix, suffix = pattern, ""
        created = tempfile.mkdtemp(suffix=suffix, prefix=prefix, dir=os.fspath(dir) or None)
        logger.debug("Created temp dir %s", created)
        return created
