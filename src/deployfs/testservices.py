"""Fake services used for unit tests.

FakeOS answers every OSService call from a canned response registered under
the call's input. An unregistered input is a mistake in the test, not a
simulated filesystem failure, so it fails the running test through
`pytest.fail` instead of raising a domain error. `pytest.fail` raises a
`BaseException`, which `except Exception` in the code under test does not
catch.

This module imports pytest, so it needs the `test` extra
(`pip install deployfs[test]`); the rest of the package does not.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

import pytest

from deployfs.ctx import Context
from deployfs.protocols import FileInfo, StrPath

__all__ = [
    "FakeFileInfo",
    "FakeOS",
    "ReadDirResponse",
    "ReadFileResponse",
    "StatResponse",
    "TempDirResponse",
]


@dataclass
class StatResponse:
    """Response tuple for a stat call."""

    res: FileInfo | None = None
    err: BaseException | None = None


@dataclass
class ReadDirResponse:
    """Response tuple for a read_dir call."""

    res: list[FileInfo] = field(default_factory=list)
    err: BaseException | None = None


@dataclass
class ReadFileResponse:
    """Response tuple for a read_file call."""

    res: bytes = b""
    err: BaseException | None = None


@dataclass
class TempDirResponse:
    """Response tuple for a temp_dir call."""

    dir: str = ""
    err: BaseException | None = None


@dataclass
class FakeOS:
    """Deterministic OSService double keyed by call input.

    Each mapping is keyed by the call's primary argument as a string. The
    temp_dir mapping is keyed by the `(dir, pattern)` tuple.

    Example:
        >>> oss = FakeOS(stat_response={"/a/b": StatResponse(FakeFileInfo("b", False))})
        >>> oss.stat(Context.background(), "/a/b").name
        'b'
    """

    stat_response: dict[str, StatResponse] = field(default_factory=dict)
    read_dir_response: dict[str, ReadDirResponse] = field(default_factory=dict)
    read_file_response: dict[str, ReadFileResponse] = field(default_factory=dict)
    write_file_response: dict[str, BaseException | None] = field(default_factory=dict)
    mkdir_all_response: dict[str, BaseException | None] = field(default_factory=dict)
    remove_all_response: dict[str, BaseException | None] = field(default_factory=dict)
    temp_dir_response: dict[tuple[str, str], TempDirResponse] = field(default_factory=dict)

    def stat(self, ctx: Context, filename: StrPath) -> FileInfo | None:
        """Get a file description for a file."""
        key = os.fspath(filename)
        if key not in self.stat_response:
            pytest.fail(f"stat has no response for filename {key!r}")
        resp = self.stat_response[key]
        if resp.err is not None:
            raise resp.err
        return resp.res

    def read_dir(self, ctx: Context, dirname: StrPath) -> list[FileInfo]:
        """Get file descriptions for all entries of a directory."""
        key = os.fspath(dirname)
        if key not in self.read_dir_response:
            pytest.fail(f"read_dir has no response for dirname {key!r}")
        resp = self.read_dir_response[key]
        if resp.err is not None:
            raise resp.err
        return resp.res

    def read_file(self, ctx: Context, filename: StrPath) -> bytes:
        """Get the entire contents of a file."""
        key = os.fspath(filename)
        if key not in self.read_file_response:
            pytest.fail(f"read_file has no response for filename {key!r}")
        resp = self.read_file_response[key]
        if resp.err is not None:
            raise resp.err
        return resp.res

    def write_file(self, ctx: Context, filename: StrPath, data: bytes, perm: int) -> None:
        """Write data to a file. `data` and `perm` are ignored."""
        key = os.fspath(filename)
        if key not in self.write_file_response:
            pytest.fail(f"write_file has no response for filename {key!r}")
        err = self.write_file_response[key]
        if err is not None:
            raise err

    def mkdir_all(self, ctx: Context, dirname: StrPath, perm: int) -> None:
        """Create a directory and its parents. `perm` is ignored."""
        key = os.fspath(dirname)
        if key not in self.mkdir_all_response:
            pytest.fail(f"mkdir_all has no response for dirname {key!r}")
        err = self.mkdir_all_response[key]
        if err is not None:
            raise err

    def remove_all(self, ctx: Context, path: StrPath) -> None:
        """Remove path and any children it contains."""
        key = os.fspath(path)
        if key not in self.remove_all_response:
            pytest.fail(f"remove_all has no response for path {key!r}")
        err = self.remove_all_response[key]
        if err is not None:
            raise err

    def temp_dir(self, ctx: Context, dir: StrPath, pattern: str) -> str:
        """Create a new temporary directory in the directory dir."""
        key = (os.fspath(dir), pattern)
        if key not in self.temp_dir_response:
            pytest.fail(f"temp_dir has no response for dir {key[0]!r} and pattern {key[1]!r}")
        resp = self.temp_dir_response[key]
        if resp.err is not None:
            raise resp.err
        return resp.dir


@dataclass(frozen=True)
class FakeFileInfo:
    """FileInfo stand-in carrying only a name and a directory flag."""

    name: str
    is_directory: bool = False

    def is_dir(self) -> bool:
        return self.is_directory
