"""Reading and writing Kubernetes config files through an OSService.

Deployment logic never touches the disk directly: every read, write and
directory operation goes through the OSService it is given, so the same code
runs against the host filesystem in production and against FakeOS in tests.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deployfs.ctx import Context
from deployfs.protocols import OSService, StrPath
from deployfs.types import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, TEMP_DIR_PATTERN

logger = logging.getLogger(__name__)

CONFIG_EXTENSIONS = (".yaml", ".yml")


class ResourceError(Exception):
    """Raised when config files cannot be read, parsed or saved."""


class ObjectMeta(BaseModel):
    """Identifying metadata of a Kubernetes object."""

    model_config = ConfigDict(extra="allow")

    name: str
    namespace: str = ""


class Resource(BaseModel):
    """A single Kubernetes object parsed from a config file."""

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(alias="apiVersion")
    kind: str
    metadata: ObjectMeta
    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, source: str = "") -> Resource:
        """Validate a parsed YAML document.

        Args:
            data: Parsed document.
            source: File the document came from, for error messages.

        Returns:
            The validated Resource, keeping the full document in `raw`.

        Raises:
            ResourceError: If the document is not a valid object.
        """
        if not isinstance(data, dict):
            raise ResourceError(f"object in {source!r} is not a mapping")
        try:
            return cls.model_validate({**data, "raw": data})
        except ValidationError as e:
            raise ResourceError(f"invalid object in {source!r}: {e}") from e

    @property
    def file_name(self) -> str:
        return f"{self.kind}-{self.metadata.name}.yaml".lower()

    def to_yaml(self) -> bytes:
        return yaml.safe_dump(self.raw, sort_keys=False).encode()


def parse_configs(
    ctx: Context, configs: StrPath, oss: OSService, recursive: bool = False
) -> list[Resource]:
    """Parse objects from a config file or a directory of config files.

    Args:
        ctx: Execution context.
        configs: Path to a YAML file or to a directory of YAML files.
        oss: OS service used for every filesystem access.
        recursive: Descend into sub-directories.

    Returns:
        Parsed objects, in file listing and document order.

    Raises:
        ResourceError: If nothing can be read or no object is found.
    """
    if not configs:
        raise ResourceError("configs cannot be empty")
    path = os.fspath(configs)
    try:
        info = oss.stat(ctx, path)
    except OSError as e:
        raise ResourceError(f"failed to get file info for {path!r}: {e}") from e

    if info.is_dir():
        objs = _parse_dir(ctx, path, oss, recursive)
    else:
        objs = _parse_file(ctx, path, oss)
    if not objs:
        raise ResourceError(f"no objects found in {path!r}")
    logger.debug("Parsed %d objects from %s", len(objs), path)
    return objs


def _parse_dir(ctx: Context, dirname: str, oss: OSService, recursive: bool) -> list[Resource]:
    try:
        entries = oss.read_dir(ctx, dirname)
    except OSError as e:
        raise ResourceError(f"failed to list directory {dirname!r}: {e}") from e

    objs: list[Resource] = []
    for entry in entries:
        path = os.path.join(dirname, entry.name)
        if entry.is_dir():
            if recursive:
                objs.extend(_parse_dir(ctx, path, oss, recursive))
            continue
        if os.path.splitext(entry.name)[1] not in CONFIG_EXTENSIONS:
            logger.debug("Skipping %s: not a config file", path)
            continue
        objs.extend(_parse_file(ctx, path, oss))
    return objs


def _parse_file(ctx: Context, filename: str, oss: OSService) -> list[Resource]:
    try:
        data = oss.read_file(ctx, filename)
    except OSError as e:
        raise ResourceError(f"failed to read file {filename!r}: {e}") from e
    try:
        docs = list(yaml.safe_load_all(data))
    except yaml.YAMLError as e:
        raise ResourceError(f"failed to parse {filename!r}: {e}") from e
    return [Resource.from_dict(doc, source=filename) for doc in docs if doc is not None]


def save_as_configs(
    ctx: Context, objs: Iterable[Resource], output_dir: StrPath, oss: OSService
) -> list[str]:
    """Write each object to its own file in `output_dir`.

    The directory is created when missing. Files are named
    `<kind>-<name>.yaml`, lowercased.

    Args:
        ctx: Execution context.
        objs: Objects to write.
        output_dir: Target directory.
        oss: OS service used for every filesystem access.

    Returns:
        Paths of the written files, in input order.

    Raises:
        ResourceError: If the directory is unusable, two objects share a
            file name, or a write fails.
    """
    out = os.fspath(output_dir)
    objs = list(objs)

    names: set[str] = set()
    for obj in objs:
        if obj.file_name in names:
            raise ResourceError(f"duplicate output file {obj.file_name!r}")
        names.add(obj.file_name)

    try:
        info = oss.stat(ctx, out)
    except FileNotFoundError:
        logger.debug("Creating output directory %s", out)
        try:
            oss.mkdir_all(ctx, out, DEFAULT_DIR_MODE)
        except OSError as e:
            raise ResourceError(f"failed to create directory {out!r}: {e}") from e
    except OSError as e:
        raise ResourceError(f"failed to get file info for {out!r}: {e}") from e
    else:
        if not info.is_dir():
            raise ResourceError(f"output path {out!r} exists and is not a directory")

    written = []
    for obj in objs:
        path = os.path.join(out, obj.file_name)
        try:
            oss.write_file(ctx, path, obj.to_yaml(), DEFAULT_FILE_MODE)
        except OSError as e:
            raise ResourceError(f"failed to write {path!r}: {e}") from e
        written.append(path)
    return written


@contextmanager
def staging_dir(
    ctx: Context, oss: OSService, parent: StrPath = "", pattern: str = TEMP_DIR_PATTERN
) -> Iterator[str]:
    """Create a temporary directory and remove it on exit.

    Args:
        ctx: Execution context.
        oss: OS service used for every filesystem access.
        parent: Parent directory; the system temp directory when empty.
        pattern: Name pattern for the new directory.

    Yields:
        Path of the temporary directory.

    Raises:
        ResourceError: If the directory cannot be created, or cannot be
            removed after the body completed. A removal failure while the
            body is raising is logged and the body's error propagates.
    """
    try:
        path = oss.temp_dir(ctx, parent, pattern)
    except OSError as e:
        raise ResourceError(f"failed to create temp dir in {os.fspath(parent)!r}: {e}") from e
    try:
        yield path
    except BaseException:
        try:
            oss.remove_all(ctx, path)
        except OSError:
            logger.exception("Failed to remove temp dir %s", path)
        raise
    try:
        oss.remove_all(ctx, path)
    except OSError as e:
        raise ResourceError(f"failed to remove temp dir {path!r}: {e}") from e
