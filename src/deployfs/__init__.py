"""Filesystem service abstraction for deployment tooling."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from deployfs.ctx import Context
from deployfs.protocols import FileInfo, OSService

__all__ = [
    "__version__",
    "Context",
    "FileInfo",
    "OSService",
]
