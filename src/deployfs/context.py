"""Application context for dependency injection.

This module separates object creation from object use. Commands receive an
AppContext whose OS service is the host filesystem in production and a
FakeOS in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from deployfs.protocols import OSService


def _default_oss() -> OSService:
    """Create the default OS service implementation."""
    from deployfs.filesystem import LocalOS
    return LocalOS()


@dataclass
class AppContext:
    """Container for application dependencies.

    The OS service is typed by its Protocol, not a concrete class, so a
    test double can be injected without inheritance.
    """

    oss: OSService = field(default_factory=_default_oss)


def create_context() -> AppContext:
    """Factory for application dependencies.

    Use this in production code. For tests, construct AppContext directly
    with a FakeOS.

    Returns:
        AppContext wired to the host filesystem.
    """
    from deployfs.filesystem import LocalOS

    return AppContext(oss=LocalOS())
