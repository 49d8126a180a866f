"""Cancellable execution context passed to every OS service call.

A context carries a cancellation flag and an optional deadline. Contexts form
a tree: cancelling a parent cancels every child derived from it, and a child
deadline can never outlive its parent's.
"""

from __future__ import annotations

import threading
import time

__all__ = ["Context", "ContextCancelled", "ContextError", "DeadlineExceeded"]


class ContextError(Exception):
    """Base error for a context that is no longer usable."""


class ContextCancelled(ContextError):
    """Raised when an operation runs under a cancelled context."""


class DeadlineExceeded(ContextError):
    """Raised when an operation runs after the context deadline."""


class Context:
    """Cancellation and deadline carrier.

    Use `Context.background()` for the root and derive children with
    `with_cancel()` or `with_timeout()`.
    """

    __slots__ = ("_cancelled", "_deadline", "_parent")

    def __init__(self, parent: Context | None = None, deadline: float | None = None) -> None:
        """Initialize a context.

        Args:
            parent: Context this one is derived from.
            deadline: Absolute `time.monotonic()` deadline, or None.
        """
        self._parent = parent
        self._cancelled = threading.Event()
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline

    @classmethod
    def background(cls) -> Context:
        """Create a root context that is never cancelled and has no deadline."""
        return cls()

    def with_cancel(self) -> Context:
        """Derive a child context that can be cancelled on its own."""
        return Context(parent=self)

    def with_timeout(self, seconds: float) -> Context:
        """Derive a child context that expires after `seconds`."""
        return Context(parent=self, deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        """True if this context or any ancestor was cancelled."""
        if self._cancelled.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def done(self) -> bool:
        """True once the context is cancelled or past its deadline."""
        return self.cancelled or self.expired

    def cancel(self) -> None:
        """Cancel this context and everything derived from it."""
        self._cancelled.set()

    def check(self) -> None:
        """Raise if the context is no longer usable.

        Raises:
            ContextCancelled: If the context was cancelled.
            DeadlineExceeded: If the deadline has passed.
        """
        if self.cancelled:
            raise ContextCancelled("context cancelled")
        if self.expired:
            raise DeadlineExceeded("context deadline exceeded")
