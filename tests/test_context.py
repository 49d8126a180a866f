"""Tests for context module."""

from __future__ import annotations

from deployfs.context import AppContext, create_context
from deployfs.filesystem import LocalOS
from deployfs.testservices import FakeOS


class TestAppContext:
    """Tests for AppContext dataclass."""

    def test_create_with_fake(self) -> None:
        """Test a test double can be injected."""
        fake = FakeOS()
        ctx = AppContext(oss=fake)
        assert ctx.oss is fake

    def test_default_oss(self) -> None:
        """Test context creates the host filesystem service if not provided."""
        assert isinstance(AppContext().oss, LocalOS)


class TestCreateContext:
    """Tests for create_context factory function."""

    def test_create_context_uses_local_os(self) -> None:
        """Test production wiring uses LocalOS."""
        assert isinstance(create_context().oss, LocalOS)

    def test_create_context_fresh_instances(self) -> None:
        """Test each call builds its own service."""
        assert create_context().oss is not create_context().oss
