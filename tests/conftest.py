"""Shared test fixtures."""

from __future__ import annotations

import pytest

from deployfs.ctx import Context
from deployfs.filesystem import LocalOS
from deployfs.testservices import FakeOS


@pytest.fixture
def ctx() -> Context:
    """Root execution context."""
    return Context.background()


@pytest.fixture
def local_os() -> LocalOS:
    """Production OS service."""
    return LocalOS()


@pytest.fixture
def fake_os() -> FakeOS:
    """Fresh FakeOS with no registered responses.

    Each test gets its own instance so mappings are never shared.
    """
    return FakeOS()


# ============================================================================
# Sample Content Fixtures
# ============================================================================


@pytest.fixture
def deployment_yaml() -> bytes:
    """Single Deployment config."""
    return b"""apiVersion: apps/v1
kind: Deployment
metadata:
  name: web
  namespace: prod
spec:
  replicas: 2
"""


@pytest.fixture
def multi_doc_yaml() -> bytes:
    """Service and ConfigMap in one file, with an empty document between."""
    return b"""apiVersion: v1
kind: Service
metadata:
  name: web
---
---
apiVersion: v1
kind: ConfigMap
metadata:
  name: web-config
data:
  key: value
"""
