"""Shared fixtures for frugal tests."""

import pytest

from frugal.routing.registry import RouteRegistry


@pytest.fixture
def registry() -> RouteRegistry:
    """A private registry so tests don't share controller tables."""
    return RouteRegistry()
