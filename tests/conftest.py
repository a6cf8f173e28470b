"""
Pytest configuration and shared fixtures for pgcompat tests.
"""

from typing import Any, List, Optional, Sequence

import pytest

from pgcompat.adapters.base import ExecutionResult
from pgcompat.compat import CompatDatabase


class FakeClient:
    """In-memory store client that records what it was asked to run."""

    def __init__(self, result: Optional[ExecutionResult] = None, error: Optional[Exception] = None):
        self.result = result or ExecutionResult()
        self.error = error
        self.calls: List[tuple] = []

    async def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> ExecutionResult:
        self.calls.append((sql, params))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_client():
    """Return a fake client that yields no rows."""
    return FakeClient()


@pytest.fixture
def db(fake_client):
    """Return a CompatDatabase wired to the fake client."""
    return CompatDatabase(fake_client)


@pytest.fixture
def make_client():
    """Return the FakeClient class for tests that need a custom result or error."""
    return FakeClient
