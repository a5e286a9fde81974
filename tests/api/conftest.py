"""
tests/api/conftest.py

Shared fixtures for API route tests.

The `client` fixture:
  - Patches the lifespan trace loading so no compiler target directory
    is required.
  - Installs a small in-memory trace through tracegraph.state.set_trace.
  - Resets the shared trace after each test to avoid cross-test leakage.
"""
from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from tracegraph import state
from tracegraph.main import app
from tracegraph.models.trace import Event, Span


def sample_trace() -> list[Event]:
    """Root, a no-result block with one child, and a sibling it references."""
    return [
        Event(id=1, source=Span(low=0, high=20), ok="unit"),
        Event(id=2, parent_id=1, source=Span(low=0, high=10), ref_span=Span(low=12, high=14)),
        Event(id=3, parent_id=2, source=Span(low=2, high=4), ok="i32"),
        Event(id=4, parent_id=1, source=Span(low=12, high=14), ok="i32"),
    ]


@pytest.fixture()
def client() -> TestClient:  # type: ignore[return]
    """Return a TestClient serving sample_trace() with lifespan I/O patched."""
    with (
        patch("tracegraph.main.init_trace"),
        patch("tracegraph.main.close_trace"),
    ):
        with TestClient(app, raise_server_exceptions=True) as c:
            state.set_trace(sample_trace())
            yield c

    state._trace = None
