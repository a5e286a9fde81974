"""
tests/api/test_data_routes.py

HTTP-level tests for the trace data routes and app-level handlers.

Coverage
--------
  GET /health              → 200 with app name and version
  GET /data/trace          → 200 with events in trace order
  GET /data/graph          → 200 with no-result nodes merged (default)
  GET /data/graph          → merge_noops=false returns the raw edge set
  GET /data/graph          → merge_noops=abc → 422
  GET /data/graph          → server setting controls the default
  GET /data/graph          → detach fallback drops a parentless no-result node's edges
  GET /data/graph          → 500 JSON body when no trace is loaded
"""
from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from tracegraph import state
from tracegraph.config import settings
from tracegraph.main import app
from tracegraph.models.trace import Event, Span


def _edge_tuples(data: dict) -> list[tuple[int, int, str]]:
    return [(e["source"], e["target"], e["ty"]) for e in data["edges"]]


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["app"] == settings.app_name
        assert body["version"] == settings.app_version


class TestTraceRoute:
    def test_returns_events_in_order(self, client: TestClient) -> None:
        response = client.get("/data/trace")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert [e["id"] for e in data["events"]] == [1, 2, 3, 4]
        assert data["events"][1]["ref_spans"] == {"low": 12, "high": 14}


class TestGraphRoute:
    def test_merged_by_default(self, client: TestClient) -> None:
        response = client.get("/data/graph")
        assert response.status_code == 200
        data = response.json()
        assert len(data["nodes"]) == 4
        assert _edge_tuples(data) == [
            (0, 2, "Parent"),
            (0, 3, "Parent"),
            (0, 3, "Ref"),
        ]
        assert data["nodes"][1]["ref_spans"] == {"low": 12, "high": 14}

    def test_unmerged(self, client: TestClient) -> None:
        response = client.get("/data/graph", params={"merge_noops": "false"})
        assert response.status_code == 200
        assert _edge_tuples(response.json()) == [
            (0, 1, "Parent"),
            (1, 2, "Parent"),
            (0, 3, "Parent"),
            (1, 3, "Ref"),
        ]

    def test_invalid_merge_flag_returns_422(self, client: TestClient) -> None:
        response = client.get("/data/graph", params={"merge_noops": "abc"})
        assert response.status_code == 422

    def test_server_setting_is_default(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "merge_noops", False)
        response = client.get("/data/graph")
        assert len(response.json()["edges"]) == 4

    def test_detach_fallback(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "contraction_fallback", "detach")
        state.set_trace([
            Event(id=1, source=Span(low=0, high=5), ok=True),
            Event(id=2, source=Span(low=10, high=20)),
            Event(id=3, parent_id=2, source=Span(low=11, high=12), ok=True),
        ])
        response = client.get("/data/graph")
        assert response.status_code == 200
        assert response.json()["edges"] == []

    def test_empty_trace(self, client: TestClient) -> None:
        state.set_trace([])
        response = client.get("/data/graph")
        assert response.status_code == 200
        assert response.json() == {"nodes": [], "edges": []}


class TestTraceNotLoaded:
    def test_returns_500_json(self) -> None:
        with (
            patch("tracegraph.main.init_trace"),
            patch("tracegraph.main.close_trace"),
        ):
            with TestClient(app, raise_server_exceptions=False) as c:
                state._trace = None
                response = c.get("/data/graph")

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
