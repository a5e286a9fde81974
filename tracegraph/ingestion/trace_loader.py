"""
tracegraph/ingestion/trace_loader.py

Read the compiler's ``trace.json`` into Event records.

The file is either a bare JSON array of events or an object with an
``events`` array.  Event order in the file is preserved; it is the
order the graph builder relies on.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from tracegraph.models.trace import Event

logger = structlog.get_logger(__name__)

DEFAULT_TRACE_FILENAME = "trace.json"

_EVENTS_ADAPTER: TypeAdapter[list[Event]] = TypeAdapter(list[Event])


class TraceFormatError(ValueError):
    """The trace file exists but does not hold a valid event list."""


def trace_path(target_dir: str | Path, filename: str = DEFAULT_TRACE_FILENAME) -> Path:
    """Return the path of the trace file inside a compiler target directory."""
    return Path(target_dir) / filename


def parse_trace(payload: Any) -> list[Event]:
    """Validate decoded JSON into a list of events.

    Raises:
        TraceFormatError: If the payload is not an event list.
    """
    if isinstance(payload, dict):
        payload = payload.get("events")
    if not isinstance(payload, list):
        raise TraceFormatError("Trace must be a list of events or an object with an 'events' list.")

    try:
        return _EVENTS_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise TraceFormatError(f"Invalid trace event: {exc}") from exc


def load_trace(path: str | Path) -> list[Event]:
    """Load and validate the trace file at *path*.

    Args:
        path: Path to ``trace.json``.

    Returns:
        Events in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        TraceFormatError:  If the file is not UTF-8 JSON or fails validation.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Trace file not found: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise TraceFormatError(f"Trace file {path.name} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TraceFormatError(f"Trace file {path.name} is not valid JSON: {exc}") from exc

    events = parse_trace(payload)
    logger.info("trace_loaded", path=str(path), events=len(events))
    return events
