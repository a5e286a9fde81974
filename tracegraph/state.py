"""Process-wide trace snapshot shared by the API routes."""
import asyncio

from tracegraph.config import settings
from tracegraph.ingestion.trace_loader import load_trace
from tracegraph.models.trace import Event

_trace: list[Event] | None = None


async def init_trace() -> None:
    """Load the trace from the configured target directory (called on app startup).

    Large traces take a while to parse, so the read runs off the event loop.
    """
    global _trace
    _trace = await asyncio.to_thread(load_trace, settings.trace_path)


async def close_trace() -> None:
    """Drop the loaded trace (called on app shutdown)."""
    global _trace
    _trace = None


def set_trace(events: list[Event]) -> None:
    """Install an already-loaded trace.

    For embedding the app without a target directory, e.g. when the caller
    already holds the events or in tests.
    """
    global _trace
    _trace = list(events)


async def get_trace() -> list[Event]:
    """FastAPI dependency returning the loaded trace events."""
    if _trace is None:
        raise RuntimeError("Trace not loaded. Call init_trace() first.")
    return _trace


def trace_size() -> int | None:
    """Number of loaded events, or None when no trace is loaded."""
    return None if _trace is None else len(_trace)
