"""
tracegraph/api/middleware.py

DataRequestMiddleware
    Wraps every request under ``/data``:
      - stamps the response with ``X-Trace-Events``, the number of events in
        the loaded trace, so the viewer can tell which snapshot it is seeing;
      - logs one ``data_request`` line with the status, latency, the
        ``merge_noops`` flag the caller asked for and the trace size.
    Health checks and OpenAPI assets pass through untouched.
"""
from __future__ import annotations

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from tracegraph import state

logger = structlog.get_logger(__name__)

DATA_PREFIX = "/data"
TRACE_EVENTS_HEADER = "X-Trace-Events"


class DataRequestMiddleware(BaseHTTPMiddleware):
    """Annotate and log requests for trace data."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not request.url.path.startswith(DATA_PREFIX):
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        trace_events = state.trace_size()
        if trace_events is not None:
            response.headers[TRACE_EVENTS_HEADER] = str(trace_events)

        logger.info(
            "data_request",
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
            merge_noops=request.query_params.get("merge_noops"),
            trace_events=trace_events,
        )
        return response
