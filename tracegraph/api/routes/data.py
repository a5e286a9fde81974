"""
tracegraph/api/routes/data.py

Trace data endpoints consumed by the viewer.

GET /data/trace
    The raw trace events, in emission order.

GET /data/graph
    The event graph derived from the trace.  No-result events are merged
    out of the edge set unless ``merge_noops=false``; they stay in
    ``nodes`` so that edge indices remain valid.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query

from tracegraph.config import settings
from tracegraph.graph import ParentFallback, build, contract_no_result_nodes
from tracegraph.models.schemas.graph import GraphResponse, TraceResponse
from tracegraph.models.trace import Event
from tracegraph.state import get_trace

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get(
    "/trace",
    response_model=TraceResponse,
    summary="Get the raw trace events",
)
async def get_data(trace: list[Event] = Depends(get_trace)) -> TraceResponse:
    return TraceResponse(events=trace, total=len(trace))


@router.get(
    "/graph",
    response_model=GraphResponse,
    summary="Get the event graph",
)
async def get_graph(
    merge_noops: bool | None = Query(
        default=None,
        description="Merge no-result events out of the graph (defaults to server setting)",
    ),
    trace: list[Event] = Depends(get_trace),
) -> GraphResponse:
    """Build the graph for the loaded trace and optionally merge no-result nodes."""
    graph = build(trace)

    if merge_noops is None:
        merge_noops = settings.merge_noops
    if merge_noops:
        contract_no_result_nodes(
            graph,
            fallback=ParentFallback(settings.contraction_fallback),
        )

    logger.info(
        "graph_served",
        nodes=graph.node_count(),
        edges=graph.edge_count(),
        merged=merge_noops,
    )
    return graph.to_response()
