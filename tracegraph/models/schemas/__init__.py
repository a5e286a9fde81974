from tracegraph.models.schemas.graph import GraphEdgeOut, GraphResponse, TraceResponse

__all__ = [
    "GraphEdgeOut",
    "GraphResponse",
    "TraceResponse",
]
