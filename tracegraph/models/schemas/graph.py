from pydantic import BaseModel, Field

from tracegraph.models.trace import Event


class GraphEdgeOut(BaseModel):
    """An edge in the event graph, addressed by node index."""
    source: int
    target: int
    ty: str = Field(..., description="Parent or Ref")


class GraphResponse(BaseModel):
    """Full event graph for the viewer."""
    nodes: list[Event]
    edges: list[GraphEdgeOut]


class TraceResponse(BaseModel):
    """Raw trace events as loaded from the compiler output."""
    events: list[Event]
    total: int
