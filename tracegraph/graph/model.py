"""Index-addressed graph of trace events."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tracegraph.models.schemas.graph import GraphEdgeOut, GraphResponse
from tracegraph.models.trace import Event


class EdgeType(str, Enum):
    # Direct syntactic relationship: source contains or declares target.
    PARENT = "Parent"
    # Source used the value of target for context during resolution.
    REF = "Ref"


@dataclass
class Edge:
    """Directed relationship between two node indices."""

    source: int
    target: int
    ty: EdgeType


@dataclass
class Graph:
    """An annotated graph of the events generated by the compiler.

    ``nodes`` keeps the events in trace order.  Edges refer to nodes by
    list position, so a node's index never changes once built.
    """

    nodes: list[Event] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def add_parent_edge(self, source: int, target: int) -> None:
        self.edges.append(Edge(source=source, target=target, ty=EdgeType.PARENT))

    def add_ref_edge(self, source: int, target: int) -> None:
        self.edges.append(Edge(source=source, target=target, ty=EdgeType.REF))

    def to_response(self) -> GraphResponse:
        """Serialise nodes verbatim and edges as ``source``/``target``/``ty``."""
        return GraphResponse(
            nodes=list(self.nodes),
            edges=[
                GraphEdgeOut(source=e.source, target=e.target, ty=e.ty.value)
                for e in self.edges
            ],
        )
