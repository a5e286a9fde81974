"""
tracegraph/graph/builder.py

Derive the graph topology from a set of compiler trace events.

Hierarchy edges
---------------
  A node with a ``parent_id`` is linked from the first node carrying that
  id.  A node without one is linked from the first *later* node whose
  span encloses it; events are emitted children-first, so that is the
  nearest enclosing step.

Reference edges
---------------
  A node with a ``ref_span`` is linked to every node whose own span is
  exactly that span.

Neither pass raises on inconsistent data: a link with no match simply
produces no edge.  Both passes are quadratic in the number of events.
"""
from __future__ import annotations

from collections.abc import Iterable

import structlog

from tracegraph.graph.model import Graph
from tracegraph.models.trace import Event

logger = structlog.get_logger(__name__)


def build(events: Iterable[Event]) -> Graph:
    """Construct the hierarchy and reference edges for *events*.

    Args:
        events: Trace events in emission order.

    Returns:
        Graph owning a copy of the events and every inferred edge.
    """
    graph = Graph(nodes=list(events))

    _construct_hierarchy_edges(graph)
    _construct_ref_edges(graph)

    logger.info(
        "graph_built",
        nodes=graph.node_count(),
        edges=graph.edge_count(),
    )
    return graph


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _find_by_id(nodes: list[Event], event_id: int) -> int | None:
    """Index of the first node carrying *event_id*, or None."""
    for j, node in enumerate(nodes):
        if node.id == event_id:
            return j
    return None


def _find_enclosing(nodes: list[Event], i: int) -> int | None:
    """Index of the first node after *i* whose span contains node *i*, or None."""
    span = nodes[i].source
    for j in range(i + 1, len(nodes)):
        if nodes[j].source.contains(span):
            # The first match is the parent; scanning on would link ancestors.
            return j
    return None


def _construct_hierarchy_edges(graph: Graph) -> None:
    nodes = graph.nodes
    for i, node in enumerate(nodes):
        if node.parent_id is not None:
            parent = _find_by_id(nodes, node.parent_id)
        else:
            parent = _find_enclosing(nodes, i)

        if parent is None:
            continue
        graph.add_parent_edge(parent, i)


def _construct_ref_edges(graph: Graph) -> None:
    nodes = graph.nodes
    for i, node in enumerate(nodes):
        if node.ref_span is None:
            continue
        for j, other in enumerate(nodes):
            if other.source == node.ref_span:
                graph.add_ref_edge(i, j)
