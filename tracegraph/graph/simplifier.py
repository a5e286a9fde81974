"""
tracegraph/graph/simplifier.py

Merge no-result events out of the graph topology.

A no-result event has neither an ``ok`` nor an ``error`` outcome.  For
each such node, in index order, every edge leaving the node is re-rooted
at the node's parent and the parent -> node edge is deleted.  The node
stays in ``graph.nodes`` so that every other index is unchanged.

Nodes must be processed strictly one after another: a chain of
no-result nodes collapses correctly only because each step sees the
edges already rewritten by the previous one.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog

from tracegraph.graph.model import Graph

logger = structlog.get_logger(__name__)


class ParentFallback(str, Enum):
    """What to do with a no-result node that has no incoming edge."""

    # Treat node 0 as the parent (compatible with existing viewers).
    ROOT = "root"
    # The node has no parent: drop its outgoing edges, children become roots.
    DETACH = "detach"


@dataclass
class Contraction:
    """Record of one merged no-result node."""

    node: int
    parent: int | None
    redirected: int
    dropped: int = 0
    fallback_used: bool = False


ContractionHook = Callable[[Contraction], None]


def contract_no_result_nodes(
    graph: Graph,
    *,
    fallback: ParentFallback = ParentFallback.ROOT,
    on_contract: ContractionHook | None = None,
) -> list[Contraction]:
    """Remove every no-result node from the edge set of *graph*, in place.

    Args:
        graph:       Graph to rewrite.  Only ``graph.edges`` is mutated.
        fallback:    Policy for a no-result node without an incoming edge.
        on_contract: Optional callback invoked with each Contraction.

    Returns:
        One Contraction per no-result node, in node index order.
    """
    contractions: list[Contraction] = []

    for n, node in enumerate(graph.nodes):
        if not node.is_no_result:
            continue

        contraction = _contract(graph, n, fallback)
        contractions.append(contraction)
        if on_contract is not None:
            on_contract(contraction)

    logger.info(
        "graph_noops_merged",
        merged=len(contractions),
        edges=graph.edge_count(),
    )
    return contractions


def _parent_edge_index(graph: Graph, n: int) -> int | None:
    """Position in ``graph.edges`` of the first edge ending at node *n*."""
    for e, edge in enumerate(graph.edges):
        if edge.target == n:
            return e
    return None


def _contract(graph: Graph, n: int, fallback: ParentFallback) -> Contraction:
    parent_edge = _parent_edge_index(graph, n)

    if parent_edge is None:
        logger.warning(
            "no_result_node_without_parent",
            index=n,
            event_id=graph.nodes[n].id,
            fallback=fallback.value,
        )
        if fallback is ParentFallback.DETACH:
            before = graph.edge_count()
            graph.edges[:] = [edge for edge in graph.edges if edge.source != n]
            return Contraction(
                node=n,
                parent=None,
                redirected=0,
                dropped=before - graph.edge_count(),
                fallback_used=True,
            )
        parent = 0
    else:
        parent = graph.edges[parent_edge].source

    redirected = 0
    for edge in graph.edges:
        if edge.source == n:
            logger.debug(
                "noop_edge_redirected",
                source=n,
                target=edge.target,
                new_source=parent,
                ty=edge.ty.value,
            )
            edge.source = parent
            redirected += 1

    if parent_edge is not None:
        del graph.edges[parent_edge]

    return Contraction(
        node=n,
        parent=parent,
        redirected=redirected,
        fallback_used=parent_edge is None,
    )
