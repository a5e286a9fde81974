from tracegraph.graph.builder import build
from tracegraph.graph.model import Edge, EdgeType, Graph
from tracegraph.graph.simplifier import (
    Contraction,
    ContractionHook,
    ParentFallback,
    contract_no_result_nodes,
)

__all__ = [
    "build",
    "Edge",
    "EdgeType",
    "Graph",
    "Contraction",
    "ContractionHook",
    "ParentFallback",
    "contract_no_result_nodes",
]
