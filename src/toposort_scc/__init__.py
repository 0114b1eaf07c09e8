"""Topological sorting (Kahn) and strongly connected components (Kosaraju)."""

__all__ = [
    "CycleError",
    "Cycles",
    "GraphDocument",
    "GraphDocumentError",
    "IndexGraph",
    "IndexGraphBuilder",
    "InvalidVertexError",
    "MappedGraph",
    "MappedGraphBuilder",
    "Sorted",
    "ToposortResult",
    "Vertex",
    "export_result_to_toml",
    "is_cyclic_component",
    "kahn_order",
    "load_graph",
    "load_graph_document",
    "parse_graph_document",
    "strongly_connected_components",
    "topological_sort",
    "toposort_or_scc",
]

from ._algorithms import (
    is_cyclic_component,
    kahn_order,
    strongly_connected_components,
    topological_sort,
    toposort_or_scc,
)
from ._errors import CycleError, InvalidVertexError
from ._graph import IndexGraph, IndexGraphBuilder, Vertex
from ._io import (
    GraphDocument,
    GraphDocumentError,
    export_result_to_toml,
    load_graph,
    load_graph_document,
    parse_graph_document,
)
from ._mapped import MappedGraph, MappedGraphBuilder
from ._result import Cycles, Sorted, ToposortResult
