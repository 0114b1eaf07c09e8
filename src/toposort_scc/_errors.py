"""Exceptions raised by graph construction and the raising sort helpers."""

from collections.abc import Hashable, Sequence


class InvalidVertexError(ValueError):
    """Raised when an edge refers to a vertex that is not in the graph.

    Attributes:
        vertex: The offending index, or node identifier when `named` is set.
        vertex_count: Number of vertices in the graph.

    """

    def __init__(self, vertex: Hashable, vertex_count: int, *, named: bool = False) -> None:
        self.vertex = vertex
        self.vertex_count = vertex_count
        if named:
            msg = f"Unknown node {vertex!r} (graph has {vertex_count} nodes)"
        else:
            msg = f"Vertex index {vertex} is out of range for a graph with {vertex_count} vertices"
        super().__init__(msg)


class CycleError(ValueError):
    """Raised when a topological order is requested for a cyclic graph.

    Attributes:
        components: The cyclic strongly connected components of the graph.

    """

    def __init__(self, components: Sequence[Sequence[Hashable]]) -> None:
        self.components = [list(component) for component in components]
        shown = ", ".join(str(component) for component in self.components)
        super().__init__(f"Cycle detected in graph: {shown}")
