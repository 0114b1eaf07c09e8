"""Adjacency-list graph over dense vertex indices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._errors import InvalidVertexError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Sequence

    from ._result import Cycles, Sorted


@dataclass(slots=True)
class Vertex:
    """Incoming and outgoing edges of a single vertex.

    Both lists keep insertion order. A parallel edge appears once per
    insertion and a self-loop appears in both lists of the same vertex.
    """

    in_edges: list[int] = field(default_factory=list)
    out_edges: list[int] = field(default_factory=list)

    @property
    def in_degree(self) -> int:
        """Number of edges ending at this vertex."""
        return len(self.in_edges)

    @property
    def out_degree(self) -> int:
        """Number of edges starting at this vertex."""
        return len(self.out_edges)


@dataclass(slots=True)
class IndexGraphBuilder:
    """Adds edges to a graph on behalf of one bound vertex."""

    graph: IndexGraph
    index: int

    def add_out_edge(self, target: int) -> None:
        """Add an edge from the bound vertex to `target`."""
        self.graph.add_edge(self.index, target)

    def add_in_edge(self, source: int) -> None:
        """Add an edge from `source` to the bound vertex."""
        self.graph.add_edge(source, self.index)


@dataclass(slots=True)
class IndexGraph:
    """A directed graph with a fixed number of vertices indexed ``0..n-1``.

    Edges are stored per vertex in insertion order, which drives traversal
    order and therefore the order of algorithm output. Edges can be added but
    never removed. Self-loops and duplicate edges are kept as given.

    Attributes:
        _vertices: One `Vertex` per index.

    """

    _vertices: list[Vertex] = field(default_factory=list)

    @classmethod
    def with_vertices(cls, count: int) -> IndexGraph:
        """Create a graph with `count` vertices and no edges.

        Raises:
            ValueError: If `count` is negative.

        """
        if count < 0:
            msg = f"Vertex count must be non-negative, got {count}"
            raise ValueError(msg)
        return cls([Vertex() for _ in range(count)])

    @classmethod
    def from_adjacency(cls, adjacency: Sequence[Iterable[int]]) -> IndexGraph:
        """Build a graph from one ordered sequence of edge targets per vertex.

        Example:
            >>> graph = IndexGraph.from_adjacency([[1], [2], []])
            >>> list(graph.edges())
            [(0, 1), (1, 2)]

        """
        graph = cls.with_vertices(len(adjacency))
        for source, targets in enumerate(adjacency):
            for target in targets:
                graph.add_edge(source, target)
        return graph

    @classmethod
    def from_graph[T](
        cls,
        items: Sequence[T],
        fill: Callable[[IndexGraphBuilder, T], None],
    ) -> IndexGraph:
        """Build a graph with one vertex per element of `items`.

        `fill` is called once per element, in order, with a builder bound to
        that element's index.

        Example:
            >>> def fill(builder, targets):
            ...     for target in targets:
            ...         builder.add_out_edge(target)
            >>> IndexGraph.from_graph([[1], []], fill).successors(0)
            (1,)

        """
        graph = cls.with_vertices(len(items))
        for index, item in enumerate(items):
            fill(IndexGraphBuilder(graph, index), item)
        return graph

    @property
    def vertex_count(self) -> int:
        """Number of vertices in the graph."""
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        """Total number of edges, counting duplicates and self-loops."""
        return sum(vertex.out_degree for vertex in self._vertices)

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._vertices):
            raise InvalidVertexError(index, len(self._vertices))

    def add_edge(self, source: int, target: int) -> None:
        """Append an edge ``source -> target``.

        Duplicate edges are not detected.

        Raises:
            InvalidVertexError: If either index is out of range.

        """
        self._check(source)
        self._check(target)
        self._vertices[source].out_edges.append(target)
        self._vertices[target].in_edges.append(source)

    def successors(self, index: int) -> tuple[int, ...]:
        """Targets of the outgoing edges of a vertex, in insertion order."""
        return tuple(self[index].out_edges)

    def predecessors(self, index: int) -> tuple[int, ...]:
        """Sources of the incoming edges of a vertex, in insertion order."""
        return tuple(self[index].in_edges)

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield every edge as ``(source, target)``, grouped by source."""
        for source, vertex in enumerate(self._vertices):
            for target in vertex.out_edges:
                yield source, target

    def has_self_loop(self, index: int) -> bool:
        """Check whether a vertex has an edge to itself."""
        return index in self[index].out_edges

    def transpose(self) -> None:
        """Reverse the direction of every edge in place."""
        for vertex in self._vertices:
            vertex.in_edges, vertex.out_edges = vertex.out_edges, vertex.in_edges

    def transposed(self) -> IndexGraph:
        """Return a copy of the graph with every edge reversed."""
        graph = self.copy()
        graph.transpose()
        return graph

    def copy(self) -> IndexGraph:
        """Return an independent copy sharing no edge storage with this graph."""
        return IndexGraph([Vertex(list(v.in_edges), list(v.out_edges)) for v in self._vertices])

    def toposort_or_scc(self) -> Sorted[int] | Cycles[int]:
        """Sort the graph topologically or report its cyclic components.

        See `toposort_scc.toposort_or_scc`.
        """
        from ._algorithms import toposort_or_scc  # noqa: PLC0415

        return toposort_or_scc(self)

    def topological_order(self) -> list[int]:
        """Return the topological order.

        Raises:
            CycleError: If the graph contains a cycle.

        """
        from ._algorithms import topological_sort  # noqa: PLC0415

        return topological_sort(self)

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle (self-loops included)."""
        from ._algorithms import kahn_order  # noqa: PLC0415

        return len(kahn_order(self)) != len(self._vertices)

    def __copy__(self) -> IndexGraph:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, object]) -> IndexGraph:
        return self.copy()

    def __len__(self) -> int:
        """Return the number of vertices in the graph."""
        return len(self._vertices)

    def __getitem__(self, index: int) -> Vertex:
        self._check(index)
        return self._vertices[index]

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)
