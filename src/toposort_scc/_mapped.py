"""Graphs over arbitrary hashable node identifiers."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._errors import InvalidVertexError
from ._graph import IndexGraph

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from ._result import Cycles, Sorted


@dataclass(slots=True)
class MappedGraphBuilder[T: Hashable]:
    """Adds edges to a `MappedGraph` on behalf of one bound node."""

    graph: MappedGraph[T]
    node: T

    def add_out_edge(self, target: T) -> None:
        """Add an edge from the bound node to `target`."""
        self.graph.add_edge(self.node, target)

    def add_in_edge(self, source: T) -> None:
        """Add an edge from `source` to the bound node."""
        self.graph.add_edge(source, self.node)


@dataclass(slots=True)
class MappedGraph[T: Hashable]:
    """A directed graph whose nodes are arbitrary hashable identifiers.

    Every node is assigned a dense index in first-seen order, and edges are
    stored in an `IndexGraph` over those indices. Algorithm results are
    translated back to the original identifiers.

    Attributes:
        _graph: The proxy graph over dense indices.
        _nodes: Node identifier for each index.
        _index: Index for each node identifier.

    """

    _graph: IndexGraph = field(default_factory=IndexGraph)
    _nodes: list[T] = field(default_factory=list)
    _index: dict[T, int] = field(default_factory=dict)

    @classmethod
    def from_nodes(
        cls,
        nodes: Iterable[T],
        fill: Callable[[MappedGraphBuilder[T], T], None] | None = None,
    ) -> MappedGraph[T]:
        """Build a graph over a fixed set of nodes.

        If given, `fill` is called once per node, in order, with a builder
        bound to that node. Edges may only refer to the given nodes.

        Args:
            nodes: The node identifiers. Duplicates are ignored.
            fill: Callback adding the edges of one node.

        Returns:
            A new MappedGraph instance.

        Raises:
            InvalidVertexError: If `fill` refers to an unknown node.

        """
        unique = list(dict.fromkeys(nodes))
        graph = cls(
            _graph=IndexGraph.with_vertices(len(unique)),
            _nodes=unique,
            _index={node: index for index, node in enumerate(unique)},
        )
        if fill is not None:
            for node in unique:
                fill(MappedGraphBuilder(graph, node), node)
        return graph

    @classmethod
    def from_successors(cls, successors: Mapping[T, Iterable[T]]) -> MappedGraph[T]:
        """Build a graph from a mapping of node to its ordered successors.

        Nodes are indexed in mapping order first, then successors that are not
        keys are indexed in the order they are encountered.

        Example:
            >>> graph = MappedGraph.from_successors({"a": ["b"], "b": ["c"]})
            >>> graph.nodes
            ('a', 'b', 'c')

        """
        targets = {node: list(succs) for node, succs in successors.items()}
        graph = cls.from_nodes(
            [*targets, *(target for succs in targets.values() for target in succs)],
        )
        for node, succs in targets.items():
            for target in succs:
                graph.add_edge(node, target)
        return graph

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]]) -> MappedGraph[T]:
        """Build a graph from a list of (source, target) edges.

        Nodes are indexed in the order they first appear.

        Example:
            >>> graph = MappedGraph.from_edges([("a", "b"), ("b", "c")])
            >>> graph.successors("a")
            ('b',)

        """
        edge_list = list(edges)
        graph = cls.from_nodes(node for edge in edge_list for node in edge)
        for source, target in edge_list:
            graph.add_edge(source, target)
        return graph

    @property
    def nodes(self) -> tuple[T, ...]:
        """All nodes in index order."""
        return tuple(self._nodes)

    @property
    def index_graph(self) -> IndexGraph:
        """An independent copy of the proxy graph."""
        return self._graph.copy()

    def index_of(self, node: T) -> int:
        """Get the dense index assigned to a node.

        Raises:
            InvalidVertexError: If the node is not in the graph.

        """
        try:
            return self._index[node]
        except KeyError:
            raise InvalidVertexError(node, len(self._nodes), named=True) from None

    def node_at(self, index: int) -> T:
        """Get the node identifier stored at a dense index."""
        if not 0 <= index < len(self._nodes):
            raise InvalidVertexError(index, len(self._nodes))
        return self._nodes[index]

    def add_edge(self, source: T, target: T) -> None:
        """Append an edge ``source -> target`` between two known nodes."""
        self._graph.add_edge(self.index_of(source), self.index_of(target))

    def successors(self, node: T) -> tuple[T, ...]:
        """Direct successors of a node, in insertion order."""
        return tuple(self._nodes[index] for index in self._graph.successors(self.index_of(node)))

    def predecessors(self, node: T) -> tuple[T, ...]:
        """Direct predecessors of a node, in insertion order."""
        return tuple(self._nodes[index] for index in self._graph.predecessors(self.index_of(node)))

    def toposort_or_scc(self) -> Sorted[T] | Cycles[T]:
        """Sort the graph topologically or report its cyclic components.

        Returns:
            `Sorted` with every node in topological order, or `Cycles` with
            the cyclic components, both expressed in node identifiers.

        """
        return self._graph.toposort_or_scc().map(self._nodes.__getitem__)

    def topological_order(self) -> list[T]:
        """Return nodes in topological order.

        Raises:
            CycleError: If the graph contains a cycle.

        """
        return self.toposort_or_scc().unwrap()

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        return self._graph.has_cycle()

    def copy(self) -> MappedGraph[T]:
        """Return an independent copy of the graph."""
        return MappedGraph(self._graph.copy(), list(self._nodes), dict(self._index))

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._index
