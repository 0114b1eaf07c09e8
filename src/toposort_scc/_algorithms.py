"""Topological sorting and strongly connected components over an `IndexGraph`."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from ._result import Cycles, Sorted

if TYPE_CHECKING:
    from ._graph import IndexGraph

logger = logging.getLogger(__name__)


def kahn_order(graph: IndexGraph) -> list[int]:
    """Run Kahn's algorithm and return the vertices it manages to place.

    Vertices with in-degree zero are queued in ascending index order, and
    vertices freed while processing are appended to the back of the queue.
    The result contains every vertex iff the graph is acyclic.

    Args:
        graph: The graph to sort. It is not modified.

    Returns:
        The placed vertices in topological order. Shorter than the vertex
        count when the graph has a cycle.

    """
    # Calculate in-degree for each vertex, one unit per edge
    indegree = [0] * len(graph)
    for vertex in graph:
        for target in vertex.out_edges:
            indegree[target] += 1

    queue = deque(index for index, degree in enumerate(indegree) if degree == 0)
    order: list[int] = []

    while queue:
        index = queue.popleft()
        order.append(index)
        for target in graph[index].out_edges:
            indegree[target] -= 1
            if indegree[target] == 0:
                queue.append(target)

    logger.debug("Kahn's algorithm placed %d of %d vertices", len(order), len(graph))
    return order


def topological_sort(graph: IndexGraph) -> list[int]:
    """Sort a graph topologically (edge sources before edge targets).

    Ties between vertices that become ready together are broken by ascending
    index, so the result is reproducible for a given edge insertion order.

    Args:
        graph: The graph to sort.

    Returns:
        List of all vertex indices in topological order.

    Raises:
        CycleError: If the graph contains a cycle. The error carries the
            cyclic components.

    Example:
        >>> from toposort_scc import IndexGraph
        >>> topological_sort(IndexGraph.from_adjacency([[1], [2], []]))
        [0, 1, 2]

    """
    return toposort_or_scc(graph).unwrap()


def _finish_order(graph: IndexGraph) -> list[int]:
    """Depth-first traversal along outgoing edges, returning vertices in post-order."""
    visited = [False] * len(graph)
    finished: list[int] = []

    for root in range(len(graph)):
        if visited[root]:
            continue
        visited[root] = True
        # Each frame is (vertex, position of the next edge to follow)
        stack = [(root, 0)]
        while stack:
            index, edge = stack.pop()
            out_edges = graph[index].out_edges
            if edge < len(out_edges):
                stack.append((index, edge + 1))
                target = out_edges[edge]
                if not visited[target]:
                    visited[target] = True
                    stack.append((target, 0))
            else:
                finished.append(index)

    return finished


def strongly_connected_components(graph: IndexGraph) -> list[list[int]]:
    """Partition the vertices of a graph into strongly connected components.

    Uses Kosaraju's algorithm with explicit stacks: a depth-first pass along
    outgoing edges records the finishing order, then a second pass follows
    incoming edges (the transpose) from each unassigned vertex in decreasing
    finishing order.

    Within a component, members are listed in the order the second pass
    reaches them. The root of a component appears where the traversal comes
    back to it through a cycle; a root that is never reached again is the
    sole member of its component.

    Args:
        graph: The graph to partition. It is not modified.

    Returns:
        Every component, in the order its root was processed. Each vertex
        appears in exactly one component.

    Example:
        >>> from toposort_scc import IndexGraph
        >>> strongly_connected_components(IndexGraph.from_adjacency([[1], [0], []]))
        [[2], [1, 0]]

    """
    finished = _finish_order(graph)
    assigned = [False] * len(graph)
    components: list[list[int]] = []

    for root in reversed(finished):
        if assigned[root]:
            continue

        component: list[int] = []
        stack = [(root, 0)]
        while stack:
            index, edge = stack.pop()
            in_edges = graph[index].in_edges
            if edge < len(in_edges):
                stack.append((index, edge + 1))
                source = in_edges[edge]
                if not assigned[source]:
                    assigned[source] = True
                    component.append(source)
                    stack.append((source, 0))

        if not assigned[root]:
            # Not on any cycle, nothing else can be collected from here
            assigned[root] = True
            component.append(root)

        components.append(component)

    logger.debug("Kosaraju's algorithm found %d components", len(components))
    return components


def is_cyclic_component(graph: IndexGraph, component: list[int]) -> bool:
    """Check whether a strongly connected component contains a cycle.

    A component is cyclic if it has at least two members, or if its only
    member has an edge to itself.
    """
    if len(component) >= 2:  # noqa: PLR2004
        return True
    return len(component) == 1 and graph.has_self_loop(component[0])


def toposort_or_scc(graph: IndexGraph) -> Sorted[int] | Cycles[int]:
    """Sort a graph topologically, or find its cycles if it has any.

    If the graph is acyclic, returns `Sorted` with the order produced by
    Kahn's algorithm. Otherwise returns `Cycles` with the strongly connected
    components that contain a cycle, in discovery order. Vertices that are
    merely downstream of a cycle are not reported.

    An empty graph is acyclic and yields an empty order.

    Args:
        graph: The graph to analyse. It is not modified.

    Returns:
        Exactly one of `Sorted` or `Cycles`.

    Example:
        >>> from toposort_scc import IndexGraph
        >>> toposort_or_scc(IndexGraph.from_adjacency([[1], [0]]))
        Cycles(components=[[1, 0]])

    """
    order = kahn_order(graph)
    if len(order) == len(graph):
        return Sorted(order)

    cycles = [
        component for component in strongly_connected_components(graph) if is_cyclic_component(graph, component)
    ]
    logger.debug("Found %d cyclic components", len(cycles))
    return Cycles(cycles)
