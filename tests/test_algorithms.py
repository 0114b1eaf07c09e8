"""Tests for Kahn's algorithm, Kosaraju's algorithm and the combined query."""

import random

import pytest

from toposort_scc import (
    CycleError,
    Cycles,
    IndexGraph,
    Sorted,
    is_cyclic_component,
    kahn_order,
    strongly_connected_components,
    topological_sort,
    toposort_or_scc,
)

# 0->3, 1->3, 1->4, 2->4, 2->7, 3->5, 3->6, 3->7, 4->6
EXAMPLE_EDGES = [(0, 3), (1, 3), (1, 4), (2, 4), (2, 7), (3, 5), (3, 6), (3, 7), (4, 6)]


def _example_graph() -> IndexGraph:
    graph = IndexGraph.with_vertices(8)
    for source, target in EXAMPLE_EDGES:
        graph.add_edge(source, target)
    return graph


def _reachable(graph: IndexGraph, start: int) -> set[int]:
    seen = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for target in graph.successors(current):
            if target not in seen:
                seen.add(target)
                stack.append(target)
    return seen


def _random_graph(rng: random.Random, *, acyclic: bool) -> IndexGraph:
    count = rng.randint(0, 12)
    graph = IndexGraph.with_vertices(count)
    rank = list(range(count))
    rng.shuffle(rank)
    for _ in range(rng.randint(0, count * 3)):
        source, target = rng.randrange(count), rng.randrange(count)
        if acyclic:
            if source == target:
                continue
            if rank[source] > rank[target]:
                source, target = target, source
        graph.add_edge(source, target)
    return graph


class TestWorkedExamples:
    """Literal regression cases."""

    def test_acyclic_example(self) -> None:
        result = toposort_or_scc(_example_graph())
        assert result == Sorted([0, 1, 2, 3, 4, 5, 7, 6])

    def test_cyclic_example(self) -> None:
        graph = _example_graph().copy()
        graph.add_edge(0, 0)
        graph.add_edge(6, 2)

        result = toposort_or_scc(graph)

        assert result == Cycles([[0], [4, 2, 6]])

    def test_cyclic_example_leaves_original_acyclic(self) -> None:
        graph = _example_graph()
        cyclic = graph.copy()
        cyclic.add_edge(0, 0)
        cyclic.add_edge(6, 2)

        assert isinstance(toposort_or_scc(cyclic), Cycles)
        assert toposort_or_scc(graph) == Sorted([0, 1, 2, 3, 4, 5, 7, 6])

    def test_empty_graph(self) -> None:
        assert toposort_or_scc(IndexGraph.with_vertices(0)) == Sorted([])

    def test_single_vertex(self) -> None:
        assert toposort_or_scc(IndexGraph.with_vertices(1)) == Sorted([0])

    def test_single_self_loop(self) -> None:
        assert toposort_or_scc(IndexGraph.from_adjacency([[0]])) == Cycles([[0]])

    def test_two_cycle(self) -> None:
        result = toposort_or_scc(IndexGraph.from_adjacency([[1], [0]]))
        assert isinstance(result, Cycles)
        assert [set(component) for component in result.components] == [{0, 1}]
        # Member order follows the second traversal over incoming edges
        assert result.components == [[1, 0]]

    def test_several_cycles(self) -> None:
        graph = IndexGraph.from_adjacency([[1], [2, 4, 5], [3, 6], [2, 7], [0, 5], [6], [5], [3, 6]])
        assert toposort_or_scc(graph) == Cycles([[4, 1, 0], [3, 2, 7], [5, 6]])

    def test_cycle_with_downstream_vertices(self) -> None:
        graph = IndexGraph.from_adjacency([[3], [3, 4], [4], [5, 6, 7], [6], [2], [2], []])
        assert toposort_or_scc(graph) == Cycles([[6, 4, 2]])


class TestKahnOrder:
    """Tests for Kahn's algorithm."""

    def test_ties_broken_by_ascending_index(self) -> None:
        graph = IndexGraph.with_vertices(4)
        graph.add_edge(3, 0)
        assert kahn_order(graph) == [1, 2, 3, 0]

    def test_freed_vertices_go_to_back_of_queue(self) -> None:
        # 0 frees 3 before 1 and 2 are processed; 3 must wait for them
        graph = IndexGraph.from_adjacency([[3], [], [], []])
        assert kahn_order(graph) == [0, 1, 2, 3]

    def test_edge_order_drives_release_order(self) -> None:
        graph = IndexGraph.from_adjacency([[2, 1], [], []])
        assert kahn_order(graph) == [0, 2, 1]

    def test_duplicate_edges_need_every_decrement(self) -> None:
        graph = IndexGraph.with_vertices(3)
        graph.add_edge(0, 2)
        graph.add_edge(0, 2)
        graph.add_edge(1, 2)
        assert kahn_order(graph) == [0, 1, 2]

    def test_partial_order_on_cycle(self) -> None:
        graph = IndexGraph.from_adjacency([[1], [2], [1]])
        assert kahn_order(graph) == [0]

    def test_does_not_modify_graph(self) -> None:
        graph = _example_graph()
        before = graph.copy()
        kahn_order(graph)
        assert graph == before


class TestTopologicalSort:
    """Tests for the raising topological_sort helper."""

    def test_linear_chain(self) -> None:
        assert topological_sort(IndexGraph.from_adjacency([[1], [2], []])) == [0, 1, 2]

    def test_cycle_detection(self) -> None:
        with pytest.raises(CycleError, match="Cycle") as excinfo:
            topological_sort(IndexGraph.from_adjacency([[1], [0]]))
        assert excinfo.value.components == [[1, 0]]

    def test_self_loop_detection(self) -> None:
        with pytest.raises(ValueError, match="Cycle"):
            topological_sort(IndexGraph.from_adjacency([[0]]))

    def test_graph_methods(self) -> None:
        graph = _example_graph()
        assert graph.topological_order() == [0, 1, 2, 3, 4, 5, 7, 6]
        assert graph.toposort_or_scc() == Sorted([0, 1, 2, 3, 4, 5, 7, 6])
        assert graph.has_cycle() is False

        graph.add_edge(7, 1)
        assert graph.has_cycle() is True
        with pytest.raises(CycleError):
            graph.topological_order()


class TestStronglyConnectedComponents:
    """Tests for Kosaraju's algorithm."""

    def test_full_partition_includes_singletons(self) -> None:
        graph = _example_graph()
        graph.add_edge(0, 0)
        graph.add_edge(6, 2)

        components = strongly_connected_components(graph)

        assert components == [[1], [0], [3], [4, 2, 6], [7], [5]]

    def test_acyclic_graph_gives_singletons(self) -> None:
        components = strongly_connected_components(IndexGraph.from_adjacency([[1], [2], []]))
        assert components == [[0], [1], [2]]

    def test_empty_graph(self) -> None:
        assert strongly_connected_components(IndexGraph.with_vertices(0)) == []

    def test_visits_every_root(self) -> None:
        # Vertex 0 reaches nothing; the cycle is only found from later roots
        graph = IndexGraph.from_adjacency([[], [2], [1]])
        components = strongly_connected_components(graph)
        assert sorted(sorted(component) for component in components) == [[0], [1, 2]]

    def test_long_chain_does_not_recurse(self) -> None:
        count = 50_000
        graph = IndexGraph.with_vertices(count)
        for index in range(count - 1):
            graph.add_edge(index, index + 1)
        graph.add_edge(count - 1, 0)

        components = strongly_connected_components(graph)

        assert len(components) == 1
        assert sorted(components[0]) == list(range(count))

    def test_is_cyclic_component(self) -> None:
        graph = IndexGraph.from_adjacency([[0], [2], [1], []])
        assert is_cyclic_component(graph, [0])
        assert is_cyclic_component(graph, [2, 1])
        assert not is_cyclic_component(graph, [3])
        assert not is_cyclic_component(graph, [])


class TestProperties:
    """Invariants checked over seeded random graphs."""

    @pytest.mark.parametrize("seed", range(25))
    def test_acyclic_order_is_valid_permutation(self, seed: int) -> None:
        graph = _random_graph(random.Random(seed), acyclic=True)

        result = toposort_or_scc(graph)

        assert isinstance(result, Sorted)
        assert sorted(result.order) == list(range(len(graph)))
        position = {vertex: index for index, vertex in enumerate(result.order)}
        for source, target in graph.edges():
            assert position[source] < position[target]

    @pytest.mark.parametrize("seed", range(25))
    def test_deterministic(self, seed: int) -> None:
        graph = _random_graph(random.Random(seed), acyclic=False)
        assert toposort_or_scc(graph) == toposort_or_scc(graph.copy())

    @pytest.mark.parametrize("seed", range(25))
    def test_partition_is_complete_and_strongly_connected(self, seed: int) -> None:
        graph = _random_graph(random.Random(seed), acyclic=False)

        components = strongly_connected_components(graph)

        members = [vertex for component in components for vertex in component]
        assert sorted(members) == list(range(len(graph)))
        reach = {vertex: _reachable(graph, vertex) for vertex in range(len(graph))}
        for component in components:
            for a in component:
                for b in component:
                    assert b in reach[a]
        # Maximality: vertices in different components are not mutually reachable
        owner = {vertex: number for number, component in enumerate(components) for vertex in component}
        for a in range(len(graph)):
            for b in reach[a]:
                if a in reach[b]:
                    assert owner[a] == owner[b]

    @pytest.mark.parametrize("seed", range(25))
    def test_exactly_one_outcome(self, seed: int) -> None:
        graph = _random_graph(random.Random(seed), acyclic=False)

        result = toposort_or_scc(graph)

        match result:
            case Sorted(order):
                assert len(order) == len(graph)
                assert not graph.has_cycle()
            case Cycles(components):
                assert components
                assert graph.has_cycle()
                expected = [c for c in strongly_connected_components(graph) if is_cyclic_component(graph, c)]
                assert components == expected
                for component in components:
                    assert len(component) >= 2 or graph.has_self_loop(component[0])
