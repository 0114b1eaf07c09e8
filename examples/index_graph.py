"""Index Graph Example for toposort-scc.

Builds an eight-vertex acyclic graph, sorts it, then adds a self-loop and
a back edge to a copy and lists the cycles of the copy.
"""

import toposort_scc as ts

graph = ts.IndexGraph.with_vertices(8)
for source, target in [(0, 3), (1, 3), (1, 4), (2, 4), (2, 7), (3, 5), (3, 6), (3, 7), (4, 6)]:
    graph.add_edge(source, target)

print(graph.toposort_or_scc())  # Sorted(order=[0, 1, 2, 3, 4, 5, 7, 6])

cyclic = graph.copy()
cyclic.add_edge(0, 0)
cyclic.add_edge(6, 2)

print(cyclic.toposort_or_scc())  # Cycles(components=[[0], [4, 2, 6]])
print(graph.has_cycle(), cyclic.has_cycle())  # False True
