"""Build Order Example for toposort-scc.

This example orders the steps of a small build pipeline whose steps are
named by strings rather than vertex indices. A `MappedGraph` assigns each
step a dense index, runs the algorithms, and reports the answer in step names.

Adding a dependency from `package` back to `configure` turns the pipeline
into a cycle, and the same call then reports the offending steps instead.
"""

import toposort_scc as ts

steps = {
    "fetch": ["configure"],
    "configure": ["compile"],
    "compile": ["test", "package"],
    "test": ["package"],
    "package": [],
}

pipeline = ts.MappedGraph.from_successors(steps)

match pipeline.toposort_or_scc():
    case ts.Sorted(order):
        print("Build order:", " -> ".join(order))
    case ts.Cycles(components):
        print("Cyclic steps:", components)

# Experiment on a copy so the original pipeline stays acyclic
broken = pipeline.copy()
broken.add_edge("package", "configure")

match broken.toposort_or_scc():
    case ts.Sorted(order):
        print("Build order:", " -> ".join(order))
    case ts.Cycles(components):
        for component in components:
            print("Cyclic steps:", ", ".join(component))
