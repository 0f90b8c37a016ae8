"""Order the steps that provision an application database.

Some users already exist on the server, so their steps are marked as
satisfied and everything that is only needed to create them is skipped.
"""

import dagwalk

graph: dagwalk.DependencyGraph[str] = dagwalk.DependencyGraph()
graph.register_dependencies("superconn", [])
graph.register_dependencies("owneruser", ["superconn"])
graph.register_dependencies("appuser", ["superconn"])
graph.register_dependencies("database", ["owneruser"])
graph.register_dependencies("ownerconn", ["database", "owneruser"])
graph.register_dependencies("adminconn", ["database"])
graph.register_dependencies("extensions", ["database", "adminconn"])
graph.register_dependencies("schema_table", ["database", "ownerconn"])
graph.register_dependencies("schemas", ["ownerconn", "extensions", "schema_table", "appuser"])
graph.register_dependencies("appconn", ["database", "appuser", "schemas"])

graph.mark_as_satisfied(["owneruser", "appuser"])

if __name__ == "__main__":
    for step in graph.satisfying_walk("appconn"):
        print(f"provisioning {step}")

    # Everything is in place now, so there is nothing left to do
    assert list(graph.dependencies_of("appconn")) == []
