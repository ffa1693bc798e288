import networkx as nx


def build_dependency_graph(tasks):
    """
    Build a directed graph of the dependency annotations (predecessor -> task).

    The graph is for display only. References to missing predecessors are
    skipped and cycles are allowed; nothing is scheduled from it.

    Args:
        tasks: Iterable of Task objects

    Returns:
        networkx.DiGraph: Graph whose edges carry the dependency type
    """
    tasks = list(tasks)
    G = nx.DiGraph()

    # Add task nodes
    for task in tasks:
        G.add_node(task.id, node_type="task", task=task)

    # Add dependency edges
    for task in tasks:
        for dependency in task.dependencies:
            if dependency.predecessor_id in G:  # Dangling references are tolerated
                G.add_edge(dependency.predecessor_id, task.id, type=dependency.type)

    return G


def dangling_dependencies(tasks):
    """
    Find dependency references to tasks that do not exist.

    Returns:
        list: (task id, predecessor id) pairs
    """
    known_ids = {task.id for task in tasks}
    return [
        (task.id, dependency.predecessor_id)
        for task in tasks
        for dependency in task.dependencies
        if dependency.predecessor_id not in known_ids
    ]
