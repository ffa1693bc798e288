import networkx as nx


class TaskPath:
    """
    Parsed form of a dotted task id.

    The hierarchy of a WBS is implied by its ids:

    - a single-segment id ("3") has no parent
    - a two-segment id ending in ".0" ("3.0") has no parent
    - any other two-segment id ("3.2") belongs to "<major>.0" ("3.0")
    - deeper ids drop their last segment ("3.2.1" belongs to "3.2")

    "3" and "3.0" name the same top-level task, so "3.2" falls back to
    "3" when a WBS has no "3.0" (see ``resolve_parent_id``).
    """

    __slots__ = ("id", "segments")

    def __init__(self, id, segments):
        self.id = id
        self.segments = tuple(segments)

    @classmethod
    def parse(cls, id):
        id = str(id)
        return cls(id, id.split("."))

    @property
    def parent_id(self):
        segments = self.segments
        if len(segments) == 1:
            return None
        if len(segments) == 2:
            if segments[1] == "0":
                return None
            return f"{segments[0]}.0"
        return ".".join(segments[:-1])

    @property
    def parent_candidates(self):
        # "N" and "N.0" name the same top-level node
        parent_id = self.parent_id
        if parent_id is None:
            return ()
        parent_segments = parent_id.split(".")
        if len(parent_segments) == 2 and parent_segments[1] == "0":
            return (parent_id, parent_segments[0])
        return (parent_id,)

    @property
    def parent(self):
        parent_id = self.parent_id
        return TaskPath.parse(parent_id) if parent_id is not None else None

    @property
    def depth(self):
        depth = 0
        path = self.parent
        while path is not None:
            depth += 1
            path = path.parent
        return depth

    def is_top_level(self):
        return self.parent_id is None

    def __eq__(self, other):
        if not isinstance(other, TaskPath):
            return NotImplemented
        return self.segments == other.segments

    def __hash__(self):
        return hash(self.segments)

    def __repr__(self):
        return f"TaskPath({self.id!r})"


def derive_parent_id(task_id):
    """Derive the parent id of a task id, or None for a top-level id"""
    return TaskPath.parse(task_id).parent_id


def derive_level(task_id):
    """Derive the nesting depth of a task id (0 = top-level)"""
    return TaskPath.parse(task_id).depth


def resolve_parent_id(task_id, known_ids):
    """
    Find the parent of a task among the ids present in a set.

    "N.k" belongs to "N.0" when the set holds it, otherwise to "N".

    Returns:
        The parent id, or None if the task is top-level or its parent is
        missing from the set
    """
    for candidate in TaskPath.parse(task_id).parent_candidates:
        if candidate in known_ids:
            return candidate
    return None


def build_hierarchy_graph(tasks):
    """
    Build a directed graph of the WBS hierarchy.

    Nodes are task ids; an edge runs from a parent to each of its direct
    children. A child whose parent (see ``resolve_parent_id``) is not in
    the set gets no incoming edge.

    Args:
        tasks: Iterable of Task objects

    Returns:
        networkx.DiGraph: The hierarchy graph
    """
    G = nx.DiGraph()

    # Add task nodes
    for task in tasks:
        G.add_node(task.id, node_type="task", task=task)

    # Add parent -> child edges
    for task_id in list(G.nodes()):
        parent_id = resolve_parent_id(task_id, G)
        if parent_id is not None:
            G.add_edge(parent_id, task_id)

    return G


def children_of(graph, task_id):
    """Get the direct children of a task, in insertion order"""
    if task_id not in graph:
        return []
    return list(graph.successors(task_id))


def bottom_up_order(graph):
    """
    Order task ids so that every child comes before its parent.

    Returns:
        list: Task ids, deepest first
    """
    return list(reversed(list(nx.topological_sort(graph))))


def top_level_ids(graph):
    """Get the ids of tasks without a derived parent"""
    return [
        task_id for task_id in graph.nodes() if derive_parent_id(task_id) is None
    ]
