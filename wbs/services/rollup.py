"""
Hierarchical rollup of WBS weight and progress.

Aggregate tasks (tasks with at least one child) take their weight and
progress from their direct children; leaf tasks keep whatever the user
entered. Everything is recomputed over the whole set on every call.
"""

import math

from ..utils.hierarchy import build_hierarchy_graph, children_of, bottom_up_order


def round_half_up(value):
    """Round to the nearest integer, with halves rounded up (2.5 -> 3)"""
    return int(math.floor(value + 0.5))


def weighted_progress(children):
    """
    Aggregate weight and progress over a list of child tasks.

    Returns:
        tuple: (total weight, weighted average progress); progress is 0
        when the total weight is 0
    """
    total_weight = sum(child.weight for child in children)
    if total_weight > 0:
        weighted_sum = sum(child.progress * child.weight for child in children)
        return total_weight, round_half_up(weighted_sum / total_weight)
    return total_weight, 0


def classify(tasks):
    """
    Determine which tasks are aggregates.

    Args:
        tasks: Iterable of Task objects

    Returns:
        dict: Task id -> True if the task has at least one child
    """
    graph = build_hierarchy_graph(tasks)
    return {task_id: graph.out_degree(task_id) > 0 for task_id in graph.nodes()}


def recompute(tasks):
    """
    Recalculate classification and aggregate values for a full task set.

    The input is never modified. Children are always aggregated before
    their parents, so a change to a deep leaf reaches the top-level task in
    a single call. A task that lost all of its children becomes a leaf and
    keeps its last weight and progress.

    Args:
        tasks: Iterable of Task objects (the complete project)

    Returns:
        list: New Task objects in input order, with is_calculated, weight
        and progress updated
    """
    result = [task.copy() for task in tasks]
    graph = build_hierarchy_graph(result)

    # Work on the copies held by the graph nodes
    by_id = {task_id: graph.nodes[task_id]["task"] for task_id in graph.nodes()}

    for task_id in bottom_up_order(graph):
        children = [by_id[child_id] for child_id in children_of(graph, task_id)]
        task = by_id[task_id]
        task.is_calculated = bool(children)
        if children:
            task.weight, task.progress = weighted_progress(children)

    # Tasks sharing an id all take the values computed for that id
    for task in result:
        node_task = by_id[task.id]
        if node_task is not task:
            task.is_calculated = node_task.is_calculated
            if node_task.is_calculated:
                task.weight = node_task.weight
                task.progress = node_task.progress

    return result


def flatten(tasks):
    """
    Treat every task as a manually edited top-level task.

    This is the degenerate one-level configuration of the rollup: nothing
    is aggregated, every task is a leaf at level 0.

    Args:
        tasks: Iterable of Task objects

    Returns:
        list: New Task objects with is_calculated False and level 0
    """
    return [task.copy(is_calculated=False, level=0) for task in tasks]
