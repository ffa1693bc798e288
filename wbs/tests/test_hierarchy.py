import unittest

from wbs.domain.task import Task
from wbs.utils.hierarchy import (
    TaskPath,
    derive_parent_id,
    derive_level,
    resolve_parent_id,
    build_hierarchy_graph,
    children_of,
    bottom_up_order,
    top_level_ids,
)
from wbs.utils.graph import build_dependency_graph, dangling_dependencies


class TaskPathTestCase(unittest.TestCase):
    """Test cases for parsing dotted task ids."""

    def test_parent_derivation(self):
        self.assertIsNone(derive_parent_id("3"))
        self.assertIsNone(derive_parent_id("3.0"))
        self.assertEqual(derive_parent_id("3.2"), "3.0")
        self.assertEqual(derive_parent_id("3.2.1"), "3.2")
        self.assertEqual(derive_parent_id("3.0.1"), "3.0")
        self.assertEqual(derive_parent_id("3.2.1.5"), "3.2.1")

    def test_depth(self):
        self.assertEqual(derive_level("3"), 0)
        self.assertEqual(derive_level("3.0"), 0)
        self.assertEqual(derive_level("3.2"), 1)
        self.assertEqual(derive_level("3.0.1"), 1)
        self.assertEqual(derive_level("3.2.1"), 2)

    def test_segments(self):
        path = TaskPath.parse("1.2.3")
        self.assertEqual(path.segments, ("1", "2", "3"))
        self.assertEqual(path.parent, TaskPath.parse("1.2"))
        self.assertFalse(path.is_top_level())
        self.assertTrue(TaskPath.parse("7.0").is_top_level())
        self.assertEqual(TaskPath.parse("7.2").parent_candidates, ("7.0", "7"))
        self.assertEqual(TaskPath.parse("7.2.1").parent_candidates, ("7.2",))
        self.assertEqual(TaskPath.parse("7").parent_candidates, ())

    def test_malformed_ids_are_tolerated(self):
        """Malformed ids parse without raising."""
        self.assertIsNone(derive_parent_id(""))
        self.assertEqual(derive_parent_id("a..b"), "a.")


class HierarchyGraphTestCase(unittest.TestCase):
    """Test cases for the explicit hierarchy graph."""

    def setUp(self):
        self.tasks = [
            Task("1.0", "Root"),
            Task("1.1", "Child A"),
            Task("1.2", "Child B"),
            Task("1.1.1", "Grandchild"),
            Task("2.0", "Other root"),
            Task("4.1", "Orphan"),
        ]
        self.graph = build_hierarchy_graph(self.tasks)

    def test_children(self):
        self.assertEqual(children_of(self.graph, "1.0"), ["1.1", "1.2"])
        self.assertEqual(children_of(self.graph, "1.1"), ["1.1.1"])
        self.assertEqual(children_of(self.graph, "2.0"), [])
        self.assertEqual(children_of(self.graph, "9.0"), [])

    def test_orphans_have_no_parent_edge(self):
        self.assertEqual(self.graph.in_degree("4.1"), 0)
        self.assertNotIn("4.0", self.graph)

    def test_bottom_up_order(self):
        order = bottom_up_order(self.graph)
        self.assertEqual(len(order), len(self.tasks))
        self.assertLess(order.index("1.1.1"), order.index("1.1"))
        self.assertLess(order.index("1.1"), order.index("1.0"))
        self.assertLess(order.index("1.2"), order.index("1.0"))

    def test_top_level_ids(self):
        self.assertEqual(sorted(top_level_ids(self.graph)), ["1.0", "2.0"])

    def test_single_segment_parent(self):
        graph = build_hierarchy_graph(
            [Task("1", "Root"), Task("1.1", "Child"), Task("1.1.1", "Grandchild")]
        )
        self.assertEqual(children_of(graph, "1"), ["1.1"])
        self.assertEqual(children_of(graph, "1.1"), ["1.1.1"])
        self.assertEqual(top_level_ids(graph), ["1"])

    def test_dotted_zero_parent_preferred(self):
        graph = build_hierarchy_graph(
            [Task("1", "Bare"), Task("1.0", "Dotted"), Task("1.1", "Child")]
        )
        self.assertEqual(resolve_parent_id("1.1", graph), "1.0")
        self.assertEqual(children_of(graph, "1.0"), ["1.1"])
        self.assertEqual(children_of(graph, "1"), [])



class DependencyGraphTestCase(unittest.TestCase):
    """Test cases for the display-only dependency graph."""

    def test_dangling_and_cyclic_references(self):
        tasks = [
            Task("1.0", "A", dependencies=["2.0"]),
            Task("2.0", "B", dependencies=[{"predecessorId": "1.0", "type": "SS"}]),
            Task("3.0", "C", dependencies=["9.9"]),
        ]
        graph = build_dependency_graph(tasks)
        self.assertTrue(graph.has_edge("2.0", "1.0"))
        self.assertEqual(graph.edges["1.0", "2.0"]["type"], "SS")
        self.assertNotIn("9.9", graph)
        self.assertEqual(dangling_dependencies(tasks), [("3.0", "9.9")])


if __name__ == "__main__":
    unittest.main()
