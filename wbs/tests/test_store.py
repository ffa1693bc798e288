import json
import os
import shutil
import tempfile
import unittest

from wbs.domain.task import Task, TaskError
from wbs.services.store import WBSStore, StoreError
from wbs.services.reporting import (
    overall_progress,
    s_curve,
    validate_weights,
    project_summary,
)
from wbs.examples.sample_project import sample_tasks, create_sample_project


class StoreTestCase(unittest.TestCase):
    """Test cases for the persisted WBS store."""

    def setUp(self):
        self.storage_dir = tempfile.mkdtemp()
        self.store = WBSStore(project_id="alpha", storage_dir=self.storage_dir)

    def tearDown(self):
        shutil.rmtree(self.storage_dir, ignore_errors=True)

    def test_add_triggers_recompute(self):
        self.store.add_task(Task("1.0", "Parent", weight=99, progress=99))
        tasks = self.store.add_task(Task("1.1", "Child", weight=5, progress=100))
        parent = tasks[0]
        self.assertTrue(parent.is_calculated)
        self.assertEqual(parent.weight, 5)
        self.assertEqual(parent.progress, 100)

    def test_add_from_dict(self):
        self.store.add_task({"id": "1.0", "name": "From record", "weight": 100})
        self.assertEqual(self.store.get_task("1.0").weight, 100)

    def test_duplicate_id_rejected(self):
        self.store.add_task(Task("1.0", "A"))
        with self.assertRaises(StoreError):
            self.store.add_task(Task("1.0", "B"))

    def test_update(self):
        self.store.load_tasks(sample_tasks())
        tasks = self.store.update_task("3.2", progress=90, status="On Track")
        development = [t for t in tasks if t.id == "3.0"][0]
        self.assertEqual(development.progress, 60)  # (20*30 + 20*90) / 40
        self.assertEqual(self.store.get_task("3.2").status, "On Track")
        self.assertEqual(overall_progress(tasks), 50)

    def test_update_unknown_task(self):
        with self.assertRaises(StoreError):
            self.store.update_task("9.0", progress=10)
        with self.assertRaises(StoreError):
            self.store.delete_task("9.0")
        with self.assertRaises(StoreError):
            self.store.get_task("9.0")

    def test_update_unknown_field(self):
        self.store.add_task(Task("1.0", "A"))
        with self.assertRaises(TaskError):
            self.store.update_task("1.0", colour="red")

    def test_calculated_edit_is_overwritten(self):
        """Direct edits of an aggregate are replaced by the rollup."""
        self.store.load_tasks(sample_tasks())
        self.store.update_task("2.0", weight=50, progress=0, is_calculated=False)
        design = self.store.get_task("2.0")
        self.assertTrue(design.is_calculated)
        self.assertEqual(design.weight, 20)
        self.assertEqual(design.progress, 80)

    def test_strict_store_rejects_calculated_edit(self):
        store = WBSStore(project_id="strict", persist=False, strict=True)
        store.load_tasks(sample_tasks())
        with self.assertRaises(StoreError):
            store.update_task("2.0", progress=0)
        store.update_task("2.0", name="Design Phase")
        self.assertEqual(store.get_task("2.0").name, "Design Phase")

    def test_rename_rederives_level(self):
        self.store.load_tasks([Task("1.0", "P"), Task("2.0", "Q", weight=10)])
        self.store.update_task("2.0", id="1.1")
        child = self.store.get_task("1.1")
        self.assertEqual(child.level, 1)
        self.assertTrue(self.store.get_task("1.0").is_calculated)

        with self.assertRaises(StoreError):
            self.store.update_task("1.1", id="1.0")

    def test_delete_only_child(self):
        """The former parent becomes a leaf and keeps its last values."""
        self.store.add_task(Task("1.0", "Parent"))
        self.store.add_task(Task("1.1", "Child", weight=30, progress=70))
        tasks = self.store.delete_task("1.1")
        self.assertEqual(len(tasks), 1)
        parent = tasks[0]
        self.assertFalse(parent.is_calculated)
        self.assertEqual(parent.weight, 30)
        self.assertEqual(parent.progress, 70)

    def test_delete_parent_keeps_children(self):
        self.store.load_tasks(sample_tasks())
        tasks = self.store.delete_task("1.0")
        ids = [task.id for task in tasks]
        self.assertNotIn("1.0", ids)
        self.assertIn("1.1", ids)
        self.assertEqual(len(tasks), 10)

    def test_tasks_are_copies(self):
        self.store.add_task(Task("1.0", "A", weight=10))
        tasks = self.store.tasks
        tasks[0].weight = 90
        self.assertEqual(self.store.get_task("1.0").weight, 10)

    def test_load_tasks_rejects_duplicates(self):
        with self.assertRaises(StoreError):
            self.store.load_tasks([Task("1.0", "A"), Task("1.0", "B")])

    def test_reset(self):
        self.store.load_tasks(sample_tasks())
        self.assertEqual(self.store.reset(), [])
        self.assertEqual(self.store.tasks, [])

    def test_persistence_round_trip(self):
        self.store.load_tasks(sample_tasks())
        self.store.update_project_info(name="Project Alpha", owner="John Doe")

        path = os.path.join(self.storage_dir, "alpha.json")
        self.assertTrue(os.path.exists(path))

        reopened = WBSStore(project_id="alpha", storage_dir=self.storage_dir)
        self.assertEqual(
            [task.to_dict() for task in reopened.tasks],
            [task.to_dict() for task in self.store.tasks],
        )
        self.assertEqual(reopened.project_info.name, "Project Alpha")
        self.assertEqual(reopened.project_info.owner, "John Doe")

    def test_stored_flags_are_rederived(self):
        """isCalculated and aggregate values in the file are not trusted."""
        path = os.path.join(self.storage_dir, "edited.json")
        records = [
            {"id": "1.0", "name": "P", "weight": 1, "progress": 1, "isCalculated": False},
            {"id": "1.1", "name": "C", "weight": 40, "progress": 50, "isCalculated": True},
        ]
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"tasks": records}, f)

        store = WBSStore(project_id="edited", storage_dir=self.storage_dir)
        parent, child = store.tasks
        self.assertTrue(parent.is_calculated)
        self.assertEqual((parent.weight, parent.progress), (40, 50))
        self.assertFalse(child.is_calculated)

    def test_bare_list_file(self):
        path = os.path.join(self.storage_dir, "legacy.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump([{"id": "1", "name": "Flat", "weight": 100, "progress": 10}], f)

        store = WBSStore(project_id="legacy", storage_dir=self.storage_dir)
        self.assertEqual(overall_progress(store.tasks), 10)

    def test_corrupt_file(self):
        path = os.path.join(self.storage_dir, "broken.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("{not json")

        with self.assertRaises(StoreError):
            WBSStore(project_id="broken", storage_dir=self.storage_dir)

    def test_in_memory_store_writes_nothing(self):
        store = WBSStore(project_id="memory", storage_dir=self.storage_dir, persist=False)
        store.add_task(Task("1.0", "A"))
        self.assertFalse(os.path.exists(os.path.join(self.storage_dir, "memory.json")))


class FlatStoreTestCase(unittest.TestCase):
    """Test cases for the store without hierarchical rollup."""

    def test_everything_manual(self):
        store = WBSStore(project_id="flat", persist=False, rollup=False)
        tasks = store.load_tasks(sample_tasks())
        self.assertTrue(all(not task.is_calculated for task in tasks))
        self.assertTrue(all(task.level == 0 for task in tasks))
        self.assertEqual(store.get_task("1.0").weight, 0)

    def test_every_task_is_reported(self):
        store = WBSStore(project_id="flat", persist=False, rollup=False)
        tasks = store.load_tasks(
            [
                Task("1.0", "A", weight=50, progress=100, end_date="2024-01-10"),
                Task("1.1", "B", weight=50, progress=0, end_date="2024-01-20"),
            ]
        )
        self.assertTrue(store.flat)
        self.assertEqual(overall_progress(tasks, flat=store.flat), 50)
        points = s_curve(tasks, flat=store.flat)
        self.assertEqual([(p.planned, p.actual) for p in points], [(50, 50), (100, 50)])
        self.assertEqual(validate_weights(tasks, flat=store.flat), (100, True))

        summary = project_summary(tasks, flat=store.flat)
        self.assertEqual(summary["overall_progress"], 50)
        self.assertEqual(summary["top_level_count"], 2)



class SampleProjectTestCase(unittest.TestCase):
    """Test cases for the sample project loader."""

    def test_create_sample_project(self):
        store = create_sample_project(verbose=False)
        self.assertEqual(len(store.tasks), 11)
        self.assertEqual(store.project_info.name, "Project Alpha")
        self.assertEqual(overall_progress(store.tasks), 34)


if __name__ == "__main__":
    unittest.main()
