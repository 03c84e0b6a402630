import json
import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest.mock import patch

from aitaskmanager.core.records.archive import archive_plan, delete_plan
from aitaskmanager.core.records.blueprint import describe_blueprint
from aitaskmanager.core.records.frontmatter import parse_header
from aitaskmanager.core.records.resolver import resolve_plan


def _make_root(project: Path) -> Path:
    root = project / ".ai" / "task-manager"
    root.mkdir(parents=True)
    (root / ".init-metadata.json").write_text(json.dumps({"version": "1.0.0"}), encoding="utf-8")
    return root


def _write_plan(root: Path, area: str, dirname: str, plan_id: int) -> Path:
    container = root / area / dirname
    container.mkdir(parents=True)
    document = container / f"plan-{dirname}.md"
    document.write_text(f"---\nid: {plan_id}\ncreated: 2025-01-01\n---\n# Plan\n", encoding="utf-8")
    return document


class ArchivePlanTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = _make_root(Path(self.tmp.name).resolve())

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_archives_container_and_completes_tasks(self) -> None:
        document = _write_plan(self.root, "plans", "02--ship-it", 2)
        tasks_dir = document.parent / "tasks"
        tasks_dir.mkdir()
        (tasks_dir / "01--first.md").write_text("---\nid: 1\nstatus: pending\n---\n", encoding="utf-8")
        (tasks_dir / "02--second.md").write_text("---\nid: 2\nstatus: completed\n---\n", encoding="utf-8")

        result = archive_plan(root=self.root, plan_id="02", archived_on=date(2026, 1, 15))

        destination = self.root / "archive" / "02--ship-it"
        self.assertEqual(result.plan_id, 2)
        self.assertEqual(result.archived_path, destination)
        self.assertEqual(result.completed_tasks, 1)
        self.assertFalse(document.parent.exists())

        archived_plan = destination / "plan-02--ship-it.md"
        content = archived_plan.read_text(encoding="utf-8")
        self.assertTrue(content.endswith("\n---\n\n**Note**: Manually archived on 2026-01-15\n"))
        for task in sorted((destination / "tasks").iterdir()):
            with self.subTest(task=task.name):
                self.assertEqual(parse_header(task.read_text(encoding="utf-8")).get("status"), "completed")

        record = resolve_plan("2", self.root)
        assert record is not None
        self.assertTrue(record.is_archived)

    def test_archives_legacy_plan_file(self) -> None:
        legacy = self.root / "plans" / "plan-05--flat.md"
        legacy.parent.mkdir(parents=True)
        legacy.write_text("---\r\nid: 5\r\ncreated: 2025-01-01\r\n---\r\nBody\r\n", encoding="utf-8", newline="")

        result = archive_plan(root=self.root, plan_id=5, archived_on=date(2026, 2, 1))

        archived = self.root / "archive" / "plan-05--flat.md"
        self.assertEqual(result.archived_path, archived)
        self.assertFalse(legacy.exists())
        self.assertTrue(archived.read_bytes().endswith(b"\r\n---\r\n\r\n**Note**: Manually archived on 2026-02-01\r\n"))

    def test_task_without_header_is_left_alone(self) -> None:
        document = _write_plan(self.root, "plans", "03--loose", 3)
        tasks_dir = document.parent / "tasks"
        tasks_dir.mkdir()
        (tasks_dir / "01--notes.md").write_text("# no header\n", encoding="utf-8")

        with self.assertLogs("aitaskmanager", level="WARNING") as captured:
            result = archive_plan(root=self.root, plan_id=3)

        self.assertEqual(result.completed_tasks, 0)
        self.assertTrue(any("no front matter" in line for line in captured.output))
        self.assertEqual(
            (self.root / "archive" / "03--loose" / "tasks" / "01--notes.md").read_text(encoding="utf-8"),
            "# no header\n",
        )

    def test_unknown_plan_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            archive_plan(root=self.root, plan_id=42)

    def test_already_archived_plan_raises(self) -> None:
        _write_plan(self.root, "archive", "07--done", 7)

        with self.assertRaises(ValueError):
            archive_plan(root=self.root, plan_id=7)

    def test_existing_destination_raises_without_changes(self) -> None:
        document = _write_plan(self.root, "plans", "08--twice", 8)
        _write_plan(self.root, "archive", "08--twice", 8)
        original = document.read_bytes()

        with self.assertLogs("aitaskmanager", level="WARNING"), self.assertRaises(FileExistsError):
            archive_plan(root=self.root, plan_id=8)

        self.assertEqual(document.read_bytes(), original)

    def test_failed_move_is_reported(self) -> None:
        _write_plan(self.root, "plans", "09--stuck", 9)

        with patch("aitaskmanager.core.records.archive._move_into_archive", side_effect=OSError("disk full")):
            with self.assertRaises(RuntimeError) as raised:
                archive_plan(root=self.root, plan_id=9)

        self.assertIn("inconsistent", str(raised.exception))


    def test_every_markdown_task_file_is_completed_and_counted(self) -> None:
        document = _write_plan(self.root, "plans", "04--odd-names", 4)
        tasks_dir = document.parent / "tasks"
        tasks_dir.mkdir()
        (tasks_dir / "01--first.md").write_text("---\nid: 1\nstatus: pending\n---\n", encoding="utf-8")
        (tasks_dir / "notes.md").write_text("---\nstatus: in-progress\n---\n", encoding="utf-8")
        (tasks_dir / "draft.txt").write_text("---\nstatus: pending\n---\n", encoding="utf-8")
        plan = resolve_plan("4", self.root)
        assert plan is not None
        self.assertEqual(describe_blueprint(plan).task_count, 2)

        result = archive_plan(root=self.root, plan_id=4)

        archived_tasks = self.root / "archive" / "04--odd-names" / "tasks"
        self.assertEqual(result.completed_tasks, 2)
        notes = (archived_tasks / "notes.md").read_text(encoding="utf-8")
        self.assertEqual(parse_header(notes).get("status"), "completed")
        self.assertEqual((archived_tasks / "draft.txt").read_text(encoding="utf-8"), "---\nstatus: pending\n---\n")


class DeletePlanTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = _make_root(Path(self.tmp.name).resolve())

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_deletes_active_container_with_tasks(self) -> None:
        document = _write_plan(self.root, "plans", "02--drop-me", 2)
        (document.parent / "tasks").mkdir()
        (document.parent / "tasks" / "01--a.md").write_text("---\nid: 1\n---\n", encoding="utf-8")
        keep = _write_plan(self.root, "plans", "03--keep", 3)

        deleted = delete_plan(root=self.root, plan_id="002")

        self.assertEqual(deleted.id, 2)
        self.assertFalse(document.parent.exists())
        self.assertTrue(keep.exists())

    def test_deletes_archived_plan(self) -> None:
        document = _write_plan(self.root, "archive", "06--old", 6)

        deleted = delete_plan(root=self.root, plan_id=6)

        self.assertTrue(deleted.is_archived)
        self.assertFalse(document.parent.exists())
        self.assertTrue((self.root / "archive").exists())

    def test_deletes_legacy_plan_file(self) -> None:
        legacy = self.root / "plans" / "plan-05--flat.md"
        legacy.parent.mkdir(parents=True)
        legacy.write_text("---\nid: 5\ncreated: 2025-01-01\n---\n", encoding="utf-8")

        delete_plan(root=self.root, plan_id=5)

        self.assertFalse(legacy.exists())
        self.assertTrue(legacy.parent.exists())

    def test_unknown_plan_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            delete_plan(root=self.root, plan_id=99)


if __name__ == "__main__":
    unittest.main()
