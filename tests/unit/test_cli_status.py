import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

QUIET_ENV = {"DEBUG": None, "TASK_MANAGER_LOG_LEVEL": "quiet"}


def _write_plan(root: Path, area: str, plan_id: int, summary: str, statuses: tuple[str, ...] = ()) -> None:
    container = root / area / f"{plan_id:02d}--plan"
    container.mkdir(parents=True)
    (container / f"plan-{plan_id:02d}--plan.md").write_text(
        f"---\nid: {plan_id}\nsummary: {summary}\ncreated: 2025-01-01\n---\n# Plan\n",
        encoding="utf-8",
    )
    for index, status in enumerate(statuses, start=1):
        task = container / "tasks" / f"{index:02d}--task.md"
        task.parent.mkdir(exist_ok=True)
        task.write_text(f"---\nid: {index}\nstatus: {status}\n---\n", encoding="utf-8")


class StatusCLITests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.project = Path(self.tmp.name).resolve()
        self.root = self.project / ".ai" / "task-manager"
        self.root.mkdir(parents=True)
        (self.root / ".init-metadata.json").write_text(json.dumps({"version": "1.0.0"}), encoding="utf-8")
        self.runner = CliRunner()
        config_patch = patch(
            "aitaskmanager.core.configuration.repository.CONFIG_FILE",
            self.project / "user-config" / "config.toml",
        )
        config_patch.start()
        self.addCleanup(config_patch.stop)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _invoke(self, *args: str):
        from aitaskmanager import cli

        return self.runner.invoke(cli.app, list(args), env=QUIET_ENV)

    def test_dashboard_summarizes_active_and_archived_plans(self) -> None:
        _write_plan(self.root, "plans", 1, "Build importer", ("completed", "pending"))
        _write_plan(self.root, "plans", 2, "Write docs")
        _write_plan(self.root, "archive", 3, "Old release", ("completed", "pending"))

        result = self._invoke("status", "--root", str(self.project))

        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn("AI Task Manager Dashboard", result.output)
        self.assertIn("Total Plans: 3", result.output)
        self.assertIn("Active Plans: 2", result.output)
        self.assertIn("Archived Plans: 1", result.output)
        self.assertIn("(50% complete)", result.output)
        self.assertIn("Plan 1: Build importer", result.output)
        self.assertIn("1/2 tasks", result.output)
        self.assertIn("No tasks generated", result.output)
        self.assertIn("Unfinished Tasks in Archived Plans", result.output)
        self.assertIn("1 incomplete task", result.output)
        self.assertIn("Plan 3: Old release", result.output)

    def test_empty_store(self) -> None:
        result = self._invoke("status", "--root", str(self.project))

        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn("Total Plans: 0", result.output)
        self.assertIn("No active plans", result.output)
        self.assertIn("No archived plans", result.output)
        self.assertNotIn("Unfinished Tasks", result.output)

    def test_long_summaries_are_truncated(self) -> None:
        _write_plan(self.root, "plans", 4, "x" * 80)

        result = self._invoke("status", "--root", str(self.project))

        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn(f"Plan 4: {'x' * 47}...", result.output)
        self.assertNotIn("x" * 48, result.output)

    def test_missing_root(self) -> None:
        orphan = tempfile.TemporaryDirectory()
        self.addCleanup(orphan.cleanup)

        result = self._invoke("status", "--root", orphan.name)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("No .ai/task-manager directory found", result.output)


if __name__ == "__main__":
    unittest.main()
