"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rockwater import __version__
from rockwater.domain.task import TaskStatus
from rockwater.infrastructure.storage import StackRepository
from rockwater.interfaces.cli import app

NOW = "2026-01-25T08:00"

runner = CliRunner()


@pytest.fixture(autouse=True)
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_home = tmp_path / "home"
    config_home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: config_home))
    return config_home


@pytest.fixture
def stack_file(tmp_path: Path) -> Path:
    path = tmp_path / "stack.json"
    path.write_text(
        json.dumps(
            {
                "stack": ["standup", "report", "review"],
                "nodes": [
                    {
                        "id": "standup",
                        "title": "Standup",
                        "duration": 30,
                        "is_anchored": True,
                        "start_time": "2026-01-25T09:00:00",
                    },
                    {
                        "id": "report",
                        "title": "Write report",
                        "duration": 60,
                        "children": ["outline"],
                    },
                    {"id": "outline", "title": "Outline", "duration": 30},
                    {"id": "review", "title": "Review", "duration": 30},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def load(path: Path):
    return {task.id: task for task in StackRepository().load(path).value}


class TestApp:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"rockwater version {__version__}" in result.output

    def test_no_args_shows_help(self) -> None:
        result = runner.invoke(app, [])

        assert "schedule" in result.output


class TestSchedule:
    def test_text_schedule(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["schedule", str(stack_file), "--now", NOW])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "SCHEDULE from 08:00" in lines
        assert "09:00  [ ] Standup (30m) [rock]" in lines
        assert "09:30  [ ] Write report (90m, own 60m)" in lines
        assert "11:00  [ ] Review (30m)" in lines
        assert "3 to do, 0 done, 150m planned, ends 11:30" in lines

    def test_json_schedule(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["stack", "schedule", str(stack_file), "--now", NOW, "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [task["id"] for task in payload] == ["standup", "report", "review"]
        assert payload[1]["duration"] == 90
        assert payload[1]["original_duration"] == 60
        assert payload[1]["start_time"] == "2026-01-25T09:30:00"
        assert "children" not in payload[1]

    def test_stack_path_from_env(self, stack_file: Path) -> None:
        result = runner.invoke(
            app, ["schedule", "--now", NOW], env={"ROCKWATER_STACK": str(stack_file)}
        )

        assert result.exit_code == 0
        assert "11:00  [ ] Review (30m)" in result.output

    def test_schedule_does_not_write(self, stack_file: Path) -> None:
        before = stack_file.read_text(encoding="utf-8")

        runner.invoke(app, ["schedule", str(stack_file), "--now", NOW])

        assert stack_file.read_text(encoding="utf-8") == before

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["schedule", str(tmp_path / "nope.json"), "--now", NOW])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_bad_now(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["schedule", str(stack_file), "--now", "soon"])

        assert result.exit_code == 1
        assert "Invalid point in time" in result.output

    def test_precondition_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"stack": ["a"], "nodes": [{"id": "a", "duration": -5}]}),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["schedule", str(path), "--now", NOW])

        assert result.exit_code == 1
        assert "negative duration" in result.output


class TestRollup:
    def test_rollup_prints_trace(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["rollup", str(stack_file), "report"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Write report: 90m",
            "  Base: 60m",
            "  +30m from Outline",
        ]

    def test_rollup_of_subtask(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["stack", "rollup", str(stack_file), "outline"])

        assert result.exit_code == 0
        assert "Outline: 30m" in result.output

    def test_unknown_task(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["rollup", str(stack_file), "nope"])

        assert result.exit_code == 1
        assert "Task not found: nope" in result.output

    def test_min_duration(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["stack", "min-duration", str(stack_file), "report"])

        assert result.exit_code == 0
        assert "Write report: 30m of outstanding subtasks" in result.output


class TestEdit:
    def test_done_toggles_and_saves(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["done", str(stack_file), "report", "--now", NOW])

        assert result.exit_code == 0
        assert "[x] Write report" in result.output
        assert load(stack_file)["report"].status == TaskStatus.DONE

    def test_done_frees_time_for_later_water(self, stack_file: Path) -> None:
        runner.invoke(app, ["edit", "done", str(stack_file), "report", "--now", NOW])

        result = runner.invoke(app, ["schedule", str(stack_file), "--now", NOW])

        assert "08:00  [ ] Review (30m)" in result.output.splitlines()

    def test_anchor_at_time(self, stack_file: Path) -> None:
        result = runner.invoke(
            app,
            ["edit", "anchor", str(stack_file), "review", "--at", "2026-01-25T14:00", "--now", NOW],
        )

        assert result.exit_code == 0
        assert "14:00  [ ] Review (30m) [rock]" in result.output
        review = load(stack_file)["review"]
        assert review.is_anchored
        assert review.start_time.hour == 14

    def test_scale_up(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["edit", "scale", str(stack_file), "report", "up", "--now", NOW])

        assert result.exit_code == 0
        assert "Write report (120m, own 90m)" in result.output
        assert load(stack_file)["report"].original_duration == 90

    def test_archive(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["edit", "archive", str(stack_file), "review", "--now", NOW])

        assert result.exit_code == 0
        assert "Archived review" in result.output
        assert "review" not in load(stack_file)

    def test_subtask_cannot_be_edited(self, stack_file: Path) -> None:
        result = runner.invoke(app, ["done", str(stack_file), "outline", "--now", NOW])

        assert result.exit_code == 1
        assert "Task not in stack: outline" in result.output


class TestConfigCommands:
    def test_show_defaults(self, home: Path) -> None:
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "min_duration: 2m" in result.output
        assert "max_duration: none" in result.output

    def test_set_and_show(self, home: Path) -> None:
        result = runner.invoke(app, ["config", "set", "--min", "5", "--max", "120"])

        assert result.exit_code == 0
        assert "Settings saved." in result.output
        shown = runner.invoke(app, ["config", "show"]).output
        assert "min_duration: 5m" in shown
        assert "max_duration: 120m" in shown

    def test_set_rejects_inverted_bounds(self, home: Path) -> None:
        result = runner.invoke(app, ["config", "set", "--min", "30", "--max", "10"])

        assert result.exit_code == 1
        assert "Invalid settings" in result.output

    def test_scale_uses_saved_cap(self, home: Path, stack_file: Path) -> None:
        runner.invoke(app, ["config", "set", "--max", "75"])

        runner.invoke(app, ["edit", "scale", str(stack_file), "report", "up", "--now", NOW])

        assert load(stack_file)["report"].original_duration == 75
