"""Shared fixtures for Rockwater tests."""

from datetime import datetime

import pytest

from rockwater.domain.task import TaskNode, TaskStatus


def make_task(
    task_id: str,
    duration: int = 30,
    *,
    title: str | None = None,
    original_duration: int | None = None,
    anchored_at: datetime | None = None,
    done: bool = False,
    children: list[TaskNode] | None = None,
) -> TaskNode:
    """Build a TaskNode with test-friendly defaults."""
    return TaskNode(
        id=task_id,
        title=title if title is not None else task_id,
        duration=duration,
        original_duration=original_duration,
        is_anchored=anchored_at is not None,
        start_time=anchored_at,
        status=TaskStatus.DONE if done else TaskStatus.TODO,
        children=children or [],
    )


def at(hhmm: str, day: int = 25) -> datetime:
    """Return a time on 2026-01-{day}."""
    hour, minute = (int(part) for part in hhmm.split(":"))
    return datetime(2026, 1, day, hour, minute)


@pytest.fixture
def now() -> datetime:
    """Reference time used by most scheduling tests."""
    return at("08:00")
