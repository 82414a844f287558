"""Scheduling preconditions.

Checked before any placement so a malformed stack never yields a
partial schedule, a negative width or a guessed start time.
"""

from collections.abc import Sequence
from datetime import datetime

from rockwater.domain.shared.errors import ConfigurationError
from rockwater.domain.task.models import TaskNode
from rockwater.domain.task.traversal import walk_graph


def _is_aware(point: datetime) -> bool:
    return point.tzinfo is not None and point.utcoffset() is not None


def validate_stack(tasks: Sequence[TaskNode], now: datetime | None = None) -> None:
    """Reject a stack the scheduler cannot place.

    Args:
        tasks: Stack in list order
        now: Reference time; anchored start times must match its
            timezone awareness so they can be compared

    Raises:
        ConfigurationError: On a duplicate top-level id, an anchored task
            without a start time, mixed naive/aware times, or a negative
            duration anywhere in the reachable graph
    """
    seen: set[str] = set()
    for task in tasks:
        if task.id in seen:
            raise ConfigurationError(f"Duplicate task id in stack: {task.id}", task_id=task.id)
        seen.add(task.id)

        if task.is_anchored and task.start_time is None:
            raise ConfigurationError(
                f"Anchored task '{task.title or task.id}' has no start time",
                task_id=task.id,
            )

        if (
            task.is_anchored
            and now is not None
            and task.start_time is not None
            and _is_aware(task.start_time) != _is_aware(now)
        ):
            raise ConfigurationError(
                f"Anchored task '{task.title or task.id}' mixes naive and timezone-aware times",
                task_id=task.id,
            )

    for node in walk_graph(tasks):
        if node.duration < 0:
            raise ConfigurationError(
                f"Task '{node.title or node.id}' has negative duration {node.duration}m",
                task_id=node.id,
            )
        if node.original_duration is not None and node.original_duration < 0:
            raise ConfigurationError(
                f"Task '{node.title or node.id}' has negative original duration "
                f"{node.original_duration}m",
                task_id=node.id,
            )
