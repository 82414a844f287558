"""Stack application service.

Applies one user edit (reorder, rescale, toggle done, toggle anchor,
archive, insert) to a scheduled stack and recomputes the schedule.
All functions are pure - no I/O beyond logging. Refused edits come back
as Err values; scheduling precondition failures are converted to Err.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from rockwater.config import DURATION_SEQUENCE, SchedulerSettings
from rockwater.domain.schedule import compute_schedule
from rockwater.domain.shared import ConfigurationError, Err, Ok, Result
from rockwater.domain.task import (
    DomainEvent,
    TaskAnchorToggled,
    TaskArchived,
    TaskInserted,
    TaskNode,
    TaskReordered,
    TaskRescaled,
    TaskStatus,
    TaskStatusToggled,
    build_registry,
    count_by_status,
    get_outstanding_duration,
    index_of,
)
from rockwater.domain.types import add_minutes

logger = logging.getLogger(__name__)

EditResult = Result[tuple[list[TaskNode], DomainEvent], str]


class ScheduleStats(BaseModel):
    """Summary of a scheduled stack for status displays."""

    total: int
    done: int
    todo: int
    anchored: int
    busy_minutes: int
    starts_at: datetime | None = None
    ends_at: datetime | None = None


# =============================================================================
# Helpers
# =============================================================================


def recompute(tasks: Sequence[TaskNode], now: datetime) -> Result[list[TaskNode], str]:
    """Run the scheduler, turning precondition failures into Err."""
    try:
        return Ok(compute_schedule(tasks, now))
    except ConfigurationError as e:
        logger.warning(f"Schedule rejected: {e}")
        return Err(str(e))


def _check_index(tasks: Sequence[TaskNode], index: int) -> Result[TaskNode, str]:
    if index < 0 or index >= len(tasks):
        return Err(f"No task at index {index}")
    return Ok(tasks[index])


def _replace_and_recompute(
    tasks: Sequence[TaskNode],
    index: int,
    task: TaskNode,
    now: datetime,
) -> Result[list[TaskNode], str]:
    new_tasks = list(tasks)
    new_tasks[index] = task
    return recompute(new_tasks, now)


def _reorder(
    tasks: Sequence[TaskNode],
    index: int,
    new_tasks: list[TaskNode],
    now: datetime,
) -> EditResult:
    moved = tasks[index]
    result = recompute(new_tasks, now)
    if isinstance(result, Err):
        return result
    scheduled = result.value
    new_index = index_of(scheduled, moved.id)
    logger.debug(f"Moved '{moved.title}' from {index} to {new_index}")
    event = TaskReordered(task_id=moved.id, from_index=index, to_index=new_index)
    return Ok((scheduled, event))


# =============================================================================
# Reordering
# =============================================================================


def move_up(tasks: Sequence[TaskNode], index: int, now: datetime) -> EditResult:
    """Swap a floating task with the nearest floating task above it.

    Anchored tasks are skipped over and never move through reordering.
    """
    checked = _check_index(tasks, index)
    if isinstance(checked, Err):
        return checked
    if checked.value.is_anchored:
        return Err(f"Anchored task '{checked.value.title}' cannot be reordered")

    target = index - 1
    while target >= 0 and tasks[target].is_anchored:
        target -= 1
    if target < 0:
        return Err("No floating task above")

    new_tasks = list(tasks)
    new_tasks[index], new_tasks[target] = new_tasks[target], new_tasks[index]
    return _reorder(tasks, index, new_tasks, now)


def move_down(tasks: Sequence[TaskNode], index: int, now: datetime) -> EditResult:
    """Swap a floating task with the nearest floating task below it."""
    checked = _check_index(tasks, index)
    if isinstance(checked, Err):
        return checked
    if checked.value.is_anchored:
        return Err(f"Anchored task '{checked.value.title}' cannot be reordered")

    target = index + 1
    while target < len(tasks) and tasks[target].is_anchored:
        target += 1
    if target >= len(tasks):
        return Err("No floating task below")

    new_tasks = list(tasks)
    new_tasks[index], new_tasks[target] = new_tasks[target], new_tasks[index]
    return _reorder(tasks, index, new_tasks, now)


def move_to_index(
    tasks: Sequence[TaskNode],
    old_index: int,
    new_index: int,
    now: datetime,
) -> EditResult:
    """Move a floating task to a new list position (drag and drop)."""
    checked = _check_index(tasks, old_index)
    if isinstance(checked, Err):
        return checked
    task = checked.value
    if task.is_anchored:
        return Err(f"Anchored task '{task.title}' cannot be reordered")

    new_tasks = list(tasks)
    new_tasks.pop(old_index)
    new_tasks.insert(max(0, min(new_index, len(new_tasks))), task)
    return _reorder(tasks, old_index, new_tasks, now)


# =============================================================================
# Toggles
# =============================================================================


def toggle_status(tasks: Sequence[TaskNode], index: int, now: datetime) -> EditResult:
    """Flip a task between todo and done."""
    checked = _check_index(tasks, index)
    if isinstance(checked, Err):
        return checked
    task = checked.value

    status = TaskStatus.TODO if task.is_done() else TaskStatus.DONE
    result = _replace_and_recompute(tasks, index, task.model_copy(update={"status": status}), now)
    if isinstance(result, Err):
        return result

    logger.debug(f"Marked '{task.title}' {status.value}")
    return Ok((result.value, TaskStatusToggled(task_id=task.id, status=status.value)))


def toggle_anchor(
    tasks: Sequence[TaskNode],
    index: int,
    now: datetime,
    start_time: datetime | None = None,
) -> EditResult:
    """Turn water into a rock or release a rock back to water.

    When anchoring without an explicit time the task is pinned where it
    currently sits, or at ``now`` if it has never been scheduled.
    """
    checked = _check_index(tasks, index)
    if isinstance(checked, Err):
        return checked
    task = checked.value

    anchored = not task.is_anchored
    update: dict[str, object] = {"is_anchored": anchored}
    if anchored:
        update["start_time"] = start_time or task.start_time or now

    updated = task.model_copy(update=update)
    result = _replace_and_recompute(tasks, index, updated, now)
    if isinstance(result, Err):
        return result

    logger.debug(f"{'Anchored' if anchored else 'Released'} '{task.title}'")
    event = TaskAnchorToggled(
        task_id=task.id,
        is_anchored=anchored,
        start_time=updated.start_time if anchored else None,
    )
    return Ok((result.value, event))


# =============================================================================
# Durations
# =============================================================================


def _rescale(
    tasks: Sequence[TaskNode],
    index: int,
    now: datetime,
    new_own: int,
) -> EditResult:
    task = tasks[index]
    old_own = task.own_duration
    updated = task.model_copy(update={"original_duration": new_own, "duration": new_own})
    result = _replace_and_recompute(tasks, index, updated, now)
    if isinstance(result, Err):
        return result

    logger.debug(f"Rescaled '{task.title}' {old_own}m -> {new_own}m")
    event = TaskRescaled(task_id=task.id, old_duration=old_own, new_duration=new_own)
    return Ok((result.value, event))


def next_duration_step(current: int, direction: Literal["up", "down"]) -> int:
    """Step a duration along DURATION_SEQUENCE.

    Off-sequence values snap to the nearest step in the requested
    direction.
    """
    seq_index = next(
        (i for i, step in enumerate(DURATION_SEQUENCE) if step >= current),
        len(DURATION_SEQUENCE) - 1,
    )
    if direction == "up":
        if DURATION_SEQUENCE[seq_index] == current:
            seq_index = min(len(DURATION_SEQUENCE) - 1, seq_index + 1)
    else:
        seq_index = max(0, seq_index - 1)
    return DURATION_SEQUENCE[seq_index]


def scale_duration(
    tasks: Sequence[TaskNode],
    index: int,
    now: datetime,
    direction: Literal["up", "down"],
    settings: SchedulerSettings | None = None,
) -> EditResult:
    """Scale a task's own duration one step up or down."""
    checked = _check_index(tasks, index)
    if isinstance(checked, Err):
        return checked
    settings = settings or SchedulerSettings()

    new_own = settings.clamp(next_duration_step(checked.value.own_duration, direction))
    return _rescale(tasks, index, now, new_own)


def adjust_duration(
    tasks: Sequence[TaskNode],
    index: int,
    now: datetime,
    delta_minutes: int,
    settings: SchedulerSettings | None = None,
) -> EditResult:
    """Change a task's own duration by a delta, clamped to the settings."""
    checked = _check_index(tasks, index)
    if isinstance(checked, Err):
        return checked
    settings = settings or SchedulerSettings()

    new_own = settings.clamp(checked.value.own_duration + delta_minutes)
    return _rescale(tasks, index, now, new_own)


# =============================================================================
# Membership
# =============================================================================


def archive_task(tasks: Sequence[TaskNode], index: int, now: datetime) -> EditResult:
    """Remove a task from the stack."""
    checked = _check_index(tasks, index)
    if isinstance(checked, Err):
        return checked
    task = checked.value

    new_tasks = list(tasks)
    new_tasks.pop(index)
    result = recompute(new_tasks, now)
    if isinstance(result, Err):
        return result

    logger.debug(f"Archived '{task.title}'")
    return Ok((result.value, TaskArchived(task_id=task.id, task_title=task.title)))


def insert_after(
    tasks: Sequence[TaskNode],
    index: int,
    task: TaskNode,
    now: datetime,
) -> EditResult:
    """Insert a task after ``index``; -1 inserts at the top."""
    if index < -1 or index >= len(tasks):
        return Err(f"No task at index {index}")
    if index_of(list(tasks), task.id) != -1:
        return Err(f"Task '{task.id}' is already in the stack")

    new_tasks = list(tasks)
    new_tasks.insert(index + 1, task)
    result = recompute(new_tasks, now)
    if isinstance(result, Err):
        return result

    scheduled = result.value
    new_index = index_of(scheduled, task.id)
    logger.debug(f"Inserted '{task.title}' at {new_index}")
    return Ok((scheduled, TaskInserted(task_id=task.id, index=new_index)))


# =============================================================================
# Summaries
# =============================================================================


def get_schedule_stats(tasks: Sequence[TaskNode]) -> ScheduleStats:
    """Summarize a scheduled stack.

    Busy minutes count each outstanding task or subtask once by its own
    duration, so a subtask that also sits in the stack is not added again
    through its parent's rollup. The projected end only looks at
    outstanding tasks; done tasks are ghosts with no width.
    """
    counts = count_by_status(tasks)
    todo = [t for t in tasks if not t.is_done()]
    starts = [t.start_time for t in tasks if t.start_time is not None]
    ends = [add_minutes(t.start_time, t.duration) for t in todo if t.start_time is not None]

    return ScheduleStats(
        total=len(tasks),
        done=counts[TaskStatus.DONE],
        todo=counts[TaskStatus.TODO],
        anchored=sum(1 for t in tasks if t.is_anchored),
        busy_minutes=get_outstanding_duration(tasks, build_registry(tasks)),
        starts_at=min(starts) if starts else None,
        ends_at=max(ends) if ends else None,
    )
