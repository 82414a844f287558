"""Rock-and-water scheduler.

Anchored tasks ("rocks") hold fixed slots and can only be pushed later
by an earlier rock that grew into them. Floating tasks ("water") fill
the time from ``now`` onward in list order, fitting into gaps before
rocks or leapfrogging past a rock they would overlap. Done tasks are
ghosts: they get a start time but take up no width.

All functions are pure - no I/O, no side effects. Input nodes are never
mutated; the result holds copies.
"""

from collections.abc import Sequence
from datetime import datetime

from rockwater.domain.task.models import TaskNode
from rockwater.domain.task.rollup import build_registry, get_total_greedy_duration
from rockwater.domain.types import TimeBlock, add_minutes

from .validation import validate_stack


def _expand(task: TaskNode, registry: dict[str, TaskNode]) -> TaskNode:
    """Copy a task with its rolled-up duration and trace."""
    audit = get_total_greedy_duration(task, registry)
    return task.model_copy(
        update={
            "original_duration": task.own_duration,
            "duration": audit.total,
            "trace": audit.trace,
        }
    )


def _width(task: TaskNode) -> int:
    """Minutes a task consumes on the timeline."""
    return 0 if task.is_done() else task.duration


def _place_rocks(expanded: list[TaskNode]) -> dict[int, TimeBlock]:
    """Resolve rock collisions in list order.

    Each rock starts at the later of its declared time and the end of
    the previous rock in the list, so an upstream rock that grew pushes
    every downstream rock after it. Done rocks keep their slot but are
    invisible to the rocks after them.
    """
    blocks: dict[int, TimeBlock] = {}
    previous_end: datetime | None = None

    for i, task in enumerate(expanded):
        if not task.is_anchored:
            continue
        start = task.start_time
        if previous_end is not None and previous_end > start:
            start = previous_end
        block = TimeBlock.from_duration(start, _width(task))
        blocks[i] = block
        if not task.is_done():
            previous_end = block.end

    return blocks


def _place_water(
    task: TaskNode,
    cursor: datetime,
    rocks: list[TimeBlock],
) -> datetime:
    """Find the first free start at or after ``cursor``.

    Leapfrogs over any rock the task would overlap, repeating until the
    slot is clear.
    """
    width = _width(task)
    start = cursor
    while True:
        end = add_minutes(start, width)
        collision = next((rock for rock in rocks if rock.overlaps(start, end)), None)
        if collision is None:
            return start
        start = collision.end


def compute_schedule(tasks: Sequence[TaskNode], now: datetime) -> list[TaskNode]:
    """Compute start times for a task stack.

    Args:
        tasks: Stack in list order; anchored tasks must carry a start time
        now: Reference time where floating tasks begin

    Returns:
        New list of task copies sorted by computed start time, ties kept
        in input order. Each copy's ``duration`` is its rolled-up total,
        ``original_duration`` its own time and ``trace`` the rollup trail.

    Raises:
        ConfigurationError: If the stack violates a precondition
    """
    validate_stack(tasks, now)

    registry = build_registry(tasks)
    expanded = [_expand(task, registry) for task in tasks]

    rock_blocks = _place_rocks(expanded)
    # Zero-width (done) rocks keep their slot but never block water
    obstacles = sorted(
        (block for block in rock_blocks.values() if block.duration > 0),
        key=lambda block: block.start,
    )

    starts: dict[int, datetime] = {i: block.start for i, block in rock_blocks.items()}
    cursor = now
    for i, task in enumerate(expanded):
        if task.is_anchored:
            continue
        start = _place_water(task, cursor, obstacles)
        starts[i] = start
        cursor = add_minutes(start, _width(task))

    scheduled = [
        task.model_copy(update={"start_time": starts[i]}) for i, task in enumerate(expanded)
    ]
    order = sorted(range(len(scheduled)), key=lambda i: (starts[i], i))
    return [scheduled[i] for i in order]
