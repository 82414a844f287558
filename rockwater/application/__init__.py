"""Application service layer for Rockwater.

Services apply user edits to a task stack by combining domain
functions, and recompute the schedule after every edit.

Example usage:
    >>> from rockwater.application import toggle_status
    >>> from rockwater.domain.shared import is_ok
    >>>
    >>> result = toggle_status(stack, 0, now)
    >>> if is_ok(result):
    ...     stack, event = result.value
"""

from rockwater.application.stack_service import (
    ScheduleStats,
    adjust_duration,
    archive_task,
    get_schedule_stats,
    insert_after,
    move_down,
    move_to_index,
    move_up,
    next_duration_step,
    recompute,
    scale_duration,
    toggle_anchor,
    toggle_status,
)

__all__ = [
    "recompute",
    "move_up",
    "move_down",
    "move_to_index",
    "toggle_status",
    "toggle_anchor",
    "scale_duration",
    "adjust_duration",
    "next_duration_step",
    "archive_task",
    "insert_after",
    "get_schedule_stats",
    "ScheduleStats",
]
