"""Domain layer for Rockwater.

Pure scheduling core: the task graph model, the duration rollup engine
and the rock-and-water scheduler. Nothing in this package performs I/O
or logs.
"""

from rockwater.domain.schedule import compute_schedule
from rockwater.domain.shared import ConfigurationError
from rockwater.domain.task import (
    DurationAudit,
    TaskNode,
    TaskStatus,
    get_min_duration,
    get_total_greedy_duration,
)

__all__ = [
    "TaskNode",
    "TaskStatus",
    "DurationAudit",
    "ConfigurationError",
    "compute_schedule",
    "get_total_greedy_duration",
    "get_min_duration",
]
