"""Task domain - task graph model and duration rollup.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskStatus - todo / done
    TaskNode - schedulable unit of work with subtasks
    DurationAudit - rollup total with its trace

Rollup Functions:
    get_total_greedy_duration - own duration plus outstanding subtasks
    get_min_duration - outstanding subtasks only
    get_outstanding_duration - outstanding work of a whole stack, counted once
    build_registry - id -> node map for one call

Traversal Functions:
    walk_graph - cycle-safe pre-order walk
    find_by_id - locate a node by id
    index_of - position of a top-level task
    count_by_status - count tasks by status

Events:
    TaskReordered, TaskStatusToggled, TaskAnchorToggled,
    TaskRescaled, TaskArchived, TaskInserted
"""

from .events import (
    DomainEvent,
    TaskAnchorToggled,
    TaskArchived,
    TaskInserted,
    TaskReordered,
    TaskRescaled,
    TaskStatusToggled,
)
from .models import DurationAudit, TaskNode, TaskStatus
from .rollup import (
    TaskRegistry,
    build_registry,
    get_min_duration,
    get_outstanding_duration,
    get_total_greedy_duration,
    resolve_own_duration,
)
from .traversal import count_by_status, find_by_id, index_of, walk_graph

__all__ = [
    # Models
    "TaskStatus",
    "TaskNode",
    "DurationAudit",
    # Rollup
    "TaskRegistry",
    "build_registry",
    "get_total_greedy_duration",
    "get_min_duration",
    "get_outstanding_duration",
    "resolve_own_duration",
    # Traversal
    "walk_graph",
    "find_by_id",
    "index_of",
    "count_by_status",
    # Events
    "DomainEvent",
    "TaskReordered",
    "TaskStatusToggled",
    "TaskAnchorToggled",
    "TaskRescaled",
    "TaskArchived",
    "TaskInserted",
]
