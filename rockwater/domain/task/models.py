"""Task domain models.

Pure domain models for the task stack. Uses Pydantic for serialization
compatibility with the rest of the codebase.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    """Status of a task in the stack."""

    TODO = "todo"
    DONE = "done"


class TaskNode(BaseModel):
    """A schedulable unit of work.

    ``children`` may reference nodes that are also reachable from a
    sibling, so the structure is a graph with possible diamonds and
    cycles, not a tree. Anchored tasks ("rocks") hold a fixed
    ``start_time``; floating tasks ("water") get one from the scheduler.
    """

    id: str
    title: str = ""
    duration: int = 0
    original_duration: int | None = None
    is_anchored: bool = False
    start_time: datetime | None = None
    status: TaskStatus = TaskStatus.TODO
    children: list["TaskNode"] = Field(default_factory=list)
    trace: list[str] = Field(default_factory=list)

    @property
    def own_duration(self) -> int:
        """Own time, before any subtask rollup.

        ``original_duration`` wins because ``duration`` may already hold
        a rolled-up total from a previous scheduling pass.
        """
        if self.original_duration is not None:
            return self.original_duration
        return self.duration

    def is_done(self) -> bool:
        """Check if the task is completed (a scheduling ghost)."""
        return self.status == TaskStatus.DONE

    def is_leaf(self) -> bool:
        """Check if this node has no subtasks."""
        return len(self.children) == 0


class DurationAudit(BaseModel):
    """Rolled-up duration of a task and the contributions behind it."""

    total: int
    trace: list[str] = Field(default_factory=list)
