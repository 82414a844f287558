"""Task stack events.

Immutable records of edits applied to a task stack. The application
layer returns one alongside every recomputed stack so callers can
persist, log or undo the change.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all stack events."""

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}


class TaskReordered(DomainEvent):
    """A floating task moved within the stack."""

    task_id: str
    from_index: int
    to_index: int


class TaskStatusToggled(DomainEvent):
    """A task switched between todo and done."""

    task_id: str
    status: str


class TaskAnchorToggled(DomainEvent):
    """A task became a rock or was released back to water."""

    task_id: str
    is_anchored: bool
    start_time: datetime | None = None


class TaskRescaled(DomainEvent):
    """A task's own duration changed."""

    task_id: str
    old_duration: int
    new_duration: int


class TaskArchived(DomainEvent):
    """A task left the stack."""

    task_id: str
    task_title: str


class TaskInserted(DomainEvent):
    """A task was added to the stack."""

    task_id: str
    index: int
