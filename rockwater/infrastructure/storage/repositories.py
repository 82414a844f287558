"""Repository for task stack files.

A stack file stores every node once, in an arena, and links children by
id. That lets shared subtasks (diamonds) and cycles survive a save and
load without duplicating nodes:

    {
      "stack": ["write-report", "standup"],
      "nodes": [
        {"id": "write-report", "title": "Write report", "duration": 30,
         "children": ["outline"]},
        ...
      ]
    }
"""

import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from rockwater.domain.shared.result import Err, Ok, Result
from rockwater.domain.task.models import TaskNode, TaskStatus
from rockwater.domain.task.traversal import walk_graph
from rockwater.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)


class StoredNode(BaseModel):
    """One node as written to disk, with children as ids."""

    id: str
    title: str = ""
    duration: int = 0
    original_duration: int | None = None
    is_anchored: bool = False
    start_time: datetime | None = None
    status: TaskStatus = TaskStatus.TODO
    children: list[str] = Field(default_factory=list)


class StackFile(BaseModel):
    """On-disk layout of a task stack."""

    stack: list[str] = Field(default_factory=list)
    nodes: list[StoredNode] = Field(default_factory=list)


def _link(stack_file: StackFile) -> Result[list[TaskNode], str]:
    """Build TaskNodes from the arena and wire children by id."""
    by_id: dict[str, TaskNode] = {}
    for stored in stack_file.nodes:
        if stored.id in by_id:
            return Err(f"Duplicate node id: {stored.id}")
        by_id[stored.id] = TaskNode(**stored.model_dump(exclude={"children"}))

    for stored in stack_file.nodes:
        missing = [child_id for child_id in stored.children if child_id not in by_id]
        if missing:
            return Err(f"Node '{stored.id}' references unknown children: {', '.join(missing)}")
        # Assigned after construction so cycles keep object identity
        by_id[stored.id].children = [by_id[child_id] for child_id in stored.children]

    unknown = [task_id for task_id in stack_file.stack if task_id not in by_id]
    if unknown:
        return Err(f"Stack references unknown tasks: {', '.join(unknown)}")

    return Ok([by_id[task_id] for task_id in stack_file.stack])


def _flatten(tasks: list[TaskNode]) -> StackFile:
    """Store every reachable node once; top-level copies win over children."""
    chosen: dict[str, TaskNode] = {task.id: task for task in tasks}
    for node in walk_graph(tasks):
        chosen.setdefault(node.id, node)

    nodes = [
        StoredNode(
            id=node.id,
            title=node.title,
            duration=node.duration,
            original_duration=node.original_duration,
            is_anchored=node.is_anchored,
            start_time=node.start_time,
            status=node.status,
            children=[child.id for child in node.children],
        )
        for node in chosen.values()
    ]
    return StackFile(stack=[task.id for task in tasks], nodes=nodes)


class StackRepository:
    """Repository for task stack persistence.

    Wraps stack file operations with Result-based error handling.
    """

    def __init__(self, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._storage = storage or JsonStorage()

    def load(self, path: Path) -> Result[list[TaskNode], str]:
        """Load a task stack in list order.

        Returns:
            Ok(list[TaskNode]) if successful, Err(str) with error message if failed.
        """
        result = self._storage.read_object(path)
        if isinstance(result, Err):
            return result

        try:
            stack_file = StackFile(**result.value)
        except ValidationError as e:
            return Err(f"Invalid stack data in {path}: {e}")

        logger.debug(f"Loaded {len(stack_file.nodes)} nodes from {path}")
        return _link(stack_file)

    def save(self, path: Path, tasks: list[TaskNode]) -> Result[None, str]:
        """Save a task stack in list order.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        stack_file = _flatten(tasks)
        logger.debug(f"Saving {len(stack_file.nodes)} nodes to {path}")
        return self._storage.write_object(path, stack_file.model_dump(mode="json"))
