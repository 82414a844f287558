"""Cycle-safe graph traversal helpers.

All functions in this module are pure - no I/O, no side effects.
Task children may form diamonds and cycles, so every walk keeps a
``seen`` set keyed by task id.
"""

from collections.abc import Iterable, Iterator

from .models import TaskNode, TaskStatus


def walk_graph(roots: Iterable[TaskNode]) -> Iterator[TaskNode]:
    """Yield every node reachable from ``roots`` once, in pre-order.

    Args:
        roots: Starting nodes, visited in the given order

    Yields:
        Each reachable node the first time its id is encountered
    """
    seen: set[str] = set()

    def visit(node: TaskNode) -> Iterator[TaskNode]:
        if node.id in seen:
            return
        seen.add(node.id)
        yield node
        for child in node.children:
            yield from visit(child)

    for root in roots:
        yield from visit(root)


def find_by_id(tasks: Iterable[TaskNode], task_id: str) -> TaskNode | None:
    """Find a node anywhere in the graph by id."""
    for node in walk_graph(tasks):
        if node.id == task_id:
            return node
    return None


def index_of(tasks: list[TaskNode], task_id: str) -> int:
    """Return the position of a top-level task, or -1 if absent."""
    for i, task in enumerate(tasks):
        if task.id == task_id:
            return i
    return -1


def count_by_status(tasks: Iterable[TaskNode]) -> dict[TaskStatus, int]:
    """Count top-level tasks by status."""
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1
    return counts
