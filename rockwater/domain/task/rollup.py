"""Duration rollup engine.

Computes the "greedy" time commitment of a task: its own duration plus
every outstanding descendant, counted once. All functions are pure - no
I/O, no side effects.
"""

from collections.abc import Iterable, Mapping

from rockwater.domain.shared.errors import ConfigurationError

from .models import DurationAudit, TaskNode

TaskRegistry = Mapping[str, TaskNode]

DONE_ROOT_NOTE = (
    "Note: Status is DONE - This {total}m is for display only and consumes 0m in schedule."
)


def build_registry(tasks: Iterable[TaskNode]) -> dict[str, TaskNode]:
    """Map task ids to the most current node for one rollup call."""
    return {task.id: task for task in tasks}


def resolve_own_duration(node: TaskNode, registry: TaskRegistry | None = None) -> int:
    """Resolve a node's own duration.

    Resolution order: the registry entry for this id, then the node's
    ``original_duration``, then its ``duration``.

    Raises:
        ConfigurationError: If the resolved duration is negative
    """
    if registry is not None and node.id in registry:
        node = registry[node.id]
    own = node.own_duration
    if own < 0:
        raise ConfigurationError(
            f"Task '{node.title or node.id}' has negative duration {own}m",
            task_id=node.id,
        )
    return own


def _collect(
    nodes: Iterable[TaskNode],
    registry: TaskRegistry | None,
    exclude: set[str],
) -> tuple[int, list[str]]:
    """Sum ``nodes`` and their outstanding descendants depth-first.

    ``visiting`` holds the current path and stops cycles; ``visited``
    spans the whole call and stops a diamond-shared node from being
    counted twice. A done node is marked visited but its subtree is
    never entered. Ids in ``exclude`` are never counted.
    """
    visiting: set[str] = set(exclude)
    visited: set[str] = set(exclude)
    trace: list[str] = []
    total = 0

    def descend(children: Iterable[TaskNode]) -> None:
        nonlocal total
        for child in children:
            current = registry.get(child.id, child) if registry is not None else child

            if current.id in visiting:
                continue
            if current.id in visited:
                continue
            visited.add(current.id)

            if current.is_done():
                continue

            contribution = resolve_own_duration(current, registry)
            total += contribution
            if contribution > 0:
                trace.append(f"+{contribution}m from {current.title}")

            visiting.add(current.id)
            descend(current.children)
            visiting.discard(current.id)

    descend(nodes)
    return total, trace


def _collect_subtasks(
    root: TaskNode,
    registry: TaskRegistry | None,
) -> tuple[int, list[str]]:
    return _collect(root.children, registry, {root.id})


def get_total_greedy_duration(
    root: TaskNode,
    registry: TaskRegistry | None = None,
) -> DurationAudit:
    """Compute a task's own duration plus all outstanding subtask work.

    The queried root is always expanded, even when it is done itself, so
    a completed parent still shows the time its subtree represents. Done
    descendants contribute nothing and prune their subtree.

    Args:
        root: Task to roll up
        registry: Optional id -> node map; when a descendant's id is
            present, that entry replaces the embedded child copy. The
            root's own duration is resolved through it as well.

    Returns:
        DurationAudit with the total and a trace starting with "Base: {own}m"

    Raises:
        ConfigurationError: If any reached node has a negative duration
    """
    own = resolve_own_duration(root, registry)
    subtotal, sub_trace = _collect_subtasks(root, registry)
    total = own + subtotal

    trace = [f"Base: {own}m", *sub_trace]
    if root.is_done():
        trace.append(DONE_ROOT_NOTE.format(total=total))

    return DurationAudit(total=total, trace=trace)


def get_min_duration(root: TaskNode, registry: TaskRegistry | None = None) -> int:
    """Sum the durations of a task's incomplete descendants.

    The task's own duration is not included. Controllers use this as a
    floor when shrinking a parent below its outstanding subtasks.
    """
    subtotal, _ = _collect_subtasks(root, registry)
    return subtotal


def get_outstanding_duration(
    tasks: Iterable[TaskNode],
    registry: TaskRegistry | None = None,
) -> int:
    """Sum the own durations of all outstanding work in a stack.

    Every todo task and todo descendant reachable from ``tasks`` counts
    once, so a subtask that is also listed in the stack is not added a
    second time through its parent's rollup. Done tasks prune their
    subtree as in the rollup.
    """
    total, _ = _collect(tasks, registry, set())
    return total
