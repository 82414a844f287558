"""Typed failures raised by the scheduling core.

The core performs no partial computation when its input is malformed.
Callers receive a ConfigurationError immediately and decide how to
surface it.
"""


class ConfigurationError(ValueError):
    """Raised when a task stack violates a scheduling precondition.

    Attributes:
        task_id: Id of the offending task, if the failure concerns one task.
    """

    def __init__(self, message: str, task_id: str | None = None) -> None:
        super().__init__(message)
        self.task_id = task_id
