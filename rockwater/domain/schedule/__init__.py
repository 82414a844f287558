"""Schedule domain - rock-and-water placement.

Functions:
    compute_schedule - place a task stack on the timeline from ``now``
    validate_stack - reject stacks that violate scheduling preconditions
"""

from .scheduler import compute_schedule
from .validation import validate_stack

__all__ = [
    "compute_schedule",
    "validate_stack",
]
