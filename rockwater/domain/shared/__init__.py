"""Shared domain building blocks.

- ConfigurationError: the typed precondition failure raised by the core
- Result monad used by the application layer for refusable edits
"""

from rockwater.domain.shared.errors import ConfigurationError
from rockwater.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_err,
    is_ok,
)

__all__ = [
    "ConfigurationError",
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
]
