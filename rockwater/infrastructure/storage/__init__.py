"""Storage infrastructure for Rockwater.

Persistence plumbing around the scheduling core, using Result monads
for explicit error handling.
"""

from rockwater.infrastructure.storage.json_storage import JsonStorage
from rockwater.infrastructure.storage.repositories import StackFile, StackRepository, StoredNode

__all__ = [
    "JsonStorage",
    "StackRepository",
    "StackFile",
    "StoredNode",
]
