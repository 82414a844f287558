"""Infrastructure layer for Rockwater.

I/O adapters that sit outside the pure scheduling core.
"""

from rockwater.infrastructure.storage import JsonStorage, StackRepository

__all__ = [
    "JsonStorage",
    "StackRepository",
]
