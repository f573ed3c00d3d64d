"""Storage module.

- BaseStore: Abstract storage interface the Arena depends on
- InMemoryStore: Thread-safe reference implementation
"""

from .base import BaseStore
from .memory import InMemoryStore

__all__ = [
    "BaseStore",
    "InMemoryStore",
]
