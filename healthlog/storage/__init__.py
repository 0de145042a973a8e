"""Storage protocols and the in-memory reference implementation."""

from .base import CheckInStore, HealthProfileStore, UserStore
from .memory import InMemoryStore

__all__ = [
    "CheckInStore",
    "HealthProfileStore",
    "UserStore",
    "InMemoryStore",
]
