"""User property storage and preferences."""

from .store import PropertyStore, InMemoryPropertyStore, SQLitePropertyStore
from .preferences import UserPreferences, DEFAULT_HEADER_ROW

__all__ = [
    "PropertyStore",
    "InMemoryPropertyStore",
    "SQLitePropertyStore",
    "UserPreferences",
    "DEFAULT_HEADER_ROW",
]
