"""Key-value stores for user properties."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import aiosqlite

from ..config import settings


class PropertyStore(ABC):
    """String key-value storage scoped to one user."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when unset."""

    @abstractmethod
    async def set(self, key: str, value: str):
        """Store a value, replacing any previous one."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""


class InMemoryPropertyStore(PropertyStore):
    """Property store backed by a dict."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str):
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class SQLitePropertyStore(PropertyStore):
    """Persistent property store in a single SQLite table."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else settings.properties_db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def initialize(self):
        """Open the database and create the properties table."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(str(self.db_path))

        await self._connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS properties (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
            """
        )
        await self._connection.commit()

    async def close(self):
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def get(self, key: str) -> Optional[str]:
        async with self._connection.execute(
            "SELECT value FROM properties WHERE key = ?", (key,)
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return row[0]
        return None

    async def set(self, key: str, value: str):
        await self._connection.execute(
            "INSERT OR REPLACE INTO properties (key, value) VALUES (?, ?)",
            (key, value),
        )
        await self._connection.commit()

    async def delete(self, key: str) -> bool:
        cursor = await self._connection.execute("DELETE FROM properties WHERE key = ?", (key,))
        await self._connection.commit()
        return cursor.rowcount > 0
