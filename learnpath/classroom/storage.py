"""
Storage - Pluggable key-value media and whole-document persistence.

Each aggregate (enrollment, progress, quiz attempts) is one document
under one key. Every mutation reads the full document, applies the
change, and writes the full document back; there are no partial-field
updates at the storage boundary.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from learnpath.errors import StorageWriteError


logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyValueStorage(Protocol):
    """Minimal string key-value medium (localStorage-like)."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process medium, used for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class SQLiteStorage:
    """
    Key-value medium backed by a single SQLite table.

    Each call opens its own connection, so the file can be shared with
    other readers between calls.
    """

    def __init__(self, db_path: Path):
        """
        Initialize storage.

        Args:
            db_path: Path to the SQLite file (parent directories are created)
        """
        self.db_path = Path(db_path)
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get_item(self, key: str) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            )
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set_item(self, key: str, value: str) -> None:
        conn = self._get_connection()
        try:
            now = datetime.now(timezone.utc).isoformat()
            conn.execute(
                """INSERT INTO kv_store (key, value, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET
                     value = excluded.value,
                     updated_at = excluded.updated_at""",
                (key, value, now)
            )
            conn.commit()
        finally:
            conn.close()

    def remove_item(self, key: str) -> None:
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()


class DocumentStore:
    """
    Typed whole-document access over a KeyValueStorage.

    Reads never fail: a missing, unreadable, or malformed document is
    replaced by the caller's default. Writes raise StorageWriteError.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self._adapters: dict[Any, TypeAdapter] = {}

    def _adapter(self, doc_type: Any) -> TypeAdapter:
        if doc_type not in self._adapters:
            self._adapters[doc_type] = TypeAdapter(doc_type)
        return self._adapters[doc_type]

    def load(self, key: str, doc_type: type[T] | Any, default: Callable[[], T]) -> T:
        """
        Load and validate a document.

        Args:
            key: Storage key
            doc_type: Pydantic model or type expression (e.g. list[QuizAttempt])
            default: Factory for the value used when nothing valid is stored

        Returns:
            The parsed document, or default() on any read/parse failure
        """
        try:
            raw = self.storage.get_item(key)
        except (OSError, sqlite3.Error) as e:
            logger.warning(f"Failed to read '{key}', starting empty: {e}")
            return default()

        if raw is None:
            return default()

        try:
            return self._adapter(doc_type).validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Stored '{key}' is unreadable, starting empty: {e.error_count()} errors")
            return default()

    def save(self, key: str, document: Any, doc_type: type[T] | Any = None) -> None:
        """
        Serialize and write a whole document.

        Raises:
            StorageWriteError: If the medium rejects the write
        """
        adapter = self._adapter(doc_type if doc_type is not None else type(document))
        payload = adapter.dump_json(document, by_alias=True, exclude_none=True).decode("utf-8")
        try:
            self.storage.set_item(key, payload)
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Failed to save '{key}': {e}")
            raise StorageWriteError(key, str(e)) from e

    def remove(self, key: str) -> None:
        """
        Remove a document.

        Raises:
            StorageWriteError: If the medium rejects the removal
        """
        try:
            self.storage.remove_item(key)
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Failed to remove '{key}': {e}")
            raise StorageWriteError(key, str(e)) from e
