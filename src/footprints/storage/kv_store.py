"""
Key-value stores for persisted tick logs.

SAFE CONCURRENT ACCESS (DuckDB):
- Single DuckDB connection (required by DuckDB)
- Write lock for all INSERT/DELETE
- No lock for reads (DuckDB MVCC ensures safety)
"""

from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Dict, List, Optional

import duckdb

from footprints.core.logger import get_logger


class KeyValueStore(ABC):
    """String key -> string value store used by TickPersistence."""

    @abstractmethod
    def get_string(self, key: str) -> Optional[str]:
        """Stored value for `key`, or None when absent."""
        pass

    @abstractmethod
    def set_string(self, key: str, value: str) -> None:
        """Insert or replace the value for `key`."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete `key` (no-op when absent)."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        pass

    def flush(self) -> None:
        """Make previous writes durable (no-op where writes are immediate)."""

    def close(self) -> None:
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and dry runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self.flush_count = 0

    def get_string(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_string(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._data)

    def flush(self) -> None:
        self.flush_count += 1


class DuckDBKeyValueStore(KeyValueStore):
    """
    DuckDB-backed store with:
    - Single connection (DuckDB requirement)
    - Write lock for all writes (serialized, safe)
    - No locks on reads (MVCC handles concurrency)
    """

    TABLE = "footprint_kv"

    def __init__(self, db_path: str):
        self.logger = get_logger(__name__)
        self.db_path = Path(db_path)

        # Global write lock (DuckDB = 1 writer max)
        self.write_lock = Lock()

        if str(self.db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = duckdb.connect(str(self.db_path), read_only=False)
        self._initialize_schema()

        self.logger.info(f"[DuckDBKeyValueStore] Connected: db={self.db_path}")

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------
    def _initialize_schema(self):
        with self.write_lock:
            self.conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.TABLE} (
                    key VARCHAR PRIMARY KEY,
                    value VARCHAR NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

    # ------------------------------------------------------------------
    # Reads (NO LOCK - DuckDB MVCC handles concurrency)
    # ------------------------------------------------------------------
    def get_string(self, key: str) -> Optional[str]:
        row = self.conn.execute(
            f"SELECT value FROM {self.TABLE} WHERE key = ?",
            [key]
        ).fetchone()
        return row[0] if row else None

    def keys(self) -> List[str]:
        rows = self.conn.execute(f"SELECT key FROM {self.TABLE} ORDER BY key").fetchall()
        return [r[0] for r in rows]

    # ------------------------------------------------------------------
    # Writes (locked)
    # ------------------------------------------------------------------
    def set_string(self, key: str, value: str) -> None:
        with self.write_lock:
            self.conn.execute(
                f"""
                INSERT INTO {self.TABLE} (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT (key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                [key, value]
            )

    def remove(self, key: str) -> None:
        with self.write_lock:
            self.conn.execute(f"DELETE FROM {self.TABLE} WHERE key = ?", [key])

    def flush(self) -> None:
        with self.write_lock:
            self.conn.execute("CHECKPOINT")

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------
    def close(self) -> None:
        if self.conn:
            self.conn.close()
            self.conn = None
            self.logger.info("[DuckDBKeyValueStore] Closed")


__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "DuckDBKeyValueStore"]
