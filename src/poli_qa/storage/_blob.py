"""Keyed blob stores backing QA state persistence.

This module provides a small key-value protocol and two implementations:
an in-memory store for tests and embedding, and a SQLite-backed store for
the CLI. Both enforce an optional byte quota over everything they hold, which
is how callers observe the "storage full" condition.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, cast, runtime_checkable

import pendulum
from pydantic import BaseModel

from poli_qa.exceptions import StorageQuotaExceededError
from poli_qa.utils.database import connect, fetch_one, safe_identifier, upsert

if TYPE_CHECKING:
    import sqlite3

    from structlog.typing import FilteringBoundLogger

    from poli_qa.config import StoreConfig

# Pre-computed safe identifiers for the blob table/columns
_TABLE = safe_identifier("blob_store")
_KEY_COL = safe_identifier("key")
_VALUE_COL = safe_identifier("value")


class BlobEntry(BaseModel):
    """A stored blob.

    Attributes:
        key: The unique identifier for this entry.
        value: The stored text.
        updated_at: When this entry was last written (ISO 8601 string).
    """

    key: str
    value: str
    updated_at: str


@runtime_checkable
class BlobStore(Protocol):
    """Protocol for keyed text storage.

    Implementations raise StorageQuotaExceededError from ``set`` when the
    write would push the stored total past their quota.
    """

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageQuotaExceededError: If the write exceeds the quota.
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete ``key``. Returns True if it existed."""
        ...


def _byte_size(value: str) -> int:
    return len(value.encode("utf-8"))


def _check_quota(key: str, size: int, used: int, quota: int | None) -> None:
    if quota is None or used + size <= quota:
        return
    msg = f"Storing {size} bytes under {key!r} exceeds the {quota} byte quota"
    raise StorageQuotaExceededError(msg, key=key, size=size, quota=quota)


class MemoryBlobStore:
    """In-memory blob store.

    Useful for tests and for embedding applications that handle durability
    themselves. Data is not persisted.
    """

    _entries: dict[str, str]
    _quota_bytes: int | None
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        *,
        quota_bytes: int | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize an empty in-memory store.

        Args:
            quota_bytes: Maximum total size of stored values, or None for
                no limit.
            logger: Optional logger for debug-level operation logging.
                If None, no logging is performed.
        """
        self._entries = {}
        self._quota_bytes = quota_bytes
        self._logger = logger

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> str | None:
        value = self._entries.get(key)
        if self._logger:
            self._logger.debug("blob_get", key=key, found=value is not None)
        return value

    def set(self, key: str, value: str) -> None:
        size = _byte_size(value)
        used = sum(_byte_size(v) for k, v in self._entries.items() if k != key)
        _check_quota(key, size, used, self._quota_bytes)
        self._entries[key] = value
        if self._logger:
            self._logger.debug("blob_set", key=key, size=size)

    def delete(self, key: str) -> bool:
        deleted = self._entries.pop(key, None) is not None
        if self._logger:
            self._logger.debug("blob_delete", key=key, deleted=deleted)
        return deleted


# =============================================================================
# SQLite Implementation
# =============================================================================

_SQLITE_SCHEMA = """
CREATE TABLE IF NOT EXISTS blob_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""

_SQL_SELECT_BY_KEY = f"SELECT * FROM {_TABLE} WHERE {_KEY_COL} = ?"  # noqa: S608
_SQL_USED_BYTES = (
    f"SELECT COALESCE(SUM(LENGTH(CAST({_VALUE_COL} AS BLOB))), 0) "  # noqa: S608
    f"FROM {_TABLE} WHERE {_KEY_COL} != ?"
)
_SQL_DELETE = f"DELETE FROM {_TABLE} WHERE {_KEY_COL} = ?"  # noqa: S608


class SQLiteBlobStore:
    """SQLite-backed blob store.

    Persists blobs to a SQLite database file. Thread-safe for
    single-process access.
    """

    _db_path: str
    _quota_bytes: int | None
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        db_path: "str | Path",
        *,
        quota_bytes: int | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize a SQLite blob store.

        Creates the database file and schema if they don't exist.

        Args:
            db_path: Path to the SQLite database file.
            quota_bytes: Maximum total size of stored values, or None for
                no limit.
            logger: Optional logger for debug-level operation logging.
                If None, no logging is performed.
        """
        self._db_path = str(db_path)
        self._quota_bytes = quota_bytes
        self._logger = logger
        self._ensure_schema()

    @property
    def db_path(self) -> str:
        """Get the database path for this store."""
        return self._db_path

    def _ensure_schema(self) -> None:
        """Create the database schema if it doesn't exist."""
        with connect(self._db_path) as conn:
            _ = conn.executescript(_SQLITE_SCHEMA)

    def get(self, key: str) -> str | None:
        with connect(self._db_path) as conn:
            entry = fetch_one(conn, BlobEntry, _SQL_SELECT_BY_KEY, (key,))
        if self._logger:
            self._logger.debug("blob_get", key=key, found=entry is not None)
        return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        size = _byte_size(value)
        entry = BlobEntry(
            key=key,
            value=value,
            updated_at=pendulum.now("UTC").to_iso8601_string(),
        )

        with connect(self._db_path) as conn:
            row = cast("sqlite3.Row", conn.execute(_SQL_USED_BYTES, (key,)).fetchone())
            used = int(row[0])  # pyright: ignore[reportAny]
            _check_quota(key, size, used, self._quota_bytes)
            _ = upsert(conn, "blob_store", entry, ["key"], commit=False)

        if self._logger:
            self._logger.debug("blob_set", key=key, size=size)

    def delete(self, key: str) -> bool:
        with connect(self._db_path) as conn:
            cursor = conn.execute(_SQL_DELETE, (key,))
            deleted = cursor.rowcount > 0
        if self._logger:
            self._logger.debug("blob_delete", key=key, deleted=deleted)
        return deleted


def open_blob_store(
    store_config: "StoreConfig",
    project_root: "Path | None" = None,
    *,
    logger: "FilteringBoundLogger | None" = None,
) -> SQLiteBlobStore:
    """Open the project's SQLite blob store as configured.

    An empty ``store.database`` setting selects ``.poli/state.db`` under the
    project root. Relative paths are resolved against the project root.
    """
    from poli_qa.utils import find_project_root, get_poli_state_db  # noqa: PLC0415

    root = project_root or find_project_root()
    if store_config.database:
        db_path = Path(store_config.database)
        if not db_path.is_absolute():
            db_path = root / db_path
    else:
        db_path = get_poli_state_db(root)

    db_path.parent.mkdir(parents=True, exist_ok=True)
    return SQLiteBlobStore(db_path, quota_bytes=store_config.quota_bytes, logger=logger)
