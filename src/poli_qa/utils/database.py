"""SQLite helpers backing the persisted blob store.

Rows travel as Pydantic models: :func:`fetch_one` validates a row into a
model and :func:`upsert` writes a model's fields as columns. ``None`` fields
are left out of an upsert, so a column is never explicitly set to NULL.
"""

import re
import sqlite3
from contextlib import contextmanager, suppress
from typing import TYPE_CHECKING, Literal, cast

from pydantic import BaseModel

if TYPE_CHECKING:
    from collections.abc import Iterator

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

type SQLValue = str | int | float | bytes | None

type IsolationLevel = Literal["DEFERRED", "EXCLUSIVE", "IMMEDIATE"] | None


@contextmanager
def connect(
    path: str,
    *,
    timeout: float = 30.0,
    isolation_level: IsolationLevel = "IMMEDIATE",
    wal_mode: bool = True,
) -> "Iterator[sqlite3.Connection]":
    """Open ``path`` for one transaction.

    The block's work is committed when it exits normally and rolled back when
    it raises. The connection is closed either way.

    Args:
        path: Database file, or ``:memory:``.
        timeout: Seconds to wait on a locked database.
        isolation_level: Transaction mode passed to :func:`sqlite3.connect`.
        wal_mode: Switch file databases to write-ahead logging.

    Yields:
        A connection whose rows are :class:`sqlite3.Row`.
    """
    conn = sqlite3.connect(path, timeout=timeout, isolation_level=isolation_level)
    conn.row_factory = sqlite3.Row

    if wal_mode and path != ":memory:" and not path.startswith("file:"):
        # Read-only or network filesystems may refuse WAL
        with suppress(sqlite3.OperationalError):
            _ = conn.execute("PRAGMA journal_mode=WAL")
        _ = conn.execute("PRAGMA busy_timeout=10000")

    try:
        yield conn
        conn.commit()
    except BaseException:
        with suppress(sqlite3.Error):
            conn.rollback()
        raise
    finally:
        conn.close()


def safe_identifier(name: str) -> str:
    """Return ``name`` double-quoted for use as a table or column name.

    Examples:
        >>> safe_identifier("blob_store")
        '"blob_store"'
        >>> safe_identifier("123abc")
        Traceback (most recent call last):
            ...
        ValueError: Invalid SQL identifier: '123abc'

    Raises:
        ValueError: Unless ``name`` is letters, digits and underscores and
            does not start with a digit.
    """
    if _IDENTIFIER_RE.match(name) is None:
        msg = f"Invalid SQL identifier: {name!r}"
        raise ValueError(msg)
    return f'"{name}"'


def fetch_one[T: BaseModel](
    conn: sqlite3.Connection,
    model: type[T],
    sql: str,
    params: tuple[SQLValue, ...] = (),
) -> T | None:
    """Run ``sql`` and validate its first row into ``model``, or return None."""
    row = cast("sqlite3.Row | None", conn.execute(sql, params).fetchone())
    return None if row is None else model.model_validate(dict(row))


def upsert(
    conn: sqlite3.Connection,
    table: str,
    obj: BaseModel,
    conflict_columns: list[str],
    *,
    commit: bool = True,
) -> int:
    """Insert ``obj`` into ``table``, updating the row it conflicts with.

    Columns outside ``conflict_columns`` take the new values on conflict.
    When every written column is a conflict column the insert is skipped
    instead.

    Args:
        conn: Open connection.
        table: Target table.
        obj: Row to write, one column per non-None field.
        conflict_columns: Columns of the unique constraint.
        commit: Commit right after the statement.

    Returns:
        The cursor's ``lastrowid``, or 0.
    """
    data = obj.model_dump(exclude_none=True)
    columns = [safe_identifier(name) for name in data]
    updates = [
        f"{column} = excluded.{column}"
        for name, column in zip(data, columns, strict=True)
        if name not in conflict_columns
    ]
    action = f"DO UPDATE SET {', '.join(updates)}" if updates else "DO NOTHING"
    sql = (
        f"INSERT INTO {safe_identifier(table)} ({', '.join(columns)}) "  # noqa: S608
        f"VALUES ({', '.join(f':{name}' for name in data)}) "
        f"ON CONFLICT ({', '.join(safe_identifier(c) for c in conflict_columns)}) {action}"
    )

    cursor = conn.execute(sql, data)
    if commit:
        conn.commit()
    return cursor.lastrowid or 0
