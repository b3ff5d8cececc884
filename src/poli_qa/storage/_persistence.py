"""Load, save, clear, import and export of the QA state document."""

import sqlite3
from dataclasses import replace
from typing import TYPE_CHECKING

from poli_qa.exceptions import InvalidStateError, StorageError, StorageQuotaExceededError
from poli_qa.utils import dump_json, get_library_logger, load_json, load_json_file

from ._codec import is_state_document, state_from_dict, state_to_dict

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from poli_qa.state._models import QAState

    from ._blob import BlobStore

DEFAULT_STORAGE_KEY = "poli_qa_state"

# Completed sessions kept when a save hits the storage quota
MAX_RETAINED_SESSIONS = 10


def load_state(
    store: "BlobStore",
    key: str = DEFAULT_STORAGE_KEY,
    *,
    logger: "FilteringBoundLogger | None" = None,
) -> "QAState | None":
    """Load the persisted state stored under ``key``.

    Never raises: a missing, unparsable or structurally invalid document is
    logged and reported as None.
    """
    log = logger or get_library_logger()

    try:
        raw = store.get(key)
    except (StorageError, sqlite3.Error) as e:
        log.warning("state_load_failed", key=key, error=str(e))
        return None

    if raw is None:
        return None

    data = load_json(raw)
    if not is_state_document(data):
        log.warning("state_load_invalid", key=key)
        return None

    return state_from_dict(data, source=key)


def _prune_sessions(state: "QAState") -> "QAState":
    recent = sorted(state.test_sessions, key=lambda s: s.started_at, reverse=True)
    return replace(state, test_sessions=tuple(recent[:MAX_RETAINED_SESSIONS]))


def save_state(
    state: "QAState",
    store: "BlobStore",
    key: str = DEFAULT_STORAGE_KEY,
    *,
    logger: "FilteringBoundLogger | None" = None,
) -> bool:
    """Persist ``state`` under ``key``.

    When the store reports that its quota is exceeded, the write is retried
    once with completed sessions trimmed to the most recently started ones.
    Failures are logged rather than raised.

    Returns:
        True if the state was written, False otherwise.
    """
    log = logger or get_library_logger()

    try:
        store.set(key, dump_json(state_to_dict(state)))
    except StorageQuotaExceededError as e:
        log.warning(
            "state_save_quota_exceeded",
            key=key,
            size=e.size,
            quota=e.quota,
            sessions=len(state.test_sessions),
        )
    except (StorageError, sqlite3.Error) as e:
        log.error("state_save_failed", key=key, error=str(e))
        return False
    else:
        return True

    pruned = _prune_sessions(state)
    try:
        store.set(key, dump_json(state_to_dict(pruned)))
    except (StorageError, sqlite3.Error) as e:
        log.error("state_save_failed", key=key, error=str(e), retried=True)
        return False

    log.info("state_saved_after_prune", key=key, sessions=len(pruned.test_sessions))
    return True


def clear_state(
    store: "BlobStore",
    key: str = DEFAULT_STORAGE_KEY,
    *,
    logger: "FilteringBoundLogger | None" = None,
) -> None:
    """Remove the persisted state stored under ``key``."""
    log = logger or get_library_logger()
    try:
        deleted = store.delete(key)
    except (StorageError, sqlite3.Error) as e:
        log.error("state_clear_failed", key=key, error=str(e))
        return
    log.debug("state_cleared", key=key, deleted=deleted)


def export_to_file(state: "QAState", path: "Path") -> None:
    """Write ``state`` to ``path`` as an indented JSON document."""
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(dump_json(state_to_dict(state), indent=True), encoding="utf-8")


def import_from_file(path: "Path") -> "QAState":
    """Read a state document previously written by :func:`export_to_file`.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidStateError: If the file is not JSON or fails the structural check.
    """
    data = load_json_file(path)
    if data is None:
        msg = f"Not a JSON document: {path}"
        raise InvalidStateError(msg, source=str(path))
    return state_from_dict(data, source=str(path))
