"""Persistence for QA state.

Blob stores hold the serialized state under a single key; the functions in
this package load, save, clear, import and export that document.

Example:
    >>> from poli_qa.storage import MemoryBlobStore, load_state, save_state
    >>> store = MemoryBlobStore()
    >>> load_state(store) is None
    True
"""

from ._blob import (
    BlobEntry,
    BlobStore,
    MemoryBlobStore,
    SQLiteBlobStore,
    open_blob_store,
)
from ._codec import StateDocument, is_state_document, state_from_dict, state_to_dict
from ._persistence import (
    DEFAULT_STORAGE_KEY,
    MAX_RETAINED_SESSIONS,
    clear_state,
    export_to_file,
    import_from_file,
    load_state,
    save_state,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "MAX_RETAINED_SESSIONS",
    "BlobEntry",
    "BlobStore",
    "MemoryBlobStore",
    "SQLiteBlobStore",
    "StateDocument",
    "clear_state",
    "export_to_file",
    "import_from_file",
    "is_state_document",
    "load_state",
    "open_blob_store",
    "save_state",
    "state_from_dict",
    "state_to_dict",
]
