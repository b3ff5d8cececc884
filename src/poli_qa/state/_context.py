"""Binding a QAStore to the current execution context.

An embedding application owns its store; it binds the store for the extent
of a request, render pass or command so that code further down can reach it
without threading it through every call.
"""

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING

from poli_qa.exceptions import MissingStoreContextError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._store import QAStore

_current_store: "contextvars.ContextVar[QAStore | None]" = contextvars.ContextVar(
    "qa_store", default=None
)


@contextmanager
def bind_store(store: "QAStore") -> "Iterator[QAStore]":
    """Make ``store`` the current store until the block exits.

    Bindings nest; leaving a block restores the previous binding.
    """
    token = _current_store.set(store)
    try:
        yield store
    finally:
        _current_store.reset(token)


def current_store() -> "QAStore":
    """Return the store bound by the innermost :func:`bind_store` block.

    Raises:
        MissingStoreContextError: If no store is bound.
    """
    store = _current_store.get()
    if store is None:
        msg = "current_store() called outside of a bind_store() block"
        raise MissingStoreContextError(msg)
    return store
