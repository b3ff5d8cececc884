"""QA state: checklists, sessions, bugs and the store that manages them.

Example:
    >>> from poli_qa.state import QAStore, QAStoreOptions, TestStatus
    >>> store = QAStore(QAStoreOptions(default_checklists=checklists))
    >>> session = store.start_test_session("Smoke", "Ada")
    >>> store.update_test_status("home_001", TestStatus.PASSED)
    >>> print(store.generate_markdown_report())
"""

from poli_qa.exceptions import MissingStoreContextError

from ._context import bind_store, current_store
from ._location import ROOT_SCREENS, resolve_screen
from ._merge import checklist_fingerprint, merge_checklists
from ._models import (
    BugDraft,
    BugReport,
    BugSeverity,
    BugStatus,
    QAState,
    TestCategory,
    TestChecklist,
    TestItem,
    TestSession,
    TestStatus,
)
from ._report import (
    NO_SESSION_REPORT,
    STATUS_ICONS,
    format_timestamp,
    render_markdown_report,
)
from ._store import QAStore, QAStoreOptions, StateListener, new_id, now_ms

__all__ = [
    "NO_SESSION_REPORT",
    "ROOT_SCREENS",
    "STATUS_ICONS",
    "BugDraft",
    "BugReport",
    "BugSeverity",
    "BugStatus",
    "MissingStoreContextError",
    "QAState",
    "QAStore",
    "QAStoreOptions",
    "StateListener",
    "TestCategory",
    "TestChecklist",
    "TestItem",
    "TestSession",
    "TestStatus",
    "bind_store",
    "checklist_fingerprint",
    "current_store",
    "format_timestamp",
    "merge_checklists",
    "new_id",
    "now_ms",
    "render_markdown_report",
    "resolve_screen",
]
