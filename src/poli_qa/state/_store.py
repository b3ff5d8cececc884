"""The checklist store: QA state plus the operations that change it."""

import uuid
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import pendulum
from pydantic import BaseModel, ConfigDict, Field

from ._location import resolve_screen
from ._merge import checklist_fingerprint, merge_checklists
from ._models import (
    BugReport,
    BugStatus,
    QAState,
    TestChecklist,
    TestItem,
    TestSession,
    TestStatus,
)
from ._report import render_markdown_report

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from structlog.typing import FilteringBoundLogger

    from poli_qa.config import Config
    from poli_qa.storage import BlobStore

    from ._models import BugDraft

type StateListener = Callable[[QAState], None]


def now_ms() -> int:
    """Return the current UTC time in epoch milliseconds."""
    return int(pendulum.now("UTC").timestamp() * 1000)


def new_id(prefix: str) -> str:
    """Return a collision-resistant identifier such as ``bug_3f2a...``."""
    return f"{prefix}_{uuid.uuid4().hex}"


class QAStoreOptions(BaseModel):
    """Options an embedding application passes to :class:`QAStore`.

    Attributes:
        default_checklists: The checklist document shipped with the
            application, usually the generated checklist file.
        storage_key: Key the state is persisted under.
        enable_screen_detection: Whether the current screen follows the
            browser location.
        tester_name: Reporter used for bugs filed without one.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, arbitrary_types_allowed=True
    )

    default_checklists: tuple[TestChecklist, ...] = ()
    storage_key: str = Field(default="poli_qa_state", min_length=1)
    enable_screen_detection: bool = True
    tester_name: str = ""


def _recount(session: TestSession, checklists: tuple[TestChecklist, ...]) -> TestSession:
    items = [item for checklist in checklists for item in checklist.items]
    return replace(
        session,
        total_tests=len(items),
        passed_tests=sum(1 for i in items if i.status == TestStatus.PASSED),
        failed_tests=sum(1 for i in items if i.status == TestStatus.FAILED),
        skipped_tests=sum(1 for i in items if i.status == TestStatus.SKIPPED),
    )


def _reset_item(item: TestItem) -> TestItem:
    return replace(item, status=TestStatus.NOT_STARTED, notes=None, tested_at=None)


class QAStore:
    """State container for one embedding application.

    Holds an immutable :class:`QAState` snapshot. Each operation builds a new
    snapshot, swaps it in and notifies subscribers; the store persists itself
    through one such subscription. Operations trust their input: unknown ids
    are silent no-ops and nothing is validated here.
    """

    merge_checklists: ClassVar = staticmethod(merge_checklists)
    checklist_fingerprint: ClassVar = staticmethod(checklist_fingerprint)

    _options: QAStoreOptions
    _blob_store: "BlobStore"
    _state: QAState
    _current_screen: str | None
    _listeners: "list[StateListener]"
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        options: QAStoreOptions | None = None,
        blob_store: "BlobStore | None" = None,
        *,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Load persisted state, reconcile it and start persisting changes.

        Args:
            options: Store options. Defaults to an empty checklist document.
            blob_store: Where state is persisted. Defaults to an in-memory store.
            logger: Optional logger for debug-level operation logging.
                If None, persistence failures still go to the library logger.
        """
        # Deferred import to avoid circular dependency
        from poli_qa.storage import MemoryBlobStore, load_state  # noqa: PLC0415

        self._options = options if options is not None else QAStoreOptions()
        self._blob_store = blob_store if blob_store is not None else MemoryBlobStore()
        self._current_screen = None
        self._listeners = []
        self._logger = logger

        defaults = self._options.default_checklists
        loaded = load_state(self._blob_store, self._options.storage_key, logger=logger)

        if loaded is None:
            self._state = QAState(checklists=defaults)
        else:
            checklists = loaded.checklists
            if defaults and checklist_fingerprint(checklists) != checklist_fingerprint(
                defaults
            ):
                checklists = merge_checklists(checklists, defaults)
                if self._logger:
                    self._logger.debug(
                        "checklists_merged",
                        screens=len(checklists),
                        items=sum(len(c.items) for c in checklists),
                    )
            self._state = replace(loaded, is_open=False, checklists=checklists)

        self._listeners.append(self._persist)
        self._persist(self._state)

    @classmethod
    def from_config(
        cls,
        config: "Config",
        project_root: Path | None = None,
        *,
        default_checklists: "Sequence[TestChecklist]" = (),
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> "QAStore":
        """Create a store persisting to the project's SQLite database.

        Storage key, quota and default tester come from ``config.store``.
        """
        from poli_qa.storage import open_blob_store  # noqa: PLC0415

        options = QAStoreOptions(
            default_checklists=tuple(default_checklists),
            storage_key=config.store.storage_key,
            tester_name=config.store.tester_name,
        )
        blob_store = open_blob_store(config.store, project_root, logger=logger)
        return cls(options, blob_store, logger=logger)

    # -------------------------------------------------------------------------
    # Snapshot access and observation
    # -------------------------------------------------------------------------

    @property
    def options(self) -> QAStoreOptions:
        """Get the options this store was created with."""
        return self._options

    @property
    def state(self) -> QAState:
        """Get the current state snapshot."""
        return self._state

    def subscribe(self, listener: "StateListener") -> "Callable[[], None]":
        """Call ``listener`` with each new snapshot.

        Returns:
            A function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: QAState, event: str, **details: object) -> None:
        self._state = state
        if self._logger:
            self._logger.debug(event, **details)
        for listener in list(self._listeners):
            listener(state)

    def _persist(self, state: QAState) -> None:
        from poli_qa.storage import save_state  # noqa: PLC0415

        _ = save_state(
            state, self._blob_store, self._options.storage_key, logger=self._logger
        )

    # -------------------------------------------------------------------------
    # Panel
    # -------------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        """Whether the overlay panel is visible."""
        return self._state.is_open

    def toggle_panel(self) -> None:
        self._commit(
            replace(self._state, is_open=not self._state.is_open), "panel_toggled"
        )

    def open_panel(self) -> None:
        self._commit(replace(self._state, is_open=True), "panel_opened")

    def close_panel(self) -> None:
        self._commit(replace(self._state, is_open=False), "panel_closed")

    # -------------------------------------------------------------------------
    # Current screen
    # -------------------------------------------------------------------------

    @property
    def current_screen(self) -> str | None:
        """The screen under test, or None when screen detection is disabled."""
        if not self._options.enable_screen_detection:
            return None
        return self._current_screen

    def set_current_screen(self, screen: str | None) -> None:
        self._current_screen = screen

    def detect_screen(self, path: str, hash_fragment: str = "") -> str | None:
        """Set the current screen from a browser location.

        Returns:
            The detected screen, or None if detection is disabled or nothing
            matched (the current screen is then left unchanged).
        """
        if not self._options.enable_screen_detection:
            return None
        screen = resolve_screen(path, hash_fragment, self._state.checklists)
        if screen is not None:
            self._current_screen = screen
        return screen

    # -------------------------------------------------------------------------
    # Checklist items
    # -------------------------------------------------------------------------

    def update_test_status(
        self, test_id: str, status: TestStatus, notes: str | None = None
    ) -> None:
        """Record a result for one item and recount the active session."""
        tested_at = now_ms()
        checklists = tuple(
            replace(
                checklist,
                items=tuple(
                    replace(item, status=status, notes=notes, tested_at=tested_at)
                    if item.id == test_id
                    else item
                    for item in checklist.items
                ),
            )
            for checklist in self._state.checklists
        )

        session = self._state.current_session
        if session is not None:
            session = _recount(session, checklists)

        self._commit(
            replace(self._state, checklists=checklists, current_session=session),
            "test_status_updated",
            test_id=test_id,
            status=str(status),
        )

    def add_test_item(self, item: TestItem) -> None:
        """Append ``item`` to its screen's checklist, creating it if needed."""
        if self._state.get_checklist(item.screen) is None:
            checklists = (
                *self._state.checklists,
                TestChecklist(screen=item.screen, items=(item,)),
            )
        else:
            checklists = tuple(
                replace(c, items=(*c.items, item)) if c.screen == item.screen else c
                for c in self._state.checklists
            )
        session = self._state.current_session
        if session is not None:
            session = _recount(session, checklists)

        self._commit(
            replace(self._state, checklists=checklists, current_session=session),
            "test_item_added",
            test_id=item.id,
            screen=item.screen,
        )

    def remove_test_item(self, test_id: str) -> None:
        checklists = tuple(
            replace(c, items=tuple(i for i in c.items if i.id != test_id))
            for c in self._state.checklists
        )
        session = self._state.current_session
        if session is not None:
            session = _recount(session, checklists)

        self._commit(
            replace(self._state, checklists=checklists, current_session=session),
            "test_item_removed",
            test_id=test_id,
        )

    # -------------------------------------------------------------------------
    # Bugs
    # -------------------------------------------------------------------------

    def report_bug(self, draft: "BugDraft") -> BugReport:
        """File a bug and link it to the active session.

        Returns:
            The filed bug with its assigned id and timestamp.
        """
        bug = BugReport(
            id=new_id("bug"),
            title=draft.title,
            description=draft.description,
            severity=draft.severity,
            status=draft.status,
            screen=draft.screen,
            steps_to_reproduce=draft.steps_to_reproduce,
            expected_behavior=draft.expected_behavior,
            actual_behavior=draft.actual_behavior,
            reported_at=now_ms(),
            reported_by=draft.reported_by or self._options.tester_name,
            screenshot=draft.screenshot,
            console_errors=draft.console_errors,
            session_metadata=dict(draft.session_metadata),
        )

        session = self._state.current_session
        if session is not None:
            session = replace(session, bugs_found=(*session.bugs_found, bug.id))

        self._commit(
            replace(self._state, bugs=(*self._state.bugs, bug), current_session=session),
            "bug_reported",
            bug_id=bug.id,
            severity=str(bug.severity),
        )
        return bug

    def update_bug_status(
        self, bug_id: str, status: BugStatus, *, fixed_in: str | None = None
    ) -> None:
        """Change a bug's status.

        ``fixed_at`` is stamped when the bug moves into ``fixed`` from another
        status and is left alone otherwise.
        """
        stamp = now_ms()

        def update(bug: BugReport) -> BugReport:
            fixed_at = bug.fixed_at
            if status == BugStatus.FIXED and bug.status != BugStatus.FIXED:
                fixed_at = stamp
            return replace(
                bug,
                status=status,
                fixed_at=fixed_at,
                fixed_in=fixed_in if fixed_in is not None else bug.fixed_in,
            )

        bugs = tuple(update(b) if b.id == bug_id else b for b in self._state.bugs)
        self._commit(
            replace(self._state, bugs=bugs),
            "bug_status_updated",
            bug_id=bug_id,
            status=str(status),
        )

    def delete_bug(self, bug_id: str) -> None:
        session = self._state.current_session
        if session is not None:
            session = replace(
                session,
                bugs_found=tuple(b for b in session.bugs_found if b != bug_id),
            )
        bugs = tuple(b for b in self._state.bugs if b.id != bug_id)
        self._commit(
            replace(self._state, bugs=bugs, current_session=session),
            "bug_deleted",
            bug_id=bug_id,
        )

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def start_test_session(self, name: str, tester: str) -> TestSession:
        """Start a new session, clearing every item's previous result.

        Any session already in progress is replaced without being archived.
        """
        checklists = tuple(
            replace(c, items=tuple(_reset_item(i) for i in c.items))
            for c in self._state.checklists
        )
        session = TestSession(
            id=new_id("session"),
            name=name,
            tester=tester,
            started_at=now_ms(),
            total_tests=sum(len(c.items) for c in checklists),
        )
        self._commit(
            replace(self._state, checklists=checklists, current_session=session),
            "session_started",
            session_id=session.id,
            total_tests=session.total_tests,
        )
        return session

    def complete_test_session(self, notes: str | None = None) -> TestSession | None:
        """Archive the active session.

        Returns:
            The completed session, or None if no session was active.
        """
        session = self._state.current_session
        if session is None:
            return None

        completed = replace(session, completed_at=now_ms(), notes=notes)
        self._commit(
            replace(
                self._state,
                current_session=None,
                test_sessions=(*self._state.test_sessions, completed),
            ),
            "session_completed",
            session_id=completed.id,
            passed=completed.passed_tests,
            failed=completed.failed_tests,
        )
        return completed

    def delete_session(self, session_id: str) -> None:
        sessions = tuple(s for s in self._state.test_sessions if s.id != session_id)
        self._commit(
            replace(self._state, test_sessions=sessions),
            "session_deleted",
            session_id=session_id,
        )

    # -------------------------------------------------------------------------
    # Reports and state management
    # -------------------------------------------------------------------------

    def generate_markdown_report(self) -> str:
        return render_markdown_report(self._state)

    def export_report(self, path: Path) -> Path:
        """Write the Markdown report.

        Args:
            path: Destination file, or a directory to create
                ``poli_report_<timestamp>.md`` in.

        Returns:
            The path written.
        """
        target = path / f"poli_report_{now_ms()}.md" if path.is_dir() else path
        target.parent.mkdir(parents=True, exist_ok=True)
        _ = target.write_text(self.generate_markdown_report(), encoding="utf-8")
        return target

    def export_state(self, path: Path) -> None:
        """Write the full state as JSON for :func:`poli_qa.storage.import_from_file`."""
        from poli_qa.storage import export_to_file  # noqa: PLC0415

        export_to_file(self._state, path)

    def reset_state(self) -> None:
        """Discard all results, sessions and bugs, keeping the default checklists."""
        self._commit(
            QAState(checklists=self._options.default_checklists), "state_reset"
        )
