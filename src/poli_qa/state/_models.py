# ruff: noqa: TC003  # Mapping needed at runtime for dataclass fields
"""Data model for checklists, test sessions and bug reports.

Every model is a frozen, slotted dataclass. Store operations never mutate a
snapshot in place; they build new values with :func:`dataclasses.replace`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum


class TestStatus(StrEnum):
    """Outcome of a single checklist item."""

    __test__ = False

    NOT_STARTED = "not_started"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class TestCategory(StrEnum):
    """Category a checklist item belongs to."""

    __test__ = False

    UI = "UI"
    FUNCTIONALITY = "Functionality"
    PERFORMANCE = "Performance"
    INTEGRATION = "Integration"


class BugSeverity(StrEnum):
    """Bug severity levels, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class BugStatus(StrEnum):
    """Bug triage states."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    FIXED = "fixed"
    WONT_FIX = "wont_fix"


@dataclass(frozen=True, slots=True)
class TestItem:
    """A single test on a screen's checklist.

    Only ``status``, ``notes`` and ``tested_at`` change during a test run;
    the remaining fields come from the checklist definition.

    Attributes:
        id: Identifier, stable across checklist regenerations.
        screen: Screen the item belongs to.
        category: Item category.
        description: Human-readable test description.
        status: Current outcome.
        notes: Free-form tester notes.
        tested_at: When the status was last set (epoch milliseconds).
    """

    __test__ = False

    id: str
    screen: str
    category: TestCategory
    description: str
    status: TestStatus = TestStatus.NOT_STARTED
    notes: str | None = None
    tested_at: int | None = None


@dataclass(frozen=True, slots=True)
class TestChecklist:
    """The ordered test items for one screen."""

    __test__ = False

    screen: str
    items: tuple[TestItem, ...] = ()


@dataclass(frozen=True, slots=True)
class BugDraft:
    """A bug report as filed by a tester, before an id is assigned.

    Attributes:
        title: Short summary.
        description: What went wrong.
        severity: How bad it is.
        screen: Screen the bug was found on.
        steps_to_reproduce: Ordered reproduction steps.
        expected_behavior: What should have happened.
        actual_behavior: What happened instead.
        reported_by: Reporter name. Empty falls back to the store's tester name.
        status: Initial triage state.
        screenshot: Optional screenshot reference (data URL or path).
        console_errors: Console errors captured when the bug was filed.
        session_metadata: Free-form environment details (browser, viewport).
    """

    title: str
    description: str
    screen: str
    severity: BugSeverity = BugSeverity.MEDIUM
    steps_to_reproduce: tuple[str, ...] = ()
    expected_behavior: str = ""
    actual_behavior: str = ""
    reported_by: str = ""
    status: BugStatus = BugStatus.OPEN
    screenshot: str | None = None
    console_errors: tuple[str, ...] = ()
    session_metadata: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class BugReport:
    """A filed bug.

    Attributes:
        id: Unique bug identifier (``bug_<hex>``).
        title: Short summary.
        description: What went wrong.
        severity: How bad it is.
        status: Triage state.
        screen: Screen the bug was found on.
        steps_to_reproduce: Ordered reproduction steps.
        expected_behavior: What should have happened.
        actual_behavior: What happened instead.
        reported_at: Filing time (epoch milliseconds).
        reported_by: Reporter name.
        fixed_at: When the bug moved into ``fixed`` (epoch milliseconds).
        fixed_in: Build or version containing the fix.
        screenshot: Optional screenshot reference.
        console_errors: Console errors captured when the bug was filed.
        session_metadata: Free-form environment details.
    """

    id: str
    title: str
    description: str
    severity: BugSeverity
    status: BugStatus
    screen: str
    steps_to_reproduce: tuple[str, ...]
    expected_behavior: str
    actual_behavior: str
    reported_at: int
    reported_by: str
    fixed_at: int | None = None
    fixed_in: str | None = None
    screenshot: str | None = None
    console_errors: tuple[str, ...] = ()
    session_metadata: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TestSession:
    """One bounded testing pass with aggregate counters.

    A session is current while ``completed_at`` is None.

    Attributes:
        id: Unique session identifier (``session_<hex>``).
        name: Session name.
        tester: Who is testing.
        started_at: Start time (epoch milliseconds).
        completed_at: Completion time (epoch milliseconds).
        total_tests: Number of items when the session started.
        passed_tests: Items currently passed.
        failed_tests: Items currently failed.
        skipped_tests: Items currently skipped.
        bugs_found: Ids of bugs filed during the session, in filing order.
        notes: Closing notes.
    """

    __test__ = False

    id: str
    name: str
    tester: str
    started_at: int
    completed_at: int | None = None
    total_tests: int = 0
    passed_tests: int = 0
    failed_tests: int = 0
    skipped_tests: int = 0
    bugs_found: tuple[str, ...] = ()
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class QAState:
    """Root aggregate and unit of persistence.

    Attributes:
        is_open: Whether the overlay panel is visible.
        current_session: The active session, if any.
        test_sessions: Completed sessions in completion order.
        checklists: One checklist per screen.
        bugs: Filed bugs in filing order.
    """

    is_open: bool = False
    current_session: TestSession | None = None
    test_sessions: tuple[TestSession, ...] = ()
    checklists: tuple[TestChecklist, ...] = ()
    bugs: tuple[BugReport, ...] = ()

    def all_items(self) -> list[TestItem]:
        """Return every item across all checklists, in checklist order."""
        return [item for checklist in self.checklists for item in checklist.items]

    def get_checklist(self, screen: str) -> TestChecklist | None:
        """Return the checklist for a screen, or None."""
        for checklist in self.checklists:
            if checklist.screen == screen:
                return checklist
        return None

    def get_bug(self, bug_id: str) -> BugReport | None:
        """Return the bug with the given id, or None."""
        for bug in self.bugs:
            if bug.id == bug_id:
                return bug
        return None
