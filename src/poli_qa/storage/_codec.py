# pyright: reportAny=false, reportExplicitAny=false
"""Conversion between QAState values and their JSON document form.

The document keeps the camelCase keys used by the in-browser overlay so a
state exported from the panel can be imported here and vice versa. Absent
optional fields are omitted on output; unknown enum values fall back to the
enum's default on input.
"""

from enum import StrEnum
from typing import Any

from poli_qa.exceptions import InvalidStateError
from poli_qa.state._models import (
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

type StateDocument = dict[str, Any]


def is_state_document(data: object) -> bool:
    """Check the structural shape of a persisted state document.

    A document is accepted when ``isOpen`` is a boolean and ``testSessions``,
    ``checklists`` and ``bugs`` are lists. Nothing deeper is checked.
    """
    if not isinstance(data, dict):
        return False
    return (
        isinstance(data.get("isOpen"), bool)
        and isinstance(data.get("testSessions"), list)
        and isinstance(data.get("checklists"), list)
        and isinstance(data.get("bugs"), list)
    )


def _enum_value[E: StrEnum](enum_cls: type[E], value: object, default: E) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _optional_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return int(value)
    return None


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _str_tuple(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(entry) for entry in value)


def _put(document: StateDocument, key: str, value: object) -> None:
    if value is not None:
        document[key] = value


# =============================================================================
# Encoding
# =============================================================================


def _item_to_dict(item: TestItem) -> StateDocument:
    document: StateDocument = {
        "id": item.id,
        "screen": item.screen,
        "category": str(item.category),
        "description": item.description,
        "status": str(item.status),
    }
    _put(document, "notes", item.notes)
    _put(document, "testedAt", item.tested_at)
    return document


def _checklist_to_dict(checklist: TestChecklist) -> StateDocument:
    return {
        "screen": checklist.screen,
        "items": [_item_to_dict(item) for item in checklist.items],
    }


def _bug_to_dict(bug: BugReport) -> StateDocument:
    document: StateDocument = {
        "id": bug.id,
        "title": bug.title,
        "description": bug.description,
        "severity": str(bug.severity),
        "status": str(bug.status),
        "screen": bug.screen,
        "stepsToReproduce": list(bug.steps_to_reproduce),
        "expectedBehavior": bug.expected_behavior,
        "actualBehavior": bug.actual_behavior,
        "reportedAt": bug.reported_at,
        "reportedBy": bug.reported_by,
    }
    _put(document, "fixedAt", bug.fixed_at)
    _put(document, "fixedIn", bug.fixed_in)
    _put(document, "screenshot", bug.screenshot)
    if bug.console_errors:
        document["consoleErrors"] = list(bug.console_errors)
    if bug.session_metadata:
        document["sessionMetadata"] = dict(bug.session_metadata)
    return document


def _session_to_dict(session: TestSession) -> StateDocument:
    document: StateDocument = {
        "id": session.id,
        "name": session.name,
        "tester": session.tester,
        "startedAt": session.started_at,
        "totalTests": session.total_tests,
        "passedTests": session.passed_tests,
        "failedTests": session.failed_tests,
        "skippedTests": session.skipped_tests,
        "bugsFound": list(session.bugs_found),
    }
    _put(document, "completedAt", session.completed_at)
    _put(document, "notes", session.notes)
    return document


def state_to_dict(state: QAState) -> StateDocument:
    """Encode a state as a JSON-compatible document."""
    return {
        "isOpen": state.is_open,
        "currentSession": (
            _session_to_dict(state.current_session)
            if state.current_session is not None
            else None
        ),
        "testSessions": [_session_to_dict(s) for s in state.test_sessions],
        "checklists": [_checklist_to_dict(c) for c in state.checklists],
        "bugs": [_bug_to_dict(b) for b in state.bugs],
    }


# =============================================================================
# Decoding
# =============================================================================


def _item_from_dict(data: dict[str, Any], screen: str) -> TestItem:
    return TestItem(
        id=str(data.get("id", "")),
        screen=str(data.get("screen", screen)),
        category=_enum_value(TestCategory, data.get("category"), TestCategory.UI),
        description=str(data.get("description", "")),
        status=_enum_value(TestStatus, data.get("status"), TestStatus.NOT_STARTED),
        notes=_optional_str(data.get("notes")),
        tested_at=_optional_int(data.get("testedAt")),
    )


def _checklist_from_dict(data: dict[str, Any]) -> TestChecklist:
    screen = str(data.get("screen", ""))
    raw_items = data.get("items")
    items = raw_items if isinstance(raw_items, list) else []
    return TestChecklist(
        screen=screen,
        items=tuple(
            _item_from_dict(item, screen) for item in items if isinstance(item, dict)
        ),
    )


def _bug_from_dict(data: dict[str, Any]) -> BugReport:
    metadata = data.get("sessionMetadata")
    return BugReport(
        id=str(data.get("id", "")),
        title=str(data.get("title", "")),
        description=str(data.get("description", "")),
        severity=_enum_value(BugSeverity, data.get("severity"), BugSeverity.MEDIUM),
        status=_enum_value(BugStatus, data.get("status"), BugStatus.OPEN),
        screen=str(data.get("screen", "")),
        steps_to_reproduce=_str_tuple(data.get("stepsToReproduce")),
        expected_behavior=str(data.get("expectedBehavior", "")),
        actual_behavior=str(data.get("actualBehavior", "")),
        reported_at=_optional_int(data.get("reportedAt")) or 0,
        reported_by=str(data.get("reportedBy", "")),
        fixed_at=_optional_int(data.get("fixedAt")),
        fixed_in=_optional_str(data.get("fixedIn")),
        screenshot=_optional_str(data.get("screenshot")),
        console_errors=_str_tuple(data.get("consoleErrors")),
        session_metadata=(
            {str(k): str(v) for k, v in metadata.items()}
            if isinstance(metadata, dict)
            else {}
        ),
    )


def _session_from_dict(data: dict[str, Any]) -> TestSession:
    return TestSession(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        tester=str(data.get("tester", "")),
        started_at=_optional_int(data.get("startedAt")) or 0,
        completed_at=_optional_int(data.get("completedAt")),
        total_tests=_optional_int(data.get("totalTests")) or 0,
        passed_tests=_optional_int(data.get("passedTests")) or 0,
        failed_tests=_optional_int(data.get("failedTests")) or 0,
        skipped_tests=_optional_int(data.get("skippedTests")) or 0,
        bugs_found=_str_tuple(data.get("bugsFound")),
        notes=_optional_str(data.get("notes")),
    )


def state_from_dict(data: object, *, source: str | None = None) -> QAState:
    """Decode a state document.

    Args:
        data: Parsed JSON document.
        source: Where the document came from, for error reporting.

    Returns:
        The decoded state.

    Raises:
        InvalidStateError: If the document fails the structural check.
    """
    if not is_state_document(data):
        msg = "Invalid QA state document: expected isOpen, testSessions, checklists and bugs"
        raise InvalidStateError(msg, source=source)

    document: dict[str, Any] = data  # pyright: ignore[reportAssignmentType]
    current = document.get("currentSession")
    return QAState(
        is_open=document["isOpen"],
        current_session=(
            _session_from_dict(current) if isinstance(current, dict) else None
        ),
        test_sessions=tuple(
            _session_from_dict(s) for s in document["testSessions"] if isinstance(s, dict)
        ),
        checklists=tuple(
            _checklist_from_dict(c) for c in document["checklists"] if isinstance(c, dict)
        ),
        bugs=tuple(_bug_from_dict(b) for b in document["bugs"] if isinstance(b, dict)),
    )
