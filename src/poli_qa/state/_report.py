"""Markdown rendering of a test session."""

from typing import TYPE_CHECKING

import pendulum

from ._models import TestStatus

if TYPE_CHECKING:
    from ._models import BugReport, QAState, TestChecklist, TestSession

NO_SESSION_REPORT = "# POLI Test Report\n\nNo active test session."

STATUS_ICONS: dict[TestStatus, str] = {
    TestStatus.PASSED: "✅",
    TestStatus.FAILED: "❌",
    TestStatus.SKIPPED: "⏭️",
    TestStatus.NOT_STARTED: "⬜",
}


def format_timestamp(epoch_ms: int) -> str:
    """Format an epoch-millisecond timestamp as ``YYYY-MM-DD HH:mm:ss`` UTC."""
    return pendulum.from_timestamp(epoch_ms / 1000, tz="UTC").format(
        "YYYY-MM-DD HH:mm:ss"
    )


def _header(session: "TestSession") -> list[str]:
    completed = (
        format_timestamp(session.completed_at)
        if session.completed_at is not None
        else "In Progress"
    )
    return [
        "# POLI Test Report\n\n",
        f"**Session**: {session.name}\n",
        f"**Tester**: {session.tester}\n",
        f"**Started**: {format_timestamp(session.started_at)}\n",
        f"**Completed**: {completed}\n\n",
    ]


def _summary(session: "TestSession", bug_count: int) -> list[str]:
    return [
        "## Summary\n\n",
        f"- Total Tests: {session.total_tests}\n",
        f"- ✅ Passed: {session.passed_tests}\n",
        f"- ❌ Failed: {session.failed_tests}\n",
        f"- ⏭️ Skipped: {session.skipped_tests}\n",
        f"- 🐛 Bugs Found: {bug_count}\n\n",
    ]


def _results(checklists: "tuple[TestChecklist, ...]") -> list[str]:
    lines = ["## Test Results by Screen\n\n"]
    for checklist in checklists:
        lines.append(f"### {checklist.screen}\n\n")
        for item in checklist.items:
            icon = STATUS_ICONS[item.status]
            lines.append(f"{icon} **{item.description}** ({item.category})\n")
            if item.notes:
                lines.append(f"   - Notes: {item.notes}\n")
        lines.append("\n")
    return lines


def _bugs(bugs: "list[BugReport]") -> list[str]:
    lines = ["## Bugs Found\n\n"]
    for index, bug in enumerate(bugs, start=1):
        lines.extend(
            [
                f"### {index}. {bug.title} ({bug.severity.upper()})\n\n",
                f"**Screen**: {bug.screen}\n",
                f"**Status**: {bug.status}\n",
                f"**Description**: {bug.description}\n\n",
                f"**Expected**: {bug.expected_behavior}\n",
                f"**Actual**: {bug.actual_behavior}\n\n",
            ]
        )
        if bug.steps_to_reproduce:
            lines.append("**Steps to Reproduce**:\n")
            lines.extend(
                f"{step_no}. {step}\n"
                for step_no, step in enumerate(bug.steps_to_reproduce, start=1)
            )
            lines.append("\n")
    return lines


def render_markdown_report(state: "QAState") -> str:
    """Render the current session of ``state`` as a Markdown report.

    Only bugs whose ids were recorded on the session are listed. Without a
    current session the fixed "no active session" document is returned.
    """
    session = state.current_session
    if session is None:
        return NO_SESSION_REPORT

    session_bugs = [bug for bug in state.bugs if bug.id in session.bugs_found]

    lines = _header(session)
    lines.extend(_summary(session, len(session_bugs)))
    lines.extend(_results(state.checklists))
    if session_bugs:
        lines.extend(_bugs(session_bugs))
    if session.notes:
        lines.append(f"## Session Notes\n\n{session.notes}\n")
    return "".join(lines)
