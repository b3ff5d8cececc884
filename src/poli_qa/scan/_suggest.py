"""Turning extracted UI facts into human-readable test descriptions."""

import re
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from poli_qa.state import TestCategory

if TYPE_CHECKING:
    from ._analyzer import ComponentAnalysis

BASELINE_TEST = "Screen loads without errors"

# Longer button labels are cut to keep descriptions readable
MAX_LABEL_LENGTH = 30
MAX_LINK_TESTS = 3

FORM_TESTS: tuple[str, ...] = (
    "Form validates required fields before submission",
    "Form shows appropriate error messages for invalid input",
    "Form submits successfully with valid data",
)

_SUBMIT_RE = re.compile(r"submit|save|send", re.IGNORECASE)
_DESTRUCTIVE_RE = re.compile(r"delete|remove", re.IGNORECASE)
_DISMISS_RE = re.compile(r"cancel|close", re.IGNORECASE)

_TYPED_INPUT_TESTS: dict[str, str] = {
    "email": "validates email format",
    "password": "masks password input",
    "number": "accepts only numeric values",
    "tel": "validates phone number format",
}

# Category -> ordered (pattern, tests); only the first matching pattern counts
KEYWORD_SUGGESTIONS: dict[str, tuple[tuple[re.Pattern[str], tuple[str, ...]], ...]] = {
    "form": (
        (
            re.compile(r"form|input|submit", re.IGNORECASE),
            (
                "Form validation works correctly",
                "Submit button is enabled/disabled appropriately",
                "Error messages display for invalid input",
            ),
        ),
    ),
    "auth": (
        (
            re.compile(r"login|signin|auth", re.IGNORECASE),
            (
                "Login form accepts credentials",
                "Shows error for invalid credentials",
                "Redirects after successful login",
            ),
        ),
        (
            re.compile(r"signup|register", re.IGNORECASE),
            (
                "Registration form validates all fields",
                "Password requirements are enforced",
                "Success message shown after registration",
            ),
        ),
    ),
    "list": (
        (
            re.compile(r"list|table|grid", re.IGNORECASE),
            (
                "Data loads and displays correctly",
                "Pagination works (if applicable)",
                "Empty state shows when no data",
            ),
        ),
    ),
    "detail": (
        (
            re.compile(r"detail|view|profile", re.IGNORECASE),
            (
                "Details load correctly",
                "Edit button is visible (if applicable)",
                "Back navigation works",
            ),
        ),
    ),
    "settings": (
        (
            re.compile(r"setting|config|preference", re.IGNORECASE),
            (
                "Settings load with current values",
                "Changes can be saved",
                "Cancel reverts changes",
            ),
        ),
    ),
    "dashboard": (
        (
            re.compile(r"dashboard|home|overview", re.IGNORECASE),
            (
                "Dashboard loads with data",
                "Charts/widgets display correctly",
                "Refresh updates data",
            ),
        ),
    ),
}


def _dedupe(tests: list[str]) -> list[str]:
    return list(dict.fromkeys(tests))


def generate_specific_tests(screen_name: str, analysis: "ComponentAnalysis") -> list[str]:
    """Build test descriptions from the elements found in a component.

    The baseline load test always comes first. The result is deduplicated,
    keeping first occurrences in order.

    Args:
        screen_name: Screen the component renders. Descriptions do not
            currently embed it.
        analysis: Output of :func:`analyze_component`.
    """
    _ = screen_name
    tests = [BASELINE_TEST]

    for button in analysis.buttons:
        label = button.label[:MAX_LABEL_LENGTH]
        tests.append(f'"{label}" button is clickable and functional')
        if _SUBMIT_RE.search(button.label):
            tests.append(f'"{label}" button submits data correctly')
        if _DESTRUCTIVE_RE.search(button.label):
            tests.append(f'"{label}" button shows confirmation before action')
        if _DISMISS_RE.search(button.label):
            tests.append(f'"{label}" button dismisses/closes correctly')

    for field in analysis.inputs:
        field_name = field.label or field.name or field.placeholder or field.type
        if not field_name or field_name == "text":
            continue
        tests.append(f'"{field_name}" field accepts valid input')
        if (check := _TYPED_INPUT_TESTS.get(field.type)) is not None:
            tests.append(f'"{field_name}" {check}')
        if field.required:
            tests.append(f'"{field_name}" shows required field error when empty')

    for select in analysis.selects:
        name = select.label or select.name or "dropdown"
        if select.options:
            tests.append(f'"{name}" dropdown shows {len(select.options)} options')
        else:
            tests.append(f'"{name}" dropdown displays available options')

    if analysis.forms:
        tests.extend(FORM_TESTS)

    for modal in analysis.modals:
        tests.append(f"{modal.name} opens when triggered")
        tests.append(f"{modal.name} closes when dismissed")

    tests.extend(
        f'"{link.text}" link navigates to correct destination'
        for link in analysis.links[:MAX_LINK_TESTS]
        if link.text
    )

    if analysis.tables:
        tests.extend(("Table/list displays data correctly", "Table rows are properly formatted"))
    if analysis.pagination:
        tests.extend(("Pagination controls are visible", "Next/Previous page buttons work correctly"))
    if analysis.search:
        tests.extend(("Search input accepts text", "Search filters results correctly"))
    if analysis.data_fetching:
        tests.append("Data loads successfully from API")
        if analysis.loading_state:
            tests.append("Loading indicator displays while fetching")
        if analysis.error_state:
            tests.append("Error state displays when API fails")
        if analysis.empty_state:
            tests.append("Empty state displays when no data")

    return _dedupe(tests)


def suggest_tests_for_component(file_name: str, content: str) -> list[str]:
    """Suggest tests from keywords in a component's file name and source.

    Used when element extraction finds nothing worth testing beyond the
    baseline.
    """
    basename = PurePosixPath(file_name.replace("\\", "/")).name.lower()
    lowered = content.lower()
    tests = [BASELINE_TEST]

    for patterns in KEYWORD_SUGGESTIONS.values():
        for pattern, suggested in patterns:
            if pattern.search(basename) or pattern.search(lowered):
                tests.extend(suggested)
                break

    if "button" in lowered or "onclick" in lowered:
        tests.append("All buttons are clickable and functional")
    if any(keyword in lowered for keyword in ("fetch", "usequery", "axios")):
        tests.extend(
            (
                "Data fetches successfully",
                "Loading state displays while fetching",
                "Error state handles fetch failures",
            )
        )
    if "modal" in lowered or "dialog" in lowered:
        tests.append("Modal opens and closes correctly")
    if any(keyword in lowered for keyword in ("navigation", "link", "router")):
        tests.append("Navigation links work correctly")

    return _dedupe(tests)


def categorize_test(description: str) -> TestCategory:
    """Return UI for descriptions about loading or display, else Functionality."""
    lowered = description.lower()
    if "load" in lowered or "display" in lowered:
        return TestCategory.UI
    return TestCategory.FUNCTIONALITY
