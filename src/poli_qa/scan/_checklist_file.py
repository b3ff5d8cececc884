"""The generated TypeScript checklist file: rendering, writing and editing."""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from poli_qa.exceptions import ChecklistFileError
from poli_qa.state import TestChecklist, TestItem
from poli_qa.templating import create_environment, ts_string

from ._suggest import BASELINE_TEST, categorize_test

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from jinja2 import Environment
    from structlog.typing import FilteringBoundLogger

    from ._discovery import DetectedScreen

CHECKLISTS_TEMPLATE = "checklists.ts.j2"
ENTRY_TEMPLATE = "checklist_entry.ts.j2"

_UNION_RE = re.compile(r"export type AppScreen =(?P<body>[^;]*);")
_UNION_MEMBER_RE = re.compile(r"'((?:[^'\\]|\\.)*)'")
_CHECKLISTS_DECL = "export const checklists"
_ARRAY_END = "\n];"


@dataclass(frozen=True, slots=True)
class ChecklistEntry:
    """One screen as written to the checklist file."""

    name: str
    source: str
    items: tuple[TestItem, ...]

    def to_checklist(self) -> TestChecklist:
        return TestChecklist(screen=self.name, items=self.items)


def item_id(screen_name: str, index: int) -> str:
    """Stable item id: lower-cased screen name and a 1-based, 3-digit index."""
    return f"{screen_name.lower()}_{index:03d}"


def build_entry(name: str, tests: "Iterable[str]", source: str | None = None) -> ChecklistEntry:
    """Build the checklist entry for one screen from its test descriptions."""
    items = tuple(
        TestItem(
            id=item_id(name, index),
            screen=name,
            category=categorize_test(description),
            description=description,
        )
        for index, description in enumerate(tests, start=1)
    )
    return ChecklistEntry(name=name, source=source or name, items=items)


def build_entries(screens: "Sequence[DetectedScreen]") -> list[ChecklistEntry]:
    return [build_entry(s.name, s.suggested_tests, s.source) for s in screens]


def render_checklist_file(
    screens: "Sequence[DetectedScreen]", *, env: "Environment | None" = None
) -> str:
    """Render the TypeScript checklist module for the given screens."""
    env = env or create_environment()
    template = env.get_template(CHECKLISTS_TEMPLATE)
    return template.render(screens=build_entries(screens))


def write_checklist_file(
    path: "Path",
    screens: "Sequence[DetectedScreen]",
    *,
    logger: "FilteringBoundLogger | None" = None,
) -> "Path":
    """Render and write the checklist module, creating parent directories.

    Raises:
        ChecklistFileError: If the file cannot be written.
    """
    content = render_checklist_file(screens)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content, encoding="utf-8")
    except OSError as e:
        msg = f"Cannot write checklist file: {e}"
        raise ChecklistFileError(msg, path=path) from e

    if logger:
        logger.info("checklist_file_written", path=str(path), screens=len(screens))
    return path


def declared_screens(content: str) -> list[str]:
    """Return the screen names declared in the ``AppScreen`` union."""
    match = _UNION_RE.search(content)
    if match is None:
        return []
    return [
        member.replace("\\'", "'").replace("\\\\", "\\")
        for member in _UNION_MEMBER_RE.findall(match.group("body"))
    ]


def insert_screen(content: str, entry: ChecklistEntry, *, env: "Environment | None" = None) -> str:
    """Return ``content`` with ``entry`` added to the union and the checklist array.

    Raises:
        ChecklistFileError: If the ``AppScreen`` union or the ``checklists``
            array cannot be located.
    """
    union = _UNION_RE.search(content)
    if union is None:
        msg = "AppScreen union not found"
        raise ChecklistFileError(msg)

    declaration = content.find(_CHECKLISTS_DECL, union.end())
    array_end = content.find(_ARRAY_END, declaration) if declaration >= 0 else -1
    if array_end < 0:
        msg = "checklists array not found"
        raise ChecklistFileError(msg)

    env = env or create_environment()
    rendered = env.get_template(ENTRY_TEMPLATE).render(screen=entry)

    # Array first so the union offsets stay valid
    content = content[: array_end + 1] + rendered + content[array_end + 1 :]

    member = f"\n  | '{ts_string(entry.name)}'"
    body = union.group("body")
    new_body = member if body.strip() == "never" else body.rstrip() + member
    start, end = union.span("body")
    return content[:start] + new_body + content[end:]


def add_screen_to_checklist_file(
    path: "Path",
    screen_name: str,
    tests: "Iterable[str]" = (BASELINE_TEST,),
    *,
    logger: "FilteringBoundLogger | None" = None,
) -> bool:
    """Add a screen to an existing checklist file.

    Args:
        path: Generated checklist module.
        screen_name: Normalized screen name.
        tests: Test descriptions for the new checklist.
        logger: Optional logger.

    Returns:
        True if the file was changed, False if the screen was already declared.

    Raises:
        ChecklistFileError: If the file cannot be read, written or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read checklist file: {e}"
        raise ChecklistFileError(msg, path=path) from e

    if screen_name in declared_screens(content):
        if logger:
            logger.info("screen_already_declared", screen=screen_name, path=str(path))
        return False

    try:
        updated = insert_screen(content, build_entry(screen_name, tests, "added manually"))
    except ChecklistFileError as e:
        raise ChecklistFileError(str(e), path=path) from e

    try:
        _ = path.write_text(updated, encoding="utf-8")
    except OSError as e:
        msg = f"Cannot write checklist file: {e}"
        raise ChecklistFileError(msg, path=path) from e

    if logger:
        logger.info("screen_added", screen=screen_name, path=str(path))
    return True
