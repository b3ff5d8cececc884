"""Shared test fixtures for poli-qa tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from poli_qa.state import TestCategory, TestChecklist, TestItem

WriteSourceFunc = Callable[..., Path]
MakeItemFunc = Callable[..., TestItem]


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create an empty front-end project.

    Structure:
        tmp_path/
            project/
                package.json
                src/
    """
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    _ = (root / "package.json").write_text('{"name": "demo-app"}', encoding="utf-8")
    return root


@pytest.fixture
def write_source(project_root: Path) -> WriteSourceFunc:
    """Return a function that writes a file below the project root."""

    def _write(relative: str, content: str = "") -> Path:
        path = project_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def make_item() -> MakeItemFunc:
    """Return a factory function to create TestItems with defaults."""

    def _make(item_id: str = "home_001", screen: str = "HOME", **overrides: object) -> TestItem:
        defaults: dict[str, object] = {
            "category": TestCategory.UI,
            "description": f"Check {item_id}",
        }
        defaults.update(overrides)
        return TestItem(id=item_id, screen=screen, **defaults)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def sample_checklists(make_item: MakeItemFunc) -> tuple[TestChecklist, ...]:
    """Two screens with five items in total."""
    return (
        TestChecklist(
            screen="HOME",
            items=(
                make_item("home_001", "HOME", description="Screen loads without errors"),
                make_item("home_002", "HOME", category=TestCategory.FUNCTIONALITY),
            ),
        ),
        TestChecklist(
            screen="SETTINGS",
            items=(
                make_item("settings_001", "SETTINGS"),
                make_item("settings_002", "SETTINGS"),
                make_item(
                    "settings_003", "SETTINGS", category=TestCategory.FUNCTIONALITY
                ),
            ),
        ),
    )
