"""Screen discovery: from a project tree to screens with suggested tests."""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._analyzer import analyze_component
from ._names import file_to_screen_name, route_to_screen_name
from ._routes import RouteDetection, RouteSource, detect_routes
from ._suggest import generate_specific_tests, suggest_tests_for_component

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from ._routes import ParsedRoute

# Relative paths that look like screen components
SCREEN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"Page\.(tsx|jsx)$"),
    re.compile(r"Screen\.(tsx|jsx)$"),
    re.compile(r"View\.(tsx|jsx)$"),
    re.compile(r"pages/.*\.(tsx|jsx)$"),
    re.compile(r"screens/.*\.(tsx|jsx)$"),
    re.compile(r"views/.*\.(tsx|jsx)$"),
    re.compile(r"routes/.*\.(tsx|jsx)$"),
    re.compile(r"components/.*Page\.(tsx|jsx)$"),
    re.compile(r"components/.*Calculator\.(tsx|jsx)$"),
    re.compile(r"components/.*Calendar\.(tsx|jsx)$"),
)

EXCLUDE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"node_modules"),
    re.compile(r"\.test\."),
    re.compile(r"\.spec\."),
    re.compile(r"\.stories\."),
    re.compile(r"index\.(tsx|jsx)$"),
    re.compile(r"__tests__"),
)

SCREEN_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx")
COMPONENT_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx", ".ts", ".js")
COMPONENT_SUFFIXES: tuple[str, ...] = ("", "Page", "Screen", "View")

_NAME_CHAR_RE = re.compile(r"[A-Za-z0-9]")


@dataclass(frozen=True, slots=True)
class DetectedScreen:
    """A screen found in the project.

    Attributes:
        name: Canonical screen name.
        suggested_tests: Test descriptions, baseline first.
        file_path: Component file, relative to the project root.
        route: Route path, when the screen came from route detection.
        component_name: Component rendered for the route.
    """

    name: str
    suggested_tests: tuple[str, ...]
    file_path: str | None = None
    route: str | None = None
    component_name: str | None = None

    @property
    def source(self) -> str:
        """Where the screen came from, for display and generated comments."""
        return self.file_path or self.component_name or self.name


@dataclass(frozen=True, slots=True)
class ScreenDiscovery:
    """Result of :func:`discover_screens`.

    Attributes:
        screens: Screens in discovery order, unique by name.
        detection: Route detection result the screens were built from.
        search_dir: Directory searched for component files.
    """

    screens: tuple[DetectedScreen, ...]
    detection: RouteDetection
    search_dir: "Path"

    @property
    def test_count(self) -> int:
        return sum(len(screen.suggested_tests) for screen in self.screens)


def _is_excluded(relative: str) -> bool:
    return any(pattern.search(relative) for pattern in EXCLUDE_PATTERNS)


def _relative(path: "Path", root: "Path") -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def list_source_files(
    directory: "Path",
    project_root: "Path",
    extensions: tuple[str, ...] = SCREEN_EXTENSIONS,
) -> "list[Path]":
    """List component source files below ``directory`` in sorted order.

    Hidden directories, ``node_modules``, ``__tests__`` and test, spec and
    story files are skipped. Unreadable directories are treated as empty.
    """
    files: list[Path] = []
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return files

    for entry in entries:
        if entry.name.startswith("."):
            continue
        relative = _relative(entry, project_root)
        if entry.is_dir():
            if "node_modules" not in relative and "__tests__" not in relative:
                files.extend(list_source_files(entry, project_root, extensions))
        elif entry.suffix in extensions and not any(
            pattern.search(relative) for pattern in EXCLUDE_PATTERNS[:4]
        ):
            files.append(entry)
    return files


def find_component_file(component_name: str, candidates: "list[Path]") -> "Path | None":
    """Find the file defining ``component_name``.

    Matches ``Name.tsx``, ``NamePage.tsx``, ``NameScreen.tsx`` and
    ``NameView.tsx`` (any component extension), then ``Name/index.tsx``.
    """
    stems = {component_name + suffix for suffix in COMPONENT_SUFFIXES}
    for path in candidates:
        if path.stem in stems:
            return path
    for path in candidates:
        if path.stem == "index" and path.parent.name == component_name:
            return path
    return None


def _read(path: "Path | None") -> str:
    if path is None:
        return ""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def suggest_tests(screen_name: str, source_name: str, content: str) -> tuple[str, ...]:
    """Suggest tests for one component.

    Element extraction is tried first; when it yields only the baseline test
    the keyword suggestions are used instead.
    """
    tests = generate_specific_tests(screen_name, analyze_component(content))
    if len(tests) <= 1:
        tests = suggest_tests_for_component(source_name, content)
    return tuple(tests)


def _screens_from_routes(
    routes: "tuple[ParsedRoute, ...]", project_root: "Path", search_dir: "Path"
) -> list[DetectedScreen]:
    candidates = list_source_files(search_dir, project_root, COMPONENT_EXTENSIONS)
    screens: list[DetectedScreen] = []

    for route in routes:
        name = route_to_screen_name(route.path)
        if not _NAME_CHAR_RE.search(name):
            continue
        path = route.file_path or find_component_file(route.component_name, candidates)
        source_name = path.name if path is not None else route.component_name
        screens.append(
            DetectedScreen(
                name=name,
                suggested_tests=suggest_tests(name, source_name, _read(path)),
                file_path=_relative(path, project_root) if path is not None else None,
                route=route.path,
                component_name=route.component_name,
            )
        )
    return screens


def _screens_from_files(project_root: "Path", search_dir: "Path") -> list[DetectedScreen]:
    screens: list[DetectedScreen] = []
    for path in list_source_files(search_dir, project_root):
        relative = _relative(path, project_root)
        if _is_excluded(relative) or not any(p.search(relative) for p in SCREEN_PATTERNS):
            continue
        name = file_to_screen_name(path.name)
        screens.append(
            DetectedScreen(
                name=name,
                suggested_tests=suggest_tests(name, path.name, _read(path)),
                file_path=relative,
            )
        )
    return screens


def discover_screens(
    project_root: "Path",
    *,
    source_dir: str = "src",
    logger: "FilteringBoundLogger | None" = None,
) -> ScreenDiscovery:
    """Find the project's screens and suggest tests for each.

    Routes found by :func:`detect_routes` are preferred; their screens are
    named after the route path. Without routes, component files are picked
    by naming convention under ``source_dir`` (or the project root when that
    directory does not exist) and named after the file.

    Args:
        project_root: Root directory of the scanned project.
        source_dir: Source directory, relative to the project root.
        logger: Optional logger for debug-level discovery logging.

    Returns:
        The discovered screens. Later screens with an already used name are
        dropped.
    """
    search_dir = project_root / source_dir
    if not search_dir.is_dir():
        if logger:
            logger.debug("source_dir_missing", source_dir=source_dir)
        search_dir = project_root

    detection = detect_routes(project_root, logger=logger)
    if detection.kind is RouteSource.NONE:
        found = _screens_from_files(project_root, search_dir)
    else:
        found = _screens_from_routes(detection.routes, project_root, search_dir)

    screens: list[DetectedScreen] = []
    seen: set[str] = set()
    for screen in found:
        if screen.name in seen:
            if logger:
                logger.debug("screen_duplicate_skipped", screen=screen.name)
            continue
        seen.add(screen.name)
        screens.append(screen)

    if logger:
        logger.info(
            "screens_discovered",
            kind=str(detection.kind),
            screens=len(screens),
            tests=sum(len(s.suggested_tests) for s in screens),
        )
    return ScreenDiscovery(screens=tuple(screens), detection=detection, search_dir=search_dir)
