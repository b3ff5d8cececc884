"""Route detection from router configuration files and directory conventions.

Detection is heuristic: regular expressions over well-known router files,
then a walk of file-system routed ``pages``/``app`` directories. It can
over- or under-match and never raises for unreadable input.
"""

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from ._names import to_pascal_case

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

ROUTER_FILES: tuple[str, ...] = (
    "src/router.tsx",
    "src/router.ts",
    "src/routes.tsx",
    "src/routes.ts",
    "src/App.tsx",
    "src/App.jsx",
    "src/app/routes.tsx",
    "src/app/router.tsx",
    "app/routes.tsx",
    "app/router.tsx",
    "src/main.tsx",
    "src/index.tsx",
)

PAGES_DIRS: tuple[str, ...] = ("pages", "src/pages")
APP_DIRS: tuple[str, ...] = ("app", "src/app")

PAGE_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx", ".ts", ".js")
APP_PAGE_FILES: tuple[str, ...] = ("page.tsx", "page.jsx", "page.ts", "page.js")

_ROUTER_CALL_RE = re.compile(
    r"create(?:Browser|Hash|Memory)Router\s*\(\s*\[([\s\S]*?)\]\s*(?:,|\))"
)

# (pattern, path group, component group)
_ROUTE_OBJECT_PATTERNS: tuple[tuple[re.Pattern[str], int, int], ...] = (
    (re.compile(r"\{\s*path:\s*['\"]([^'\"]+)['\"]\s*,\s*element:\s*<(\w+)"), 1, 2),
    (
        re.compile(r"\{\s*element:\s*<(\w+)[^>]*>\s*,\s*path:\s*['\"]([^'\"]+)['\"]"),
        2,
        1,
    ),
    (re.compile(r"\{\s*path:\s*['\"]([^'\"]+)['\"]\s*,\s*Component:\s*(\w+)"), 1, 2),
)

_ROUTE_ELEMENT_PATTERNS: tuple[tuple[re.Pattern[str], int, int], ...] = (
    (
        re.compile(
            r"<Route\s+[^>]*path\s*=\s*['\"]([^'\"]+)['\"][^>]*element\s*=\s*\{?\s*<(\w+)"
        ),
        1,
        2,
    ),
    (
        re.compile(
            r"<Route\s+[^>]*element\s*=\s*\{?\s*<(\w+)[^>]*path\s*=\s*['\"]([^'\"]+)['\"]"
        ),
        2,
        1,
    ),
    (
        re.compile(
            r"<Route\s+[^>]*path\s*=\s*['\"]([^'\"]+)['\"][^>]*component\s*=\s*\{?\s*(\w+)"
        ),
        1,
        2,
    ),
)


class RouteSource(StrEnum):
    """Which detection strategy produced a set of routes."""

    CREATE_ROUTER = "create_router"
    ROUTES_JSX = "routes_jsx"
    FILE_PATTERN = "file_pattern"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ParsedRoute:
    """A route found in the project.

    Attributes:
        path: Route path, with dynamic segments as ``:param``.
        component_name: Component rendered for the route.
        file_path: File defining the component, when the strategy knows it.
    """

    path: str
    component_name: str
    file_path: "Path | None" = None


@dataclass(frozen=True, slots=True)
class RouteDetection:
    """Result of :func:`detect_routes`.

    Attributes:
        kind: Strategy that produced the routes.
        routes: Routes in discovery order.
        config_file: Router file or directories the routes came from.
    """

    kind: RouteSource
    routes: tuple[ParsedRoute, ...] = ()
    config_file: str | None = None


def _extract(
    content: str, patterns: tuple[tuple[re.Pattern[str], int, int], ...]
) -> list[ParsedRoute]:
    routes: list[ParsedRoute] = []
    for pattern, path_group, component_group in patterns:
        routes.extend(
            ParsedRoute(path=m.group(path_group), component_name=m.group(component_group))
            for m in pattern.finditer(content)
        )
    return routes


def parse_router_call(content: str) -> list[ParsedRoute]:
    """Extract routes from the first ``create*Router([...])`` call in ``content``."""
    match = _ROUTER_CALL_RE.search(content)
    if match is None:
        return []
    return _extract(match.group(1), _ROUTE_OBJECT_PATTERNS)


def parse_route_elements(content: str) -> list[ParsedRoute]:
    """Extract routes from ``<Route ... />`` elements in ``content``."""
    return _extract(content, _ROUTE_ELEMENT_PATTERNS)


def _list_dir(directory: "Path") -> "list[Path]":
    try:
        return sorted(directory.iterdir())
    except OSError:
        return []


def _is_dynamic(name: str) -> bool:
    return name.startswith("[") and name.endswith("]")


def _is_group(name: str) -> bool:
    return name.startswith("(") and name.endswith(")")


def _param_name(name: str) -> str:
    # [id] -> id, [...slug] -> slug
    return name[1:-1].lstrip(".")


def scan_pages_directory(
    directory: "Path", base_path: str = "", routes: "list[ParsedRoute] | None" = None
) -> list[ParsedRoute]:
    """Collect routes from a file-system routed ``pages`` directory.

    Each file is a route segment, ``index`` maps to its directory's path and
    ``[param]`` to ``:param``. Files and directories starting with ``_`` or
    ``.`` are skipped, as is ``api``.
    """
    found: list[ParsedRoute] = routes if routes is not None else []

    for entry in _list_dir(directory):
        name = entry.name
        if entry.is_dir():
            if not name.startswith(("_", ".")) and name != "api":
                scan_pages_directory(entry, f"{base_path}/{name}", found)
            continue

        if entry.suffix not in PAGE_EXTENSIONS or entry.stem.startswith("_"):
            continue

        stem = entry.stem
        if stem == "index":
            route_path = base_path or "/"
            component = "Index"
        elif _is_dynamic(stem):
            route_path = f"{base_path}/:{_param_name(stem)}"
            component = to_pascal_case(_param_name(stem))
        else:
            route_path = f"{base_path}/{stem}"
            component = to_pascal_case(stem)

        found.append(
            ParsedRoute(path=route_path or "/", component_name=component, file_path=entry)
        )

    return found


def _page_file(directory: "Path") -> "Path | None":
    for candidate in APP_PAGE_FILES:
        page = directory / candidate
        if page.is_file():
            return page
    return None


def scan_app_directory(
    directory: "Path", base_path: str = "", routes: "list[ParsedRoute] | None" = None
) -> list[ParsedRoute]:
    """Collect routes from an ``app`` directory of nested route folders.

    Only folders holding a ``page`` file contribute a route. ``(group)``
    folders add no path segment and ``[param]`` folders become ``:param``.
    """
    found: list[ParsedRoute] = routes if routes is not None else []

    for entry in _list_dir(directory):
        if not entry.is_dir():
            continue

        name = entry.name
        if _is_dynamic(name):
            route_path = f"{base_path}/:{_param_name(name)}"
        elif _is_group(name):
            route_path = base_path
        else:
            route_path = f"{base_path}/{name}"

        page = _page_file(entry)
        if page is not None:
            found.append(
                ParsedRoute(
                    path=route_path or "/",
                    component_name=to_pascal_case(re.sub(r"[\[\]().]", "", name)),
                    file_path=page,
                )
            )

        if not name.startswith(("_", ".")):
            scan_app_directory(entry, route_path, found)

    return found


def detect_routes(
    project_root: "Path", *, logger: "FilteringBoundLogger | None" = None
) -> RouteDetection:
    """Find the project's routes.

    Router files are tried in a fixed order; the first one holding a
    ``create*Router`` call or ``<Route>`` elements wins. Failing that,
    file-system routed ``pages`` and ``app`` directories are walked.

    Args:
        project_root: Root directory of the scanned project.
        logger: Optional logger for debug-level detection logging.

    Returns:
        The detected routes and the strategy that found them.
    """
    for relative in ROUTER_FILES:
        router_file = project_root / relative
        if not router_file.is_file():
            continue
        try:
            content = router_file.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue

        routes = parse_router_call(content)
        if routes:
            if logger:
                logger.debug("routes_detected", kind="create_router", file=relative)
            return RouteDetection(RouteSource.CREATE_ROUTER, tuple(routes), relative)

        routes = parse_route_elements(content)
        if routes:
            if logger:
                logger.debug("routes_detected", kind="routes_jsx", file=relative)
            return RouteDetection(RouteSource.ROUTES_JSX, tuple(routes), relative)

    convention_routes: list[ParsedRoute] = []
    scanned: list[str] = []
    for relative in PAGES_DIRS:
        if (project_root / relative).is_dir():
            scanned.append(f"{relative}/")
            scan_pages_directory(project_root / relative, "", convention_routes)
    for relative in APP_DIRS:
        if (project_root / relative).is_dir():
            scanned.append(f"{relative}/")
            app_dir = project_root / relative
            if (root_page := _page_file(app_dir)) is not None:
                convention_routes.append(
                    ParsedRoute(path="/", component_name="Home", file_path=root_page)
                )
            scan_app_directory(app_dir, "", convention_routes)

    if convention_routes:
        if logger:
            logger.debug("routes_detected", kind="file_pattern", dirs=scanned)
        return RouteDetection(
            RouteSource.FILE_PATTERN, tuple(convention_routes), ", ".join(scanned)
        )

    if logger:
        logger.debug("routes_not_detected", root=str(project_root))
    return RouteDetection(RouteSource.NONE)
