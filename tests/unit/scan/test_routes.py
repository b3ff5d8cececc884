from collections.abc import Callable
from pathlib import Path

from poli_qa.scan import (
    RouteSource,
    detect_routes,
    parse_route_elements,
    parse_router_call,
    scan_app_directory,
    scan_pages_directory,
)

ROUTER_SOURCE = """
import { createBrowserRouter } from 'react-router-dom';

export const router = createBrowserRouter([
  { path: '/', element: <Home /> },
  { path: "/users/:id", element: <UserDetail /> },
  { element: <Settings />, path: '/settings' },
  { path: '/about', Component: About },
]);
"""

ROUTES_JSX_SOURCE = """
export function App() {
  return (
    <Routes>
      <Route path="/" element={<Home />} />
      <Route path="/profile" element={<Profile />} />
      <Route path="/legacy" component={Legacy} />
    </Routes>
  );
}
"""


class TestParseRouterCall:
    def test_extracts_all_object_forms(self) -> None:
        routes = parse_router_call(ROUTER_SOURCE)

        pairs = [(r.path, r.component_name) for r in routes]
        assert ("/", "Home") in pairs
        assert ("/users/:id", "UserDetail") in pairs
        assert ("/settings", "Settings") in pairs
        assert ("/about", "About") in pairs
        assert len(pairs) == 4

    def test_returns_empty_without_router_call(self) -> None:
        assert parse_router_call(ROUTES_JSX_SOURCE) == []

    def test_supports_hash_and_memory_routers(self) -> None:
        source = "createHashRouter([{ path: '/a', element: <A /> }])"
        memory = "createMemoryRouter([{ path: '/b', element: <B /> }], {})"

        assert [r.path for r in parse_router_call(source)] == ["/a"]
        assert [r.path for r in parse_router_call(memory)] == ["/b"]


class TestParseRouteElements:
    def test_extracts_all_element_forms(self) -> None:
        routes = parse_route_elements(ROUTES_JSX_SOURCE)

        pairs = {(r.path, r.component_name) for r in routes}
        assert pairs == {("/", "Home"), ("/profile", "Profile"), ("/legacy", "Legacy")}

    def test_file_path_is_unknown(self) -> None:
        routes = parse_route_elements('<Route path="/x" element={<X />} />')

        assert routes[0].file_path is None


class TestScanPagesDirectory:
    def test_maps_files_to_routes(self, tmp_path: Path) -> None:
        pages = tmp_path / "pages"
        (pages / "users").mkdir(parents=True)
        (pages / "api").mkdir()
        for name in (
            "index.tsx",
            "about.tsx",
            "_app.tsx",
            "users/[id].tsx",
            "users/index.tsx",
            "api/hello.ts",
            "styles.css",
        ):
            _ = (pages / name).write_text("", encoding="utf-8")

        routes = scan_pages_directory(pages)

        pairs = {(r.path, r.component_name) for r in routes}
        assert pairs == {
            ("/", "Index"),
            ("/about", "About"),
            ("/users", "Index"),
            ("/users/:id", "Id"),
        }

    def test_missing_directory_yields_nothing(self, tmp_path: Path) -> None:
        assert scan_pages_directory(tmp_path / "nope") == []


class TestScanAppDirectory:
    def test_maps_page_folders_to_routes(self, tmp_path: Path) -> None:
        app = tmp_path / "app"
        for folder in ("dashboard", "(marketing)/pricing", "blog/[slug]", "_private/x"):
            (app / folder).mkdir(parents=True)
            _ = (app / folder / "page.tsx").write_text("", encoding="utf-8")
        (app / "components").mkdir()

        routes = scan_app_directory(app)

        paths = {r.path for r in routes}
        assert "/dashboard" in paths
        assert "/pricing" in paths
        assert "/blog/:slug" in paths
        assert "/components" not in paths

    def test_page_files_are_recorded(self, tmp_path: Path) -> None:
        page = tmp_path / "app" / "settings" / "page.jsx"
        page.parent.mkdir(parents=True)
        _ = page.write_text("", encoding="utf-8")

        routes = scan_app_directory(tmp_path / "app")

        assert routes[0].file_path == page
        assert routes[0].component_name == "Settings"


class TestDetectRoutes:
    def test_prefers_router_file(
        self, project_root: Path, write_source: Callable[..., Path]
    ) -> None:
        _ = write_source("src/router.tsx", ROUTER_SOURCE)
        _ = write_source("src/pages/Other.tsx", "")

        detection = detect_routes(project_root)

        assert detection.kind is RouteSource.CREATE_ROUTER
        assert detection.config_file == "src/router.tsx"
        assert len(detection.routes) == 4

    def test_route_elements_when_no_router_call(
        self, project_root: Path, write_source: Callable[..., Path]
    ) -> None:
        _ = write_source("src/App.tsx", ROUTES_JSX_SOURCE)

        detection = detect_routes(project_root)

        assert detection.kind is RouteSource.ROUTES_JSX
        assert detection.config_file == "src/App.tsx"

    def test_router_files_are_tried_in_order(
        self, project_root: Path, write_source: Callable[..., Path]
    ) -> None:
        _ = write_source("src/App.tsx", ROUTES_JSX_SOURCE)
        _ = write_source("src/routes.ts", "createBrowserRouter([{ path: '/r', element: <R /> }])")

        detection = detect_routes(project_root)

        assert detection.config_file == "src/routes.ts"

    def test_files_without_routes_are_skipped(
        self, project_root: Path, write_source: Callable[..., Path]
    ) -> None:
        _ = write_source("src/router.tsx", "export const nothing = 1;")
        _ = write_source("src/main.tsx", ROUTES_JSX_SOURCE)

        detection = detect_routes(project_root)

        assert detection.config_file == "src/main.tsx"

    def test_falls_back_to_pages_directory(
        self, project_root: Path, write_source: Callable[..., Path]
    ) -> None:
        _ = write_source("src/pages/Dashboard.tsx", "")

        detection = detect_routes(project_root)

        assert detection.kind is RouteSource.FILE_PATTERN
        assert detection.config_file == "src/pages/"
        assert [(r.path, r.component_name) for r in detection.routes] == [
            ("/Dashboard", "Dashboard")
        ]

    def test_app_directory_root_page_is_home(
        self, project_root: Path, write_source: Callable[..., Path]
    ) -> None:
        _ = write_source("app/page.tsx", "")
        _ = write_source("app/settings/page.tsx", "")

        detection = detect_routes(project_root)

        assert [(r.path, r.component_name) for r in detection.routes] == [
            ("/", "Home"),
            ("/settings", "Settings"),
        ]

    def test_nothing_found(self, project_root: Path) -> None:
        detection = detect_routes(project_root)

        assert detection.kind is RouteSource.NONE
        assert detection.routes == ()
        assert detection.config_file is None
