"""Project scanning: routes, screens, component analysis and suggested tests.

Example:
    >>> from pathlib import Path
    >>> from poli_qa.scan import discover_screens, write_checklist_file
    >>> discovery = discover_screens(Path("."))
    >>> write_checklist_file(Path("src/poli.checklists.ts"), discovery.screens)
"""

from ._analyzer import (
    ComponentAnalysis,
    ExtractedButton,
    ExtractedForm,
    ExtractedInput,
    ExtractedLink,
    ExtractedModal,
    ExtractedSelect,
    analyze_component,
    extract_buttons,
    extract_forms,
    extract_inputs,
    extract_links,
    extract_modals,
    extract_selects,
    extract_text,
    parse_props,
)
from ._checklist_file import (
    ChecklistEntry,
    add_screen_to_checklist_file,
    build_entries,
    build_entry,
    declared_screens,
    insert_screen,
    item_id,
    render_checklist_file,
    write_checklist_file,
)
from ._discovery import (
    EXCLUDE_PATTERNS,
    SCREEN_PATTERNS,
    DetectedScreen,
    ScreenDiscovery,
    discover_screens,
    find_component_file,
    list_source_files,
    suggest_tests,
)
from ._names import (
    DETAIL_SUFFIX,
    HOME_SCREEN,
    file_to_screen_name,
    normalize_screen_name,
    route_to_screen_name,
    to_pascal_case,
)
from ._routes import (
    ParsedRoute,
    RouteDetection,
    RouteSource,
    detect_routes,
    parse_route_elements,
    parse_router_call,
    scan_app_directory,
    scan_pages_directory,
)
from ._suggest import (
    BASELINE_TEST,
    FORM_TESTS,
    KEYWORD_SUGGESTIONS,
    categorize_test,
    generate_specific_tests,
    suggest_tests_for_component,
)

__all__ = [
    "BASELINE_TEST",
    "DETAIL_SUFFIX",
    "EXCLUDE_PATTERNS",
    "FORM_TESTS",
    "HOME_SCREEN",
    "KEYWORD_SUGGESTIONS",
    "SCREEN_PATTERNS",
    "ChecklistEntry",
    "ComponentAnalysis",
    "DetectedScreen",
    "ExtractedButton",
    "ExtractedForm",
    "ExtractedInput",
    "ExtractedLink",
    "ExtractedModal",
    "ExtractedSelect",
    "ParsedRoute",
    "RouteDetection",
    "RouteSource",
    "ScreenDiscovery",
    "add_screen_to_checklist_file",
    "analyze_component",
    "build_entries",
    "build_entry",
    "categorize_test",
    "declared_screens",
    "detect_routes",
    "discover_screens",
    "extract_buttons",
    "extract_forms",
    "extract_inputs",
    "extract_links",
    "extract_modals",
    "extract_selects",
    "extract_text",
    "file_to_screen_name",
    "find_component_file",
    "generate_specific_tests",
    "insert_screen",
    "item_id",
    "list_source_files",
    "normalize_screen_name",
    "parse_props",
    "parse_route_elements",
    "parse_router_call",
    "render_checklist_file",
    "route_to_screen_name",
    "scan_app_directory",
    "scan_pages_directory",
    "suggest_tests",
    "suggest_tests_for_component",
    "to_pascal_case",
    "write_checklist_file",
]
