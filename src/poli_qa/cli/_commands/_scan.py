# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, A002
"""Scan command: show detected screens and their suggested tests."""

from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter
from rich.console import Console
from rich.markup import escape

from poli_qa.scan import RouteSource, discover_screens

from ._context import CLIContext, OutputFormat
from ._shared import FormattableData, format_json, print_screens

if TYPE_CHECKING:
    from poli_qa.scan import ScreenDiscovery


def run_discovery(ctx: CLIContext, console: Console) -> "ScreenDiscovery":
    """Discover screens for the current project, reporting progress on ``console``."""
    project_root = ctx.resolved_project_root
    source_dir = ctx.config.scan.source_dir

    if not ctx.quiet:
        console.print("Scanning project for screens...")
        if not (project_root / source_dir).is_dir():
            console.print(
                f"No {escape(source_dir)}/ directory found. Scanning from project root..."
            )

    discovery = discover_screens(project_root, source_dir=source_dir, logger=ctx.logger)

    detection = discovery.detection
    if not ctx.quiet and detection.kind is not RouteSource.NONE:
        console.print(
            f"[dim]Routes from {escape(detection.config_file or '')} ({detection.kind})[/dim]"
        )
    return discovery


def discovery_to_dict(discovery: "ScreenDiscovery") -> FormattableData:
    return {
        "detection": {
            "kind": str(discovery.detection.kind),
            "config_file": discovery.detection.config_file,
        },
        "screens": [
            {
                "name": screen.name,
                "file": screen.file_path,
                "route": screen.route,
                "component": screen.component_name,
                "tests": list(screen.suggested_tests),
            }
            for screen in discovery.screens
        ],
    }


def scan(
    *,
    format: Annotated[
        OutputFormat,
        Parameter(name=["--format"], help="Output format (text, json)"),
    ] = OutputFormat.TEXT,
) -> None:
    """Show detected screens without generating a file

    Args:
        format: Output format (text, json).
    """
    ctx = CLIContext.get_current()
    console = Console()

    if format == OutputFormat.JSON:
        discovery = discover_screens(
            ctx.resolved_project_root,
            source_dir=ctx.config.scan.source_dir,
            logger=ctx.logger,
        )
        print(format_json(discovery_to_dict(discovery)))  # noqa: T201
        return

    discovery = run_discovery(ctx, console)
    if not discovery.screens:
        console.print("No screens detected.")
        return

    print_screens(console, discovery.screens, list_tests=True)
