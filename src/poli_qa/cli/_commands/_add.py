# pyright: reportUnusedCallResult=false
# ruff: noqa: D415
"""Add command: append a screen to an existing checklist file."""

from rich.console import Console
from rich.markup import escape

from poli_qa.exceptions import ChecklistFileError
from poli_qa.scan import add_screen_to_checklist_file, normalize_screen_name

from ._context import CLIContext
from ._shared import ExitCode, exit_with_error


def add(screen: str, /) -> None:
    """Add a new screen to checklists

    Args:
        screen: Screen name, e.g. Dashboard or user-profile.
    """
    ctx = CLIContext.get_current()
    console = Console()

    name = normalize_screen_name(screen)
    if not name:
        exit_with_error("Screen name must not be empty", ExitCode.VALIDATION_ERROR)

    target = ctx.resolved_project_root / ctx.config.scan.output
    if not target.is_file():
        console.print(f"No checklist file at {escape(str(target))}; nothing changed.")
        console.print("Run 'poli-qa init' first.")
        return

    console.print(f"Adding screen: {escape(name)}")
    try:
        changed = add_screen_to_checklist_file(target, name, logger=ctx.logger)
    except ChecklistFileError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR)

    if changed:
        console.print(f"[green]Added[/green] {escape(name)} to {escape(str(target))}")
    else:
        console.print(f"{escape(name)} is already declared; nothing changed.")
