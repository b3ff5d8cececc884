"""poli-qa CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._add import add
from ._context import CLIContext, OutputFormat
from ._init import init
from ._report import report
from ._scan import discovery_to_dict, run_discovery, scan
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    get_error_console,
    print_screens,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "add",
    "discovery_to_dict",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "init",
    "print_screens",
    "register_commands",
    "report",
    "run_discovery",
    "scan",
]


def register_commands(app: "App") -> None:
    app.command(init)
    app.command(scan)
    app.command(add)
    app.command(report)

    @app.command(name="help")
    def _help() -> None:  # pyright: ignore[reportUnusedFunction]
        """Show this help message."""
        app.help_print([])
