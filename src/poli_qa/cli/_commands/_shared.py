# pyright: reportExplicitAny=false
"""Exit codes and output helpers shared by the poli-qa commands."""

from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

from rich.markup import escape

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from poli_qa.scan import DetectedScreen

# JSON-ready command output
FormattableData = dict[str, Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "print_screens",
]


class ExitCode(IntEnum):
    """Process exit status of a poli-qa command."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Serialize command output with orjson, indented by default."""
    import orjson  # noqa: PLC0415

    return orjson.dumps(data, option=orjson.OPT_INDENT_2 if indent else 0).decode()


def get_error_console() -> "Console":
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Report ``message`` on stderr and stop the command with ``code``.

    Args:
        message: Error text, printed after a red ``Error:`` prefix.
        code: Exit status of the process.
        console: Console to print on. Defaults to a new stderr console.

    Raises:
        SystemExit: Always.
    """
    console = console or get_error_console()
    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)


def print_screens(
    console: "Console",
    screens: "Sequence[DetectedScreen]",
    *,
    list_tests: bool = False,
) -> None:
    """Print the discovered screens, one block per screen.

    Each block shows the screen name and its source. With ``list_tests``
    every suggested test is listed, otherwise only their count.
    """
    console.print(f"Found {len(screens)} screen(s):\n")
    for screen in screens:
        console.print(f"  [bold]{escape(screen.name)}[/bold]")
        console.print(f"     File: {escape(screen.source)}")
        if list_tests:
            for test in screen.suggested_tests:
                console.print(f"     • {escape(test)}")
        else:
            console.print(f"     Tests: {len(screen.suggested_tests)} suggested")
        console.print()
