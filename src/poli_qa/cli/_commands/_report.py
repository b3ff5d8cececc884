# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, TC003
"""Report command: render the Markdown report of a QA state."""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter
from rich.console import Console
from rich.markup import escape

from poli_qa.exceptions import InvalidStateError, StorageError
from poli_qa.state import render_markdown_report
from poli_qa.storage import import_from_file, load_state, open_blob_store

from ._context import CLIContext
from ._shared import ExitCode, exit_with_error

if TYPE_CHECKING:
    from poli_qa.state import QAState


def _load_from_file(state_file: Path) -> "QAState":
    if not state_file.is_file():
        exit_with_error(f"State file not found: {state_file}", ExitCode.NOT_FOUND)

    try:
        return import_from_file(state_file)
    except InvalidStateError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)
    except OSError as e:
        exit_with_error(f"Cannot read {state_file}: {e}", ExitCode.IO_ERROR)


def _load_from_project(ctx: CLIContext) -> "QAState":
    try:
        store = open_blob_store(
            ctx.config.store, ctx.resolved_project_root, logger=ctx.logger
        )
    except (StorageError, sqlite3.Error, OSError) as e:
        exit_with_error(f"Cannot open state database: {e}", ExitCode.IO_ERROR)

    state = load_state(store, ctx.config.store.storage_key, logger=ctx.logger)
    if state is None:
        exit_with_error(
            f"No saved QA state under '{ctx.config.store.storage_key}' in {store.db_path}",
            ExitCode.NOT_FOUND,
        )
    return state


def report(
    state_file: Path | None = None,
    /,
    *,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="Write the report to this file"),
    ] = None,
) -> None:
    """Print the Markdown report of a QA state

    Args:
        state_file: JSON file written by the store's export. Defaults to the
            state saved in the project's state database.
        output: Write the report here instead of printing it.
    """
    ctx = CLIContext.get_current()

    if state_file is not None:
        state = _load_from_file(state_file)
    else:
        state = _load_from_project(ctx)

    markdown = render_markdown_report(state)
    if ctx.logger:
        ctx.logger.info("report_rendered", state_file=str(state_file or ""))

    if output is None:
        print(markdown)  # noqa: T201
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markdown, encoding="utf-8")
    except OSError as e:
        exit_with_error(f"Cannot write {output}: {e}", ExitCode.IO_ERROR)

    if not ctx.quiet:
        Console().print(f"[green]Report written to[/green] {escape(str(output))}")
