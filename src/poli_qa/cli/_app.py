"""The command-line interface for poli-qa."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from poli_qa.config import safe_load_config
from poli_qa.utils import create_cli_logger, find_project_root

from ._commands import register_commands
from ._commands._context import CLIContext

APP_NAME = "poli-qa"
APP_HELP = "POLI - Portable Overlay for Live Inspection. Generate and manage QA checklists."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name=APP_NAME,
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        quiet: Annotated[bool, Parameter(help="Suppress non-essential output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Path to project root")
        ] = None,
    ) -> None:
        """Launch poli-qa with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output and debug logging.
            quiet: Suppress non-essential output.
            config: Explicit path to config file.
            project_root: Path to project root directory.
        """
        run_with_context(
            app,
            tokens,
            verbose=verbose,
            quiet=quiet,
            config=config,
            project_root=project_root,
        )

    register_commands(app)
    return app


def run_with_context(
    app: App,
    tokens: tuple[str, ...],
    *,
    verbose: bool = False,
    quiet: bool = False,
    config: Path | None = None,
    project_root: Path | None = None,
) -> None:
    """Load configuration, set the CLI context and dispatch ``tokens`` to ``app``."""
    # --verbose raises the log level for this invocation
    cli_overrides: dict[str, object] | None = None
    if verbose:
        cli_overrides = {"logging": {"level": "debug"}}

    loaded_config, config_error = safe_load_config(
        config_path=config,
        project_root=project_root,
        cli_overrides=cli_overrides,
    )

    cli_logger = create_cli_logger(
        level=loaded_config.logging.level.value,
        log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
        log_file=loaded_config.logging.file,
        max_bytes=loaded_config.logging.max_bytes,
        backup_count=loaded_config.logging.backup_count,
        command=tokens[0] if tokens else "",
        project_root=project_root.resolve() if project_root else find_project_root(),
    )

    ctx = CLIContext(
        config=loaded_config,
        verbose=verbose,
        quiet=quiet,
        project_root=project_root,
        config_error=config_error,
        logger=cli_logger,
    )
    CLIContext.set_current(ctx)

    try:
        app(tokens)
    finally:
        CLIContext.reset()


app = create_app()


def main() -> None:
    """Default entrypoint for the `poli-qa` CLI."""
    app = create_app()
    app.meta()


if __name__ == "__main__":
    main()
