from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from poli_qa.cli import create_app

RunCliFunc = Callable[..., int]


@pytest.fixture
def poli_cli(console: Console, project_root: Path) -> RunCliFunc:
    """Create CLI app for testing that returns the exit code.

    Every invocation runs against the ``project_root`` fixture through the
    global ``--project-root`` option.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str, root: Path | None = None) -> int:
        """Run CLI app and return exit code (0 if no SystemExit)."""
        tokens = ["--project-root", str(root or project_root), *args]
        try:
            app.meta(tokens)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
