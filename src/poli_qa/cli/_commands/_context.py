# pyright: reportUnusedCallResult=false
"""CLI context for global state management.

The CLIContext is set once at CLI startup and made available to all
commands via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from poli_qa.utils import find_project_root

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from poli_qa.config import Config


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    TEXT = "text"
    JSON = "json"


_current_cli_context: "contextvars.ContextVar[CLIContext | None]" = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        verbose: Enable verbose output with additional details.
        quiet: Suppress non-essential output.
        project_root: Project root given with --project-root.
        config_error: Error message if config loading failed.
        logger: Structured logger for CLI commands (writes to file only).
    """

    config: "Config" = field(repr=False)
    verbose: bool = False
    quiet: bool = False
    project_root: Path | None = None
    config_error: str | None = None
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)

    @property
    def resolved_project_root(self) -> Path:
        """Return --project-root if given, else the discovered project root."""
        if self.project_root is not None:
            return self.project_root.resolve()
        return find_project_root()

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get current active CLIContext, or create a default if not set.

        Returns:
            The currently active CLIContext, or a default instance if none is set.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx

        # Create default context with empty config
        from poli_qa.config import Config  # noqa: PLC0415

        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the current active CLIContext.

        Args:
            ctx: The CLIContext to set as current.
        """
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)
