"""Jinja2 Environment factory."""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jinja2 import Environment

# Templates shipped inside the poli_qa package
PACKAGE_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(slots=True, frozen=True)
class EnvironmentConfig:
    """Configuration for Jinja2 Environment.

    Attributes:
        autoescape: Enable autoescaping (default: False for source-code templates).
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
    """

    autoescape: bool = False
    trim_blocks: bool = True
    lstrip_blocks: bool = True
    keep_trailing_newline: bool = True


def ts_string(value: object) -> str:
    """Escape a value for use inside a single-quoted TypeScript string literal.

    Examples:
        >>> ts_string("Don't panic")
        "Don\\\\'t panic"
    """
    return (
        str(value)
        .replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )


def create_environment(
    search_paths: "tuple[Path, ...] | None" = None,
    *,
    config: EnvironmentConfig | None = None,
) -> "Environment":
    """Create a Jinja2 Environment with FileSystemLoader.

    The environment is configured for generated source files: no
    autoescaping, block tags that leave no blank lines behind and trailing
    newline preservation. The ``ts_string`` filter is registered.

    Args:
        search_paths: Template search paths, highest priority first. Defaults
            to the templates shipped with the package.
        config: Optional environment configuration. If None, uses defaults.

    Returns:
        Configured Jinja2 Environment.

    Example:
        from poli_qa.templating import create_environment

        env = create_environment()
        template = env.get_template("checklists.ts.j2")
        result = template.render(screens=[])
    """
    from jinja2 import Environment, FileSystemLoader  # noqa: PLC0415

    paths = search_paths if search_paths is not None else (PACKAGE_TEMPLATE_DIR,)

    # Use default config if none provided
    if config is None:
        config = EnvironmentConfig()

    loader = FileSystemLoader([str(p) for p in paths])
    env: Environment = Environment(
        loader=loader,
        autoescape=config.autoescape,  # noqa: S701
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        keep_trailing_newline=config.keep_trailing_newline,
    )
    env.filters["ts_string"] = ts_string

    return env
