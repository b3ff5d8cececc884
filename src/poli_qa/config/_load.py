import os
import sys
from typing import TYPE_CHECKING, Never

from poli_qa.exceptions import ConfigError

from ._models import Config

if TYPE_CHECKING:
    from pathlib import Path

STRICT_ENV_VAR = "POLI_STRICT_CONFIG"


def _abort(message: str) -> Never:
    print(f"Error: {message}", file=sys.stderr)  # noqa: T201
    sys.exit(1)


def safe_load_config(
    *,
    config_path: "Path | None" = None,
    project_root: "Path | None" = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration for a CLI run without letting a bad file crash it.

    A missing ``config_path`` always aborts: the user asked for that file.
    Any other load failure prints a warning and falls back to the defaults,
    unless ``POLI_STRICT_CONFIG=1``, which aborts instead.

    Args:
        config_path: File given with ``--config``. Replaces file discovery.
        project_root: Root given with ``--project-root``.
        cli_overrides: Values from CLI flags, applied last.

    Returns:
        The configuration and, after a fallback, the error message.
    """
    strict = os.environ.get(STRICT_ENV_VAR, "0") == "1"

    if config_path is not None and not config_path.exists():
        _abort(f"Config file not found: {config_path}")

    try:
        if config_path is not None:
            config = Config.from_file(config_path, overrides=cli_overrides)
        else:
            config = Config.load(project_root=project_root, cli_overrides=cli_overrides)
    except (ConfigError, OSError) as e:
        message = str(e)
        if strict:
            _abort(message)
        print(f"Warning: Failed to load config: {message}", file=sys.stderr)  # noqa: T201
        return Config.from_dict({}), message

    return config, None
