# pyright: reportExplicitAny=false
"""Configuration source discovery."""

from typing import TYPE_CHECKING, Any

from poli_qa.config._defaults import DEFAULT_CONFIG
from poli_qa.config._models import ConfigSource, ConfigSourceName
from poli_qa.utils import (
    find_project_root,
    get_project_config_path,
    get_user_config_path,
)

if TYPE_CHECKING:
    from pathlib import Path


def _file_exists(path: "Path") -> bool:
    """Check whether a config file exists, treating permission errors as absent."""
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    project_root: "Path | None" = None,
    *,
    include_env: bool = True,
    cli_overrides: dict[str, Any] | None = None,
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Args:
        project_root: Project root directory. If None, auto-detect by
            searching upward for a project marker.
        include_env: Include environment variables as a source.
        cli_overrides: Dictionary of CLI argument overrides.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
        Sources that don't exist are still included with exists=False.
    """
    sources: list[ConfigSource] = []
    resolved_root = project_root if project_root else find_project_root()

    if cli_overrides is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides,
            )
        )

    if include_env:
        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    project_path = get_project_config_path(resolved_root)
    sources.append(
        ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=project_path,
            exists=_file_exists(project_path),
            values={},
        )
    )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
