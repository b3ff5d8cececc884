from pathlib import Path

import platformdirs

# Files whose presence marks the root of a front-end project
_PROJECT_MARKERS: tuple[str, ...] = ("poli.toml", "package.json", ".git")


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root by searching upward for a project marker.

    Args:
        start: Directory to start from. Defaults to the current directory.

    Returns:
        The first ancestor (inclusive) containing ``poli.toml``,
        ``package.json`` or ``.git``, or ``start`` itself if none does.
    """
    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _PROJECT_MARKERS):
            return candidate
    return origin


def get_poli_dir(project_root: Path | None = None) -> Path:
    """Get the path to the .poli/ directory of the project."""
    return (project_root or find_project_root()) / ".poli"


def get_poli_log_dir(project_root: Path | None = None) -> Path:
    """Get the path to the logs/ directory inside .poli/."""
    return get_poli_dir(project_root) / "logs"


def get_poli_cli_log_file(project_root: Path | None = None) -> Path:
    """Get the path to the CLI log file inside .poli/logs/."""
    return get_poli_log_dir(project_root) / "cli.log"


def get_poli_state_db(project_root: Path | None = None) -> Path:
    """Get the path to the blob store database.

    Returns:
        Path to the state database (.poli/state.db).
    """
    return get_poli_dir(project_root) / "state.db"


def get_project_config_path(project_root: Path) -> Path:
    """Get the path to the project configuration file (poli.toml)."""
    return project_root / "poli.toml"


def get_user_config_path() -> Path:
    """Get the path to the per-user configuration file."""
    return Path(platformdirs.user_config_dir("poli-qa")) / "config.toml"
