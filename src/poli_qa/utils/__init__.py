"""Shared utilities: logging, paths, JSON and SQLite helpers."""

from ._json import dump_json, load_json, load_json_file
from ._logging import create_cli_logger, get_library_logger
from ._paths import (
    find_project_root,
    get_poli_cli_log_file,
    get_poli_dir,
    get_poli_log_dir,
    get_poli_state_db,
    get_project_config_path,
    get_user_config_path,
)

__all__ = [
    "create_cli_logger",
    "dump_json",
    "find_project_root",
    "get_library_logger",
    "get_poli_cli_log_file",
    "get_poli_dir",
    "get_poli_log_dir",
    "get_poli_state_db",
    "get_project_config_path",
    "get_user_config_path",
    "load_json",
    "load_json_file",
]
