"""POLI configuration.

This module provides the public API for POLI configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from poli_qa.config import Config
    >>> config = Config.load()
    >>> config.store.storage_key
    'poli_qa_state'
"""

from poli_qa.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources
from ._load import safe_load_config
from ._loader import (
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ScanConfig,
    StoreConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ScanConfig",
    "StoreConfig",
    "deep_merge",
    "discover_sources",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
