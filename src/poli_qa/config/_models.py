# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false
"""Configuration models and the typed configuration container."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from poli_qa.config._defaults import DEFAULT_CONFIG
from poli_qa.config._loader import deep_merge, parse_env_vars, read_toml_file
from poli_qa.exceptions import ConfigValidationError


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Configuration source names in precedence order.

    Values are ordered from highest precedence (CLI) to lowest (DEFAULT).
    """

    CLI = "cli"
    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """Represents a configuration source.

    Attributes:
        name: The source type identifier.
        path: Path to the config file, or None for non-file sources.
        exists: Whether the source exists (file exists, or values are present).
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any]


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty uses .poli/logs/cli.log).
        max_bytes: Rotate the log file once it reaches this size.
        backup_count: Rotated log files to keep. Rotation needs both settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""
    max_bytes: int | None = Field(default=None, ge=1)
    backup_count: int | None = Field(default=None, ge=0)


class ScanConfig(BaseModel):
    """Settings for the project scanner and the generated checklist file."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    output: str = Field(
        default="src/poli.checklists.ts",
        description="Checklist file path, relative to the project root.",
    )
    source_dir: str = Field(
        default="src",
        description="Directory searched for screen components by file convention.",
    )


class StoreConfig(BaseModel):
    """Settings for the persisted QA state."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    storage_key: str = Field(default="poli_qa_state", min_length=1)
    database: str = Field(
        default="",
        description="SQLite database path (empty uses .poli/state.db).",
    )
    quota_bytes: int | None = Field(default=5_242_880, ge=1)
    tester_name: str = ""


def _parse_section[M: BaseModel](
    model: type[M], data: dict[str, Any], section: str, source: str | None
) -> M:
    """Validate one configuration section.

    Raises:
        ConfigValidationError: If a value does not match the section model.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        key = f"{section}.{field}" if field else section
        msg = f"Invalid configuration value for {key}: {error['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=error.get("input"),
            expected=error["type"],
            source=source,
        ) from e


class Config(BaseModel):
    """Configuration container with typed access.

    Use factory methods to create instances rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _scan: ScanConfig = PrivateAttr(default_factory=ScanConfig)
    _store: StoreConfig = PrivateAttr(default_factory=StoreConfig)

    @classmethod
    def _build(
        cls,
        merged: dict[str, Any],
        sources: tuple[ConfigSource, ...],
        *,
        source: str | None = None,
    ) -> Self:
        config = cls()
        config._data = merged
        config._sources = sources
        config._logging = _parse_section(
            LoggingConfig, merged.get("logging", {}), "logging", source
        )
        config._scan = _parse_section(ScanConfig, merged.get("scan", {}), "scan", source)
        config._store = _parse_section(
            StoreConfig, merged.get("store", {}), "store", source
        )
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return cls._build(deep_merge(DEFAULT_CONFIG, data), ())

    @classmethod
    def from_file(cls, path: Path, *, overrides: dict[str, Any] | None = None) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.
            overrides: Values applied on top of the file, such as CLI flags.

        Returns:
            Configuration from the defaults, the file and ``overrides`` only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT, path=path, exists=True, values=data
        )
        merged = deep_merge(DEFAULT_CONFIG, data)
        if overrides:
            merged = deep_merge(merged, overrides)
        return cls._build(merged, (source,), source=str(path))

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order
        (defaults -> user -> project -> env -> cli).

        Raises:
            ConfigLoadError: If config files cannot be loaded.
            ConfigValidationError: If merged config fails validation.
        """
        # Deferred import to avoid circular dependency
        from poli_qa.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            project_root=project_root,
            include_env=include_env,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}
            if source.name in (ConfigSourceName.DEFAULT, ConfigSourceName.CLI):
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path is not None and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        return cls._build(merged, tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @property
    def scan(self) -> ScanConfig:
        """Return the scanner configuration section."""
        return self._scan

    @property
    def store(self) -> StoreConfig:
        """Return the store configuration section."""
        return self._store

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("logging.level")
            'info'
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current
