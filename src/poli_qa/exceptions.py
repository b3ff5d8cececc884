"""POLI exceptions."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class PoliError(Exception):
    """Base exception for POLI errors."""


class ConfigError(PoliError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: "Path | None" = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(PoliError):
    """Base exception for blob store failures."""


class StorageQuotaExceededError(StorageError):
    """Raised when a write would exceed the blob store quota.

    Attributes:
        key: The key that was being written.
        size: Size in bytes of the rejected value.
        quota: The configured quota in bytes.
    """

    def __init__(self, message: str, *, key: str, size: int, quota: int) -> None:
        """Initialize with error message and quota context.

        Args:
            message: Human-readable error message.
            key: The key that was being written.
            size: Size in bytes of the rejected value.
            quota: The configured quota in bytes.
        """
        super().__init__(message)
        self.key: str = key
        self.size: int = size
        self.quota: int = quota


class InvalidStateError(PoliError, ValueError):
    """Raised when a QA state document fails structural validation.

    Attributes:
        source: Where the document came from (file path or storage key).
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        """Initialize with error message and document source.

        Args:
            message: Human-readable error message.
            source: File path or storage key of the rejected document.
        """
        super().__init__(message)
        self.source: str | None = source


# =============================================================================
# Store Context Exceptions
# =============================================================================


class MissingStoreContextError(PoliError, RuntimeError):
    """Raised when a store is requested outside of a bound store context."""


# =============================================================================
# Checklist Artifact Exceptions
# =============================================================================


class ChecklistFileError(PoliError):
    """Raised when the generated checklist file cannot be read or updated.

    Attributes:
        path: Path to the checklist file.
    """

    def __init__(self, message: str, *, path: "Path | None" = None) -> None:
        """Initialize with error message and file context."""
        super().__init__(message)
        self.path: Path | None = path
