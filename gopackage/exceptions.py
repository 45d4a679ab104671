"""
Custom exception hierarchy for gopackage.

This module defines structured exception types used across gopackage.
All exceptions inherit from :class:`GoPackageError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional, Sequence


class GoPackageError(Exception):
    """Base exception for all gopackage errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ConfigError(GoPackageError):
    """Raised when the configuration file is missing, unreadable or invalid.

    Args:
        message: Error description.
        config_path: Path of the configuration file involved.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "config", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class EnvironmentConfigError(GoPackageError):
    """Raised when a required environment variable is missing or empty.

    Args:
        message: Error description.
        variable: Name of the environment variable.
    """

    __slots__ = ("variable",)

    def __init__(self, message: str, *, variable: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "variable", variable)

        super().__init__(message, details)

        self.variable = variable


class ToolchainError(GoPackageError):
    """Raised when a Go toolchain invocation fails or returns unusable output.

    Args:
        message: Error description.
        command: Argument vector of the failed command.
        returncode: Exit status, if the process ran.
        stderr: Captured standard error, truncated for safety.
    """

    __slots__ = ("command", "returncode", "stderr")

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "command", " ".join(command) if command else None)
        _add_if(details, "returncode", returncode)

        if stderr:
            details["stderr"] = _truncate(stderr.strip())

        super().__init__(message, details)

        self.command = list(command) if command else None
        self.returncode = returncode
        self.stderr = stderr


class CollectionError(GoPackageError):
    """Raised by strict dependency collection when a query fails.

    Args:
        message: Error description.
        import_path: Package or import path whose query failed.
        original_error: Underlying toolchain error.
    """

    __slots__ = ("import_path", "original_error")

    def __init__(
        self,
        message: str,
        *,
        import_path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "package", import_path)

        super().__init__(message, details)

        self.import_path = import_path
        self.original_error = original_error


class VersionMismatchError(GoPackageError):
    """Raised when the installed Go version does not satisfy the record.

    Args:
        message: Error description.
        required: Minimum Go version stored in the record.
        actual: Go version reported by the installed toolchain.
    """

    __slots__ = ("required", "actual")

    def __init__(
        self,
        message: str,
        *,
        required: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "required", required)
        _add_if(details, "actual", actual)

        super().__init__(message, details)

        self.required = required
        self.actual = actual


class RecordError(GoPackageError):
    """Raised when a stored dependency record has malformed content.

    Args:
        message: Error description.
        file_path: Path of the record file.
    """

    __slots__ = ("file_path",)

    def __init__(self, message: str, *, file_path: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)

        super().__init__(message, details)

        self.file_path = file_path


class FileOperationError(GoPackageError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write/mkdir).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
