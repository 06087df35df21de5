"""codeseek error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index (content fetch, indexing runs)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Index (3xxx)
    FETCH_NOT_FOUND = 3001
    FETCH_UNREADABLE = 3002
    FETCH_OUTSIDE_WORKSPACE = 3003
    INDEX_RUN_IN_PROGRESS = 3010


@dataclass(frozen=True, slots=True)
class CodeSeekError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'FETCH_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses and status payloads."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CodeSeekError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class FetchError(CodeSeekError):
    """File content could not be obtained from the content provider.

    Recovered per file during an indexing run.
    """

    @classmethod
    def not_found(cls, path: str) -> "FetchError":
        return cls(
            code=ErrorCode.FETCH_NOT_FOUND,
            message=f"File not found: {path}",
            details={"path": path},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "FetchError":
        return cls(
            code=ErrorCode.FETCH_UNREADABLE,
            message=f"Cannot read {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )

    @classmethod
    def outside_workspace(cls, path: str, root: str) -> "FetchError":
        return cls(
            code=ErrorCode.FETCH_OUTSIDE_WORKSPACE,
            message=f"Path '{path}' escapes workspace root",
            details={"path": path, "root": root},
        )


class IndexingError(CodeSeekError):
    """Errors raised by the indexing orchestrator itself."""

    @classmethod
    def run_in_progress(cls) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_RUN_IN_PROGRESS,
            message="An indexing run is already in progress",
            retryable=True,
        )

