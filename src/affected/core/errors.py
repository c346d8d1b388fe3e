"""Affected error types with typed error codes.

Error code ranges:
- 2xxx: Config (settings, workspace file, CI event payload)
- 3xxx: Refs (event kind, base/head resolution)
- 4xxx: Diff (commit comparison)
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2003
    CONFIG_READ_ERROR = 2004

    # Refs (3xxx)
    UNSUPPORTED_EVENT = 3001
    MISSING_REFS = 3002

    # Diff (4xxx)
    DIFF_FETCH_ERROR = 4001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class AffectedError(Exception):
    """Base error with structured context for CI failure reporting."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'MISSING_REFS')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(AffectedError):
    """Invalid tool settings (YAML, env vars, CLI overrides)."""

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


class ConfigReadError(AffectedError):
    """Workspace layout file or CI event payload missing or unparsable."""

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigReadError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "ConfigReadError":
        return cls(
            code=ErrorCode.CONFIG_READ_ERROR,
            message=f"Failed to read {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_repository(cls, repository: str) -> "ConfigReadError":
        return cls(
            code=ErrorCode.CONFIG_READ_ERROR,
            message=f"Repository must be in 'owner/name' form, got '{repository}'",
            details={"repository": repository},
        )


class UnsupportedEventError(AffectedError):
    """Triggering event kind has no ref-derivation rule."""

    @classmethod
    def for_event(cls, event_name: str, supported: tuple[str, ...]) -> "UnsupportedEventError":
        return cls(
            code=ErrorCode.UNSUPPORTED_EVENT,
            message=(
                f"'{event_name}' events are not supported. "
                f"Supported events: {', '.join(repr(s) for s in supported)}"
            ),
            details={"event": event_name, "supported": list(supported)},
        )


class MissingRefsError(AffectedError):
    """Base or head ref could not be resolved."""

    @classmethod
    def for_event(
        cls, event_name: str, *, base: str | None, head: str | None
    ) -> "MissingRefsError":
        missing = [name for name, value in (("base", base), ("head", head)) if not value]
        return cls(
            code=ErrorCode.MISSING_REFS,
            message=(
                f"Base or head commits are missing ({', '.join(missing)}) "
                f"for '{event_name or 'unknown'}' event"
            ),
            details={"event": event_name, "missing": missing},
        )


class DiffFetchError(AffectedError):
    """Commit comparison failed (network, auth, not found, bad refs)."""

    @classmethod
    def request_failed(
        cls, base: str, head: str, reason: str, status_code: int | None = None
    ) -> "DiffFetchError":
        details: dict[str, Any] = {"base": base, "head": head, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        return cls(
            code=ErrorCode.DIFF_FETCH_ERROR,
            message=f"Failed to compare {base}...{head}: {reason}",
            details=details,
        )


class InternalError(AffectedError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
