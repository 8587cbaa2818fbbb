"""Mentionkit Error System.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints for the CLI
- Context for debugging
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        1xxx - Search/ranking errors
        2xxx - Resolution errors
        3xxx - Provider errors
        5xxx - Configuration errors
        7xxx - Network/IO errors
        9xxx - Unexpected errors
    """

    # 1xxx - Search Errors
    SEARCH_BACKEND_FAILED = 1001
    SEARCH_SKIPPED = 1002

    # 2xxx - Resolution Errors
    RESOLUTION_FAILED = 2001
    REMOTE_CONTENT_FAILED = 2002

    # 3xxx - Provider Errors
    PROVIDER_NOT_CONFIGURED = 3001
    PROVIDER_MENTION_MISSING = 3002
    PROVIDER_ANNOTATIONS_FAILED = 3003

    # 5xxx - Configuration Errors
    CONFIG_INVALID = 5002

    # 7xxx - Network/IO Errors
    FILE_NOT_FOUND = 7001
    FILE_STAT_FAILED = 7002
    FILE_READ_FAILED = 7003
    WORKSPACE_NOT_FOUND = 7004

    # 9xxx - Unexpected Errors
    UNEXPECTED = 9001

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            1: "search",
            2: "resolution",
            3: "provider",
            5: "config",
            7: "io",
            9: "runtime",
        }.get(prefix, "unknown")

    @property
    def is_recoverable(self) -> bool:
        """Whether this error type is typically recoverable."""
        non_recoverable = {
            ErrorCode.CONFIG_INVALID,
            ErrorCode.WORKSPACE_NOT_FOUND,
        }
        return self not in non_recoverable


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    # Search errors
    ErrorCode.SEARCH_BACKEND_FAILED: "Remote search failed for {repositories}: {detail}",
    ErrorCode.SEARCH_SKIPPED: "Remote search for '{query}' was superseded by a newer query.",

    # Resolution errors
    ErrorCode.RESOLUTION_FAILED: "Could not include context from {uri}. (Reason: {detail})",
    ErrorCode.REMOTE_CONTENT_FAILED: "Could not fetch {path} from {repository}: {detail}",

    # Provider errors
    ErrorCode.PROVIDER_NOT_CONFIGURED: "No context provider client is configured.",
    ErrorCode.PROVIDER_MENTION_MISSING: "Context item {uri} is missing its mention parameter.",
    ErrorCode.PROVIDER_ANNOTATIONS_FAILED: "Fetching annotations for {uri} failed: {detail}",

    # Config errors
    ErrorCode.CONFIG_INVALID: "Invalid configuration for '{key}': {detail}",

    # IO errors
    ErrorCode.FILE_NOT_FOUND: "File not found: {path}",
    ErrorCode.FILE_STAT_FAILED: "Could not stat {path}: {detail}",
    ErrorCode.FILE_READ_FAILED: "Could not read {path}: {detail}",
    ErrorCode.WORKSPACE_NOT_FOUND: "Workspace root does not exist: {path}",

    # Unexpected errors
    ErrorCode.UNEXPECTED: "Unexpected error: {detail}",
}


# Recovery hints for the CLI
RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.SEARCH_BACKEND_FAILED: [
        "Check that the remote endpoint is reachable",
        "Search without repository names to rank the local workspace instead",
    ],
    ErrorCode.CONFIG_INVALID: [
        "Fix the value of '{key}' in .mentionkit/config.yaml",
        "Unset the matching MENTIONKIT_* environment variable",
    ],
    ErrorCode.WORKSPACE_NOT_FOUND: [
        "Pass an existing directory with --root",
    ],
    ErrorCode.FILE_NOT_FOUND: [
        "Check the path is relative to the workspace root",
    ],
}


class MentionError(Exception):
    """Base error type for all mentionkit errors.

    Example:
        >>> err = MentionError(
        ...     code=ErrorCode.RESOLUTION_FAILED,
        ...     context={"uri": "file:///a.py", "detail": "boom"},
        ... )
        >>> print(err)
        [MK-2001] Could not include context from file:///a.py. (Reason: boom)
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        formatted = []
        for hint in RECOVERY_HINTS.get(self.code, []):
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def is_recoverable(self) -> bool:
        """Whether this error is typically recoverable."""
        return self.code.is_recoverable

    @property
    def category(self) -> str:
        """Get the error category."""
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'MK-2001')."""
        return f"MK-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"MentionError(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging/JSON output."""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recoverable": self.is_recoverable,
            "recovery_hints": self.recovery_hints,
            "context": self.context,
        }


# Convenience factory functions

def resolution_error(uri: str, cause: BaseException) -> MentionError:
    """Create a RESOLUTION_FAILED error for a context item."""
    return MentionError(
        code=ErrorCode.RESOLUTION_FAILED,
        context={"uri": uri, "detail": str(cause) or type(cause).__name__},
        cause=cause if isinstance(cause, Exception) else None,
    )


def config_error(
    code: ErrorCode,
    key: str = "",
    detail: str = "",
) -> MentionError:
    """Create a configuration error."""
    return MentionError(code=code, context={"key": key, "detail": detail})


def io_error(
    code: ErrorCode,
    path: str,
    detail: str = "",
    cause: Exception | None = None,
) -> MentionError:
    """Create a filesystem error."""
    return MentionError(code=code, context={"path": path, "detail": detail}, cause=cause)


def is_error_like(value: object) -> bool:
    """Whether a collaborator returned an error value instead of raising it."""
    return isinstance(value, BaseException)
