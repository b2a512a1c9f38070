"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Each exception carries a stable code; the CLI maps exception types to
process exit codes through EXIT_CODE_MAP.
"""

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 2


class StatsError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class UsageError(StatsError):
    """Raised when command-line arguments are missing or malformed."""

    def __init__(self, message: str = "Invalid usage") -> None:
        super().__init__(message, code="CLI_USAGE")


class ConfigError(StatsError):
    """Raised when a settings file is missing or fails validation."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CFG_INVALID")


class FetchError(StatsError):
    """Raised when the statistics endpoint cannot be retrieved."""

    def __init__(
        self,
        message: str = "Failed to retrieve statistics",
        base_url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.base_url = base_url
        self.status_code = status_code
        super().__init__(message, code="NET_FETCH_FAILED")


class ParseError(StatsError):
    """Raised when the response body is not a JSON object."""

    def __init__(self, message: str = "Response is not a JSON object") -> None:
        super().__init__(message, code="DOC_PARSE_FAILED")


class NotFoundError(StatsError):
    """Raised when a statistic key is absent from the document."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"statistic '{key}' not found", code="DOC_KEY_NOT_FOUND")


EXIT_CODE_MAP: dict[type[StatsError], int] = {
    UsageError: EXIT_FAILURE,
    ConfigError: EXIT_FAILURE,
    FetchError: EXIT_FAILURE,
    ParseError: EXIT_FAILURE,
    NotFoundError: EXIT_NOT_FOUND,
}


def exit_code_for(error: StatsError) -> int:
    """Return the process exit code for an application error."""
    for error_type in type(error).__mro__:
        if error_type in EXIT_CODE_MAP:
            return EXIT_CODE_MAP[error_type]
    return EXIT_FAILURE
