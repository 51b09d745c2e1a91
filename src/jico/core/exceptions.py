"""Custom exceptions for jico."""

from typing import Any


class JicoError(Exception):
    """Base exception for all jico errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ConfigError(JicoError):
    """Configuration-related errors."""

    pass


class ValidationError(JicoError):
    """Input validation errors."""

    pass


class JiraError(JicoError):
    """Jira API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body
