"""
ffmeta exception hierarchy.

Provides typed exceptions for better error handling and clearer error messages.

Exception Hierarchy:
    FfmetaError (base)
    ├── ConfigurationError - Invalid settings
    └── ParseError - Fatal parse failures
        ├── DurationFormatError - Malformed HH:MM:SS.fraction token
        └── StreamInfoError - Malformed duration in diagnostic log text

Only duration tokens are fatal. Every other irregularity in the metadata
export or the diagnostic log is skipped silently.
"""

from __future__ import annotations

from typing import Any


class FfmetaError(Exception):
    """Base exception for all ffmeta errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """
        Initialize ffmeta exception.

        Args:
            message: Human-readable error message
            details: Optional structured error details for logging/debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FfmetaError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details)
        self.field = field


# =============================================================================
# Parse Errors
# =============================================================================


class ParseError(FfmetaError):
    """Fatal failure while parsing tool output."""

    def __init__(
        self,
        message: str,
        *,
        line: str | None = None,
        line_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if line is not None:
            details["line"] = line
        if line_number is not None:
            details["line_number"] = line_number
        super().__init__(message, details=details)
        self.line = line
        self.line_number = line_number


class DurationFormatError(ParseError):
    """Time token not in HH:MM:SS.fraction form."""

    def __init__(self, message: str, *, token: str | None = None, **kwargs: Any) -> None:
        details = kwargs.get("details") or {}
        if token is not None:
            details["token"] = token
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.token = token


class StreamInfoError(ParseError):
    """Malformed duration on a progress or Duration: line."""

    def __init__(self, message: str, *, source: str | None = None, **kwargs: Any) -> None:
        details = kwargs.get("details") or {}
        if source:
            details["source"] = source
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.source = source
