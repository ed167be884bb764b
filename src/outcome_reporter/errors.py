"""Reporter error taxonomy."""

from __future__ import annotations


class ConfigError(RuntimeError):
    """Required configuration is missing. Raised at startup only."""


class ReporterError(Exception):
    """Base class for request-level errors."""

    status_code: int = 500


class AuthError(ReporterError):
    """Supplied token does not match the configured secret."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(ReporterError):
    """Missing or conflicting request parameters."""

    status_code = 400


class UpstreamError(ReporterError):
    """Task result store query failed.

    Not mapped to a response; it propagates to the server's default
    error handling.
    """

    status_code = 502
