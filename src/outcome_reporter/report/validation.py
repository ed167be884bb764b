"""Request validation.

Checks the shared-secret token, the subject identifier and the date, in
that order, and produces a ReportFilter. The token check always comes
first so an unauthenticated caller learns nothing about parameters.
"""

from __future__ import annotations

import re
import secrets
from datetime import date

from outcome_reporter.config import Settings
from outcome_reporter.errors import AuthError, ValidationError
from outcome_reporter.models.domain import ClientSubject, ProviderSubject, ReportFilter, Subject

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _present(value: str | None) -> bool:
    return value is not None and value != ""


def check_token(settings: Settings, token: str | None) -> None:
    """Raise AuthError unless token equals the configured secret."""
    if token is None or not secrets.compare_digest(
        token.encode("utf-8"), settings.token.encode("utf-8")
    ):
        raise AuthError()


def parse_day(value: str | None) -> date:
    """Parse a required YYYY-MM-DD date parameter.

    Args:
        value: Raw query parameter.

    Returns:
        Calendar date.

    Raises:
        ValidationError: If missing or not a real calendar date.
    """
    if not _present(value):
        raise ValidationError("date is required")
    if not _DATE_PATTERN.match(value):
        raise ValidationError("date must be a valid YYYY-MM-DD date")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError("date must be a valid YYYY-MM-DD date") from e


def validate_outcome_request(
    settings: Settings,
    token: str | None,
    client: str | None,
    day: str | None,
) -> ReportFilter:
    """Validate a success-count request (by client only).

    Args:
        settings: Reporter settings.
        token: Supplied token.
        client: Client identifier.
        day: Date string.

    Returns:
        ReportFilter for the client and day.

    Raises:
        AuthError: Token mismatch.
        ValidationError: Missing client or date, or bad date.
    """
    check_token(settings, token)

    if not _present(client):
        raise ValidationError("client is required")

    return ReportFilter(
        requester=settings.requester,
        subject=ClientSubject(client=client),
        day=parse_day(day),
    )


def validate_latency_request(
    settings: Settings,
    token: str | None,
    client: str | None,
    provider: str | None,
    day: str | None,
) -> ReportFilter:
    """Validate a latency request (by client or by provider).

    Args:
        settings: Reporter settings.
        token: Supplied token.
        client: Client identifier.
        provider: Provider identifier.
        day: Date string.

    Returns:
        ReportFilter for whichever subject was given.

    Raises:
        AuthError: Token mismatch.
        ValidationError: Neither or both of client/provider, missing
            date, or bad date.
    """
    check_token(settings, token)

    has_client = _present(client)
    has_provider = _present(provider)

    if not has_client and not has_provider:
        raise ValidationError("client or provider is required")
    if has_client and has_provider:
        raise ValidationError("provide either client or provider, not both")

    subject: Subject
    if has_client:
        subject = ClientSubject(client=client)
    else:
        subject = ProviderSubject(provider=provider)

    return ReportFilter(
        requester=settings.requester,
        subject=subject,
        day=parse_day(day),
    )
