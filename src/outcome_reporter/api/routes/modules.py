"""Module outcome API endpoints.

GET /api/modules/outcomes - Task and success counts per module for a client
GET /api/modules/latency - Counts plus ttfb percentiles, by client or provider
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from outcome_reporter.aggregation.summary import summarize_module_latency, summarize_modules
from outcome_reporter.api.app import get_db_session, get_settings
from outcome_reporter.config import Settings
from outcome_reporter.db import repo
from outcome_reporter.db.repo import DbSession
from outcome_reporter.models.types import ModuleLatency, ModuleOutcome
from outcome_reporter.report.query import build_outcome_query
from outcome_reporter.report.validation import validate_latency_request, validate_outcome_request

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/modules/outcomes", response_model=list[ModuleOutcome])
def get_module_outcomes(
    token: str | None = None,
    client: str | None = None,
    day: str | None = Query(None, alias="date"),
    settings: Settings = Depends(get_settings),
    session: DbSession = Depends(get_db_session),
) -> list[ModuleOutcome]:
    """Get task and success counts per module for a client and day.

    Args:
        token: Shared secret.
        client: Client identifier.
        day: Day as YYYY-MM-DD (query parameter ``date``).
        settings: Reporter settings (injected).
        session: Database session (injected).

    Returns:
        One ModuleOutcome per module, in store order.

    Raises:
        AuthError: 401 on token mismatch.
        ValidationError: 400 on missing client or date.
    """
    report_filter = validate_outcome_request(settings, token, client, day)

    rows = repo.fetch_grouped_rows(session, build_outcome_query(report_filter))
    summaries = summarize_modules(rows)

    logger.info(f"Module outcomes for {report_filter.day}: {len(summaries)} modules")
    return summaries


@router.get("/modules/latency", response_model=list[ModuleLatency])
def get_module_latency(
    token: str | None = None,
    client: str | None = None,
    provider: str | None = None,
    day: str | None = Query(None, alias="date"),
    settings: Settings = Depends(get_settings),
    session: DbSession = Depends(get_db_session),
) -> list[ModuleLatency]:
    """Get counts and ttfb percentiles per module for a client or provider.

    Args:
        token: Shared secret.
        client: Client identifier (exclusive with provider).
        provider: Provider identifier (exclusive with client).
        day: Day as YYYY-MM-DD (query parameter ``date``).
        settings: Reporter settings (injected).
        session: Database session (injected).

    Returns:
        One ModuleLatency per module, in store order.

    Raises:
        AuthError: 401 on token mismatch.
        ValidationError: 400 on missing/conflicting subject or missing date.
    """
    report_filter = validate_latency_request(settings, token, client, provider, day)

    query = build_outcome_query(report_filter, with_latency=True)
    rows = repo.fetch_grouped_rows(session, query)
    summaries = summarize_module_latency(rows)

    logger.info(f"Module latency for {report_filter.day}: {len(summaries)} modules")
    return summaries
