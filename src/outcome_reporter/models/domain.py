"""Domain models for the reporter.

Pure Python dataclasses, independent of SQLAlchemy and FastAPI.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Union


# ============================================================================
# Report filter
# ============================================================================


@dataclass(frozen=True)
class ClientSubject:
    """Report on tasks run for a client."""

    client: str


@dataclass(frozen=True)
class ProviderSubject:
    """Report on tasks run against a provider."""

    provider: str


Subject = Union[ClientSubject, ProviderSubject]


@dataclass(frozen=True)
class ReportFilter:
    """Validated filter for one report.

    The window is the UTC day [day 00:00, day+1 00:00).
    """

    requester: str
    subject: Subject
    day: date

    @property
    def window_start(self) -> datetime:
        return datetime.combine(self.day, time.min, tzinfo=timezone.utc)

    @property
    def window_end(self) -> datetime:
        return self.window_start + timedelta(days=1)


# ============================================================================
# Store results
# ============================================================================


@dataclass(frozen=True)
class GroupedRow:
    """Store aggregate for one (module, success) pair."""

    module: str
    success: bool
    count: int
    ttfb_p50: float | None = None
    ttfb_p95: float | None = None
