"""Repository for task result store reads.

Executes aggregation queries and returns domain rows, keeping the
folding logic free of SQLAlchemy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import Select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from outcome_reporter.errors import UpstreamError
from outcome_reporter.models.domain import GroupedRow

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession", "fetch_grouped_rows"]

logger = logging.getLogger(__name__)


def fetch_grouped_rows(session: DbSession, query: Select) -> list[GroupedRow]:
    """Run a grouped aggregation and convert its rows.

    Args:
        session: Database session.
        query: SELECT built by build_outcome_query.

    Returns:
        GroupedRows in the order the store returned them.

    Raises:
        UpstreamError: If the store is unreachable or rejects the query.
    """
    try:
        result = session.execute(query)
        rows = result.mappings().all()
    except SQLAlchemyError as e:
        logger.exception("Task result query failed")
        raise UpstreamError(f"Task result query failed: {e}") from e

    return [
        GroupedRow(
            module=row["module"],
            success=bool(row["success"]),
            count=int(row["count"]),
            ttfb_p50=row.get("ttfb_p50"),
            ttfb_p95=row.get("ttfb_p95"),
        )
        for row in rows
    ]
