"""Aggregation query construction.

Builds the grouped count (and percentile) SELECT for one ReportFilter.
"""

from __future__ import annotations

from sqlalchemy import Select, func, select

from outcome_reporter.db.functions import approx_percentile
from outcome_reporter.db.schema import TaskResult
from outcome_reporter.models.domain import ClientSubject, ReportFilter


def build_outcome_query(report_filter: ReportFilter, with_latency: bool = False) -> Select:
    """Build the grouped aggregation over task results.

    Rows are grouped by (module, success). No ORDER BY: callers keep
    the order the store returns.

    Args:
        report_filter: Validated filter.
        with_latency: Also compute ttfb p50 and p95 per group.

    Returns:
        SELECT yielding module, success, count and, with latency,
        ttfb_p50 and ttfb_p95.
    """
    subject = report_filter.subject
    if isinstance(subject, ClientSubject):
        subject_clause = TaskResult.client == subject.client
    else:
        subject_clause = TaskResult.provider == subject.provider

    columns = [
        TaskResult.module,
        TaskResult.success,
        func.count().label("count"),
    ]
    if with_latency:
        columns.append(approx_percentile(TaskResult.ttfb, 0.5).label("ttfb_p50"))
        columns.append(approx_percentile(TaskResult.ttfb, 0.95).label("ttfb_p95"))

    return (
        select(*columns)
        .where(
            TaskResult.requester == report_filter.requester,
            subject_clause,
            TaskResult.created_at >= report_filter.window_start,
            TaskResult.created_at < report_filter.window_end,
        )
        .group_by(TaskResult.module, TaskResult.success)
    )
