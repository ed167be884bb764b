"""Module outcome summary aggregation.

Folds grouped (module, success) rows into one summary per module.
Pure functions - database operations go through repo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from outcome_reporter.models.domain import GroupedRow
from outcome_reporter.models.types import ModuleLatency, ModuleOutcome


@dataclass
class ModuleTally:
    """Running totals for one module while folding."""

    total: int = 0
    success: int = 0
    ttfb_p50: float | None = None
    ttfb_p95: float | None = None


def fold_rows(rows: Iterable[GroupedRow]) -> dict[str, ModuleTally]:
    """Fold grouped rows into per-module tallies.

    Modules keep first-seen order. A successful row's percentiles
    replace whatever the module held; failed rows never touch them.

    Args:
        rows: Grouped rows in store order.

    Returns:
        Mapping of module name to tally, in first-seen order.
    """
    tallies: dict[str, ModuleTally] = {}

    for row in rows:
        if row.module not in tallies:
            tallies[row.module] = ModuleTally()
        tally = tallies[row.module]

        tally.total += row.count
        if row.success:
            tally.success += row.count
            tally.ttfb_p50 = row.ttfb_p50
            tally.ttfb_p95 = row.ttfb_p95

    return tallies


def summarize_modules(rows: Iterable[GroupedRow]) -> list[ModuleOutcome]:
    """Summarize success counts per module.

    Args:
        rows: Grouped rows in store order.

    Returns:
        One ModuleOutcome per module, first-seen order.
    """
    return [
        ModuleOutcome(module=module, total=tally.total, success=tally.success)
        for module, tally in fold_rows(rows).items()
    ]


def summarize_module_latency(rows: Iterable[GroupedRow]) -> list[ModuleLatency]:
    """Summarize success counts and ttfb percentiles per module.

    Args:
        rows: Grouped rows (with percentiles) in store order.

    Returns:
        One ModuleLatency per module, first-seen order.
    """
    return [
        ModuleLatency(
            module=module,
            total=tally.total,
            success=tally.success,
            ttfb_p50=tally.ttfb_p50,
            ttfb_p95=tally.ttfb_p95,
        )
        for module, tally in fold_rows(rows).items()
    ]
