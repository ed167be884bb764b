"""Dialect-aware percentile aggregate.

``approx_percentile(column, q)`` estimates the q-th quantile of a column
within a group and always returns a value observed in that group.

- PostgreSQL: ``percentile_disc(q) WITHIN GROUP (ORDER BY column)``
- other dialects: ``approx_percentile(column, q)``, registered on SQLite
  connections by :func:`install_sqlite_functions`
"""

from __future__ import annotations

import math

from sqlalchemy import Engine, Float, event, literal
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class approx_percentile(FunctionElement):
    """Percentile of a column within the current group."""

    type = Float()
    inherit_cache = True

    def __init__(self, column, fraction: float):
        if not 0.0 <= fraction <= 1.0:
            raise ValueError(f"Percentile fraction must be within [0, 1], got {fraction}")
        super().__init__(column, literal(fraction, Float()))


@compiles(approx_percentile)
def _compile_default(element, compiler, **kw):
    return "approx_percentile(%s)" % compiler.process(element.clauses, **kw)


@compiles(approx_percentile, "postgresql")
def _compile_postgresql(element, compiler, **kw):
    column, fraction = list(element.clauses)
    return "percentile_disc(%s) WITHIN GROUP (ORDER BY %s)" % (
        compiler.process(fraction, **kw),
        compiler.process(column, **kw),
    )


def nearest_rank(values: list[float], fraction: float) -> float | None:
    """Nearest-rank percentile of values.

    Args:
        values: Observed values (any order).
        fraction: Quantile in [0, 1].

    Returns:
        Smallest value whose cumulative share reaches fraction,
        or None for no values.
    """
    if not values:
        return None
    ordered = sorted(values)
    rank = max(1, math.ceil(fraction * len(ordered)))
    return ordered[rank - 1]


class _PercentileAggregate:
    """sqlite3 aggregate backing approx_percentile."""

    def __init__(self) -> None:
        self.values: list[float] = []
        self.fraction = 0.5

    def step(self, value, fraction) -> None:
        self.fraction = fraction
        # NULL ttfb values are ignored like any SQL aggregate
        if value is not None:
            self.values.append(float(value))

    def finalize(self) -> float | None:
        return nearest_rank(self.values, self.fraction)


def install_sqlite_functions(engine: Engine) -> None:
    """Register approx_percentile on every new SQLite connection.

    No-op for other dialects.

    Args:
        engine: Engine to instrument.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _register(dbapi_connection, connection_record):
        dbapi_connection.create_aggregate("approx_percentile", 2, _PercentileAggregate)
