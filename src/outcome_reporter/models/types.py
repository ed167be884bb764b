"""Pydantic models for the reporter API responses."""

from pydantic import BaseModel


class ModuleOutcome(BaseModel):
    """Task counts for one module."""

    module: str
    total: int
    success: int


class ModuleLatency(ModuleOutcome):
    """Task counts plus ttfb percentiles of successful tasks.

    Percentiles are null when the module had no successful task.
    """

    ttfb_p50: float | None
    ttfb_p95: float | None
