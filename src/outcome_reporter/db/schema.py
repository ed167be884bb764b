"""Database schema for the task result store.

The store is written by the task execution system; the reporter only
reads it. The table is declared here so tests and local development can
create it.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class TaskResult(Base):
    """One completed task execution."""

    __tablename__ = "task_results"

    task_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    requester: Mapped[str] = mapped_column(String(64), nullable=False)
    module: Mapped[str] = mapped_column(String(64), nullable=False)
    client: Mapped[str | None] = mapped_column(String(128), nullable=True)
    provider: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    ttfb: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (Index("ix_task_results_requester_created", "requester", "created_at"),)
