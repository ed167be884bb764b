"""Shared pytest fixtures for reporter tests."""

from datetime import datetime, timezone
from itertools import count

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from outcome_reporter.config import Settings
from outcome_reporter.db.functions import install_sqlite_functions
from outcome_reporter.db.schema import Base, TaskResult

TEST_TOKEN = "s3cret"
TEST_DAY = "2024-05-01"

_task_ids = count(1)


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine with the percentile aggregate."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    install_sqlite_functions(engine)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def settings():
    """Settings pointing at an unused URL; tests override the session."""
    return Settings(database_url="sqlite://", token=TEST_TOKEN)


@pytest.fixture
def client(engine, settings):
    """TestClient wired to the in-memory engine."""
    from fastapi.testclient import TestClient

    from outcome_reporter.api.app import create_app, get_db_session

    app = create_app(settings)

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    return TestClient(app)


def make_result(
    module: str,
    success: bool,
    *,
    client: str | None = "f01234",
    provider: str | None = "f0100",
    requester: str = "filplus",
    created_at: datetime | None = None,
    ttfb: float | None = None,
) -> TaskResult:
    """Build a TaskResult inside TEST_DAY unless created_at is given."""
    if created_at is None:
        created_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return TaskResult(
        task_id=f"task-{next(_task_ids)}",
        requester=requester,
        module=module,
        client=client,
        provider=provider,
        created_at=created_at,
        success=success,
        ttfb=ttfb,
    )


def add_results(engine, results: list[TaskResult]) -> None:
    """Insert task results and commit."""
    with Session(engine) as db_session:
        db_session.add_all(results)
        db_session.commit()
