"""
Test configuration and fixtures for fridgemate.

Implements the transaction rollback pattern:
- Session-scoped engine (in-memory SQLite unless TEST_DATABASE_URL is set)
- Function-scoped session joined to an outer transaction that is rolled back
- TestClient with database and external-service dependency overrides
"""

import os
import tempfile
from typing import Generator

# Must be set before fridgemate.config is imported
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="fridgemate-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fridgemate.api.deps import get_file_service, get_image_service, get_recipe_ai
from fridgemate.database import Base, get_db
from fridgemate.main import app
from fridgemate.services.file_service import FileService
from tests.fixtures.mocks import FakeImageService, FakeRecipeAI


# =============================================================================
# Database Fixtures
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    Priority:
    1. TEST_DATABASE_URL environment variable
    2. In-memory SQLite shared across threads
    """
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


def _create_test_engine(database_url: str):
    if not database_url.startswith("sqlite"):
        return create_engine(database_url)

    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite does not emit BEGIN itself, which breaks SAVEPOINT handling
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


@pytest.fixture(scope="session")
def test_engine():
    """
    Create test database engine once per session.

    Tables are created at the start and dropped at the end.
    """
    engine = _create_test_engine(get_test_database_url())

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    """
    Provide a database session that rolls back after each test.

    Service-level commit() calls release a SAVEPOINT instead of committing,
    so nothing persists between tests.
    """
    connection = test_engine.connect()
    transaction = connection.begin()

    TestingSessionLocal = sessionmaker(
        bind=connection, join_transaction_mode="create_savepoint"
    )
    session = TestingSessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


# =============================================================================
# External Service Fakes
# =============================================================================


@pytest.fixture
def fake_recipe_ai() -> FakeRecipeAI:
    return FakeRecipeAI()


@pytest.fixture
def fake_image_service() -> FakeImageService:
    return FakeImageService()


@pytest.fixture
def file_service(tmp_path) -> FileService:
    return FileService(upload_dir=str(tmp_path / "recipes"))


# =============================================================================
# TestClient Fixtures
# =============================================================================


@pytest.fixture
def client(
    db: Session,
    fake_recipe_ai: FakeRecipeAI,
    fake_image_service: FakeImageService,
    file_service: FileService,
) -> Generator[TestClient, None, None]:
    """
    TestClient with the database session and external services injected.
    """

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_recipe_ai] = lambda: fake_recipe_ai
    app.dependency_overrides[get_image_service] = lambda: fake_image_service
    app.dependency_overrides[get_file_service] = lambda: file_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
