"""Pytest fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.services.cache import clear_all_caches
from api.services.database import DatabaseService, StoreFailure
from src.database import initialize_database
from src.ingestion import SAMPLE_QUESTIONS, QuestionLoader


class BrokenDatabaseService(DatabaseService):
    """Database service whose every query fails."""

    def execute(self, query, params=None):
        raise StoreFailure("Database query failed")


@pytest.fixture
def db_service(tmp_path, monkeypatch):
    """File-backed database seeded with Deadlock (id 1) and Paging (id 2)."""
    service = DatabaseService(tmp_path / "forum.duckdb")
    conn = service.connect()
    initialize_database(conn)
    QuestionLoader(conn, show_progress=False).load_records(SAMPLE_QUESTIONS, source="test")

    monkeypatch.setattr("api.services.database._db_service", service)
    clear_all_caches()
    yield service
    clear_all_caches()
    service.close()


@pytest.fixture
def client(db_service):
    """Create a TestClient for the FastAPI application."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def broken_client(tmp_path, monkeypatch):
    """TestClient whose data store fails every query.

    The lifespan is not entered, so startup does not touch the store.
    """
    monkeypatch.setattr(
        "api.services.database._db_service",
        BrokenDatabaseService(tmp_path / "broken.duckdb"),
    )
    clear_all_caches()
    yield TestClient(app, raise_server_exceptions=False)
    clear_all_caches()


@pytest.fixture
def add_questions(db_service):
    """Insert extra question records into the API database."""
    def _add(records):
        QuestionLoader(db_service.connect(), show_progress=False).load_records(records, source="test")
    return _add
