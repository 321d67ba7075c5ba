"""Pytest configuration and fixtures for Q&A forum tests."""

import sys
from datetime import datetime
from pathlib import Path

import duckdb
import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.database import initialize_database
from src.ingestion import SAMPLE_QUESTIONS, QuestionLoader


@pytest.fixture
def empty_db():
    """In-memory DuckDB with the forum schema and no rows."""
    conn = duckdb.connect(":memory:")
    initialize_database(conn)
    yield conn
    conn.close()


@pytest.fixture
def test_db(empty_db):
    """In-memory DuckDB seeded with the Deadlock (id 1) and Paging (id 2) questions."""
    QuestionLoader(empty_db, show_progress=False).load_records(SAMPLE_QUESTIONS, source="test")
    return empty_db


@pytest.fixture
def extra_questions():
    """Records that exercise multi-tag and keyword matching."""
    return [
        {
            "title": "Mutex vs semaphore",
            "content": "When is a semaphore better than a MUTEX?",
            "created_at": datetime(2024, 5, 3, 9, 0),
            "is_resolved": False,
            "tags": ["concurrency", "os"],
        },
        {
            "title": "100% CPU",
            "content": "My loop uses 100% of one core_0",
            "created_at": datetime(2024, 5, 4, 9, 0),
            "is_resolved": False,
            "tags": [],
        },
    ]
