"""DuckDB schema definitions for the Q&A forum.

Tables:
- questions:     Posted questions (markdown content, resolved flag)
- tags:          Topic labels, unique by name
- question_tags: Many-to-many link between questions and tags
- answers:       Answers to questions; one may be accepted
"""

from typing import Optional
import duckdb
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.logging_config import get_logger

logger = get_logger("schema")

SCHEMA_VERSION = "1.1"  # Added answers table

# =============================================================================
# CONSTRAINT NOTES
# =============================================================================
# Relationships are documented here rather than declared as foreign keys;
# DuckDB rejects updates to rows that are still referenced by a foreign key,
# which would block flipping questions.is_resolved.
#
# Key Relationships:
# - question_tags.question_id -> questions.id
# - question_tags.tag_id      -> tags.id
# - answers.question_id       -> questions.id
# =============================================================================

CREATE_QUESTIONS = """
CREATE TABLE IF NOT EXISTS questions (
    id          INTEGER PRIMARY KEY DEFAULT nextval('questions_id_seq'),
    title       VARCHAR NOT NULL,
    content     VARCHAR NOT NULL DEFAULT '',
    created_at  TIMESTAMP NOT NULL,
    is_resolved BOOLEAN NOT NULL DEFAULT false
)
"""

CREATE_TAGS = """
CREATE TABLE IF NOT EXISTS tags (
    id   INTEGER PRIMARY KEY DEFAULT nextval('tags_id_seq'),
    name VARCHAR NOT NULL UNIQUE
)
"""

CREATE_QUESTION_TAGS = """
CREATE TABLE IF NOT EXISTS question_tags (
    question_id INTEGER NOT NULL,
    tag_id      INTEGER NOT NULL,
    PRIMARY KEY (question_id, tag_id)
)
"""

CREATE_ANSWERS = """
CREATE TABLE IF NOT EXISTS answers (
    id          INTEGER PRIMARY KEY DEFAULT nextval('answers_id_seq'),
    question_id INTEGER NOT NULL,
    content     VARCHAR NOT NULL,
    created_at  TIMESTAMP NOT NULL,
    is_accepted BOOLEAN NOT NULL DEFAULT false
)
"""

CREATE_APP_SETTINGS = """
CREATE TABLE IF NOT EXISTS app_settings (
    key   VARCHAR PRIMARY KEY,
    value VARCHAR
)
"""

SEQUENCES = [
    "questions_id_seq",
    "tags_id_seq",
    "answers_id_seq",
]

CREATE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_questions_created_at ON questions(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_question_tags_tag_id ON question_tags(tag_id)",
    "CREATE INDEX IF NOT EXISTS idx_answers_question_id ON answers(question_id)",
]

TABLES = ["questions", "tags", "question_tags", "answers", "app_settings"]


def create_all_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """
    Create all database tables.

    Args:
        conn: DuckDB connection.
    """
    for seq_name in SEQUENCES:
        conn.execute(f"CREATE SEQUENCE IF NOT EXISTS {seq_name} START 1")

    tables = [
        ("questions", CREATE_QUESTIONS),
        ("tags", CREATE_TAGS),
        ("question_tags", CREATE_QUESTION_TAGS),
        ("answers", CREATE_ANSWERS),
        ("app_settings", CREATE_APP_SETTINGS),
    ]

    for table_name, create_sql in tables:
        try:
            conn.execute(create_sql)
            logger.info(f"Created table: {table_name}")
        except duckdb.Error as e:
            logger.error(f"Error creating table {table_name}: {e}")
            raise


def create_all_indexes(conn: duckdb.DuckDBPyConnection) -> None:
    """
    Create all database indexes.

    Args:
        conn: DuckDB connection.
    """
    for index_sql in CREATE_INDEXES:
        conn.execute(index_sql)

    logger.info(f"Created {len(CREATE_INDEXES)} indexes")


def initialize_database(conn: duckdb.DuckDBPyConnection) -> None:
    """
    Initialize the database with all tables and indexes.

    Args:
        conn: DuckDB connection.
    """
    logger.info("Initializing database schema...")
    create_all_tables(conn)
    create_all_indexes(conn)

    conn.execute(
        "INSERT OR REPLACE INTO app_settings (key, value) VALUES ('schema_version', ?)",
        [SCHEMA_VERSION],
    )

    logger.info("Database initialization complete")


def get_schema_version(conn: duckdb.DuckDBPyConnection) -> Optional[str]:
    """Get the stored schema version, or None for an uninitialized database."""
    try:
        result = conn.execute(
            "SELECT value FROM app_settings WHERE key = 'schema_version'"
        ).fetchone()
    except duckdb.CatalogException:
        return None
    return result[0] if result else None


def get_table_counts(conn: duckdb.DuckDBPyConnection) -> dict:
    """
    Get row counts for all forum tables.

    Args:
        conn: DuckDB connection.

    Returns:
        Dictionary mapping table names to row counts. Missing tables count 0.
    """
    counts = {}
    for table in TABLES:
        try:
            result = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
            counts[table] = result[0] if result else 0
        except duckdb.CatalogException:
            counts[table] = 0

    return counts


def drop_all_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """
    Drop all forum tables and sequences. Use with caution.

    Args:
        conn: DuckDB connection.
    """
    for table in reversed(TABLES):
        conn.execute(f"DROP TABLE IF EXISTS {table}")
    for seq_name in SEQUENCES:
        conn.execute(f"DROP SEQUENCE IF EXISTS {seq_name}")

    logger.warning("All tables dropped")
