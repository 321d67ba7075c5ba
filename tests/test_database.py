"""Tests for database module."""

import pytest
import duckdb


class TestDatabaseConnection:
    """Tests for database connection functions."""

    def test_get_memory_connection(self):
        """Test in-memory connection."""
        from src.database import get_memory_connection

        conn = get_memory_connection()
        assert conn is not None

        result = conn.execute("SELECT 1").fetchone()
        assert result[0] == 1

        conn.close()

    def test_get_connection_creates_file(self, tmp_path):
        """Test file-based connection creates missing parent directories."""
        from src.database import get_connection

        db_path = tmp_path / "nested" / "forum.duckdb"

        with get_connection(db_path) as conn:
            conn.execute("CREATE TABLE test (id INTEGER)")
            conn.execute("INSERT INTO test VALUES (1)")

        assert db_path.exists()

    def test_database_connection_context_manager(self, tmp_path):
        """Test DatabaseConnection closes on exit."""
        from src.database import DatabaseConnection

        db = DatabaseConnection(tmp_path / "forum.duckdb")
        with db:
            assert db.execute("SELECT 42").fetchone()[0] == 42

        assert db._connection is None


class TestSchema:
    """Tests for database schema functions."""

    def test_create_all_tables(self):
        """Test table creation."""
        from src.database import create_all_tables, get_memory_connection

        conn = get_memory_connection()
        create_all_tables(conn)

        tables = conn.execute("""
            SELECT table_name FROM information_schema.tables
            WHERE table_schema = 'main'
        """).fetchall()

        table_names = {t[0] for t in tables}
        assert {"questions", "tags", "question_tags", "answers", "app_settings"} <= table_names

        conn.close()

    def test_initialize_database_is_idempotent(self, empty_db):
        """Test running initialization twice keeps the schema."""
        from src.database import initialize_database, get_schema_version
        from src.database.schema import SCHEMA_VERSION

        initialize_database(empty_db)

        assert get_schema_version(empty_db) == SCHEMA_VERSION

    def test_schema_version_uninitialized(self):
        """Test schema version of an empty database."""
        from src.database import get_schema_version, get_memory_connection

        conn = get_memory_connection()
        assert get_schema_version(conn) is None
        conn.close()

    def test_question_ids_are_sequential(self, empty_db):
        """Test question ids come from the sequence."""
        ids = [
            empty_db.execute(
                "INSERT INTO questions (title, created_at) VALUES (?, now()) RETURNING id",
                [title],
            ).fetchone()[0]
            for title in ("first", "second")
        ]

        assert ids == [1, 2]

    def test_tag_names_unique(self, test_db):
        """Test duplicate tag names are rejected."""
        with pytest.raises(duckdb.ConstraintException):
            test_db.execute("INSERT INTO tags (name) VALUES ('concurrency')")

    def test_get_table_counts(self, test_db):
        """Test row counts per table."""
        from src.database import get_table_counts

        counts = get_table_counts(test_db)

        assert counts["questions"] == 2
        assert counts["tags"] == 2
        assert counts["question_tags"] == 2
        assert counts["answers"] == 0

    def test_get_table_counts_missing_tables(self):
        """Test counts on a database without the schema."""
        from src.database import get_table_counts, get_memory_connection

        conn = get_memory_connection()
        counts = get_table_counts(conn)

        assert set(counts.values()) == {0}
        conn.close()

    def test_drop_all_tables(self, test_db):
        """Test dropping the schema."""
        from src.database import drop_all_tables, get_table_counts

        drop_all_tables(test_db)

        assert set(get_table_counts(test_db).values()) == {0}
