"""Tests for the question loader."""

from datetime import datetime

import pytest


class TestSplitTags:
    """Tests for tag cell parsing."""

    def test_comma_separated(self):
        from src.ingestion import split_tags

        assert split_tags(" os, memory ,,os") == ["memory", "os"]

    def test_missing_values(self):
        from src.ingestion import split_tags

        assert split_tags(None) == []
        assert split_tags(float("nan")) == []

    def test_list_value(self):
        from src.ingestion import split_tags

        assert split_tags(["b", "a "]) == ["a", "b"]


class TestQuestionLoader:
    """Tests for QuestionLoader."""

    def test_load_sample_data(self, empty_db):
        """Test the sample questions load with their tags."""
        from src.ingestion import load_sample_data

        result = load_sample_data(empty_db)

        assert result.records_loaded == 2
        assert result.tags_created == 2

        rows = empty_db.execute("""
            SELECT q.id, q.title, q.is_resolved, t.name
            FROM questions q
            JOIN question_tags qt ON qt.question_id = q.id
            JOIN tags t ON t.id = qt.tag_id
            ORDER BY q.id
        """).fetchall()
        assert rows == [
            (1, "Deadlock", False, "concurrency"),
            (2, "Paging", True, "memory"),
        ]

    def test_existing_tags_reused(self, test_db, extra_questions):
        """Test a known tag name links to the existing tag row."""
        from src.ingestion import QuestionLoader

        result = QuestionLoader(test_db, show_progress=False).load_records(extra_questions)

        assert result.records_loaded == 2
        assert result.tags_created == 1  # only "os" is new
        assert test_db.execute("SELECT COUNT(*) FROM tags").fetchone()[0] == 3

    def test_missing_title_skipped(self, empty_db):
        """Test records without a title are skipped and reported."""
        from src.ingestion import QuestionLoader

        result = QuestionLoader(empty_db, show_progress=False).load_records([
            {"title": "  ", "content": "no title"},
            {"title": "Kept", "created_at": datetime(2024, 1, 1)},
        ])

        assert result.records_processed == 2
        assert result.records_loaded == 1
        assert result.records_skipped == 1
        assert len(result.error_messages) == 1

    def test_bad_record_rolls_back_batch(self, empty_db):
        """Test a failing record rolls back its batch and later loads still work."""
        from src.ingestion import QuestionLoader

        loader = QuestionLoader(empty_db, show_progress=False)
        with pytest.raises(ValueError):
            loader.load_records([
                {"title": "Kept?", "created_at": datetime(2024, 1, 1), "tags": ["os"]},
                {"title": "Broken", "created_at": "not a date"},
            ])

        assert empty_db.execute("SELECT COUNT(*) FROM questions").fetchone()[0] == 0
        assert empty_db.execute("SELECT COUNT(*) FROM tags").fetchone()[0] == 0

        result = loader.load_records([
            {"title": "Retry", "created_at": datetime(2024, 1, 2), "tags": ["os"]},
        ])
        assert result.records_loaded == 1
        assert result.tags_created == 1

    def test_load_csv(self, empty_db, tmp_path):
        """Test CSV import with optional columns."""
        from src.ingestion import QuestionLoader

        csv_file = tmp_path / "questions.csv"
        csv_file.write_text(
            "title,content,created_at,is_resolved,tags\n"
            'Scheduling,Round robin?,2024-03-01 10:00,true,"os, scheduling"\n'
            "Heap,,2024-03-02 11:30,false,\n",
            encoding="utf-8",
        )

        result = QuestionLoader(empty_db, show_progress=False).load_csv(csv_file)

        assert result.records_loaded == 2
        rows = empty_db.execute(
            "SELECT title, content, created_at, is_resolved FROM questions ORDER BY id"
        ).fetchall()
        assert rows == [
            ("Scheduling", "Round robin?", datetime(2024, 3, 1, 10, 0), True),
            ("Heap", "", datetime(2024, 3, 2, 11, 30), False),
        ]
        tags = [r[0] for r in empty_db.execute("SELECT name FROM tags ORDER BY name").fetchall()]
        assert tags == ["os", "scheduling"]

    def test_load_csv_requires_title(self, empty_db, tmp_path):
        """Test a CSV without a title column is rejected."""
        from src.ingestion import QuestionLoader

        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("content\nbody\n", encoding="utf-8")

        with pytest.raises(ValueError):
            QuestionLoader(empty_db, show_progress=False).load_csv(csv_file)
