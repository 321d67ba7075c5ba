"""Load questions into DuckDB from sample data or CSV exports."""

import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List

import duckdb
import pandas as pd
from tqdm import tqdm

from config.constants import LIST_SEPARATOR
from config.logging_config import get_logger

logger = get_logger("loader")

# Columns expected in an import CSV. Only title is required.
CSV_COLUMNS = ["title", "content", "created_at", "is_resolved", "tags"]

# Sample data for a fresh database; Paging is newer than Deadlock
SAMPLE_QUESTIONS: List[Dict[str, Any]] = [
    {
        "title": "Deadlock",
        "content": "Two threads each hold one lock and wait for the other. "
                   "How do I find where the **deadlock** happens?",
        "created_at": datetime(2024, 5, 1, 9, 0),
        "is_resolved": False,
        "tags": ["concurrency"],
    },
    {
        "title": "Paging",
        "content": "What is the difference between paging and segmentation "
                   "in an OS memory manager?",
        "created_at": datetime(2024, 5, 2, 9, 0),
        "is_resolved": True,
        "tags": ["memory"],
    },
]


@dataclass
class LoadResult:
    """Result of a load operation."""

    source: str
    records_processed: int = 0
    records_loaded: int = 0
    records_skipped: int = 0
    tags_created: int = 0
    duration_seconds: float = 0
    error_messages: List[str] = field(default_factory=list)


def split_tags(value: Any) -> List[str]:
    """Split a comma-separated tag cell into distinct, stripped names."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    if isinstance(value, str):
        names = value.split(LIST_SEPARATOR)
    else:
        names = list(value)
    return sorted({str(name).strip() for name in names if str(name).strip()})


def _text(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    if value is None or pd.isna(value):
        return False
    return bool(value)


class QuestionLoader:
    """Insert questions, their tags and tag links in one transaction."""

    def __init__(self, conn: duckdb.DuckDBPyConnection, show_progress: bool = True):
        self.conn = conn
        self.show_progress = show_progress
        self._tag_ids: Dict[str, int] = {}

    def _tag_id(self, name: str, result: LoadResult) -> int:
        if name in self._tag_ids:
            return self._tag_ids[name]

        row = self.conn.execute("SELECT id FROM tags WHERE name = ?", [name]).fetchone()
        if row is None:
            row = self.conn.execute(
                "INSERT INTO tags (name) VALUES (?) RETURNING id", [name]
            ).fetchone()
            result.tags_created += 1

        self._tag_ids[name] = row[0]
        return row[0]

    def load_records(self, records: Iterable[Dict[str, Any]], source: str = "records") -> LoadResult:
        """
        Load question records.

        Each record needs a title; content, created_at, is_resolved and tags
        are optional. Records without a title are skipped. The whole batch is
        rolled back if an insert fails.

        Args:
            records: Question dictionaries.
            source: Label for logs and the result.

        Returns:
            LoadResult with counts.
        """
        result = LoadResult(source=source)
        start = time.time()
        records = list(records)

        self.conn.execute("BEGIN TRANSACTION")
        try:
            for record in tqdm(records, desc=f"Loading {source}", disable=not self.show_progress):
                result.records_processed += 1

                title = _text(record.get("title")).strip()
                if not title:
                    result.records_skipped += 1
                    result.error_messages.append(f"Row {result.records_processed}: missing title")
                    continue

                created_at = record.get("created_at")
                if created_at is None or pd.isna(created_at):
                    created_at = datetime.now()

                question_id = self.conn.execute(
                    """
                    INSERT INTO questions (title, content, created_at, is_resolved)
                    VALUES (?, ?, ?, ?)
                    RETURNING id
                    """,
                    [
                        title,
                        _text(record.get("content")),
                        pd.Timestamp(created_at).to_pydatetime(),
                        _parse_bool(record.get("is_resolved")),
                    ],
                ).fetchone()[0]

                for name in split_tags(record.get("tags")):
                    self.conn.execute(
                        "INSERT INTO question_tags (question_id, tag_id) VALUES (?, ?)",
                        [question_id, self._tag_id(name, result)],
                    )
                result.records_loaded += 1

            self.conn.execute("COMMIT")
        except BaseException:
            self.conn.execute("ROLLBACK")
            self._tag_ids.clear()
            raise

        result.duration_seconds = time.time() - start
        logger.info(
            f"Loaded {result.records_loaded}/{result.records_processed} questions "
            f"from {source} ({result.tags_created} new tags, {result.duration_seconds:.2f}s)"
        )
        return result

    def load_csv(self, filepath: Path) -> LoadResult:
        """
        Load questions from a CSV file.

        Args:
            filepath: CSV with a title column and any of the optional columns.

        Returns:
            LoadResult with counts.

        Raises:
            ValueError: The file has no title column.
        """
        df = pd.read_csv(filepath, dtype={"title": str, "content": str, "tags": str})
        df.columns = [c.strip().lower() for c in df.columns]

        if "title" not in df.columns:
            raise ValueError(f"{filepath.name} has no 'title' column")

        unknown = set(df.columns) - set(CSV_COLUMNS)
        if unknown:
            logger.warning(f"Ignoring unknown columns: {sorted(unknown)}")

        if "created_at" in df.columns:
            df["created_at"] = pd.to_datetime(df["created_at"], errors="coerce")

        records = df[[c for c in CSV_COLUMNS if c in df.columns]].to_dict("records")
        return self.load_records(records, source=filepath.name)


def load_sample_data(conn: duckdb.DuckDBPyConnection) -> LoadResult:
    """Load the sample questions into a database with the schema created."""
    return QuestionLoader(conn, show_progress=False).load_records(SAMPLE_QUESTIONS, source="sample")
