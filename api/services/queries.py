"""Query service for forum database operations."""

import time
from datetime import datetime
from typing import Iterable, Optional

from api.services.cache import tag_cache
from api.services.database import DatabaseService, get_db
from api.services.filters import (
    QuestionFilters,
    build_filter_clause,
    build_search_query,
    build_tags_query,
    parse_tag_names,
)
from config.logging_config import get_logger

logger = get_logger("api.queries")

TAG_CACHE_KEY = "tags:all"


class QuestionNotFound(Exception):
    """No question exists with the requested identifier."""


class AnswerNotFound(Exception):
    """No answer with the requested identifier belongs to the question."""


class QueryService:
    """Service for executing forum queries."""

    def __init__(self, db: Optional[DatabaseService] = None):
        self.db = db or get_db()

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search_questions(
        self,
        filters: QuestionFilters,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """Get questions matching every active filter, newest first.

        Args:
            filters: Keyword, tag and resolved-state filters.
            limit: Optional maximum number of questions.

        Returns:
            List of question dictionaries with their tags.

        Raises:
            StoreFailure: The query could not be executed. No partial
                results are returned.
        """
        started = time.perf_counter()

        where_clause, params = build_filter_clause(filters)
        rows = self.db.fetch_all(build_search_query(where_clause, limit=limit), params)
        questions = [_question_from_row(row) for row in rows]
        self._attach_tags(questions)

        logger.info(
            f"search keyword={filters.keyword!r} tags={sorted(filters.tag_names)} "
            f"resolved={filters.is_resolved} hits={len(questions)} "
            f"{time.perf_counter() - started:.3f}s"
        )
        return questions

    def _attach_tags(self, questions: list[dict]) -> None:
        """Populate the tags list of each question with one batched query."""
        if not questions:
            return

        by_id = {q["id"]: q for q in questions}
        rows = self.db.fetch_all(build_tags_query(len(by_id)), list(by_id))
        for question_id, tag_id, tag_name in rows:
            by_id[question_id]["tags"].append({"id": tag_id, "name": tag_name})

    # -------------------------------------------------------------------------
    # Detail
    # -------------------------------------------------------------------------

    def get_question(self, question_id: int) -> dict:
        """Get a single question with its tags and answers.

        Raises:
            QuestionNotFound: No question has this id.
        """
        row = self.db.fetch_one(
            """
            SELECT id, title, content, created_at, is_resolved
            FROM questions
            WHERE id = ?
            """,
            [question_id],
        )
        if not row:
            raise QuestionNotFound(question_id)

        question = _question_from_row(row)
        self._attach_tags([question])

        answers = self.db.fetch_all(
            """
            SELECT id, question_id, content, created_at, is_accepted
            FROM answers
            WHERE question_id = ?
            ORDER BY is_accepted DESC, created_at ASC, id ASC
            """,
            [question_id],
        )
        question["answers"] = [_answer_from_row(a) for a in answers]
        return question

    def _require_question(self, question_id: int) -> None:
        row = self.db.fetch_one("SELECT 1 FROM questions WHERE id = ?", [question_id])
        if not row:
            raise QuestionNotFound(question_id)

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def list_tags(self) -> list[dict]:
        """Get all tags ordered by name."""
        cached = tag_cache.get(TAG_CACHE_KEY)
        if cached is not None:
            return cached

        rows = self.db.fetch_all("SELECT id, name FROM tags ORDER BY name")
        tags = [{"id": r[0], "name": r[1]} for r in rows]
        tag_cache.set(TAG_CACHE_KEY, tags)
        return tags

    # -------------------------------------------------------------------------
    # Posting
    # -------------------------------------------------------------------------

    def create_question(
        self,
        title: str,
        content: str = "",
        tag_names: Optional[Iterable[str]] = None,
    ) -> dict:
        """Insert a question and link it to the named tags.

        Tags that do not exist yet are created.

        Returns:
            The created question with tags and an empty answer list.
        """
        names = sorted(parse_tag_names(tag_names))
        created_tag = False

        with self.db.transaction():
            question_id = self.db.fetch_one(
                "INSERT INTO questions (title, content, created_at) VALUES (?, ?, ?) RETURNING id",
                [title, content, datetime.now()],
            )[0]

            for name in names:
                tag = self.db.fetch_one("SELECT id FROM tags WHERE name = ?", [name])
                if tag is None:
                    tag = self.db.fetch_one(
                        "INSERT INTO tags (name) VALUES (?) RETURNING id", [name]
                    )
                    created_tag = True
                self.db.execute(
                    "INSERT INTO question_tags (question_id, tag_id) VALUES (?, ?)",
                    [question_id, tag[0]],
                )

        if created_tag:
            tag_cache.invalidate("tags")

        logger.info(f"Created question {question_id} with tags {names}")
        return self.get_question(question_id)

    def add_answer(self, question_id: int, content: str) -> dict:
        """Add an answer to a question.

        Raises:
            QuestionNotFound: No question has this id.
        """
        self._require_question(question_id)

        row = self.db.fetch_one(
            """
            INSERT INTO answers (question_id, content, created_at)
            VALUES (?, ?, ?)
            RETURNING id, question_id, content, created_at, is_accepted
            """,
            [question_id, content, datetime.now()],
        )
        logger.info(f"Added answer {row[0]} to question {question_id}")
        return _answer_from_row(row)

    def accept_answer(self, question_id: int, answer_id: int) -> dict:
        """Mark an answer accepted and its question resolved.

        Any previously accepted answer of the question is un-accepted.

        Raises:
            QuestionNotFound: No question has this id.
            AnswerNotFound: The answer does not belong to the question.
        """
        self._require_question(question_id)

        with self.db.transaction():
            answer = self.db.fetch_one(
                "SELECT id FROM answers WHERE id = ? AND question_id = ?",
                [answer_id, question_id],
            )
            if not answer:
                raise AnswerNotFound(answer_id)

            self.db.execute(
                "UPDATE answers SET is_accepted = (id = ?) WHERE question_id = ?",
                [answer_id, question_id],
            )
            self.db.execute(
                "UPDATE questions SET is_resolved = true WHERE id = ?",
                [question_id],
            )

        logger.info(f"Accepted answer {answer_id} for question {question_id}")
        return self.get_question(question_id)


def _question_from_row(row) -> dict:
    return {
        "id": row[0],
        "title": row[1],
        "content": row[2],
        "created_at": row[3],
        "is_resolved": row[4],
        "tags": [],
    }


def _answer_from_row(row) -> dict:
    return {
        "id": row[0],
        "question_id": row[1],
        "content": row[2],
        "created_at": row[3],
        "is_accepted": row[4],
    }
