"""Tests for question filter building and the query service."""

import pytest

from api.services.filters import (
    QuestionFilters,
    build_filter_clause,
    build_search_query,
    parse_tag_names,
)


class TestParseTagNames:
    """Tests for tag parameter parsing."""

    def test_single_value(self):
        assert parse_tag_names("memory") == frozenset({"memory"})

    def test_comma_separated(self):
        assert parse_tag_names(" memory, concurrency ,") == frozenset({"memory", "concurrency"})

    def test_repeated_values(self):
        assert parse_tag_names(["memory", "os,memory"]) == frozenset({"memory", "os"})

    def test_empty(self):
        assert parse_tag_names(None) == frozenset()
        assert parse_tag_names([""]) == frozenset()


class TestQuestionFilters:
    """Tests for QuestionFilters."""

    def test_from_params_defaults(self):
        filters = QuestionFilters.from_params()
        assert filters.is_empty
        assert filters.is_resolved is None

    def test_from_params(self):
        filters = QuestionFilters.from_params(tag=["os"], is_resolved="false", keyword="  Paging ")
        assert filters.tag_names == frozenset({"os"})
        assert filters.is_resolved is False
        assert filters.keyword == "Paging"
        assert not filters.is_empty

    def test_whitespace_keyword_is_empty(self):
        assert QuestionFilters.from_params(keyword="   ").is_empty


class TestBuildFilterClause:
    """Tests for WHERE clause generation."""

    def test_no_filters(self):
        where, params = build_filter_clause(QuestionFilters())
        assert where == "1=1"
        assert params == []

    def test_keyword_lowercased_in_sql_for_title_and_content(self):
        where, params = build_filter_clause(QuestionFilters(keyword="OS"))
        assert "contains(lower(q.title), lower(?))" in where
        assert "contains(lower(q.content), lower(?))" in where
        assert params == ["OS", "OS"]

    def test_tags_sorted_in_params(self):
        where, params = build_filter_clause(
            QuestionFilters(tag_names=frozenset({"os", "memory"}))
        )
        assert "EXISTS" in where
        assert params == ["memory", "os"]

    def test_combined_order(self):
        where, params = build_filter_clause(
            QuestionFilters(keyword="x", tag_names=frozenset({"a"}), is_resolved=True)
        )
        assert where.count(" AND ") >= 2
        assert params == ["a", True, "x", "x"]

    def test_non_ascii_keyword_matches_identical_title(self, empty_db):
        from src.ingestion import QuestionLoader

        QuestionLoader(empty_db, show_progress=False).load_records([
            {"title": "İstanbul campus wifi", "content": "Σίσυφος"},
        ])

        for keyword in ("İstanbul", "İSTANBUL", "campus WIFI", "σίσυφος"):
            where, params = build_filter_clause(QuestionFilters(keyword=keyword))
            rows = empty_db.execute(build_search_query(where), params).fetchall()
            assert [r[1] for r in rows] == ["İstanbul campus wifi"], keyword

    def test_custom_alias(self):
        where, _ = build_filter_clause(QuestionFilters(is_resolved=False), table_alias="qq")
        assert where == "qq.is_resolved = ?"

    def test_search_query_orders_newest_first(self):
        sql = build_search_query("1=1", limit=5)
        assert "ORDER BY q.created_at DESC, q.id DESC" in sql
        assert "LIMIT 5" in sql


class TestQueryService:
    """Tests for QueryService against an in-process database."""

    def test_search_with_limit(self, db_service):
        from api.services.queries import QueryService

        questions = QueryService(db_service).search_questions(QuestionFilters(), limit=1)
        assert [q["title"] for q in questions] == ["Paging"]

    def test_get_question_not_found(self, db_service):
        from api.services.queries import QueryService, QuestionNotFound

        with pytest.raises(QuestionNotFound):
            QueryService(db_service).get_question(42)

    def test_failed_transaction_rolls_back(self, db_service):
        from api.services.queries import QueryService, AnswerNotFound

        service = QueryService(db_service)
        with pytest.raises(AnswerNotFound):
            service.accept_answer(1, 999)

        assert service.get_question(1)["is_resolved"] is False


class TestTTLCache:
    """Tests for the TTL cache."""

    def test_set_get_invalidate(self):
        from api.services.cache import TTLCache

        cache = TTLCache(maxsize=2, ttl=60)
        cache.set("tags:all", [1])
        assert cache.get("tags:all") == [1]

        assert cache.invalidate("tags") == 1
        assert cache.get("tags:all") is None

    def test_expired_entry(self):
        from api.services.cache import TTLCache

        cache = TTLCache(ttl=-1)
        cache.set("k", "v")
        assert cache.get("k") is None

    def test_maxsize_evicts_oldest(self):
        from api.services.cache import TTLCache

        cache = TTLCache(maxsize=2, ttl=60)
        for key in ("a", "b", "c"):
            cache.set(key, key)

        assert len(cache) == 2
        assert cache.get("a") is None
