"""Tests for the forum API client."""

import asyncio
import json

import httpx
import pytest

from app.components.search_state import FilterState
from app.services import ForumAPIClient, ForumAPIError, QuestionNotFoundError

PAGING = {
    "id": 2,
    "title": "Paging",
    "content": "What is paging?",
    "createdAt": "2024-05-02T09:00:00",
    "isResolved": True,
    "tags": [{"id": 2, "name": "memory"}],
}


def _client(handler):
    return ForumAPIClient(
        base_url="http://forum.test",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


class TestSearchQuestions:
    """Tests for ForumAPIClient.search_questions."""

    def test_sends_filters_as_query_params(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[PAGING])

        filters = FilterState(keyword=" paging ", selected_tags={"memory", "os"}, resolved=True)
        results = asyncio.run(_client(handler).search_questions(filters))

        assert seen["path"] == "/api/questions"
        assert seen["params"] == {"tag": "memory,os", "keyword": "paging", "isResolved": "true"}
        assert results[0].title == "Paging"
        assert results[0].is_resolved is True
        assert results[0].tags[0].name == "memory"

    def test_limit_sent_with_filters(self):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[PAGING])

        filters = FilterState(resolved=False)
        asyncio.run(_client(handler).search_questions(filters, limit=20))

        assert seen["params"] == {"isResolved": "false", "limit": "20"}

    def test_empty_filters_send_no_params(self):
        seen = {}

        def handler(request):
            seen["query"] = request.url.query
            return httpx.Response(200, json=[])

        assert asyncio.run(_client(handler).search_questions(FilterState())) == []
        assert seen["query"] == b""

    def test_server_error_raises(self):
        def handler(request):
            return httpx.Response(500, json={"error": "Failed to fetch questions"})

        with pytest.raises(ForumAPIError, match="Failed to fetch questions"):
            asyncio.run(_client(handler).search_questions(FilterState()))

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ForumAPIError):
            asyncio.run(_client(handler).search_questions(FilterState()))

    def test_malformed_payload_raises(self):
        def handler(request):
            return httpx.Response(200, json={"questions": []})

        with pytest.raises(ForumAPIError):
            asyncio.run(_client(handler).search_questions(FilterState()))

    def test_invalid_json_raises(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>")

        with pytest.raises(ForumAPIError):
            asyncio.run(_client(handler).search_questions(FilterState()))


class TestQuestionDetail:
    """Tests for detail, posting and accepting."""

    def test_get_question_not_found(self):
        def handler(request):
            return httpx.Response(404, json={"error": "Question not found"})

        with pytest.raises(QuestionNotFoundError):
            asyncio.run(_client(handler).get_question(999))

    def test_get_question(self):
        def handler(request):
            assert request.url.path == "/api/questions/2"
            return httpx.Response(200, json={**PAGING, "answers": []})

        question = asyncio.run(_client(handler).get_question(2))
        assert question.id == 2
        assert question.answers == []

    def test_create_question_posts_json(self):
        def handler(request):
            body = json.loads(request.content)
            assert request.method == "POST"
            assert body == {"title": "Paging", "content": "What is paging?", "tags": ["memory"]}
            return httpx.Response(201, json={**PAGING, "answers": []})

        question = asyncio.run(
            _client(handler).create_question("Paging", "What is paging?", ["memory"])
        )
        assert question.title == "Paging"

    def test_accept_answer(self):
        answer = {
            "id": 7,
            "questionId": 2,
            "content": "Fixed-size pages",
            "createdAt": "2024-05-02T10:00:00",
            "isAccepted": True,
        }

        def handler(request):
            assert request.url.path == "/api/questions/2/answers/7/accept"
            return httpx.Response(200, json={**PAGING, "answers": [answer]})

        question = asyncio.run(_client(handler).accept_answer(2, 7))
        assert question.answers[0].is_accepted is True
