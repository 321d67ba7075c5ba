"""
Forum API client for the Streamlit UI.

Wraps the HTTP round trips to the forum API. Every transport error, timeout,
error status or malformed payload surfaces as ForumAPIError; a 404 surfaces
as the QuestionNotFoundError subclass.
"""

from typing import Any, Optional

import httpx

from api.models.schemas import AnswerOut, QuestionDetail, QuestionOut, TagOut
from app.components.search_state import FilterState
from config import config
from config.constants import SEARCH_FAILED_MESSAGE
from config.logging_config import get_logger

logger = get_logger("ui.api_client")


class ForumAPIError(Exception):
    """A request to the forum API failed."""


class QuestionNotFoundError(ForumAPIError):
    """The requested question (or answer) does not exist."""


def _error_message(response: httpx.Response) -> str:
    """Extract the {"error": ...} message from an error response."""
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return SEARCH_FAILED_MESSAGE


class ForumAPIClient:
    """Async client for the forum API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: API root URL. Defaults to config.
            timeout: Per-request timeout in seconds. Defaults to config.
            transport: Custom httpx transport (used by tests).
        """
        self.base_url = base_url or config.api.base_url
        self.timeout = timeout if timeout is not None else config.api.request_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # A client per call: Streamlit runs each action in a fresh event loop
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        async with self._client() as client:
            try:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                message = _error_message(e.response)
                if e.response.status_code == 404:
                    raise QuestionNotFoundError(message) from e
                logger.error(f"Forum API {method} {path} returned {e.response.status_code}: {message}")
                raise ForumAPIError(message) from e
            except httpx.HTTPError as e:
                logger.error(f"Forum API request failed: {e}")
                raise ForumAPIError(str(e)) from e
            except ValueError as e:
                logger.error(f"Forum API returned malformed JSON: {e}")
                raise ForumAPIError("Malformed response") from e

    @staticmethod
    def _parse(model, payload):
        try:
            return model.model_validate(payload)
        except ValueError as e:
            raise ForumAPIError("Malformed response") from e

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def search_questions(self, filters: FilterState, limit: Optional[int] = None) -> list[QuestionOut]:
        """Run a filtered search, optionally capped to the newest limit questions."""
        params = filters.to_query_params()
        if limit is not None:
            params["limit"] = limit
        payload = await self._request("GET", "/api/questions", params=params)
        if not isinstance(payload, list):
            raise ForumAPIError("Malformed response")
        return [self._parse(QuestionOut, item) for item in payload]

    async def list_tags(self) -> list[TagOut]:
        """Get all tags."""
        payload = await self._request("GET", "/api/tags")
        return [self._parse(TagOut, item) for item in payload]

    # -------------------------------------------------------------------------
    # Questions and answers
    # -------------------------------------------------------------------------

    async def get_question(self, question_id: int) -> QuestionDetail:
        """Get a question with its answers.

        Raises:
            QuestionNotFoundError: No question has this id.
        """
        payload = await self._request("GET", f"/api/questions/{question_id}")
        return self._parse(QuestionDetail, payload)

    async def create_question(self, title: str, content: str, tags: list[str]) -> QuestionDetail:
        """Post a question."""
        payload = await self._request(
            "POST",
            "/api/questions",
            json={"title": title, "content": content, "tags": tags},
        )
        return self._parse(QuestionDetail, payload)

    async def add_answer(self, question_id: int, content: str) -> AnswerOut:
        """Post an answer to a question."""
        payload = await self._request(
            "POST",
            f"/api/questions/{question_id}/answers",
            json={"content": content},
        )
        return self._parse(AnswerOut, payload)

    async def accept_answer(self, question_id: int, answer_id: int) -> QuestionDetail:
        """Accept an answer, resolving the question."""
        payload = await self._request(
            "POST",
            f"/api/questions/{question_id}/answers/{answer_id}/accept",
        )
        return self._parse(QuestionDetail, payload)
