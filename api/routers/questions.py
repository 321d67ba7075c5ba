"""Questions API router."""

from fastapi import APIRouter, Query, HTTPException
from fastapi.responses import JSONResponse
from typing import Optional

from api.services.database import StoreFailure
from api.services.filters import QuestionFilters
from api.services.queries import QueryService, QuestionNotFound, AnswerNotFound
from api.models.schemas import (
    QuestionOut,
    QuestionDetail,
    QuestionCreate,
    AnswerOut,
    AnswerCreate,
    ErrorResponse,
)
from config.constants import (
    SEARCH_FAILED_MESSAGE,
    QUESTION_NOT_FOUND_MESSAGE,
    ANSWER_NOT_FOUND_MESSAGE,
)
from config.logging_config import get_logger

logger = get_logger("api.questions")

router = APIRouter()


@router.get(
    "",
    response_model=list[QuestionOut],
    responses={500: {"model": ErrorResponse}},
)
async def search_questions(
    tag: Optional[list[str]] = Query(None, description="Comma-separated tag names (any of)"),
    is_resolved: Optional[str] = Query(None, alias="isResolved", description="'true' or 'false'; absent = both"),
    keyword: Optional[str] = Query(None, description="Substring of title or content"),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum number of questions"),
):
    """Search questions by keyword, tags and resolved state, newest first."""
    query_service = QueryService()
    filters = QuestionFilters.from_params(tag=tag, is_resolved=is_resolved, keyword=keyword)

    try:
        return query_service.search_questions(filters, limit=limit)
    except StoreFailure:
        logger.exception("Error fetching questions")
        return JSONResponse(status_code=500, content={"error": SEARCH_FAILED_MESSAGE})


@router.post("", response_model=QuestionDetail, status_code=201)
async def create_question(body: QuestionCreate):
    """Post a new question."""
    query_service = QueryService()
    return query_service.create_question(body.title, body.content, body.tags)


@router.get(
    "/{question_id}",
    response_model=QuestionDetail,
    responses={404: {"model": ErrorResponse}},
)
async def get_question(question_id: int):
    """Get a question with its tags and answers."""
    query_service = QueryService()
    try:
        return query_service.get_question(question_id)
    except QuestionNotFound:
        raise HTTPException(status_code=404, detail=QUESTION_NOT_FOUND_MESSAGE)


@router.post(
    "/{question_id}/answers",
    response_model=AnswerOut,
    status_code=201,
    responses={404: {"model": ErrorResponse}},
)
async def add_answer(question_id: int, body: AnswerCreate):
    """Answer a question."""
    query_service = QueryService()
    try:
        return query_service.add_answer(question_id, body.content)
    except QuestionNotFound:
        raise HTTPException(status_code=404, detail=QUESTION_NOT_FOUND_MESSAGE)


@router.post(
    "/{question_id}/answers/{answer_id}/accept",
    response_model=QuestionDetail,
    responses={404: {"model": ErrorResponse}},
)
async def accept_answer(question_id: int, answer_id: int):
    """Accept an answer, marking the question resolved."""
    query_service = QueryService()
    try:
        return query_service.accept_answer(question_id, answer_id)
    except QuestionNotFound:
        raise HTTPException(status_code=404, detail=QUESTION_NOT_FOUND_MESSAGE)
    except AnswerNotFound:
        raise HTTPException(status_code=404, detail=ANSWER_NOT_FOUND_MESSAGE)
