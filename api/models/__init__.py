"""API Pydantic models."""

from api.models.schemas import (
    TagOut,
    QuestionOut,
    QuestionDetail,
    AnswerOut,
    QuestionCreate,
    AnswerCreate,
    ErrorResponse,
)

__all__ = [
    "TagOut",
    "QuestionOut",
    "QuestionDetail",
    "AnswerOut",
    "QuestionCreate",
    "AnswerCreate",
    "ErrorResponse",
]
