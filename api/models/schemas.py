"""Pydantic schemas for API request/response validation.

Responses use camelCase field names on the wire (createdAt, isResolved);
models also accept their snake_case field names so service dictionaries
validate directly.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class TagOut(BaseModel):
    """A topic tag."""
    id: int
    name: str


class QuestionOut(BaseModel):
    """A question with its tags, as returned by search."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    content: str
    created_at: datetime = Field(alias="createdAt")
    is_resolved: bool = Field(alias="isResolved")
    tags: list[TagOut] = []


class AnswerOut(BaseModel):
    """An answer to a question."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    question_id: int = Field(alias="questionId")
    content: str
    created_at: datetime = Field(alias="createdAt")
    is_accepted: bool = Field(alias="isAccepted")


class QuestionDetail(QuestionOut):
    """A question with tags and answers."""
    answers: list[AnswerOut] = []


class QuestionCreate(BaseModel):
    """Request body for posting a question."""
    title: str = Field(..., min_length=1, max_length=200, description="Question title")
    content: str = Field("", description="Markdown body")
    tags: list[str] = Field(default_factory=list, description="Tag names")


class AnswerCreate(BaseModel):
    """Request body for posting an answer."""
    content: str = Field(..., min_length=1, description="Markdown body")


class ErrorResponse(BaseModel):
    """Error payload."""
    error: str
