"""API services."""

from api.services.database import get_db, DatabaseService, StoreFailure
from api.services.queries import QueryService, QuestionNotFound, AnswerNotFound
from api.services.filters import QuestionFilters, build_filter_clause

__all__ = [
    "get_db",
    "DatabaseService",
    "StoreFailure",
    "QueryService",
    "QuestionNotFound",
    "AnswerNotFound",
    "QuestionFilters",
    "build_filter_clause",
]
