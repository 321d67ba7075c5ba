"""Backend access for the Streamlit UI."""

from .api_client import ForumAPIClient, ForumAPIError, QuestionNotFoundError

__all__ = [
    "ForumAPIClient",
    "ForumAPIError",
    "QuestionNotFoundError",
]
