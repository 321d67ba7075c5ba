"""Streamlit pages for the Q&A forum."""

from .home import render_home
from .search import render_search
from .ask import render_ask
from .question_detail import render_question_detail

__all__ = [
    "render_home",
    "render_search",
    "render_ask",
    "render_question_detail",
]
