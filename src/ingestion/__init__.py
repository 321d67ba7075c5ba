"""Data ingestion module for loading questions."""

from .loader import (
    QuestionLoader,
    LoadResult,
    SAMPLE_QUESTIONS,
    load_sample_data,
    split_tags,
)

__all__ = [
    "QuestionLoader",
    "LoadResult",
    "SAMPLE_QUESTIONS",
    "load_sample_data",
    "split_tags",
]
