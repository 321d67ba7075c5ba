"""Display utilities for the Q&A forum UI."""

from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from config.constants import DATE_DISPLAY_FORMAT


def format_created_at(value: Optional[datetime]) -> str:
    """Format a question/answer timestamp, e.g. 2024年05月01日 13:05."""
    if value is None:
        return "-"
    return value.strftime(DATE_DISPLAY_FORMAT)


def content_preview(content: str, max_chars: int = 200) -> str:
    """First max_chars characters of a markdown body, on one line."""
    text = " ".join(content.split())
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "…"


def resolved_label(is_resolved: bool) -> str:
    return "解決済" if is_resolved else "未解決"


def format_results_for_display(questions: Iterable) -> pd.DataFrame:
    """Tabulate search results for st.dataframe.

    Args:
        questions: QuestionOut models.

    Returns:
        DataFrame with one row per question, newest first as given.
    """
    rows = [
        {
            "ID": q.id,
            "タイトル": q.title,
            "作成日時": format_created_at(q.created_at),
            "状態": resolved_label(q.is_resolved),
            "タグ": ", ".join(tag.name for tag in q.tags),
        }
        for q in questions
    ]
    return pd.DataFrame(rows, columns=["ID", "タイトル", "作成日時", "状態", "タグ"])
