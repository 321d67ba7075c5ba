"""Constants for the Q&A forum.

Query parameter names are shared by the API router and the UI client, so
both sides of the search round trip agree on the wire format.
"""

from typing import Dict, Optional


# =============================================================================
# Query Parameters
# =============================================================================

PARAM_TAG = "tag"
PARAM_KEYWORD = "keyword"
PARAM_IS_RESOLVED = "isResolved"

# Separator for multi-valued parameters (tag=a,b,c)
LIST_SEPARATOR = ","


# =============================================================================
# Resolved Filter
# =============================================================================

# Radio options shown on the search page. None means "no filtering".
RESOLVED_OPTIONS: Dict[Optional[bool], str] = {
    None: "すべて",
    True: "解決済",
    False: "未解決",
}


def parse_resolved(value: Optional[str]) -> Optional[bool]:
    """Parse an isResolved parameter into the tri-state resolved filter.

    Only the literal strings "true" and "false" select a state; anything
    else (including absence) leaves the filter unset.
    """
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def format_resolved(value: Optional[bool]) -> Optional[str]:
    """Inverse of parse_resolved. Returns None for the unset state."""
    if value is None:
        return None
    return "true" if value else "false"


# =============================================================================
# Messages
# =============================================================================

SEARCH_FAILED_MESSAGE = "Failed to fetch questions"
QUESTION_NOT_FOUND_MESSAGE = "Question not found"
ANSWER_NOT_FOUND_MESSAGE = "Answer not found"

# Shown to the user when a search round trip fails
SEARCH_ERROR_DISPLAY = "質問の取得に失敗しました。もう一度お試しください。"
NO_RESULTS_DISPLAY = "条件に一致する質問が見つかりませんでした。"
NOT_FOUND_DISPLAY = "質問が見つかりませんでした"
NOT_FOUND_DETAIL_DISPLAY = "指定された質問は存在しないか、削除された可能性があります。"


# =============================================================================
# Display
# =============================================================================

DATE_DISPLAY_FORMAT = "%Y年%m月%d日 %H:%M"
