"""Navigation utilities for the Q&A forum.

Page switching, question drill-down and tag links. Pages are selected by the
sidebar radio; an initial page can be requested with ?page=search|ask|question
(plus &id=<question id> for the detail view).
"""

from typing import Optional

import streamlit as st

from config.constants import PARAM_TAG


class Pages:
    """Page identifiers for navigation."""
    HOME = "ホーム"
    SEARCH = "質問検索"
    ASK = "質問する"
    QUESTION = "質問詳細"

    ALL = [HOME, SEARCH, ASK, QUESTION]


# URL values for ?page=
URL_PAGES = {
    "home": Pages.HOME,
    "search": Pages.SEARCH,
    "ask": Pages.ASK,
    "question": Pages.QUESTION,
}

PAGE_PARAM = "page"
QUESTION_PARAM = "id"

# Session state keys
NAV_KEY = "nav_page"  # sidebar radio
PENDING_NAV_KEY = "nav_pending"
QUESTION_KEY = "question_id"
SEARCH_STATE_KEY = "search_machine"


def _parse_question_id(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def initialize_navigation() -> None:
    """Pick the first page from the URL on a new session."""
    if NAV_KEY in st.session_state:
        return

    page = URL_PAGES.get(st.query_params.get(PAGE_PARAM, ""), Pages.HOME)
    # A bare ?tag=... link opens the search page
    if PARAM_TAG in st.query_params and PAGE_PARAM not in st.query_params:
        page = Pages.SEARCH

    st.session_state[NAV_KEY] = page
    st.session_state[QUESTION_KEY] = _parse_question_id(st.query_params.get(QUESTION_PARAM))


def apply_pending_navigation() -> None:
    """Move the sidebar radio to a requested page. Call before the radio renders."""
    page = st.session_state.pop(PENDING_NAV_KEY, None)
    if page is not None:
        st.session_state[NAV_KEY] = page


def navigate_to_question(question_id: int) -> None:
    """Open the detail view of a question on the next run."""
    st.session_state[PENDING_NAV_KEY] = Pages.QUESTION
    st.session_state[QUESTION_KEY] = question_id
    st.query_params.from_dict({PAGE_PARAM: "question", QUESTION_PARAM: str(question_id)})


def navigate_to_tag_search(tag: str) -> None:
    """Open the search page filtered by one tag, searching immediately."""
    st.session_state[PENDING_NAV_KEY] = Pages.SEARCH
    # Drop the previous search so the page mounts again from the URL
    st.session_state.pop(SEARCH_STATE_KEY, None)
    st.query_params.from_dict({PAGE_PARAM: "search", PARAM_TAG: tag})
