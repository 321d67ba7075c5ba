"""Shared Streamlit resources: the API client and async bridging."""

import asyncio
from typing import Awaitable, TypeVar

import streamlit as st

from app.services import ForumAPIClient, ForumAPIError
from config.logging_config import get_logger

logger = get_logger("ui.session")

T = TypeVar("T")


@st.cache_resource
def get_api_client() -> ForumAPIClient:
    """Get the process-wide API client."""
    return ForumAPIClient()


def run_async(coro: Awaitable[T]) -> T:
    """Run a coroutine to completion from the Streamlit script thread."""
    return asyncio.run(coro)


@st.cache_data(ttl=300, show_spinner=False)
def load_tag_names() -> list[str]:
    """Tag names for selectors, cached for five minutes."""
    tags = run_async(get_api_client().list_tags())
    return [tag.name for tag in tags]


def tag_options(selected: set) -> list[str]:
    """Tag selector options; falls back to the current selection if the API is down."""
    try:
        names = load_tag_names()
    except ForumAPIError as e:
        logger.warning(f"Could not load tags: {e}")
        st.warning("タグ一覧を取得できませんでした。")
        names = []
    return sorted(set(names) | set(selected))
