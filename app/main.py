"""
Q&A Forum - Main Streamlit Application

Run with: streamlit run app/main.py
"""

import streamlit as st
from pathlib import Path
import sys

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.logging_config import setup_logging

# Import page modules
from app.pages.home import render_home
from app.pages.search import render_search
from app.pages.ask import render_ask
from app.pages.question_detail import render_question_detail
from app.utils.navigation import (
    NAV_KEY,
    Pages,
    apply_pending_navigation,
    initialize_navigation,
)

PAGE_RENDERERS = {
    Pages.HOME: render_home,
    Pages.SEARCH: render_search,
    Pages.ASK: render_ask,
    Pages.QUESTION: render_question_detail,
}


@st.cache_resource
def _init_logging():
    log_file = Path(config.app.log_file) if config.app.log_file else None
    setup_logging(log_level=config.app.log_level, log_file=log_file)


def _on_page_change():
    # URL state belongs to the page that was left
    st.query_params.clear()


def main():
    """Main application entry point."""
    # Page configuration
    st.set_page_config(
        page_title=config.app.name,
        page_icon="💬",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    _init_logging()

    initialize_navigation()
    apply_pending_navigation()

    # Sidebar
    with st.sidebar:
        st.title(f"💬 {config.app.name}")
        st.caption(f"v{config.app.version}")

        st.divider()

        st.subheader("メニュー")
        page = st.radio(
            "Go to",
            options=Pages.ALL,
            key=NAV_KEY,
            on_change=_on_page_change,
            label_visibility="collapsed",
        )

        st.divider()
        st.caption(f"API: {config.api.base_url}")

    # Main content area
    st.title(page)
    PAGE_RENDERERS[page]()


if __name__ == "__main__":
    main()
