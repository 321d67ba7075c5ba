"""Question submission page."""

import streamlit as st

from app.services import ForumAPIError
from app.utils.navigation import navigate_to_question
from app.utils.session import get_api_client, load_tag_names, run_async, tag_options
from config.constants import LIST_SEPARATOR
from config.logging_config import get_logger

logger = get_logger("ui.ask")


def render_ask():
    """Render the anonymous question form."""
    st.markdown("質問は匿名で投稿されます。本文には Markdown が使えます。")

    with st.form(key="ask_form"):
        title = st.text_input("タイトル", max_chars=200)
        content = st.text_area("質問内容 (Markdown)", height=250)
        existing = st.multiselect("タグ", options=tag_options(set()))
        new_tags = st.text_input(
            "新しいタグ",
            placeholder="カンマ区切りで入力 (例: python, async)",
        )
        submitted = st.form_submit_button("質問を投稿", type="primary")

    if not submitted:
        return

    if not title.strip():
        st.warning("タイトルを入力してください。")
        return

    tags = list(existing)
    tags.extend(name.strip() for name in new_tags.split(LIST_SEPARATOR) if name.strip())

    try:
        question = run_async(get_api_client().create_question(title.strip(), content, tags))
    except ForumAPIError as e:
        st.error(f"質問の投稿に失敗しました: {e}")
        return

    logger.info(f"Posted question {question.id}")
    # New tags must show up in the selectors
    load_tag_names.clear()
    navigate_to_question(question.id)
    st.rerun()
