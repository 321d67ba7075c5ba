"""Home page: latest and unresolved questions, and the tag list."""

import streamlit as st

from app.components.search_state import FilterState
from app.services import ForumAPIError
from app.utils.display_helpers import content_preview, format_created_at, resolved_label
from app.utils.navigation import navigate_to_question, navigate_to_tag_search
from app.utils.session import get_api_client, load_tag_names, run_async
from config import config


def render_home():
    """Render the home page."""
    st.markdown(
        "誰でも匿名で質問・回答できる相談掲示板です。"
        "タグやキーワードで過去の質問を探すこともできます。"
    )

    col1, col2 = st.columns([3, 1])

    with col1:
        latest_tab, unresolved_tab = st.tabs(["新着の質問", "未解決の質問"])
        with latest_tab:
            render_question_list(FilterState(), key_prefix="latest")
        with unresolved_tab:
            render_question_list(FilterState(resolved=False), key_prefix="unresolved")

    with col2:
        render_tag_list()


def render_question_list(filters: FilterState, key_prefix: str):
    """Show the newest questions matching filters."""
    try:
        questions = run_async(
            get_api_client().search_questions(filters, limit=config.app.home_question_limit)
        )
    except ForumAPIError as e:
        st.error(f"質問の取得に失敗しました: {e}")
        return

    if not questions:
        st.info("質問はまだありません。")
        return

    for question in questions:
        with st.container(border=True):
            st.button(
                question.title,
                key=f"{key_prefix}_open_{question.id}",
                on_click=navigate_to_question,
                args=(question.id,),
                type="tertiary",
            )
            st.caption(
                f"{format_created_at(question.created_at)} ・ "
                f"{resolved_label(question.is_resolved)} ・ "
                f"{', '.join(tag.name for tag in question.tags) or 'タグなし'}"
            )
            st.write(content_preview(question.content))


def render_tag_list():
    """Tag links that open a tag search."""
    st.subheader("タグ一覧")

    try:
        names = load_tag_names()
    except ForumAPIError:
        st.caption("タグ一覧を取得できませんでした。")
        return

    if not names:
        st.caption("タグはまだありません。")
        return

    for name in names:
        st.button(
            f"#{name}",
            key=f"home_tag_{name}",
            on_click=navigate_to_tag_search,
            args=(name,),
            use_container_width=True,
        )
