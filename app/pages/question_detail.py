"""Question detail page: body, answers and the answer form."""

import streamlit as st

from app.services import ForumAPIError, QuestionNotFoundError
from app.utils.display_helpers import format_created_at, resolved_label
from app.utils.navigation import QUESTION_KEY, navigate_to_tag_search
from app.utils.session import get_api_client, run_async
from config.constants import NOT_FOUND_DISPLAY, NOT_FOUND_DETAIL_DISPLAY
from config.logging_config import get_logger

logger = get_logger("ui.question")


def render_question_detail():
    """Render the question selected in session state."""
    question_id = st.session_state.get(QUESTION_KEY)
    if question_id is None:
        st.info("質問一覧から質問を選択してください。")
        return

    client = get_api_client()
    try:
        question = run_async(client.get_question(question_id))
    except QuestionNotFoundError:
        st.error(NOT_FOUND_DISPLAY)
        st.caption(NOT_FOUND_DETAIL_DISPLAY)
        return
    except ForumAPIError as e:
        st.error(f"質問の取得に失敗しました: {e}")
        return

    st.header(question.title)
    st.caption(f"{format_created_at(question.created_at)} ・ {resolved_label(question.is_resolved)}")

    if question.tags:
        cols = st.columns(len(question.tags) + 1)
        for col, tag in zip(cols, question.tags):
            with col:
                st.button(
                    f"#{tag.name}",
                    key=f"detail_tag_{tag.id}",
                    on_click=navigate_to_tag_search,
                    args=(tag.name,),
                )

    st.markdown(question.content)

    st.divider()
    render_answers(question)

    st.divider()
    render_answer_form(question.id)


def render_answers(question):
    """List answers, accepted first, with an accept action per answer."""
    st.subheader(f"回答 ({len(question.answers)})")

    if not question.answers:
        st.caption("まだ回答がありません。")
        return

    for answer in question.answers:
        with st.container(border=True):
            if answer.is_accepted:
                st.success("ベストアンサー")
            st.markdown(answer.content)
            st.caption(format_created_at(answer.created_at))

            if not answer.is_accepted:
                if st.button("ベストアンサーにする", key=f"accept_{answer.id}"):
                    _accept(question.id, answer.id)


def _accept(question_id: int, answer_id: int):
    try:
        run_async(get_api_client().accept_answer(question_id, answer_id))
    except ForumAPIError as e:
        st.error(f"ベストアンサーの設定に失敗しました: {e}")
        return
    logger.info(f"Accepted answer {answer_id} for question {question_id}")
    st.rerun()


def render_answer_form(question_id: int):
    """Anonymous answer form."""
    st.subheader("回答する")

    with st.form(key=f"answer_form_{question_id}", clear_on_submit=True):
        content = st.text_area("回答内容 (Markdown)", height=200)
        submitted = st.form_submit_button("回答を投稿", type="primary")

    if not submitted:
        return

    if not content.strip():
        st.warning("回答内容を入力してください。")
        return

    try:
        run_async(get_api_client().add_answer(question_id, content))
    except ForumAPIError as e:
        st.error(f"回答の投稿に失敗しました: {e}")
        return

    st.rerun()
