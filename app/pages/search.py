"""Search page for the Q&A forum."""

import streamlit as st

from app.components.search_state import SearchStateMachine, SearchStatus
from app.utils.display_helpers import (
    format_created_at,
    format_results_for_display,
    resolved_label,
)
from app.utils.navigation import (
    PAGE_PARAM,
    SEARCH_STATE_KEY,
    navigate_to_question,
    navigate_to_tag_search,
)
from app.utils.session import get_api_client, run_async, tag_options
from config import config
from config.constants import (
    RESOLVED_OPTIONS,
    NO_RESULTS_DISPLAY,
    parse_resolved,
    format_resolved,
)

# Widget keys
KEYWORD_KEY = "search_keyword"
TAGS_KEY = "search_tags"
RESOLVED_KEY = "search_resolved"
TABLE_VIEW_KEY = "search_table_view"

# Radio value for the unset resolved filter
RESOLVED_ALL = "all"


def _get_machine() -> SearchStateMachine:
    """Get the session's search state, mounting it on first use."""
    if SEARCH_STATE_KEY not in st.session_state:
        machine = SearchStateMachine(
            fetch=get_api_client().search_questions,
            timeout=config.api.request_timeout,
        )
        params = {key: st.query_params.get_all(key) for key in st.query_params.keys()}
        machine.seed_from_query_params(params)
        st.session_state[SEARCH_STATE_KEY] = machine
        for key in (KEYWORD_KEY, TAGS_KEY, RESOLVED_KEY):
            st.session_state.pop(key, None)
    return st.session_state[SEARCH_STATE_KEY]


def _sync_widgets(machine: SearchStateMachine) -> None:
    """Seed widget state from the filters (widget state is dropped off-page)."""
    st.session_state.setdefault(KEYWORD_KEY, machine.filters.keyword)
    st.session_state.setdefault(TAGS_KEY, sorted(machine.filters.selected_tags))
    st.session_state.setdefault(RESOLVED_KEY, format_resolved(machine.filters.resolved) or RESOLVED_ALL)


def _on_keyword_change(machine: SearchStateMachine) -> None:
    machine.set_keyword(st.session_state[KEYWORD_KEY])


def _on_tags_change(machine: SearchStateMachine) -> None:
    machine.set_tags(st.session_state[TAGS_KEY])


def _on_resolved_change(machine: SearchStateMachine) -> None:
    machine.set_resolved(parse_resolved(st.session_state[RESOLVED_KEY]))


def _on_search(machine: SearchStateMachine) -> None:
    machine.request_search()


def render_search():
    """Render the search page."""
    machine = _get_machine()
    _sync_widgets(machine)
    disabled = machine.controls_disabled

    st.subheader("検索条件")
    if machine.filters.active_filter_count:
        st.caption(machine.filters.get_summary())

    st.text_area(
        "キーワード",
        key=KEYWORD_KEY,
        placeholder="キーワードを入力してください（任意）",
        disabled=disabled,
        on_change=_on_keyword_change,
        args=(machine,),
        help="タイトルまたは本文に含まれる文字列（大文字小文字は区別しません）",
    )

    # Existing tags only; the search flow never creates tags
    st.multiselect(
        "タグ",
        options=tag_options(machine.filters.selected_tags),
        key=TAGS_KEY,
        disabled=disabled,
        on_change=_on_tags_change,
        args=(machine,),
        help="いずれかのタグが付いた質問を表示します",
    )

    st.radio(
        "状態",
        options=[RESOLVED_ALL, "true", "false"],
        format_func=lambda value: RESOLVED_OPTIONS[parse_resolved(value)],
        key=RESOLVED_KEY,
        horizontal=True,
        disabled=disabled,
        on_change=_on_resolved_change,
        args=(machine,),
    )

    st.button(
        "質問検索中..." if disabled else "検索する",
        type="primary",
        disabled=disabled,
        on_click=_on_search,
        args=(machine,),
        use_container_width=True,
    )

    if machine.status is SearchStatus.LOADING:
        with st.spinner("質問検索中..."):
            run_async(machine.run_pending())
        if machine.status is SearchStatus.LOADED:
            st.query_params.from_dict({PAGE_PARAM: "search", **machine.filters.to_query_params()})
        st.rerun()

    st.divider()
    render_results(machine)


def render_results(machine: SearchStateMachine):
    """Render the result list for the current state."""
    if machine.status is SearchStatus.IDLE:
        st.caption("条件を指定して「検索する」を押してください。")
        return

    if machine.status is SearchStatus.ERROR:
        st.error(machine.error_message)
        return

    if not machine.results:
        st.info(NO_RESULTS_DISPLAY)
        return

    col1, col2 = st.columns([3, 1])
    with col1:
        st.subheader(f"検索結果: {len(machine.results)}件")
    with col2:
        table_view = st.toggle("表形式で表示", key=TABLE_VIEW_KEY)

    if table_view:
        st.dataframe(
            format_results_for_display(machine.results),
            use_container_width=True,
            hide_index=True,
        )
        return

    for question in machine.results:
        render_question_card(question, key_prefix="search")


def render_question_card(question, key_prefix: str):
    """Render one question summary with its tags."""
    with st.container(border=True):
        st.button(
            question.title,
            key=f"{key_prefix}_open_{question.id}",
            on_click=navigate_to_question,
            args=(question.id,),
            type="tertiary",
        )
        st.markdown(question.content)
        st.caption(f"{format_created_at(question.created_at)} ・ {resolved_label(question.is_resolved)}")

        if question.tags:
            cols = st.columns(len(question.tags) + 1)
            for col, tag in zip(cols, question.tags):
                with col:
                    st.button(
                        f"#{tag.name}",
                        key=f"{key_prefix}_tag_{question.id}_{tag.id}",
                        on_click=navigate_to_tag_search,
                        args=(tag.name,),
                        type="secondary",
                    )
