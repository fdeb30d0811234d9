"""Authenticated editor page for managing form questions and page titles."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, List, MutableMapping, Optional, Sequence, Tuple

import pandas as pd
import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lib.app_state import (
    AUTH_VIEW,
    FORM_VIEW,
    AppState,
    commit_questions,
    commit_titles,
    flash_notice,
    get_app_state,
    navigate,
    pop_flash_notice,
)
from lib.questions import (
    Question,
    QuestionType,
    add_question,
    clean_questions,
    move_question,
    remove_question,
    update_question,
)
from lib.schema_defaults import MAX_MAX_LENGTH, MIN_MAX_LENGTH
from lib.settings import AppSettings, configure_logging, load_settings
from lib.submission import SUCCESS
from lib.title_store import TITLE_FIELD_LABELS, TITLE_FIELDS, TitleConfig, update_title, validate_titles
from lib.ui_theme import apply_app_theme, form_card, page_header, section_title, show_notice

EDITOR_QUESTIONS_STATE_KEY = "editor_questions"
EDITOR_TITLES_STATE_KEY = "editor_titles"
QUESTIONS_SAVED_NOTICE = (
    SUCCESS,
    "Questions updated!",
    "The form questions have been successfully updated.",
)
TITLES_SAVED_NOTICE = (SUCCESS, "Titles updated!", "The page titles have been saved.")
ALL_SAVED_NOTICE = (SUCCESS, "Changes saved!", "The questions and page titles have been updated.")
QUESTION_TYPES = list(QuestionType)
MULTILINE_TITLE_FIELDS = {"essay_question"}


def _session(session: Optional[MutableMapping[str, Any]]) -> MutableMapping[str, Any]:
    return st.session_state if session is None else session


def editor_drafts(
    state: AppState, session: Optional[MutableMapping[str, Any]] = None
) -> Tuple[List[Question], TitleConfig]:
    """Return the editor's working copies, seeding them from ``state`` if needed."""

    store = _session(session)
    if EDITOR_QUESTIONS_STATE_KEY not in store:
        store[EDITOR_QUESTIONS_STATE_KEY] = list(state.questions)
    if EDITOR_TITLES_STATE_KEY not in store:
        store[EDITOR_TITLES_STATE_KEY] = state.titles
    return store[EDITOR_QUESTIONS_STATE_KEY], store[EDITOR_TITLES_STATE_KEY]


def discard_drafts(session: Optional[MutableMapping[str, Any]] = None) -> None:
    """Forget the working copies so the next visit starts from committed data."""

    store = _session(session)
    store.pop(EDITOR_QUESTIONS_STATE_KEY, None)
    store.pop(EDITOR_TITLES_STATE_KEY, None)


def _set_question_draft(
    questions: Sequence[Question], session: Optional[MutableMapping[str, Any]] = None
) -> None:
    _session(session)[EDITOR_QUESTIONS_STATE_KEY] = list(questions)


def _on_add_question() -> None:
    _set_question_draft(add_question(st.session_state[EDITOR_QUESTIONS_STATE_KEY]))


def _on_remove_question(question_id: str) -> None:
    _set_question_draft(remove_question(st.session_state[EDITOR_QUESTIONS_STATE_KEY], question_id))


def _on_move_question(question_id: str, offset: int) -> None:
    _set_question_draft(
        move_question(st.session_state[EDITOR_QUESTIONS_STATE_KEY], question_id, offset)
    )


def _on_question_change(question_id: str, field_name: str, widget_key: str) -> None:
    _set_question_draft(
        update_question(
            st.session_state[EDITOR_QUESTIONS_STATE_KEY],
            question_id,
            field_name,
            st.session_state[widget_key],
        )
    )


def _on_title_change(field_name: str, widget_key: str) -> None:
    st.session_state[EDITOR_TITLES_STATE_KEY] = update_title(
        st.session_state[EDITOR_TITLES_STATE_KEY],
        field_name,
        st.session_state[widget_key],
    )


def save_questions(
    state: AppState,
    questions: Sequence[Question],
    session: Optional[MutableMapping[str, Any]] = None,
) -> List[Question]:
    """Commit the non-blank questions and queue the confirmation notice."""

    cleaned = clean_questions(questions)
    commit_questions(state, cleaned)
    _set_question_draft(cleaned, session)
    flash_notice(QUESTIONS_SAVED_NOTICE, session)
    return cleaned


def save_titles(
    state: AppState,
    titles: TitleConfig,
    settings: AppSettings,
    session: Optional[MutableMapping[str, Any]] = None,
) -> bool:
    """Validate and commit ``titles``; nothing changes when a field is empty."""

    errors = validate_titles(titles)
    if errors:
        st.error(f"**Validation Error** {' '.join(errors)}")
        return False

    try:
        commit_titles(state, titles, path=settings.title_config_path)
    except OSError as exc:
        st.error(f"Titles were updated for this session but could not be saved: {exc}")
        return False

    flash_notice(TITLES_SAVED_NOTICE, session)
    return True


def save_all(
    state: AppState,
    questions: Sequence[Question],
    titles: TitleConfig,
    settings: AppSettings,
    session: Optional[MutableMapping[str, Any]] = None,
) -> bool:
    """Save titles and questions together, aborting both if the titles are invalid."""

    errors = validate_titles(titles)
    if errors:
        st.error(f"**Validation Error** {' '.join(errors)}")
        return False

    save_questions(state, questions, session)
    if not save_titles(state, titles, settings, session):
        return False
    flash_notice(ALL_SAVED_NOTICE, session)
    return True


def questions_frame(questions: Sequence[Question]) -> pd.DataFrame:
    """Return a table summarising ``questions`` for the overview."""

    rows = [
        {
            "#": index + 1,
            "Question": question.text or "(blank, removed on save)",
            "Type": question.type.label,
            "Required": "Yes" if question.required else "No",
            "Character limit": question.max_length if question.type is QuestionType.LONG_TEXT else None,
            "ID": question.id,
        }
        for index, question in enumerate(questions)
    ]
    return pd.DataFrame(rows, columns=["#", "Question", "Type", "Required", "Character limit", "ID"])


def render_question_editor(question: Question, *, index: int, total: int) -> None:
    """Render the controls for a single question."""

    qid = question.id
    with st.container(border=True):
        header_col, up_col, down_col, remove_col = st.columns([6, 1, 1, 1])
        header_col.markdown(f"**Question {index + 1}**")
        up_col.button(
            "▲",
            key=f"move_up_{qid}",
            disabled=index == 0,
            help="Move question up",
            on_click=_on_move_question,
            args=(qid, -1),
        )
        down_col.button(
            "▼",
            key=f"move_down_{qid}",
            disabled=index == total - 1,
            help="Move question down",
            on_click=_on_move_question,
            args=(qid, 1),
        )
        remove_col.button(
            "🗑️",
            key=f"remove_{qid}",
            help="Remove question",
            on_click=_on_remove_question,
            args=(qid,),
        )

        text_col, settings_col = st.columns(2)
        with text_col:
            text_key = f"question_text_{qid}"
            st.text_area(
                "Question Text",
                value=question.text,
                key=text_key,
                placeholder="Enter your question here...",
                on_change=_on_question_change,
                args=(qid, "text", text_key),
            )
        with settings_col:
            type_key = f"question_type_{qid}"
            st.radio(
                "Question Type",
                options=QUESTION_TYPES,
                index=QUESTION_TYPES.index(question.type),
                key=type_key,
                format_func=lambda value: value.label,
                on_change=_on_question_change,
                args=(qid, "type", type_key),
            )
            required_key = f"question_required_{qid}"
            st.checkbox(
                "Required field",
                value=question.required,
                key=required_key,
                on_change=_on_question_change,
                args=(qid, "required", required_key),
            )
            if question.type is QuestionType.LONG_TEXT:
                limit_key = f"question_max_length_{qid}"
                st.number_input(
                    "Character Limit",
                    min_value=MIN_MAX_LENGTH,
                    max_value=MAX_MAX_LENGTH,
                    value=question.max_length,
                    step=50,
                    key=limit_key,
                    on_change=_on_question_change,
                    args=(qid, "max_length", limit_key),
                )


def render_title_editor(titles: TitleConfig) -> None:
    """Render one input per editable page title."""

    for field_name in TITLE_FIELDS:
        widget_key = f"title_{field_name}"
        widget = st.text_area if field_name in MULTILINE_TITLE_FIELDS else st.text_input
        widget(
            TITLE_FIELD_LABELS[field_name],
            value=getattr(titles, field_name),
            key=widget_key,
            on_change=_on_title_change,
            args=(field_name, widget_key),
        )


def main() -> None:
    """Render the question editor page."""

    settings = load_settings()
    configure_logging(settings.log_level)
    state = get_app_state(title_path=settings.title_config_path)

    apply_app_theme(page_title="Question Editor", page_icon="🛠️")
    if not state.authenticated:
        st.warning("Sign in with the admin address to edit questions.")
        navigate(AUTH_VIEW)
        return

    if st.button("← Back to Form"):
        discard_drafts()
        navigate(FORM_VIEW)

    questions, titles = editor_drafts(state)
    page_header(state.titles.editor_title, state.titles.editor_subtitle)

    pending_notice = pop_flash_notice()
    if pending_notice:
        show_notice(pending_notice)

    with form_card("⚙️ Page Titles") as card:
        with card:
            render_title_editor(titles)
            if st.button("💾 Save Titles", key="save_titles"):
                if save_titles(state, st.session_state[EDITOR_TITLES_STATE_KEY], settings):
                    st.rerun()

    with form_card("⚙️ Form Questions") as card:
        with card:
            section_title("Overview")
            if questions:
                st.dataframe(questions_frame(questions), hide_index=True, use_container_width=True)
            else:
                st.info("No questions yet. Add one below.")

            for index, question in enumerate(questions):
                render_question_editor(question, index=index, total=len(questions))

            st.divider()
            col_add, col_save = st.columns(2)
            col_add.button("➕ Add Question", key="add_question", on_click=_on_add_question)
            if col_save.button("💾 Save Questions", type="primary", key="save_questions"):
                save_questions(state, st.session_state[EDITOR_QUESTIONS_STATE_KEY])
                discard_drafts()
                navigate(FORM_VIEW)

    st.divider()
    if st.button("💾 Save All Changes", type="primary", key="save_all"):
        saved = save_all(
            state,
            st.session_state[EDITOR_QUESTIONS_STATE_KEY],
            st.session_state[EDITOR_TITLES_STATE_KEY],
            settings,
        )
        if saved:
            discard_drafts()
            navigate(FORM_VIEW)


if __name__ == "__main__":
    main()
