"""Session-scoped application state shared by the form, gate, and editor views."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, MutableMapping, Optional, Sequence, Tuple

import streamlit as st

from lib.questions import Question, default_questions
from lib.title_store import TITLE_CONFIG_PATH, TitleConfig, load_title_config, save_title_config

logger = logging.getLogger(__name__)

APP_STATE_KEY = "scholarship_app_state"
FLASH_NOTICE_STATE_KEY = "scholarship_flash_notice"

FORM_VIEW = "form"
AUTH_VIEW = "auth"
EDITOR_VIEW = "editor"
VIEW_PAGES = {
    FORM_VIEW: "Home.py",
    AUTH_VIEW: "pages/01_Admin_Access.py",
    EDITOR_VIEW: "pages/02_Question_Editor.py",
}
VIEW_LABELS = {
    FORM_VIEW: "Application Form",
    AUTH_VIEW: "Admin Access",
    EDITOR_VIEW: "Question Editor",
}


@dataclass
class AppState:
    """Canonical questions and titles plus the session's gate and submit flags."""

    questions: List[Question] = field(default_factory=default_questions)
    titles: TitleConfig = field(default_factory=TitleConfig)
    authenticated: bool = False
    submitting: bool = False


def _session(session: Optional[MutableMapping[str, Any]]) -> MutableMapping[str, Any]:
    return st.session_state if session is None else session


def get_app_state(
    session: Optional[MutableMapping[str, Any]] = None,
    *,
    title_path: Path = TITLE_CONFIG_PATH,
) -> AppState:
    """Return the session's state, creating it from defaults on first use."""

    store = _session(session)
    state = store.get(APP_STATE_KEY)
    if not isinstance(state, AppState):
        state = AppState(titles=load_title_config(title_path))
        store[APP_STATE_KEY] = state
    return state


def commit_questions(state: AppState, questions: Sequence[Question]) -> None:
    """Replace the canonical question list with a copy of ``questions``."""

    state.questions = list(questions)
    logger.info("Committed %d question(s)", len(state.questions))


def commit_titles(
    state: AppState, titles: TitleConfig, *, path: Path = TITLE_CONFIG_PATH
) -> None:
    """Replace the canonical titles and persist them to ``path``.

    The in-memory update happens first so a failed write still leaves the
    session showing the new titles. ``OSError`` from the write propagates.
    """

    state.titles = titles
    save_title_config(titles, path)


def flash_notice(
    notice: Tuple[str, str, str], session: Optional[MutableMapping[str, Any]] = None
) -> None:
    """Keep ``notice`` for the next page run, surviving reruns and page switches."""

    _session(session)[FLASH_NOTICE_STATE_KEY] = notice


def pop_flash_notice(
    session: Optional[MutableMapping[str, Any]] = None,
) -> Optional[Tuple[str, str, str]]:
    return _session(session).pop(FLASH_NOTICE_STATE_KEY, None)


def edit_destination(state: AppState) -> str:
    """Return the view the "Edit Questions" action should open."""

    return EDITOR_VIEW if state.authenticated else AUTH_VIEW


def navigate(view: str) -> None:
    """Switch to the Streamlit page that renders ``view``."""

    page = VIEW_PAGES[view]
    if hasattr(st, "switch_page"):
        try:
            st.switch_page(page)
        except Exception:  # pragma: no cover - streamlit navigation fallback
            st.info(f"Use the navigation menu to open the {VIEW_LABELS[view]} page.")
    else:
        st.info(f"Use the navigation menu to open the {VIEW_LABELS[view]} page.")
