"""Shared page configuration, header, and card helpers for every view."""

from __future__ import annotations

from contextlib import contextmanager
from html import escape as html_escape
from typing import Any, Iterator, Optional, Tuple

import streamlit as st


_THEME_CSS = """
<style>
:root {
    --app-accent: #1D4ED8;
    --app-accent-soft: #DBEAFE;
    --app-surface: rgba(255, 255, 255, 0.94);
    --app-border: rgba(29, 78, 216, 0.18);
    --app-shadow: 0 18px 40px rgba(15, 23, 42, 0.08);
    --app-text: #111827;
    --app-muted: #4B5563;
}

html, body {
    font-family: "Inter", "Segoe UI", system-ui, -apple-system, sans-serif;
    color: var(--app-text);
}

[data-testid="stAppViewContainer"] {
    background: linear-gradient(180deg, #EFF6FF 0%, #FFFFFF 60%);
}

.block-container {
    max-width: 960px;
    padding-top: 2rem;
    padding-bottom: 4rem;
}

.app-header {
    text-align: center;
    margin-bottom: 1.75rem;
}

.app-header__title {
    margin: 0;
    font-size: 2.25rem;
    font-weight: 700;
}

.app-header__subtitle {
    margin: 0.35rem 0 0 0;
    font-size: 1.2rem;
    color: var(--app-muted);
}

.app-card-title {
    background: var(--app-accent);
    color: #FFFFFF;
    border-radius: 1rem 1rem 0 0;
    padding: 1rem 1.5rem;
    margin: 0;
    font-size: 1.4rem;
    font-weight: 600;
}

.app-section-title {
    margin: 1.5rem 0 0.75rem 0;
    font-size: 1.2rem;
    font-weight: 600;
    color: var(--app-text);
}

.app-counter {
    text-align: right;
    color: var(--app-muted);
    font-size: 0.9rem;
}
</style>
"""


def apply_app_theme(page_title: str, page_icon: Optional[str] = None) -> None:
    """Set up consistent page configuration and inject the shared CSS theme."""

    st.set_page_config(
        page_title=page_title,
        page_icon=page_icon,
        layout="centered",
        initial_sidebar_state="collapsed",
    )
    st.markdown(_THEME_CSS, unsafe_allow_html=True)


def page_header(
    title: str,
    subtitle: Optional[str] = None,
    *,
    container: Optional[Any] = None,
) -> None:
    """Render the centred page title and optional subtitle."""

    subtitle_markup = (
        f"<p class='app-header__subtitle'>{html_escape(subtitle)}</p>" if subtitle else ""
    )
    target = container.markdown if container is not None else st.markdown
    target(
        f"""
        <div class="app-header">
            <h1 class="app-header__title">{html_escape(title)}</h1>
            {subtitle_markup}
        </div>
        """,
        unsafe_allow_html=True,
    )


def section_title(title: str, *, container: Optional[Any] = None) -> None:
    """Render a small heading that separates form sections."""

    target = container.markdown if container is not None else st.markdown
    target(
        f"<h2 class='app-section-title'>{html_escape(title)}</h2>",
        unsafe_allow_html=True,
    )


def counter_caption(text: str, *, container: Optional[Any] = None) -> None:
    """Render a right-aligned character or word counter."""

    target = container.markdown if container is not None else st.markdown
    target(f"<div class='app-counter'>{html_escape(text)}</div>", unsafe_allow_html=True)


def show_notice(notice: Tuple[str, str, str]) -> None:
    """Render a ``(level, title, description)`` notice with the matching element."""

    level, title, description = notice
    render = {"success": st.success, "warning": st.warning}.get(level, st.error)
    render(f"**{title}** {description}")


@contextmanager
def form_card(title: Optional[str] = None) -> Iterator[Any]:
    """Yield a bordered container with an accent title bar."""

    if title:
        st.markdown(
            f"<h3 class='app-card-title'>{html_escape(title)}</h3>",
            unsafe_allow_html=True,
        )
    container = st.container(border=True)
    yield container
