"""Admin gate page that unlocks the question editor for the configured address."""

from __future__ import annotations

from pathlib import Path
import sys
import time
from typing import Any, Callable, MutableMapping, Optional

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lib.admin_gate import is_authorized_email
from lib.app_state import EDITOR_VIEW, FORM_VIEW, AppState, flash_notice, get_app_state, navigate
from lib.settings import AppSettings, configure_logging, load_settings
from lib.submission import SUCCESS
from lib.ui_theme import apply_app_theme, form_card, page_header

ADMIN_EMAIL_KEY = "admin_gate_email"
ACCESS_GRANTED_NOTICE = (SUCCESS, "Access granted!", "Welcome to the admin panel.")


def attempt_login(
    email: str,
    state: AppState,
    settings: AppSettings,
    *,
    sleep: Callable[[float], None] = time.sleep,
    session: Optional[MutableMapping[str, Any]] = None,
) -> bool:
    """Check ``email`` after the verification delay and flag the session on success."""

    with st.spinner("Verifying..."):
        sleep(settings.auth_delay_seconds)

    if is_authorized_email(email, settings.admin_email):
        state.authenticated = True
        flash_notice(ACCESS_GRANTED_NOTICE, session)
        return True

    st.error("**Access denied** Only authorized users can access this area.")
    return False


def main() -> None:
    """Render the admin access page."""

    settings = load_settings()
    configure_logging(settings.log_level)
    state = get_app_state(title_path=settings.title_config_path)

    apply_app_theme(page_title="Admin Access", page_icon="🔒")
    if state.authenticated:
        navigate(EDITOR_VIEW)
        return

    page_header("Admin Access", "Sign in to customize the application form.")

    with form_card("🔒 Admin Access") as card:
        form = card.form("admin_gate")
        with form:
            email = st.text_input(
                "👤 Email Address",
                key=ADMIN_EMAIL_KEY,
                placeholder="Enter your email",
            )
            submitted = form.form_submit_button(
                "Access Admin Panel",
                type="primary",
                use_container_width=True,
            )

    if st.button("← Back to Form"):
        navigate(FORM_VIEW)

    if submitted and attempt_login(email, state, settings):
        navigate(EDITOR_VIEW)


if __name__ == "__main__":
    main()
