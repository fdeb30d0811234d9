"""Streamlit entry page rendering the scholarship application form."""

from __future__ import annotations

import logging
from typing import Any, Dict, MutableMapping, Optional, Sequence, Tuple

import streamlit as st

from lib.app_state import (
    AppState,
    edit_destination,
    flash_notice,
    get_app_state,
    navigate,
    pop_flash_notice,
)
from lib.application import (
    ApplicationForm,
    approximate_word_count,
    build_csv,
    remaining_characters,
    validate_application,
)
from lib.email_relay import EmailRelay
from lib.questions import YES_NO_CHOICES, Question, QuestionType
from lib.schema_defaults import CSV_FILENAME, ESSAY_MAX_LENGTH, ESSAY_WORD_TARGET
from lib.settings import AppSettings, configure_logging, load_settings
from lib.submission import (
    ERROR,
    GENERIC_FAILURE,
    SubmissionOutcome,
    build_admin_email,
    build_confirmation_email,
    dispatch_notifications,
    outcome_message,
)
from lib.ui_theme import (
    apply_app_theme,
    counter_caption,
    form_card,
    page_header,
    section_title,
    show_notice,
)

logger = logging.getLogger(__name__)

FORM_KEY_PREFIX = "form_"
FULL_NAME_KEY = "form_full_name"
EMAIL_KEY = "form_email"
ADDRESS_KEY = "form_address"
PHONE_KEY = "form_phone"
ESSAY_KEY = "form_essay_response"
FORM_RESET_STATE_KEY = "scholarship_form_reset"
VALIDATION_ERROR_TITLE = "Validation Error"

Notice = Tuple[str, str, str]


def answer_widget_key(question_id: str) -> str:
    """Return the session key of the widget answering ``question_id``."""

    return f"{FORM_KEY_PREFIX}answer_{question_id}"


def request_form_reset(session: Optional[MutableMapping[str, Any]] = None) -> None:
    """Ask the next run to start with an empty form."""

    store = st.session_state if session is None else session
    store[FORM_RESET_STATE_KEY] = True


def apply_pending_reset(session: Optional[MutableMapping[str, Any]] = None) -> bool:
    """Clear every form widget value if a reset was requested."""

    store = st.session_state if session is None else session
    if not store.pop(FORM_RESET_STATE_KEY, False):
        return False
    for key in [key for key in list(store.keys()) if str(key).startswith(FORM_KEY_PREFIX)]:
        del store[key]
    return True


def render_question(question: Question) -> str:
    """Render the input for ``question`` and return the current answer."""

    key = answer_widget_key(question.id)
    label = f"{question.text} *" if question.required else question.text

    if question.type is QuestionType.YES_NO:
        selection = st.radio(
            label,
            options=list(YES_NO_CHOICES),
            index=None,
            key=key,
            horizontal=True,
            format_func=str.title,
        )
        return selection or ""
    if question.type is QuestionType.LONG_TEXT:
        value = st.text_area(
            label,
            key=key,
            max_chars=question.max_length,
            placeholder="Enter your response...",
        )
        counter_caption(
            f"{len(value)}/{question.max_length} characters "
            f"({remaining_characters(value, question.max_length)} remaining)"
        )
        return value
    if question.type is QuestionType.SHORT_TEXT:
        return st.text_input(label, key=key, placeholder="Enter your response...")
    raise ValueError(f"Unsupported question type: {question.type!r}")


def render_personal_information() -> Dict[str, str]:
    """Render the fixed applicant fields and return their values."""

    section_title("Personal Information")
    col_name, col_email = st.columns(2)
    with col_name:
        full_name = st.text_input("Full name *", key=FULL_NAME_KEY, placeholder="Enter your full name")
    with col_email:
        email = st.text_input("Email *", key=EMAIL_KEY, placeholder="your@email.com")
    address = st.text_input(
        "Complete address",
        key=ADDRESS_KEY,
        placeholder="Street, number, city, state, ZIP code",
    )
    phone = st.text_input("Phone (with area code)", key=PHONE_KEY, placeholder="(555) 123-4567")
    return {"full_name": full_name, "email": email, "address": address, "phone": phone}


def render_essay(title: str, prompt: str) -> str:
    """Render the essay field with its character and word counters."""

    section_title(title)
    essay = st.text_area(
        prompt,
        key=ESSAY_KEY,
        max_chars=ESSAY_MAX_LENGTH,
        height=180,
        placeholder="Describe how a scholarship would benefit your educational goals...",
    )
    counter_caption(
        f"{len(essay)}/{ESSAY_MAX_LENGTH} characters | "
        f"{approximate_word_count(essay)}/{ESSAY_WORD_TARGET} words (approx.)"
    )
    return essay


def request_submit(state: AppState) -> None:
    """Button callback marking a submission as pending.

    Callbacks run before the script, so the run that performs the send draws
    the submit button disabled.
    """

    state.submitting = True


def render_submit_button(state: AppState) -> None:
    st.button(
        "Submitting..." if state.submitting else "Submit Application",
        type="primary",
        disabled=state.submitting,
        key="submit_application",
        on_click=request_submit,
        args=(state,),
    )


def send_application(
    form: ApplicationForm,
    questions: Sequence[Question],
    settings: AppSettings,
    relay: EmailRelay,
) -> SubmissionOutcome:
    """Build both notification emails and dispatch them together."""

    confirmation = build_confirmation_email(form)
    admin = build_admin_email(form, questions, admin_email=settings.admin_email)
    return dispatch_notifications(relay, confirmation, admin)


def handle_submit(
    form: ApplicationForm,
    state: AppState,
    settings: AppSettings,
    *,
    relay: Optional[EmailRelay] = None,
) -> Notice:
    """Validate ``form`` and send it, returning the notice to display.

    Validation problems come back as one aggregated error notice and nothing
    is sent. The pending flag is cleared however the attempt ends.
    """

    try:
        errors = validate_application(form, state.questions)
        if errors:
            return (ERROR, VALIDATION_ERROR_TITLE, ", ".join(errors))

        relay = relay or EmailRelay.from_settings(settings)
        with st.spinner("Submitting..."):
            outcome = send_application(form, state.questions, settings, relay)
        return outcome_message(
            outcome,
            applicant_email=form.email.strip(),
            admin_email=settings.admin_email,
        )
    except Exception:  # pylint: disable=broad-except
        logger.exception("Application submission failed")
        return GENERIC_FAILURE
    finally:
        state.submitting = False


def complete_submission(
    form: ApplicationForm,
    state: AppState,
    settings: AppSettings,
    *,
    relay: Optional[EmailRelay] = None,
    session: Optional[MutableMapping[str, Any]] = None,
) -> Notice:
    """Run the pending submission and queue its notice for the next run.

    The form is cleared unless the notice is an error, so failed attempts keep
    the applicant's answers.
    """

    notice = handle_submit(form, state, settings, relay=relay)
    flash_notice(notice, session)
    if notice[0] != ERROR:
        request_form_reset(session)
    return notice


def main() -> None:
    """Render the application form."""

    settings = load_settings()
    configure_logging(settings.log_level)
    state = get_app_state(title_path=settings.title_config_path)
    titles = state.titles

    apply_app_theme(page_title=titles.form_title, page_icon="🎓")
    apply_pending_reset()

    _, col_edit = st.columns([4, 1])
    with col_edit:
        if st.button("⚙️ Edit Questions", key="edit_questions", disabled=state.submitting):
            request_form_reset()
            navigate(edit_destination(state))
    page_header(titles.form_title, titles.form_subtitle)

    pending_notice = pop_flash_notice()
    if pending_notice:
        show_notice(pending_notice)

    questions = list(state.questions)
    with form_card(titles.card_title) as card:
        with card:
            personal = render_personal_information()

            answers: Dict[str, str] = {}
            if questions:
                st.divider()
                section_title("Questions")
                for question in questions:
                    answers[question.id] = render_question(question)

            st.divider()
            essay = render_essay(titles.essay_title, titles.essay_question)

            form = ApplicationForm(answers=answers, essay_response=essay, **personal)

            st.divider()
            col_export, col_submit = st.columns(2)
            with col_export:
                st.download_button(
                    "⬇️ Export CSV",
                    data=build_csv(form, questions),
                    file_name=CSV_FILENAME,
                    mime="text/csv",
                )
            with col_submit:
                render_submit_button(state)

    if state.submitting:
        complete_submission(form, state, settings)
        st.rerun()


if __name__ == "__main__":
    main()
