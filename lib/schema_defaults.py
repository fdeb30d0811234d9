"""Default values shared between the application form and the editor."""

from __future__ import annotations

from typing import Dict, List

DEFAULT_FORM_TITLE = "Application Form"
DEFAULT_FORM_SUBTITLE = "Scholarship | Spring Chapel MBC"
DEFAULT_CARD_TITLE = "Scholarship Application"
DEFAULT_ESSAY_TITLE = "Essay Question"
DEFAULT_ESSAY_QUESTION = "How would a scholarship benefit you in your educational pursuits?"
DEFAULT_EDITOR_TITLE = "Question Editor"
DEFAULT_EDITOR_SUBTITLE = "Customize the scholarship application questions"

DEFAULT_MAX_LENGTH = 1500
MIN_MAX_LENGTH = 100
MAX_MAX_LENGTH = 5000

ESSAY_MAX_LENGTH = 1500
ESSAY_WORD_TARGET = 250
CHARACTERS_PER_WORD = 6

CSV_FILENAME = "scholarship-application.csv"
NOT_ANSWERED_LABEL = "Not answered"

DEFAULT_QUESTIONS: tuple[Dict[str, object], ...] = (
    {
        "id": "member_question",
        "text": "Are you a member of Spring Chapel MBC?",
        "type": "radio",
        "required": False,
    },
    {
        "id": "membership_duration",
        "text": "If so, how long have you been a member?",
        "type": "text",
        "required": False,
    },
    {
        "id": "college_plans",
        "text": "Do you plan to attend college in the Fall?",
        "type": "radio",
        "required": False,
    },
    {
        "id": "college_location",
        "text": "If so, where?",
        "type": "text",
        "required": False,
    },
)


def default_question_payloads() -> List[Dict[str, object]]:
    """Return mutable copies of the built-in question payloads."""

    return [dict(payload) for payload in DEFAULT_QUESTIONS]
