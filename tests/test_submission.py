"""Tests for building and dispatching the notification emails."""

from __future__ import annotations

import importlib
import threading
from datetime import datetime, timezone

import pytest


def _module():
    return importlib.import_module("lib.submission")


class RecordingRelay:
    """Relay stub whose result depends on the recipient."""

    def __init__(self, results):
        self.results = results
        self.sent = []
        self._lock = threading.Lock()

    def send(self, email):
        with self._lock:
            self.sent.append(email)
        result = self.results[email.to]
        if isinstance(result, Exception):
            raise result
        return result


def _form(**overrides):
    application = importlib.import_module("lib.application")
    values = {"full_name": "Jane Doe", "email": "jane@x.com", "essay_response": "Hi"}
    values.update(overrides)
    return application.ApplicationForm(**values)


def test_confirmation_email_is_addressed_to_applicant() -> None:
    email = _module().build_confirmation_email(_form(email=" jane@x.com "))

    assert email.to == "jane@x.com"
    assert "Jane Doe" in email.message


def test_admin_email_lists_answers_and_unanswered_questions() -> None:
    module = _module()
    questions = importlib.import_module("lib.questions")
    answered = questions.Question(id="q1", text="Member?")
    skipped = questions.Question(id="q2", text="Where?")
    submitted_at = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

    email = module.build_admin_email(
        _form(answers={"q1": "yes"}, phone="555-1234"),
        [answered, skipped],
        admin_email="admin@example.com",
        submitted_at=submitted_at,
    )

    assert email.to == "admin@example.com"
    assert "Jane Doe" in email.subject
    assert "Member?: yes" in email.message
    assert "Where?: Not answered" in email.message
    assert "Phone: 555-1234" in email.message
    assert "Hi" in email.message
    assert "Submitted: 2024-05-01T12:30:00+00:00" in email.message


@pytest.mark.parametrize(
    ("confirmation_result", "admin_result", "expected"),
    [
        (True, True, (True, True)),
        (True, False, (True, False)),
        (False, True, (False, True)),
        (False, False, (False, False)),
        (RuntimeError("boom"), True, (False, True)),
    ],
)
def test_dispatch_notifications_collects_both_outcomes(
    confirmation_result, admin_result, expected
) -> None:
    module = _module()
    relay = RecordingRelay({"jane@x.com": confirmation_result, "admin@example.com": admin_result})
    confirmation = module.EmailMessage(to="jane@x.com", subject="c", message="c")
    admin = module.EmailMessage(to="admin@example.com", subject="a", message="a")

    outcome = module.dispatch_notifications(relay, confirmation, admin)

    assert (outcome.confirmation_sent, outcome.admin_notified) == expected
    assert {email.to for email in relay.sent} == {"jane@x.com", "admin@example.com"}


def test_outcome_messages_are_distinct_for_each_branch() -> None:
    module = _module()
    messages = {
        (confirmation, admin): module.outcome_message(
            module.SubmissionOutcome(confirmation, admin),
            applicant_email="jane@x.com",
            admin_email="admin@example.com",
        )
        for confirmation in (True, False)
        for admin in (True, False)
    }

    assert messages[(True, True)][0] == module.SUCCESS
    assert messages[(True, False)][0] == module.WARNING
    assert "still be contacted" in messages[(True, False)][2]
    assert messages[(False, True)][0] == module.WARNING
    assert "reached the administrator" in messages[(False, True)][2]
    assert messages[(False, False)][0] == module.ERROR
    assert "admin@example.com" in messages[(False, False)][2]
    assert len({title for _, title, _ in messages.values()}) == 4
