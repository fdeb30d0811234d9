"""Build and dispatch the two notification emails for a submitted application."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from lib.application import ApplicationForm
from lib.email_relay import EmailMessage, EmailRelay
from lib.questions import Question
from lib.schema_defaults import NOT_ANSWERED_LABEL

logger = logging.getLogger(__name__)

SUCCESS = "success"
WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True)
class SubmissionOutcome:
    """Which of the two notification emails the relay accepted."""

    confirmation_sent: bool
    admin_notified: bool


def build_confirmation_email(form: ApplicationForm) -> EmailMessage:
    """Return the message that confirms receipt to the applicant."""

    name = form.full_name.strip()
    body = "\n".join(
        [
            f"Dear {name},",
            "",
            "Thank you for submitting your scholarship application. "
            "We have received your responses and will be in touch soon.",
            "",
            "Best regards,",
            "The Scholarship Committee",
        ]
    )
    return EmailMessage(
        to=form.email.strip(),
        subject="Scholarship Application Received",
        message=body,
    )


def build_admin_email(
    form: ApplicationForm,
    questions: Sequence[Question],
    *,
    admin_email: str,
    submitted_at: Optional[datetime] = None,
) -> EmailMessage:
    """Return the full-data notification addressed to the administrator."""

    timestamp = (submitted_at or datetime.now(timezone.utc)).isoformat()
    lines = [
        "A new scholarship application has been submitted.",
        "",
        "PERSONAL INFORMATION",
        f"Full Name: {form.full_name}",
        f"Email: {form.email}",
        f"Address: {form.address or NOT_ANSWERED_LABEL}",
        f"Phone: {form.phone or NOT_ANSWERED_LABEL}",
    ]
    if questions:
        lines.extend(["", "QUESTIONS"])
        for question in questions:
            answer = form.answer_for(question.id).strip() or NOT_ANSWERED_LABEL
            lines.append(f"{question.text}: {answer}")
    lines.extend(
        [
            "",
            "ESSAY RESPONSE",
            form.essay_response or NOT_ANSWERED_LABEL,
            "",
            f"Submitted: {timestamp}",
        ]
    )
    return EmailMessage(
        to=admin_email,
        subject=f"New Scholarship Application - {form.full_name.strip()}",
        message="\n".join(lines),
    )


def _settled(future: "Future[bool]", label: str) -> bool:
    """Return the future's result, treating a raised exception as a failed send."""

    error = future.exception()
    if error is not None:
        logger.warning("Sending the %s email raised: %s", label, error)
        return False
    return bool(future.result())


def dispatch_notifications(
    relay: EmailRelay, confirmation: EmailMessage, admin: EmailMessage
) -> SubmissionOutcome:
    """Send both emails concurrently and wait for both, whatever happens."""

    with ThreadPoolExecutor(max_workers=2) as executor:
        confirmation_future = executor.submit(relay.send, confirmation)
        admin_future = executor.submit(relay.send, admin)
        outcome = SubmissionOutcome(
            confirmation_sent=_settled(confirmation_future, "confirmation"),
            admin_notified=_settled(admin_future, "admin"),
        )

    logger.info(
        "Submission dispatched (confirmation=%s, admin=%s)",
        outcome.confirmation_sent,
        outcome.admin_notified,
    )
    return outcome


def outcome_message(
    outcome: SubmissionOutcome, *, applicant_email: str, admin_email: str
) -> Tuple[str, str, str]:
    """Return ``(level, title, description)`` for one of the four send results."""

    if outcome.confirmation_sent and outcome.admin_notified:
        return (
            SUCCESS,
            "Application submitted successfully!",
            f"Your application has been received. A confirmation email was sent to {applicant_email}.",
        )
    if outcome.confirmation_sent:
        return (
            WARNING,
            "Application sent with issues",
            "Your confirmation email was sent, but the administrator copy may be missing. "
            "Don't worry, you will still be contacted about your application.",
        )
    if outcome.admin_notified:
        return (
            WARNING,
            "Application received",
            "Your application reached the administrator, but we could not send "
            f"your confirmation email to {applicant_email}.",
        )
    return (
        ERROR,
        "Submission failed",
        f"We could not send your application. Please try again or contact {admin_email} directly.",
    )


GENERIC_FAILURE = (
    ERROR,
    "Submission error",
    "Something went wrong while submitting your application. Please try again.",
)
