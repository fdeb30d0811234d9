"""Applicant form data, validation, and CSV export."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field, replace
from typing import Dict, List, Sequence

import pandas as pd

from lib.questions import Question
from lib.schema_defaults import CHARACTERS_PER_WORD

PERSONAL_COLUMNS = ("Full Name", "Email", "Address", "Phone")
ESSAY_COLUMN = "Essay Response"


@dataclass(frozen=True)
class ApplicationForm:
    """Everything an applicant has entered during one visit to the form."""

    full_name: str = ""
    email: str = ""
    address: str = ""
    phone: str = ""
    answers: Dict[str, str] = field(default_factory=dict)
    essay_response: str = ""

    def answer_for(self, question_id: str) -> str:
        return self.answers.get(question_id) or ""

    def with_answer(self, question_id: str, value: str) -> "ApplicationForm":
        answers = dict(self.answers)
        answers[question_id] = value
        return replace(self, answers=answers)


def validate_application(form: ApplicationForm, questions: Sequence[Question]) -> List[str]:
    """Return every validation problem with ``form``, in display order."""

    errors: List[str] = []
    if not form.full_name.strip():
        errors.append("Full name is required")
    if not form.email.strip():
        errors.append("Email is required")
    if "@" not in form.email:
        errors.append("Email must be valid")

    for question in questions:
        if question.required and not form.answer_for(question.id).strip():
            errors.append(f"{question.text} is required")

    return errors


def approximate_word_count(text: str) -> int:
    """Estimate words as one per six characters."""

    return len(text) // CHARACTERS_PER_WORD


def remaining_characters(text: str, limit: int) -> int:
    return max(limit - len(text), 0)


def csv_headers(questions: Sequence[Question]) -> List[str]:
    return [*PERSONAL_COLUMNS, *(question.text for question in questions), ESSAY_COLUMN]


def csv_values(form: ApplicationForm, questions: Sequence[Question]) -> List[str]:
    return [
        form.full_name,
        form.email,
        form.address,
        form.phone,
        *(form.answer_for(question.id) for question in questions),
        form.essay_response,
    ]


def build_csv(form: ApplicationForm, questions: Sequence[Question]) -> str:
    """Serialise ``form`` as a header row and one fully quoted value row."""

    header = ",".join(csv_headers(questions))
    frame = pd.DataFrame([csv_values(form, questions)], dtype=str)
    values = frame.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    return header + "\n" + values.rstrip("\n")
