"""Question records and the list operations used by the editor."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from lib.schema_defaults import (
    DEFAULT_MAX_LENGTH,
    MAX_MAX_LENGTH,
    MIN_MAX_LENGTH,
    default_question_payloads,
)


class QuestionType(str, Enum):
    """The closed set of input kinds a dynamic question can use."""

    SHORT_TEXT = "text"
    LONG_TEXT = "textarea"
    YES_NO = "radio"

    @property
    def label(self) -> str:
        return QUESTION_TYPE_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> "QuestionType":
        """Return the member for ``value``, defaulting to ``SHORT_TEXT``."""

        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if text in {member.value, member.name.lower()}:
                return member
        return _TYPE_ALIASES.get(text, cls.SHORT_TEXT)


QUESTION_TYPE_LABELS = {
    QuestionType.SHORT_TEXT: "Short Text",
    QuestionType.LONG_TEXT: "Long Text",
    QuestionType.YES_NO: "Yes/No",
}

_TYPE_ALIASES = {
    "short-text": QuestionType.SHORT_TEXT,
    "long-text": QuestionType.LONG_TEXT,
    "yes/no": QuestionType.YES_NO,
    "yes_no": QuestionType.YES_NO,
    "bool": QuestionType.YES_NO,
}

YES_NO_CHOICES = ("yes", "no")
EDITABLE_FIELDS = ("text", "type", "required", "max_length")


def _coerce_max_length(value: Any) -> int:
    """Convert ``value`` into a character limit inside the allowed bounds."""

    try:
        limit = int(value)
    except (TypeError, ValueError):
        return DEFAULT_MAX_LENGTH
    return max(MIN_MAX_LENGTH, min(MAX_MAX_LENGTH, limit))


@dataclass(frozen=True)
class Question:
    """A data-driven form field shown in the questions section."""

    id: str
    text: str = ""
    type: QuestionType = QuestionType.SHORT_TEXT
    required: bool = False
    max_length: int = field(default=DEFAULT_MAX_LENGTH)

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "type": self.type.value,
            "required": self.required,
            "maxLength": self.max_length,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Question":
        """Build a question from a stored mapping, tolerating missing keys."""

        max_length = payload.get("maxLength", payload.get("max_length"))
        return cls(
            id=str(payload.get("id") or ""),
            text=str(payload.get("text") or ""),
            type=QuestionType.parse(payload.get("type")),
            required=bool(payload.get("required", False)),
            max_length=DEFAULT_MAX_LENGTH if max_length is None else _coerce_max_length(max_length),
        )


def default_questions() -> List[Question]:
    """Return the questions shown before any edits are saved."""

    return [Question.from_dict(payload) for payload in default_question_payloads()]


def generate_question_id(
    existing: Sequence[Question], *, now: Optional[float] = None
) -> str:
    """Return a ``question_<millis>`` id that is not used in ``existing``."""

    timestamp = time.time() if now is None else now
    base = f"question_{int(timestamp * 1000)}"
    taken = {question.id for question in existing}
    candidate = base
    suffix = 1
    while candidate in taken:
        candidate = f"{base}_{suffix}"
        suffix += 1
    return candidate


def add_question(
    questions: Sequence[Question], *, now: Optional[float] = None
) -> List[Question]:
    """Return ``questions`` with a new blank short-text question appended."""

    new_question = Question(id=generate_question_id(questions, now=now))
    return [*questions, new_question]


def remove_question(questions: Sequence[Question], question_id: str) -> List[Question]:
    """Return ``questions`` without the entry identified by ``question_id``."""

    return [question for question in questions if question.id != question_id]


def update_question(
    questions: Sequence[Question], question_id: str, field_name: str, value: Any
) -> List[Question]:
    """Return ``questions`` with one field of one question replaced."""

    if field_name not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown question field: {field_name}")

    if field_name == "type":
        value = QuestionType.parse(value)
    elif field_name == "required":
        value = bool(value)
    elif field_name == "max_length":
        value = _coerce_max_length(value)
    else:
        value = "" if value is None else str(value)

    return [
        replace(question, **{field_name: value}) if question.id == question_id else question
        for question in questions
    ]


def move_question(
    questions: Sequence[Question], question_id: str, offset: int
) -> List[Question]:
    """Move the question with ``question_id`` by ``offset`` positions."""

    reordered = list(questions)
    index = next(
        (idx for idx, question in enumerate(reordered) if question.id == question_id),
        None,
    )
    if index is None:
        return reordered

    target = index + offset
    if target < 0 or target >= len(reordered):
        return reordered

    reordered[index], reordered[target] = reordered[target], reordered[index]
    return reordered


def clean_questions(questions: Sequence[Question]) -> List[Question]:
    """Drop questions whose text is empty once whitespace is removed."""

    return [question for question in questions if not question.is_blank]
