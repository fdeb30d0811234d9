"""Library helpers for the scholarship application form."""

from .questions import Question, QuestionType  # noqa: F401
from .title_store import TitleConfig  # noqa: F401
