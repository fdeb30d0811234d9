"""Helpers for loading, validating, and persisting the editable page titles."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping

from lib.schema_defaults import (
    DEFAULT_CARD_TITLE,
    DEFAULT_EDITOR_SUBTITLE,
    DEFAULT_EDITOR_TITLE,
    DEFAULT_ESSAY_QUESTION,
    DEFAULT_ESSAY_TITLE,
    DEFAULT_FORM_SUBTITLE,
    DEFAULT_FORM_TITLE,
)

logger = logging.getLogger(__name__)

TITLE_CONFIG_FILENAME = "title_config.json"
TITLE_CONFIG_PATH = Path("settings") / TITLE_CONFIG_FILENAME


@dataclass(frozen=True)
class TitleConfig:
    """Page copy shown on the form and the editor."""

    form_title: str = DEFAULT_FORM_TITLE
    form_subtitle: str = DEFAULT_FORM_SUBTITLE
    card_title: str = DEFAULT_CARD_TITLE
    essay_title: str = DEFAULT_ESSAY_TITLE
    essay_question: str = DEFAULT_ESSAY_QUESTION
    editor_title: str = DEFAULT_EDITOR_TITLE
    editor_subtitle: str = DEFAULT_EDITOR_SUBTITLE

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


TITLE_FIELD_LABELS: Dict[str, str] = {
    "form_title": "Form title",
    "form_subtitle": "Form subtitle",
    "card_title": "Card title",
    "essay_title": "Essay title",
    "essay_question": "Essay question",
    "editor_title": "Editor title",
    "editor_subtitle": "Editor subtitle",
}

TITLE_FIELDS = tuple(item.name for item in fields(TitleConfig))


def titles_from_mapping(payload: Mapping[str, Any]) -> TitleConfig:
    """Build a config from ``payload`` using defaults for missing keys."""

    defaults = TitleConfig()
    values = {
        name: str(payload[name]) if payload.get(name) is not None else getattr(defaults, name)
        for name in TITLE_FIELDS
    }
    return TitleConfig(**values)


def update_title(titles: TitleConfig, field_name: str, value: str) -> TitleConfig:
    """Return a copy of ``titles`` with ``field_name`` set to ``value``."""

    if field_name not in TITLE_FIELDS:
        raise ValueError(f"Unknown title field: {field_name}")
    return replace(titles, **{field_name: "" if value is None else str(value)})


def validate_titles(titles: TitleConfig) -> List[str]:
    """Return one error per title field that is empty after trimming."""

    errors: List[str] = []
    for name in TITLE_FIELDS:
        if not str(getattr(titles, name)).strip():
            errors.append(f"{TITLE_FIELD_LABELS[name]} cannot be empty.")
    return errors


def load_title_config(path: Path = TITLE_CONFIG_PATH) -> TitleConfig:
    """Read the stored titles, falling back to the defaults on any problem."""

    if not path.exists():
        return TitleConfig()

    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read title config from %s: %s", path, exc)
        return TitleConfig()

    if not isinstance(payload, Mapping):
        logger.warning("Ignoring title config at %s: expected a JSON object", path)
        return TitleConfig()

    return titles_from_mapping(payload)


def save_title_config(titles: TitleConfig, path: Path = TITLE_CONFIG_PATH) -> Path:
    """Write ``titles`` to ``path`` as JSON and return the path."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(titles.to_dict(), handle, indent=2)
    logger.info("Saved title config to %s", path)
    return path


__all__ = [
    "TITLE_CONFIG_PATH",
    "TITLE_FIELDS",
    "TITLE_FIELD_LABELS",
    "TitleConfig",
    "load_title_config",
    "save_title_config",
    "titles_from_mapping",
    "update_title",
    "validate_titles",
]
