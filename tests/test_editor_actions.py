"""Tests for the save actions on the question editor page."""

from __future__ import annotations

import importlib


def _setup(monkeypatch, tmp_path):
    editor = importlib.import_module("pages.02_Question_Editor")
    messages = {"success": [], "error": []}
    monkeypatch.setattr(editor.st, "success", lambda message: messages["success"].append(message))
    monkeypatch.setattr(editor.st, "error", lambda message: messages["error"].append(message))
    state = importlib.import_module("lib.app_state").AppState()
    settings = importlib.import_module("lib.settings").AppSettings(
        title_config_path=tmp_path / "titles.json"
    )
    return editor, state, settings, messages


def test_editor_drafts_are_copies_of_committed_state(monkeypatch, tmp_path) -> None:
    editor, state, _, _ = _setup(monkeypatch, tmp_path)
    questions = importlib.import_module("lib.questions")
    session = {}

    drafts, titles = editor.editor_drafts(state, session)
    drafts.append(questions.Question(id="extra", text="Extra"))

    assert titles is state.titles
    assert "extra" not in [question.id for question in state.questions]

    editor.discard_drafts(session)
    assert session == {}


def test_save_questions_drops_blank_text(monkeypatch, tmp_path) -> None:
    editor, state, _, _ = _setup(monkeypatch, tmp_path)
    app_state = importlib.import_module("lib.app_state")
    questions = importlib.import_module("lib.questions")
    session = {}
    drafts = [
        questions.Question(id="keep", text="Why this school?"),
        questions.Question(id="blank", text="   "),
    ]

    cleaned = editor.save_questions(state, drafts, session)

    assert [question.id for question in cleaned] == ["keep"]
    assert [question.id for question in state.questions] == ["keep"]
    assert app_state.pop_flash_notice(session) == editor.QUESTIONS_SAVED_NOTICE


def test_save_titles_rejects_empty_fields_without_changes(monkeypatch, tmp_path) -> None:
    editor, state, settings, messages = _setup(monkeypatch, tmp_path)
    title_store = importlib.import_module("lib.title_store")
    original = state.titles
    invalid = title_store.update_title(original, "card_title", " ")

    saved = editor.save_titles(state, invalid, settings, {})

    assert saved is False
    assert state.titles is original
    assert not settings.title_config_path.exists()
    assert any("Card title cannot be empty." in message for message in messages["error"])


def test_save_titles_commits_and_persists(monkeypatch, tmp_path) -> None:
    editor, state, settings, _ = _setup(monkeypatch, tmp_path)
    app_state = importlib.import_module("lib.app_state")
    title_store = importlib.import_module("lib.title_store")
    titles = title_store.update_title(state.titles, "form_title", "Apply Today")
    session = {}

    assert editor.save_titles(state, titles, settings, session) is True

    assert state.titles.form_title == "Apply Today"
    assert title_store.load_title_config(settings.title_config_path).form_title == "Apply Today"
    assert app_state.pop_flash_notice(session) == editor.TITLES_SAVED_NOTICE


def test_save_all_aborts_when_titles_are_invalid(monkeypatch, tmp_path) -> None:
    editor, state, settings, _ = _setup(monkeypatch, tmp_path)
    questions = importlib.import_module("lib.questions")
    title_store = importlib.import_module("lib.title_store")
    original_questions = list(state.questions)
    invalid = title_store.update_title(state.titles, "editor_subtitle", "")

    saved = editor.save_all(state, [questions.Question(id="q", text="New")], invalid, settings, {})

    assert saved is False
    assert state.questions == original_questions


def test_save_all_commits_questions_and_titles(monkeypatch, tmp_path) -> None:
    editor, state, settings, _ = _setup(monkeypatch, tmp_path)
    app_state = importlib.import_module("lib.app_state")
    questions = importlib.import_module("lib.questions")
    title_store = importlib.import_module("lib.title_store")
    titles = title_store.update_title(state.titles, "essay_title", "Tell us more")
    session = {}

    saved = editor.save_all(
        state,
        [questions.Question(id="q", text="New"), questions.Question(id="b", text="")],
        titles,
        settings,
        session,
    )

    assert saved is True
    assert [question.id for question in state.questions] == ["q"]
    assert state.titles.essay_title == "Tell us more"
    assert app_state.pop_flash_notice(session) == editor.ALL_SAVED_NOTICE


def test_save_titles_reports_write_failure_and_keeps_session_titles(monkeypatch, tmp_path) -> None:
    editor, state, settings, messages = _setup(monkeypatch, tmp_path)
    app_state = importlib.import_module("lib.app_state")
    title_store = importlib.import_module("lib.title_store")
    titles = title_store.update_title(state.titles, "card_title", "Spring 2026")
    session = {}

    def read_only_disk(*args, **kwargs):
        raise OSError("read-only file system")

    monkeypatch.setattr(app_state, "save_title_config", read_only_disk)

    saved = editor.save_titles(state, titles, settings, session)

    assert saved is False
    assert state.titles.card_title == "Spring 2026"
    assert any("could not be saved" in message for message in messages["error"])
    assert app_state.pop_flash_notice(session) is None


def test_questions_frame_summarises_drafts(monkeypatch, tmp_path) -> None:
    editor, state, _, _ = _setup(monkeypatch, tmp_path)

    frame = editor.questions_frame(state.questions)

    assert list(frame["Type"]) == ["Yes/No", "Short Text", "Yes/No", "Short Text"]
    assert list(frame["ID"])[0] == "member_question"
