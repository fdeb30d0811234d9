"""Tests for the admin email gate and its page handler."""

from __future__ import annotations

import contextlib
import importlib

import pytest


@pytest.mark.parametrize(
    "email",
    ["DLJackson1277@gmail.com", "dljackson1277@gmail.com", "DLJACKSON1277@GMAIL.COM"],
)
def test_authorized_email_in_any_casing_is_granted(email) -> None:
    gate = importlib.import_module("lib.admin_gate")

    assert gate.is_authorized_email(email) is True


@pytest.mark.parametrize(
    "email",
    ["", "someone@example.com", "dljackson1277@gmail.co", " dljackson1277@gmail.com"],
)
def test_other_strings_are_denied(email) -> None:
    gate = importlib.import_module("lib.admin_gate")

    assert gate.is_authorized_email(email) is False


def test_empty_authorized_address_denies_everyone() -> None:
    gate = importlib.import_module("lib.admin_gate")

    assert gate.is_authorized_email("", authorized="") is False


def _patch_streamlit(monkeypatch, page):
    messages = {"success": [], "error": []}
    monkeypatch.setattr(page.st, "spinner", lambda *args, **kwargs: contextlib.nullcontext())
    monkeypatch.setattr(page.st, "success", lambda message: messages["success"].append(message))
    monkeypatch.setattr(page.st, "error", lambda message: messages["error"].append(message))
    return messages


def test_attempt_login_flags_session_after_delay(monkeypatch) -> None:
    page = importlib.import_module("pages.01_Admin_Access")
    app_state = importlib.import_module("lib.app_state")
    settings = importlib.import_module("lib.settings").AppSettings(auth_delay_seconds=0.25)
    messages = _patch_streamlit(monkeypatch, page)
    delays = []
    state = app_state.AppState()
    session = {}

    granted = page.attempt_login(
        "DLJackson1277@gmail.com", state, settings, sleep=delays.append, session=session
    )

    assert granted is True
    assert state.authenticated is True
    assert delays == [0.25]
    assert app_state.pop_flash_notice(session) == page.ACCESS_GRANTED_NOTICE
    assert not messages["error"]


def test_attempt_login_denies_other_addresses(monkeypatch) -> None:
    page = importlib.import_module("pages.01_Admin_Access")
    app_state = importlib.import_module("lib.app_state")
    settings = importlib.import_module("lib.settings").AppSettings()
    messages = _patch_streamlit(monkeypatch, page)
    state = app_state.AppState()

    granted = page.attempt_login("intruder@example.com", state, settings, sleep=lambda _: None)

    assert granted is False
    assert state.authenticated is False
    assert any("Access denied" in message for message in messages["error"])
