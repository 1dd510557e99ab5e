"""Tests for the console front end driving a manager session."""

from __future__ import annotations

import io
from functools import partial

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.app.api.dependencies import get_password_store
from backend.app.api.routers import passwords
from backend.app.domain.passwords import InMemoryPasswordStore
from backend.app.manager import ManagerSession, PasswordsApiClient
from scripts.manager_shell import ManagerShell, ask_yes_no, render_table

pytestmark = [pytest.mark.manager]


def _shell(
    store: InMemoryPasswordStore, answers: list[str]
) -> tuple[ManagerShell, io.StringIO, list[str]]:
    app = FastAPI()
    app.include_router(passwords.router)
    app.dependency_overrides[get_password_store] = lambda: store
    replies = iter(answers)
    prompts: list[str] = []

    def read(prompt: str) -> str:
        prompts.append(prompt)
        return next(replies)

    session = ManagerSession(
        PasswordsApiClient(http_client=TestClient(app)),
        confirm=partial(ask_yes_no, read),
        copy_to_clipboard=lambda text: None,
        id_factory=lambda: "fixed-id",
    )
    out = io.StringIO()
    return ManagerShell(session, read=read, out=out), out, prompts


def test_render_table_masks_passwords():
    store = InMemoryPasswordStore()
    store.insert({"id": "a1", "site": "mail.com", "username": "alice1", "password": "secret1"})
    shell, _, _ = _shell(store, [])
    shell.session.load()

    table = render_table(shell.session.rows())

    assert "*******" in table
    assert "secret1" not in table


def test_new_command_saves_through_the_api():
    store = InMemoryPasswordStore()
    shell, out, _ = _shell(store, ["mail.com", "alice1", "secret1"])

    assert shell.handle("new") is True

    assert store.list_documents() == [
        {"id": "fixed-id", "site": "mail.com", "username": "alice1", "password": "secret1"}
    ]
    assert "[*] Password saved!" in out.getvalue()


def test_new_command_prints_field_errors():
    store = InMemoryPasswordStore()
    shell, out, _ = _shell(store, ["abc", "alice1", "secret1"])

    shell.handle("new")

    assert store.list_documents() == []
    assert "site: Site must be at least 4 characters." in out.getvalue()


def test_quit_and_unknown_commands():
    shell, out, _ = _shell(InMemoryPasswordStore(), [])

    assert shell.handle("bogus") is True
    assert "Unknown command" in out.getvalue()
    assert shell.handle("quit") is False


def test_render_table_reports_empty_list():
    assert render_table([]) == "No passwords saved yet."


@pytest.mark.parametrize("answer, remaining", [("y", []), ("n", ["a1"])])
def test_delete_command_asks_through_the_shell_reader(answer, remaining):
    store = InMemoryPasswordStore()
    store.insert({"id": "a1", "site": "mail.com", "username": "alice1", "password": "secret1"})
    shell, _, prompts = _shell(store, [answer])

    shell.handle("delete a1")

    assert prompts == ["Delete password? [y/N] "]
    assert [doc["id"] for doc in store.list_documents()] == remaining
