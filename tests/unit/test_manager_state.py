"""Tests for the manager's typed entry and reconciliation helpers."""

from __future__ import annotations

import pytest

from backend.app.manager import (
    Entry,
    FormState,
    build_entry_map,
    mask_password,
    reconcile_entries,
    remove_entry,
    validate_form,
)

pytestmark = [pytest.mark.manager]


def _entry(entry_id: str, site: str = "mail.com") -> Entry:
    return Entry(id=entry_id, site=site, username="alice1", password="secret1")


def test_validate_form_accepts_four_character_fields():
    form = FormState(site="abcd", username="user", password="pass")

    assert validate_form(form) == {}


@pytest.mark.parametrize("field_name", ["site", "username", "password"])
def test_validate_form_flags_each_short_field(field_name):
    form = FormState(site="mail.com", username="alice1", password="secret1")
    form = form.with_field(field_name, "abc")

    errors = validate_form(form)

    assert list(errors) == [field_name]
    assert errors[field_name].endswith("must be at least 4 characters.")


def test_validate_form_reports_every_empty_field():
    assert validate_form(FormState()) == {
        "site": "Site must be at least 4 characters.",
        "username": "Username must be at least 4 characters.",
        "password": "Password must be at least 4 characters.",
    }


def test_form_rejects_unknown_field():
    with pytest.raises(KeyError):
        FormState().with_field("notes", "value")


def test_reconcile_replaces_in_place_and_appends_new():
    entries = build_entry_map([_entry("a"), _entry("b")])

    replaced = reconcile_entries(entries, _entry("a", site="edited.com"))
    appended = reconcile_entries(replaced, _entry("c"))

    assert list(replaced) == ["a", "b"]
    assert replaced["a"].site == "edited.com"
    assert list(appended) == ["a", "b", "c"]
    assert entries["a"].site == "mail.com"


def test_build_entry_map_keeps_first_document_for_repeated_ids():
    entries = build_entry_map(
        [_entry("a", site="early.com"), _entry("b"), _entry("a", site="late.com")]
    )

    assert list(entries) == ["a", "b"]
    assert entries["a"].site == "early.com"


def test_remove_entry_ignores_unknown_ids():
    entries = build_entry_map([_entry("a")])

    assert list(remove_entry(entries, "missing")) == ["a"]
    assert list(remove_entry(entries, "a")) == []


def test_entry_from_document_tolerates_missing_fields():
    entry = Entry.from_document({"id": "x", "site": "s.com", "_id": "ignored"})

    assert entry == Entry(id="x", site="s.com", username="", password="")
    assert entry.to_document() == {
        "id": "x",
        "site": "s.com",
        "username": "",
        "password": "",
    }


def test_mask_password_matches_length():
    assert mask_password("secret1") == "*******"
    assert mask_password("") == ""
