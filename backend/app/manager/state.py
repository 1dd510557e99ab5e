"""Typed view state for the manager: entries, form and reconciliation helpers."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Iterable, Mapping

__all__ = [
    "Entry",
    "FormState",
    "MIN_FIELD_LENGTH",
    "build_entry_map",
    "mask_password",
    "reconcile_entries",
    "remove_entry",
    "validate_form",
]

MIN_FIELD_LENGTH = 4
FIELD_LABELS: Dict[str, str] = {
    "site": "Site",
    "username": "Username",
    "password": "Password",
}


@dataclass(frozen=True)
class Entry:
    """One stored site/username/password record."""

    id: str
    site: str
    username: str
    password: str

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Entry":
        """Build from a stored document; missing fields read as empty strings."""

        return cls(
            id=str(document.get("id") or ""),
            site=str(document.get("site") or ""),
            username=str(document.get("username") or ""),
            password=str(document.get("password") or ""),
        )

    def to_document(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class FormState:
    """Contents of the entry form; an empty ``id`` means a new entry."""

    site: str = ""
    username: str = ""
    password: str = ""
    id: str = ""

    @property
    def is_editing(self) -> bool:
        return bool(self.id)

    @classmethod
    def from_entry(cls, entry: Entry) -> "FormState":
        return cls(
            site=entry.site,
            username=entry.username,
            password=entry.password,
            id=entry.id,
        )

    def with_field(self, name: str, value: str) -> "FormState":
        if name not in FIELD_LABELS:
            raise KeyError(f"Unknown form field: {name}")
        return replace(self, **{name: value})

    def to_entry(self, entry_id: str) -> Entry:
        return Entry(
            id=entry_id,
            site=self.site,
            username=self.username,
            password=self.password,
        )


def validate_form(form: FormState) -> Dict[str, str]:
    """Return field -> message for every field shorter than ``MIN_FIELD_LENGTH``."""

    errors: Dict[str, str] = {}
    for name, label in FIELD_LABELS.items():
        value = getattr(form, name)
        if not value or len(value) < MIN_FIELD_LENGTH:
            errors[name] = f"{label} must be at least {MIN_FIELD_LENGTH} characters."
    return errors


def mask_password(password: str) -> str:
    return "*" * len(password)


def build_entry_map(entries: Iterable[Entry]) -> "OrderedDict[str, Entry]":
    """Key entries by id in list order; a repeated id keeps its first document.

    The server deletes the first match for an id, so the visible row is the
    document a delete removes.
    """

    mapping: "OrderedDict[str, Entry]" = OrderedDict()
    for entry in entries:
        mapping.setdefault(entry.id, entry)
    return mapping


def reconcile_entries(
    entries: Mapping[str, Entry], saved: Entry
) -> "OrderedDict[str, Entry]":
    """Replace the entry sharing ``saved.id`` in place, or append it when new."""

    updated: "OrderedDict[str, Entry]" = OrderedDict(entries)
    updated[saved.id] = saved
    return updated


def remove_entry(
    entries: Mapping[str, Entry], entry_id: str
) -> "OrderedDict[str, Entry]":
    return OrderedDict(
        (key, entry) for key, entry in entries.items() if key != entry_id
    )
