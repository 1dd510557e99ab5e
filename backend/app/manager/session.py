"""Manager view model: local entry list, form, reveal state and notifications."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set
from uuid import uuid4

import pyperclip

from ..infra.logging import get_logger
from .client import ManagerApiError, PasswordsApiClient
from .state import (
    Entry,
    FormState,
    build_entry_map,
    mask_password,
    reconcile_entries,
    remove_entry,
    validate_form,
)

__all__ = ["ManagerSession", "Notification", "RowView"]

logger = get_logger(__name__)

DELETE_PROMPT = "Delete password?"


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


@dataclass(frozen=True)
class RowView:
    """One table row as displayed: the password is masked unless revealed."""

    entry: Entry
    revealed: bool

    @property
    def display_password(self) -> str:
        if self.revealed:
            return self.entry.password
        return mask_password(self.entry.password)


def _always_confirm(_message: str) -> bool:
    return True


def _new_entry_id() -> str:
    return str(uuid4())


class ManagerSession:
    """Keeps the local view consistent with the server through optimistic updates."""

    def __init__(
        self,
        api: PasswordsApiClient,
        *,
        confirm: Callable[[str], bool] = _always_confirm,
        copy_to_clipboard: Callable[[str], None] = pyperclip.copy,
        id_factory: Callable[[], str] = _new_entry_id,
    ) -> None:
        self._api = api
        self._confirm = confirm
        self._copy = copy_to_clipboard
        self._id_factory = id_factory
        self.entries: "OrderedDict[str, Entry]" = OrderedDict()
        self.form = FormState()
        self.form_errors: Dict[str, str] = {}
        self.show_password_in_form = False
        self.notifications: List[Notification] = []
        self._revealed: Set[str] = set()

    # ------------------------------------------------------------------
    # Loading + display
    # ------------------------------------------------------------------
    def load(self) -> bool:
        """Replace the local list with the server's; reveal state resets."""

        try:
            fetched = self._api.list_entries()
        except ManagerApiError as exc:
            self._notify("error", f"Error fetching passwords: {exc.message}")
            return False
        self.entries = build_entry_map(fetched)
        self._revealed.clear()
        return True

    def rows(self) -> List[RowView]:
        return [
            RowView(entry=entry, revealed=entry_id in self._revealed)
            for entry_id, entry in self.entries.items()
        ]

    def is_revealed(self, entry_id: str) -> bool:
        return entry_id in self._revealed

    def toggle_visibility(self, entry_id: str) -> bool:
        """Flip one row between masked and plaintext; returns the new state."""

        if entry_id in self._revealed:
            self._revealed.discard(entry_id)
            return False
        self._revealed.add(entry_id)
        return True

    def toggle_form_password_visibility(self) -> bool:
        self.show_password_in_form = not self.show_password_in_form
        return self.show_password_in_form

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    # ------------------------------------------------------------------
    # Form workflow
    # ------------------------------------------------------------------
    def set_field(self, name: str, value: str) -> None:
        self.form = self.form.with_field(name, value)

    def reset_form(self) -> None:
        self.form = FormState()
        self.form_errors = {}
        self.show_password_in_form = False

    def edit_entry(self, entry_id: str) -> bool:
        """Load a cached entry into the form; unknown ids leave the form alone."""

        entry = self.entries.get(entry_id)
        if entry is None:
            return False
        self.form = FormState.from_entry(entry)
        self.form_errors = {}
        self.show_password_in_form = False
        return True

    def save(self) -> Optional[Entry]:
        """Validate, persist and reconcile the form; ``None`` when nothing was saved."""

        errors = validate_form(self.form)
        if errors:
            self.form_errors = errors
            self._notify("error", "Please fix form errors before saving!")
            return None
        self.form_errors = {}

        editing = self.form.is_editing
        entry = self.form.to_entry(self.form.id or self._id_factory())
        try:
            if editing:
                self._api.upsert_entry(entry)
            else:
                self._api.insert_entry(entry)
        except ManagerApiError as exc:
            self._notify("error", f"Error saving password: {exc.message}")
            return None

        self.entries = reconcile_entries(self.entries, entry)
        self.reset_form()
        self._revealed.clear()
        logger.debug("manager_entry_saved", extra={"entry_id": entry.id, "edited": editing})
        self._notify("success", "Password saved!")
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        if not self._confirm(DELETE_PROMPT):
            return False
        try:
            self._api.delete_entry(entry_id)
        except ManagerApiError as exc:
            self._notify("error", f"Error deleting password: {exc.message}")
            return False
        self.entries = remove_entry(self.entries, entry_id)
        self._revealed.discard(entry_id)
        self._notify("success", "Password deleted!")
        return True

    # ------------------------------------------------------------------
    # Clipboard
    # ------------------------------------------------------------------
    def copy_text(self, text: str) -> bool:
        if not text:
            return False
        try:
            self._copy(text)
        except pyperclip.PyperclipException:
            self._notify("error", "Copy failed")
            return False
        self._notify("success", "Copied!")
        return True

    def _notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))
