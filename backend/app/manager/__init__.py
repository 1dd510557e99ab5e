"""Client-side password manager view model."""

from .client import DEFAULT_API_URL, ManagerApiError, PasswordsApiClient
from .session import ManagerSession, Notification, RowView
from .state import (
    Entry,
    FormState,
    MIN_FIELD_LENGTH,
    build_entry_map,
    mask_password,
    reconcile_entries,
    remove_entry,
    validate_form,
)

__all__ = [
    "DEFAULT_API_URL",
    "Entry",
    "FormState",
    "MIN_FIELD_LENGTH",
    "ManagerApiError",
    "ManagerSession",
    "Notification",
    "PasswordsApiClient",
    "RowView",
    "build_entry_map",
    "mask_password",
    "reconcile_entries",
    "remove_entry",
    "validate_form",
]
