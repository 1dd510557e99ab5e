"""Shared API dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request

from ..config import Settings, load_settings
from ..domain.passwords import PasswordStore, PasswordStoreError
from ..domain.passwords.types import storage_unavailable

__all__ = [
    "get_password_store",
    "get_settings",
    "to_http_exception",
]


def to_http_exception(exc: PasswordStoreError) -> HTTPException:
    return HTTPException(
        status_code=int(exc.status_code),
        detail={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""

    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else load_settings()


def get_password_store(request: Request) -> PasswordStore:
    """Return the storage handle opened at startup (503 when it never came up)."""

    store = getattr(request.app.state, "password_store", None)
    if store is None:
        reason = getattr(request.app.state, "storage_error", None) or "not_initialized"
        raise to_http_exception(storage_unavailable(reason))
    return store
