"""Shared password-store domain types."""

from __future__ import annotations

import json
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, Optional

COLLECTION_NAME = "passwords"
ID_FIELD = "id"

Document = Dict[str, Any]


def entry_key(entry_id: Any) -> Optional[str]:
    """Canonical JSON text of an ``id`` value; ``5`` and ``"5"`` stay distinct."""

    if entry_id is None:
        return None
    return json.dumps(entry_id, sort_keys=True)


@dataclass(frozen=True)
class InsertResult:
    inserted_id: str

    def as_ack(self) -> Dict[str, Any]:
        return {"acknowledged": True, "insertedId": self.inserted_id}


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int

    def as_ack(self) -> Dict[str, Any]:
        return {"acknowledged": True, "deletedCount": self.deleted_count}


@dataclass(frozen=True)
class UpsertResult:
    """Outcome of replacing every document that shares an ``id``."""

    matched_count: int
    upserted_id: str

    def as_ack(self) -> Dict[str, Any]:
        return {
            "acknowledged": True,
            "matchedCount": self.matched_count,
            "upsertedId": self.upserted_id,
        }


class PasswordStoreError(Exception):
    """Domain exception propagated to API handlers."""

    def __init__(
        self,
        *,
        status_code: HTTPStatus,
        error_code: str,
        message: str,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details or {}


def storage_unavailable(reason: str) -> PasswordStoreError:
    return PasswordStoreError(
        status_code=HTTPStatus.SERVICE_UNAVAILABLE,
        error_code="STORAGE_UNAVAILABLE",
        message="Password storage is unavailable",
        details={"reason": reason},
    )


def storage_failure(operation: str, exc: Exception) -> PasswordStoreError:
    return PasswordStoreError(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        error_code="STORAGE_ERROR",
        message=f"Storage failure during {operation}",
        details={"operation": operation, "error": exc.__class__.__name__},
    )
