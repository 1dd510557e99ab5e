"""Password collection endpoints: list, insert, upsert and delete-by-id."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Union

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from ...api.dependencies import get_password_store, to_http_exception
from ...domain.passwords import PasswordStore, PasswordStoreError
from ...infra.logging import get_logger
from ...infra.metrics import get_metrics_client

router = APIRouter(prefix="/api/passwords", tags=["passwords"])
logger = get_logger(__name__)
metrics = get_metrics_client()

# Ids match by value and JSON type, so 5 and "5" name different entries.
EntryId = Union[Annotated[StrictStr, Field(min_length=1)], StrictInt]


class PasswordFilter(BaseModel):
    """Delete filter; only ``id`` takes part in matching."""

    model_config = ConfigDict(extra="allow")

    id: EntryId = Field(..., description="Entry identifier to delete.")


class PasswordUpsert(BaseModel):
    """Full entry document keyed by ``id``; extra keys are stored verbatim."""

    model_config = ConfigDict(extra="allow")

    id: EntryId
    site: str | None = None
    username: str | None = None
    password: str | None = None


class MutationResponse(BaseModel):
    success: bool = True
    result: Dict[str, Any]


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    summary="List stored passwords",
)
def list_passwords(
    store: PasswordStore = Depends(get_password_store),
) -> List[Dict[str, Any]]:
    metrics.increment("passwords_list_total")
    try:
        documents = store.list_documents()
    except PasswordStoreError as exc:
        metrics.increment("passwords_storage_error_total")
        raise to_http_exception(exc) from exc
    logger.debug("passwords_listed", extra={"count": len(documents)})
    return documents


@router.post(
    "",
    response_model=MutationResponse,
    summary="Insert a password document",
)
def insert_password(
    payload: Dict[str, Any] = Body(...),
    store: PasswordStore = Depends(get_password_store),
) -> MutationResponse:
    metrics.increment("passwords_insert_total")
    try:
        result = store.insert(payload)
    except PasswordStoreError as exc:
        metrics.increment("passwords_storage_error_total")
        raise to_http_exception(exc) from exc
    logger.info(
        "password_inserted",
        extra={"entry_id": payload.get("id"), "inserted_id": result.inserted_id},
    )
    return MutationResponse(result=result.as_ack())


@router.put(
    "",
    response_model=MutationResponse,
    summary="Replace the password document with the same id",
)
def upsert_password(
    payload: PasswordUpsert,
    store: PasswordStore = Depends(get_password_store),
) -> MutationResponse:
    metrics.increment("passwords_upsert_total")
    document = payload.model_dump(exclude_none=True)
    try:
        result = store.upsert_by_id(document)
    except PasswordStoreError as exc:
        metrics.increment("passwords_storage_error_total")
        raise to_http_exception(exc) from exc
    logger.info(
        "password_upserted",
        extra={"entry_id": payload.id, "matched_count": result.matched_count},
    )
    return MutationResponse(result=result.as_ack())


@router.delete(
    "",
    response_model=MutationResponse,
    summary="Delete the first password document matching an id",
)
def delete_password(
    payload: PasswordFilter,
    store: PasswordStore = Depends(get_password_store),
) -> MutationResponse:
    metrics.increment("passwords_delete_total")
    if payload.model_extra:
        logger.warning(
            "password_delete_filter_narrowed",
            extra={"entry_id": payload.id, "ignored_fields": sorted(payload.model_extra)},
        )
    try:
        result = store.delete_by_id(payload.id)
    except PasswordStoreError as exc:
        metrics.increment("passwords_storage_error_total")
        raise to_http_exception(exc) from exc
    logger.info(
        "password_deleted",
        extra={"entry_id": payload.id, "deleted_count": result.deleted_count},
    )
    return MutationResponse(result=result.as_ack())
