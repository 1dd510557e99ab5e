"""Persistence adapters for the ``passwords`` collection."""

from __future__ import annotations

import copy
from contextlib import contextmanager
from itertools import count
from threading import RLock
from typing import Any, Iterator, List, Mapping, Optional, Protocol, Tuple

from sqlalchemy import (
    JSON,
    Column,
    Integer,
    MetaData,
    Table,
    Text,
    delete,
    insert,
    select,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ...infra.db import ping
from ...infra.logging import get_logger
from .types import (
    COLLECTION_NAME,
    ID_FIELD,
    DeleteResult,
    Document,
    InsertResult,
    UpsertResult,
    entry_key,
    storage_failure,
)

__all__ = [
    "PasswordStore",
    "InMemoryPasswordStore",
    "SqlPasswordStore",
    "build_password_store",
    "define_passwords_table",
]

logger = get_logger(__name__)


class PasswordStore(Protocol):  # pragma: no cover - interface only
    """Storage boundary consumed by the passwords router."""

    def ensure_ready(self) -> None: ...

    def list_documents(self) -> List[Document]: ...

    def insert(self, document: Mapping[str, Any]) -> InsertResult: ...

    def delete_by_id(self, entry_id: str | int) -> DeleteResult: ...

    def upsert_by_id(self, document: Mapping[str, Any]) -> UpsertResult: ...


def define_passwords_table(metadata: MetaData) -> Table:
    """Documents are kept whole in ``document``; ``entry_id`` holds ``entry_key(id)``."""

    return Table(
        COLLECTION_NAME,
        metadata,
        Column("pk", Integer, primary_key=True, autoincrement=True),
        Column("entry_id", Text, nullable=True, index=True),
        Column("document", JSON, nullable=False),
    )


class InMemoryPasswordStore(PasswordStore):
    """In-memory adapter used for local development and tests."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._rows: List[Tuple[int, Document]] = []
        self._keys = count(1)

    def ensure_ready(self) -> None:
        return None

    def list_documents(self) -> List[Document]:
        with self._lock:
            return [copy.deepcopy(document) for _, document in self._rows]

    def insert(self, document: Mapping[str, Any]) -> InsertResult:
        with self._lock:
            key = next(self._keys)
            self._rows.append((key, copy.deepcopy(dict(document))))
        return InsertResult(inserted_id=str(key))

    def delete_by_id(self, entry_id: str | int) -> DeleteResult:
        key = entry_key(entry_id)
        with self._lock:
            for index, (_, document) in enumerate(self._rows):
                if entry_key(document.get(ID_FIELD)) == key:
                    del self._rows[index]
                    return DeleteResult(deleted_count=1)
        return DeleteResult(deleted_count=0)

    def upsert_by_id(self, document: Mapping[str, Any]) -> UpsertResult:
        key = entry_key(document[ID_FIELD])
        with self._lock:
            kept = [
                row for row in self._rows if entry_key(row[1].get(ID_FIELD)) != key
            ]
            matched = len(self._rows) - len(kept)
            row_key = next(self._keys)
            kept.append((row_key, copy.deepcopy(dict(document))))
            self._rows = kept
        return UpsertResult(matched_count=matched, upserted_id=str(row_key))


class SqlPasswordStore(PasswordStore):
    """SQLAlchemy-backed adapter; storage-native order is the ``pk`` sequence."""

    def __init__(self, engine: Engine, *, table: Optional[Table] = None) -> None:
        self._engine = engine
        if table is not None:
            self._table = table
            self._metadata = table.metadata
        else:
            self._metadata = MetaData()
            self._table = define_passwords_table(self._metadata)

    def ensure_ready(self) -> None:
        """Probe the connection and create the collection table when missing."""

        ping(self._engine)
        self._metadata.create_all(self._engine, tables=[self._table])

    def list_documents(self) -> List[Document]:
        stmt = select(self._table.c.document).order_by(self._table.c.pk)
        with self._guard("list") as conn:
            rows = conn.execute(stmt).scalars().all()
        return [dict(document) for document in rows]

    def insert(self, document: Mapping[str, Any]) -> InsertResult:
        with self._guard("insert") as conn:
            key = self._insert_row(conn, document)
        return InsertResult(inserted_id=str(key))

    def delete_by_id(self, entry_id: str | int) -> DeleteResult:
        table = self._table
        first_match = (
            select(table.c.pk)
            .where(table.c.entry_id == entry_key(entry_id))
            .order_by(table.c.pk)
            .limit(1)
        )
        with self._guard("delete") as conn:
            key = conn.execute(first_match).scalar_one_or_none()
            if key is None:
                return DeleteResult(deleted_count=0)
            result = conn.execute(delete(table).where(table.c.pk == key))
        return DeleteResult(deleted_count=result.rowcount)

    def upsert_by_id(self, document: Mapping[str, Any]) -> UpsertResult:
        table = self._table
        key = entry_key(document[ID_FIELD])
        with self._guard("upsert") as conn:
            removed = conn.execute(delete(table).where(table.c.entry_id == key))
            row_key = self._insert_row(conn, document)
        return UpsertResult(matched_count=removed.rowcount, upserted_id=str(row_key))

    def _insert_row(self, conn: Connection, document: Mapping[str, Any]) -> int:
        result = conn.execute(
            insert(self._table).values(
                entry_id=entry_key(document.get(ID_FIELD)),
                document=dict(document),
            )
        )
        return int(result.inserted_primary_key[0])

    @contextmanager
    def _guard(self, operation: str) -> Iterator[Connection]:
        """One transaction per operation; driver errors become ``PasswordStoreError``."""

        try:
            with self._engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            logger.error(
                "password_store_operation_failed",
                exc_info=True,
                extra={"operation": operation, "collection": COLLECTION_NAME},
            )
            raise storage_failure(operation, exc) from exc


def build_password_store(engine: Optional[Engine] = None) -> PasswordStore:
    """Factory returning the SQL store when an engine is given, memory otherwise."""

    if engine is None:
        logger.warning("password_store_using_memory_backend")
        return InMemoryPasswordStore()
    return SqlPasswordStore(engine)
