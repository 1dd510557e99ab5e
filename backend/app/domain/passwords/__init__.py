"""Password storage domain package."""

from .store import (
    InMemoryPasswordStore,
    PasswordStore,
    SqlPasswordStore,
    build_password_store,
    define_passwords_table,
)
from .types import (
    COLLECTION_NAME,
    DeleteResult,
    Document,
    InsertResult,
    PasswordStoreError,
    UpsertResult,
)

__all__ = [
    "COLLECTION_NAME",
    "DeleteResult",
    "Document",
    "InMemoryPasswordStore",
    "InsertResult",
    "PasswordStore",
    "PasswordStoreError",
    "SqlPasswordStore",
    "UpsertResult",
    "build_password_store",
    "define_passwords_table",
]
