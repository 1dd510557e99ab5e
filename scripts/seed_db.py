"""Seed script for the passwords collection.

Upserts a handful of sample entries so local UIs and API calls have
data to read without typing them in first.
"""

from __future__ import annotations

from typing import List

from backend.app.config import load_settings
from backend.app.domain.passwords import SqlPasswordStore
from backend.app.infra.db import build_engine


def build_seed_entries() -> List[dict[str, str]]:
    """Return static seed data for the passwords collection."""

    return [
        {
            "id": "00000000-0000-0000-0000-000000000001",
            "site": "mail.example.com",
            "username": "alice1",
            "password": "secret1",
        },
        {
            "id": "00000000-0000-0000-0000-000000000002",
            "site": "git.example.com",
            "username": "alice-dev",
            "password": "hunter22",
        },
        {
            "id": "00000000-0000-0000-0000-000000000003",
            "site": "bank.example.com",
            "username": "alice.b",
            "password": "correct-horse",
        },
    ]


def seed_entries() -> int:
    settings = load_settings()
    engine = build_engine(settings)
    store = SqlPasswordStore(engine)
    store.ensure_ready()

    records = build_seed_entries()
    for record in records:
        store.upsert_by_id(record)
    engine.dispose()
    return len(records)


def main() -> None:
    seeded = seed_entries()
    print(f"Seeded {seeded} password entries.")


if __name__ == "__main__":
    main()
