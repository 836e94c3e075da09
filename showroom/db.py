from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from pymongo import MongoClient
from pymongo.database import Database

from showroom.schema import COLLECTIONS, get_index_specs


def _debug(msg: str) -> None:
    print(f"[db] {msg}")


def create_client(mongodb_uri: str) -> MongoClient:
    """Create a MongoClient with sensible defaults.

    MongoClient is thread-safe and pools connections, so one instance is shared by
    every request handler for the lifetime of the process.
    """
    uri = (mongodb_uri or "").strip() or "mongodb://localhost:27017"
    return MongoClient(uri, serverSelectionTimeoutMS=5000, tz_aware=False)


@contextmanager
def connect(mongodb_uri: str, db_name: str) -> Iterator[Database]:
    """Open a short-lived client for scripts and yield the database handle."""
    client = create_client(mongodb_uri)
    try:
        yield client[db_name]
    finally:
        client.close()


def init_db(db: Database) -> None:
    """Create all collection indexes (idempotent)."""
    _debug(f"Initializing indexes on database {db.name}")
    for name in COLLECTIONS:
        coll = db[name]
        for keys, options in get_index_specs(name):
            coll.create_index(keys, **options)
