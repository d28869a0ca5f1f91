"""Storage layer package.

Public re-exports so callers can write::

    from workgraph.store import open_repository
    from workgraph.store import works, events
"""

from __future__ import annotations

import sqlite3
from typing import Optional

from workgraph.config import Settings
from workgraph.errors import StoreError
from workgraph.store.connection import get_connection
from workgraph.store.graphs import GraphRepository
from workgraph.store.kv import KVStore
from workgraph.store.migrations import init_db
from workgraph.store import checkpoints, events, relations, works


def open_repository(
    config: Optional[Settings] = None,
) -> tuple[sqlite3.Connection, GraphRepository]:
    """Open the store described by *config* and wrap it in a repository.

    The caller owns the returned connection and must close it.
    """
    conn = get_connection(config=config)
    try:
        init_db(conn)
    except StoreError:
        conn.close()
        raise
    return conn, GraphRepository(KVStore(conn))


__all__ = [
    "GraphRepository",
    "KVStore",
    "checkpoints",
    "events",
    "get_connection",
    "init_db",
    "open_repository",
    "relations",
    "works",
]
