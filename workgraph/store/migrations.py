"""Database initialisation.

``init_db(conn)`` is idempotent: safe to call on an existing database.
"""

from __future__ import annotations

import sqlite3

from workgraph.errors import StoreError

# BLOB keys compare with memcmp(), which gives byte-lexicographic ordering.
SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key   BLOB PRIMARY KEY,
    value BLOB NOT NULL
) WITHOUT ROWID;
"""


def init_db(conn: sqlite3.Connection) -> None:
    """Create the key-value table if it does not exist.

    Args:
        conn: An open SQLite connection.
    """
    try:
        conn.executescript(SCHEMA)
    except sqlite3.Error as exc:
        raise StoreError(f"init db failed: {exc}") from exc
