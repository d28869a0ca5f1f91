"""SQLite connection factory.

Usage::

    from workgraph.store.connection import get_connection

    conn = get_connection()
    init_db(conn)
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from workgraph.config import Settings, settings as default_settings
from workgraph.errors import StoreError


def get_connection(
    db_path: Optional[Path] = None,
    config: Optional[Settings] = None,
) -> sqlite3.Connection:
    """Open and configure a SQLite connection.

    WAL journal mode is enabled on every new connection.  SQLite takes a
    write lock per transaction; concurrent CLI processes are not coordinated
    beyond that.

    Args:
        db_path: Override the DB path.  Defaults to ``config.db_path``.
        config: Settings to resolve the default path from.  Defaults to the
            module-level settings.

    Raises:
        StoreError: The database file could not be opened.
    """
    config = config or default_settings
    path = db_path or config.db_path

    # Create parent directory if needed (no-op for `:memory:`)
    if str(path) != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(str(path))
        conn.execute("PRAGMA journal_mode = WAL")
    except sqlite3.Error as exc:
        raise StoreError(f"open db failed: {exc}") from exc

    return conn
