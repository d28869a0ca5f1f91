"""Ordered byte-string key-value store on top of the ``kv`` table.

Keys and values are opaque bytes; ``str`` keys are UTF-8 encoded first.
Scans return keys in byte-lexicographic order.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterator, Optional, Union

from workgraph.errors import KeyNotFound, StoreError

logger = logging.getLogger("workgraph.store.kv")

Key = Union[str, bytes]


def _key_bytes(key: Key) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


def _prefix_upper_bound(prefix: bytes) -> Optional[bytes]:
    """Smallest key greater than every key starting with *prefix*.

    Returns ``None`` when no such bound exists (empty or all-0xff prefix).
    """
    stripped = prefix.rstrip(b"\xff")
    if not stripped:
        return None
    return stripped[:-1] + bytes([stripped[-1] + 1])


class KVStore:
    """Get / Put / Delete / prefix-scan over one SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get(self, key: Key) -> bytes:
        """Return the value stored at *key*.

        Raises:
            KeyNotFound: Nothing is stored at *key*.
            StoreError: The read failed.
        """
        k = _key_bytes(key)
        try:
            row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (k,)).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"get {k!r} failed: {exc}") from exc
        if row is None:
            raise KeyNotFound(k)
        return bytes(row[0])

    def put(self, key: Key, value: bytes) -> None:
        """Store *value* at *key*, replacing any previous value."""
        k = _key_bytes(key)
        try:
            with self.conn:
                self.conn.execute(
                    "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                    (k, bytes(value)),
                )
        except sqlite3.Error as exc:
            raise StoreError(f"put {k!r} failed: {exc}") from exc
        logger.debug("put %r (%d bytes)", k, len(value))

    def delete(self, key: Key) -> None:
        """Remove *key*.  Deleting a missing key is a no-op."""
        k = _key_bytes(key)
        try:
            with self.conn:
                self.conn.execute("DELETE FROM kv WHERE key = ?", (k,))
        except sqlite3.Error as exc:
            raise StoreError(f"delete {k!r} failed: {exc}") from exc
        logger.debug("delete %r", k)

    def scan_prefix(self, prefix: Key) -> Iterator[tuple[bytes, bytes]]:
        """Yield ``(key, value)`` pairs whose key starts with *prefix*, in key order."""
        p = _key_bytes(prefix)
        upper = _prefix_upper_bound(p)
        if upper is None:
            sql = "SELECT key, value FROM kv WHERE key >= ? ORDER BY key"
            params: tuple[bytes, ...] = (p,)
        else:
            sql = "SELECT key, value FROM kv WHERE key >= ? AND key < ? ORDER BY key"
            params = (p, upper)

        try:
            cursor = self.conn.execute(sql, params)
            for key, value in cursor:
                yield bytes(key), bytes(value)
        except sqlite3.Error as exc:
            raise StoreError(f"scan {p!r} failed: {exc}") from exc
