"""
Ledger Store — namespaced key-value storage backing every ledger table.

Behavioral Contract:
- Single-key load/save/remove, scoped by namespace.
- A missing key loads as None; callers decide the default.
- Writes issued inside batch() become visible to later loads in the same
  batch, and are committed together when the outermost batch exits cleanly.
  If a batch raises, none of the writes made inside it are kept, even when
  an enclosing batch catches the error and goes on to commit.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

_REMOVED = object()


class LedgerStore:
    """Interface every storage backend implements."""

    def load(self, namespace: str, key: bytes) -> Optional[bytes]:
        raise NotImplementedError

    def save(self, namespace: str, key: bytes, value: bytes) -> None:
        raise NotImplementedError

    def remove(self, namespace: str, key: bytes) -> None:
        raise NotImplementedError

    def keys(self, namespace: str) -> List[bytes]:
        """All keys currently stored under a namespace, sorted."""
        raise NotImplementedError

    def batch(self):
        """Context manager grouping writes into one all-or-nothing commit."""
        raise NotImplementedError


class InMemoryStore(LedgerStore):
    """
    Dict-backed store for tests and the default application.
    Batched writes are staged in an overlay and folded in on success.
    """

    def __init__(self):
        self._data: Dict[Tuple[str, bytes], bytes] = {}
        self._pending: Optional[Dict[Tuple[str, bytes], object]] = None
        self._depth = 0

    def load(self, namespace: str, key: bytes) -> Optional[bytes]:
        slot = (namespace, key)
        if self._pending is not None and slot in self._pending:
            value = self._pending[slot]
            return None if value is _REMOVED else value
        return self._data.get(slot)

    def save(self, namespace: str, key: bytes, value: bytes) -> None:
        if self._pending is not None:
            self._pending[(namespace, key)] = bytes(value)
        else:
            self._data[(namespace, key)] = bytes(value)

    def remove(self, namespace: str, key: bytes) -> None:
        if self._pending is not None:
            self._pending[(namespace, key)] = _REMOVED
        else:
            self._data.pop((namespace, key), None)

    def keys(self, namespace: str) -> List[bytes]:
        found = {k for (ns, k) in self._data if ns == namespace}
        if self._pending is not None:
            for (ns, k), value in self._pending.items():
                if ns != namespace:
                    continue
                if value is _REMOVED:
                    found.discard(k)
                else:
                    found.add(k)
        return sorted(found)

    @contextmanager
    def batch(self) -> Iterator[None]:
        if self._depth == 0:
            self._pending = {}
        saved = dict(self._pending)
        self._depth += 1
        try:
            yield
        except BaseException:
            self._depth -= 1
            self._pending = saved if self._depth else None
            raise
        self._depth -= 1
        if self._depth == 0:
            pending, self._pending = self._pending, None
            for slot, value in pending.items():
                if value is _REMOVED:
                    self._data.pop(slot, None)
                else:
                    self._data[slot] = value


class SqliteStore(LedgerStore):
    """
    Durable store on SQLite. One row per (namespace, key).
    Outside a batch every write commits on its own. The outermost batch
    opens a transaction; nested batches are savepoints inside it.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._depth = 0
        self._init_schema()

    def _init_schema(self) -> None:
        """Create the key-value table if it doesn't exist."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS ledger_kv (
                namespace TEXT NOT NULL,
                key BLOB NOT NULL,
                value BLOB NOT NULL,
                PRIMARY KEY (namespace, key)
            )
        """)
        self._conn.commit()
        logger.debug("ledger_kv schema ready at %s", self.db_path)

    def _maybe_commit(self) -> None:
        if self._depth == 0:
            self._conn.commit()

    def load(self, namespace: str, key: bytes) -> Optional[bytes]:
        row = self._conn.execute(
            "SELECT value FROM ledger_kv WHERE namespace = ? AND key = ?",
            (namespace, key),
        ).fetchone()
        return bytes(row["value"]) if row else None

    def save(self, namespace: str, key: bytes, value: bytes) -> None:
        self._conn.execute(
            "INSERT OR REPLACE INTO ledger_kv (namespace, key, value) VALUES (?, ?, ?)",
            (namespace, key, bytes(value)),
        )
        self._maybe_commit()

    def remove(self, namespace: str, key: bytes) -> None:
        self._conn.execute(
            "DELETE FROM ledger_kv WHERE namespace = ? AND key = ?",
            (namespace, key),
        )
        self._maybe_commit()

    def keys(self, namespace: str) -> List[bytes]:
        rows = self._conn.execute(
            "SELECT key FROM ledger_kv WHERE namespace = ? ORDER BY key",
            (namespace,),
        ).fetchall()
        return [bytes(r["key"]) for r in rows]

    @contextmanager
    def batch(self) -> Iterator[None]:
        if self._depth == 0:
            if not self._conn.in_transaction:
                self._conn.execute("BEGIN")
            savepoint = None
        else:
            savepoint = f"batch_{self._depth}"
            self._conn.execute(f"SAVEPOINT {savepoint}")
        self._depth += 1
        try:
            yield
        except BaseException:
            self._depth -= 1
            if savepoint is None:
                self._conn.rollback()
            else:
                self._conn.execute(f"ROLLBACK TO {savepoint}")
                self._conn.execute(f"RELEASE {savepoint}")
            raise
        self._depth -= 1
        if savepoint is None:
            self._conn.commit()
        else:
            self._conn.execute(f"RELEASE {savepoint}")

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
