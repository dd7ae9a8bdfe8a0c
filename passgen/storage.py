import json
import sqlite3
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from .errors import HistoryItemNotFound, StorageUnavailable


@dataclass(frozen=True)
class HistoryItem:
    id: str
    password: str
    strength: str
    length: int
    options: Mapping[str, bool]
    response_time: float
    created_at: float

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def to_dict(self) -> Dict:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["options"] = dict(self.options)
        return data

    @staticmethod
    def from_db_row(row: tuple) -> "HistoryItem":
        return HistoryItem(
            id=row[0],
            password=row[1],
            strength=row[2],
            length=row[3],
            options=json.loads(row[4]),
            response_time=row[5],
            created_at=row[6],
        )


class HistoryStore:
    """
    Capped, newest-first log of generated passwords backed by SQLite.

    Writes are serialized with a lock and run in a single transaction, so the
    insert and the eviction of items beyond ``cap`` commit together.
    """

    _COLUMNS = "id, password, strength, length, options, response_time, created_at"

    def __init__(self, db_name: str = "passgen.db", cap: int = 20, clock=time.time):
        if cap < 1:
            raise ValueError(f"history cap must be at least 1, got {cap}")
        self.db_name = db_name
        self.cap = cap
        self._clock = clock
        self._lock = threading.Lock()
        self._init_database()

    def _get_connection(self):
        conn = sqlite3.connect(self.db_name, timeout=10.0)
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            raise StorageUnavailable(str(e)) from e
        try:
            yield conn
        except sqlite3.Error as e:
            raise StorageUnavailable(str(e)) from e
        finally:
            conn.close()

    def _init_database(self):
        with self._connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS history (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    password TEXT NOT NULL,
                    strength TEXT NOT NULL,
                    length INTEGER NOT NULL,
                    options TEXT NOT NULL,
                    response_time REAL NOT NULL,
                    created_at REAL NOT NULL
                )
            """
            )
            conn.commit()

    def record(
        self,
        password: str,
        strength: str,
        length: int,
        options: Dict[str, bool],
        response_time: float,
    ) -> HistoryItem:
        item = HistoryItem(
            id=uuid.uuid4().hex,
            password=password,
            strength=strength,
            length=length,
            options=options,
            response_time=response_time,
            created_at=self._clock(),
        )

        with self._lock, self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"INSERT INTO history ({self._COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    item.id,
                    item.password,
                    item.strength,
                    item.length,
                    json.dumps(dict(item.options)),
                    item.response_time,
                    item.created_at,
                ),
            )
            cursor.execute(
                """
                DELETE FROM history WHERE seq NOT IN (
                    SELECT seq FROM history ORDER BY seq DESC LIMIT ?
                )
            """,
                (self.cap,),
            )
            conn.commit()

        return item

    def list(self, limit: Optional[int] = None) -> List[HistoryItem]:
        """Retained items, newest first. ``limit=None`` returns all of them."""
        if limit is not None and limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")

        query = f"SELECT {self._COLUMNS} FROM history ORDER BY seq DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [HistoryItem.from_db_row(row) for row in rows]

    def snapshot(self) -> List[HistoryItem]:
        return self.list()

    def delete_one(self, item_id: str):
        with self._lock, self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM history WHERE id = ?", (item_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        if not deleted:
            raise HistoryItemNotFound(item_id)

    def clear(self) -> int:
        with self._lock, self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM history")
            conn.commit()
            return cursor.rowcount

