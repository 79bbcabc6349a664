"""SQLite session store so cached entries survive CLI restarts."""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from pathlib import Path


class SqliteSessionStore:
    """SQLite-backed implementation of session key/value storage."""

    def __init__(self, db_path: str) -> None:
        path = Path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.connection = sqlite3.connect(path)
        self.connection.row_factory = sqlite3.Row
        self._initialize_schema()

    def get_item(self, key: str) -> str | None:
        row = self.connection.execute(
            "SELECT value FROM session_items WHERE key = ?",
            (key,),
        ).fetchone()
        return None if row is None else str(row["value"])

    def set_item(self, key: str, value: str) -> None:
        self.connection.execute(
            """
            INSERT OR REPLACE INTO session_items(key, value, updated_ts)
            VALUES(?, ?, ?)
            """,
            (key, value, self._utc_now()),
        )
        self.connection.commit()

    def close(self) -> None:
        self.connection.close()

    def _initialize_schema(self) -> None:
        self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS session_items(
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_ts TEXT NOT NULL
            )
            """
        )
        self.connection.commit()

    @staticmethod
    def _utc_now() -> str:
        return datetime.now(tz=UTC).isoformat()
