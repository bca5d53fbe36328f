"""Database connection management."""

import sqlite3
from pathlib import Path
from contextlib import contextmanager
from typing import Generator

from holdem_advisor.config import DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS advisors (
    name        TEXT PRIMARY KEY,
    updated_at  TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS regrets (
    advisor       TEXT NOT NULL REFERENCES advisors(name) ON DELETE CASCADE,
    position      INTEGER NOT NULL,
    action        TEXT NOT NULL,
    regret_sum    REAL NOT NULL,
    strategy_sum  REAL NOT NULL,
    PRIMARY KEY (advisor, action)
);
"""


class Database:
    """SQLite database connection manager."""

    def __init__(self, db_path: Path | str | None = None):
        self.db_path = str(db_path or DB_PATH)
        self._init_schema()

    def _init_schema(self):
        with self.connect() as conn:
            conn.executescript(SCHEMA)

    @contextmanager
    def connect(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
