"""
core/logging/logic/logger.py
============================

Thread-safe singleton logger with a SQLite backend for feature/event records
(e.g. "Signature" / "submit"). Diagnostic output of engines goes through the
stdlib ``logging`` module instead; this logger keeps the business audit trail.

- Reuses a single database connection instead of one per operation
- Connection is shared across threads via check_same_thread=False and a lock
"""

from __future__ import annotations

import os
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from core.config.config_service import config_service
from core.logging.models.log_entry import LogEntry

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# --------------------------------------------------------------------------- #
#  Singleton class                                                            #
# --------------------------------------------------------------------------- #
class Logger:
    """Thread-safe singleton feature/event logger."""

    _instance: "Logger | None" = None
    _instance_lock = threading.Lock()

    def __new__(cls) -> "Logger":  # noqa: D401
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False  # type: ignore[attr-defined]
        return cls._instance  # type: ignore[return-value]

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._initialized = True

        self._lock = threading.RLock()
        self.db_path: Path = config_service.logging.db_path
        self.min_level: str = (config_service.logging.level or "INFO").upper()
        self.entries: list[LogEntry] = []
        self._conn: sqlite3.Connection | None = None
        self._schema_ready = False

    # ------------------------------------------------------------------ #
    #  Connection management (reuse single connection)                   #
    # ------------------------------------------------------------------ #
    def _get_connection(self) -> sqlite3.Connection:
        """Get or create the shared database connection."""
        with self._lock:
            if self._conn is None:
                os.makedirs(self.db_path.parent, exist_ok=True)
                self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
                self._conn.row_factory = sqlite3.Row
            if not self._schema_ready:
                self._ensure_schema(self._conn)
                self._schema_ready = True
            return self._conn

    def close(self) -> None:
        """Close the database connection and release resources."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            self._schema_ready = False

    def use_database(self, db_path: Path | str) -> None:
        """Redirect subsequent writes to another database file."""
        with self._lock:
            self.close()
            self.db_path = Path(db_path)
            self.entries.clear()

    # ------------------------------------------------------------------ #
    #  Public API: log                                                   #
    # ------------------------------------------------------------------ #
    def log(
        self,
        feature: str,
        event: str,
        *,
        level: str = "INFO",
        reference_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Persist one entry; entries below ``min_level`` are dropped."""
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{level}'.")
        if LEVELS.index(level) < LEVELS.index(self.min_level if self.min_level in LEVELS else "INFO"):
            return

        entry = LogEntry(
            id=None,
            timestamp=datetime.now(timezone.utc),
            log_level=level,
            feature=feature,
            event=event,
            reference_id=reference_id,
            message=message,
        )
        self.entries.append(entry)
        self._insert_log(entry)

    # ------------------------------------------------------------------ #
    #  Fetch / Query / Clear                                             #
    # ------------------------------------------------------------------ #
    def fetch_logs(self, limit: int = 100) -> List[LogEntry]:
        with self._lock:
            conn = self._get_connection()
            rows = conn.execute(
                "SELECT * FROM logs ORDER BY timestamp DESC, id DESC LIMIT ?", (limit,)
            ).fetchall()
            return [LogEntry.from_dict(dict(row)) for row in rows]

    def query_logs(
        self,
        *,
        feature: Optional[str] = None,
        event: Optional[str] = None,
        reference_id: Optional[str] = None,
        level: Optional[str] = None,
        limit: int = 1_000,
    ) -> List[LogEntry]:
        with self._lock:
            conn = self._get_connection()

            query = "SELECT * FROM logs WHERE 1=1"
            params: list[object] = []

            if feature is not None:
                query += " AND feature = ?"
                params.append(feature)
            if event is not None:
                query += " AND event = ?"
                params.append(event)
            if reference_id is not None:
                query += " AND reference_id = ?"
                params.append(reference_id)
            if level is not None:
                query += " AND log_level = ?"
                params.append(level)

            query += " ORDER BY timestamp DESC, id DESC LIMIT ?"
            params.append(limit)

            rows = conn.execute(query, params).fetchall()
            return [LogEntry.from_dict(dict(row)) for row in rows]

    def clear_logs(self) -> None:
        with self._lock:
            conn = self._get_connection()
            conn.execute("DELETE FROM logs")
            conn.commit()
            self.entries.clear()

    # ------------------------------------------------------------------ #
    #  Internal helpers                                                  #
    # ------------------------------------------------------------------ #
    @staticmethod
    def _ensure_schema(conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                feature TEXT NOT NULL,
                event TEXT NOT NULL,
                reference_id TEXT,
                message TEXT,
                log_level TEXT NOT NULL DEFAULT 'INFO'
            )
            """
        )
        conn.commit()

    def _insert_log(self, entry: LogEntry) -> None:
        with self._lock:
            conn = self._get_connection()
            conn.execute(
                """
                INSERT INTO logs
                    (timestamp, feature, event, reference_id, message, log_level)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.timestamp.isoformat(),
                    entry.feature,
                    entry.event,
                    entry.reference_id,
                    entry.message,
                    entry.log_level,
                ),
            )
            conn.commit()


# --------------------------------------------------------------------------- #
#  Global instance                                                            #
# --------------------------------------------------------------------------- #
logger: Logger = Logger()
