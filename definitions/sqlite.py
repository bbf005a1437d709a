"""SQLite-backed definitions store for conditions."""
import json
import logging
import sqlite3
import threading
from pathlib import Path

from models.conditions import condition_from_dict
from models.exceptions import Conflict, NotFound, ValidationError

logger = logging.getLogger("alertsvc.definitions.sqlite")


class SQLiteDefinitions:
    def __init__(self, db_path="data/definitions.db"):
        self.db_path = db_path
        self.conn = None
        self._lock = threading.Lock()

    def connect(self):
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self._create_tables()
        return self

    def close(self):
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *args):
        self.close()

    def _create_tables(self):
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS conditions (
                condition_id TEXT PRIMARY KEY,
                type TEXT NOT NULL,
                tenant_id TEXT,
                trigger_id TEXT,
                trigger_mode TEXT,
                body TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_conditions_trigger
                ON conditions(trigger_id);
        """)
        self.conn.commit()

    @staticmethod
    def _row_to_condition(row):
        return condition_from_dict(json.loads(row["body"]))

    @staticmethod
    def _params(condition):
        return (
            condition.type.value, condition.tenant_id, condition.trigger_id,
            condition.trigger_mode.value, json.dumps(condition.to_dict()),
            condition.condition_id,
        )

    def get_condition(self, condition_id):
        with self._lock:
            row = self.conn.execute(
                "SELECT body FROM conditions WHERE condition_id = ?", (condition_id,)
            ).fetchone()
        return self._row_to_condition(row) if row else None

    def get_conditions(self):
        with self._lock:
            rows = self.conn.execute("SELECT body FROM conditions").fetchall()
        return [self._row_to_condition(r) for r in rows]

    def add_condition(self, condition):
        if condition is None or not condition.condition_id:
            raise ValidationError("Condition has no condition id")
        try:
            with self._lock:
                self.conn.execute("""
                    INSERT INTO conditions (type, tenant_id, trigger_id, trigger_mode, body, condition_id)
                    VALUES (?, ?, ?, ?, ?, ?)
                """, self._params(condition))
                self.conn.commit()
        except sqlite3.IntegrityError as e:
            raise Conflict(f"Condition {condition.condition_id} already exists") from e
        logger.debug(f"Saved condition {condition.condition_id}")

    def update_condition(self, condition):
        if condition is None or not condition.condition_id:
            raise ValidationError("Condition has no condition id")
        with self._lock:
            cur = self.conn.execute("""
                UPDATE conditions
                SET type = ?, tenant_id = ?, trigger_id = ?, trigger_mode = ?, body = ?
                WHERE condition_id = ?
            """, self._params(condition))
            self.conn.commit()
        if cur.rowcount == 0:
            raise NotFound(f"Condition {condition.condition_id} not found")
        logger.debug(f"Updated condition {condition.condition_id}")

    def remove_condition(self, condition_id):
        with self._lock:
            cur = self.conn.execute("DELETE FROM conditions WHERE condition_id = ?", (condition_id,))
            self.conn.commit()
        if cur.rowcount == 0:
            raise NotFound(f"Condition {condition_id} not found")
        logger.debug(f"Deleted condition {condition_id}")
