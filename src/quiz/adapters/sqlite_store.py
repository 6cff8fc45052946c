import sqlite3

from src.quiz.adapters.db_manager import DatabaseManager
from src.quiz.domain.ports import IPreferenceStore
from src.shared.telemetry import Telemetry


class SQLitePreferenceStore(IPreferenceStore):
    def __init__(self, db_manager: DatabaseManager) -> None:
        self.telemetry = Telemetry("SQLitePreferenceStore")
        self.db_manager = db_manager

    def _get_connection(self) -> sqlite3.Connection:
        return self.db_manager.get_connection()

    def get(self, key: str) -> str | None:
        conn = self._get_connection()
        row = conn.execute(
            "SELECT value FROM preferences WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        conn = self._get_connection()
        conn.execute(
            """
            INSERT INTO preferences (key, value)
            VALUES (?, ?)
            ON CONFLICT(key)
                DO UPDATE SET value=excluded.value, updated_at=CURRENT_TIMESTAMP
            """,
            (key, value),
        )
        conn.commit()
        self.telemetry.log_info("Preference saved", key=key)
