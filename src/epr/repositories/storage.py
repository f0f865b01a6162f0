import sqlite3
from pathlib import Path


class Database:
    """
    Thin wrapper over sqlite3 for summary log persistence.
    Keeps schema creation in one place; repositories own their queries.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self):
        return sqlite3.connect(self.db_path, detect_types=sqlite3.PARSE_DECLTYPES)

    def _ensure_schema(self):
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS summary_logs (
                    id TEXT PRIMARY KEY,
                    version INTEGER NOT NULL,
                    status TEXT NOT NULL,
                    payload_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS registrations (
                    organisation_id TEXT NOT NULL,
                    registration_id TEXT NOT NULL,
                    payload_json TEXT NOT NULL,
                    PRIMARY KEY (organisation_id, registration_id)
                );
                """
            )
            conn.commit()
