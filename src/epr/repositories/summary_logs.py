from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from typing import Optional, Protocol

from epr.exceptions import DuplicateSummaryLogError, SummaryLogNotFoundError, VersionConflictError
from epr.repositories.storage import Database
from epr.summary_logs.models import StoredSummaryLog, SummaryLog, SummaryLogUpdate

INITIAL_VERSION = 1


class SummaryLogsRepository(Protocol):
    def insert(self, summary_log: SummaryLog) -> None:
        ...

    def find_by_id(self, summary_log_id: str) -> Optional[StoredSummaryLog]:
        ...

    def update(self, summary_log_id: str, version: int, patch: SummaryLogUpdate) -> None:
        """Apply `patch` only if the stored version is still `version`."""
        ...


def _apply(summary_log: SummaryLog, patch: SummaryLogUpdate) -> SummaryLog:
    return summary_log.model_copy(
        update={
            "status": patch.status,
            "validation": patch.validation,
            "failure_reason": patch.failure_reason,
        }
    )


def _conflict(summary_log_id: str, version: int, current: int) -> VersionConflictError:
    return VersionConflictError(
        f"Version conflict: attempted to update summaryLogId={summary_log_id} "
        f"with version {version} but current version is {current}"
    )


class InMemorySummaryLogsRepository:
    def __init__(self) -> None:
        self._items: dict[str, StoredSummaryLog] = {}

    def insert(self, summary_log: SummaryLog) -> None:
        if summary_log.id in self._items:
            raise DuplicateSummaryLogError(f"Summary log with id {summary_log.id} already exists")
        self._items[summary_log.id] = StoredSummaryLog(version=INITIAL_VERSION, summary_log=summary_log.model_copy(deep=True))

    def find_by_id(self, summary_log_id: str) -> Optional[StoredSummaryLog]:
        stored = self._items.get(summary_log_id)
        return stored.model_copy(deep=True) if stored else None

    def update(self, summary_log_id: str, version: int, patch: SummaryLogUpdate) -> None:
        stored = self._items.get(summary_log_id)
        if stored is None:
            raise SummaryLogNotFoundError(f"Summary log not found: summaryLogId={summary_log_id}")
        if stored.version != version:
            raise _conflict(summary_log_id, version, stored.version)
        self._items[summary_log_id] = StoredSummaryLog(
            version=stored.version + 1,
            summary_log=_apply(stored.summary_log, patch.model_copy(deep=True)),
        )


class SqliteSummaryLogsRepository:
    """
    Summary logs stored as JSON documents with a version column.
    Updates are a compare-and-swap on that column.
    """

    def __init__(self, db: Database):
        self.db = db

    def insert(self, summary_log: SummaryLog) -> None:
        try:
            with self.db._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO summary_logs (id, version, status, payload_json, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        summary_log.id,
                        INITIAL_VERSION,
                        summary_log.status.value,
                        summary_log.model_dump_json(),
                        datetime.now(UTC).isoformat(),
                    ),
                )
                conn.commit()
        except sqlite3.IntegrityError as exc:
            raise DuplicateSummaryLogError(f"Summary log with id {summary_log.id} already exists") from exc

    def find_by_id(self, summary_log_id: str) -> Optional[StoredSummaryLog]:
        with self.db._connect() as conn:
            row = conn.execute(
                "SELECT version, payload_json FROM summary_logs WHERE id = ?",
                (summary_log_id,),
            ).fetchone()
        if not row:
            return None
        return StoredSummaryLog(version=row[0], summary_log=SummaryLog.model_validate_json(row[1]))

    def update(self, summary_log_id: str, version: int, patch: SummaryLogUpdate) -> None:
        with self.db._connect() as conn:
            row = conn.execute(
                "SELECT version, payload_json FROM summary_logs WHERE id = ?",
                (summary_log_id,),
            ).fetchone()
            if not row:
                raise SummaryLogNotFoundError(f"Summary log not found: summaryLogId={summary_log_id}")

            updated = _apply(SummaryLog.model_validate_json(row[1]), patch)
            cur = conn.execute(
                """
                UPDATE summary_logs
                SET version = ?, status = ?, payload_json = ?, updated_at = ?
                WHERE id = ? AND version = ?
                """,
                (
                    version + 1,
                    updated.status.value,
                    updated.model_dump_json(),
                    datetime.now(UTC).isoformat(),
                    summary_log_id,
                    version,
                ),
            )
            if cur.rowcount == 0:
                raise _conflict(summary_log_id, version, row[0])
            conn.commit()
