"""
Triage Bot - SQLite репозиторій

Таблиця cases з первинним ключем case_id; збереження робить upsert.
Списки (notes, reasons, red flags, кандидати) зберігаються як JSON текст.
"""

import json
import sqlite3
import logging
import threading
from pathlib import Path
from typing import List, Optional, Union

from .repository import CaseRepository
from ..exceptions import StorageError
from ..schemas import CaseRecord, CaseSummary


logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS cases (
    case_id TEXT PRIMARY KEY,
    session_id TEXT NOT NULL DEFAULT '',
    started_at INTEGER NOT NULL DEFAULT 0,
    updated_at INTEGER NOT NULL DEFAULT 0,
    notes TEXT NOT NULL DEFAULT '[]',
    candidates TEXT NOT NULL DEFAULT '{}',
    duration TEXT NOT NULL DEFAULT '',
    duration_minutes REAL NOT NULL DEFAULT -1,
    severity TEXT NOT NULL DEFAULT '',
    mode TEXT NOT NULL DEFAULT 'opening',
    unclear_count INTEGER NOT NULL DEFAULT 0,
    last_prompt TEXT NOT NULL DEFAULT 'none',
    triage_complete INTEGER NOT NULL DEFAULT 0,
    triage_level TEXT NOT NULL DEFAULT '',
    triage_confidence REAL NOT NULL DEFAULT 0,
    triage_reasons TEXT NOT NULL DEFAULT '[]',
    triage_red_flags TEXT NOT NULL DEFAULT '[]',
    locked INTEGER NOT NULL DEFAULT 0
)
"""

UPSERT = """
INSERT INTO cases (
    case_id, session_id, started_at, updated_at, notes, candidates,
    duration, duration_minutes, severity, mode, unclear_count, last_prompt,
    triage_complete, triage_level, triage_confidence, triage_reasons,
    triage_red_flags, locked
) VALUES (
    :case_id, :session_id, :started_at, :updated_at, :notes, :candidates,
    :duration, :duration_minutes, :severity, :mode, :unclear_count, :last_prompt,
    :triage_complete, :triage_level, :triage_confidence, :triage_reasons,
    :triage_red_flags, :locked
)
ON CONFLICT(case_id) DO UPDATE SET
    session_id = excluded.session_id,
    updated_at = excluded.updated_at,
    notes = excluded.notes,
    candidates = excluded.candidates,
    duration = excluded.duration,
    duration_minutes = excluded.duration_minutes,
    severity = excluded.severity,
    mode = excluded.mode,
    unclear_count = excluded.unclear_count,
    last_prompt = excluded.last_prompt,
    triage_complete = excluded.triage_complete,
    triage_level = excluded.triage_level,
    triage_confidence = excluded.triage_confidence,
    triage_reasons = excluded.triage_reasons,
    triage_red_flags = excluded.triage_red_flags,
    locked = excluded.locked
"""


class SqliteCaseRepository(CaseRepository):
    """
    Сховище випадків у SQLite.

    Приклад:
        repo = SqliteCaseRepository("data/cases.db")
        repo.save_case(case, session_id="web-1")
        repo.list_cases(limit=10)
    """

    def __init__(self, db_path: Union[str, Path] = "data/cases.db"):
        self.db_path = Path(db_path)
        self._lock = threading.Lock()
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path), timeout=10)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._connect()
            try:
                with conn:
                    conn.execute(SCHEMA)
            finally:
                conn.close()
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot initialise SQLite store {self.db_path}: {e}") from e

    def save_record(self, record: CaseRecord) -> None:
        params = {
            "case_id": record.case_id,
            "session_id": record.session_id,
            "started_at": record.started_at,
            "updated_at": record.updated_at,
            "notes": json.dumps(record.notes),
            "candidates": json.dumps(record.candidate_confidence_by_code),
            "duration": record.duration,
            "duration_minutes": record.duration_minutes,
            "severity": record.severity,
            "mode": record.mode,
            "unclear_count": record.unclear_count,
            "last_prompt": record.last_prompt,
            "triage_complete": int(record.triage_complete),
            "triage_level": record.triage_level,
            "triage_confidence": record.triage_confidence,
            "triage_reasons": json.dumps(record.triage_reasons),
            "triage_red_flags": json.dumps(record.triage_red_flags),
            "locked": int(record.locked),
        }

        with self._lock:
            try:
                conn = self._connect()
                try:
                    with conn:
                        conn.execute(UPSERT, params)
                finally:
                    conn.close()
            except sqlite3.Error as e:
                raise StorageError(f"Cannot save case {record.case_id}: {e}") from e

        logger.debug("Case %s upserted into %s", record.case_id, self.db_path)

    def load_record(self, case_id: str) -> Optional[CaseRecord]:
        row = self._query_one("SELECT * FROM cases WHERE case_id = ?", (case_id,))
        if row is None:
            return None
        return self._row_to_record(row)

    def list_cases(self, limit: int = 50) -> List[CaseSummary]:
        if limit <= 0:
            return []

        with self._lock:
            try:
                conn = self._connect()
                try:
                    rows = conn.execute(
                        "SELECT * FROM cases ORDER BY started_at DESC LIMIT ?",
                        (limit,),
                    ).fetchall()
                finally:
                    conn.close()
            except sqlite3.Error as e:
                raise StorageError(f"Cannot list cases: {e}") from e

        return [self._row_to_record(row).to_summary() for row in rows]

    def _query_one(self, sql: str, params: tuple) -> Optional[sqlite3.Row]:
        with self._lock:
            try:
                conn = self._connect()
                try:
                    return conn.execute(sql, params).fetchone()
                finally:
                    conn.close()
            except sqlite3.Error as e:
                raise StorageError(f"SQLite query failed: {e}") from e

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> CaseRecord:
        return CaseRecord(
            case_id=row["case_id"],
            session_id=row["session_id"],
            started_at=row["started_at"],
            updated_at=row["updated_at"],
            notes=json.loads(row["notes"]),
            candidate_confidence_by_code=json.loads(row["candidates"]),
            duration=row["duration"],
            duration_minutes=row["duration_minutes"],
            severity=row["severity"],
            mode=row["mode"],
            unclear_count=row["unclear_count"],
            last_prompt=row["last_prompt"],
            triage_complete=bool(row["triage_complete"]),
            triage_level=row["triage_level"],
            triage_confidence=row["triage_confidence"],
            triage_reasons=json.loads(row["triage_reasons"]),
            triage_red_flags=json.loads(row["triage_red_flags"]),
            locked=bool(row["locked"]),
        )
