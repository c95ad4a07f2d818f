"""Persistence for interview sessions."""
from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, List, Optional, Union
from uuid import uuid4

from interview_session.models import AiFeedback, ChatTurn, Session, utc_now

from .migrate import migrate
from .sqlite import get_conn

_COLUMNS = (
    "id, problem, problem_description, difficulty, host, session_type, status, "
    "ai_conversation, code_snapshot, ai_feedback, rating, created_at, updated_at"
)


class SessionStore:
    """SQLite-backed session storage; every write replaces the whole row."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = str(path)
        migrate(self._path)

    def create(self, **fields: Any) -> Session:
        now = utc_now()
        fields.setdefault("id", uuid4().hex)
        session = Session(created_at=now, updated_at=now, **fields)
        with get_conn(self._path) as conn:
            conn.execute(
                f"INSERT INTO interview_sessions ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                _row_values(session),
            )
        return session

    def find_by_id(self, session_id: str) -> Optional[Session]:
        with get_conn(self._path) as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM interview_sessions WHERE id = ?",
                (session_id,),
            ).fetchone()
        if row is None:
            return None
        return _session_from_row(row)

    def save(self, session: Session) -> None:
        session.updated_at = utc_now()
        values = _row_values(session)
        with get_conn(self._path) as conn:
            cur = conn.execute(
                """
                UPDATE interview_sessions
                SET problem = ?, problem_description = ?, difficulty = ?, host = ?,
                    session_type = ?, status = ?, ai_conversation = ?, code_snapshot = ?,
                    ai_feedback = ?, rating = ?, created_at = ?, updated_at = ?
                WHERE id = ?
                """,
                values[1:] + values[:1],
            )
            if cur.rowcount == 0:
                raise KeyError(f"Session not stored: {session.id}")

    def list_for_host(self, host: str, session_type: str = "ai") -> List[Session]:
        with get_conn(self._path) as conn:
            rows = conn.execute(
                f"""
                SELECT {_COLUMNS} FROM interview_sessions
                WHERE host = ? AND session_type = ?
                ORDER BY created_at DESC, id DESC
                """,
                (host, session_type),
            ).fetchall()
        return [_session_from_row(row) for row in rows]


def _row_values(session: Session) -> tuple:
    feedback = session.ai_feedback.model_dump_json() if session.ai_feedback else None
    conversation = json.dumps([turn.model_dump(mode="json") for turn in session.ai_conversation], ensure_ascii=False)
    return (
        session.id,
        session.problem,
        session.problem_description,
        session.difficulty,
        session.host,
        session.session_type,
        session.status,
        conversation,
        session.code_snapshot,
        feedback,
        session.rating,
        session.created_at.isoformat(),
        session.updated_at.isoformat(),
    )


def _session_from_row(row: sqlite3.Row) -> Session:
    feedback = AiFeedback.model_validate_json(row["ai_feedback"]) if row["ai_feedback"] else None
    return Session(
        id=row["id"],
        problem=row["problem"],
        problem_description=row["problem_description"],
        difficulty=row["difficulty"],
        host=row["host"],
        session_type=row["session_type"],
        status=row["status"],
        ai_conversation=[ChatTurn.model_validate(item) for item in json.loads(row["ai_conversation"])],
        code_snapshot=row["code_snapshot"],
        ai_feedback=feedback,
        rating=row["rating"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


__all__ = ["SessionStore"]
