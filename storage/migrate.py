"""SQLite schema migrations."""
from __future__ import annotations

from typing import Iterable, Optional

from .sqlite import get_conn

SCHEMA: Iterable[str] = [
    """
CREATE TABLE IF NOT EXISTS interview_sessions (
  id TEXT PRIMARY KEY,
  problem TEXT NOT NULL,
  problem_description TEXT NOT NULL DEFAULT '',
  difficulty TEXT NOT NULL,
  host TEXT NOT NULL,
  session_type TEXT NOT NULL,
  status TEXT NOT NULL,
  ai_conversation TEXT NOT NULL,
  code_snapshot TEXT NOT NULL DEFAULT '',
  ai_feedback TEXT,
  rating INTEGER NOT NULL DEFAULT 0,
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL
);
""",
    """
CREATE INDEX IF NOT EXISTS idx_interview_sessions_host
  ON interview_sessions (host, created_at);
""",
]


def migrate(db_path: Optional[str] = None) -> None:
    """Apply schema migrations to the SQLite database."""

    with get_conn(db_path) as conn:
        cur = conn.cursor()
        for stmt in SCHEMA:
            cur.execute(stmt)


if __name__ == "__main__":
    migrate()
