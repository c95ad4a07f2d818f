"""Tests for the SQLite migration and connection helpers."""
from __future__ import annotations

import os
import sqlite3
import tempfile

import pytest

from config.settings import settings
from storage.migrate import migrate
from storage.sqlite import get_conn


@pytest.fixture()
def temp_db(monkeypatch: pytest.MonkeyPatch):
    """Provide a temporary database path for each test."""

    with tempfile.TemporaryDirectory() as td:
        db_path = os.path.join(td, "nested", "test.db")
        monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
        yield db_path


def test_migrate_creates_sessions_table(temp_db: str):
    migrate(temp_db)
    migrate(temp_db)
    assert os.path.exists(temp_db)
    with sqlite3.connect(temp_db) as conn:
        columns = {row[1] for row in conn.execute("PRAGMA table_info(interview_sessions)")}
    assert {"id", "host", "status", "ai_conversation", "ai_feedback", "rating", "code_snapshot"} <= columns


def test_get_conn_defaults_to_settings_path(temp_db: str):
    migrate()
    with get_conn() as conn:
        names = [row["name"] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")]
    assert "interview_sessions" in names


def test_get_conn_rolls_back_on_error(temp_db: str):
    migrate(temp_db)
    with pytest.raises(RuntimeError):
        with get_conn(temp_db) as conn:
            conn.execute(
                "INSERT INTO interview_sessions (id, problem, difficulty, host, session_type, status,"
                " ai_conversation, created_at, updated_at) VALUES ('s1', 'p', 'easy', 'h', 'ai', 'active', '[]', 't', 't')"
            )
            raise RuntimeError("boom")
    with get_conn(temp_db) as conn:
        assert conn.execute("SELECT COUNT(*) FROM interview_sessions").fetchone()[0] == 0
