import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import settings
from interview_session.interview_session import InterviewSessionManager
from llm_gateway import BackendUnavailable
from storage.migrate import migrate
from storage.sessions import SessionStore

EVALUATION_JSON = json.dumps(
    {
        "overallScore": 8,
        "technicalScore": 7,
        "communicationScore": 9,
        "problemSolvingScore": 8,
        "summary": "Solid hash map approach, explained clearly.",
        "improvements": ["Discuss edge cases earlier", "State complexity up front", "Test with duplicates"],
        "strengths": ["Clear communication", "Optimal approach"],
    }
)


class FakeBackend:
    """Scripted stand-in for the language backend."""

    def __init__(self, reply: Union[str, Callable[[str, Optional[str]], str], None] = None, *, fail: bool = False) -> None:
        self.reply = reply
        self.fail = fail
        self.calls: List[tuple] = []

    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        self.calls.append((prompt, system_prompt))
        if self.fail:
            raise BackendUnavailable("backend down")
        if callable(self.reply):
            return self.reply(prompt, system_prompt)
        if self.reply is not None:
            return self.reply
        if "respond in EXACTLY this JSON format" in prompt:
            return EVALUATION_JSON
        if system_prompt:
            return "Nice, a hash map gives O(1) lookups. What would you store as the key?"
        return 'Hi! Thanks for joining me today. We\'ll work on "Two Sum", an easy problem. Any questions?'


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    try:
        yield db_path
    finally:
        td.cleanup()


@pytest.fixture
def store(tmp_db) -> SessionStore:
    return SessionStore(tmp_db)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def manager(backend, store) -> InterviewSessionManager:
    return InterviewSessionManager(backend, store)
