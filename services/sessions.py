"""Helpers for wiring the interview session service from settings."""
from __future__ import annotations

from typing import Optional

from config import Settings, resolve_api_key, resolve_route
from interview_session.interview_session import InterviewerBackend, InterviewSessionManager
from llm_gateway import HttpClient, LlmClient
from storage.sessions import SessionStore


def build_llm_client(cfg: Settings, *, http_client: Optional[HttpClient] = None) -> LlmClient:
    """Construct the interviewer backend client with its credential resolved once."""

    route = resolve_route(cfg)
    return LlmClient(route, api_key=resolve_api_key(route, cfg), client=http_client)


def build_session_manager(
    cfg: Settings,
    *,
    backend: Optional[InterviewerBackend] = None,
    store: Optional[SessionStore] = None,
) -> InterviewSessionManager:
    """Create the orchestrator with explicit dependencies."""

    return InterviewSessionManager(
        backend or build_llm_client(cfg),
        store or SessionStore(cfg.DB_PATH),
        allow_reevaluation=cfg.ALLOW_REEVALUATION,
    )
