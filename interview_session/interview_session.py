from __future__ import annotations  # AI interview session lifecycle orchestrator

import logging
import math
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol

from pydantic import BaseModel

from interview_evaluation import NEUTRAL_SCORE, parse_evaluation
from llm_gateway import LlmGatewayError
from observability import log_event, span
from services.errors import AuthorizationError, NotFoundError, StateError, ValidationError

from .models import AiFeedback, ChatTurn, Session
from .prompts import (
    build_evaluation_prompt,
    build_intro_prompt,
    build_turn_prompt,
    fallback_intro,
    fallback_reply,
)

logger = logging.getLogger(__name__)

DIFFICULTIES = ("easy", "medium", "hard")
DEFAULT_SUMMARY = "Interview completed."


class InterviewerBackend(Protocol):  # Text generation used by the orchestrator
    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> str: ...


class SessionRepository(Protocol):  # Session persistence interface
    def create(self, **fields: Any) -> Session: ...

    def find_by_id(self, session_id: str) -> Optional[Session]: ...

    def save(self, session: Session) -> None: ...


class TurnResult(BaseModel):  # SendTurn payload
    response: str
    conversation: List[ChatTurn]
    session: Session


class EndResult(BaseModel):  # EndSession payload
    session: Session
    feedback: Optional[AiFeedback] = None


class InterviewSessionManager:  # The only component allowed to mutate a session
    def __init__(
        self,
        backend: InterviewerBackend,
        store: SessionRepository,
        *,
        allow_reevaluation: bool = True,
    ) -> None:
        self._backend = backend
        self._store = store
        self._allow_reevaluation = allow_reevaluation
        self._locks: Dict[str, List[Any]] = {}  # session id -> [lock, holders]
        self._locks_guard = threading.Lock()

    def create_session(
        self,
        problem: Optional[str],
        difficulty: Optional[str],
        caller_id: str,
        problem_description: Optional[str] = None,
    ) -> Session:
        if not problem or not difficulty:
            raise ValidationError("Problem and difficulty are required")
        if difficulty not in DIFFICULTIES:
            raise ValidationError(f"Difficulty must be one of: {', '.join(DIFFICULTIES)}")
        session = self._store.create(
            problem=problem,
            problem_description=problem_description or "",
            difficulty=difficulty,
            host=caller_id,
            session_type="ai",
            status="active",
        )
        intro = build_intro_prompt(session.problem_info())
        try:
            with span(session.id, "intro"):
                content = self._backend.generate(intro.prompt, intro.system_prompt)
            source = "backend"
        except LlmGatewayError as exc:
            logger.warning("Intro generation failed for session %s: %s", session.id, exc)
            content = fallback_intro(problem)
            source = "fallback"
            log_event("backend_fallback", session.id, node="intro", error=type(exc).__name__)
        session.ai_conversation.append(ChatTurn(role="ai", content=content))
        self._store.save(session)
        log_event("session_created", session.id, source=source, turns=len(session.ai_conversation))
        return session

    def send_turn(
        self,
        session_id: Optional[str],
        message: Optional[str],
        caller_id: str,
        current_code: Optional[str] = None,
    ) -> TurnResult:
        if not session_id or not message or not message.strip():
            raise ValidationError("Session ID and message are required")
        with self._session_lock(session_id):
            session = self._load_owned(session_id, caller_id)
            if session.status != "active":
                raise StateError("Session is not active")

            # user turn lands before the backend call so it survives a failed generation
            session.ai_conversation.append(ChatTurn(role="user", content=message))
            log_event("turn_appended", session.id, role="user", turns=len(session.ai_conversation))

            code = current_code or session.code_snapshot
            pair = build_turn_prompt(session.ai_conversation, code, session.problem_info(), message)
            try:
                with span(session.id, "turn"):
                    response = self._backend.generate(pair.prompt, pair.system_prompt)
            except LlmGatewayError as exc:
                logger.warning("Turn generation failed for session %s: %s", session.id, exc)
                response = fallback_reply(message)
                log_event("backend_fallback", session.id, node="turn", error=type(exc).__name__)

            session.ai_conversation.append(ChatTurn(role="ai", content=response))
            if current_code:
                session.code_snapshot = current_code
            self._store.save(session)
            log_event("turn_appended", session.id, role="ai", turns=len(session.ai_conversation))
        return TurnResult(response=response, conversation=list(session.ai_conversation), session=session)

    def end_session(
        self,
        session_id: Optional[str],
        caller_id: str,
        final_code: Optional[str] = None,
    ) -> EndResult:
        if not session_id:
            raise ValidationError("Session ID is required")
        with self._session_lock(session_id):
            session = self._load_owned(session_id, caller_id)
            if session.status == "completed" and not self._allow_reevaluation:
                raise StateError("Session is already completed")

            code = final_code or session.code_snapshot or ""
            pair = build_evaluation_prompt(session.ai_conversation, code, session.problem_info())
            try:
                with span(session.id, "evaluation"):
                    raw = self._backend.generate(pair.prompt, pair.system_prompt)
            except LlmGatewayError as exc:
                logger.warning("Evaluation generation failed for session %s: %s", session.id, exc)
                log_event("evaluation_fallback", session.id, error=type(exc).__name__)
            else:
                feedback = feedback_from_evaluation(parse_evaluation(raw))
                session.ai_feedback = feedback
                session.rating = rating_for(feedback.overall_score)

            if final_code:
                session.code_snapshot = final_code
            session.status = "completed"
            self._store.save(session)
            log_event("session_ended", session.id, status=session.status, rating=session.rating)
        return EndResult(session=session, feedback=session.ai_feedback)

    def get_session(self, session_id: str, caller_id: Optional[str] = None) -> Session:
        session = self._store.find_by_id(session_id)
        if session is None or session.session_type != "ai":
            raise NotFoundError("Session not found")
        if caller_id is not None and session.host != caller_id:
            raise AuthorizationError("Unauthorized")
        return session

    def _load_owned(self, session_id: str, caller_id: str) -> Session:
        session = self._store.find_by_id(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        if session.host != caller_id:
            raise AuthorizationError("Unauthorized")
        if session.session_type != "ai":
            raise NotFoundError("This is not an AI session")
        return session

    @contextmanager
    def _session_lock(self, session_id: str) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.get(session_id)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._locks[session_id] = entry
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[session_id]


def _score(value: Any) -> Any:  # Neutral default for missing, falsy or non-numeric scores
    if not value or isinstance(value, bool):
        return NEUTRAL_SCORE
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return NEUTRAL_SCORE
    if math.isnan(number):
        return NEUTRAL_SCORE
    number = min(max(number, 0.0), 10.0)
    return int(number) if number.is_integer() else number


def feedback_from_evaluation(evaluation: Mapping[str, Any]) -> AiFeedback:
    improvements = evaluation.get("improvements") or []
    if isinstance(improvements, str):
        improvements = [improvements]
    elif not isinstance(improvements, list):
        improvements = []
    summary = evaluation.get("summary") or DEFAULT_SUMMARY
    return AiFeedback(
        overall_score=_score(evaluation.get("overallScore")),
        technical_score=_score(evaluation.get("technicalScore")),
        communication_score=_score(evaluation.get("communicationScore")),
        problem_solving_score=_score(evaluation.get("problemSolvingScore")),
        improvements=[str(item) for item in improvements],
        summary=str(summary),
    )


def rating_for(overall_score: float) -> int:
    """Map a 0-10 score onto 0-5, rounding halves up."""

    return min(5, max(0, math.floor(overall_score / 2 + 0.5)))


__all__ = [
    "DEFAULT_SUMMARY",
    "EndResult",
    "InterviewSessionManager",
    "InterviewerBackend",
    "SessionRepository",
    "TurnResult",
    "feedback_from_evaluation",
    "rating_for",
]
