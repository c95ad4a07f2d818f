"""FastAPI routes for AI interview sessions and the coding assistant."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from api.schemas import (
    EndReq,
    EndResp,
    ExplainReq,
    ExplainResp,
    HintReq,
    HintResp,
    MessageReq,
    MessageResp,
    ReviewReq,
    ReviewResp,
    SessionListResp,
    SessionResp,
    StartReq,
    StartResp,
)
from config.settings import settings
from interview_session.interview_session import InterviewSessionManager
from llm_gateway import LlmGatewayError
from services.assist import CodingAssistant
from services.errors import ErrorKind, SessionError
from services.sessions import build_llm_client, build_session_manager
from storage.sessions import SessionStore


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai-interview")
assist_router = APIRouter(prefix="/api/ai")

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STATE: 409,
}


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    return SessionStore(settings.DB_PATH)


@lru_cache(maxsize=1)
def get_session_manager() -> InterviewSessionManager:
    return build_session_manager(settings, store=get_session_store())


@lru_cache(maxsize=1)
def get_assistant() -> CodingAssistant:
    return CodingAssistant(build_llm_client(settings))


def get_caller_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Identity asserted by the upstream auth layer."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized - no user identity provided")
    return x_user_id


def _http_error(exc: SessionError) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_KIND[exc.kind],
        detail={"message": exc.message, "kind": exc.kind.value},
    )


@router.post("/start", response_model=StartResp, status_code=201)
def start(
    req: StartReq,
    caller_id: str = Depends(get_caller_id),
    manager: InterviewSessionManager = Depends(get_session_manager),
) -> StartResp:
    try:
        session = manager.create_session(
            req.problem,
            req.difficulty,
            caller_id,
            problem_description=req.problem_description,
        )
    except SessionError as exc:
        raise _http_error(exc) from exc
    return StartResp(session=session)


@router.post("/message", response_model=MessageResp)
def message(
    req: MessageReq,
    caller_id: str = Depends(get_caller_id),
    manager: InterviewSessionManager = Depends(get_session_manager),
) -> MessageResp:
    try:
        result = manager.send_turn(req.session_id, req.message, caller_id, current_code=req.current_code)
    except SessionError as exc:
        raise _http_error(exc) from exc
    return MessageResp(response=result.response, conversation=result.conversation)


@router.post("/end", response_model=EndResp)
def end(
    req: EndReq,
    caller_id: str = Depends(get_caller_id),
    manager: InterviewSessionManager = Depends(get_session_manager),
) -> EndResp:
    try:
        result = manager.end_session(req.session_id, caller_id, final_code=req.final_code)
    except SessionError as exc:
        raise _http_error(exc) from exc
    return EndResp(session=result.session, feedback=result.feedback)


@router.get("", response_model=SessionListResp)
def list_sessions(
    caller_id: str = Depends(get_caller_id),
    store: SessionStore = Depends(get_session_store),
) -> SessionListResp:
    return SessionListResp(sessions=store.list_for_host(caller_id))


@router.get("/{session_id}", response_model=SessionResp)
def fetch(
    session_id: str,
    caller_id: str = Depends(get_caller_id),
    manager: InterviewSessionManager = Depends(get_session_manager),
) -> SessionResp:
    try:
        session = manager.get_session(session_id, caller_id)
    except SessionError as exc:
        raise _http_error(exc) from exc
    return SessionResp(session=session)


def _assist_failure(exc: LlmGatewayError, action: str) -> HTTPException:
    logger.error("Assistant %s failed: %s", action, exc)
    return HTTPException(status_code=502, detail=f"LLM request failed: {exc}")


@assist_router.post("/review", response_model=ReviewResp, dependencies=[Depends(get_caller_id)])
def review(req: ReviewReq, assistant: CodingAssistant = Depends(get_assistant)) -> ReviewResp:
    try:
        text = assistant.review_code(req.code, req.language, req.problem_title)
    except SessionError as exc:
        raise _http_error(exc) from exc
    except LlmGatewayError as exc:
        raise _assist_failure(exc, "review") from exc
    return ReviewResp(review=text)


@assist_router.post("/hint", response_model=HintResp, dependencies=[Depends(get_caller_id)])
def hint(req: HintReq, assistant: CodingAssistant = Depends(get_assistant)) -> HintResp:
    try:
        text = assistant.code_hint(req.code, req.language, req.problem_title, req.problem_description)
    except SessionError as exc:
        raise _http_error(exc) from exc
    except LlmGatewayError as exc:
        raise _assist_failure(exc, "hint") from exc
    return HintResp(hint=text)


@assist_router.post("/explain", response_model=ExplainResp, dependencies=[Depends(get_caller_id)])
def explain(req: ExplainReq, assistant: CodingAssistant = Depends(get_assistant)) -> ExplainResp:
    try:
        text = assistant.explain_code(req.code, req.language)
    except SessionError as exc:
        raise _http_error(exc) from exc
    except LlmGatewayError as exc:
        raise _assist_failure(exc, "explain") from exc
    return ExplainResp(explanation=text)
