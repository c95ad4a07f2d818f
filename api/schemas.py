"""Pydantic schemas for the AI interview API."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from interview_session.models import AiFeedback, ChatTurn, Session


class StartReq(BaseModel):
    problem: Optional[str] = None
    difficulty: Optional[str] = None
    problem_description: Optional[str] = None


class MessageReq(BaseModel):
    session_id: Optional[str] = None
    message: Optional[str] = None
    current_code: Optional[str] = None


class EndReq(BaseModel):
    session_id: Optional[str] = None
    final_code: Optional[str] = None


class StartResp(BaseModel):
    session: Session
    message: str = "AI interview session started successfully"


class MessageResp(BaseModel):
    response: str
    conversation: List[ChatTurn] = Field(default_factory=list)


class EndResp(BaseModel):
    session: Session
    feedback: Optional[AiFeedback] = None
    message: str = "AI interview completed successfully"


class SessionResp(BaseModel):
    session: Session


class SessionListResp(BaseModel):
    sessions: List[Session] = Field(default_factory=list)


class ReviewReq(BaseModel):
    code: Optional[str] = None
    language: Optional[str] = None
    problem_title: str = ""


class HintReq(BaseModel):
    code: Optional[str] = None
    language: Optional[str] = None
    problem_title: Optional[str] = None
    problem_description: str = ""


class ExplainReq(BaseModel):
    code: Optional[str] = None
    language: Optional[str] = None


class ReviewResp(BaseModel):
    success: bool = True
    review: str


class HintResp(BaseModel):
    success: bool = True
    hint: str


class ExplainResp(BaseModel):
    success: bool = True
    explanation: str
