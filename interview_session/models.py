from __future__ import annotations  # Interview session domain models

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

Difficulty = Literal["easy", "medium", "hard"]
SessionType = Literal["human", "ai"]
SessionStatus = Literal["active", "completed"]
TurnRole = Literal["user", "ai"]
Score = Union[Annotated[int, Field(ge=0, le=10)], Annotated[float, Field(ge=0, le=10)]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProblemInfo(BaseModel):  # Problem metadata fed into every prompt
    title: str
    difficulty: str
    description: str = ""


class ChatTurn(BaseModel):  # One conversational entry
    role: TurnRole
    content: str
    timestamp: datetime = Field(default_factory=utc_now)


class AiFeedback(BaseModel):  # Structured evaluation attached at completion
    overall_score: Score
    technical_score: Score
    communication_score: Score
    problem_solving_score: Score
    improvements: List[str] = Field(default_factory=list)
    summary: str = ""


class Session(BaseModel):  # Persisted record of one interview attempt
    id: str
    problem: str
    problem_description: str = ""
    difficulty: Difficulty
    host: str
    session_type: SessionType = "ai"
    status: SessionStatus = "active"
    ai_conversation: List[ChatTurn] = Field(default_factory=list)
    code_snapshot: str = ""
    ai_feedback: Optional[AiFeedback] = None
    rating: int = Field(default=0, ge=0, le=5)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def problem_info(self) -> ProblemInfo:
        return ProblemInfo(
            title=self.problem,
            difficulty=self.difficulty,
            description=self.problem_description or self.problem,
        )


__all__ = ["AiFeedback", "ChatTurn", "Difficulty", "ProblemInfo", "Session", "SessionStatus", "SessionType", "utc_now"]
