"""Single-shot coding assistant: review, hint and explain."""
from __future__ import annotations

import logging
from textwrap import dedent
from typing import Optional

from interview_session.interview_session import InterviewerBackend

from .errors import ValidationError

logger = logging.getLogger(__name__)

REVIEW_SYSTEM = dedent(
    """
    You are an expert code reviewer and programming mentor. Analyze the provided code and give constructive feedback. Be concise but helpful.

    Focus on:
    1. **Correctness**: Does it solve the problem correctly?
    2. **Time Complexity**: What's the Big O complexity?
    3. **Space Complexity**: Memory usage analysis
    4. **Code Quality**: Readability, naming, structure
    5. **Improvements**: Specific suggestions to make it better

    Format your response with clear sections using markdown. Be encouraging but honest.
    """
).strip()

HINT_SYSTEM = dedent(
    """
    You are a helpful programming tutor. Give a hint to help the student progress WITHOUT giving away the solution directly.

    Rules:
    - Be encouraging and supportive
    - Point them in the right direction
    - Ask guiding questions
    - Never write the actual solution code
    - Keep hints concise (2-3 sentences max)
    """
).strip()

EXPLAIN_SYSTEM = (
    "You are a patient programming teacher. Explain code in simple terms that anyone can understand. "
    "Use analogies when helpful. Keep explanations clear and concise."
)


def _fenced(code: str, language: str) -> str:
    return f"```{language}\n{code}\n```"


def _require(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


class CodingAssistant:  # Stateless helpers; backend failures propagate to the caller
    def __init__(self, backend: InterviewerBackend) -> None:
        self._backend = backend

    def review_code(self, code: Optional[str], language: Optional[str], problem_title: str = "") -> str:
        _require(code=code, language=language)
        target = f' for the "{problem_title}" problem' if problem_title else ""
        prompt = (
            f"Review this {language} code{target}:\n\n"
            f"{_fenced(code, language)}\n\n"
            "Provide a brief but comprehensive code review."
        )
        logger.info("Code review requested language=%s chars=%d", language, len(code))
        return self._backend.generate(prompt, REVIEW_SYSTEM)

    def code_hint(
        self,
        code: Optional[str],
        language: Optional[str],
        problem_title: Optional[str],
        problem_description: str = "",
    ) -> str:
        _require(code=code, language=language, problem_title=problem_title)
        prompt = (
            f"Problem: {problem_title}\n"
            f"Description: {problem_description}\n\n"
            f"Current code ({language}):\n"
            f"{_fenced(code, language)}\n\n"
            "Give a helpful hint to guide them forward."
        )
        return self._backend.generate(prompt, HINT_SYSTEM)

    def explain_code(self, code: Optional[str], language: Optional[str]) -> str:
        _require(code=code, language=language)
        prompt = f"Explain this {language} code step by step:\n\n{_fenced(code, language)}"
        return self._backend.generate(prompt, EXPLAIN_SYSTEM)


__all__ = ["CodingAssistant", "EXPLAIN_SYSTEM", "HINT_SYSTEM", "REVIEW_SYSTEM"]
