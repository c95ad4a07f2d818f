"""Prompt composition for each phase of an AI interview.

Every function here is pure: the same inputs always give the same text, and
nothing touches the network or the database.
"""
from __future__ import annotations

from textwrap import dedent
from typing import NamedTuple, Optional, Sequence

from .models import ChatTurn, ProblemInfo

NO_CODE_YET = "No code written yet"
NO_CODE_SUBMITTED = "No code submitted"


class PromptPair(NamedTuple):
    prompt: str
    system_prompt: Optional[str] = None


def render_transcript(history: Sequence[ChatTurn]) -> str:
    """Render turns in conversational order as ``ROLE: content`` lines."""

    return "\n".join(f"{turn.role.upper()}: {turn.content}" for turn in history)


def _code_block(code: str, placeholder: str) -> str:
    return f"```\n{code or placeholder}\n```"


def build_intro_prompt(problem: ProblemInfo) -> PromptPair:
    template = dedent(
        """
        You are a friendly technical interviewer starting a DSA interview session.

        TASK: Introduce yourself and present the problem naturally, as if you're on a phone call.

        PROBLEM:
        - Title: "{title}"
        - Difficulty: {difficulty}
        - Description: {description}

        YOUR INTRODUCTION SHOULD:
        1. Greet warmly (like "Hi! Thanks for joining me today")
        2. Briefly introduce yourself as an AI technical interviewer
        3. Mention the problem name and difficulty
        4. Explain the problem clearly in simple terms
        5. Ask if they have any clarifying questions before starting

        Keep it conversational and friendly. About 3-4 sentences total.
        """
    ).strip()
    prompt = template.format(
        title=problem.title,
        difficulty=problem.difficulty,
        description=problem.description or problem.title,
    )
    return PromptPair(prompt)


def build_turn_prompt(
    history: Sequence[ChatTurn],
    current_code: str,
    problem: ProblemInfo,
    user_message: str,
) -> PromptPair:
    """Compose the interviewer instruction for one reply.

    The instruction carries the problem, the whole transcript and the code;
    the prompt itself is just the candidate's latest message.
    """

    # dedent runs before interpolation so multi-line history keeps its layout
    template = dedent(
        """
        You are an experienced and friendly DSA interviewer conducting a technical interview. Your goal is to help the candidate demonstrate their problem-solving skills while making them feel comfortable.

        CRITICAL RULES:
        1. ALWAYS respond to what the user says. NEVER say you can't process something
        2. If they greet you (hi, hello, etc), respond warmly and ask if they're ready to start
        3. If they give short answers, ask follow-up questions to understand their thinking
        4. Acknowledge their input before asking the next question
        5. Be conversational and natural, this is a voice/chat interview

        INTERVIEW FLOW:
        - Start: Greet warmly, present problem, ask if they have clarifying questions
        - During: Listen to their approach, provide feedback, ask about edge cases/complexity
        - Coding: Observe their code, point out potential issues via questions
        - Cross-question: "What if X?", "How would you optimize?", "What's the time complexity?"
        - Never give direct solutions; guide with hints and questions

        PROBLEM:
        Title: {title}
        Difficulty: {difficulty}
        Description: {description}

        CONVERSATION HISTORY:
        {history}

        USER'S CODE:
        {code}

        USER JUST SAID: "{message}"

        RESPOND AS THE INTERVIEWER:
        - Acknowledge what they said
        - Give quick feedback if applicable
        - Ask a follow-up question to keep the interview flowing
        - Keep it conversational (2-3 sentences)
        """
    ).strip()
    system_prompt = template.format(
        title=problem.title,
        difficulty=problem.difficulty,
        description=problem.description or problem.title,
        history=render_transcript(history),
        code=_code_block(current_code, NO_CODE_YET),
        message=user_message,
    )
    return PromptPair(user_message, system_prompt)


def build_evaluation_prompt(
    history: Sequence[ChatTurn],
    final_code: str,
    problem: ProblemInfo,
) -> PromptPair:
    template = dedent(
        """
        You are evaluating a completed DSA interview for the "{title}" problem ({difficulty}).

        FULL INTERVIEW TRANSCRIPT:
        {history}

        FINAL CODE:
        {code}

        Evaluate the candidate and respond in EXACTLY this JSON format (no markdown, no commentary, just raw JSON):
        {{
          "overallScore": <integer 1-10>,
          "technicalScore": <integer 1-10>,
          "communicationScore": <integer 1-10>,
          "problemSolvingScore": <integer 1-10>,
          "summary": "<2-3 sentence overall assessment>",
          "improvements": ["<improvement 1>", "<improvement 2>", "<improvement 3>"],
          "strengths": ["<strength 1>", "<strength 2>"]
        }}

        SCORING GUIDE:
        - 9-10: Exceptional, would get a strong hire
        - 7-8: Good performance, minor areas to improve
        - 5-6: Average, needs improvement
        - 3-4: Below expectations, significant gaps
        - 1-2: Did not demonstrate competency
        """
    ).strip()
    prompt = template.format(
        title=problem.title,
        difficulty=problem.difficulty,
        history=render_transcript(history),
        code=_code_block(final_code, NO_CODE_SUBMITTED),
    )
    return PromptPair(prompt)


def fallback_intro(problem_title: str) -> str:
    return (
        f'Welcome to your DSA interview! Today we\'ll be working on the "{problem_title}" problem. '
        "Take your time to read the problem description, and let me know when you're ready to discuss your approach."
    )


def fallback_reply(user_message: str) -> str:
    return (
        f'I heard you say "{user_message}". Let me think about that... '
        "Can you tell me more about your approach to this problem?"
    )


__all__ = [
    "NO_CODE_SUBMITTED",
    "NO_CODE_YET",
    "PromptPair",
    "build_evaluation_prompt",
    "build_intro_prompt",
    "build_turn_prompt",
    "fallback_intro",
    "fallback_reply",
    "render_transcript",
]
