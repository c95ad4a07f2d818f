from __future__ import annotations  # Tolerant parsing of end-of-interview evaluations

import json
import logging
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 5
SCORE_KEYS = ("overallScore", "technicalScore", "communicationScore", "problemSolvingScore")
UNPARSED_NOTE = "Unable to parse detailed feedback"

_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```\s*$")


class MalformedEvaluation(ValueError):  # Backend text is not an evaluation object
    pass


def strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown fence (with or without a language tag) and outer whitespace."""

    text = content.strip()
    if text.startswith("```"):
        text = _OPENING_FENCE.sub("", text, count=1)
        text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_evaluation_strict(text: str) -> Dict[str, Any]:
    """Parse already-unfenced text as a JSON object.

    Raises:
        MalformedEvaluation: If the text is not JSON or not an object.
    """

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise MalformedEvaluation(f"evaluation is not JSON: {type(exc).__name__}") from exc
    if not isinstance(data, dict):
        raise MalformedEvaluation(f"evaluation is a {type(data).__name__}, expected an object")
    return data


def fallback_evaluation(raw: str) -> Dict[str, Any]:
    feedback: Dict[str, Any] = {key: NEUTRAL_SCORE for key in SCORE_KEYS}
    feedback["summary"] = raw
    feedback["improvements"] = [UNPARSED_NOTE]
    feedback["strengths"] = []
    return feedback


def parse_evaluation(raw: str) -> Dict[str, Any]:
    """Turn backend text into an evaluation object; never raises on bad format."""

    try:
        return parse_evaluation_strict(strip_code_fences(raw))
    except MalformedEvaluation as exc:
        logger.warning("Evaluation fallback used: %s", exc)
        return fallback_evaluation(raw)
