"""Evaluation parsing for completed interviews."""
from .evaluation import (
    NEUTRAL_SCORE,
    SCORE_KEYS,
    UNPARSED_NOTE,
    MalformedEvaluation,
    fallback_evaluation,
    parse_evaluation,
    parse_evaluation_strict,
    strip_code_fences,
)

__all__ = [
    "NEUTRAL_SCORE",
    "SCORE_KEYS",
    "UNPARSED_NOTE",
    "MalformedEvaluation",
    "fallback_evaluation",
    "parse_evaluation",
    "parse_evaluation_strict",
    "strip_code_fences",
]
