"""Caller-facing error taxonomy for session operations."""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTHORIZATION = "authorization"
    STATE = "state"


class SessionError(Exception):
    """Base class for failures surfaced to the caller; switch on ``kind``."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SessionError):
    kind = ErrorKind.VALIDATION


class NotFoundError(SessionError):
    kind = ErrorKind.NOT_FOUND


class AuthorizationError(SessionError):
    kind = ErrorKind.AUTHORIZATION


class StateError(SessionError):
    kind = ErrorKind.STATE


__all__ = [
    "AuthorizationError",
    "ErrorKind",
    "NotFoundError",
    "SessionError",
    "StateError",
    "ValidationError",
]
