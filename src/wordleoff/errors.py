"""
wordleoff.errors — Custom exception classes
============================================

Session operations report expected outcomes (unknown player, full roster,
invalid restore) through result enums. The exceptions below cover the
conditions that are genuinely exceptional: an exhausted answer pool, a lost
optimistic-concurrency race, a missing stored session and bad configuration.
"""

from __future__ import annotations
from typing import List, Optional


class WordleOffError(Exception):
    """Base exception for all wordleoff package errors."""
    pass


class AnswerPoolExhaustedError(WordleOffError):
    """Raised when no answer outside the recent history could be drawn."""

    def __init__(self, session_id: str, attempts: int, history_size: int):
        self.session_id = session_id
        self.attempts = attempts
        self.history_size = history_size
        super().__init__(
            f"Session '{session_id}': no fresh answer after {attempts} draws "
            f"({history_size} answers in recent history)"
        )


class ConcurrencyConflictError(WordleOffError):
    """Raised when a session write carries a stale version token."""

    def __init__(self, session_id: str, expected_version: int,
                 actual_version: Optional[int] = None):
        self.session_id = session_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        found = "missing" if actual_version is None else f"version {actual_version}"
        super().__init__(
            f"Session '{session_id}' was modified concurrently "
            f"(expected version {expected_version}, found {found})"
        )


class SessionNotFoundError(WordleOffError):
    """Raised when a stored session is looked up by an unknown id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session '{session_id}' not found")


class ConfigError(WordleOffError):
    """Raised when configuration values are missing or invalid."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        self.fields = fields or []
        super().__init__(message)
