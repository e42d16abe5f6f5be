"""
wordleoff — Multiplayer word-guessing session manager
======================================================

Live session state for WordleOff: a shared secret answer, a roster of
players each making up to six guesses per round, and connection tracking
so players can drop and rejoin without losing progress.

Quick Start:
    from wordleoff import GameSession, AddPlayerResult

    session = GameSession("abc123", "CRANE")
    session.add_player("conn-1", "guid-1", "Alice", restore=False)
    session.enter_guess("Alice", "SLATE")

Serving many sessions from one process:
    from wordleoff import SessionDirectory, SessionSweeper

    directory = SessionDirectory()
    result, join_error = directory.join("abc123", "conn-1", "guid-1", "Alice")
    SessionSweeper(directory).run()

Sharing sessions between processes:
    from wordleoff import SessionStore, init_database

    init_database("sessions.db")
    store = SessionStore("sessions.db")
    session, result = store.update("abc123", lambda s: s.enter_guess("Alice", "SLATE"))
"""

from .answers import AnswerSource, WordListAnswerSource, FixedAnswerSource
from .config import Settings, load_settings, build_answer_source
from .errors import (
    WordleOffError,
    AnswerPoolExhaustedError,
    ConcurrencyConflictError,
    SessionNotFoundError,
    ConfigError,
)
from .policy import SessionPolicy, DEFAULT_POLICY
from .results import AddPlayerResult, EnterWordResult, ServerJoinError, join_error_for
from ._session import (
    PlayerData,
    GameSession,
    SessionDirectory,
    SessionSweeper,
)
from ._shared import setup_logging
from ._store import SessionStore, SessionRecord, PlayerRecord, init_database

__all__ = [
    # Core
    "GameSession",
    "PlayerData",
    "SessionPolicy",
    "DEFAULT_POLICY",
    # Results
    "AddPlayerResult",
    "EnterWordResult",
    "ServerJoinError",
    "join_error_for",
    # Answer sources
    "AnswerSource",
    "WordListAnswerSource",
    "FixedAnswerSource",
    # Serving
    "SessionDirectory",
    "SessionSweeper",
    # Persistence
    "SessionStore",
    "SessionRecord",
    "PlayerRecord",
    "init_database",
    # Configuration & logging
    "Settings",
    "load_settings",
    "build_answer_source",
    "setup_logging",
    # Errors
    "WordleOffError",
    "AnswerPoolExhaustedError",
    "ConcurrencyConflictError",
    "SessionNotFoundError",
    "ConfigError",
]
__version__ = "1.0.0"
