# Area: Store
"""
Store layer - external persistence for sessions.

This package handles:
- The serialized (pydantic) form of a session
- The SQLite sessions repository with optimistic-concurrency writes
"""

from .records import PlayerRecord, SessionRecord, to_record, from_record
from .session_store import SessionStore, init_database

__all__ = [
    "init_database",
    "PlayerRecord",
    "SessionRecord",
    "to_record",
    "from_record",
    "SessionStore",
]
