# Area: Session
"""
Session layer - live game state and its lifecycle.

This package handles:
- Per-player state (connection binding, guesses, disconnect stamp)
- The GameSession state machine (admission, guessing, rounds, cleanup)
- The in-process directory that serializes access per session
- The periodic sweeper that applies time-based cleanup
"""

from .clock import Clock, utc_now
from .player_data import PlayerData
from .game_session import GameSession
from .directory import SessionDirectory
from .sweeper import SessionSweeper

__all__ = [
    "Clock",
    "utc_now",
    "PlayerData",
    "GameSession",
    "SessionDirectory",
    "SessionSweeper",
]
