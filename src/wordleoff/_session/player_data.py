# Area: Session
"""
wordleoff._session.player_data — Per-player session state
==========================================================

Tracks one player's identity, current connection binding and guesses for
the running round.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional


@dataclass
class PlayerData:
    """
    One player inside a ``GameSession``.

    Attributes:
        index: Join order (1-based), fixed for the player's lifetime
        connection_id: Current transport connection, rebound on restore
        client_guid: Stable client identity used to authorize a restore
        play_data: Guessed words this round, in submission order
        disconnected_since: When the connection dropped; None while connected
    """

    index: int
    connection_id: Optional[str]
    client_guid: str
    play_data: List[str] = field(default_factory=list)
    disconnected_since: Optional[datetime] = None

    @property
    def is_connected(self) -> bool:
        return self.disconnected_since is None

    @property
    def guess_count(self) -> int:
        return len(self.play_data)

    def disconnected_for(self, now: datetime) -> timedelta:
        """Time since the connection dropped; zero while connected."""
        return now - (self.disconnected_since or now)

    def bind(self, connection_id: str) -> None:
        """Attach a live connection and clear the disconnect stamp."""
        self.connection_id = connection_id
        self.disconnected_since = None
