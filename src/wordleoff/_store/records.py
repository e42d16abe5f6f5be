# Area: Store
"""
wordleoff._store.records — Serialized session form
==================================================

Pydantic models for the JSON payload stored per session, plus the
conversions to and from a live ``GameSession``. Timestamps are stored as
ISO-8601 UTC strings.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .._session.clock import Clock, utc_now
from .._session.game_session import GameSession
from .._session.player_data import PlayerData
from ..answers import AnswerSource
from ..policy import SessionPolicy


class PlayerRecord(BaseModel):
    """Stored form of ``PlayerData``."""
    index: int = Field(gt=0)
    connection_id: Optional[str] = None
    client_guid: str
    play_data: List[str] = Field(default_factory=list)
    disconnected_since: Optional[datetime] = None


class SessionRecord(BaseModel):
    """Stored form of ``GameSession``. ``version`` lives in its own column."""
    session_id: str
    past_answers: List[str] = Field(min_length=1)
    players: Dict[str, PlayerRecord] = Field(default_factory=dict)
    last_update_at: datetime
    last_index: int = 0
    version: int = Field(default=0, exclude=True)


def to_record(session: GameSession) -> SessionRecord:
    """Snapshot a live session."""
    return SessionRecord(
        session_id=session.session_id,
        past_answers=session.past_answers,
        players={
            name: PlayerRecord(
                index=player.index,
                connection_id=player.connection_id,
                client_guid=player.client_guid,
                play_data=list(player.play_data),
                disconnected_since=player.disconnected_since,
            )
            for name, player in session.players.items()
        },
        last_update_at=session.last_update_at,
        last_index=session.last_index,
        version=session.version,
    )


def from_record(
    record: SessionRecord,
    *,
    answer_source: Optional[AnswerSource] = None,
    policy: Optional[SessionPolicy] = None,
    clock: Clock = utc_now,
) -> GameSession:
    """Rebuild a live session from its stored form."""
    players = {
        name: PlayerData(
            index=p.index,
            connection_id=p.connection_id,
            client_guid=p.client_guid,
            play_data=list(p.play_data),
            disconnected_since=p.disconnected_since,
        )
        for name, p in record.players.items()
    }
    return GameSession.restore(
        record.session_id,
        record.past_answers,
        players,
        record.last_update_at,
        last_index=record.last_index,
        version=record.version,
        answer_source=answer_source,
        policy=policy,
        clock=clock,
    )
