"""
wordleoff.policy — Game-design constants for a session
=======================================================

``SessionPolicy`` bundles the limits and timing windows a ``GameSession``
enforces. Production defaults match the live game; tests build policies
with much shorter windows.

Two rules are policy switches rather than fixed behavior:

- ``disconnected_players_hold_seat``: when False, a newcomer arriving at a
  full roster takes the seat of the player who has been disconnected the
  longest.
- ``reject_join_after_first_guess``: when True, new players are refused
  with ``GAME_ALREADY_STARTED`` once anyone has guessed this round.
"""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field


class SessionPolicy(BaseModel):
    """Limits and timing windows applied by every ``GameSession``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_players: int = Field(default=16, ge=1)
    max_guesses: int = Field(default=6, ge=1)
    session_expire_minutes: float = Field(default=120, gt=0)
    connection_expire_seconds: float = Field(default=30, gt=0)
    past_answers_max_size: int = Field(default=50, ge=1)
    restart_grace_seconds: float = Field(default=60, ge=0)
    max_answer_draws: int = Field(default=1000, ge=1)
    disconnected_players_hold_seat: bool = True
    reject_join_after_first_guess: bool = False

    @property
    def session_expiry(self) -> timedelta:
        return timedelta(minutes=self.session_expire_minutes)

    @property
    def connection_expiry(self) -> timedelta:
        return timedelta(seconds=self.connection_expire_seconds)

    @property
    def restart_grace(self) -> timedelta:
        return timedelta(seconds=self.restart_grace_seconds)


DEFAULT_POLICY = SessionPolicy()
