# Area: Session
"""
wordleoff._session.game_session — Session state machine
========================================================

A ``GameSession`` holds one running game: the secret answer (plus a short
history of earlier answers so they are not repeated), the roster of players
keyed by name, and the timestamps that drive player and session expiry.

All mutation goes through the methods below. The roster is exposed read-only
so the invariants hold:

- ``past_answers`` is never empty; the current answer is its newest entry
- the roster never exceeds ``policy.max_players``
- player indexes are unique, positive and never handed out twice
- no player holds more than ``policy.max_guesses`` guesses

A session is not thread-safe by itself. Callers serialize access per
session (see ``SessionDirectory``).
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime
from types import MappingProxyType
from typing import Deque, Dict, Iterable, List, Mapping, Optional

from ..answers import AnswerSource, default_answer_source
from ..errors import AnswerPoolExhaustedError
from ..policy import DEFAULT_POLICY, SessionPolicy
from ..results import AddPlayerResult, EnterWordResult
from .clock import Clock, utc_now
from .player_data import PlayerData

logger = logging.getLogger("wordleoff.session")


class GameSession:
    """
    State of one multiplayer word-guessing session.

    Args:
        session_id: Immutable session key
        answer: Fixed first answer; drawn from ``answer_source`` when None
        answer_source: Where new answers come from (bundled list by default)
        policy: Limits and expiry windows
        clock: Returns the current UTC time
    """

    def __init__(
        self,
        session_id: str,
        answer: Optional[str] = None,
        *,
        answer_source: Optional[AnswerSource] = None,
        policy: Optional[SessionPolicy] = None,
        clock: Clock = utc_now,
    ):
        self._session_id = session_id
        self.policy = policy or DEFAULT_POLICY
        self._answer_source = answer_source or default_answer_source()
        self._clock = clock
        self._players: Dict[str, PlayerData] = {}
        self._past_answers: Deque[str] = deque(maxlen=self.policy.past_answers_max_size)
        self._last_index = 0
        self.version = 0

        if answer is None:
            self._set_new_random_answer()
        else:
            self._past_answers.append(answer)
        self.last_update_at: datetime = self._clock()

    @classmethod
    def restore(
        cls,
        session_id: str,
        past_answers: Iterable[str],
        players: Mapping[str, PlayerData],
        last_update_at: datetime,
        *,
        last_index: int = 0,
        version: int = 0,
        answer_source: Optional[AnswerSource] = None,
        policy: Optional[SessionPolicy] = None,
        clock: Clock = utc_now,
    ) -> "GameSession":
        """Rebuild a session from stored state without drawing an answer."""
        answers = list(past_answers)
        if not answers:
            raise ValueError(f"Session '{session_id}' has no answers to restore")
        session = cls(
            session_id, answers[-1],
            answer_source=answer_source, policy=policy, clock=clock,
        )
        session._past_answers.clear()
        session._past_answers.extend(answers)
        session._players = dict(players)
        session._last_index = max(
            [last_index] + [p.index for p in session._players.values()]
        )
        session.last_update_at = last_update_at
        session.version = version
        return session

    # ── Read-only views ──────────────────────────────────────

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def players(self) -> Mapping[str, PlayerData]:
        return MappingProxyType(self._players)

    @property
    def past_answers(self) -> List[str]:
        return list(self._past_answers)

    @property
    def current_answer(self) -> str:
        return self._past_answers[-1]

    @property
    def last_index(self) -> int:
        """Highest player index ever handed out in this session."""
        return self._last_index

    @property
    def session_expired(self) -> bool:
        return self._clock() - self.last_update_at > self.policy.session_expiry

    @property
    def round_started(self) -> bool:
        return any(p.play_data for p in self._players.values())

    def get_player(self, player_name: str) -> Optional[PlayerData]:
        return self._players.get(player_name)

    def player_name_for(self, connection_id: str) -> Optional[str]:
        """Name of the player bound to ``connection_id``, if any."""
        for name, player in self._players.items():
            if player.connection_id == connection_id:
                return name
        return None

    def ordered_player_names(self) -> List[str]:
        """Player names in join order."""
        return sorted(self._players, key=lambda name: self._players[name].index)

    # ── Round management ─────────────────────────────────────

    def reset_game(self) -> None:
        """Start a new round: fresh answer, every player's guesses cleared."""
        self._set_new_random_answer()
        for player in self._players.values():
            player.play_data.clear()
        self.last_update_at = self._clock()
        logger.info(
            f"[{self._session_id}] New round started",
            extra={"session_id": self._session_id},
        )

    def _set_new_random_answer(self) -> None:
        for _ in range(self.policy.max_answer_draws):
            answer = self._answer_source.next_random_answer()
            if answer not in self._past_answers:
                # deque(maxlen) drops the oldest answer once the bound is hit
                self._past_answers.append(answer)
                return
        raise AnswerPoolExhaustedError(
            self._session_id, self.policy.max_answer_draws, len(self._past_answers)
        )

    # ── Player admission ─────────────────────────────────────

    def add_player(
        self,
        connection_id: str,
        client_guid: str,
        player_name: str,
        restore: bool,
    ) -> AddPlayerResult:
        """
        Admit a player, or restore a known player's connection.

        The checks run in priority order: a known name is restored (matching
        ``client_guid``) or refused as taken, before restore requests and
        roster limits are considered. Only the restore and admit branches
        change state.

        Args:
            connection_id: The caller's live connection
            client_guid: The caller's stable client identity
            player_name: Requested player name (case-sensitive)
            restore: True when the client is re-attaching to an old identity

        Returns:
            The admission outcome
        """
        existing = self._players.get(player_name)
        if existing is not None:
            if existing.client_guid == client_guid:
                existing.bind(connection_id)
                self.last_update_at = self._clock()
                logger.info(
                    f"[{self._session_id}] Connection restored for '{player_name}'",
                    extra={"session_id": self._session_id, "player_name": player_name},
                )
                return AddPlayerResult.CONNECTION_RESTORED
            return self._reject(player_name, AddPlayerResult.PLAYER_NAME_EXIST)
        elif restore:
            return self._reject(player_name, AddPlayerResult.CANNOT_RESTORE)

        seat_to_free: Optional[str] = None
        if len(self._players) >= self.policy.max_players:
            seat_to_free = self._longest_disconnected()
            if seat_to_free is None or self.policy.disconnected_players_hold_seat:
                return self._reject(player_name, AddPlayerResult.PLAYER_MAXED)

        if self.policy.reject_join_after_first_guess and self.round_started:
            return self._reject(player_name, AddPlayerResult.GAME_ALREADY_STARTED)

        if seat_to_free is not None:
            del self._players[seat_to_free]
            logger.info(
                f"[{self._session_id}] '{seat_to_free}' gave up their seat to '{player_name}'",
                extra={"session_id": self._session_id, "player_name": seat_to_free},
            )

        self._last_index = max(
            [self._last_index] + [p.index for p in self._players.values()]
        ) + 1
        self._players[player_name] = PlayerData(
            index=self._last_index,
            connection_id=connection_id,
            client_guid=client_guid,
        )
        self.last_update_at = self._clock()
        logger.info(
            f"[{self._session_id}] Player '{player_name}' joined (index {self._last_index})",
            extra={"session_id": self._session_id, "player_name": player_name},
        )
        return AddPlayerResult.SUCCESS

    def _reject(self, player_name: str, result: AddPlayerResult) -> AddPlayerResult:
        logger.debug(
            f"[{self._session_id}] Join refused for '{player_name}': {result.value}",
            extra={"session_id": self._session_id, "player_name": player_name,
                   "result": result.value},
        )
        return result

    def _longest_disconnected(self) -> Optional[str]:
        disconnected = [
            (player.disconnected_since, player.index, name)
            for name, player in self._players.items()
            if player.disconnected_since is not None
        ]
        if not disconnected:
            return None
        return min(disconnected)[2]

    def reconnect_player(self, player_name: str, new_connection_id: str) -> bool:
        """
        Rebind a known player to a new connection without checking identity.

        Returns:
            False if no player has that name
        """
        player = self._players.get(player_name)
        if player is None:
            return False
        player.bind(new_connection_id)
        self.last_update_at = self._clock()
        logger.info(
            f"[{self._session_id}] '{player_name}' reconnected",
            extra={"session_id": self._session_id, "player_name": player_name},
        )
        return True

    # ── Disconnection & cleanup ──────────────────────────────

    def disconnect_player(self, connection_id: str) -> None:
        """Mark the player on ``connection_id`` as disconnected. Unknown ids are ignored."""
        player_name = self.player_name_for(connection_id)
        if player_name is None:
            return
        now = self._clock()
        self._players[player_name].disconnected_since = now
        self.last_update_at = now
        logger.info(
            f"[{self._session_id}] '{player_name}' disconnected",
            extra={"session_id": self._session_id, "player_name": player_name},
        )

    def treat_all_players_as_disconnected(self) -> bool:
        """
        Mark every connected player as disconnected after a process restart.

        The disconnect stamp is placed ``policy.restart_grace`` in the
        future, so clients get that much extra time to reconnect before
        the removal sweep counts against them.

        Returns:
            True if any player was affected
        """
        now = self._clock()
        stamp = now + self.policy.restart_grace
        marked = []
        for name, player in self._players.items():
            if player.disconnected_since is None:
                player.disconnected_since = stamp
                marked.append(name)
        if marked:
            self.last_update_at = now
            logger.info(
                f"[{self._session_id}] Marked disconnected after restart: {marked}",
                extra={"session_id": self._session_id},
            )
        return bool(marked)

    def remove_disconnected_player(self) -> bool:
        """
        Remove every player disconnected for longer than the connection window.

        When that empties the roster a new answer is drawn, so a session
        abandoned mid-round starts fresh if someone joins later. The answer
        is drawn before anyone is removed; if the draw fails the session is
        left untouched.

        Returns:
            True if any player was removed

        Raises:
            AnswerPoolExhaustedError: The roster would empty and no fresh
                answer could be drawn
        """
        now = self._clock()
        expiry = self.policy.connection_expiry
        to_remove = [
            name for name, player in self._players.items()
            if player.disconnected_for(now) > expiry
        ]
        if not to_remove:
            return False

        empties_roster = len(to_remove) == len(self._players)
        if empties_roster:
            self._set_new_random_answer()
        for name in to_remove:
            del self._players[name]
        if empties_roster:
            self.last_update_at = now
        logger.info(
            f"[{self._session_id}] Removed disconnected players: {to_remove}",
            extra={"session_id": self._session_id},
        )
        return True

    # ── Guessing ─────────────────────────────────────────────

    def enter_guess(self, player_name: str, word: str) -> EnterWordResult:
        """
        Record a guess for ``player_name``.

        Any attempt counts as session activity, including refused ones.
        """
        self.last_update_at = self._clock()

        player = self._players.get(player_name)
        if player is None:
            return EnterWordResult.PLAYER_NOT_FOUND
        if len(player.play_data) >= self.policy.max_guesses:
            return EnterWordResult.MAX_GUESSES

        player.play_data.append(word)
        player.disconnected_since = None
        return EnterWordResult.SUCCESS

    def __repr__(self) -> str:
        return (
            f"GameSession(session_id={self._session_id!r}, "
            f"players={len(self._players)}, version={self.version})"
        )
