# Area: Session
"""
wordleoff._session.directory — In-process session directory
===========================================================

Maps session ids to live ``GameSession`` objects and serializes access to
each one. Every session has its own lock; work on different sessions runs
in parallel and no method holds more than one session lock at a time.

Expiry is checked lazily: a session whose ``session_expired`` flag is set is
dropped the next time anyone asks for it, and ``evict_expired`` clears the
rest in bulk.

Usage:
    directory = SessionDirectory()
    with directory.open("abc123") as session:
        session.enter_guess("Alice", "CRANE")
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from ..answers import AnswerSource
from ..errors import WordleOffError
from ..policy import SessionPolicy
from ..results import AddPlayerResult, ServerJoinError, join_error_for
from .clock import Clock, utc_now
from .game_session import GameSession

logger = logging.getLogger("wordleoff.directory")


@dataclass
class _SessionLock:
    """A session lock and the number of callers holding or waiting for it."""
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class SessionDirectory:
    """
    Thread-safe registry of live sessions.

    Args:
        answer_source: Passed to every session the directory creates
        policy: Passed to every session the directory creates
        clock: Passed to every session the directory creates
    """

    def __init__(
        self,
        *,
        answer_source: Optional[AnswerSource] = None,
        policy: Optional[SessionPolicy] = None,
        clock: Clock = utc_now,
    ):
        self._answer_source = answer_source
        self._policy = policy
        self._clock = clock
        self._registry_lock = threading.Lock()
        self._sessions: Dict[str, GameSession] = {}
        # Only ids with a caller holding or waiting on the lock have an entry
        self._session_locks: Dict[str, _SessionLock] = {}

    @contextmanager
    def _locked(self, session_id: str) -> Iterator[None]:
        """Hold the session's lock; the entry is dropped when its last user leaves."""
        with self._registry_lock:
            entry = self._session_locks.get(session_id)
            if entry is None:
                entry = self._session_locks[session_id] = _SessionLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._registry_lock:
                entry.users -= 1
                if entry.users == 0:
                    del self._session_locks[session_id]

    def _live(self, session_id: str) -> Optional[GameSession]:
        """Return the session if present and not expired. Caller holds its lock."""
        with self._registry_lock:
            session = self._sessions.get(session_id)
        if session is None or not session.session_expired:
            return session
        with self._registry_lock:
            self._sessions.pop(session_id, None)
        logger.info(f"Session '{session_id}' expired and was evicted")
        return None

    def _create(self, session_id: str) -> GameSession:
        session = GameSession(
            session_id,
            answer_source=self._answer_source,
            policy=self._policy,
            clock=self._clock,
        )
        with self._registry_lock:
            self._sessions[session_id] = session
        logger.info(f"Session '{session_id}' created")
        return session

    @contextmanager
    def open(self, session_id: str, create: bool = True) -> Iterator[Optional[GameSession]]:
        """
        Hold the session's lock for the duration of the ``with`` block.

        Args:
            session_id: Session to open
            create: Create the session on first reference. When False the
                block receives None for unknown or expired sessions.

        Yields:
            The live session, or None
        """
        with self._locked(session_id):
            session = self._live(session_id)
            if session is None and create:
                session = self._create(session_id)
            yield session

    def find(self, session_id: str) -> Optional[GameSession]:
        """Look up a live session without creating it. Mutate only inside ``open``."""
        with self.open(session_id, create=False) as session:
            return session

    def join(
        self,
        session_id: str,
        connection_id: str,
        client_guid: str,
        player_name: str,
        restore: bool = False,
    ) -> Tuple[Optional[AddPlayerResult], Optional[ServerJoinError]]:
        """
        Admit a player into a session, creating it unless this is a restore.

        Returns:
            ``(result, join_error)``; ``result`` is None when a restore
            targets a session that no longer exists
        """
        with self.open(session_id, create=not restore) as session:
            if session is None:
                logger.debug(f"Restore into missing session '{session_id}' refused")
                return None, ServerJoinError.SESSION_NOT_FOUND
            result = session.add_player(connection_id, client_guid, player_name, restore)
            return result, join_error_for(result)

    def session_ids(self) -> List[str]:
        with self._registry_lock:
            return list(self._sessions)

    def sweep_disconnected(self) -> List[str]:
        """
        Remove timed-out players from every live session.

        A session that fails its sweep is logged and left as it was; the
        remaining sessions are still swept.

        Returns:
            Ids of sessions whose roster changed
        """
        changed: List[str] = []
        for session_id in self.session_ids():
            with self.open(session_id, create=False) as session:
                if session is None:
                    continue
                try:
                    removed = session.remove_disconnected_player()
                except WordleOffError as e:
                    logger.error(
                        f"Sweep of session '{session_id}' failed: {e}",
                        extra={"session_id": session_id},
                    )
                    continue
                if removed:
                    changed.append(session_id)
        return changed

    def treat_all_players_as_disconnected(self) -> List[str]:
        """
        Mark every connected player in every session as disconnected.

        Returns:
            Ids of sessions that had at least one connected player
        """
        affected: List[str] = []
        for session_id in self.session_ids():
            with self.open(session_id, create=False) as session:
                if session is not None and session.treat_all_players_as_disconnected():
                    affected.append(session_id)
        if affected:
            logger.info(f"Marked players disconnected in {len(affected)} session(s)")
        return affected

    def evict_expired(self) -> int:
        """Drop every expired session. Returns how many were removed."""
        evicted = 0
        for session_id in self.session_ids():
            with self._locked(session_id):
                with self._registry_lock:
                    present = session_id in self._sessions
                if present and self._live(session_id) is None:
                    evicted += 1
        return evicted

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._registry_lock:
            return session_id in self._sessions
