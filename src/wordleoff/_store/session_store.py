# Area: Store
"""
wordleoff._store.session_store — Sessions Repository
====================================================

Persists sessions for deployments where more than one process serves the
same session. Writes are guarded by the session's ``version`` token: a
save only succeeds if the stored version is still the one that was read,
otherwise ``ConcurrencyConflictError`` is raised and the caller re-reads
and re-applies its change (``update`` does this automatically).
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from .._session.clock import Clock, utc_now
from .._session.game_session import GameSession
from ..answers import AnswerSource
from ..errors import ConcurrencyConflictError, SessionNotFoundError
from ..policy import SessionPolicy
from .records import SessionRecord, from_record, to_record

logger = logging.getLogger("wordleoff.store")

T = TypeVar("T")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

# Seconds a writer waits for another process's write lock before failing
BUSY_TIMEOUT_SECONDS = 5.0


def connect(db_path: str) -> sqlite3.Connection:
    """Open a connection with dict-style rows and the shared busy timeout."""
    conn = sqlite3.connect(db_path, timeout=BUSY_TIMEOUT_SECONDS)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = "wordleoff.db") -> None:
    """
    Create the game_sessions table if needed. Safe to call on every start.

    File databases are switched to WAL journaling so readers in one process
    do not block a version-checked write from another.
    """
    conn = connect(db_path)
    try:
        if db_path != ":memory:":
            conn.execute("PRAGMA journal_mode=WAL")
        conn.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))
        conn.commit()
        logger.info(f"Session store ready at {db_path}")
    finally:
        conn.close()


class SessionStore:
    """
    Repository for the game_sessions table.

    Every call opens and closes its own connection, so one store can be
    shared between threads.

    Args:
        db_path: Path to an initialized SQLite database file
        answer_source: Used by loaded and newly created sessions
        policy: Used by loaded and newly created sessions
        clock: Used by loaded and newly created sessions
    """

    def __init__(
        self,
        db_path: str = "wordleoff.db",
        *,
        answer_source: Optional[AnswerSource] = None,
        policy: Optional[SessionPolicy] = None,
        clock: Clock = utc_now,
    ):
        self.db_path = db_path
        self._answer_source = answer_source
        self._policy = policy
        self._clock = clock

    def _execute(self, query: str, params: tuple = ()) -> int:
        """Run one write statement and commit. Returns the affected row count."""
        conn = connect(self.db_path)
        try:
            cursor = conn.execute(query, params)
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    def _fetch(self, query: str, params: tuple = ()) -> List[dict]:
        conn = connect(self.db_path)
        try:
            return [dict(row) for row in conn.execute(query, params).fetchall()]
        finally:
            conn.close()

    def _fetch_one(self, query: str, params: tuple = ()) -> Optional[dict]:
        rows = self._fetch(query, params)
        return rows[0] if rows else None

    # ── Sessions ─────────────────────────────────────────────

    def new_session(self, session_id: str, version: int = 0) -> GameSession:
        """Create an unsaved session carrying ``version`` as its write token."""
        session = GameSession(
            session_id,
            answer_source=self._answer_source,
            policy=self._policy,
            clock=self._clock,
        )
        session.version = version
        return session

    def load(self, session_id: str) -> Optional[GameSession]:
        """
        Load a session by ID.

        Returns:
            The session with its stored version, or None if not found
        """
        row = self._fetch_one(
            "SELECT version, payload FROM game_sessions WHERE session_id = ?",
            (session_id,),
        )
        if row is None:
            return None
        record = SessionRecord.model_validate_json(row["payload"])
        record = record.model_copy(update={"version": row["version"]})
        return from_record(
            record,
            answer_source=self._answer_source,
            policy=self._policy,
            clock=self._clock,
        )

    def get(self, session_id: str) -> GameSession:
        """Like ``load`` but raises ``SessionNotFoundError`` for unknown ids."""
        session = self.load(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def save(self, session: GameSession) -> None:
        """
        Write a session if nobody else has written it since it was read.

        A session with version 0 is inserted; any other version updates the
        row only if the stored version still matches. On success
        ``session.version`` is advanced to the stored value.

        Raises:
            ConcurrencyConflictError: The stored version moved on (or the
                row appeared/disappeared) since the session was read
        """
        payload = to_record(session).model_dump_json()
        updated_at = self._clock().isoformat()
        expected = session.version

        if expected == 0:
            try:
                self._execute(
                    """
                    INSERT INTO game_sessions (session_id, version, payload, updated_at)
                    VALUES (?, 1, ?, ?)
                    """,
                    (session.session_id, payload, updated_at),
                )
            except sqlite3.IntegrityError:
                raise ConcurrencyConflictError(
                    session.session_id, expected, self._stored_version(session.session_id)
                ) from None
        else:
            rows = self._execute(
                """
                UPDATE game_sessions
                SET payload = ?, updated_at = ?, version = version + 1
                WHERE session_id = ? AND version = ?
                """,
                (payload, updated_at, session.session_id, expected),
            )
            if rows == 0:
                raise ConcurrencyConflictError(
                    session.session_id, expected, self._stored_version(session.session_id)
                )

        session.version = expected + 1
        logger.debug(f"Saved session '{session.session_id}' (version {session.version})")

    def _stored_version(self, session_id: str) -> Optional[int]:
        row = self._fetch_one(
            "SELECT version FROM game_sessions WHERE session_id = ?", (session_id,)
        )
        return row["version"] if row else None

    def update(
        self,
        session_id: str,
        mutate: Callable[[GameSession], T],
        retries: int = 3,
        create: bool = True,
        only_if_changed: bool = False,
    ) -> Tuple[GameSession, T]:
        """
        Read-modify-write a session with optimistic-concurrency retries.

        ``mutate`` may run several times, once per attempt, each time on a
        freshly loaded session. An expired stored session is replaced by a
        new one that keeps the stored version as its write token.

        Args:
            session_id: Session to update
            mutate: Applies the change and returns the operation's result
            retries: Extra attempts after a version conflict
            create: Create the session if it does not exist
            only_if_changed: Skip the write when ``mutate`` returns a falsy value

        Returns:
            ``(saved_session, mutate_result)``

        Raises:
            ConcurrencyConflictError: Still conflicting after ``retries``
            SessionNotFoundError: Unknown session and ``create`` is False
        """
        attempt = 0
        while True:
            session = self.load(session_id)
            if session is None:
                if not create:
                    raise SessionNotFoundError(session_id)
                session = self.new_session(session_id)
            elif session.session_expired:
                logger.info(f"Stored session '{session_id}' expired; starting fresh")
                session = self.new_session(session_id, version=session.version)

            result = mutate(session)
            if only_if_changed and not result:
                return session, result
            try:
                self.save(session)
                return session, result
            except ConcurrencyConflictError as e:
                if attempt >= retries:
                    raise
                attempt += 1
                logger.warning(f"{e}; retrying ({attempt}/{retries})")

    def delete(self, session_id: str) -> bool:
        """Delete a session. Returns False if it did not exist."""
        rows = self._execute(
            "DELETE FROM game_sessions WHERE session_id = ?", (session_id,)
        )
        return rows > 0

    def list_ids(self) -> List[str]:
        """All stored session ids, most recently written first."""
        rows = self._fetch(
            "SELECT session_id FROM game_sessions ORDER BY updated_at DESC"
        )
        return [row["session_id"] for row in rows]

    def delete_expired(self) -> int:
        """
        Delete every stored session whose ``session_expired`` flag is set.

        A session written between the check and the delete is kept.

        Returns:
            Number of sessions deleted
        """
        deleted = 0
        for session_id in self.list_ids():
            session = self.load(session_id)
            if session is None or not session.session_expired:
                continue
            deleted += self._execute(
                "DELETE FROM game_sessions WHERE session_id = ? AND version = ?",
                (session_id, session.version),
            )
        if deleted:
            logger.info(f"Deleted {deleted} expired session(s)")
        return deleted

    def for_each(self, mutate: Callable[[GameSession], Any]) -> List[str]:
        """
        Apply ``mutate`` to every stored session that is still live.

        The session is written back only when ``mutate`` returns a truthy
        value, with the same retry rules as ``update``.

        Returns:
            Ids of sessions that were written
        """
        written: List[str] = []
        for session_id in self.list_ids():
            session = self.load(session_id)
            if session is None or session.session_expired:
                continue
            try:
                _, changed = self.update(
                    session_id, mutate, create=False, only_if_changed=True
                )
            except SessionNotFoundError:
                continue
            if changed:
                written.append(session_id)
        return written
