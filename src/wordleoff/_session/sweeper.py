# Area: Session
"""
wordleoff._session.sweeper — Periodic session cleanup
=====================================================

Drives the time-based cleanup that sessions only compute on demand:
removing players whose connection has been gone too long and dropping
expired sessions. At start-up it marks every player disconnected, since
connections do not survive a process restart.
"""

from __future__ import annotations

import logging
import signal
import threading
from typing import Callable, List, Optional

from .directory import SessionDirectory

logger = logging.getLogger("wordleoff.sweeper")


class SessionSweeper:
    """
    Runs cleanup passes over a ``SessionDirectory``.

    Args:
        directory: Sessions to sweep
        interval_seconds: Pause between passes in ``run()``
        on_roster_changed: Called with each session id whose roster shrank,
            so the transport can broadcast the new roster
    """

    def __init__(
        self,
        directory: SessionDirectory,
        interval_seconds: float = 5.0,
        on_roster_changed: Optional[Callable[[str], None]] = None,
    ):
        self.directory = directory
        self.interval_seconds = interval_seconds
        self.on_roster_changed = on_roster_changed
        self._stop_event = threading.Event()

    def start_up(self) -> List[str]:
        """Mark all players disconnected. Call once when the process starts."""
        return self.directory.treat_all_players_as_disconnected()

    def tick(self) -> List[str]:
        """Single cleanup pass. Returns ids of sessions whose roster changed."""
        changed = self.directory.sweep_disconnected()
        evicted = self.directory.evict_expired()
        if evicted:
            logger.info(f"Evicted {evicted} expired session(s)")
        if self.on_roster_changed:
            for session_id in changed:
                self.on_roster_changed(session_id)
        return changed

    def run(self, install_signal_handler: bool = True) -> None:
        """Sweep every ``interval_seconds`` until ``stop()``. Blocks."""
        if install_signal_handler:
            signal.signal(signal.SIGINT, lambda s, f: self.stop())

        self.start_up()
        logger.info(f"Sweeper started (every {self.interval_seconds}s)")

        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Sweep error: {e}", exc_info=True)
            self._stop_event.wait(self.interval_seconds)

        logger.info("Sweeper stopped.")

    def stop(self) -> None:
        self._stop_event.set()
