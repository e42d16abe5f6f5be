# Area: Session Tests
"""Tests for SessionSweeper."""

import threading
from unittest.mock import MagicMock, patch

import pytest

from wordleoff import SessionDirectory, SessionSweeper


@pytest.fixture
def directory(answers, policy, clock):
    directory = SessionDirectory(answer_source=answers, policy=policy, clock=clock)
    directory.join("S1", "c1", "g1", "Alice")
    directory.join("S2", "c2", "g2", "Bob")
    return directory


class TestSessionSweeper:
    """Unit tests for the cleanup loop."""

    def test_start_up_marks_everyone_disconnected(self, directory):
        sweeper = SessionSweeper(directory)
        assert sorted(sweeper.start_up()) == ["S1", "S2"]

    def test_tick_notifies_changed_sessions(self, directory, clock):
        callback = MagicMock()
        sweeper = SessionSweeper(directory, on_roster_changed=callback)
        with directory.open("S2") as session:
            session.disconnect_player("c2")
        clock.advance(seconds=9)

        assert sweeper.tick() == ["S2"]
        callback.assert_called_once_with("S2")

    def test_tick_evicts_expired_sessions(self, directory, clock):
        sweeper = SessionSweeper(directory)
        clock.advance(minutes=11)

        sweeper.tick()

        assert len(directory) == 0

    def test_tick_with_nothing_to_do(self, directory):
        callback = MagicMock()
        sweeper = SessionSweeper(directory, on_roster_changed=callback)
        assert sweeper.tick() == []
        callback.assert_not_called()

    def test_run_stops_on_request(self, directory):
        sweeper = SessionSweeper(directory, interval_seconds=0.01)
        thread = threading.Thread(
            target=sweeper.run, kwargs={"install_signal_handler": False}
        )
        thread.start()
        sweeper.stop()
        thread.join(timeout=5)

        assert not thread.is_alive()

    def test_run_survives_tick_errors(self, directory):
        sweeper = SessionSweeper(directory, interval_seconds=0.01)
        calls = []

        def failing_tick():
            calls.append(1)
            if len(calls) >= 3:
                sweeper.stop()
            raise RuntimeError("boom")

        with patch.object(sweeper, "tick", side_effect=failing_tick), \
                patch("wordleoff._session.sweeper.logger") as mock_logger:
            sweeper.run(install_signal_handler=False)

        assert len(calls) == 3
        assert mock_logger.error.call_count == 3
