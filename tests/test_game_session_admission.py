# Area: Session Tests
"""Tests for GameSession.add_player and reconnect_player."""

import pytest

from wordleoff import AddPlayerResult, GameSession, SessionPolicy


@pytest.fixture
def session(answers, policy, clock):
    return GameSession("S1", "CRANE", answer_source=answers, policy=policy, clock=clock)


class TestAddPlayerAdmission:
    """Tests for admitting brand-new players."""

    def test_first_player_gets_index_one(self, session):
        result = session.add_player("c1", "g1", "Alice", False)

        assert result == AddPlayerResult.SUCCESS
        alice = session.get_player("Alice")
        assert alice.index == 1
        assert alice.connection_id == "c1"
        assert alice.client_guid == "g1"
        assert alice.play_data == []
        assert alice.disconnected_since is None

    def test_indexes_increase_in_join_order(self, session):
        for i, name in enumerate(["Alice", "Bob", "Carol"], start=1):
            session.add_player(f"c{i}", f"g{i}", name, False)

        indexes = [session.get_player(n).index for n in ["Alice", "Bob", "Carol"]]
        assert indexes == [1, 2, 3]
        assert session.ordered_player_names() == ["Alice", "Bob", "Carol"]

    def test_admission_updates_last_update_at(self, session, clock):
        clock.advance(seconds=30)
        session.add_player("c1", "g1", "Alice", False)
        assert session.last_update_at == clock.now

    def test_names_are_case_sensitive(self, session):
        assert session.add_player("c1", "g1", "Alice", False) == AddPlayerResult.SUCCESS
        assert session.add_player("c2", "g2", "alice", False) == AddPlayerResult.SUCCESS
        assert len(session.players) == 2

    def test_roster_never_exceeds_max_players(self, session, policy):
        results = [
            session.add_player(f"c{i}", f"g{i}", f"P{i}", False)
            for i in range(policy.max_players + 3)
        ]

        assert results[:policy.max_players] == [AddPlayerResult.SUCCESS] * policy.max_players
        assert set(results[policy.max_players:]) == {AddPlayerResult.PLAYER_MAXED}
        assert len(session.players) == policy.max_players

    def test_index_not_reused_after_highest_player_leaves(self, session, clock):
        session.add_player("c1", "g1", "Alice", False)
        session.add_player("c2", "g2", "Bob", False)
        session.disconnect_player("c2")
        clock.advance(seconds=9)
        session.remove_disconnected_player()

        session.add_player("c3", "g3", "Carol", False)

        assert session.get_player("Carol").index == 3


class TestAddPlayerExistingName:
    """Tests for joins that name an existing player."""

    def test_matching_guid_restores_connection(self, session, clock):
        session.add_player("c1", "g1", "Alice", False)
        session.disconnect_player("c1")
        clock.advance(seconds=5)

        result = session.add_player("c9", "g1", "Alice", False)

        assert result == AddPlayerResult.CONNECTION_RESTORED
        alice = session.get_player("Alice")
        assert alice.connection_id == "c9"
        assert alice.disconnected_since is None
        assert session.last_update_at == clock.now

    def test_restore_keeps_index_and_guesses(self, session):
        session.add_player("c1", "g1", "Alice", False)
        session.add_player("c2", "g2", "Bob", False)
        session.enter_guess("Alice", "SLATE")
        session.enter_guess("Alice", "TRAIN")

        session.add_player("c5", "g1", "Alice", True)

        alice = session.get_player("Alice")
        assert alice.index == 1
        assert alice.play_data == ["SLATE", "TRAIN"]

    def test_restore_flag_with_matching_guid_restores(self, session):
        session.add_player("c1", "g1", "Alice", False)
        assert session.add_player("c2", "g1", "Alice", True) == AddPlayerResult.CONNECTION_RESTORED

    def test_taken_name_with_other_guid_is_refused(self, session, clock):
        session.add_player("c1", "g1", "Alice", False)
        before = session.last_update_at
        clock.advance(seconds=5)

        result = session.add_player("c2", "g2", "Alice", False)

        assert result == AddPlayerResult.PLAYER_NAME_EXIST
        alice = session.get_player("Alice")
        assert alice.connection_id == "c1"
        assert session.last_update_at == before
        assert len(session.players) == 1

    def test_restore_wins_over_full_roster(self, session, policy):
        for i in range(policy.max_players):
            session.add_player(f"c{i}", f"g{i}", f"P{i}", False)

        assert session.add_player("new", "g0", "P0", False) == AddPlayerResult.CONNECTION_RESTORED

    def test_name_taken_wins_over_full_roster(self, session, policy):
        for i in range(policy.max_players):
            session.add_player(f"c{i}", f"g{i}", f"P{i}", False)

        assert session.add_player("new", "other", "P0", False) == AddPlayerResult.PLAYER_NAME_EXIST


class TestAddPlayerRestoreMissing:
    """Tests for restore requests naming unknown players."""

    def test_restore_unknown_name_cannot_restore(self, session):
        result = session.add_player("c1", "g1", "Ghost", True)

        assert result == AddPlayerResult.CANNOT_RESTORE
        assert "Ghost" not in session.players

    def test_cannot_restore_checked_before_full_roster(self, session, policy):
        for i in range(policy.max_players):
            session.add_player(f"c{i}", f"g{i}", f"P{i}", False)

        assert session.add_player("c", "g", "Ghost", True) == AddPlayerResult.CANNOT_RESTORE

    def test_removed_player_rejoins_as_new_player(self, session, clock):
        session.add_player("c1", "g1", "Alice", False)
        session.enter_guess("Alice", "SLATE")
        session.disconnect_player("c1")
        clock.advance(seconds=9)
        assert session.remove_disconnected_player() is True

        result = session.add_player("c3", "g1", "Alice", False)

        assert result == AddPlayerResult.SUCCESS
        assert session.get_player("Alice").play_data == []


class TestSeatPolicy:
    """Tests for the disconnected-players-hold-seat switch."""

    def make_full_session(self, clock, answers, hold_seat):
        policy = SessionPolicy(max_players=2, disconnected_players_hold_seat=hold_seat)
        session = GameSession("S1", "CRANE", answer_source=answers, policy=policy, clock=clock)
        session.add_player("c1", "g1", "Alice", False)
        session.add_player("c2", "g2", "Bob", False)
        return session

    def test_disconnected_player_holds_seat_by_default(self, clock, answers):
        session = self.make_full_session(clock, answers, hold_seat=True)
        session.disconnect_player("c1")

        assert session.add_player("c3", "g3", "Carol", False) == AddPlayerResult.PLAYER_MAXED
        assert "Alice" in session.players

    def test_newcomer_takes_longest_disconnected_seat(self, clock, answers):
        session = self.make_full_session(clock, answers, hold_seat=False)
        session.disconnect_player("c2")
        clock.advance(seconds=1)
        session.disconnect_player("c1")

        result = session.add_player("c3", "g3", "Carol", False)

        assert result == AddPlayerResult.SUCCESS
        assert set(session.players) == {"Alice", "Carol"}
        assert session.get_player("Carol").index == 3

    def test_full_roster_of_connected_players_still_maxed(self, clock, answers):
        session = self.make_full_session(clock, answers, hold_seat=False)
        assert session.add_player("c3", "g3", "Carol", False) == AddPlayerResult.PLAYER_MAXED


class TestGameAlreadyStarted:
    """Tests for the optional reject-after-first-guess rule."""

    def make_session(self, clock, answers, enabled):
        policy = SessionPolicy(reject_join_after_first_guess=enabled)
        session = GameSession("S1", "CRANE", answer_source=answers, policy=policy, clock=clock)
        session.add_player("c1", "g1", "Alice", False)
        session.enter_guess("Alice", "SLATE")
        return session

    def test_disabled_by_default(self, clock, answers):
        session = self.make_session(clock, answers, enabled=False)
        assert session.add_player("c2", "g2", "Bob", False) == AddPlayerResult.SUCCESS

    def test_enabled_refuses_newcomers_after_first_guess(self, clock, answers):
        session = self.make_session(clock, answers, enabled=True)

        assert session.add_player("c2", "g2", "Bob", False) == AddPlayerResult.GAME_ALREADY_STARTED
        assert "Bob" not in session.players

    def test_enabled_still_allows_restore(self, clock, answers):
        session = self.make_session(clock, answers, enabled=True)
        assert session.add_player("c9", "g1", "Alice", False) == AddPlayerResult.CONNECTION_RESTORED

    def test_enabled_allows_join_after_reset(self, clock, answers):
        session = self.make_session(clock, answers, enabled=True)
        session.reset_game()
        assert session.add_player("c2", "g2", "Bob", False) == AddPlayerResult.SUCCESS


class TestReconnectPlayer:
    """Tests for reconnect_player."""

    def test_rebinds_known_player(self, session, clock):
        session.add_player("c1", "g1", "Alice", False)
        session.disconnect_player("c1")

        assert session.reconnect_player("Alice", "c2") is True
        alice = session.get_player("Alice")
        assert alice.connection_id == "c2"
        assert alice.disconnected_since is None

    def test_unknown_player_returns_false(self, session):
        assert session.reconnect_player("Nobody", "c2") is False
        assert session.players == {}

    def test_does_not_check_client_guid(self, session):
        session.add_player("c1", "g1", "Alice", False)
        assert session.reconnect_player("Alice", "c2") is True
        assert session.get_player("Alice").client_guid == "g1"
