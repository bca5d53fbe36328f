"""Tests for advisor persistence."""

import pytest

from holdem_advisor.agents.regret import RegretState
from holdem_advisor.models.action import ActionType
from holdem_advisor.storage import Database, RegretRepository


@pytest.fixture
def repo(tmp_path):
    return RegretRepository(Database(tmp_path / "advisors.db"))


def _trained_state():
    state = RegretState()
    values = [0.1 + 0.2, -1e-300, 1 / 3, 123456.789, -0.0]
    for action, value in zip(state.actions, values):
        state.regret_sum[action] = value
        state.strategy_sum[action] = abs(value) * 7
    return state


class TestRegretRepository:
    """Tests for saving and loading regret state."""

    def test_round_trip_is_exact(self, repo):
        """Saved floats come back bit for bit, in the same action order."""
        state = _trained_state()
        repo.save("alice", state)
        loaded = repo.load("alice")
        assert loaded == state
        assert loaded.actions == state.actions

    def test_save_replaces_previous_state(self, repo):
        """Saving again overwrites the earlier state."""
        repo.save("alice", _trained_state())
        fresh = RegretState()
        fresh.regret_sum[ActionType.FOLD] = 2.5
        repo.save("alice", fresh)
        assert repo.load("alice") == fresh

    def test_load_missing(self, repo):
        """Unknown advisors load as None or a fresh state."""
        assert repo.load("nobody") is None
        assert repo.load_or_create("nobody") == RegretState()

    def test_advisors_are_independent(self, repo):
        """Each advisor keeps its own regrets."""
        repo.save("alice", _trained_state())
        repo.save("bob", RegretState())
        assert repo.load("bob") == RegretState()
        assert repo.load("alice") == _trained_state()

    def test_delete(self, repo):
        """Deleting reports whether anything was removed."""
        repo.save("alice", _trained_state())
        assert repo.delete("alice")
        assert repo.load("alice") is None
        assert not repo.delete("alice")

    def test_list_advisors(self, repo):
        """Listing is sorted by name and reports training mass."""
        repo.save("bob", RegretState())
        repo.save("alice", _trained_state())
        advisors = repo.list_advisors()
        assert [a["name"] for a in advisors] == ["alice", "bob"]
        assert advisors[1]["mass"] == 0
        assert advisors[0]["updated_at"]

    def test_persists_across_connections(self, tmp_path):
        """State survives reopening the database file."""
        path = tmp_path / "advisors.db"
        RegretRepository(Database(path)).save("alice", _trained_state())
        assert RegretRepository(Database(path)).load("alice") == _trained_state()
