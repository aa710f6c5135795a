"""
Tests for per-team rolling history.

Tests for:
- Outcome derivation and points
- Window capacity and FIFO eviction
- Store creation and read-only snapshots
"""

import pytest

from matchform.features.dataset import DatasetBuilder
from matchform.features.history import (
    EntityHistoryStore,
    OutcomeStat,
    RollingWindow,
    outcome_for,
)

from tests.conftest import make_match


def stat(gf: int, ga: int, points: int) -> OutcomeStat:
    return OutcomeStat(goals_for=gf, goals_against=ga, points=points)


class TestOutcomeFor:
    """Test OutcomeStat derivation from a match."""

    def test_home_win(self):
        """Home side of a 2-1 gets 3 points."""
        match = make_match(0, 1, 2, 2, 1)

        assert outcome_for(match, 1) == stat(2, 1, 3)

    def test_away_loss(self):
        """Away side of a 2-1 gets 0 points, goals mirrored."""
        match = make_match(0, 1, 2, 2, 1)

        assert outcome_for(match, 2) == stat(1, 2, 0)

    def test_draw(self):
        """Both sides of a draw get 1 point."""
        match = make_match(0, 1, 2, 1, 1)

        assert outcome_for(match, 1).points == 1
        assert outcome_for(match, 2).points == 1

    def test_draw_is_not_a_win(self):
        """Only 3-point outcomes count as wins."""
        assert stat(1, 1, 1).is_win is False
        assert stat(2, 1, 3).is_win is True

    def test_uninvolved_team_rejected(self):
        """A team that did not play has no outcome."""
        match = make_match(0, 1, 2, 0, 0)

        with pytest.raises(ValueError):
            outcome_for(match, 3)


class TestRollingWindow:
    """Test bounded FIFO behaviour."""

    def test_starts_empty(self):
        window = RollingWindow(team_id=1)

        assert window.size == 0
        assert window.capacity == 5
        assert window.snapshot() == ()

    def test_evicts_oldest_at_capacity(self):
        """Sixth push drops the first entry."""
        window = RollingWindow(team_id=1, capacity=5)

        for goals in range(6):
            window.push(stat(goals, 0, 3))

        assert window.size == 5
        assert [s.goals_for for s in window] == [1, 2, 3, 4, 5]

    def test_is_full(self):
        window = RollingWindow(team_id=1, capacity=2)
        window.push(stat(1, 0, 3))
        assert window.is_full is False

        window.push(stat(1, 0, 3))
        assert window.is_full is True

    def test_initial_stats_truncated(self):
        """Seeding with more stats than capacity keeps the newest."""
        window = RollingWindow(1, capacity=3, stats=[stat(g, 0, 3) for g in range(5)])

        assert [s.goals_for for s in window.snapshot()] == [2, 3, 4]

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            RollingWindow(team_id=1, capacity=0)


class TestEntityHistoryStore:
    """Test the team -> window mapping."""

    def test_ensure_creates_once(self):
        """ensure() is idempotent and returns the same window."""
        store = EntityHistoryStore()

        first = store.ensure(7)
        second = store.ensure(7)

        assert first is second
        assert 7 in store
        assert len(store) == 1

    def test_push_creates_window(self):
        store = EntityHistoryStore()
        store.push(3, stat(1, 0, 3))

        assert store.size(3) == 1

    def test_push_respects_capacity(self):
        store = EntityHistoryStore(capacity=5)

        for goals in range(8):
            store.push(1, stat(goals, 0, 3))

        assert store.size(1) == 5
        assert store.snapshot(1)[0].goals_for == 3

    def test_snapshot_does_not_mutate(self):
        """Snapshot of an unknown team neither creates nor errors."""
        store = EntityHistoryStore()

        assert store.snapshot(99) == ()
        assert 99 not in store

    def test_snapshot_is_a_copy(self):
        """Later pushes do not change an earlier snapshot."""
        store = EntityHistoryStore()
        store.push(1, stat(1, 0, 3))
        before = store.snapshot(1)

        store.push(1, stat(2, 0, 3))

        assert len(before) == 1
        assert store.size(1) == 2

    def test_record_match_updates_both_teams(self):
        store = EntityHistoryStore()
        store.record_match(make_match(0, 1, 2, 3, 1))

        assert store.snapshot(1) == (stat(3, 1, 3),)
        assert store.snapshot(2) == (stat(1, 3, 0),)

    def test_window_never_exceeds_capacity(self, league_corpus):
        """After every match of a full pass, every window holds at most 5."""
        builder = DatasetBuilder()

        for match in league_corpus:
            builder.process(match)
            for team_id in builder.store.team_ids():
                assert builder.store.size(team_id) <= 5
