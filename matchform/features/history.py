"""
Per-team rolling match history.

Each team owns a bounded window of its most recent outcomes. Windows are
held by an explicit EntityHistoryStore that lives for one dataset build
or one prediction request; there is no module-level state.
"""

from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from matchform.constants import POINTS_WIN, WINDOW_SIZE, points_for
from matchform.data.models import MatchRecord


@dataclass(frozen=True)
class OutcomeStat:
    """One team's result in one match."""
    goals_for: int
    goals_against: int
    points: int

    @property
    def is_win(self) -> bool:
        return self.points == POINTS_WIN


def outcome_for(match: MatchRecord, team_id: int) -> OutcomeStat:
    """Derive a team's OutcomeStat from a match it played in."""
    if not match.involves(team_id):
        raise ValueError(f"Team {team_id} did not play in this match")

    gf = match.goals_for(team_id)
    ga = match.goals_against(team_id)
    return OutcomeStat(goals_for=gf, goals_against=ga, points=points_for(gf, ga))


class RollingWindow:
    """
    Fixed-capacity FIFO of a team's recent outcomes, oldest first.

    Pushing onto a full window evicts the oldest entry.
    """

    def __init__(
        self,
        team_id: Optional[int] = None,
        capacity: int = WINDOW_SIZE,
        stats: Iterable[OutcomeStat] = (),
    ):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.team_id = team_id
        self.capacity = capacity
        self._items: deque[OutcomeStat] = deque(stats, maxlen=capacity)

    def push(self, stat: OutcomeStat) -> None:
        self._items.append(stat)

    def snapshot(self) -> Tuple[OutcomeStat, ...]:
        """Current contents, oldest first."""
        return tuple(self._items)

    @property
    def size(self) -> int:
        return len(self._items)

    @property
    def is_full(self) -> bool:
        return len(self._items) == self.capacity

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[OutcomeStat]:
        return iter(self._items)

    def __repr__(self) -> str:
        return (
            f"RollingWindow(team_id={self.team_id}, "
            f"size={self.size}/{self.capacity})"
        )


class EntityHistoryStore:
    """
    Team id -> RollingWindow.

    Windows are created on demand and only ever shrink through eviction.
    """

    def __init__(self, capacity: int = WINDOW_SIZE):
        self.capacity = capacity
        self._windows: Dict[int, RollingWindow] = {}

    def ensure(self, team_id: int) -> RollingWindow:
        """Create an empty window for the team if it has none."""
        window = self._windows.get(team_id)
        if window is None:
            window = RollingWindow(team_id, capacity=self.capacity)
            self._windows[team_id] = window
        return window

    def push(self, team_id: int, stat: OutcomeStat) -> None:
        """Append an outcome, evicting the oldest one if the window is full."""
        self.ensure(team_id).push(stat)

    def record_match(self, match: MatchRecord) -> None:
        """Push a match's outcome into both teams' windows."""
        self.push(match.home_id, outcome_for(match, match.home_id))
        self.push(match.away_id, outcome_for(match, match.away_id))

    def window(self, team_id: int) -> RollingWindow:
        """The team's live window (created empty if absent)."""
        return self.ensure(team_id)

    def snapshot(self, team_id: int) -> Tuple[OutcomeStat, ...]:
        """Read the team's window without creating or mutating it."""
        window = self._windows.get(team_id)
        return window.snapshot() if window is not None else ()

    def size(self, team_id: int) -> int:
        window = self._windows.get(team_id)
        return window.size if window is not None else 0

    def __contains__(self, team_id: int) -> bool:
        return team_id in self._windows

    def __len__(self) -> int:
        return len(self._windows)

    def team_ids(self) -> list[int]:
        return list(self._windows)
