"""
Windowed form statistics.

Reduces a team's rolling window into averages and rates. Both the
training pass and the prediction path go through compute_aggregate_stats,
so identical windows always produce identical numbers.
"""

from dataclasses import dataclass, asdict
from typing import Iterable, Optional

from matchform.constants import MIN_HISTORY
from matchform.exceptions import InsufficientHistory
from matchform.features.history import OutcomeStat, RollingWindow


@dataclass(frozen=True)
class AggregateStats:
    """Form statistics for a team computed from its recent matches."""

    team_id: Optional[int]
    matches_in_window: int

    avg_goals_for: float
    avg_goals_against: float
    points_per_game: float
    win_rate: float  # Draws earn points but are not wins

    @property
    def goal_diff_avg(self) -> float:
        return self.avg_goals_for - self.avg_goals_against

    def to_dict(self) -> dict:
        return asdict(self)


def compute_aggregate_stats(
    window: RollingWindow | Iterable[OutcomeStat],
    min_history: int = MIN_HISTORY,
    team_id: Optional[int] = None,
) -> AggregateStats:
    """
    Compute form statistics from a window of outcomes.

    Args:
        window: RollingWindow, or any iterable of OutcomeStat in chronological order
        min_history: Minimum number of outcomes required
        team_id: Team the outcomes belong to (taken from the window if omitted)

    Returns:
        AggregateStats with arithmetic means over every entry

    Raises:
        InsufficientHistory: if the window holds fewer than min_history entries
    """
    if isinstance(window, RollingWindow):
        team_id = window.team_id if team_id is None else team_id
        stats = window.snapshot()
    else:
        stats = tuple(window)

    games = len(stats)
    if games < min_history or games == 0:
        raise InsufficientHistory(team_id, found=games, required=min_history)

    goals_for = 0
    goals_against = 0
    points = 0
    wins = 0

    for s in stats:
        goals_for += s.goals_for
        goals_against += s.goals_against
        points += s.points
        if s.is_win:
            wins += 1

    return AggregateStats(
        team_id=team_id,
        matches_in_window=games,
        avg_goals_for=goals_for / games,
        avg_goals_against=goals_against / games,
        points_per_game=points / games,
        win_rate=wins / games,
    )
