"""
League inference by majority vote over a team's recent matches.

Ties go to the league seen first when the lookback window is scanned in
chronological order.
"""

from collections import Counter, deque
from datetime import datetime
from typing import Dict, Iterable, Sequence

from matchform.constants import LEAGUE_LOOKBACK, UNKNOWN_COMPETITION
from matchform.data.models import MatchRecord


def majority_competition(competition_ids: Iterable[int]) -> int:
    """
    Most frequent league id, first-seen on ties.

    Returns UNKNOWN_COMPETITION for an empty input.
    """
    counts = Counter(competition_ids)
    if not counts:
        return UNKNOWN_COMPETITION
    # Counter keeps first-insertion order and max() returns the first maximum
    return max(counts, key=counts.__getitem__)


def infer_competition(
    matches: Sequence[MatchRecord],
    team_id: int,
    cutoff: datetime,
    lookback: int = LEAGUE_LOOKBACK,
) -> int:
    """
    Infer a team's current league from its matches strictly before cutoff.

    Args:
        matches: Match log sorted ascending by timestamp
        team_id: Team to anchor on
        cutoff: Only matches strictly earlier than this are considered
        lookback: Number of most recent qualifying matches to vote over

    Returns:
        League id, or UNKNOWN_COMPETITION if the team has no prior matches
    """
    recent: deque[int] = deque(maxlen=lookback)
    for match in matches:
        if match.timestamp >= cutoff:
            break
        if match.involves(team_id):
            recent.append(match.competition_id)
    return majority_competition(recent)


class CompetitionHistory:
    """
    Streaming counterpart of infer_competition.

    Keeps each team's last `lookback` league ids as matches are recorded in
    chronological order, so the training pass infers leagues without
    rescanning the corpus.
    """

    def __init__(self, lookback: int = LEAGUE_LOOKBACK):
        self.lookback = lookback
        self._recent: Dict[int, deque[int]] = {}

    def record_match(self, match: MatchRecord) -> None:
        for team_id in (match.home_id, match.away_id):
            recent = self._recent.get(team_id)
            if recent is None:
                recent = deque(maxlen=self.lookback)
                self._recent[team_id] = recent
            recent.append(match.competition_id)

    def infer(self, team_id: int) -> int:
        return majority_competition(self._recent.get(team_id, ()))
