"""
On-demand feature computation for a single fixture.

Rebuilds each team's window from the full match log as it stood at the
start of the requested season, then reuses the same statistics and
assembly code as the training pass. For any team and cutoff the numbers
match what DatasetBuilder produced at that point in the log.
"""

from datetime import datetime
from typing import Sequence

from matchform.constants import LEAGUE_LOOKBACK, MIN_HISTORY, WINDOW_SIZE
from matchform.data.models import MatchRecord
from matchform.exceptions import InsufficientHistory, InvalidInput, UnknownSeason
from matchform.features.history import EntityHistoryStore, RollingWindow, outcome_for
from matchform.features.league import infer_competition
from matchform.features.stats import AggregateStats, compute_aggregate_stats
from matchform.features.vector import FeatureVector, assemble_features
from matchform.utils import LogContext, get_logger

logger = get_logger("features.prediction")


def season_start(matches: Sequence[MatchRecord], season: str) -> datetime:
    """
    Earliest kickoff among matches labelled with the season.

    Raises:
        UnknownSeason: if no match carries the label
    """
    starts = [m.timestamp for m in matches if m.season == season]
    if not starts:
        raise UnknownSeason(season)
    return min(starts)


class PredictionFeatureBuilder:
    """
    Builds the unlabelled FeatureVector for one home/away pair.

    Each request scans the log once per call; no per-team index is kept.
    Every failure is raised to the caller.
    """

    def __init__(
        self,
        matches: Sequence[MatchRecord],
        window_size: int = WINDOW_SIZE,
        min_history: int = MIN_HISTORY,
        league_lookback: int = LEAGUE_LOOKBACK,
    ):
        """
        Initialize prediction builder.

        Args:
            matches: Full match log sorted ascending by timestamp
            window_size: Recent matches kept per team
            min_history: Matches each team needs before the cutoff
            league_lookback: Matches scanned when inferring the league
        """
        if min_history > window_size:
            raise ValueError(
                f"min_history ({min_history}) cannot exceed window_size ({window_size})"
            )
        self.matches = matches
        self.window_size = window_size
        self.min_history = min_history
        self.league_lookback = league_lookback

    def team_window(self, team_id: int, cutoff: datetime) -> RollingWindow:
        """
        The team's last window_size matches strictly before cutoff.

        Replays the log into a request-scoped store, so eviction keeps
        exactly the most recent outcomes in chronological order.
        """
        store = EntityHistoryStore(capacity=self.window_size)
        store.ensure(team_id)

        for match in self.matches:
            if match.timestamp >= cutoff:
                break
            if match.involves(team_id):
                store.push(team_id, outcome_for(match, team_id))

        return store.window(team_id)

    def team_stats(self, team_id: int, cutoff: datetime) -> AggregateStats:
        """
        Form statistics for a team as of cutoff.

        Raises:
            InsufficientHistory: if fewer than min_history matches precede cutoff
        """
        window = self.team_window(team_id, cutoff)
        if window.size < self.min_history:
            raise InsufficientHistory(
                team_id, found=window.size, required=self.min_history, cutoff=cutoff
            )
        return compute_aggregate_stats(window, min_history=self.min_history)

    def build_at(
        self,
        home_id: int,
        away_id: int,
        cutoff: datetime,
        season: str,
    ) -> FeatureVector:
        """Build features for a fixture using only matches before cutoff."""
        if home_id == away_id:
            raise InvalidInput(home_id)

        home = self.team_stats(home_id, cutoff)
        away = self.team_stats(away_id, cutoff)
        competition_id = infer_competition(
            self.matches, home_id, cutoff, lookback=self.league_lookback
        )

        return assemble_features(home, away, competition_id=competition_id, season=season)

    def build(self, home_id: int, away_id: int, season: str) -> FeatureVector:
        """
        Build features for a fixture played in the given season.

        The cutoff is the season's first kickoff, so nothing from the
        season itself leaks into the features.

        Args:
            home_id: Home team id
            away_id: Away team id
            season: Target season label

        Returns:
            FeatureVector with result left unset

        Raises:
            InvalidInput: if home_id == away_id
            UnknownSeason: if the season is not in the log
            InsufficientHistory: if either team lacks prior matches
        """
        if home_id == away_id:
            raise InvalidInput(home_id)

        with LogContext(season=season, home_id=home_id, away_id=away_id):
            cutoff = season_start(self.matches, season)
            logger.debug(f"Building features for {home_id} vs {away_id} before {cutoff}")
            return self.build_at(home_id, away_id, cutoff, season)
