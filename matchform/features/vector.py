"""
Feature vector assembly.

Combines both teams' form statistics and the inferred league into the
fixed 15-field schema (plus label) shared by training and prediction.
"""

from dataclasses import dataclass, astuple
from typing import List, Optional

import numpy as np

from matchform.constants import (
    DATASET_COLUMNS,
    FEATURE_COLUMNS,
    MODEL_INPUT_COLUMNS,
    MatchResult,
)
from matchform.exceptions import InvalidInput
from matchform.features.stats import AggregateStats


@dataclass(frozen=True)
class FeatureVector:
    """
    Features for a single match.

    Field order follows DATASET_COLUMNS. `result` is the training label
    and stays None for prediction requests.
    """
    competition_id: int
    season: str

    # Home team form (4)
    home_avg_goals_for: float
    home_avg_goals_against: float
    home_points_per_game: float
    home_win_rate: float

    # Away team form (4)
    away_avg_goals_for: float
    away_avg_goals_against: float
    away_points_per_game: float
    away_win_rate: float

    # Differentials, home minus away (5)
    avg_goals_for_diff: float
    avg_goals_against_diff: float
    points_per_game_diff: float
    win_rate_diff: float
    goal_diff_diff: float

    result: Optional[int] = None

    @property
    def is_labelled(self) -> bool:
        return self.result is not None

    def to_dict(self) -> dict:
        """Column name -> value, in dataset column order."""
        return dict(zip(DATASET_COLUMNS, astuple(self)))

    def to_array(self) -> np.ndarray:
        """Numeric model inputs (league id and 13 form features)."""
        values = self.to_dict()
        return np.array([values[c] for c in MODEL_INPUT_COLUMNS], dtype=np.float64)

    @staticmethod
    def feature_names() -> List[str]:
        return list(FEATURE_COLUMNS)

    @staticmethod
    def num_features() -> int:
        return len(FEATURE_COLUMNS)


def assemble_features(
    home: AggregateStats,
    away: AggregateStats,
    competition_id: int,
    season: str,
    result: Optional[MatchResult | int] = None,
) -> FeatureVector:
    """
    Build a FeatureVector from both teams' statistics.

    Args:
        home: Home team statistics
        away: Away team statistics
        competition_id: Inferred league id
        season: Season label
        result: Outcome label for training rows, None for prediction

    Raises:
        InvalidInput: if both statistics belong to the same team
    """
    if home.team_id is not None and home.team_id == away.team_id:
        raise InvalidInput(home.team_id)

    return FeatureVector(
        competition_id=competition_id,
        season=season,
        # Home
        home_avg_goals_for=home.avg_goals_for,
        home_avg_goals_against=home.avg_goals_against,
        home_points_per_game=home.points_per_game,
        home_win_rate=home.win_rate,
        # Away
        away_avg_goals_for=away.avg_goals_for,
        away_avg_goals_against=away.avg_goals_against,
        away_points_per_game=away.points_per_game,
        away_win_rate=away.win_rate,
        # Differentials
        avg_goals_for_diff=home.avg_goals_for - away.avg_goals_for,
        avg_goals_against_diff=home.avg_goals_against - away.avg_goals_against,
        points_per_game_diff=home.points_per_game - away.points_per_game,
        win_rate_diff=home.win_rate - away.win_rate,
        goal_diff_diff=home.goal_diff_avg - away.goal_diff_avg,
        result=None if result is None else int(result),
    )
