"""
Constants and enums for the match form feature engine.

Centralizes the window sizes, outcome encoding and column names that form
the contract between dataset construction, prediction and model training.
"""

from enum import IntEnum
from typing import Dict, Tuple


# =============================================================================
# Match Result Enum
# =============================================================================

class MatchResult(IntEnum):
    """
    Three-way match outcome, used as the training label.

    The integer values are part of the dataset contract.
    """
    AWAY_WIN = 0
    DRAW = 1
    HOME_WIN = 2

    @property
    def short_label(self) -> str:
        return SHORT_LABELS[self]

    @property
    def ui_label(self) -> str:
        return UI_LABELS[self]


SHORT_LABELS: Dict[MatchResult, str] = {
    MatchResult.AWAY_WIN: "A",
    MatchResult.DRAW: "D",
    MatchResult.HOME_WIN: "H",
}

UI_LABELS: Dict[MatchResult, str] = {
    MatchResult.AWAY_WIN: "Away win",
    MatchResult.DRAW: "Draw",
    MatchResult.HOME_WIN: "Home win",
}


def match_result(home_goals: int, away_goals: int) -> MatchResult:
    """Encode a final score as a MatchResult."""
    if home_goals > away_goals:
        return MatchResult.HOME_WIN
    if home_goals == away_goals:
        return MatchResult.DRAW
    return MatchResult.AWAY_WIN


def short_label(value: int) -> str:
    """Short label (A/D/H) for a raw result value, '?' if unknown."""
    try:
        return SHORT_LABELS[MatchResult(value)]
    except ValueError:
        return "?"


def ui_label(value: int) -> str:
    """Display label for a raw result value, 'Unknown' if unknown."""
    try:
        return UI_LABELS[MatchResult(value)]
    except ValueError:
        return "Unknown"


# =============================================================================
# Points
# =============================================================================

POINTS_WIN = 3
POINTS_DRAW = 1
POINTS_LOSS = 0


def points_for(goals_for: int, goals_against: int) -> int:
    """League points earned from one team's perspective."""
    if goals_for > goals_against:
        return POINTS_WIN
    if goals_for == goals_against:
        return POINTS_DRAW
    return POINTS_LOSS


# =============================================================================
# Feature Engineering Constants
# =============================================================================

# Recent matches kept per team
WINDOW_SIZE = 5

# Prior matches required on both sides before a row is built
MIN_HISTORY = 5

# Recent matches scanned when inferring a team's league
LEAGUE_LOOKBACK = 30

# League id returned when a team has no prior matches
UNKNOWN_COMPETITION = 0


# =============================================================================
# Dataset Columns
# =============================================================================

# Order is a contract with the model-training side; do not reorder.
FEATURE_COLUMNS: Tuple[str, ...] = (
    "competition_id",
    "season",
    "home_avg_goals_for",
    "home_avg_goals_against",
    "home_points_per_game",
    "home_win_rate",
    "away_avg_goals_for",
    "away_avg_goals_against",
    "away_points_per_game",
    "away_win_rate",
    "avg_goals_for_diff",
    "avg_goals_against_diff",
    "points_per_game_diff",
    "win_rate_diff",
    "goal_diff_diff",
)

LABEL_COLUMN = "result"

DATASET_COLUMNS: Tuple[str, ...] = FEATURE_COLUMNS + (LABEL_COLUMN,)

# Numeric model inputs (season is carried for splitting, not fed to the model)
MODEL_INPUT_COLUMNS: Tuple[str, ...] = tuple(
    c for c in FEATURE_COLUMNS if c != "season"
)


# =============================================================================
# Source File Columns
# =============================================================================

# Source column -> MatchRecord field
SOURCE_COLUMNS: Dict[str, str] = {
    "date": "timestamp",
    "home_team_api_id": "home_id",
    "away_team_api_id": "away_id",
    "home_team_goal": "home_goals",
    "away_team_goal": "away_goals",
    "league_id": "competition_id",
    "season": "season",
}

# Team directory column -> TeamRecord field
TEAM_COLUMNS: Dict[str, str] = {
    "team_api_id": "team_id",
    "team_long_name": "long_name",
    "team_short_name": "short_name",
}
