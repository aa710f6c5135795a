"""Time-aware match form features for three-way outcome prediction."""

from matchform.config import Settings, get_settings
from matchform.data import MatchRecord, TeamRecord, load_matches, load_teams, list_seasons
from matchform.exceptions import (
    MatchFormError,
    InvalidInput,
    UnknownSeason,
    InsufficientHistory,
    MalformedRecord,
)
from matchform.features import (
    DatasetBuilder,
    TrainingDataset,
    PredictionFeatureBuilder,
    FeatureVector,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "MatchRecord",
    "TeamRecord",
    "load_teams",
    "load_matches",
    "list_seasons",
    "MatchFormError",
    "InvalidInput",
    "UnknownSeason",
    "InsufficientHistory",
    "MalformedRecord",
    "DatasetBuilder",
    "TrainingDataset",
    "PredictionFeatureBuilder",
    "FeatureVector",
]
