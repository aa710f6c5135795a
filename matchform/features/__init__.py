"""
Feature engineering module.

Provides:
- Per-team rolling history
- Windowed form statistics
- League inference
- Training dataset and prediction feature builders
"""

from matchform.features.history import (
    OutcomeStat,
    RollingWindow,
    EntityHistoryStore,
    outcome_for,
)
from matchform.features.stats import (
    AggregateStats,
    compute_aggregate_stats,
)
from matchform.features.league import (
    CompetitionHistory,
    infer_competition,
    majority_competition,
)
from matchform.features.vector import (
    FeatureVector,
    assemble_features,
)
from matchform.features.dataset import (
    DatasetBuilder,
    TrainingDataset,
)
from matchform.features.prediction import (
    PredictionFeatureBuilder,
    season_start,
)

__all__ = [
    # History
    "OutcomeStat",
    "RollingWindow",
    "EntityHistoryStore",
    "outcome_for",
    # Statistics
    "AggregateStats",
    "compute_aggregate_stats",
    # League
    "CompetitionHistory",
    "infer_competition",
    "majority_competition",
    # Assembly
    "FeatureVector",
    "assemble_features",
    # Builders
    "DatasetBuilder",
    "TrainingDataset",
    "PredictionFeatureBuilder",
    "season_start",
]
