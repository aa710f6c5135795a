"""
Training dataset construction.

Single forward pass over the chronologically ordered match log. For every
match the features are built from the pre-match windows first, and only
then is the match pushed into both teams' history. A match that cannot
produce a row (not enough history) still updates the history.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np
import pandas as pd

from matchform.constants import (
    DATASET_COLUMNS,
    LABEL_COLUMN,
    LEAGUE_LOOKBACK,
    MIN_HISTORY,
    MODEL_INPUT_COLUMNS,
    WINDOW_SIZE,
    match_result,
)
from matchform.data.models import MatchRecord
from matchform.exceptions import InsufficientHistory
from matchform.features.history import EntityHistoryStore
from matchform.features.league import CompetitionHistory
from matchform.features.stats import compute_aggregate_stats
from matchform.features.vector import FeatureVector, assemble_features
from matchform.utils import get_logger

logger = get_logger("features.dataset")


@dataclass
class TrainingDataset:
    """Ordered training rows plus pass bookkeeping."""

    rows: list[FeatureVector] = field(default_factory=list)
    emitted: int = 0
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[FeatureVector]:
        return iter(self.rows)

    @property
    def processed(self) -> int:
        return self.emitted + self.skipped

    def to_frame(self) -> pd.DataFrame:
        """DataFrame with the 16 dataset columns in contract order."""
        return pd.DataFrame(
            [row.to_dict() for row in self.rows],
            columns=list(DATASET_COLUMNS),
        )

    def to_array(self) -> np.ndarray:
        """Model input matrix, shape (rows, len(MODEL_INPUT_COLUMNS))."""
        if not self.rows:
            return np.empty((0, len(MODEL_INPUT_COLUMNS)), dtype=np.float64)
        return np.vstack([row.to_array() for row in self.rows])

    def labels(self) -> np.ndarray:
        return np.array([row.result for row in self.rows], dtype=np.int64)

    def split_by_season(self, test_season: str) -> Tuple["TrainingDataset", "TrainingDataset"]:
        """
        Time-based split on season label.

        Train holds seasons sorting strictly before test_season, test holds
        test_season itself. Later seasons are left out of both.
        """
        train = [r for r in self.rows if r.season < test_season]
        test = [r for r in self.rows if r.season == test_season]
        return (
            TrainingDataset(rows=train, emitted=len(train)),
            TrainingDataset(rows=test, emitted=len(test)),
        )

    def write_csv(self, path: str | Path) -> Path:
        """
        Write the dataset as CSV with a header row.

        Commas inside season labels are replaced with underscores.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        df = self.to_frame()
        df["season"] = df["season"].str.replace(",", "_", regex=False)
        df[LABEL_COLUMN] = df[LABEL_COLUMN].astype("int64")
        df.to_csv(path, index=False)

        logger.info(f"Wrote {len(df)} rows to {path}")
        return path


class DatasetBuilder:
    """
    Streams the match log into a training table.

    CRITICAL: features for a match use only matches processed before it.
    The emit decision (qualifies / build_row) and the history update
    (record) are separate steps; process() runs them in that order.
    """

    def __init__(
        self,
        store: Optional[EntityHistoryStore] = None,
        window_size: Optional[int] = None,
        min_history: int = MIN_HISTORY,
        league_lookback: int = LEAGUE_LOOKBACK,
    ):
        """
        Initialize dataset builder.

        Args:
            store: History store for this pass (a fresh one if not provided)
            window_size: Rolling window capacity; defaults to the store's
                capacity, or WINDOW_SIZE for a fresh store
            min_history: Matches each team needs before rows are emitted
            league_lookback: Matches scanned when inferring the league

        Raises:
            ValueError: if window_size disagrees with the given store, or
                min_history exceeds the window capacity
        """
        if store is None:
            store = EntityHistoryStore(capacity=window_size or WINDOW_SIZE)
        elif window_size is not None and window_size != store.capacity:
            raise ValueError(
                f"window_size ({window_size}) does not match "
                f"store capacity ({store.capacity})"
            )

        if min_history > store.capacity:
            raise ValueError(
                f"min_history ({min_history}) cannot exceed "
                f"window_size ({store.capacity})"
            )

        self.store = store
        self.min_history = min_history
        self.competitions = CompetitionHistory(lookback=league_lookback)
        self.dataset = TrainingDataset()

    def qualifies(self, match: MatchRecord) -> bool:
        """True if both teams currently hold at least min_history outcomes."""
        return (
            self.store.size(match.home_id) >= self.min_history
            and self.store.size(match.away_id) >= self.min_history
        )

    def build_row(self, match: MatchRecord) -> FeatureVector:
        """
        Build the labelled row for a match from the current (pre-match) windows.

        Does not touch history.

        Raises:
            InsufficientHistory: if either team's window is too short
        """
        home = compute_aggregate_stats(
            self.store.window(match.home_id), min_history=self.min_history
        )
        away = compute_aggregate_stats(
            self.store.window(match.away_id), min_history=self.min_history
        )

        return assemble_features(
            home,
            away,
            competition_id=self.competitions.infer(match.home_id),
            season=match.season,
            result=match_result(match.home_goals, match.away_goals),
        )

    def record(self, match: MatchRecord) -> None:
        """Push the match into both teams' history, emitted or not."""
        self.store.record_match(match)
        self.competitions.record_match(match)

    def process(self, match: MatchRecord) -> Optional[FeatureVector]:
        """
        Handle one match of the pass.

        Returns:
            The emitted row, or None if the match was skipped
        """
        self.store.ensure(match.home_id)
        self.store.ensure(match.away_id)

        row: Optional[FeatureVector] = None
        if self.qualifies(match):
            try:
                row = self.build_row(match)
            except InsufficientHistory as e:
                logger.debug(f"Skipping match on {match.timestamp:%Y-%m-%d}: {e}")

        if row is None:
            self.dataset.skipped += 1
        else:
            self.dataset.rows.append(row)
            self.dataset.emitted += 1

        self.record(match)
        return row

    def build(self, matches: Iterable[MatchRecord]) -> TrainingDataset:
        """
        Run the full pass.

        Args:
            matches: Match log sorted ascending by timestamp

        Returns:
            TrainingDataset with emitted rows and emitted/skipped counts
        """
        for match in matches:
            self.process(match)

        logger.info(
            f"Dataset pass complete: {self.dataset.emitted} rows written, "
            f"{self.dataset.skipped} skipped "
            f"(window={self.store.capacity}, min_history={self.min_history})"
        )
        return self.dataset
