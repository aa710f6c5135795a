"""
Match log and team directory loaders.

Reads delimited source files into MatchRecords (chronologically ordered)
and TeamRecords (sorted by name).

Handles:
- Case-insensitive header lookup
- Dropping rows with unparsable ids, goals, dates or blank seasons
- Per-row date parsing, so date-only and date-time values can be mixed
- Stable sort by kickoff time
"""

from pathlib import Path
from typing import Iterable, Mapping, Sequence

import pandas as pd
from pydantic import ValidationError

from matchform.constants import SOURCE_COLUMNS, TEAM_COLUMNS
from matchform.data.models import MatchRecord, TeamRecord
from matchform.exceptions import MalformedRecord
from matchform.utils import get_logger

logger = get_logger("data.loader")

INT_FIELDS = ("home_id", "away_id", "home_goals", "away_goals", "competition_id")


def _resolve_columns(header: Sequence[str], mapping: Mapping[str, str]) -> dict:
    """Map source header names (any case) to record fields."""
    lookup = {str(name).strip().lower(): name for name in header}
    resolved = {}
    for source, field in mapping.items():
        if source not in lookup:
            raise MalformedRecord(f"Column '{source}' not found in header")
        resolved[lookup[source]] = field
    return resolved


def _read_source(
    path: Path,
    delimiter: str,
    mapping: Mapping[str, str],
    kind: str,
) -> pd.DataFrame:
    """Read a source file as strings and rename its columns to record fields."""
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")

    raw = pd.read_csv(
        path,
        sep=delimiter,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    columns = _resolve_columns(list(raw.columns), mapping)
    return raw[list(columns)].rename(columns=columns)


def _parse_integers(column: pd.Series) -> pd.Series:
    """Whole numbers as floats, NaN where the text is not an integer."""
    numbers = pd.to_numeric(column.str.strip(), errors="coerce")
    return numbers.where(numbers == numbers.round())


def _reject_invalid(valid: pd.Series, path: Path, strict: bool, what: str) -> None:
    bad = int((~valid).sum())
    if not bad:
        return
    if strict:
        first = int(valid[~valid].index[0])
        # 1-based position among data rows; blank lines are not counted
        raise MalformedRecord(f"unparsable {what} row", row=first + 1)
    logger.warning(f"Dropped {bad} malformed rows from {path.name}")


# =============================================================================
# Matches
# =============================================================================

def load_matches_frame(
    path: str | Path,
    delimiter: str = ",",
    strict: bool = False,
) -> pd.DataFrame:
    """
    Load and clean a match file into a DataFrame.

    Args:
        path: Path to the match file
        delimiter: Field delimiter
        strict: Raise MalformedRecord on the first bad row instead of dropping it

    Returns:
        DataFrame with MatchRecord field names as columns, sorted by timestamp
    """
    path = Path(path)
    df = _read_source(path, delimiter, SOURCE_COLUMNS, "Match")

    valid = pd.Series(True, index=df.index)

    for field in INT_FIELDS:
        df[field] = _parse_integers(df[field])
        valid &= df[field].notna()

    df["timestamp"] = pd.to_datetime(
        df["timestamp"].str.strip(), format="mixed", errors="coerce"
    )
    valid &= df["timestamp"].notna()

    df["season"] = df["season"].str.strip()
    valid &= df["season"] != ""

    valid &= df["home_goals"].fillna(0) >= 0
    valid &= df["away_goals"].fillna(0) >= 0
    valid &= df["home_id"] != df["away_id"]

    _reject_invalid(valid, path, strict, "match")

    df = df[valid].copy()
    for field in INT_FIELDS:
        df[field] = df[field].astype("int64")

    df = df.sort_values("timestamp", kind="stable").reset_index(drop=True)
    logger.info(f"Loaded {len(df)} matches from {path.name}")

    return df


def frame_to_records(df: pd.DataFrame) -> list[MatchRecord]:
    """Convert a cleaned match DataFrame into MatchRecords."""
    records = []
    for row in df.itertuples(index=False):
        try:
            records.append(MatchRecord(
                timestamp=row.timestamp.to_pydatetime(),
                home_id=int(row.home_id),
                away_id=int(row.away_id),
                home_goals=int(row.home_goals),
                away_goals=int(row.away_goals),
                competition_id=int(row.competition_id),
                season=row.season,
            ))
        except ValidationError as e:
            raise MalformedRecord(str(e)) from e
    return records


def load_matches(
    path: str | Path,
    delimiter: str = ",",
    strict: bool = False,
) -> list[MatchRecord]:
    """
    Load a match file as chronologically ordered MatchRecords.

    Args:
        path: Path to the match file
        delimiter: Field delimiter
        strict: Raise MalformedRecord on bad rows instead of dropping them

    Returns:
        MatchRecords sorted ascending by timestamp (ties keep file order)
    """
    return frame_to_records(load_matches_frame(path, delimiter=delimiter, strict=strict))


def list_seasons(matches: Iterable[MatchRecord]) -> list[str]:
    """Distinct season labels in ascending order."""
    return sorted({m.season for m in matches})


# =============================================================================
# Teams
# =============================================================================

def load_teams(
    path: str | Path,
    delimiter: str = ",",
    strict: bool = False,
) -> list[TeamRecord]:
    """
    Load the team directory.

    Rows with a non-integer team id or a blank long name are dropped (or
    raised in strict mode). A team id listed twice keeps its first row.

    Returns:
        TeamRecords sorted by long name
    """
    path = Path(path)
    df = _read_source(path, delimiter, TEAM_COLUMNS, "Team")

    df["team_id"] = _parse_integers(df["team_id"])
    df["long_name"] = df["long_name"].str.strip()
    df["short_name"] = df["short_name"].str.strip()

    valid = df["team_id"].notna() & (df["long_name"] != "")
    _reject_invalid(valid, path, strict, "team")

    df = df[valid].copy()
    df["team_id"] = df["team_id"].astype("int64")
    df = (
        df.drop_duplicates(subset="team_id", keep="first")
        .sort_values("long_name", kind="stable")
        .reset_index(drop=True)
    )
    logger.info(f"Loaded {len(df)} teams from {path.name}")

    return [
        TeamRecord(
            team_id=int(row.team_id),
            long_name=row.long_name,
            short_name=row.short_name,
        )
        for row in df.itertuples(index=False)
    ]


def team_names(teams: Iterable[TeamRecord]) -> dict[int, str]:
    """Team id -> long name lookup."""
    return {team.team_id: team.long_name for team in teams}
