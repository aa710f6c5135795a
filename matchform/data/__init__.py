"""Match and team records and their file loaders."""

from matchform.data.models import MatchRecord, TeamRecord
from matchform.data.loader import (
    load_matches,
    load_matches_frame,
    frame_to_records,
    list_seasons,
    load_teams,
    team_names,
)

__all__ = [
    "MatchRecord",
    "TeamRecord",
    "load_matches",
    "load_matches_frame",
    "frame_to_records",
    "list_seasons",
    "load_teams",
    "team_names",
]
