"""
Domain errors raised by the feature engine.

Dataset construction treats InsufficientHistory as a skip; every other
caller treats these as a hard failure of the request.
"""

from datetime import datetime
from typing import Optional


class MatchFormError(Exception):
    """Base exception for feature engine errors."""
    pass


class InvalidInput(MatchFormError):
    """Home and away team are the same team."""
    def __init__(self, team_id: int):
        self.team_id = team_id
        super().__init__(
            f"Home team and away team must be different (got {team_id} for both)"
        )


class UnknownSeason(MatchFormError):
    """No match in the corpus carries the requested season label."""
    def __init__(self, season: str):
        self.season = season
        super().__init__(f"No matches found for season {season!r}")


class InsufficientHistory(MatchFormError):
    """A team has fewer qualifying prior matches than required."""
    def __init__(
        self,
        team_id: Optional[int],
        found: int,
        required: int,
        cutoff: Optional[datetime] = None,
    ):
        self.team_id = team_id
        self.found = found
        self.required = required
        self.cutoff = cutoff
        where = f" before {cutoff:%Y-%m-%d %H:%M}" if cutoff is not None else ""
        super().__init__(
            f"Not enough history for team {team_id}: "
            f"{found} matches{where}, need at least {required}"
        )


class MalformedRecord(MatchFormError):
    """A source row could not be parsed into a MatchRecord."""
    def __init__(self, message: str, row: Optional[int] = None):
        self.row = row
        if row is not None:
            message = f"data row {row}: {message}"
        super().__init__(message)
