"""
Pydantic models for match data.

MatchRecord is the single input type of the feature engine: one finished
match, already cleaned and placed in chronological order by the loader.
TeamRecord is a team directory entry, used only to name teams in output.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator


class MatchRecord(BaseModel):
    """Internal match representation."""

    model_config = {"frozen": True}

    timestamp: datetime
    home_id: int
    away_id: int
    home_goals: int = Field(ge=0)
    away_goals: int = Field(ge=0)
    competition_id: int
    season: str

    @field_validator("season")
    @classmethod
    def strip_season(cls, v: str) -> str:
        """Season labels are compared verbatim, so trim stray whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("season must not be blank")
        return v

    @model_validator(mode="after")
    def check_teams(self) -> "MatchRecord":
        if self.home_id == self.away_id:
            raise ValueError(f"team {self.home_id} cannot play itself")
        return self

    def involves(self, team_id: int) -> bool:
        """True if the team played in this match, home or away."""
        return self.home_id == team_id or self.away_id == team_id

    def goals_for(self, team_id: int) -> int:
        return self.home_goals if team_id == self.home_id else self.away_goals

    def goals_against(self, team_id: int) -> int:
        return self.away_goals if team_id == self.home_id else self.home_goals


class TeamRecord(BaseModel):
    """One entry of the team directory."""

    model_config = {"frozen": True}

    team_id: int
    long_name: str = Field(min_length=1)
    short_name: str = ""

    @property
    def label(self) -> str:
        """Display name, with the short code when the directory has one."""
        return f"{self.long_name} ({self.short_name})" if self.short_name else self.long_name
