"""
Configuration management for the match form feature engine.

Uses pydantic-settings for type-safe, validated configuration from environment.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from matchform.constants import LEAGUE_LOOKBACK, MIN_HISTORY, WINDOW_SIZE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MATCHFORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Form Window
    # =========================================================================
    window_size: int = Field(
        default=WINDOW_SIZE,
        ge=1,
        description="Number of recent matches kept per team",
    )
    min_history: int = Field(
        default=MIN_HISTORY,
        ge=1,
        description="Minimum prior matches for a team before features are built",
    )
    league_lookback: int = Field(
        default=LEAGUE_LOOKBACK,
        ge=1,
        description="Recent matches scanned when inferring a team's league",
    )

    # =========================================================================
    # Data Files
    # =========================================================================
    data_dir: Path = Field(default=Path("data"))
    matches_file: str = Field(default="Match.csv")
    teams_file: str = Field(default="Team.csv")
    dataset_file: str = Field(default="dataset.csv")

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)
    log_json: bool = Field(default=False)

    # =========================================================================
    # Validation
    # =========================================================================
    @field_validator("data_dir", mode="before")
    @classmethod
    def validate_data_dir(cls, v: str | Path) -> Path:
        """Convert string to Path and create if needed."""
        path = Path(v)
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Convert string to Path and create parent dir if needed."""
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_history_fits_window(self) -> "Settings":
        """A team can never hold more history than the window keeps."""
        if self.min_history > self.window_size:
            raise ValueError(
                f"min_history ({self.min_history}) cannot exceed "
                f"window_size ({self.window_size})"
            )
        return self

    @property
    def matches_path(self) -> Path:
        return self.data_dir / self.matches_file

    @property
    def dataset_path(self) -> Path:
        return self.data_dir / self.dataset_file

    @property
    def teams_path(self) -> Path:
        return self.data_dir / self.teams_file


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
