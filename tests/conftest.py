"""Shared test fixtures."""

from datetime import datetime, timedelta

import pytest

from matchform.config import get_settings
from matchform.data.models import MatchRecord


SEASON_START = datetime(2008, 8, 16, 15, 0)


def make_match(
    day: int,
    home_id: int,
    away_id: int,
    home_goals: int,
    away_goals: int,
    competition_id: int = 1729,
    season: str = "2008/2009",
) -> MatchRecord:
    """Helper to create a MatchRecord `day` days after SEASON_START."""
    return MatchRecord(
        timestamp=SEASON_START + timedelta(days=day),
        home_id=home_id,
        away_id=away_id,
        home_goals=home_goals,
        away_goals=away_goals,
        competition_id=competition_id,
        season=season,
    )


def round_robin(team_ids: list[int]) -> list[list[tuple[int, int]]]:
    """Single round robin via the circle method; one list of pairs per round."""
    teams = list(team_ids)
    rounds = []
    for r in range(len(teams) - 1):
        pairs = []
        for i in range(len(teams) // 2):
            a, b = teams[i], teams[-1 - i]
            pairs.append((a, b) if r % 2 == 0 else (b, a))
        rounds.append(pairs)
        teams = [teams[0], teams[-1]] + teams[1:-1]
    return rounds


def build_league_corpus(
    team_ids: list[int],
    seasons: list[str],
    competition_id: int = 1729,
) -> list[MatchRecord]:
    """
    Double round robin per season, one round every 7 days.

    Scores are a deterministic function of the fixture so that results vary.
    """
    matches = []
    day = 0
    for season in seasons:
        first_leg = round_robin(team_ids)
        second_leg = [[(b, a) for a, b in pairs] for pairs in first_leg]
        for rnd, pairs in enumerate(first_leg + second_leg):
            for home, away in pairs:
                matches.append(make_match(
                    day,
                    home,
                    away,
                    home_goals=(home * 3 + away + rnd) % 4,
                    away_goals=(away * 2 + home + rnd * 3) % 3,
                    competition_id=competition_id,
                    season=season,
                ))
            day += 7
    return matches


@pytest.fixture
def league_corpus():
    """Six teams, two seasons of a double round robin (60 matches)."""
    return build_league_corpus([1, 2, 3, 4, 5, 6], ["2008/2009", "2009/2010"])


@pytest.fixture
def form_matches():
    """
    Team 10 plays five matches: 2-0, 1-0, 3-1, 1-1, 0-2 (its goals first).

    Team 20 plays the same five opponents with mirrored results.
    """
    scores = [(2, 0), (1, 0), (3, 1), (1, 1), (0, 2)]
    matches = []
    for i, (gf, ga) in enumerate(scores):
        opponent = 100 + i
        if i % 2 == 0:
            matches.append(make_match(i * 2, 10, opponent, gf, ga))
        else:
            matches.append(make_match(i * 2, opponent, 10, ga, gf))
        matches.append(make_match(i * 2 + 1, 20, opponent, ga, gf))
    return matches


@pytest.fixture
def clean_settings(tmp_path, monkeypatch):
    """Fresh settings rooted in a temporary working directory."""
    monkeypatch.chdir(tmp_path)
    for key in (
        "MATCHFORM_WINDOW_SIZE",
        "MATCHFORM_MIN_HISTORY",
        "MATCHFORM_DATA_DIR",
        "MATCHFORM_LOG_LEVEL",
        "MATCHFORM_LOG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
