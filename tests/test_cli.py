"""
Tests for the command line interface.

Tests for:
- seasons, teams, build-dataset and features commands
- Error reporting and exit codes, including bad settings
"""

import json

import pandas as pd
import pytest

from matchform.cli import main

pytestmark = pytest.mark.usefixtures("clean_settings")


@pytest.fixture
def match_csv(tmp_path, league_corpus):
    """League corpus written in the source file layout."""
    path = tmp_path / "Match.csv"
    pd.DataFrame([
        {
            "league_id": m.competition_id,
            "season": m.season,
            "date": m.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "home_team_api_id": m.home_id,
            "away_team_api_id": m.away_id,
            "home_team_goal": m.home_goals,
            "away_team_goal": m.away_goals,
        }
        for m in league_corpus
    ]).to_csv(path, index=False)
    return path


class TestSeasonsCommand:
    """Test `matchform seasons`."""

    def test_lists_seasons(self, match_csv, capsys):
        code = main(["--matches", str(match_csv), "seasons"])

        out = capsys.readouterr().out
        assert code == 0
        assert "2008/2009" in out
        assert "2009/2010" in out

    def test_missing_file(self, tmp_path, capsys):
        code = main(["--matches", str(tmp_path / "missing.csv"), "seasons"])

        assert code == 1
        assert "Error" in capsys.readouterr().out


class TestBuildDatasetCommand:
    """Test `matchform build-dataset`."""

    def test_writes_dataset(self, match_csv, tmp_path, capsys):
        out_path = tmp_path / "out" / "dataset.csv"

        code = main(["--matches", str(match_csv), "build-dataset", "--out", str(out_path)])

        assert code == 0
        assert len(pd.read_csv(out_path)) == 45
        out = capsys.readouterr().out
        assert "Written rows" in out
        assert "45" in out

    def test_default_output_path(self, match_csv, tmp_path):
        code = main(["--matches", str(match_csv), "build-dataset"])

        assert code == 0
        assert (tmp_path / "data" / "dataset.csv").exists()

    def test_reports_split(self, match_csv, tmp_path, capsys):
        code = main([
            "--matches", str(match_csv),
            "build-dataset", "--out", str(tmp_path / "d.csv"),
            "--test-season", "2009/2010",
        ])

        assert code == 0
        assert "Test rows" in capsys.readouterr().out


class TestFeaturesCommand:
    """Test `matchform features`."""

    def test_json_output(self, match_csv, capsys):
        code = main([
            "--matches", str(match_csv),
            "features", "--season", "2009/2010", "--home", "1", "--away", "2", "--json",
        ])

        assert code == 0
        values = json.loads(capsys.readouterr().out)
        assert "result" not in values
        assert len(values) == 15
        assert values["season"] == "2009/2010"
        assert values["competition_id"] == 1729

    def test_table_output(self, match_csv, capsys):
        code = main([
            "--matches", str(match_csv),
            "features", "--season", "2009/2010", "--home", "1", "--away", "2",
        ])

        assert code == 0
        assert "Team 1 vs Team 2 (2009/2010)" in capsys.readouterr().out

    def test_same_team_fails(self, match_csv, capsys):
        code = main([
            "--matches", str(match_csv),
            "features", "--season", "2009/2010", "--home", "1", "--away", "1",
        ])

        assert code == 1
        assert "Error" in capsys.readouterr().out

    def test_unknown_season_fails(self, match_csv, capsys):
        code = main([
            "--matches", str(match_csv),
            "features", "--season", "1999/2000", "--home", "1", "--away", "2",
        ])

        assert code == 1

    def test_insufficient_history_fails(self, match_csv):
        code = main([
            "--matches", str(match_csv),
            "features", "--season", "2008/2009", "--home", "1", "--away", "2",
        ])

        assert code == 1


@pytest.fixture
def team_csv(tmp_path):
    path = tmp_path / "Team.csv"
    path.write_text(
        "id,team_api_id,team_fifa_api_id,team_long_name,team_short_name\n"
        "1,1,101,Alpha FC,ALP\n"
        "2,2,102,Beta United,BET\n"
        "3,3,103,Cobalt Town,COB\n"
    )
    return path


class TestTeamsCommand:
    """Test `matchform teams`."""

    def test_lists_teams(self, team_csv, capsys):
        code = main(["--teams", str(team_csv), "teams"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Alpha FC" in out
        assert "Cobalt Town" in out

    def test_default_teams_path(self, tmp_path, team_csv, capsys):
        (tmp_path / "data").mkdir(exist_ok=True)
        team_csv.rename(tmp_path / "data" / "Team.csv")

        code = main(["teams"])

        assert code == 0
        assert "Beta United" in capsys.readouterr().out

    def test_missing_directory(self, tmp_path, capsys):
        code = main(["--teams", str(tmp_path / "none.csv"), "teams"])

        assert code == 1
        assert "Team file not found" in capsys.readouterr().out


class TestFeatureTitles:
    """Test team names in `matchform features` output."""

    def test_names_from_directory(self, match_csv, team_csv, capsys):
        code = main([
            "--matches", str(match_csv), "--teams", str(team_csv),
            "features", "--season", "2009/2010", "--home", "1", "--away", "2",
        ])

        assert code == 0
        assert "Alpha FC vs Beta United" in capsys.readouterr().out

    def test_ids_without_directory(self, match_csv, tmp_path, capsys):
        code = main([
            "--matches", str(match_csv), "--teams", str(tmp_path / "none.csv"),
            "features", "--season", "2009/2010", "--home", "1", "--away", "2",
        ])

        assert code == 0
        assert "Team 1 vs Team 2" in capsys.readouterr().out


class TestConfigurationErrors:
    """Test bad settings and options."""

    def test_unknown_log_level_option(self, match_csv):
        with pytest.raises(SystemExit) as exc_info:
            main(["--matches", str(match_csv), "--log-level", "verbose", "seasons"])

        assert exc_info.value.code == 2

    def test_log_level_option_case_insensitive(self, match_csv):
        assert main(["--matches", str(match_csv), "--log-level", "debug", "seasons"]) == 0

    def test_invalid_environment(self, match_csv, monkeypatch, capsys):
        """A bad environment value is reported, not raised."""
        monkeypatch.setenv("MATCHFORM_WINDOW_SIZE", "0")

        code = main(["--matches", str(match_csv), "seasons"])

        assert code == 1
        assert "Invalid configuration" in capsys.readouterr().out

    def test_min_history_above_window_in_environment(self, match_csv, monkeypatch):
        monkeypatch.setenv("MATCHFORM_WINDOW_SIZE", "3")

        assert main(["--matches", str(match_csv), "seasons"]) == 1
