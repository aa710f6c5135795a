"""
Command line interface.

Usage:
    matchform seasons
    matchform teams
    matchform build-dataset --out data/dataset.csv
    matchform build-dataset --test-season 2015/2016
    matchform features --season 2015/2016 --home 8634 --away 8633
    matchform features --season 2015/2016 --home 8634 --away 8633 --json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from matchform.config import Settings, get_settings
from matchform.data import TeamRecord, list_seasons, load_matches, load_teams, team_names
from matchform.exceptions import MatchFormError
from matchform.features import DatasetBuilder, PredictionFeatureBuilder, TrainingDataset
from matchform.utils.logging import get_logger, setup_logging

logger = get_logger("cli")

console = Console()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matchform",
        description="Time-aware match form features",
    )
    parser.add_argument(
        "--matches",
        type=Path,
        default=None,
        help="Match file (default: <data_dir>/Match.csv)",
    )
    parser.add_argument(
        "--teams",
        type=Path,
        default=None,
        help="Team directory (default: <data_dir>/Team.csv)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (default: from settings)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("seasons", help="List seasons in the match file")
    sub.add_parser("teams", help="List teams in the team directory")

    dataset_p = sub.add_parser("build-dataset", help="Build the training dataset")
    dataset_p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output CSV (default: <data_dir>/dataset.csv)",
    )
    dataset_p.add_argument(
        "--test-season",
        type=str,
        default=None,
        help="Also report the train/test split for this season",
    )

    features_p = sub.add_parser("features", help="Build prediction features for a fixture")
    features_p.add_argument("--season", type=str, required=True, help="Target season label")
    features_p.add_argument("--home", type=int, required=True, help="Home team id")
    features_p.add_argument("--away", type=int, required=True, help="Away team id")
    features_p.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    return parser


def display_dataset_summary(
    dataset: TrainingDataset,
    out_path: Path,
    test_season: Optional[str] = None,
) -> None:
    """Display dataset pass results in a table."""
    table = Table(title="Training Dataset")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Written rows", str(dataset.emitted))
    table.add_row("Skipped rows", str(dataset.skipped))

    if test_season:
        train, test = dataset.split_by_season(test_season)
        table.add_row(f"Train rows (< {test_season})", str(len(train)))
        table.add_row(f"Test rows ({test_season})", str(len(test)))

    console.print(table)
    console.print(f"Output: {out_path}")


def display_teams(teams: Sequence[TeamRecord]) -> None:
    table = Table(title=f"Teams ({len(teams)})")
    table.add_column("Id", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Short")

    for team in teams:
        table.add_row(str(team.team_id), team.long_name, team.short_name)

    console.print(table)


def display_features(values: dict, title: str) -> None:
    """Display a feature vector as a two-column table."""
    table = Table(title=title)
    table.add_column("Feature", style="cyan")
    table.add_column("Value", justify="right")

    for name, value in values.items():
        if name == "result":
            continue
        text = f"{value:.4f}" if isinstance(value, float) else str(value)
        table.add_row(name, text)

    console.print(table)


def known_team_names(path: Path) -> Dict[int, str]:
    """Id -> name from the team directory, empty if there is none."""
    if not path.exists():
        logger.debug(f"No team directory at {path}, showing ids")
        return {}
    return team_names(load_teams(path))


def cmd_seasons(args: argparse.Namespace, settings: Settings) -> int:
    matches = load_matches(args.matches or settings.matches_path)
    for season in list_seasons(matches):
        console.print(season)
    return 0


def cmd_teams(args: argparse.Namespace, settings: Settings) -> int:
    display_teams(load_teams(args.teams or settings.teams_path))
    return 0


def cmd_build_dataset(args: argparse.Namespace, settings: Settings) -> int:
    matches = load_matches(args.matches or settings.matches_path)

    builder = DatasetBuilder(
        window_size=settings.window_size,
        min_history=settings.min_history,
        league_lookback=settings.league_lookback,
    )
    dataset = builder.build(matches)

    out_path = dataset.write_csv(args.out or settings.dataset_path)
    display_dataset_summary(dataset, out_path, args.test_season)
    return 0


def cmd_features(args: argparse.Namespace, settings: Settings) -> int:
    matches = load_matches(args.matches or settings.matches_path)

    builder = PredictionFeatureBuilder(
        matches,
        window_size=settings.window_size,
        min_history=settings.min_history,
        league_lookback=settings.league_lookback,
    )
    vector = builder.build(args.home, args.away, args.season)

    values = vector.to_dict()
    if args.json:
        values.pop("result")
        print(json.dumps(values, indent=2))
        return 0

    names = known_team_names(args.teams or settings.teams_path)
    home = names.get(args.home, f"Team {args.home}")
    away = names.get(args.away, f"Team {args.away}")
    display_features(values, title=escape(f"{home} vs {away} ({args.season})"))
    return 0


COMMANDS = {
    "seasons": cmd_seasons,
    "teams": cmd_teams,
    "build-dataset": cmd_build_dataset,
    "features": cmd_features,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        setup_logging(level=args.log_level)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        return 1

    try:
        return COMMANDS[args.command](args, settings)
    except (MatchFormError, FileNotFoundError) as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
