"""Command-line interface for league management reports."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from ffmgmt.analysis import LeagueReport, analyze_league
from ffmgmt.config_loader import AnalysisProfile
from ffmgmt.ingest import LeagueLoadError, load_league
from ffmgmt.optimizer import STRATEGIES


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score lineup management across a league's seasons")
    parser.add_argument("league", type=Path, help="Path to league JSON export")
    parser.add_argument(
        "--season",
        action="append",
        default=[],
        help="Season id to analyse (repeatable; default all seasons)",
    )
    parser.add_argument(
        "--solver",
        choices=STRATEGIES,
        default=None,
        help="Optimal lineup strategy (default from FFMGMT_SOLVER, else greedy)",
    )
    parser.add_argument(
        "--slot",
        action="append",
        default=[],
        help="Default starting slot for seasons without one (repeatable, in order)",
    )
    parser.add_argument("--playoff-start-week", type=int, default=None, help="Default playoff start week")
    parser.add_argument("--load-profile", type=Path, help="Load analysis profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save analysis profile JSON", default=None)
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write the report JSON")
    parser.add_argument("--weeks", action="store_true", help="Include per-week detail in the JSON report")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def _print_report(report: LeagueReport) -> None:
    for season in report.seasons:
        champion = season.champion_team_id or "-"
        print(f"Season {season.season_id} (champion: {champion})")
        for rank, entry in enumerate(season.standings, start=1):
            print(
                f"  {rank:>2}. {entry.name:<24} {entry.record.record:>8}  "
                f"PF {entry.record.points_for:8.2f}  Mgmt {entry.management_percent:6.2f}%  "
                f"PPW {entry.regular.ppw:7.2f}"
            )
    if report.careers:
        print("All-time")
        for rank, career in enumerate(report.careers, start=1):
            titles = f" {career.championships}x" if career.championships else ""
            print(
                f"  {rank:>2}. {career.name:<24} {career.record.record:>8}{titles}  "
                f"Mgmt {career.management_percent:6.2f}%  PPW {career.regular.ppw:7.2f}  "
                f"seasons {len(career.seasons)}"
            )


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    profile = AnalysisProfile()
    if args.load_profile:
        profile = AnalysisProfile.load(args.load_profile)
    solver = args.solver or profile.solver
    seasons = args.season or profile.seasons
    default_slots = args.slot or profile.default_slots
    playoff_start_week = args.playoff_start_week or profile.playoff_start_week

    if args.save_profile:
        AnalysisProfile(
            solver=solver,
            seasons=list(seasons),
            default_slots=list(default_slots),
            playoff_start_week=playoff_start_week,
        ).save(args.save_profile)
        print(f"Saved analysis profile to {args.save_profile}")

    try:
        league = load_league(
            args.league,
            default_slots=default_slots or None,
            playoff_start_week=playoff_start_week,
        )
        report = analyze_league(league, strategy=solver, seasons=seasons or None)
    except (LeagueLoadError, ValueError) as exc:
        raise SystemExit(f"error: {exc}") from exc

    _print_report(report)
    if args.output:
        args.output.write_text(json.dumps(report.to_dict(include_weeks=args.weeks), indent=2), encoding="utf-8")
        print(f"Wrote report to {args.output}")


if __name__ == "__main__":
    main()
