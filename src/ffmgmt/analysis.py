"""League-wide pipeline: weeks to seasons to careers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from ffmgmt.aggregate.career import CareerAggregate, merge_careers, rank_standings
from ffmgmt.aggregate.matchups import apply_season_results, head_to_head, season_champion
from ffmgmt.aggregate.season import SeasonAggregate, aggregate_season
from ffmgmt.models.league import LeagueInput, SeasonInput
from ffmgmt.models.player import PlayerRecord
from ffmgmt.optimizer.service import resolve_strategy


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeasonReport:
    season_id: str
    champion_team_id: Optional[str]
    standings: Tuple[SeasonAggregate, ...]

    def to_dict(self, *, include_weeks: bool = False) -> dict:
        return {
            "season_id": self.season_id,
            "champion_team_id": self.champion_team_id,
            "standings": [entry.to_dict(include_weeks=include_weeks) for entry in self.standings],
        }


@dataclass(frozen=True)
class LeagueReport:
    league_id: str
    name: str
    strategy: str
    seasons: Tuple[SeasonReport, ...]
    careers: Tuple[CareerAggregate, ...]

    def season(self, season_id: str) -> SeasonReport:
        for report in self.seasons:
            if report.season_id == season_id:
                return report
        raise KeyError(f"season '{season_id}' not in report")

    def to_dict(self, *, include_weeks: bool = False) -> dict:
        return {
            "league_id": self.league_id,
            "name": self.name,
            "strategy": self.strategy,
            "seasons": [season.to_dict(include_weeks=include_weeks) for season in self.seasons],
            "careers": [career.to_dict() for career in self.careers],
        }


def analyze_season(
    season: SeasonInput,
    *,
    players: Optional[Mapping[str, PlayerRecord]] = None,
    strategy: Optional[str] = None,
) -> SeasonReport:
    if not season.starting_slots:
        logger.warning("Season %s has no starting slots; every lineup is empty", season.season_id)
    aggregates = [
        aggregate_season(team, season, players=players, strategy=strategy) for team in season.teams
    ]
    champion = season_champion(season, aggregates)
    resolved = apply_season_results(season, aggregates, champion=champion)
    logger.info("Season %s: analysed %d teams", season.season_id, len(resolved))
    return SeasonReport(
        season_id=season.season_id,
        champion_team_id=champion,
        standings=tuple(rank_standings(resolved)),
    )


def analyze_league(
    league: LeagueInput,
    *,
    strategy: Optional[str] = None,
    seasons: Optional[Sequence[str]] = None,
) -> LeagueReport:
    """Run every team-season through the efficiency pipeline.

    ``seasons`` restricts the analysis to the given season ids; careers are
    built only from the seasons analysed.
    """

    chosen = resolve_strategy(strategy)
    players = league.player_cache()
    selected = [
        season for season in league.seasons if seasons is None or season.season_id in set(seasons)
    ]
    if seasons is not None and not selected:
        raise ValueError(f"No seasons matching {', '.join(seasons)}")

    season_reports: List[SeasonReport] = []
    all_aggregates: List[SeasonAggregate] = []
    for season in sorted(selected, key=lambda item: item.season_id):
        report = analyze_season(season, players=players, strategy=chosen)
        season_reports.append(report)
        all_aggregates.extend(report.standings)

    careers = merge_careers(all_aggregates, head_to_head=head_to_head(all_aggregates))
    return LeagueReport(
        league_id=league.league_id,
        name=league.name,
        strategy=chosen,
        seasons=tuple(season_reports),
        careers=tuple(rank_standings(careers)),
    )
