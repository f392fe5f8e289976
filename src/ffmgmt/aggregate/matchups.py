"""Win/loss records, head-to-head summaries and champion detection."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ffmgmt.aggregate.season import SeasonAggregate, TeamRecord
from ffmgmt.aggregate.weekly import WeekTotals
from ffmgmt.models.league import SeasonInput, TeamSeasonInput


logger = logging.getLogger(__name__)

Pairing = Tuple[Tuple[SeasonAggregate, WeekTotals], Tuple[SeasonAggregate, WeekTotals]]


def iter_pairings(
    aggregates: Sequence[SeasonAggregate],
    *,
    weeks: Optional[Iterable[int]] = None,
) -> Iterator[Tuple[int, int, Pairing]]:
    """Yield ``(week, matchup_id, pair)`` for every two-team matchup.

    Pairings are ordered by week then matchup id. Groups that do not hold
    exactly two teams (byes, median games) are ignored.
    """

    wanted = set(weeks) if weeks is not None else None
    grouped: Dict[Tuple[int, int], List[Tuple[SeasonAggregate, WeekTotals]]] = defaultdict(list)
    for aggregate in aggregates:
        for week in aggregate.weeks:
            if week.matchup_id is None:
                continue
            if wanted is not None and week.week not in wanted:
                continue
            grouped[(week.week, week.matchup_id)].append((aggregate, week))

    for (week_number, matchup_id), entries in sorted(grouped.items(), key=lambda item: item[0]):
        if len(entries) != 2:
            logger.debug(
                "Week %d matchup %d has %d entries; skipping",
                week_number,
                matchup_id,
                len(entries),
            )
            continue
        entries.sort(key=lambda entry: entry[0].team_id)
        yield week_number, matchup_id, (entries[0], entries[1])


def season_records(season: SeasonInput, aggregates: Sequence[SeasonAggregate]) -> Dict[str, TeamRecord]:
    """Regular-season wins, losses, ties and points against per team id."""

    regular_weeks = {
        week.week
        for aggregate in aggregates
        for week in aggregate.weeks
        if season.is_regular_season(week.week)
    }
    tallies: Dict[str, Dict[str, float]] = {
        aggregate.team_id: {"wins": 0, "losses": 0, "ties": 0, "points_against": 0.0}
        for aggregate in aggregates
    }
    for _, _, ((left, left_week), (right, right_week)) in iter_pairings(aggregates, weeks=regular_weeks):
        left_points = left_week.points
        right_points = right_week.points
        if left_points == 0 and right_points == 0:
            continue
        tallies[left.team_id]["points_against"] += right_points
        tallies[right.team_id]["points_against"] += left_points
        if left_points > right_points:
            tallies[left.team_id]["wins"] += 1
            tallies[right.team_id]["losses"] += 1
        elif right_points > left_points:
            tallies[right.team_id]["wins"] += 1
            tallies[left.team_id]["losses"] += 1
        else:
            tallies[left.team_id]["ties"] += 1
            tallies[right.team_id]["ties"] += 1

    return {
        team_id: TeamRecord(
            wins=int(tally["wins"]),
            losses=int(tally["losses"]),
            ties=int(tally["ties"]),
            points_against=tally["points_against"],
        )
        for team_id, tally in tallies.items()
    }


def playoff_weeks(season: SeasonInput) -> range:
    if season.playoff_teams < 2:
        return range(0)
    rounds = math.ceil(math.log2(season.playoff_teams))
    return range(season.playoff_start_week, season.playoff_start_week + rounds)


def season_champion(season: SeasonInput, aggregates: Sequence[SeasonAggregate]) -> Optional[str]:
    """Team id that won the final of the playoff bracket, if it can be told."""

    window = set(playoff_weeks(season))
    present = {week.week for aggregate in aggregates for week in aggregate.weeks if week.week in window}
    if not present:
        logger.info("Season %s: no playoff weeks present; champion unknown", season.season_id)
        return None
    final_week = max(present)
    for _, _, ((left, left_week), (right, right_week)) in iter_pairings(aggregates, weeks=[final_week]):
        if left_week.points == right_week.points:
            continue
        winner = left if left_week.points > right_week.points else right
        logger.info("Season %s: champion is team %s", season.season_id, winner.team_id)
        return winner.team_id
    logger.info("Season %s: no decisive final in week %d", season.season_id, final_week)
    return None


def _explicit(team: Optional[TeamSeasonInput], name: str, fallback):
    value = getattr(team, name, None) if team is not None else None
    return fallback if value is None else value


def apply_season_results(
    season: SeasonInput,
    aggregates: Sequence[SeasonAggregate],
    *,
    champion: Optional[str] = None,
) -> List[SeasonAggregate]:
    """Fill records and championships the team inputs did not supply.

    ``champion`` is the computed title winner; team inputs that carry an
    explicit championships count keep it.
    """

    computed = season_records(season, aggregates)
    inputs = {team.team_id: team for team in season.teams}

    resolved: List[SeasonAggregate] = []
    for aggregate in aggregates:
        team = inputs.get(aggregate.team_id)
        derived = computed.get(aggregate.team_id, TeamRecord())
        won_title = 1 if champion == aggregate.team_id else 0
        record = TeamRecord(
            wins=_explicit(team, "wins", derived.wins),
            losses=_explicit(team, "losses", derived.losses),
            ties=_explicit(team, "ties", derived.ties),
            points_for=aggregate.record.points_for,
            points_against=_explicit(team, "points_against", derived.points_against),
            championships=_explicit(team, "championships", won_title),
        )
        resolved.append(replace(aggregate, record=record))
    return resolved


@dataclass(frozen=True)
class HeadToHeadStats:
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    games: int = 0
    sum_management_for: float = 0.0
    sum_management_against: float = 0.0

    def __add__(self, other: "HeadToHeadStats") -> "HeadToHeadStats":
        if not isinstance(other, HeadToHeadStats):
            return NotImplemented
        return HeadToHeadStats(
            wins=self.wins + other.wins,
            losses=self.losses + other.losses,
            ties=self.ties + other.ties,
            points_for=self.points_for + other.points_for,
            points_against=self.points_against + other.points_against,
            games=self.games + other.games,
            sum_management_for=self.sum_management_for + other.sum_management_for,
            sum_management_against=self.sum_management_against + other.sum_management_against,
        )

    @property
    def record(self) -> str:
        text = f"{self.wins}-{self.losses}"
        return f"{text}-{self.ties}" if self.ties else text

    @property
    def avg_points_for(self) -> float:
        return self.points_for / self.games if self.games else 0.0

    @property
    def avg_points_against(self) -> float:
        return self.points_against / self.games if self.games else 0.0

    @property
    def avg_management_for(self) -> float:
        return self.sum_management_for / self.games if self.games else 0.0

    @property
    def avg_management_against(self) -> float:
        return self.sum_management_against / self.games if self.games else 0.0

    def to_dict(self) -> dict:
        return {
            "record": self.record,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "games": self.games,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "avg_points_for": self.avg_points_for,
            "avg_points_against": self.avg_points_against,
            "avg_management_for": self.avg_management_for,
            "avg_management_against": self.avg_management_against,
        }


def _one_game(points_for: float, points_against: float, mgmt_for: float, mgmt_against: float) -> HeadToHeadStats:
    return HeadToHeadStats(
        wins=int(points_for > points_against),
        losses=int(points_for < points_against),
        ties=int(points_for == points_against),
        points_for=points_for,
        points_against=points_against,
        games=1,
        sum_management_for=mgmt_for,
        sum_management_against=mgmt_against,
    )


def head_to_head(aggregates: Iterable[SeasonAggregate]) -> Dict[str, Dict[str, HeadToHeadStats]]:
    """Owner-vs-owner results across every season and week supplied.

    Teams without an owner id and games where both sides scored zero are left
    out.
    """

    by_season: Dict[str, List[SeasonAggregate]] = defaultdict(list)
    for aggregate in aggregates:
        by_season[aggregate.season_id].append(aggregate)

    table: Dict[str, Dict[str, HeadToHeadStats]] = defaultdict(dict)
    for season_id in sorted(by_season):
        for _, _, ((left, left_week), (right, right_week)) in iter_pairings(by_season[season_id]):
            if not left.owner_id or not right.owner_id or left.owner_id == right.owner_id:
                continue
            if left_week.points == 0 and right_week.points == 0:
                continue
            left_game = _one_game(
                left_week.points,
                right_week.points,
                left_week.management_percent,
                right_week.management_percent,
            )
            right_game = _one_game(
                right_week.points,
                left_week.points,
                right_week.management_percent,
                left_week.management_percent,
            )
            table[left.owner_id][right.owner_id] = (
                table[left.owner_id].get(right.owner_id, HeadToHeadStats()) + left_game
            )
            table[right.owner_id][left.owner_id] = (
                table[right.owner_id].get(left.owner_id, HeadToHeadStats()) + right_game
            )
    return {owner: dict(opponents) for owner, opponents in table.items()}
