"""Season-level efficiency aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ffmgmt.aggregate.weekly import WeekTotals, evaluate_week
from ffmgmt.config.positions import CANONICAL_POSITIONS, Position
from ffmgmt.models.league import SeasonInput, TeamSeasonInput
from ffmgmt.models.player import PlayerRecord


logger = logging.getLogger(__name__)


def _ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator * scale


def _merge_counts(left: Mapping, right: Mapping) -> dict:
    merged = dict(left)
    for key, value in right.items():
        merged[key] = merged.get(key, 0) + value
    return merged


@dataclass(frozen=True)
class EfficiencyStats:
    """Summed actual and optimal production over a set of counted weeks."""

    weeks: int = 0
    actual_total: float = 0.0
    optimal_total: float = 0.0
    actual_offense: float = 0.0
    optimal_offense: float = 0.0
    actual_defense: float = 0.0
    optimal_defense: float = 0.0
    actual_points: Dict[Position, float] = field(default_factory=dict)
    optimal_points: Dict[Position, float] = field(default_factory=dict)
    actual_starts: Dict[Position, int] = field(default_factory=dict)
    optimal_starts: Dict[Position, int] = field(default_factory=dict)

    @classmethod
    def from_week(cls, week: WeekTotals) -> "EfficiencyStats":
        return cls(
            weeks=1,
            actual_total=week.actual.total,
            optimal_total=week.optimal.total,
            actual_offense=week.actual.offense,
            optimal_offense=week.optimal.offense,
            actual_defense=week.actual.defense,
            optimal_defense=week.optimal.defense,
            actual_points={pos: line.points for pos, line in week.actual.by_position.items()},
            optimal_points={pos: line.points for pos, line in week.optimal.by_position.items()},
            actual_starts={pos: line.starts for pos, line in week.actual.by_position.items()},
            optimal_starts={pos: line.starts for pos, line in week.optimal.by_position.items()},
        )

    @classmethod
    def from_weeks(cls, weeks: Iterable[WeekTotals]) -> "EfficiencyStats":
        """Sum the counted weeks; uncounted weeks contribute nothing."""

        stats = cls()
        for week in weeks:
            if week.counted:
                stats = stats + cls.from_week(week)
        return stats

    def __add__(self, other: "EfficiencyStats") -> "EfficiencyStats":
        if not isinstance(other, EfficiencyStats):
            return NotImplemented
        return EfficiencyStats(
            weeks=self.weeks + other.weeks,
            actual_total=self.actual_total + other.actual_total,
            optimal_total=self.optimal_total + other.optimal_total,
            actual_offense=self.actual_offense + other.actual_offense,
            optimal_offense=self.optimal_offense + other.optimal_offense,
            actual_defense=self.actual_defense + other.actual_defense,
            optimal_defense=self.optimal_defense + other.optimal_defense,
            actual_points=_merge_counts(self.actual_points, other.actual_points),
            optimal_points=_merge_counts(self.optimal_points, other.optimal_points),
            actual_starts=_merge_counts(self.actual_starts, other.actual_starts),
            optimal_starts=_merge_counts(self.optimal_starts, other.optimal_starts),
        )

    @property
    def management_percent(self) -> float:
        return _ratio(self.actual_total, self.optimal_total, 100.0)

    @property
    def offensive_management_percent(self) -> float:
        return _ratio(self.actual_offense, self.optimal_offense, 100.0)

    @property
    def defensive_management_percent(self) -> float:
        return _ratio(self.actual_defense, self.optimal_defense, 100.0)

    @property
    def ppw(self) -> float:
        return _ratio(self.actual_total, self.weeks)

    @property
    def optimal_ppw(self) -> float:
        return _ratio(self.optimal_total, self.weeks)

    @property
    def offensive_ppw(self) -> float:
        return _ratio(self.actual_offense, self.weeks)

    @property
    def defensive_ppw(self) -> float:
        return _ratio(self.actual_defense, self.weeks)

    def position_ppw(self, position: Position) -> float:
        return _ratio(self.actual_points.get(position, 0.0), self.weeks)

    def individual_ppw(self, position: Position) -> float:
        return _ratio(self.actual_points.get(position, 0.0), self.actual_starts.get(position, 0))

    def position_management_percent(self, position: Position) -> float:
        return _ratio(
            self.actual_points.get(position, 0.0),
            self.optimal_points.get(position, 0.0),
            100.0,
        )

    def to_dict(self) -> dict:
        return {
            "weeks": self.weeks,
            "actual_total": self.actual_total,
            "optimal_total": self.optimal_total,
            "management_percent": self.management_percent,
            "offensive_management_percent": self.offensive_management_percent,
            "defensive_management_percent": self.defensive_management_percent,
            "ppw": self.ppw,
            "optimal_ppw": self.optimal_ppw,
            "offensive_ppw": self.offensive_ppw,
            "defensive_ppw": self.defensive_ppw,
            "positions": {
                position.value: {
                    "points": self.actual_points.get(position, 0.0),
                    "optimal_points": self.optimal_points.get(position, 0.0),
                    "starts": self.actual_starts.get(position, 0),
                    "ppw": self.position_ppw(position),
                    "individual_ppw": self.individual_ppw(position),
                    "management_percent": self.position_management_percent(position),
                }
                for position in CANONICAL_POSITIONS
            },
        }


@dataclass(frozen=True)
class TeamRecord:
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    championships: int = 0

    def __add__(self, other: "TeamRecord") -> "TeamRecord":
        if not isinstance(other, TeamRecord):
            return NotImplemented
        return TeamRecord(
            wins=self.wins + other.wins,
            losses=self.losses + other.losses,
            ties=self.ties + other.ties,
            points_for=self.points_for + other.points_for,
            points_against=self.points_against + other.points_against,
            championships=self.championships + other.championships,
        )

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def record(self) -> str:
        text = f"{self.wins}-{self.losses}"
        return f"{text}-{self.ties}" if self.ties else text

    def to_dict(self) -> dict:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "record": self.record,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "championships": self.championships,
        }


@dataclass(frozen=True)
class SeasonAggregate:
    season_id: str
    team_id: str
    owner_id: Optional[str]
    name: str
    regular: EfficiencyStats
    playoffs: EfficiencyStats
    record: TeamRecord
    weeks: Tuple[WeekTotals, ...] = ()

    @property
    def management_percent(self) -> float:
        return self.regular.management_percent

    @property
    def championships(self) -> int:
        return self.record.championships

    def to_dict(self, *, include_weeks: bool = False) -> dict:
        payload = {
            "season_id": self.season_id,
            "team_id": self.team_id,
            "owner_id": self.owner_id,
            "name": self.name,
            "record": self.record.to_dict(),
            "regular": self.regular.to_dict(),
            "playoffs": self.playoffs.to_dict(),
        }
        if include_weeks:
            payload["weeks"] = [week.to_dict() for week in self.weeks]
        return payload


def aggregate_season(
    team: TeamSeasonInput,
    season: SeasonInput,
    *,
    players: Optional[Mapping[str, PlayerRecord]] = None,
    strategy: Optional[str] = None,
) -> SeasonAggregate:
    """Evaluate every completed week of one team-season and sum the results.

    Regular-season and playoff weeks are summed separately. Wins, losses and
    championships come from the team input when it carries them; matchup
    pairing fills the rest later in the pipeline.
    """

    roster = {player.player_id: player for player in team.roster}
    slots = season.starting_slots
    evaluated = []
    for snapshot in sorted(team.weeks, key=lambda item: item.week):
        if not season.is_completed(snapshot.week):
            logger.debug(
                "Season %s team %s: skipping in-progress week %d",
                season.season_id,
                team.team_id,
                snapshot.week,
            )
            continue
        evaluated.append(
            evaluate_week(slots, snapshot, roster=roster, players=players, strategy=strategy)
        )

    regular_weeks = [week for week in evaluated if season.is_regular_season(week.week)]
    playoff_weeks = [week for week in evaluated if not season.is_regular_season(week.week)]

    record = TeamRecord(
        wins=team.wins or 0,
        losses=team.losses or 0,
        ties=team.ties or 0,
        points_for=sum(week.points for week in regular_weeks),
        points_against=team.points_against or 0.0,
        championships=team.championships or 0,
    )
    return SeasonAggregate(
        season_id=season.season_id,
        team_id=team.team_id,
        owner_id=team.owner_id,
        name=team.display_name,
        regular=EfficiencyStats.from_weeks(regular_weeks),
        playoffs=EfficiencyStats.from_weeks(playoff_weeks),
        record=record,
        weeks=tuple(evaluated),
    )
