"""Merge team-seasons into per-owner career aggregates and rank standings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from ffmgmt.aggregate.matchups import HeadToHeadStats
from ffmgmt.aggregate.season import EfficiencyStats, SeasonAggregate, TeamRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CareerAggregate:
    owner_id: str
    name: str
    seasons: Tuple[str, ...]
    regular: EfficiencyStats
    playoffs: EfficiencyStats
    record: TeamRecord
    head_to_head: Dict[str, HeadToHeadStats] = field(default_factory=dict)

    @property
    def management_percent(self) -> float:
        return self.regular.management_percent

    @property
    def championships(self) -> int:
        return self.record.championships

    def to_dict(self) -> dict:
        return {
            "owner_id": self.owner_id,
            "name": self.name,
            "seasons": list(self.seasons),
            "record": self.record.to_dict(),
            "regular": self.regular.to_dict(),
            "playoffs": self.playoffs.to_dict(),
            "head_to_head": {opponent: stats.to_dict() for opponent, stats in self.head_to_head.items()},
        }


def merge_careers(
    seasons: Iterable[SeasonAggregate],
    *,
    head_to_head: Optional[Dict[str, Dict[str, HeadToHeadStats]]] = None,
) -> List[CareerAggregate]:
    """Group team-seasons by owner and sum them into career aggregates.

    Seasons without an owner id are left out. A team-season supplied twice
    (same season and team id) is counted once. Results are ordered by owner
    id; ranking is a separate step.
    """

    unique: Dict[Tuple[str, str], SeasonAggregate] = {}
    for aggregate in seasons:
        if not aggregate.owner_id:
            logger.info(
                "Season %s team %s has no owner id; excluded from careers",
                aggregate.season_id,
                aggregate.team_id,
            )
            continue
        key = (aggregate.season_id, aggregate.team_id)
        if key in unique:
            logger.warning("Duplicate team-season %s/%s ignored", *key)
            continue
        unique[key] = aggregate

    by_owner: Dict[str, List[SeasonAggregate]] = {}
    for aggregate in unique.values():
        by_owner.setdefault(aggregate.owner_id, []).append(aggregate)

    careers: List[CareerAggregate] = []
    for owner_id in sorted(by_owner):
        owned = sorted(by_owner[owner_id], key=lambda item: (item.season_id, item.team_id))
        regular = EfficiencyStats()
        playoffs = EfficiencyStats()
        record = TeamRecord()
        for aggregate in owned:
            regular = regular + aggregate.regular
            playoffs = playoffs + aggregate.playoffs
            record = record + aggregate.record
        careers.append(
            CareerAggregate(
                owner_id=owner_id,
                name=owned[-1].name,
                seasons=tuple(dict.fromkeys(item.season_id for item in owned)),
                regular=regular,
                playoffs=playoffs,
                record=record,
                head_to_head=dict((head_to_head or {}).get(owner_id, {})),
            )
        )
    logger.info("Merged %d team-seasons into %d careers", len(unique), len(careers))
    return careers


Standing = TypeVar("Standing", bound=Union[CareerAggregate, SeasonAggregate])


def standing_key(entry: Union[CareerAggregate, SeasonAggregate]):
    record = entry.record
    return (
        -record.championships,
        -record.wins,
        record.losses,
        -record.points_for,
        -entry.management_percent,
        entry.name,
    )


def rank_standings(entries: Sequence[Standing]) -> List[Standing]:
    """Order by titles, wins, fewest losses, points for, management %, name."""

    return sorted(entries, key=standing_key)
