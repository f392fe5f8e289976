"""Evaluate one team-week: actual lineup against the optimal lineup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

from ffmgmt.lineup.actual import resolve_snapshot
from ffmgmt.lineup.totals import LineupTotals, SlotAssignment
from ffmgmt.models.league import EMPTY_STARTER, WeekSnapshot
from ffmgmt.models.player import PlayerRecord
from ffmgmt.optimizer.service import build_pool, solve_optimal_lineup


@dataclass(frozen=True)
class WeekTotals:
    week: int
    actual: LineupTotals
    optimal: LineupTotals
    actual_slots: Tuple[SlotAssignment, ...]
    optimal_slots: Tuple[SlotAssignment, ...]
    counted: bool
    matchup_id: Optional[int] = None
    reported_points: Optional[float] = None
    padded: int = 0
    truncated: int = 0
    skipped_starters: Tuple[str, ...] = ()

    @property
    def points(self) -> float:
        """Points the team is credited with for the matchup."""

        if self.reported_points is not None:
            return self.reported_points
        return self.actual.total

    @property
    def management_percent(self) -> float:
        if self.optimal.total <= 0:
            return 0.0
        return self.actual.total / self.optimal.total * 100.0

    def to_dict(self) -> dict:
        return {
            "week": self.week,
            "counted": self.counted,
            "matchup_id": self.matchup_id,
            "points": self.points,
            "management_percent": self.management_percent,
            "actual": self.actual.to_dict(),
            "optimal": self.optimal.to_dict(),
            "actual_slots": [slot.to_dict() for slot in self.actual_slots],
            "optimal_slots": [slot.to_dict() for slot in self.optimal_slots],
            "padded": self.padded,
            "truncated": self.truncated,
            "skipped_starters": list(self.skipped_starters),
        }


def evaluate_week(
    slots: Sequence[str],
    snapshot: WeekSnapshot,
    *,
    roster: Optional[Mapping[str, PlayerRecord]] = None,
    players: Optional[Mapping[str, PlayerRecord]] = None,
    strategy: Optional[str] = None,
) -> WeekTotals:
    actual = resolve_snapshot(slots, snapshot, roster=roster, players=players)

    pool_ids = snapshot.players or [pid for pid in snapshot.starters if pid and pid != EMPTY_STARTER]
    pool = build_pool(pool_ids, snapshot.players_points, roster=roster, players=players)
    optimal = solve_optimal_lineup(slots, pool, strategy=strategy)

    return WeekTotals(
        week=snapshot.week,
        actual=actual.result.totals,
        optimal=optimal.totals,
        actual_slots=actual.result.assignments,
        optimal_slots=optimal.assignments,
        counted=actual.counted,
        matchup_id=snapshot.matchup_id,
        reported_points=snapshot.points,
        padded=actual.padded,
        truncated=actual.truncated,
        skipped_starters=actual.skipped_starters,
    )
