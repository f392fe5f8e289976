"""Value types describing a filled lineup and its point totals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from ffmgmt.config.positions import CANONICAL_POSITIONS, Position, is_defense, is_offense


@dataclass(frozen=True)
class SlotAssignment:
    slot: str
    player_id: Optional[str] = None
    position: Optional[Position] = None
    points: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.player_id is None

    def to_dict(self) -> dict:
        return {
            "slot": self.slot,
            "player_id": self.player_id,
            "position": self.position.value if self.position is not None else None,
            "points": self.points,
        }


@dataclass(frozen=True)
class PositionLine:
    points: float = 0.0
    starts: int = 0


@dataclass(frozen=True)
class LineupTotals:
    total: float = 0.0
    offense: float = 0.0
    defense: float = 0.0
    by_position: Dict[Position, PositionLine] = field(default_factory=dict)

    @classmethod
    def from_assignments(cls, assignments: Iterable[SlotAssignment]) -> "LineupTotals":
        points: Dict[Position, float] = {position: 0.0 for position in CANONICAL_POSITIONS}
        starts: Dict[Position, int] = {position: 0 for position in CANONICAL_POSITIONS}
        total = offense = defense = 0.0
        for assignment in assignments:
            if assignment.is_empty:
                continue
            position = assignment.position or Position.UNKNOWN
            points[position] = points.get(position, 0.0) + assignment.points
            starts[position] = starts.get(position, 0) + 1
            total += assignment.points
            if is_offense(position):
                offense += assignment.points
            elif is_defense(position):
                defense += assignment.points
        by_position = {
            position: PositionLine(points=points[position], starts=starts[position])
            for position in points
        }
        return cls(total=total, offense=offense, defense=defense, by_position=by_position)

    def points_at(self, position: Position) -> float:
        line = self.by_position.get(position)
        return line.points if line else 0.0

    def starts_at(self, position: Position) -> int:
        line = self.by_position.get(position)
        return line.starts if line else 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "offense": self.offense,
            "defense": self.defense,
            "by_position": {
                position.value: {"points": line.points, "starts": line.starts}
                for position, line in self.by_position.items()
            },
        }


@dataclass(frozen=True)
class LineupResult:
    assignments: Tuple[SlotAssignment, ...]
    totals: LineupTotals

    @classmethod
    def from_assignments(cls, assignments: Iterable[SlotAssignment]) -> "LineupResult":
        ordered = tuple(assignments)
        return cls(assignments=ordered, totals=LineupTotals.from_assignments(ordered))

    @property
    def total(self) -> float:
        return self.totals.total

    def player_ids(self) -> Tuple[str, ...]:
        return tuple(a.player_id for a in self.assignments if a.player_id is not None)
