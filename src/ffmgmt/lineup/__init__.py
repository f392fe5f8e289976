from .actual import ActualLineup, resolve_actual_lineup, resolve_snapshot
from .assigner import credited_position
from .totals import LineupResult, LineupTotals, PositionLine, SlotAssignment

__all__ = [
    "ActualLineup",
    "LineupResult",
    "LineupTotals",
    "PositionLine",
    "SlotAssignment",
    "credited_position",
    "resolve_actual_lineup",
    "resolve_snapshot",
]
