from .career import CareerAggregate, merge_careers, rank_standings
from .matchups import (
    HeadToHeadStats,
    apply_season_results,
    head_to_head,
    playoff_weeks,
    season_champion,
    season_records,
)
from .season import EfficiencyStats, SeasonAggregate, TeamRecord, aggregate_season
from .weekly import WeekTotals, evaluate_week

__all__ = [
    "CareerAggregate",
    "EfficiencyStats",
    "HeadToHeadStats",
    "SeasonAggregate",
    "TeamRecord",
    "WeekTotals",
    "aggregate_season",
    "apply_season_results",
    "evaluate_week",
    "head_to_head",
    "merge_careers",
    "playoff_weeks",
    "rank_standings",
    "season_champion",
    "season_records",
]
