from .league import EMPTY_STARTER, LeagueInput, SeasonInput, TeamSeasonInput, WeekSnapshot
from .player import PlayerRecord, PoolPlayer

__all__ = [
    "EMPTY_STARTER",
    "LeagueInput",
    "PlayerRecord",
    "PoolPlayer",
    "SeasonInput",
    "TeamSeasonInput",
    "WeekSnapshot",
]
