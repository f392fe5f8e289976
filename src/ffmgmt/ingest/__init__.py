from .league import LeagueLoadError, load_league, parse_league

__all__ = ["LeagueLoadError", "load_league", "parse_league"]
