"""Load league exports from JSON into validated input models."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from pydantic import ValidationError

from ffmgmt.models.league import LeagueInput


logger = logging.getLogger(__name__)


class LeagueLoadError(ValueError):
    """Raised when a league payload cannot be read or validated."""


def parse_league(
    payload: Mapping[str, Any],
    *,
    default_slots: Optional[Sequence[str]] = None,
    playoff_start_week: Optional[int] = None,
) -> LeagueInput:
    """Validate a league payload.

    ``default_slots`` fills seasons that carry no starting slots and
    ``playoff_start_week`` fills seasons that do not name one.
    """

    data = dict(payload)
    if default_slots is not None or playoff_start_week is not None:
        seasons = []
        for season in data.get("seasons") or []:
            season = dict(season)
            if default_slots is not None and not (
                season.get("starting_slots") or season.get("roster_positions") or season.get("lineup_config")
            ):
                season["starting_slots"] = list(default_slots)
            if playoff_start_week is not None and season.get("playoff_start_week") is None:
                season["playoff_start_week"] = playoff_start_week
            seasons.append(season)
        data["seasons"] = seasons
    try:
        league = LeagueInput.model_validate(data)
    except ValidationError as exc:
        raise LeagueLoadError(f"invalid league payload: {exc.error_count()} error(s)\n{exc}") from exc
    logger.info(
        "Loaded league %s with %d seasons and %d cached players",
        league.league_id or "<unnamed>",
        len(league.seasons),
        len(league.players),
    )
    return league


def load_league(path: Path, **kwargs: Any) -> LeagueInput:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise LeagueLoadError(f"league file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise LeagueLoadError(f"league file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise LeagueLoadError(f"league file {path} must hold a JSON object")
    return parse_league(payload, **kwargs)
