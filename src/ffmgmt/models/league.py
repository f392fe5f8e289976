"""Boundary models for league, season and weekly matchup payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ffmgmt.config.slots import expand_lineup_config, sanitize_starting_slots
from ffmgmt.models.player import PlayerRecord


EMPTY_STARTER = "0"


def _as_str(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class WeekSnapshot(BaseModel):
    """One team's matchup record for one week."""

    week: int = Field(..., ge=1)
    starters: List[str] = Field(default_factory=list)
    players: List[str] = Field(default_factory=list)
    players_points: Dict[str, float] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("players_points", "scores"),
    )
    matchup_id: Optional[int] = None
    points: Optional[float] = None
    slot_tokens: Optional[Dict[str, str]] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("starters", mode="before")
    @classmethod
    def _coerce_starters(cls, value: Any) -> Any:
        if value is None:
            return []
        return [EMPTY_STARTER if item is None else _as_str(item) for item in value]

    @field_validator("players", mode="before")
    @classmethod
    def _coerce_players(cls, value: Any) -> Any:
        if value is None:
            return []
        return [_as_str(item) for item in value]

    @field_validator("players_points", mode="before")
    @classmethod
    def _coerce_points(cls, value: Any) -> Any:
        if value is None:
            return {}
        return {str(key): (0.0 if score is None else score) for key, score in value.items()}

    @field_validator("slot_tokens", mode="before")
    @classmethod
    def _clean_slot_tokens(cls, value: Any) -> Any:
        if value is None:
            return None
        cleaned: Dict[str, str] = {}
        for key, token in value.items():
            if token is None:
                raise ValueError(f"slot token for player '{key}' is missing")
            player_id = str(key).strip()
            slot = str(token).strip().upper()
            if not player_id or not slot:
                raise ValueError("slot token entries must have a player id and a slot")
            cleaned[player_id] = slot
        return cleaned


class TeamSeasonInput(BaseModel):
    team_id: str = Field(..., validation_alias=AliasChoices("team_id", "roster_id"))
    owner_id: Optional[str] = None
    name: str = ""
    roster: List[PlayerRecord] = Field(default_factory=list)
    wins: Optional[int] = Field(default=None, ge=0)
    losses: Optional[int] = Field(default=None, ge=0)
    ties: Optional[int] = Field(default=None, ge=0)
    championships: Optional[int] = Field(default=None, ge=0)
    points_against: Optional[float] = None
    weeks: List[WeekSnapshot] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("team_id", mode="before")
    @classmethod
    def _coerce_team_id(cls, value: Any) -> Any:
        return _as_str(value)

    @field_validator("owner_id", mode="before")
    @classmethod
    def _blank_owner_is_missing(cls, value: Any) -> Any:
        value = _as_str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def display_name(self) -> str:
        return self.name or f"Team {self.team_id}"


class SeasonInput(BaseModel):
    season_id: str
    starting_slots: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("starting_slots", "roster_positions"),
    )
    lineup_config: Optional[Dict[str, int]] = None
    playoff_start_week: int = Field(default=14, ge=1)
    playoff_teams: int = Field(default=6, ge=0)
    current_week: Optional[int] = Field(default=None, ge=0)
    teams: List[TeamSeasonInput] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("season_id", mode="before")
    @classmethod
    def _coerce_season(cls, value: Any) -> Any:
        return _as_str(value)

    @model_validator(mode="after")
    def _resolve_slots(self) -> "SeasonInput":
        if not self.starting_slots and self.lineup_config:
            self.starting_slots = expand_lineup_config(self.lineup_config)
        else:
            self.starting_slots = sanitize_starting_slots(self.starting_slots)
        return self

    def is_regular_season(self, week: int) -> bool:
        return week < self.playoff_start_week

    def is_completed(self, week: int) -> bool:
        if self.current_week is None or self.current_week <= 1:
            return True
        return week < self.current_week


class LeagueInput(BaseModel):
    league_id: str = ""
    name: str = ""
    players: List[PlayerRecord] = Field(default_factory=list)
    seasons: List[SeasonInput] = Field(default_factory=list)

    @field_validator("league_id", mode="before")
    @classmethod
    def _coerce_league(cls, value: Any) -> Any:
        return _as_str(value)

    def player_cache(self) -> Dict[str, PlayerRecord]:
        return {player.player_id: player for player in self.players}
