"""Player identity models shared by the lineup resolvers and the solver."""

from __future__ import annotations

from typing import List, Tuple

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from ffmgmt.config.positions import Position, normalize, normalize_many


class PlayerRecord(BaseModel):
    """Identity and position metadata for one player."""

    player_id: str = Field(..., min_length=1)
    name: str = ""
    position: str | None = None
    alt_positions: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("alt_positions", "fantasy_positions"),
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("player_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("alt_positions", mode="before")
    @classmethod
    def _drop_empty_alts(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @property
    def base_position(self) -> Position:
        base = normalize(self.position)
        if base is Position.UNKNOWN and self.alt_positions:
            return normalize(self.alt_positions[0])
        return base

    @property
    def candidate_positions(self) -> Tuple[Position, ...]:
        return normalize_many([self.base_position, *self.alt_positions])


class PoolPlayer(BaseModel):
    """A player joined with the score they produced in one week."""

    player: PlayerRecord
    points: float = 0.0

    model_config = ConfigDict(frozen=True)

    @property
    def player_id(self) -> str:
        return self.player.player_id
