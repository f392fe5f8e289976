from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from ffmgmt.models.league import WeekSnapshot
from ffmgmt.models.player import PlayerRecord


class SlotResolveRequest(BaseModel):
    slots: List[str] = Field(..., min_length=1)


class SlotRuleResponse(BaseModel):
    token: str
    family: str
    strict: bool
    allowed: List[str]


class SlotResolveResponse(BaseModel):
    starting_slots: List[str]
    dropped: List[str] = Field(default_factory=list)
    rules: List[SlotRuleResponse]


class WeekRequest(BaseModel):
    slots: List[str] = Field(..., min_length=1)
    snapshot: WeekSnapshot
    roster: List[PlayerRecord] = Field(default_factory=list)
    players: List[PlayerRecord] = Field(default_factory=list)
    solver: Literal["greedy", "exact"] | None = None


class SlotAssignmentResponse(BaseModel):
    slot: str
    player_id: str | None
    position: str | None
    points: float


class WeekResponse(BaseModel):
    week: int
    counted: bool
    management_percent: float
    actual_total: float
    optimal_total: float
    actual_slots: List[SlotAssignmentResponse]
    optimal_slots: List[SlotAssignmentResponse]
    actual_by_position: Dict[str, float]
    optimal_by_position: Dict[str, float]


class AnalyzeResponse(BaseModel):
    league_id: str
    name: str
    strategy: str
    seasons: List[Dict[str, Any]]
    careers: List[Dict[str, Any]]
