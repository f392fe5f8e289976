"""FastAPI application exposing the league management pipeline."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query

from ffmgmt.aggregate.weekly import evaluate_week
from ffmgmt.analysis import analyze_league
from ffmgmt.api.schemas import (
    AnalyzeResponse,
    SlotAssignmentResponse,
    SlotResolveRequest,
    SlotResolveResponse,
    SlotRuleResponse,
    WeekRequest,
    WeekResponse,
)
from ffmgmt.config.slots import is_non_starting, resolve_slot, sanitize_starting_slots
from ffmgmt.lineup.totals import LineupTotals, SlotAssignment
from ffmgmt.models.league import LeagueInput


logger = logging.getLogger(__name__)


def _slot_payload(assignments: tuple[SlotAssignment, ...]) -> list[SlotAssignmentResponse]:
    return [SlotAssignmentResponse(**assignment.to_dict()) for assignment in assignments]


def _position_points(totals: LineupTotals) -> dict[str, float]:
    return {position.value: line.points for position, line in totals.by_position.items()}


def create_app() -> FastAPI:
    app = FastAPI(title="ffmgmt lineup management")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/slots/resolve", response_model=SlotResolveResponse)
    async def resolve_slots(payload: SlotResolveRequest) -> SlotResolveResponse:
        dropped = [token for token in payload.slots if is_non_starting(token)]
        starting = sanitize_starting_slots(payload.slots)
        rules = []
        for token in starting:
            rule = resolve_slot(token)
            rules.append(
                SlotRuleResponse(
                    token=rule.token,
                    family=rule.family.value,
                    strict=rule.is_strict,
                    allowed=sorted(position.value for position in rule.allowed),
                )
            )
        return SlotResolveResponse(starting_slots=starting, dropped=dropped, rules=rules)

    @app.post("/week", response_model=WeekResponse)
    async def week(payload: WeekRequest) -> WeekResponse:
        slots = sanitize_starting_slots(payload.slots)
        if not slots:
            raise HTTPException(status_code=400, detail="no starting slots after removing bench tokens")
        try:
            totals = evaluate_week(
                slots,
                payload.snapshot,
                roster={player.player_id: player for player in payload.roster},
                players={player.player_id: player for player in payload.players},
                strategy=payload.solver,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return WeekResponse(
            week=totals.week,
            counted=totals.counted,
            management_percent=totals.management_percent,
            actual_total=totals.actual.total,
            optimal_total=totals.optimal.total,
            actual_slots=_slot_payload(totals.actual_slots),
            optimal_slots=_slot_payload(totals.optimal_slots),
            actual_by_position=_position_points(totals.actual),
            optimal_by_position=_position_points(totals.optimal),
        )

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        league: LeagueInput,
        solver: Optional[str] = None,
        season: Optional[List[str]] = Query(default=None),
        include_weeks: bool = False,
    ) -> AnalyzeResponse:
        try:
            report = analyze_league(league, strategy=solver, seasons=season)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.info(
            "Analysed league %s: %d seasons, %d careers",
            report.league_id,
            len(report.seasons),
            len(report.careers),
        )
        return AnalyzeResponse(**report.to_dict(include_weeks=include_weeks))

    return app
