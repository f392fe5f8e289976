"""Optimal lineup construction for a week's player pool."""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ffmgmt.config.slots import is_eligible, partition_slots
from ffmgmt.lineup.assigner import credited_position
from ffmgmt.lineup.totals import LineupResult, SlotAssignment
from ffmgmt.models.player import PlayerRecord, PoolPlayer


logger = logging.getLogger(__name__)

_SOLVER_ENV = "FFMGMT_SOLVER"
_SOLVER_GAP_ENV = "FFMGMT_SOLVER_GAP"
_SOLVER_TIME_LIMIT_ENV = "FFMGMT_SOLVER_TIME_LIMIT"

GREEDY = "greedy"
EXACT = "exact"
STRATEGIES = (GREEDY, EXACT)

_SOLVER_CMD = None


def _env_float(name: str, default: Optional[float], *, min_value: float | None = None) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %s", name, raw, default)
        return default
    if min_value is not None and value <= min_value:
        logger.warning("Ignoring %s=%s; value must be greater than %s", name, raw, min_value)
        return default
    return value


def _env_int(name: str, default: Optional[int], *, min_value: int | None = None) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %s", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def resolve_strategy(strategy: Optional[str] = None) -> str:
    """Pick the solver strategy from the argument or ``FFMGMT_SOLVER``."""

    choice = (strategy or os.getenv(_SOLVER_ENV) or GREEDY).strip().lower()
    if choice not in STRATEGIES:
        raise ValueError(f"Unknown solver strategy '{choice}'; expected one of {', '.join(STRATEGIES)}")
    return choice


def _solver_command():
    global _SOLVER_CMD
    if _SOLVER_CMD is not None:
        return _SOLVER_CMD

    from pulp import PULP_CBC_CMD

    kwargs: Dict[str, float] = {}
    gap = _env_float(_SOLVER_GAP_ENV, None, min_value=0.0)
    if gap is not None:
        kwargs["gapRel"] = gap
    time_limit = _env_int(_SOLVER_TIME_LIMIT_ENV, None, min_value=1)
    if time_limit is not None:
        kwargs["timeLimit"] = time_limit
    _SOLVER_CMD = PULP_CBC_CMD(msg=False, **kwargs)
    logger.info("Using CBC solver backend for exact lineups%s", f" {kwargs}" if kwargs else "")
    return _SOLVER_CMD


def build_pool(
    player_ids: Iterable[str],
    scores: Mapping[str, float],
    *,
    roster: Optional[Mapping[str, PlayerRecord]] = None,
    players: Optional[Mapping[str, PlayerRecord]] = None,
) -> List[PoolPlayer]:
    """Join pool ids with their identity and week score.

    Identity comes from the roster first, then the league-wide cache; unknown
    ids get a bare record with no position and can fill no slot.
    """

    roster = roster or {}
    players = players or {}
    pool: List[PoolPlayer] = []
    seen = set()
    for player_id in player_ids:
        if not player_id or player_id in seen:
            continue
        seen.add(player_id)
        record = roster.get(player_id) or players.get(player_id) or PlayerRecord(player_id=player_id)
        pool.append(PoolPlayer(player=record, points=float(scores.get(player_id, 0.0))))
    return pool


def _eligible(slot: str, candidate: PoolPlayer) -> bool:
    return is_eligible(slot, candidate.player.candidate_positions)


def _assign(slot: str, candidate: PoolPlayer) -> SlotAssignment:
    record = candidate.player
    return SlotAssignment(
        slot=slot,
        player_id=record.player_id,
        position=credited_position(slot, record.candidate_positions, record.base_position),
        points=candidate.points,
    )


def _solve_greedy(slots: Sequence[str], pool: Sequence[PoolPlayer]) -> Dict[int, PoolPlayer]:
    strict, flexible = partition_slots(slots)
    used: set[str] = set()
    chosen: Dict[int, PoolPlayer] = {}
    for index in [*strict, *flexible]:
        best: Optional[PoolPlayer] = None
        for candidate in pool:
            if candidate.player_id in used:
                continue
            if not _eligible(slots[index], candidate):
                continue
            if best is None or (-candidate.points, candidate.player_id) < (-best.points, best.player_id):
                best = candidate
        if best is not None:
            used.add(best.player_id)
            chosen[index] = best
    return chosen


def _solve_exact(slots: Sequence[str], pool: Sequence[PoolPlayer]) -> Optional[Dict[int, PoolPlayer]]:
    import pulp

    edges: List[Tuple[int, int]] = [
        (slot_index, player_index)
        for slot_index, slot in enumerate(slots)
        for player_index, candidate in enumerate(pool)
        if _eligible(slot, candidate)
    ]
    if not edges:
        return {}

    problem = pulp.LpProblem("optimal_lineup", pulp.LpMaximize)
    variables = {
        edge: pulp.LpVariable(f"x_{edge[0]}_{edge[1]}", cat=pulp.LpBinary) for edge in edges
    }
    # Each filled slot outweighs the whole score range.
    fill_bonus = 1.0 + sum(abs(candidate.points) for candidate in pool)
    problem += pulp.lpSum((pool[p].points + fill_bonus) * var for (_, p), var in variables.items())
    for slot_index in range(len(slots)):
        terms = [var for (s, _), var in variables.items() if s == slot_index]
        if terms:
            problem += pulp.lpSum(terms) <= 1, f"slot_{slot_index}"
    for player_index in range(len(pool)):
        terms = [var for (_, p), var in variables.items() if p == player_index]
        if len(terms) > 1:
            problem += pulp.lpSum(terms) <= 1, f"player_{player_index}"

    status = problem.solve(_solver_command())
    if pulp.LpStatus.get(status) != "Optimal":
        logger.warning("Exact lineup solve ended with status %s", pulp.LpStatus.get(status, status))
        return None
    return {
        slot_index: pool[player_index]
        for (slot_index, player_index), var in variables.items()
        if var.value() is not None and var.value() > 0.5
    }


def solve_optimal_lineup(
    slots: Sequence[str],
    pool: Sequence[PoolPlayer],
    *,
    strategy: Optional[str] = None,
) -> LineupResult:
    """Fill ``slots`` with the highest scoring eligible players from ``pool``.

    The greedy strategy fills strict slots before flexible ones, taking the
    highest scorer for each (ties go to the lower player id). The exact
    strategy fills as many slots as possible, then maximizes the total, and
    falls back to greedy when the solver does not report an optimal status.
    Negative scorers are picked when they are the only eligible players.
    Assignments are returned in slot order; slots nobody can fill stay empty.
    """

    chosen_strategy = resolve_strategy(strategy)
    ordered_pool = sorted(pool, key=lambda candidate: candidate.player_id)

    chosen: Optional[Dict[int, PoolPlayer]] = None
    if chosen_strategy == EXACT:
        chosen = _solve_exact(slots, ordered_pool)
        if chosen is None:
            logger.warning("Falling back to greedy lineup for %d slots", len(slots))
    if chosen is None:
        chosen = _solve_greedy(slots, ordered_pool)

    assignments = [
        _assign(slot, chosen[index]) if index in chosen else SlotAssignment(slot=slot)
        for index, slot in enumerate(slots)
    ]
    return LineupResult.from_assignments(assignments)
