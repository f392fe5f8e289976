"""Resolve the lineup an owner actually started in a week."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, List, Mapping, Optional, Sequence, Tuple

from ffmgmt.config.positions import Position
from ffmgmt.lineup.assigner import credited_position
from ffmgmt.lineup.totals import LineupResult, SlotAssignment
from ffmgmt.models.league import EMPTY_STARTER, WeekSnapshot
from ffmgmt.models.player import PlayerRecord


logger = logging.getLogger(__name__)

_EMPTY_IDS = {EMPTY_STARTER, ""}


@dataclass(frozen=True)
class ActualLineup:
    result: LineupResult
    counted: bool
    padded: int = 0
    truncated: int = 0
    skipped_starters: Tuple[str, ...] = ()


def _lookup_player(
    player_id: str,
    roster: Mapping[str, PlayerRecord],
    players: Mapping[str, PlayerRecord],
) -> Optional[PlayerRecord]:
    return roster.get(player_id) or players.get(player_id)


def resolve_actual_lineup(
    slots: Sequence[str],
    starters: Sequence[Optional[str]],
    *,
    scores: Mapping[str, float],
    pool: Optional[Collection[str]] = None,
    roster: Optional[Mapping[str, PlayerRecord]] = None,
    players: Optional[Mapping[str, PlayerRecord]] = None,
    slot_tokens: Optional[Mapping[str, str]] = None,
    week: Optional[int] = None,
) -> ActualLineup:
    """Credit each started player to the slot at the same index.

    Starters are padded with empty placeholders or truncated to the number of
    slots. When ``pool`` is given and non-empty, starters missing from it are
    skipped. Players absent from both ``roster`` and ``players`` are credited
    as ``Position.UNKNOWN``. An entry in ``slot_tokens`` overrides the
    positional slot used for crediting that player.
    """

    roster = roster or {}
    players = players or {}
    pool_ids = set(pool) if pool else None

    aligned: List[Optional[str]] = list(starters[: len(slots)])
    truncated = max(0, len(starters) - len(slots))
    padded = max(0, len(slots) - len(starters))
    if truncated:
        logger.warning(
            "Week %s: %d starters for %d slots; ignoring %d trailing starters",
            week,
            len(starters),
            len(slots),
            truncated,
        )
    if padded:
        logger.debug("Week %s: padding %d empty starter slots", week, padded)
        aligned.extend([EMPTY_STARTER] * padded)

    assignments: List[SlotAssignment] = []
    skipped: List[str] = []
    counted = False
    for slot, starter in zip(slots, aligned):
        player_id = (starter or "").strip()
        if player_id in _EMPTY_IDS:
            assignments.append(SlotAssignment(slot=slot))
            continue
        if pool_ids is not None and player_id not in pool_ids:
            logger.debug("Week %s: starter %s not in player pool; skipping", week, player_id)
            skipped.append(player_id)
            assignments.append(SlotAssignment(slot=slot))
            continue

        record = _lookup_player(player_id, roster, players)
        if record is None:
            base = Position.UNKNOWN
            candidates: Tuple[Position, ...] = ()
        else:
            base = record.base_position
            candidates = record.candidate_positions
        credit_slot = (slot_tokens or {}).get(player_id, slot)
        points = float(scores.get(player_id, 0.0))
        if points != 0.0:
            counted = True
        assignments.append(
            SlotAssignment(
                slot=credit_slot,
                player_id=player_id,
                position=credited_position(credit_slot, candidates, base),
                points=points,
            )
        )

    return ActualLineup(
        result=LineupResult.from_assignments(assignments),
        counted=counted,
        padded=padded,
        truncated=truncated,
        skipped_starters=tuple(skipped),
    )


def resolve_snapshot(
    slots: Sequence[str],
    snapshot: WeekSnapshot,
    *,
    roster: Optional[Mapping[str, PlayerRecord]] = None,
    players: Optional[Mapping[str, PlayerRecord]] = None,
) -> ActualLineup:
    return resolve_actual_lineup(
        slots,
        snapshot.starters,
        scores=snapshot.players_points,
        pool=snapshot.players,
        slot_tokens=snapshot.slot_tokens,
        roster=roster,
        players=players,
        week=snapshot.week,
    )
