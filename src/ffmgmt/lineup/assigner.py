"""Credited-position assignment for a player occupying a slot."""

from __future__ import annotations

from typing import Iterable

from ffmgmt.config.positions import Position, RawPosition, normalize, normalize_many
from ffmgmt.config.slots import resolve_slot


def credited_position(
    slot: str,
    candidate_positions: Iterable[RawPosition],
    base_position: RawPosition,
) -> Position:
    """Return the position a player is credited with when started in ``slot``.

    A strict slot credits its own position whenever the player carries it.
    A flexible slot credits the first of the player's positions (base first)
    the slot accepts. Otherwise the player's base position is credited.
    """

    base = normalize(base_position)
    ordered = normalize_many([base, *candidate_positions])
    rule = resolve_slot(slot)

    if rule.is_strict:
        slot_position = rule.position
        if slot_position is not Position.UNKNOWN and slot_position in ordered:
            return slot_position
        return base

    for position in ordered:
        if position is not Position.UNKNOWN and position in rule.allowed:
            return position
    return base
