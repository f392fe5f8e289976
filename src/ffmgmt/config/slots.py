"""Starting slot configuration and slot eligibility rules."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ffmgmt.config.positions import DEFENSIVE_POSITIONS, Position, RawPosition, normalize


logger = logging.getLogger(__name__)

NON_STARTING_TOKENS: FrozenSet[str] = frozenset(
    {
        "BN",
        "BENCH",
        "TAXI",
        "TAXI_SLOT",
        "TAXI-SLOT",
        "TAXI SLOT",
        "IR",
        "RESERVE",
        "RESERVED",
        "PUP",
        "OUT",
    }
)


class SlotFamily(str, Enum):
    FIXED = "fixed"
    FLEX = "flex"
    SUPER_FLEX = "super_flex"
    IDP_FLEX = "idp_flex"
    IDP_DUAL = "idp_dual"
    FALLBACK = "fallback"


_FIXED_SLOTS = {position.value: position for position in Position if position is not Position.UNKNOWN}

_FLEX_TOKENS = frozenset({"FLEX", "WRRB", "WRRBTE", "RBWR", "RBWRTE", "WRRBTEFLEX"})
_NARROW_FLEX_TOKENS = {
    "WRRBFLEX": frozenset({Position.WR, Position.RB}),
    "RECFLEX": frozenset({Position.WR, Position.TE}),
}
_SUPER_FLEX_TOKENS = frozenset({"SUPERFLEX", "QBRBWRTE", "QBRBWR", "QBSF", "SFLX", "SF", "OP"})
_IDP_TOKENS = frozenset({"IDP", "IDPFLEX", "DFLEX", "DP", "D", "DEF"})

_FLEX_ALLOWED = frozenset({Position.RB, Position.WR, Position.TE})
_SUPER_FLEX_ALLOWED = frozenset({Position.QB, Position.RB, Position.WR, Position.TE})

_SEPARATORS = re.compile(r"[\s_\-/]+")


@dataclass(frozen=True)
class SlotRule:
    token: str
    family: SlotFamily
    allowed: FrozenSet[Position]

    @property
    def is_strict(self) -> bool:
        return self.family in {SlotFamily.FIXED, SlotFamily.FALLBACK} and len(self.allowed) == 1

    @property
    def position(self) -> Optional[Position]:
        """The single position a strict slot stands for."""

        if not self.is_strict:
            return None
        return next(iter(self.allowed))


def _compact(token: str) -> str:
    return _SEPARATORS.sub("", token.strip().upper())


def _defensive_components(compact: str) -> Optional[FrozenSet[Position]]:
    if not compact or len(compact) % 2:
        return None
    parts = []
    for index in range(0, len(compact), 2):
        chunk = compact[index : index + 2]
        if chunk not in {"DL", "LB", "DB"}:
            return None
        parts.append(Position(chunk))
    return frozenset(parts)


@lru_cache(maxsize=256)
def resolve_slot(slot: str) -> SlotRule:
    """Classify a slot token and return the positions it accepts."""

    token = (slot or "").strip().upper()
    compact = _compact(token)

    fixed = _FIXED_SLOTS.get(compact)
    if fixed is not None:
        return SlotRule(token, SlotFamily.FIXED, frozenset({fixed}))
    if compact in _FLEX_TOKENS:
        return SlotRule(token, SlotFamily.FLEX, _FLEX_ALLOWED)
    narrow = _NARROW_FLEX_TOKENS.get(compact)
    if narrow is not None:
        return SlotRule(token, SlotFamily.FLEX, narrow)
    if compact in _SUPER_FLEX_TOKENS:
        return SlotRule(token, SlotFamily.SUPER_FLEX, _SUPER_FLEX_ALLOWED)
    if compact in _IDP_TOKENS or "IDP" in compact:
        return SlotRule(token, SlotFamily.IDP_FLEX, DEFENSIVE_POSITIONS)

    components = _defensive_components(compact)
    if components is not None:
        if components == DEFENSIVE_POSITIONS:
            return SlotRule(token, SlotFamily.IDP_FLEX, DEFENSIVE_POSITIONS)
        if len(components) == 2:
            return SlotRule(token, SlotFamily.IDP_DUAL, components)

    return SlotRule(token, SlotFamily.FALLBACK, frozenset({normalize(token)}))


def allowed_positions(slot: str) -> FrozenSet[Position]:
    return resolve_slot(slot).allowed


def is_eligible(slot: str, positions: Iterable[RawPosition]) -> bool:
    allowed = resolve_slot(slot).allowed
    for raw in positions:
        position = normalize(raw)
        if position is not Position.UNKNOWN and position in allowed:
            return True
    return False


def is_non_starting(token: str) -> bool:
    stripped = (token or "").strip().upper()
    return not stripped or stripped in NON_STARTING_TOKENS


def sanitize_starting_slots(tokens: Iterable[str]) -> List[str]:
    """Drop bench, taxi and reserve designations from a slot list."""

    kept: List[str] = []
    dropped: List[str] = []
    for token in tokens:
        if is_non_starting(token):
            dropped.append(token)
            continue
        kept.append(token.strip().upper())
    if dropped:
        logger.warning("Dropped non-starting slot tokens: %s", ", ".join(repr(t) for t in dropped))
    return kept


def expand_lineup_config(config: Mapping[str, int]) -> List[str]:
    """Expand ``{"RB": 2, "FLEX": 1}`` style counts into an ordered slot list."""

    tokens: List[str] = []
    for slot, count in config.items():
        if count < 0:
            raise ValueError(f"slot count for '{slot}' must be non-negative")
        tokens.extend([slot] * int(count))
    return sanitize_starting_slots(tokens)


def partition_slots(slots: Iterable[str]) -> Tuple[List[int], List[int]]:
    """Split slot indexes into strict and flexible groups, keeping order."""

    strict: List[int] = []
    flexible: List[int] = []
    for index, slot in enumerate(slots):
        (strict if resolve_slot(slot).is_strict else flexible).append(index)
    return strict, flexible
