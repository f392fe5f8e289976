"""Canonical fantasy positions and raw-token normalization."""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Tuple, Union


class Position(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DL = "DL"
    LB = "LB"
    DB = "DB"
    UNKNOWN = "UNK"

    def __str__(self) -> str:
        return self.value


CANONICAL_POSITIONS: Tuple[Position, ...] = (
    Position.QB,
    Position.RB,
    Position.WR,
    Position.TE,
    Position.K,
    Position.DL,
    Position.LB,
    Position.DB,
)
OFFENSIVE_POSITIONS: FrozenSet[Position] = frozenset(
    {Position.QB, Position.RB, Position.WR, Position.TE, Position.K}
)
DEFENSIVE_POSITIONS: FrozenSet[Position] = frozenset({Position.DL, Position.LB, Position.DB})


_SYNONYM_GROUPS: Dict[Position, Tuple[str, ...]] = {
    Position.QB: ("QB",),
    Position.RB: ("RB",),
    Position.WR: ("WR",),
    Position.TE: ("TE",),
    Position.K: ("K", "PK"),
    Position.DL: ("DL", "DE", "DT", "NT", "EDGE", "LE", "RE", "IDL"),
    Position.LB: ("LB", "OLB", "MLB", "ILB", "SLB", "WLB"),
    Position.DB: ("DB", "CB", "S", "FS", "SS", "NB", "DBS", "SAF"),
}

_SYNONYMS: Dict[str, Position] = {
    alias: position for position, aliases in _SYNONYM_GROUPS.items() for alias in aliases
}

_DUAL_SPLIT = re.compile(r"[/_,]")

RawPosition = Union[str, Position, None]


def _lookup(token: str) -> Optional[Position]:
    return _SYNONYMS.get(token)


def normalize(raw: RawPosition) -> Position:
    """Map a raw provider position token onto a canonical position.

    Matching is case-insensitive and ignores surrounding whitespace. Dual
    designations such as ``"DE/OLB"`` resolve to their first recognizable
    component. Anything unrecognized (including team defenses) is
    ``Position.UNKNOWN``.
    """

    if isinstance(raw, Position):
        return raw
    if raw is None:
        return Position.UNKNOWN
    token = str(raw).strip().upper()
    if not token:
        return Position.UNKNOWN
    if token == Position.UNKNOWN.value:
        return Position.UNKNOWN

    direct = _lookup(token)
    if direct is not None:
        return direct

    for part in _DUAL_SPLIT.split(token):
        resolved = _lookup(part.strip())
        if resolved is not None:
            return resolved
    return Position.UNKNOWN


def normalize_many(tokens: Iterable[RawPosition]) -> Tuple[Position, ...]:
    seen: list[Position] = []
    for token in tokens:
        position = normalize(token)
        if position not in seen:
            seen.append(position)
    return tuple(seen)


def is_offense(position: Position) -> bool:
    return position in OFFENSIVE_POSITIONS


def is_defense(position: Position) -> bool:
    return position in DEFENSIVE_POSITIONS
