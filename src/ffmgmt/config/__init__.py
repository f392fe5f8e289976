from .positions import (
    CANONICAL_POSITIONS,
    DEFENSIVE_POSITIONS,
    OFFENSIVE_POSITIONS,
    Position,
    is_defense,
    is_offense,
    normalize,
    normalize_many,
)
from .slots import (
    NON_STARTING_TOKENS,
    SlotFamily,
    SlotRule,
    allowed_positions,
    expand_lineup_config,
    is_eligible,
    partition_slots,
    resolve_slot,
    sanitize_starting_slots,
)

__all__ = [
    "CANONICAL_POSITIONS",
    "DEFENSIVE_POSITIONS",
    "NON_STARTING_TOKENS",
    "OFFENSIVE_POSITIONS",
    "Position",
    "SlotFamily",
    "SlotRule",
    "allowed_positions",
    "expand_lineup_config",
    "is_defense",
    "is_eligible",
    "is_offense",
    "normalize",
    "normalize_many",
    "partition_slots",
    "resolve_slot",
    "sanitize_starting_slots",
]
