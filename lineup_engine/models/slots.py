"""Translate league roster-position codes into Slot definitions."""

import logging
from typing import Dict, FrozenSet, Iterable, List, Tuple

from ..errors import InvalidSlotDefinition
from .lineup import Position, Slot, SlotKind

logger = logging.getLogger(__name__)

FLEX_POSITIONS: FrozenSet[Position] = frozenset({Position.RB, Position.WR, Position.TE})
SUPER_FLEX_POSITIONS: FrozenSet[Position] = frozenset(
    {Position.QB, Position.RB, Position.WR, Position.TE}
)
IDP_POSITIONS: FrozenSet[Position] = frozenset({Position.DL, Position.LB, Position.DB})

# Sleeper flex codes and the positions each one accepts
FLEX_CODES: Dict[str, Tuple[SlotKind, FrozenSet[Position]]] = {
    "FLEX": (SlotKind.FLEX, FLEX_POSITIONS),
    "WRRB_FLEX": (SlotKind.FLEX, frozenset({Position.WR, Position.RB})),
    "REC_FLEX": (SlotKind.FLEX, frozenset({Position.WR, Position.TE})),
    "IDP_FLEX": (SlotKind.FLEX, IDP_POSITIONS),
    "SUPER_FLEX": (SlotKind.SUPER_FLEX, SUPER_FLEX_POSITIONS),
}

# Reserve slots are never filled by the optimizer
BENCH_CODES = frozenset({"BN", "BENCH", "IR", "TAXI"})

POSITION_ALIASES = {
    "DST": Position.DEF,
    "D/ST": Position.DEF,
}


def parse_slot(code: str) -> Slot:
    """Build a Slot from a single roster-position code.

    Args:
        code: League code such as ``QB``, ``FLEX``, ``SUPER_FLEX`` or ``BN``

    Returns:
        Slot with its kind and accepted positions

    Raises:
        InvalidSlotDefinition: if the code is empty or unknown
    """
    if not isinstance(code, str) or not code.strip():
        raise InvalidSlotDefinition(code, "empty slot code")

    normalized = code.strip().upper()

    if normalized in BENCH_CODES:
        return Slot(code=normalized, kind=SlotKind.BENCH)

    if normalized in FLEX_CODES:
        kind, accepted = FLEX_CODES[normalized]
        return Slot(code=normalized, kind=kind, accepted_positions=accepted)

    position = POSITION_ALIASES.get(normalized)
    if position is None:
        try:
            position = Position(normalized)
        except ValueError:
            raise InvalidSlotDefinition(code) from None

    return Slot(code=normalized, kind=SlotKind.FIXED, accepted_positions=frozenset({position}))


def parse_slots(codes: Iterable[str]) -> List[Slot]:
    """Parse an ordered list of roster-position codes, keeping order."""
    slots = [parse_slot(code) for code in codes]
    starters = sum(1 for slot in slots if not slot.is_bench)
    logger.debug(f"Parsed {len(slots)} roster positions ({starters} starting slots)")
    return slots


def validate_slot(slot: Slot) -> None:
    """Check that a slot's accepted positions are consistent with its kind.

    Raises:
        InvalidSlotDefinition: if the slot cannot be interpreted
    """
    if not isinstance(slot, Slot):
        raise InvalidSlotDefinition(slot, "not a Slot")

    if not isinstance(slot.kind, SlotKind):
        raise InvalidSlotDefinition(slot.code, f"unrecognized slot kind {slot.kind!r}")

    accepted = slot.accepted_positions
    if slot.kind == SlotKind.BENCH:
        return
    if slot.kind == SlotKind.FIXED and len(accepted) != 1:
        raise InvalidSlotDefinition(
            slot.code, f"fixed slot must accept exactly one position, got {len(accepted)}"
        )
    if not accepted:
        raise InvalidSlotDefinition(slot.code, f"{slot.kind.value} slot accepts no positions")
