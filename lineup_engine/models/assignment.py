"""Lineup assignment engine: greedy slot filling and lineup diffs.

Slots are filled in the order the league declares them and every pick is
committed immediately. This is not a global maximum-weight matching: a flex
slot declared before a fixed slot can take a player the fixed slot would
have used better. Leagues list fixed positions before flex positions, and
the order dependence is part of the observable behaviour.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from ..errors import DuplicatePlayer, InvalidProjection
from .lineup import (
    AssignmentResult,
    Change,
    Lineup,
    LineupEntry,
    Player,
    Position,
    Slot,
)
from .slots import parse_slot, validate_slot

logger = logging.getLogger(__name__)

# Sleeper marks an unfilled starter with "0"
EMPTY_PLAYER_IDS = frozenset({"", "0"})

# (projected points, input order, player) sorted best first
Candidate = Tuple[float, int, Player]


def _coerce_slots(slots: Iterable[Union[Slot, str]]) -> List[Slot]:
    coerced = []
    for slot in slots:
        if isinstance(slot, str):
            slot = parse_slot(slot)
        validate_slot(slot)
        coerced.append(slot)
    return coerced


def validate_players(players: Sequence[Player]) -> None:
    """Reject pools with duplicate ids or unusable projections.

    Raises:
        DuplicatePlayer: if an id appears twice
        InvalidProjection: if projected points are negative or not finite
    """
    seen: Set[str] = set()
    for player in players:
        if player.player_id in seen:
            raise DuplicatePlayer(player.player_id)
        seen.add(player.player_id)

        points = player.projected_points
        if not isinstance(points, (int, float)) or not math.isfinite(points) or points < 0:
            raise InvalidProjection(player.player_id, points)


def group_by_position(players: Sequence[Player]) -> Dict[Position, List[Candidate]]:
    """Partition players by eligible position, best projection first.

    Equal projections keep input order, so the earlier player wins ties.
    A player eligible at several positions appears in each group.
    """
    groups: Dict[Position, List[Candidate]] = {}
    for order, player in enumerate(players):
        for position in player.eligible_positions:
            groups.setdefault(position, []).append((player.projected_points, order, player))

    for candidates in groups.values():
        candidates.sort(key=lambda c: (-c[0], c[1]))

    return groups


def _best_available(
    groups: Dict[Position, List[Candidate]],
    slot: Slot,
    used: Set[str],
) -> Optional[Player]:
    best: Optional[Candidate] = None
    for position in slot.accepted_positions:
        for candidate in groups.get(position, ()):
            if candidate[2].player_id in used:
                continue
            # Groups are sorted, so the first unused candidate is the group's best
            if best is None or (-candidate[0], candidate[1]) < (-best[0], best[1]):
                best = candidate
            break
    return best[2] if best is not None else None


def assign(
    players: Sequence[Player],
    slots: Iterable[Union[Slot, str]],
    actual: Optional[Sequence[Optional[str]]] = None,
) -> AssignmentResult:
    """Fill the league's starting slots with the highest-projected players.

    Args:
        players: Player pool. Players that are not ACTIVE are ignored.
        slots: Ordered slots (or roster-position codes). Bench slots are skipped.
        actual: Optional current starters, index-aligned with the non-bench
            slots, to diff against the computed lineup

    Returns:
        AssignmentResult with the lineup, its total and, when ``actual`` is
        given, the per-index changes

    Raises:
        InvalidSlotDefinition: if a slot cannot be interpreted
        InvalidProjection: if a player's projected points are negative or not finite
        DuplicatePlayer: if a player id appears twice in the pool
    """
    players = list(players)
    slot_list = _coerce_slots(slots)
    validate_players(players)

    eligible = [p for p in players if p.is_active]
    if len(eligible) < len(players):
        logger.debug(f"Excluded {len(players) - len(eligible)} players that are not active")

    groups = group_by_position(eligible)
    used: Set[str] = set()
    entries: List[LineupEntry] = []

    for slot in slot_list:
        if slot.is_bench:
            continue

        player = _best_available(groups, slot, used)
        if player is not None:
            used.add(player.player_id)
        else:
            logger.debug(f"No eligible player left for slot {slot.code}")

        entries.append(LineupEntry(index=len(entries), slot=slot, player=player))

    lineup = Lineup(entries=entries)
    total = lineup.total_points

    changes = diff(actual, lineup, players) if actual is not None else None

    logger.info(
        f"Assigned {len(used)} of {len(entries)} starting slots "
        f"({len(lineup.empty_slots)} empty), total={total:.2f}"
    )
    return AssignmentResult(lineup=lineup, total_points=total, changes=changes)


def _is_empty(player_id: Optional[str]) -> bool:
    return player_id is None or str(player_id) in EMPTY_PLAYER_IDS


def diff(
    actual: Sequence[Optional[str]],
    optimal: Lineup,
    players: Iterable[Player] = (),
) -> List[Change]:
    """Compare current starters with a computed lineup, slot by slot.

    The comparison is index-aligned: ``actual[i]`` is compared with the
    player in ``optimal.entries[i]``. Where they differ and the optimal
    entry is filled, a Change is emitted whose gain is the suggested
    player's projection minus the current player's own projection.

    Args:
        actual: Current starter ids in slot order; "0", "" or None mark an
            empty slot
        optimal: Lineup produced by assign()
        players: Pool used to look up current players' projections. Current
            players missing from it count as zero points.

    Returns:
        List of changes in slot order
    """
    pool = {p.player_id: p for p in players}
    actual = list(actual)

    if len(actual) > len(optimal.entries):
        logger.warning(
            f"Current lineup has {len(actual)} starters but only "
            f"{len(optimal.entries)} starting slots; ignoring the extra starters"
        )

    changes: List[Change] = []
    for entry in optimal.entries:
        current_id = actual[entry.index] if entry.index < len(actual) else None
        if _is_empty(current_id):
            current_id = None

        suggested = entry.player
        if suggested is None or current_id == suggested.player_id:
            continue

        current = pool.get(current_id) if current_id is not None else None
        current_points = current.projected_points if current is not None else 0.0

        changes.append(Change(
            index=entry.index,
            slot=entry.slot,
            current_player_id=current_id,
            current=current,
            suggested=suggested,
            point_gain=suggested.projected_points - current_points,
        ))

    return changes
