"""Turn Sleeper roster and player records into the engine's Player pool."""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from ..errors import RosterNotFound
from ..models.availability import get_status_summary, log_status_summary, status_from_fields
from ..models.lineup import Player, Position

logger = logging.getLogger(__name__)

POSITION_ALIASES = {
    'DST': 'DEF',
    'D/ST': 'DEF',
}


def find_roster(rosters: Sequence[Mapping[str, Any]],
                users: Sequence[Mapping[str, Any]],
                username: str,
                team_name: str = "") -> Mapping[str, Any]:
    """Find the roster owned by the configured user.

    A roster matches when its owner's display name or username equals
    either the configured username or the league's team name.

    Raises:
        RosterNotFound: if no roster matches
    """
    wanted = {name for name in (username, team_name) if name}
    users_by_id = {user.get('user_id'): user for user in users or []}

    for roster in rosters or []:
        owner = users_by_id.get(roster.get('owner_id'))
        if owner is None:
            continue
        if owner.get('display_name') in wanted or owner.get('username') in wanted:
            return roster

    raise RosterNotFound(f"Could not find roster for user: {username}")


def _parse_position(value: Any) -> Optional[Position]:
    if not value:
        return None
    code = POSITION_ALIASES.get(str(value).upper(), str(value).upper())
    try:
        return Position(code)
    except ValueError:
        return None


def _player_name(record: Mapping[str, Any]) -> str:
    full_name = record.get('full_name')
    if full_name:
        return full_name
    parts = [record.get('first_name') or '', record.get('last_name') or '']
    return " ".join(part for part in parts if part)


def build_player(player_id: str,
                 record: Mapping[str, Any],
                 projected_points: float = 0.0,
                 injury_filter: bool = True) -> Optional[Player]:
    """Build a Player from a Sleeper player record.

    Args:
        player_id: Sleeper player id
        record: Sleeper player record (position, fantasy_positions, status, ...)
        projected_points: Aggregated projection for the requested scope
        injury_filter: Treat Out/Doubtful designations as unavailable

    Returns:
        Player, or None when the record has no fantasy position
    """
    position = _parse_position(record.get('position'))
    eligible = {
        pos for pos in (_parse_position(p) for p in record.get('fantasy_positions') or [])
        if pos is not None
    }

    if position is None:
        if not eligible:
            return None
        # Keep the first listed fantasy position as primary
        position = next(
            pos for pos in (_parse_position(p) for p in record['fantasy_positions']) if pos
        )

    return Player(
        player_id=str(player_id),
        position=position,
        eligible_positions=frozenset(eligible | {position}),
        status=status_from_fields(record.get('status'), record.get('injury_status'), injury_filter),
        projected_points=max(0.0, float(projected_points or 0.0)),
        name=_player_name(record),
        team=record.get('team'),
    )


def build_player_pool(player_ids: Sequence[str],
                      players_data: Mapping[str, Mapping[str, Any]],
                      projections: Mapping[str, float],
                      injury_filter: bool = True,
                      source: str = "snapshot") -> List[Player]:
    """Build the Player pool for a roster, in roster order.

    Players without a Sleeper record or without a fantasy position are
    skipped with a warning. Players without a projection get 0.0.
    """
    pool: List[Player] = []
    seen = set()
    for player_id in player_ids or []:
        player_id = str(player_id)
        if player_id in seen:
            continue
        seen.add(player_id)

        record = players_data.get(player_id)
        if record is None:
            logger.warning(f"No player record for {player_id}, skipping")
            continue

        player = build_player(player_id, record, projections.get(player_id, 0.0), injury_filter)
        if player is None:
            logger.warning(f"Player {player_id} has no fantasy position, skipping")
            continue
        pool.append(player)

    log_status_summary(get_status_summary(p.status for p in pool), source)
    return pool
