"""Availability policy - deterministic rules mapping Sleeper status fields to PlayerStatus."""

from typing import Dict, Iterable, Optional
import logging

from .lineup import PlayerStatus

logger = logging.getLogger(__name__)

# Roster statuses that mean a long-term absence
RESERVE_STATUSES = {
    'IR', 'INJURED RESERVE', 'INJURED_RESERVE',
    'PUP', 'PHYSICALLY UNABLE TO PERFORM',
    'NFI', 'NON FOOTBALL INJURY',
    'SUSPENDED', 'SUS',
}

INACTIVE_STATUSES = {'INACTIVE', 'PRACTICE SQUAD', 'PRACTICE_SQUAD', 'FREE AGENT', 'RETIRED'}

# Injury designations that rule a player out of this week's game
OUT_INJURY_STATUSES = {'OUT', 'DOUBTFUL', 'IR', 'PUP', 'SUS', 'COV', 'NA'}


def status_from_fields(status: Optional[str],
                       injury_status: Optional[str],
                       injury_filter: bool = True) -> PlayerStatus:
    """Determine a player's activity status from Sleeper's status fields.

    Args:
        status: Roster status (Active, Inactive, Injured Reserve, ...)
        injury_status: Injury designation (Out, Doubtful, Questionable, ...)
        injury_filter: Apply the injury designation. When False only the
            roster status is considered.

    Returns:
        PlayerStatus; missing or unknown values count as ACTIVE
    """
    status_upper = (status or "").strip().upper()
    injury_status_upper = (injury_status or "").strip().upper()

    if status_upper in RESERVE_STATUSES:
        return PlayerStatus.INJURED_RESERVE
    if status_upper in INACTIVE_STATUSES:
        return PlayerStatus.INACTIVE

    if injury_filter and injury_status_upper in OUT_INJURY_STATUSES:
        return PlayerStatus.OUT

    # Questionable, Probable, Active and missing values all pass
    return PlayerStatus.ACTIVE


def get_status_summary(statuses: Iterable[PlayerStatus]) -> Dict[str, int]:
    """Count players per activity status.

    Returns:
        Dictionary keyed by status value plus ``total``
    """
    summary = {status.value: 0 for status in PlayerStatus}
    summary['total'] = 0

    for status in statuses:
        summary[PlayerStatus(status).value] += 1
        summary['total'] += 1

    return summary


def log_status_summary(summary: Dict[str, int], source: str = "unknown") -> None:
    """Log an availability summary as a single line."""
    logger.info(
        f"Availability: active={summary['active']}, "
        f"out={summary['out']}, "
        f"injured_reserve={summary['injured_reserve']}, "
        f"inactive={summary['inactive']}, "
        f"source={source}"
    )
