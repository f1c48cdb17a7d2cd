"""NFL season and week helpers."""

from datetime import date, datetime, timedelta
from typing import Optional, Union

REGULAR_SEASON_WEEKS = 18


def current_season(now: Optional[Union[date, datetime]] = None) -> int:
    """Determine the current NFL season based on date."""
    now = now or datetime.now()
    # NFL season typically starts in September
    if now.month >= 9:
        return now.year
    return now.year - 1


def season_kickoff(season: int) -> date:
    """Kickoff Thursday: three days after Labor Day (first Monday of September)."""
    first = date(season, 9, 1)
    labor_day = first + timedelta(days=(0 - first.weekday()) % 7)
    return labor_day + timedelta(days=3)


def current_week(now: Optional[Union[date, datetime]] = None) -> int:
    """Regular-season week for a date, clamped to 1..18."""
    now = now or datetime.now()
    today = now.date() if isinstance(now, datetime) else now

    kickoff = season_kickoff(current_season(today))
    weeks_since_start = (today - kickoff).days // 7
    return max(1, min(REGULAR_SEASON_WEEKS, weeks_since_start + 1))
