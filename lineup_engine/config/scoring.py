"""Fantasy football scoring formats and stat-line point calculation."""

from enum import Enum
from typing import Any, Dict, Mapping, Optional
import math

from pydantic import BaseModel


class ScoringType(str, Enum):
    """Supported fantasy scoring systems."""
    STANDARD = "standard"
    PPR = "ppr"
    HALF_PPR = "half_ppr"

    @property
    def points_key(self) -> str:
        """Sleeper projection stat key holding precomputed points for this format."""
        return POINTS_KEYS[self]


POINTS_KEYS: Dict[ScoringType, str] = {
    ScoringType.STANDARD: "pts_std",
    ScoringType.HALF_PPR: "pts_half_ppr",
    ScoringType.PPR: "pts_ppr",
}


class ScoringSystem(BaseModel):
    """Point weights applied to a Sleeper stat line."""

    # Passing
    passing_yards_per_point: float = 25.0  # 1 point per 25 yards
    passing_td: float = 4.0
    passing_interception: float = -2.0
    passing_2pt: float = 2.0

    # Rushing
    rushing_yards_per_point: float = 10.0
    rushing_td: float = 6.0
    rushing_2pt: float = 2.0

    # Receiving
    receiving_yards_per_point: float = 10.0
    receiving_td: float = 6.0
    receiving_2pt: float = 2.0
    reception: float = 0.0  # PPR bonus

    # Kicking
    field_goal: float = 3.0
    extra_point: float = 1.0

    fumble_lost: float = -2.0

    @classmethod
    def get_scoring_system(cls, scoring_type: ScoringType) -> "ScoringSystem":
        """Get predefined scoring system."""
        scoring_type = ScoringType(scoring_type)
        if scoring_type == ScoringType.STANDARD:
            return cls()
        elif scoring_type == ScoringType.PPR:
            return cls(reception=1.0)
        return cls(reception=0.5)

    def calculate_fantasy_points(self, stats: Mapping[str, Any]) -> float:
        """Calculate fantasy points for a Sleeper stat line.

        Unknown or non-numeric stat values count as zero. The result is not
        rounded; rounding belongs to presentation.

        Args:
            stats: Sleeper stat keys (``pass_yd``, ``rush_td``, ``rec`` ...)

        Returns:
            Fantasy points at full precision
        """
        def stat(key: str) -> float:
            return as_number(stats.get(key)) or 0.0

        points = 0.0

        points += stat("pass_yd") / self.passing_yards_per_point
        points += stat("pass_td") * self.passing_td
        points += stat("pass_int") * self.passing_interception
        points += stat("pass_2pt") * self.passing_2pt

        points += stat("rush_yd") / self.rushing_yards_per_point
        points += stat("rush_td") * self.rushing_td
        points += stat("rush_2pt") * self.rushing_2pt

        points += stat("rec_yd") / self.receiving_yards_per_point
        points += stat("rec_td") * self.receiving_td
        points += stat("rec_2pt") * self.receiving_2pt
        points += stat("rec") * self.reception

        points += stat("fgm") * self.field_goal
        points += stat("xpm") * self.extra_point

        points += stat("fum_lost") * self.fumble_lost

        return points


# Stat keys that make a record usable for the fallback calculation.
RAW_STAT_KEYS = frozenset({
    "pass_yd", "pass_td", "pass_int", "rush_yd", "rush_td",
    "rec", "rec_yd", "rec_td", "fgm", "xpm", "fum_lost",
})


def as_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None when it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
