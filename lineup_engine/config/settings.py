"""League and engine configuration passed explicitly into the calling context."""

import os
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field

from ..errors import UnknownLeague
from .scoring import ScoringType


class LeagueConfig(BaseModel):
    """Identifiers for one league the user plays in."""

    id: str
    team_name: str = ""


def _default_leagues() -> Dict[str, LeagueConfig]:
    return {
        "ROAD_TO_GLORY": LeagueConfig(id="your_league_id_1", team_name="Your Team Name 1"),
        "DYNASTY": LeagueConfig(id="your_league_id_2", team_name="Your Team Name 2"),
    }


class Settings(BaseModel):
    """Configuration for a lineup optimization run.

    A Settings value is built once by the caller and handed to
    LineupOptimizer; nothing here is read from module-level state.
    """

    username: str = "your_sleeper_username"
    leagues: Dict[str, LeagueConfig] = Field(default_factory=_default_leagues)
    default_league: str = "ROAD_TO_GLORY"
    scoring: ScoringType = ScoringType.PPR
    injury_filter: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Settings with defaults for anything unset
        """
        env = os.environ if environ is None else environ
        defaults = _default_leagues()

        leagues = {
            "ROAD_TO_GLORY": LeagueConfig(
                id=env.get("ROAD_TO_GLORY_ID", defaults["ROAD_TO_GLORY"].id),
                team_name=env.get("ROAD_TO_GLORY_TEAM", defaults["ROAD_TO_GLORY"].team_name),
            ),
            "DYNASTY": LeagueConfig(
                id=env.get("DYNASTY_LEAGUE_ID", defaults["DYNASTY"].id),
                team_name=env.get("DYNASTY_TEAM", defaults["DYNASTY"].team_name),
            ),
        }

        injury_filter = env.get("LINEUP_INJURY_FILTER", "true").strip().lower()

        return cls(
            username=env.get("SLEEPER_USERNAME", cls.model_fields["username"].default),
            leagues=leagues,
            default_league=env.get("DEFAULT_LEAGUE", cls.model_fields["default_league"].default),
            scoring=ScoringType(env.get("LINEUP_SCORING", ScoringType.PPR.value)),
            injury_filter=injury_filter not in ("0", "false", "no", "off"),
        )

    def get_league(self, name: Optional[str] = None) -> LeagueConfig:
        """Return the league config for name, or the default league."""
        key = name or self.default_league
        try:
            return self.leagues[key]
        except KeyError:
            raise UnknownLeague(f"League configuration not found for: {key}") from None
