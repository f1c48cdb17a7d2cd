"""Lineup optimizer that wires settings, snapshot data, projections and the assignment engine."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from ..config.scoring import ScoringType
from ..config.settings import Settings
from ..data.roster_builder import build_player_pool, find_roster
from ..data.sleeper_snapshot import SleeperSnapshot
from ..utils.season import current_season, current_week
from .assignment import assign
from .lineup import AssignmentResult, Change, LineupEntry, Player
from .projection_aggregator import ProjectionAggregator, ProjectionScope
from .slots import parse_slots

logger = logging.getLogger(__name__)

# Current and optimal totals closer than this count as the same lineup
OPTIMAL_TOLERANCE = 0.1


class LineupReport(BaseModel):
    """Current starters compared with the optimal lineup for one week."""

    league: str
    season: int
    week: int
    scoring: ScoringType
    roster_positions: List[str]
    current_lineup: List[LineupEntry]
    current_total: float
    optimal: AssignmentResult

    model_config = ConfigDict(frozen=True)

    @property
    def optimal_total(self) -> float:
        return self.optimal.total_points

    @property
    def projected_improvement(self) -> float:
        return self.optimal_total - self.current_total

    @property
    def is_optimal(self) -> bool:
        return abs(self.projected_improvement) < OPTIMAL_TOLERANCE

    @property
    def changes(self) -> List[Change]:
        return list(self.optimal.changes or [])


class LineupOptimizer:
    """Computes the optimal lineup for the configured user's roster."""

    def __init__(self,
                 settings: Optional[Settings] = None,
                 scoring: Optional[Union[str, ScoringType]] = None,
                 injury_filter: Optional[bool] = None):
        """Initialize the optimizer.

        Args:
            settings: League and user configuration. Defaults to Settings().
            scoring: Override the settings' scoring format ('standard', 'ppr', 'half_ppr')
            injury_filter: Override the settings' injury filter
        """
        self.settings = settings or Settings()
        self.scoring = ScoringType(scoring) if scoring is not None else self.settings.scoring
        self.injury_filter = (
            self.settings.injury_filter if injury_filter is None else injury_filter
        )

        logger.info(
            f"LineupOptimizer initialized with {self.scoring.value} scoring, "
            f"injury_filter={self.injury_filter}"
        )

    def optimize(self,
                 snapshot: SleeperSnapshot,
                 league: Optional[str] = None,
                 week: Optional[int] = None,
                 season: Optional[int] = None) -> LineupReport:
        """Optimize the user's lineup from a Sleeper snapshot.

        Args:
            snapshot: Snapshot reader holding league, rosters, users, players, projections
            league: League name from settings. Defaults to the default league.
            week: Target week. Defaults to the current week.
            season: Target season. Defaults to the current season.

        Returns:
            LineupReport for the user's roster
        """
        league_name = league or self.settings.default_league
        league_config = self.settings.get_league(league_name)
        week = week or current_week()
        season = season or current_season()

        logger.info(f"Optimizing lineup for {league_name} ({league_config.id}), week {week}, {season}")

        league_data = snapshot.load_league()
        roster = find_roster(
            snapshot.load_rosters(),
            snapshot.load_users(),
            self.settings.username,
            league_config.team_name,
        )

        aggregator = ProjectionAggregator()
        aggregator.ingest(snapshot.load_projections(week), season=season, week=week, source="snapshot")

        return self.optimize_roster(
            roster_positions=league_data.get('roster_positions') or [],
            player_ids=roster.get('players') or [],
            starters=roster.get('starters') or [],
            players_data=snapshot.load_players(),
            aggregator=aggregator,
            scope=ProjectionScope(season=season, week=week, scoring=self.scoring),
            league=league_name,
        )

    def optimize_roster(self,
                        roster_positions: Sequence[str],
                        player_ids: Sequence[str],
                        starters: Sequence[Optional[str]],
                        players_data: Mapping[str, Mapping[str, Any]],
                        aggregator: ProjectionAggregator,
                        scope: ProjectionScope,
                        league: str = "") -> LineupReport:
        """Optimize a roster from already-parsed data.

        Args:
            roster_positions: League roster-position codes in declared order
            player_ids: Rostered player ids
            starters: Current starters, aligned with the non-bench positions
            players_data: Sleeper player records keyed by id
            aggregator: Projections to read from
            scope: Season, week and scoring format to read
            league: League label for the report

        Returns:
            LineupReport
        """
        slots = parse_slots(roster_positions)
        projections = aggregator.points_by_player(scope)

        pool = build_player_pool(
            player_ids, players_data, projections, injury_filter=self.injury_filter
        )
        result = assign(pool, slots, actual=starters)

        current_lineup = self._current_lineup(result, starters, pool)
        current_total = sum(
            projections.get(str(player_id), 0.0) for player_id in starters if player_id
        )

        report = LineupReport(
            league=league,
            season=scope.season,
            week=scope.week_key,
            scoring=scope.scoring,
            roster_positions=list(roster_positions),
            current_lineup=current_lineup,
            current_total=current_total,
            optimal=result,
        )

        logger.info(
            f"Current {report.current_total:.2f} vs optimal {report.optimal_total:.2f} "
            f"({len(report.changes)} suggested changes)"
        )
        return report

    @staticmethod
    def _current_lineup(result: AssignmentResult,
                        starters: Sequence[Optional[str]],
                        pool: Sequence[Player]) -> List[LineupEntry]:
        by_id: Dict[str, Player] = {p.player_id: p for p in pool}
        entries = []
        for entry in result.lineup.entries:
            player_id = starters[entry.index] if entry.index < len(starters) else None
            player = by_id.get(str(player_id)) if player_id else None
            entries.append(LineupEntry(index=entry.index, slot=entry.slot, player=player))
        return entries
