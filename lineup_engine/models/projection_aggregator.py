"""Projection aggregator: one canonical projected-points value per player and scope."""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict

from ..config.scoring import (
    POINTS_KEYS,
    RAW_STAT_KEYS,
    ScoringSystem,
    ScoringType,
    as_number,
)

logger = logging.getLogger(__name__)

# Week key used for season-long projections
SEASON_LONG_WEEK = 0

GROUP_KEYS = ['player_id', 'season', 'week']
POINT_COLUMNS = [POINTS_KEYS[s] for s in (ScoringType.STANDARD, ScoringType.HALF_PPR, ScoringType.PPR)]


class ProjectionScope(BaseModel):
    """Which projection a value refers to: season, week (None = season-long), scoring format."""

    season: int
    week: Optional[int] = None
    scoring: ScoringType = ScoringType.PPR

    model_config = ConfigDict(frozen=True)

    @property
    def week_key(self) -> int:
        return SEASON_LONG_WEEK if self.week is None else self.week

    @property
    def points_key(self) -> str:
        return self.scoring.points_key


Records = Union[Iterable[Mapping[str, Any]], Mapping[str, Mapping[str, Any]]]


class ProjectionAggregator:
    """Collects projection records and exposes one value per player and scope.

    Records follow Sleeper's projection payloads: ``{"player_id": ...,
    "stats": {"pts_ppr": ..., "pts_half_ppr": ..., "pts_std": ..., ...}}``.
    Each scoring format is kept in its own column and never mixed with the
    others. Values are stored at full precision.
    """

    def __init__(self):
        self._rows: List[Dict[str, Any]] = []
        self._aggregated: Optional[pd.DataFrame] = None
        self._scoring_systems = {
            scoring: ScoringSystem.get_scoring_system(scoring) for scoring in ScoringType
        }

    def __len__(self) -> int:
        return len(self._rows)

    def ingest(self,
               records: Records,
               season: int,
               week: Optional[int] = None,
               source: str = "unknown") -> int:
        """Add projection records.

        Args:
            records: List of records with ``player_id`` and ``stats``, or a
                mapping of player id to a record or bare stat line
            season: Season for records that do not carry their own
            week: Week for records that do not carry their own (None = season-long)
            source: Label for logging

        Returns:
            Number of records accepted
        """
        if isinstance(records, Mapping):
            items = [
                {**value, 'player_id': key} if isinstance(value, Mapping) and 'stats' in value
                else {'player_id': key, 'stats': value}
                for key, value in records.items()
            ]
        else:
            items = list(records or [])

        accepted = 0
        skipped = 0
        for record in items:
            row = self._row_from_record(record, season, week)
            if row is None:
                skipped += 1
                continue
            self._rows.append(row)
            accepted += 1

        self._aggregated = None

        if skipped:
            logger.warning(f"Skipped {skipped} projection records without a player id from {source}")
        logger.info(
            f"Ingested {accepted} projection records for season {season}, "
            f"week {week if week is not None else 'season-long'} from {source}"
        )
        return accepted

    def _row_from_record(self,
                         record: Any,
                         season: int,
                         week: Optional[int]) -> Optional[Dict[str, Any]]:
        if not isinstance(record, Mapping):
            return None

        player_id = record.get('player_id')
        if player_id is None or str(player_id).strip() == "":
            return None

        record_season = as_number(record.get('season'))
        record_week = as_number(record.get('week'))

        row: Dict[str, Any] = {
            'player_id': str(player_id),
            'season': int(record_season) if record_season is not None else int(season),
            'week': int(record_week) if record_week is not None else (
                SEASON_LONG_WEEK if week is None else int(week)
            ),
        }

        stats = record.get('stats')
        for scoring in ScoringType:
            row[scoring.points_key] = self._points_from_stats(stats, scoring)

        return row

    def _points_from_stats(self, stats: Any, scoring: ScoringType) -> float:
        """Precomputed points for one format, or computed from the stat line, or NaN."""
        if not isinstance(stats, Mapping):
            return np.nan

        value = as_number(stats.get(scoring.points_key))
        if value is not None:
            return value

        if RAW_STAT_KEYS.intersection(stats.keys()):
            return self._scoring_systems[scoring].calculate_fantasy_points(stats)

        return np.nan

    @property
    def aggregated(self) -> pd.DataFrame:
        """One row per (player_id, season, week) with a column per scoring format.

        Several records for the same key are averaged; missing values become
        0.0 and negative values are clamped to 0.0.
        """
        if self._aggregated is None:
            if not self._rows:
                self._aggregated = pd.DataFrame(columns=GROUP_KEYS + POINT_COLUMNS)
            else:
                df = pd.DataFrame(self._rows)
                df[POINT_COLUMNS] = df[POINT_COLUMNS].apply(pd.to_numeric, errors='coerce')
                grouped = df.groupby(GROUP_KEYS, sort=False)[POINT_COLUMNS].mean().reset_index()
                grouped[POINT_COLUMNS] = grouped[POINT_COLUMNS].fillna(0.0).clip(lower=0.0)
                self._aggregated = grouped
        return self._aggregated

    def _scope_rows(self, scope: ProjectionScope) -> pd.DataFrame:
        df = self.aggregated
        if df.empty:
            return df
        mask = (df['season'] == scope.season) & (df['week'] == scope.week_key)
        return df[mask]

    def points(self, player_id: str, scope: ProjectionScope) -> float:
        """Projected points for one player in a scope; 0.0 when unknown."""
        rows = self._scope_rows(scope)
        if rows.empty:
            return 0.0
        match = rows.loc[rows['player_id'] == str(player_id), scope.points_key]
        if match.empty:
            return 0.0
        return float(match.iloc[0])

    def points_by_player(self, scope: ProjectionScope) -> Dict[str, float]:
        """Projected points for every player that has a record in the scope."""
        rows = self._scope_rows(scope)
        if rows.empty:
            return {}
        return {
            player_id: float(points)
            for player_id, points in zip(rows['player_id'], rows[scope.points_key])
        }

    def to_frame(self,
                 scope: Optional[ProjectionScope] = None,
                 rounded: bool = False) -> pd.DataFrame:
        """Aggregated projections with all three scoring formats side by side.

        Args:
            scope: Restrict to the scope's season and week. The scope's
                scoring format decides the sort column.
            rounded: Round point columns to two decimals for display

        Returns:
            DataFrame sorted by projected points, best first
        """
        df = self.aggregated if scope is None else self._scope_rows(scope)
        df = df.copy()

        sort_key = scope.points_key if scope is not None else POINTS_KEYS[ScoringType.PPR]
        if not df.empty:
            df = df.sort_values(sort_key, ascending=False, kind='mergesort')
        if rounded:
            df[POINT_COLUMNS] = df[POINT_COLUMNS].round(2)

        return df.reset_index(drop=True)
