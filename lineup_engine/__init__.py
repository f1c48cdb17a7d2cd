"""Fantasy Football Lineup Engine

Greedy starting-lineup assignment over Sleeper rosters and projections.
"""

__version__ = "0.1.0"
__author__ = "Fantasy Football Analytics"

from .config.scoring import ScoringSystem, ScoringType
from .config.settings import LeagueConfig, Settings
from .models.assignment import assign, diff
from .models.lineup import (
    AssignmentResult,
    Change,
    Lineup,
    LineupEntry,
    Player,
    PlayerStatus,
    Position,
    Slot,
    SlotKind,
)
from .models.lineup_optimizer import LineupOptimizer, LineupReport
from .models.projection_aggregator import ProjectionAggregator, ProjectionScope

__all__ = [
    "assign",
    "diff",
    "AssignmentResult",
    "Change",
    "LeagueConfig",
    "Lineup",
    "LineupEntry",
    "LineupOptimizer",
    "LineupReport",
    "Player",
    "PlayerStatus",
    "Position",
    "ProjectionAggregator",
    "ProjectionScope",
    "ScoringSystem",
    "ScoringType",
    "Settings",
    "Slot",
    "SlotKind",
]
