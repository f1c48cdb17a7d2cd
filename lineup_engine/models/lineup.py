"""Core data model: players, slots, lineups and lineup changes."""

from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Position(str, Enum):
    """Fantasy positions a player can be eligible for."""
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DEF = "DEF"
    DL = "DL"
    LB = "LB"
    DB = "DB"


class PlayerStatus(str, Enum):
    """Activity status; only ACTIVE players can be assigned to a slot."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    INJURED_RESERVE = "injured_reserve"
    OUT = "out"


class SlotKind(str, Enum):
    FIXED = "fixed"
    FLEX = "flex"
    SUPER_FLEX = "super_flex"
    BENCH = "bench"


def round_points(value: float, digits: int = 2) -> float:
    """Round points for display. Never use the result for comparisons."""
    return round(float(value), digits)


class Player(BaseModel):
    """A rostered player with a projection for one scope."""

    player_id: str = Field(..., min_length=1)
    position: Position
    eligible_positions: FrozenSet[Position] = frozenset()
    status: PlayerStatus = PlayerStatus.ACTIVE
    projected_points: float = 0.0
    name: str = ""
    team: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _include_primary_position(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("position"):
            eligible = set(data.get("eligible_positions") or ())
            eligible.add(data["position"])
            data = {**data, "eligible_positions": eligible}
        return data

    @property
    def is_active(self) -> bool:
        return self.status == PlayerStatus.ACTIVE


class Slot(BaseModel):
    """One lineup requirement from a league's ordered roster positions."""

    code: str
    kind: SlotKind
    accepted_positions: FrozenSet[Position] = frozenset()

    model_config = ConfigDict(frozen=True)

    @property
    def is_bench(self) -> bool:
        return self.kind == SlotKind.BENCH

    def accepts(self, player: Player) -> bool:
        """Return True if any of the player's eligible positions fits this slot."""
        return bool(self.accepted_positions & player.eligible_positions)


class LineupEntry(BaseModel):
    index: int
    slot: Slot
    player: Optional[Player] = None

    model_config = ConfigDict(frozen=True)

    @property
    def player_id(self) -> Optional[str]:
        return self.player.player_id if self.player is not None else None

    @property
    def points(self) -> float:
        return self.player.projected_points if self.player is not None else 0.0


class Lineup(BaseModel):
    """Starting lineup: one entry per non-bench slot, in declaration order."""

    entries: List[LineupEntry] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def total_points(self) -> float:
        return sum(entry.points for entry in self.entries)

    @property
    def player_ids(self) -> List[Optional[str]]:
        return [entry.player_id for entry in self.entries]

    @property
    def empty_slots(self) -> List[LineupEntry]:
        return [entry for entry in self.entries if entry.player is None]


class Change(BaseModel):
    """Suggested swap at one lineup index."""

    index: int
    slot: Slot
    current_player_id: Optional[str] = None
    current: Optional[Player] = None
    suggested: Player
    point_gain: float

    model_config = ConfigDict(frozen=True)


class AssignmentResult(BaseModel):
    """Output of one assign() call."""

    lineup: Lineup
    total_points: float
    changes: Optional[List[Change]] = None

    model_config = ConfigDict(frozen=True)

    def to_frame(self, rounded: bool = False) -> pd.DataFrame:
        """Tabular view of the lineup, one row per slot.

        Args:
            rounded: Round projected points to two decimals for display

        Returns:
            DataFrame with slot, player_id, name, position, team, projected_points
        """
        rows: List[Dict[str, Any]] = []
        for entry in self.lineup.entries:
            player = entry.player
            points = entry.points
            rows.append({
                "slot": entry.slot.code,
                "player_id": entry.player_id,
                "name": player.name if player else None,
                "position": player.position.value if player else None,
                "team": player.team if player else None,
                "projected_points": round_points(points) if rounded else points,
            })
        return pd.DataFrame(
            rows,
            columns=["slot", "player_id", "name", "position", "team", "projected_points"],
        )
