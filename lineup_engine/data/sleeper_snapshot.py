"""Offline reader for Sleeper API payloads saved as JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

LEAGUE_FILE = "league.json"
ROSTERS_FILE = "rosters.json"
USERS_FILE = "users.json"
PLAYERS_FILE = "players.json"
PROJECTIONS_FILE = "projections.json"


class SleeperSnapshot:
    """Reads league, roster, user, player and projection payloads from a directory.

    Each file holds either the raw API payload or a snapshot wrapper of the
    form ``{"timestamp": ..., "data": <payload>}``.
    """

    def __init__(self, snapshot_dir: str):
        """Initialize the reader.

        Args:
            snapshot_dir: Directory holding the JSON payloads
        """
        self.snapshot_dir = Path(snapshot_dir)

    def _load(self, filename: str, required: bool = True, default: Any = None) -> Any:
        path = self.snapshot_dir / filename
        if not path.exists():
            if required:
                raise FileNotFoundError(f"Snapshot file not found: {path}")
            logger.warning(f"Snapshot file not found: {path}, using empty data")
            return default

        with open(path, 'r') as f:
            payload = json.load(f)

        if isinstance(payload, dict) and set(payload.keys()) == {'timestamp', 'data'}:
            logger.debug(f"Loaded {filename} snapshot taken at {payload['timestamp']}")
            payload = payload['data']

        return payload

    def load_league(self) -> Dict[str, Any]:
        """League settings, including ``roster_positions``."""
        return self._load(LEAGUE_FILE)

    def load_rosters(self) -> List[Dict[str, Any]]:
        return self._load(ROSTERS_FILE)

    def load_users(self) -> List[Dict[str, Any]]:
        return self._load(USERS_FILE, required=False, default=[])

    def load_players(self) -> Dict[str, Dict[str, Any]]:
        """Player records keyed by Sleeper player id."""
        players = self._load(PLAYERS_FILE, required=False, default={})
        logger.info(f"Loaded {len(players)} player records from {self.snapshot_dir}")
        return players

    def load_projections(self, week: Optional[int] = None) -> Any:
        """Projection records for a week, falling back to projections.json.

        Args:
            week: Prefer ``projections_week_<week>.json`` when present

        Returns:
            Projection records, or an empty list when none are saved
        """
        if week is not None:
            weekly_file = f"projections_week_{week}.json"
            if (self.snapshot_dir / weekly_file).exists():
                return self._load(weekly_file)
        return self._load(PROJECTIONS_FILE, required=False, default=[])
