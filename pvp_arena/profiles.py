# pvp_arena/profiles.py
"""Boundary to the player-profile service that owns trophies and match history."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Protocol

from .engine.models import MatchRecord, PlayerSummary


class ProfileStoreError(Exception):
    pass


class ProfileStore(Protocol):
    def get_player_summary(self, player_id: str) -> Optional[PlayerSummary]: ...

    def apply_trophy_delta(self, player_id: str, delta: int) -> int: ...

    def record_match(self, record: MatchRecord) -> None: ...

    def match_history(self, player_id: str, limit: int = 10) -> List[MatchRecord]: ...


class InMemoryProfileStore:
    """Process-local store for development and tests. Nothing survives a restart."""

    def __init__(self, players: Optional[Dict[str, PlayerSummary]] = None):
        self._players: Dict[str, PlayerSummary] = dict(players or {})
        self._matches: List[MatchRecord] = []
        self._lock = threading.Lock()

    def add_player(self, player_id: str, username: str, trophies: int = 0) -> PlayerSummary:
        summary = PlayerSummary(player_id=player_id, username=username, trophies=trophies)
        with self._lock:
            self._players[player_id] = summary
        return summary

    def get_player_summary(self, player_id: str) -> Optional[PlayerSummary]:
        with self._lock:
            return self._players.get(player_id)

    def apply_trophy_delta(self, player_id: str, delta: int) -> int:
        with self._lock:
            current = self._players.get(player_id)
            if current is None:
                raise ProfileStoreError(f"unknown player {player_id!r}")
            trophies = max(0, current.trophies + delta)
            self._players[player_id] = PlayerSummary(current.player_id, current.username, trophies)
            return trophies

    def record_match(self, record: MatchRecord) -> None:
        with self._lock:
            self._matches.append(record)

    def match_history(self, player_id: str, limit: int = 10) -> List[MatchRecord]:
        with self._lock:
            mine = [m for m in self._matches if player_id in m.player_ids]
        return list(reversed(mine))[:max(limit, 0)]
