# pvp_arena/matchmaking.py
import threading
from typing import List, Optional, Tuple

from .engine.models import WaitingEntry


class MatchmakingQueue:
    """
    Arrival-ordered waiting list. Pairing is strict FIFO; trophies play no part.
    """

    def __init__(self):
        self._entries: List[WaitingEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def enqueue(self, entry: WaitingEntry) -> int:
        """Adds entry at the back, replacing any entry for the same player. Returns 1-based position."""
        with self._lock:
            self._entries = [
                e for e in self._entries
                if e.player_id != entry.player_id and e.sid != entry.sid
            ]
            self._entries.append(entry)
            return len(self._entries)

    def withdraw(self, sid: str) -> Optional[WaitingEntry]:
        with self._lock:
            for i, e in enumerate(self._entries):
                if e.sid == sid:
                    return self._entries.pop(i)
            return None

    def position_of(self, sid: str) -> Optional[int]:
        with self._lock:
            for i, e in enumerate(self._entries):
                if e.sid == sid:
                    return i + 1
            return None

    def try_pair_all(self) -> List[Tuple[WaitingEntry, WaitingEntry]]:
        pairs = []
        with self._lock:
            while len(self._entries) >= 2:
                first = self._entries.pop(0)
                second = self._entries.pop(0)
                pairs.append((first, second))
        return pairs
