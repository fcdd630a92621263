# pvp_arena/state.py
import logging
import secrets
import threading
import uuid
from typing import Any, Callable, Dict, Optional

from .engine.models import PlayerSummary, WaitingEntry
from .engine.session import MatchSession
from .matchmaking import MatchmakingQueue
from .profiles import ProfileStore

logger = logging.getLogger(__name__)


def new_seed() -> int:
    return secrets.randbits(32)


class SessionRegistry:
    """
    Owns the waiting queue and every active match, and routes connection
    events to them. The registry lock covers lookups and queue/pairing only;
    turn resolution runs under the session's own lock.
    """

    def __init__(self, publisher, profiles: Optional[ProfileStore] = None, seed_source: Callable[[], int] = new_seed):
        self.publisher = publisher
        self.profiles = profiles
        self.seed_source = seed_source
        self.queue = MatchmakingQueue()
        self.matches: Dict[str, MatchSession] = {}
        self.sid_to_match: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get_match_by_sid(self, sid: str) -> Optional[MatchSession]:
        with self._lock:
            match_id = self.sid_to_match.get(sid)
            if not match_id:
                return None
            return self.matches.get(match_id)

    def resolve_player(self, payload: Dict[str, Any]) -> Optional[PlayerSummary]:
        player_id = payload.get("playerId")
        if player_id is None or str(player_id).strip() == "":
            return None
        player_id = str(player_id)
        username = payload.get("username")
        trophies = payload.get("trophies")

        if (username is None or trophies is None) and self.profiles is not None:
            stored = self.profiles.get_player_summary(player_id)
            if stored is not None:
                username = stored.username if username is None else username
                trophies = stored.trophies if trophies is None else trophies

        try:
            trophies = int(trophies or 0)
        except (TypeError, ValueError):
            trophies = 0
        return PlayerSummary(player_id=player_id, username=str(username or player_id), trophies=trophies)

    def join_queue(self, sid: str, payload: Any) -> Optional[int]:
        if not isinstance(payload, dict):
            payload = {}
        player = self.resolve_player(payload)
        if player is None:
            self.publisher.action_error(sid, "playerId is required.")
            return None

        with self._lock:
            if sid in self.sid_to_match:
                self.publisher.action_error(sid, "Already in a match.")
                return None
            position = self.queue.enqueue(WaitingEntry(sid=sid, player=player))
            logger.info("%s queued at position %d", player.username, position)
            self.publisher.queued(sid, position)

            for first, second in self.queue.try_pair_all():
                self._start_match(first, second)
        return position

    def _start_match(self, first: WaitingEntry, second: WaitingEntry) -> MatchSession:
        # caller holds self._lock
        match = MatchSession(
            match_id=f"pvp-{uuid.uuid4().hex}",
            first=first,
            second=second,
            publisher=self.publisher,
            seed=self.seed_source(),
            on_finished=self._drop_finished,
        )
        self.matches[match.match_id] = match
        self.sid_to_match[first.sid] = match.match_id
        self.sid_to_match[second.sid] = match.match_id
        logger.info("match %s started: %s vs %s", match.match_id, first.player.username, second.player.username)
        self.publisher.match_found(match)
        return match

    def leave_queue(self, sid: str) -> None:
        with self._lock:
            entry = self.queue.withdraw(sid)
        if entry:
            logger.info("%s left the queue", entry.player.username)

    def submit_action(self, sid: str, payload: Any) -> None:
        if isinstance(payload, dict):
            action = payload.get("action")
            match_id = payload.get("matchId")
        else:
            action, match_id = payload, None
        action = str(action or "").strip().lower()

        match = self.get_match_by_sid(sid)
        if match is None or (match_id and match_id != match.match_id):
            logger.debug("dropping stale action from %s for match %s", sid, match_id)
            return

        match.submit_action(sid, action)

    def disconnect(self, sid: str) -> None:
        with self._lock:
            self.queue.withdraw(sid)
            match_id = self.sid_to_match.get(sid)
            match = self.matches.get(match_id) if match_id else None
        if match is None:
            return
        opponent = match.opponent_of(sid)
        match.forfeit(opponent.sid if opponent else None)

    def _drop_finished(self, match: MatchSession) -> None:
        # called by the session before it announces the end, without its lock held
        self.cleanup_match(match.match_id)

    def cleanup_match(self, match_id: str) -> None:
        with self._lock:
            match = self.matches.pop(match_id, None)
            if not match:
                return
            for sid in match.sids:
                if self.sid_to_match.get(sid) == match_id:
                    self.sid_to_match.pop(sid, None)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {"queued": len(self.queue), "activeMatches": len(self.matches)}
