# pvp_arena/publisher.py
import logging
from typing import Any, Dict, Optional

from .content.balance import DEFAULTS
from .engine.models import MatchRecord, TurnOutcome
from .profiles import ProfileStore

logger = logging.getLogger(__name__)


def turn_result_for(outcome: TurnOutcome, viewer_id: str) -> Dict[str, Any]:
    """
    Same numbers for both sides; only yourId/opponentId differ per viewer.
    """
    payload = outcome.to_payload()
    opponent_id = next((pid for pid in outcome.hp if pid != viewer_id), None)
    payload["yourId"] = viewer_id
    payload["opponentId"] = opponent_id
    return payload


class ResultPublisher:
    def __init__(self, socketio, profiles: Optional[ProfileStore] = None, run_async: bool = True):
        self.socketio = socketio
        self.profiles = profiles
        self.run_async = run_async

    def _send(self, event: str, sid: str, data=None) -> None:
        if data is None:
            self.socketio.emit(event, to=sid)
        else:
            self.socketio.emit(event, data, to=sid)

    def queued(self, sid: str, position: int) -> None:
        self._send("queued", sid, {"position": position})

    def match_found(self, session) -> None:
        for me in session.combatants:
            opponent = session.opponent_of(me.sid)
            self._send("match-found", me.sid, {
                "matchId": session.match_id,
                "yourId": me.player_id,
                "opponent": opponent.player.to_public(),
                "startHp": DEFAULTS["hp"],
            })

    def opponent_ready(self, sid: str) -> None:
        self._send("opponent-ready", sid)

    def action_error(self, sid: str, error: str) -> None:
        self._send("action-error", sid, {"error": error})

    def turn_result(self, session, outcome: TurnOutcome) -> None:
        for c in session.combatants:
            self._send("turn-result", c.sid, turn_result_for(outcome, c.player_id))

    def battle_end(self, session, record: MatchRecord) -> None:
        for c in session.combatants:
            self._send("battle-end", c.sid, {
                "winner": record.winner_id,
                "won": c.player_id == record.winner_id,
                "trophyChange": record.trophy_changes.get(c.player_id, 0),
            })
        self.dispatch_record(record)

    def opponent_disconnect(self, sid: str) -> None:
        self._send("opponent-disconnect", sid)

    def dispatch_record(self, record: MatchRecord) -> None:
        if self.profiles is None:
            return
        if self.run_async:
            self.socketio.start_background_task(self.apply_record, record)
        else:
            self.apply_record(record)

    def apply_record(self, record: MatchRecord) -> None:
        # failures are left for reconciliation; the match is already over
        for player_id, delta in record.trophy_changes.items():
            try:
                self.profiles.apply_trophy_delta(player_id, delta)
            except Exception:
                logger.exception("trophy delta %+d for %s in match %s not applied",
                                 delta, player_id, record.match_id)
        try:
            self.profiles.record_match(record)
        except Exception:
            logger.exception("match %s record not stored", record.match_id)
