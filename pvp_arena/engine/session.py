# pvp_arena/engine/session.py
import logging
import random
import threading
import time
from typing import Callable, List, Optional, Tuple

from .models import Combatant, MatchRecord, TurnOutcome, WaitingEntry
from .dice import rng_for
from .resolver import resolve_turn
from .rules import trophy_changes
from ..content.actions import is_valid_action

logger = logging.getLogger(__name__)

WAITING_ACTIONS = "waiting_actions"
RESOLVING = "resolving"
FINISHED = "finished"


class MatchSession:
    """
    One battle between two connections. Every mutation happens under the
    session lock, so a turn resolves at most once no matter how the two
    submissions interleave.
    """

    def __init__(self, match_id: str, first: WaitingEntry, second: WaitingEntry, publisher,
                 seed: int = 0, rng_factory: Callable[[int, int], random.Random] = rng_for,
                 on_finished: Optional[Callable[["MatchSession"], None]] = None):
        self.match_id = match_id
        self.combatants: List[Combatant] = [
            Combatant(sid=first.sid, player=first.player),
            Combatant(sid=second.sid, player=second.player),
        ]
        self.publisher = publisher
        self.seed = seed                   # for deterministic damage rolls
        self.rng_factory = rng_factory
        self.on_finished = on_finished     # runs before any end-of-match event, outside the lock
        self.turn = 1
        self.status = WAITING_ACTIONS
        self.winner: Optional[str] = None
        self.started_at = time.time()
        self._lock = threading.Lock()

    @property
    def sids(self) -> List[str]:
        return [c.sid for c in self.combatants]

    def combatant_for(self, sid: str) -> Optional[Combatant]:
        for c in self.combatants:
            if c.sid == sid:
                return c
        return None

    def opponent_of(self, sid: str) -> Optional[Combatant]:
        if self.combatant_for(sid) is None:
            return None
        for c in self.combatants:
            if c.sid != sid:
                return c
        return None

    def submit_action(self, sid: str, action: str) -> Optional[TurnOutcome]:
        """
        Records one side's action for the current turn. Returns the outcome
        when this submission completed the turn, otherwise None.
        """
        with self._lock:
            if self.status != WAITING_ACTIONS:
                return None
            me = self.combatant_for(sid)
            if me is None or me.pending_action is not None:
                return None
            if not is_valid_action(action):
                self.publisher.action_error(sid, f"Unknown action '{action}'.")
                return None
            if action == "special" and me.special_cooldown > 0:
                self.publisher.action_error(sid, "Special is on cooldown!")
                return None

            me.pending_action = action
            logger.debug("match %s turn %d: %s chose %s", self.match_id, self.turn, me.player.username, action)

            opponent = self.opponent_of(sid)
            self.publisher.opponent_ready(opponent.sid)

            if not all(c.pending_action is not None for c in self.combatants):
                return None
            self.status = RESOLVING
            outcome, record = self._resolve()

        # only the call that finished the match gets a record
        if record is not None:
            self._release()
            self.publisher.battle_end(self, record)
        return outcome

    def _resolve(self) -> Tuple[TurnOutcome, Optional[MatchRecord]]:
        # caller holds self._lock
        first, second = self.combatants
        outcome = resolve_turn(self.turn, first, second, self.rng_factory(self.seed, self.turn))

        for c in self.combatants:
            c.hp = outcome.hp[c.player_id]
            c.special_cooldown = outcome.special_cooldown[c.player_id]

        self.publisher.turn_result(self, outcome)

        for c in self.combatants:
            c.pending_action = None

        if not outcome.winner:
            self.turn += 1
            self.status = WAITING_ACTIONS
            return outcome, None

        self.status = FINISHED
        self.winner = outcome.winner
        logger.info("match %s ended on turn %d, winner %s", self.match_id, self.turn, outcome.winner)
        return outcome, MatchRecord(
            match_id=self.match_id,
            player_ids=[first.player_id, second.player_id],
            usernames={c.player_id: c.player.username for c in self.combatants},
            winner_id=outcome.winner,
            trophy_changes=trophy_changes(outcome.winner, [first.player_id, second.player_id]),
            turns=self.turn,
            started_at=self.started_at,
            finished_at=time.time(),
        )

    def _release(self) -> None:
        if self.on_finished is not None:
            self.on_finished(self)

    def forfeit(self, remaining_sid: Optional[str]) -> bool:
        """
        Ends the match without a winner after a disconnect. No trophies move.
        Returns False if the match had already finished.
        """
        with self._lock:
            if self.status == FINISHED:
                return False
            self.status = FINISHED
            for c in self.combatants:
                c.pending_action = None
            logger.info("match %s aborted on turn %d after a disconnect", self.match_id, self.turn)

        self._release()
        if remaining_sid:
            self.publisher.opponent_disconnect(remaining_sid)
        return True
