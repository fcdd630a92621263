# pvp_arena/engine/models.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..content.balance import DEFAULTS


@dataclass(frozen=True)
class PlayerSummary:
    player_id: str
    username: str
    trophies: int = 0

    def to_public(self) -> Dict[str, object]:
        return {"id": self.player_id, "username": self.username, "trophies": self.trophies}


@dataclass
class WaitingEntry:
    sid: str                               # connection ref, never owned
    player: PlayerSummary

    @property
    def player_id(self) -> str:
        return self.player.player_id


@dataclass
class Combatant:
    sid: str
    player: PlayerSummary                  # trophies snapshot at match start
    hp: int = DEFAULTS["hp"]
    hp_max: int = DEFAULTS["hp"]
    pending_action: Optional[str] = None   # "attack" | "defend" | "special"
    special_cooldown: int = 0

    @property
    def player_id(self) -> str:
        return self.player.player_id


@dataclass
class TurnOutcome:
    turn: int
    actions: Dict[str, str]                # player_id -> action
    damage: Dict[str, int]                 # player_id -> damage taken
    hp: Dict[str, int]                     # player_id -> hp after clamp
    special_cooldown: Dict[str, int]
    winner: Optional[str] = None

    def to_payload(self) -> Dict[str, object]:
        return {
            "turn": self.turn,
            "actions": dict(self.actions),
            "damage": dict(self.damage),
            "hp": dict(self.hp),
            "specialCooldown": dict(self.special_cooldown),
        }


@dataclass
class MatchRecord:
    match_id: str
    player_ids: List[str]                  # [first, second]
    usernames: Dict[str, str]
    winner_id: str
    trophy_changes: Dict[str, int] = field(default_factory=dict)
    turns: int = 0
    started_at: float = 0.0
    finished_at: float = 0.0
