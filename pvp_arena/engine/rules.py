# pvp_arena/engine/rules.py
import math
from typing import Dict, Iterable, Optional

from ..content.balance import DEFAULTS, TROPHIES


def clamp(x: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, x))


def mitigate(raw: int, defending: bool) -> int:
    # defend halves incoming damage, rounded down
    if not defending:
        return raw
    return math.floor(raw * DEFAULTS["defend_multiplier"])


def decay_cooldown(cooldown: int, action: Optional[str]) -> int:
    # a Special used this turn keeps its fresh cooldown
    if cooldown > 0 and action != "special":
        return cooldown - 1
    return cooldown


def trophy_changes(winner_id: str, player_ids: Iterable[str]) -> Dict[str, int]:
    return {
        pid: TROPHIES["win"] if pid == winner_id else TROPHIES["loss"]
        for pid in player_ids
    }
