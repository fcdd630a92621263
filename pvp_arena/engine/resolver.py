# pvp_arena/engine/resolver.py
import random
from typing import Optional, Tuple

from .models import Combatant, TurnOutcome
from .dice import roll_between
from .rules import clamp, mitigate, decay_cooldown
from ..content.actions import ACTIONS
from ..content.balance import DEFAULTS


def base_damage(action: Optional[str], cooldown: int, r: random.Random) -> Tuple[int, int]:
    """
    Raw outgoing damage for one side before the opponent's defense,
    and that side's cooldown after paying for the action.
    """
    ability = ACTIONS.get(action or "")
    if not ability or not ability.get("damage"):
        return 0, cooldown

    cooldown_key = ability.get("cooldown_key")
    if cooldown_key and cooldown > 0:
        # rejected at submission; resolves as a no-op if it ever gets here
        return 0, cooldown

    damage = ability["damage"]
    if damage["type"] == "roll":
        amount = roll_between(DEFAULTS[damage["min_key"]], DEFAULTS[damage["max_key"]], r)
    else:
        amount = DEFAULTS[damage["value_key"]]

    if cooldown_key:
        cooldown = DEFAULTS[cooldown_key]
    return amount, cooldown


def roll_damage(
    action_a: Optional[str],
    cooldown_a: int,
    action_b: Optional[str],
    cooldown_b: int,
    r: random.Random,
) -> Tuple[int, int, int, int]:
    """
    Returns (damage dealt by A, damage dealt by B, new cooldown A, new cooldown B).
    Side A always rolls first so a seeded generator gives the same turn twice.
    """
    raw_a, cd_a = base_damage(action_a, cooldown_a, r)
    raw_b, cd_b = base_damage(action_b, cooldown_b, r)

    dealt_a = mitigate(raw_a, action_b == "defend")
    dealt_b = mitigate(raw_b, action_a == "defend")

    return dealt_a, dealt_b, decay_cooldown(cd_a, action_a), decay_cooldown(cd_b, action_b)


def pick_winner(first_id: str, raw_hp_first: int, second_id: str, raw_hp_second: int) -> Optional[str]:
    # compares unclamped hp; an exact tie on a double knockout goes to the second combatant
    if raw_hp_first <= 0 and raw_hp_second <= 0:
        return first_id if raw_hp_first > raw_hp_second else second_id
    if raw_hp_first <= 0:
        return second_id
    if raw_hp_second <= 0:
        return first_id
    return None


def resolve_turn(turn: int, first: Combatant, second: Combatant, r: random.Random) -> TurnOutcome:
    """
    Resolves both pending actions simultaneously. Pure: the combatants are
    read, never written; the caller applies the outcome.
    """
    dealt_first, dealt_second, cd_first, cd_second = roll_damage(
        first.pending_action, first.special_cooldown,
        second.pending_action, second.special_cooldown,
        r,
    )

    raw_first = first.hp - dealt_second
    raw_second = second.hp - dealt_first

    return TurnOutcome(
        turn=turn,
        actions={first.player_id: first.pending_action, second.player_id: second.pending_action},
        damage={first.player_id: dealt_second, second.player_id: dealt_first},
        hp={
            first.player_id: clamp(raw_first, 0, first.hp_max),
            second.player_id: clamp(raw_second, 0, second.hp_max),
        },
        special_cooldown={first.player_id: cd_first, second.player_id: cd_second},
        winner=pick_winner(first.player_id, raw_first, second.player_id, raw_second),
    )
