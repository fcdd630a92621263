import pytest

from fakes import ScriptedRandom
from pvp_arena.engine.dice import rng_for, roll_between
from pvp_arena.engine.models import Combatant, PlayerSummary
from pvp_arena.engine.resolver import base_damage, pick_winner, resolve_turn, roll_damage
from pvp_arena.engine.rules import decay_cooldown, mitigate, trophy_changes


def combatant(player_id, action, hp=100, cooldown=0):
    return Combatant(
        sid=f"{player_id}_sid",
        player=PlayerSummary(player_id, player_id.title()),
        hp=hp,
        pending_action=action,
        special_cooldown=cooldown,
    )


@pytest.mark.parametrize("seed", range(50))
def test_attack_damage_stays_in_range(seed):
    dealt_a, dealt_b, _, _ = roll_damage("attack", 0, "attack", 0, rng_for(seed, 1))
    assert 15 <= dealt_a <= 25
    assert 15 <= dealt_b <= 25
    assert isinstance(dealt_a, int) and isinstance(dealt_b, int)


def test_special_off_cooldown_hits_for_thirty_and_sets_cooldown():
    assert roll_damage("special", 0, "attack", 0, ScriptedRandom([20])) == (30, 20, 2, 0)


def test_special_on_cooldown_is_a_no_op():
    assert base_damage("special", 1, ScriptedRandom([])) == (0, 1)


def test_defend_halves_only_incoming_damage():
    assert roll_damage("defend", 0, "attack", 0, ScriptedRandom([25])) == (0, 12, 0, 0)
    assert roll_damage("attack", 0, "defend", 0, ScriptedRandom([15])) == (7, 0, 0, 0)


def test_attack_against_attack_is_not_mitigated():
    assert roll_damage("attack", 0, "attack", 0, ScriptedRandom([17, 23])) == (17, 23, 0, 0)


def test_cooldowns_decay_on_turns_without_special():
    assert roll_damage("attack", 2, "defend", 1, ScriptedRandom([20])) == (10, 0, 1, 0)


def test_rules_helpers():
    assert mitigate(25, True) == 12
    assert mitigate(25, False) == 25
    assert decay_cooldown(2, "special") == 2
    assert decay_cooldown(0, "attack") == 0
    assert trophy_changes("a", ["a", "b"]) == {"a": 20, "b": -10}


def test_roll_between_rejects_empty_range():
    with pytest.raises(ValueError):
        roll_between(5, 4, rng_for(1, 1))


@pytest.mark.parametrize("raw_first, raw_second, expected", [
    (50, 40, None),
    (0, 40, "b"),
    (40, -3, "a"),
    (-5, -15, "a"),
    (-15, -5, "b"),
    (0, 0, "b"),
    (-7, -7, "b"),
])
def test_pick_winner(raw_first, raw_second, expected):
    assert pick_winner("a", raw_first, "b", raw_second) == expected


def test_resolve_turn_does_not_touch_combatants():
    first = combatant("a", "attack", hp=10)
    second = combatant("b", "special", hp=100)
    outcome = resolve_turn(3, first, second, ScriptedRandom([25]))

    assert first.hp == 10 and second.hp == 100
    assert outcome.turn == 3
    assert outcome.hp == {"a": 0, "b": 75}
    assert outcome.damage == {"a": 30, "b": 25}
    assert outcome.special_cooldown == {"a": 0, "b": 2}
    assert outcome.actions == {"a": "attack", "b": "special"}
    assert outcome.winner == "b"


def test_resolve_turn_is_reproducible_for_a_seed():
    first = combatant("a", "attack")
    second = combatant("b", "attack")
    one = resolve_turn(1, first, second, rng_for(99, 1))
    two = resolve_turn(1, first, second, rng_for(99, 1))
    assert one == two
