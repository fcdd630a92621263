# pvp_arena/content/actions.py
ACTIONS = {
    "attack": {
        "damage": {"type": "roll", "min_key": "attack_min", "max_key": "attack_max"},
    },
    "defend": {
        "damage": None,            # halves incoming damage, see rules.mitigate
    },
    "special": {
        "damage": {"type": "fixed", "value_key": "special_damage"},
        "cooldown_key": "special_cooldown",
    },
}


def is_valid_action(action_id) -> bool:
    return isinstance(action_id, str) and action_id in ACTIONS
