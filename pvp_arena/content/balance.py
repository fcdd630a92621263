# pvp_arena/content/balance.py
DEFAULTS = {
    "hp": 100,
    "attack_min": 15,
    "attack_max": 25,
    "special_damage": 30,
    "special_cooldown": 2,
    "defend_multiplier": 0.5,
}

TROPHIES = {
    "win": 20,
    "loss": -10,
}
