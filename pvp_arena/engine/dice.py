# pvp_arena/engine/dice.py
import random


def rng_for(seed: int, turn: int) -> random.Random:
    # deterministic per match seed + turn
    return random.Random(f"{seed}:{turn}")


def roll_between(lo: int, hi: int, r: random.Random) -> int:
    if lo > hi:
        raise ValueError(f"empty roll range [{lo}, {hi}]")
    return r.randint(lo, hi)
