from __future__ import annotations

import random
from typing import List, Optional

from .board import Player


def deal_player_order(players: int, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[Player]:
    """Shuffles the seating order once at game start. Pass `rng` or `seed` for repeatable deals."""
    if players < 1:
        raise ValueError(f'cannot deal a turn order for {players} players')
    rng = rng or random.Random(seed)
    order: List[Player] = list(range(players))
    rng.shuffle(order)
    return order
