"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from engine.cards import Card
from engine.game import RoundCoordinator
from engine.trick import Seat

from .base import PlayStrategy


class RandomBot(PlayStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def play_card(self, coordinator: RoundCoordinator, seat: Seat) -> Card:
        legal = coordinator.available_moves(seat)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return self._rng.choice(legal)
