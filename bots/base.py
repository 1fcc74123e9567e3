"""Common bot strategy interfaces."""

from __future__ import annotations

from engine.cards import Card
from engine.game import RoundCoordinator
from engine.trick import Seat


class PlayStrategy:
    """Base class for computer-seat policies."""

    name: str = "BaseBot"

    def on_table_start(self, coordinator: RoundCoordinator, seat: Seat) -> None:
        """Optional hook invoked before the first trick."""
        return None

    def play_card(self, coordinator: RoundCoordinator, seat: Seat) -> Card:
        """Return a legal card for ``seat``; the default takes the first one."""
        legal = coordinator.available_moves(seat)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return legal[0]
