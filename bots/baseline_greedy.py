"""Baseline greedy bot."""

from __future__ import annotations

from engine.cards import Card, rank_value
from engine.game import RoundCoordinator
from engine.resolution import leading_play
from engine.trick import Seat

from .base import PlayStrategy


def _cheapest(cards: list[Card]) -> Card:
    return min(cards, key=rank_value)


class GreedyBot(PlayStrategy):
    """Take the trick as cheaply as possible, otherwise shed the lowest card."""

    name = "Greedy"

    def play_card(self, coordinator: RoundCoordinator, seat: Seat) -> Card:
        legal = coordinator.available_moves(seat)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")

        trick = coordinator.round.trick
        if trick.is_empty():
            return max(legal, key=rank_value)

        winning = []
        for card in legal:
            trial = trick.copy()
            trial.add_play(seat, card)
            if leading_play(trial, coordinator.rule_set).seat == seat:
                winning.append(card)
        return _cheapest(winning) if winning else _cheapest(legal)
