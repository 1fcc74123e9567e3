"""Round state for a single trick."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Union

from .cards import Card
from .mechanics import Rejection
from .rules_schema import RuleSet
from .trick import Seat, Trick


class RoundError(RuntimeError):
    """Raised when a round is set up or driven inconsistently."""


class RuleSetLocked(RoundError):
    """Raised when the rule set is changed while a trick is open."""


@dataclass(frozen=True)
class AwaitingPlay:
    seat: Seat


@dataclass(frozen=True)
class Rejected:
    seat: Seat
    card: Card
    reason: Rejection


@dataclass(frozen=True)
class TrickClosed:
    winner: Seat
    trick: Trick


RoundState = Union[AwaitingPlay, Rejected, TrickClosed]


@dataclass(frozen=True)
class TrickResult:
    trick: Trick
    winner: Seat
    rule_set_id: str


@dataclass
class Round:
    rule_set: RuleSet
    hands: Dict[Seat, List[Card]]
    turn_order: List[Seat]
    current_turn_index: int = 0
    trick: Trick = field(init=False)

    def __post_init__(self) -> None:
        self.turn_order = list(self.turn_order)
        if not self.turn_order:
            raise RoundError("Turn order must name at least one seat.")
        if len(set(self.turn_order)) != len(self.turn_order):
            raise RoundError("Turn order repeats a seat.")
        if set(self.hands) != set(self.turn_order):
            raise RoundError("Hands must be given for exactly the seats in the turn order.")
        self.hands = {seat: list(self.hands[seat]) for seat in self.turn_order}
        if len({len(hand) for hand in self.hands.values()}) != 1:
            raise RoundError("Every seat must hold the same number of cards when a trick starts.")
        dealt = [card for hand in self.hands.values() for card in hand]
        if len(set(dealt)) != len(dealt):
            raise RoundError("The same card appears in more than one place.")
        if not 0 <= self.current_turn_index < len(self.turn_order):
            raise RoundError("Turn index outside the turn order.")
        self.trick = Trick(table_size=len(self.turn_order))

    @property
    def table_size(self) -> int:
        return len(self.turn_order)

    def current_seat(self) -> Seat:
        return self.turn_order[self.current_turn_index]

    def hand_of(self, seat: Seat) -> List[Card]:
        return self.hands[seat]

    def apply_play(self, seat: Seat, card: Card) -> None:
        """Commit a validated play: remove it from the hand, add it to the trick, advance the turn."""
        self.trick.add_play(seat, card)
        self.hands[seat].remove(card)
        self.current_turn_index = (self.current_turn_index + 1) % self.table_size

    def remaining_cards(self) -> Dict[Seat, int]:
        return {seat: len(self.hands[seat]) for seat in self.turn_order}

    def hands_empty(self) -> bool:
        return all(not hand for hand in self.hands.values())
