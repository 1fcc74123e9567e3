"""Trick representation and shape checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable, List, Optional, Tuple

from .cards import Card, Suit

Seat = Hashable


class TrickError(RuntimeError):
    """Raised when trick play breaks ordering constraints."""


class IncompleteTrickError(TrickError):
    """Raised when a winner is requested before every seat has played."""


class InvalidTrickShape(TrickError):
    """Raised when a trick holds a duplicate seat or card, or overflows."""


@dataclass(frozen=True)
class Play:
    seat: Seat
    card: Card


@dataclass
class Trick:
    table_size: int
    plays: List[Play] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.table_size < 1:
            raise ValueError("Table size must be positive.")
        self.plays = list(self.plays)
        self.check_shape()

    @classmethod
    def from_plays(cls, plays: Iterable[Tuple[Seat, Card]], table_size: Optional[int] = None) -> "Trick":
        """Build a trick from ``(seat, card)`` pairs; table size defaults to the play count."""
        items = [play if isinstance(play, Play) else Play(*play) for play in plays]
        return cls(table_size=table_size if table_size is not None else len(items), plays=items)

    def is_empty(self) -> bool:
        return not self.plays

    def is_full(self) -> bool:
        return len(self.plays) == self.table_size

    def is_open(self) -> bool:
        return len(self.plays) < self.table_size

    def lead_suit(self) -> Optional[Suit]:
        return self.plays[0].card.suit if self.plays else None

    def leader(self) -> Optional[Seat]:
        return self.plays[0].seat if self.plays else None

    def seats(self) -> List[Seat]:
        return [play.seat for play in self.plays]

    def cards(self) -> List[Card]:
        return [play.card for play in self.plays]

    def has_played(self, seat: Seat) -> bool:
        return any(play.seat == seat for play in self.plays)

    def add_play(self, seat: Seat, card: Card) -> None:
        if self.is_full():
            raise InvalidTrickShape("Trick already complete.")
        if self.has_played(seat):
            raise InvalidTrickShape(f"Seat {seat!r} already played in this trick.")
        if card in self.cards():
            raise InvalidTrickShape(f"Card {card} already played in this trick.")
        self.plays.append(Play(seat, card))

    def check_shape(self) -> None:
        if len(self.plays) > self.table_size:
            raise InvalidTrickShape(f"Trick holds {len(self.plays)} plays for a table of {self.table_size}.")
        seats = self.seats()
        if len(set(seats)) != len(seats):
            raise InvalidTrickShape("Duplicate seat in trick.")
        cards = self.cards()
        if len(set(cards)) != len(cards):
            raise InvalidTrickShape("Duplicate card in trick.")

    def copy(self) -> "Trick":
        return Trick(table_size=self.table_size, plays=list(self.plays))
