"""Card-related data structures and helpers for the trick table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Union


class Suit(Enum):
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return self.name.lower()


# Lowest to highest, Ace high.
RANK_ORDER: list[Rank] = sorted(Rank, key=lambda rank: rank.value)

SUIT_ORDER: list[Suit] = [Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES]

RANK_CODES: dict[str, Rank] = {
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

SUIT_CODES: dict[str, Suit] = {
    "C": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "S": Suit.SPADES,
}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        code = next(key for key, rank in RANK_CODES.items() if rank is self.rank)
        return f"{code}{SUIT_SYMBOLS[self.suit]}"


def rank_value(card: Card) -> int:
    """Return the rank ordinal, 2 through 14 with the Ace high."""
    return card.rank.value


def same_suit(a: Card, b: Card) -> bool:
    return a.suit is b.suit


def compare_rank(a: Card, b: Card) -> int:
    """Compare two cards strictly by rank, ignoring suit. Returns -1, 0 or 1."""
    left, right = rank_value(a), rank_value(b)
    return (left > right) - (left < right)


def sort_key(card: Card) -> tuple[int, int]:
    """Ordering used when presenting cards: by suit, then rank."""
    return SUIT_ORDER.index(card.suit), rank_value(card)


def cards_of_suit(cards: Iterable[Card], suit: Suit) -> list[Card]:
    return [card for card in cards if card.suit is suit]


def parse_suit(value: Union[str, Suit]) -> Suit:
    """Accept a Suit, a suit name in any case, or a one-letter code."""
    if isinstance(value, Suit):
        return value
    text = value.strip()
    if text.upper() in SUIT_CODES:
        return SUIT_CODES[text.upper()]
    try:
        return Suit(text.lower())
    except ValueError:
        raise ValueError(f"Unknown suit: {value!r}") from None


def parse_rank(value: Union[str, int, Rank]) -> Rank:
    """Accept a Rank, an ordinal (2-14), a rank name or a short code."""
    if isinstance(value, Rank):
        return value
    if isinstance(value, int):
        try:
            return Rank(value)
        except ValueError:
            raise ValueError(f"Rank out of range: {value!r}") from None
    text = value.strip()
    if text.upper() in RANK_CODES:
        return RANK_CODES[text.upper()]
    if text.isdigit():
        return parse_rank(int(text))
    try:
        return Rank[text.upper()]
    except KeyError:
        raise ValueError(f"Unknown rank: {value!r}") from None


def parse_card(code: str) -> Card:
    """Parse a short code such as ``"7C"``, ``"10H"`` or ``"KS"``."""
    text = code.strip()
    if len(text) < 2:
        raise ValueError(f"Card code too short: {code!r}")
    return Card(parse_rank(text[:-1]), parse_suit(text[-1]))


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.value}


def deserialize_card(payload: Mapping[str, Union[str, int]]) -> Card:
    try:
        rank = payload["rank"]
        suit = payload["suit"]
    except KeyError as exc:
        raise ValueError(f"Card payload missing {exc.args[0]!r}") from None
    return Card(parse_rank(rank), parse_suit(str(suit)))


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
