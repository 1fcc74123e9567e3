"""Deck creation utilities."""

from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Sequence

from .cards import RANK_ORDER, SUIT_ORDER, Card


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank, suit) for suit in SUIT_ORDER for rank in RANK_ORDER]


def split_deck(
    cards: Sequence[Card],
    seats: Sequence[Hashable],
    *,
    hand_size: Optional[int] = None,
) -> Dict[Hashable, List[Card]]:
    """Distribute ``cards`` round-robin in the order given.

    Ordering (and any shuffling) is the caller's business; this only splits.
    """
    if not seats:
        raise ValueError("At least one seat is required.")
    if len(set(seats)) != len(seats):
        raise ValueError("Seats must be unique.")
    if len(set(cards)) != len(cards):
        raise ValueError("Deck contains duplicate cards.")
    if hand_size is None:
        hand_size = len(cards) // len(seats)
    needed = hand_size * len(seats)
    if hand_size <= 0 or needed > len(cards):
        raise ValueError(f"Cannot deal {hand_size} cards to {len(seats)} seats from {len(cards)} cards.")

    hands: Dict[Hashable, List[Card]] = {seat: [] for seat in seats}
    for index, card in enumerate(cards[:needed]):
        hands[seats[index % len(seats)]].append(card)
    return hands
