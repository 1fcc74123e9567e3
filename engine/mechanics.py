"""Play legality for the active rule set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Collection, Iterable, List, Optional

from .cards import Card, cards_of_suit, sort_key
from .rules_schema import RuleSet
from .trick import Trick


class Rejection(Enum):
    CARD_NOT_IN_HAND = "card_not_in_hand"
    MUST_FOLLOW_SUIT = "must_follow_suit"
    OUT_OF_TURN = "out_of_turn"
    UNKNOWN_SEAT = "unknown_seat"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Verdict:
    reason: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.ok


OK = Verdict()


def validate(card: Card, hand: Collection[Card], trick: Trick, rule_set: RuleSet) -> Verdict:
    """Decide whether ``card`` may be played from ``hand`` onto ``trick``.

    Neither ``hand`` nor ``trick`` is modified. A seat holding no card of the
    lead suit may play anything, trumps included.
    """
    if card not in hand:
        return Verdict(Rejection.CARD_NOT_IN_HAND)
    if trick.is_empty():
        return OK

    led = trick.lead_suit()
    if rule_set.follow_suit_required and card.suit is not led and cards_of_suit(hand, led):
        return Verdict(Rejection.MUST_FOLLOW_SUIT)
    return OK


def legal_moves(hand: Iterable[Card], trick: Trick, rule_set: RuleSet) -> List[Card]:
    """Return the subset of cards that are legal to play given the current trick."""
    cards = list(hand)
    return sorted((card for card in cards if validate(card, cards, trick, rule_set)), key=sort_key)
