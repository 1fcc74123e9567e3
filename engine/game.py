"""Trick-by-trick orchestration of a table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .cards import Card, serialize_card
from .mechanics import Rejection, legal_moves, validate
from .registry import DEFAULT_REGISTRY, RuleSetRegistry
from .resolution import leading_play, resolve_winner
from .rules_schema import RuleSet
from .state import (
    AwaitingPlay,
    Rejected,
    Round,
    RoundState,
    RuleSetLocked,
    TrickClosed,
    TrickResult,
)
from .trick import Play, Seat

EventListener = Callable[[str, Dict[str, Any]], None]
LeadPolicy = Callable[[Sequence[Seat], Seat], List[Seat]]


def winner_leads(turn_order: Sequence[Seat], winner: Seat) -> List[Seat]:
    """Keep the seating, starting from the trick winner."""
    start = list(turn_order).index(winner)
    return list(turn_order[start:]) + list(turn_order[:start])


def rotate_leader(turn_order: Sequence[Seat], winner: Seat) -> List[Seat]:
    """Pass the lead one seat along regardless of who won."""
    return list(turn_order[1:]) + list(turn_order[:1])


LEAD_POLICIES: Dict[str, LeadPolicy] = {
    "winner": winner_leads,
    "rotate": rotate_leader,
}


@dataclass
class RoundCoordinator:
    """Accept plays in turn order and close tricks.

    Each accepted play goes through the validator; a full trick goes through
    the resolver and a fresh round starts with the order chosen by
    ``lead_policy``. ``listener`` receives engine events; nothing is logged here.

    ``hands`` is the opening deal and is never updated; ``current_hands``
    reflects the cards still held.
    """

    rule_set: RuleSet
    hands: Mapping[Seat, Sequence[Card]] = field(repr=False)
    turn_order: Optional[Sequence[Seat]] = None
    lead_policy: LeadPolicy = winner_leads
    listener: Optional[EventListener] = None
    registry: RuleSetRegistry = DEFAULT_REGISTRY

    round: Round = field(init=False)
    history: List[TrickResult] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        order = list(self.turn_order) if self.turn_order is not None else list(self.hands)
        self.round = Round(
            rule_set=self.rule_set,
            hands={seat: list(cards) for seat, cards in self.hands.items()},
            turn_order=order,
        )
        self.turn_order = order

    # Queries -----------------------------------------------------------

    def state(self) -> AwaitingPlay:
        return AwaitingPlay(self.round.current_seat())

    def current_seat(self) -> Seat:
        return self.round.current_seat()

    @property
    def current_hands(self) -> Dict[Seat, List[Card]]:
        return {seat: list(hand) for seat, hand in self.round.hands.items()}

    def available_moves(self, seat: Seat) -> List[Card]:
        if seat != self.round.current_seat():
            return []
        return legal_moves(self.round.hand_of(seat), self.round.trick, self.rule_set)

    def preview_winner(self) -> Optional[Play]:
        if self.round.trick.is_empty():
            return None
        return leading_play(self.round.trick, self.rule_set)

    def is_finished(self) -> bool:
        return self.round.hands_empty() and self.round.trick.is_empty()

    # Actions -----------------------------------------------------------

    def submit_play(self, seat: Seat, card: Card) -> RoundState:
        round_ = self.round
        if seat not in round_.hands:
            return self._reject(seat, card, Rejection.UNKNOWN_SEAT)
        if seat != round_.current_seat():
            return self._reject(seat, card, Rejection.OUT_OF_TURN)

        verdict = validate(card, round_.hand_of(seat), round_.trick, self.rule_set)
        if not verdict.ok:
            assert verdict.reason is not None
            return self._reject(seat, card, verdict.reason)

        round_.apply_play(seat, card)
        self._emit("play_accepted", seat=seat, card=serialize_card(card))

        if not round_.trick.is_full():
            return AwaitingPlay(round_.current_seat())
        return self._close_trick()

    def select_rule_set(self, rule_set_id: str) -> RuleSet:
        """Switch rule sets between tricks; an open trick keeps the one it started with."""
        rule_set = self.registry.resolve(rule_set_id)
        if not self.round.trick.is_empty():
            raise RuleSetLocked("Rule set cannot change while a trick is in progress.")
        previous = self.rule_set.id
        self.rule_set = rule_set
        self.round.rule_set = rule_set
        self._emit("rule_set_changed", previous=previous, current=rule_set.id)
        return rule_set

    # Helpers -----------------------------------------------------------

    def _close_trick(self) -> TrickClosed:
        closed = self.round.trick
        winner = resolve_winner(closed, self.rule_set)
        self.history.append(TrickResult(trick=closed, winner=winner, rule_set_id=self.rule_set.id))
        self._emit("trick_closed", winner=winner, rule_set=self.rule_set.id)

        # Round rejects an order that drops, adds or repeats a seat.
        next_order = self.lead_policy(self.round.turn_order, winner)
        self.round = Round(rule_set=self.rule_set, hands=self.round.hands, turn_order=next_order)
        return TrickClosed(winner=winner, trick=closed)

    def _reject(self, seat: Seat, card: Card, reason: Rejection) -> Rejected:
        self._emit("play_rejected", seat=seat, card=serialize_card(card), reason=reason.value)
        return Rejected(seat=seat, card=card, reason=reason)

    def _emit(self, event: str, **payload: Any) -> None:
        if self.listener is not None:
            self.listener(event, payload)
