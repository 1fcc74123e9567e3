"""Convenience service layer for UI and agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from .cards import Card, card_label, deserialize_card, serialize_card
from .game import LEAD_POLICIES, EventListener, RoundCoordinator
from .registry import DEFAULT_REGISTRY, RuleSetRegistry
from .resolution import resolve_winner
from .rules_schema import RuleSet
from .state import AwaitingPlay, Rejected, RoundState, TrickClosed
from .trick import Seat, Trick

log = logging.getLogger(__name__)

__all__ = [
    "list_rule_sets",
    "select_rule_set",
    "submit_play",
    "resolve_winner",
    "TableService",
]


def list_rule_sets(registry: RuleSetRegistry = DEFAULT_REGISTRY) -> list[dict[str, str]]:
    """Rule set summaries in picker order; position ``i`` is ``registry.by_index(i)``."""
    return registry.summaries()


def select_rule_set(rule_set_id: str, registry: RuleSetRegistry = DEFAULT_REGISTRY) -> RuleSet:
    return registry.resolve(rule_set_id)


def submit_play(coordinator: RoundCoordinator, seat: Seat, card: Card) -> RoundState:
    return coordinator.submit_play(seat, card)


def logging_listener(logger: logging.Logger = log) -> EventListener:
    """Forward coordinator events to ``logger``."""

    def listen(event: str, payload: Dict[str, Any]) -> None:
        level = logging.INFO if event in {"trick_closed", "rule_set_changed"} else logging.DEBUG
        logger.log(level, "%s %s", event, payload)

    return listen


@dataclass
class TrickPlayView:
    seat: str
    card: dict
    label: str


@dataclass
class TrickView:
    lead_suit: Optional[str]
    plays: list[TrickPlayView]


@dataclass
class PlayResultView:
    status: str
    seat: Optional[str] = None
    winner: Optional[str] = None
    reason: Optional[str] = None


@dataclass
class TableView:
    rule_set: dict
    turn_order: list[str]
    current_seat: str
    hand: list[dict]
    hand_labels: list[str]
    legal_moves: list[dict]
    legal_move_labels: list[str]
    remaining_cards: dict[str, int]
    trick: TrickView
    leading_seat: Optional[str]
    trick_history: list[dict]
    finished: bool


def describe_state(state: RoundState) -> PlayResultView:
    if isinstance(state, AwaitingPlay):
        return PlayResultView(status="awaiting_play", seat=str(state.seat))
    if isinstance(state, Rejected):
        return PlayResultView(status="rejected", seat=str(state.seat), reason=state.reason.value)
    if isinstance(state, TrickClosed):
        return PlayResultView(status="trick_closed", winner=str(state.winner))
    raise TypeError(f"Unexpected round state: {state!r}")


def describe_trick(trick: Trick) -> TrickView:
    lead = trick.lead_suit()
    return TrickView(
        lead_suit=lead.value if lead else None,
        plays=[
            TrickPlayView(seat=str(play.seat), card=serialize_card(play.card), label=card_label(play.card))
            for play in trick.plays
        ],
    )


class TableService:
    """Facade around RoundCoordinator for UI consumers.

    Seats are strings and cards travel as ``{"rank": ..., "suit": ...}`` dicts.
    """

    def __init__(self, registry: RuleSetRegistry = DEFAULT_REGISTRY) -> None:
        self.registry = registry
        self.coordinator: Optional[RoundCoordinator] = None

    # Rule sets ---------------------------------------------------------

    def rule_sets(self) -> list[dict[str, str]]:
        return list_rule_sets(self.registry)

    def select_rule_set(self, rule_set_id: str) -> TableView:
        coordinator = self._require_table()
        coordinator.select_rule_set(rule_set_id)
        return self.get_table_view()

    def select_rule_set_index(self, index: int) -> TableView:
        return self.select_rule_set(self.registry.by_index(index).id)

    # Table lifecycle ---------------------------------------------------

    def start_table(
        self,
        hands: Mapping[str, Sequence[Mapping[str, Any]]],
        *,
        rule_set_id: str,
        turn_order: Optional[Sequence[str]] = None,
        lead_policy: str = "winner",
    ) -> TableView:
        rule_set = select_rule_set(rule_set_id, self.registry)
        try:
            policy = LEAD_POLICIES[lead_policy]
        except KeyError:
            raise ValueError(f"Unknown lead policy: {lead_policy!r}") from None
        decoded = {seat: [deserialize_card(payload) for payload in cards] for seat, cards in hands.items()}
        self.coordinator = RoundCoordinator(
            rule_set=rule_set,
            hands=decoded,
            turn_order=turn_order,
            lead_policy=policy,
            listener=logging_listener(),
            registry=self.registry,
        )
        log.info("Table started under %s with seats %s", rule_set.id, list(self.coordinator.turn_order))
        return self.get_table_view()

    def has_table(self) -> bool:
        return self.coordinator is not None

    # Actions -----------------------------------------------------------

    def play_card(self, seat: str, card_payload: Mapping[str, Any]) -> PlayResultView:
        coordinator = self._require_table()
        card = deserialize_card(card_payload)
        return describe_state(submit_play(coordinator, seat, card))

    def resolve(self, plays: Sequence[Mapping[str, Any]], rule_set_id: str) -> str:
        """Resolve a finished trick given as ``[{"seat": ..., "card": {...}}, ...]``."""
        rule_set = select_rule_set(rule_set_id, self.registry)
        trick = Trick.from_plays((entry["seat"], deserialize_card(entry["card"])) for entry in plays)
        return str(resolve_winner(trick, rule_set))

    # Views -------------------------------------------------------------

    def get_table_view(self, perspective: Optional[str] = None) -> TableView:
        coordinator = self._require_table()
        round_ = coordinator.round
        seat = perspective if perspective is not None else coordinator.current_seat()
        hand: list[Card] = list(round_.hands.get(seat, []))
        legal = coordinator.available_moves(seat) if seat in round_.hands else []
        leading = coordinator.preview_winner()
        return TableView(
            rule_set=coordinator.rule_set.summary(),
            turn_order=[str(s) for s in round_.turn_order],
            current_seat=str(coordinator.current_seat()),
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            legal_moves=[serialize_card(card) for card in legal],
            legal_move_labels=[card_label(card) for card in legal],
            remaining_cards={str(s): count for s, count in round_.remaining_cards().items()},
            trick=describe_trick(round_.trick),
            leading_seat=str(leading.seat) if leading else None,
            trick_history=[
                {"winner": str(result.winner), "rule_set": result.rule_set_id, "trick": describe_trick(result.trick)}
                for result in coordinator.history
            ],
            finished=coordinator.is_finished(),
        )

    # Helpers -----------------------------------------------------------

    def _require_table(self) -> RoundCoordinator:
        if self.coordinator is None:
            raise RuntimeError("No active table.")
        return self.coordinator
