"""Simple bot arena: computer seats play a table to the end."""

from __future__ import annotations

import argparse
import random
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from engine.deck import build_deck, split_deck
from engine.game import LEAD_POLICIES, RoundCoordinator
from engine.registry import DEFAULT_REGISTRY
from engine.state import Rejected, TrickResult
from engine.trick import Seat

from .base import PlayStrategy
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, type[PlayStrategy]] = {
    "greedy": GreedyBot,
    "random": RandomBot,
}

DEFAULT_SEATS = ("N", "E", "S", "W")


def play_out(coordinator: RoundCoordinator, bots: Mapping[Seat, PlayStrategy]) -> List[TrickResult]:
    """Drive ``coordinator`` until every hand is empty; returns the tricks played."""
    for seat, bot in bots.items():
        bot.on_table_start(coordinator, seat)
    start = len(coordinator.history)
    while not coordinator.is_finished():
        seat = coordinator.current_seat()
        card = bots[seat].play_card(coordinator, seat)
        state = coordinator.submit_play(seat, card)
        if isinstance(state, Rejected):
            raise RuntimeError(f"{bots[seat].name} bot at seat {seat!r} made an illegal play: {state.reason}")
    return coordinator.history[start:]


def run_table(
    bots: Sequence[PlayStrategy],
    *,
    rule_set_id: str = "spades-trump",
    seats: Sequence[Seat] = DEFAULT_SEATS,
    hand_size: int = 7,
    seed: Optional[int] = None,
    lead_policy: str = "winner",
) -> dict:
    if len(bots) != len(seats):
        raise ValueError("Need exactly one bot per seat.")
    deck = build_deck()
    random.Random(seed).shuffle(deck)
    hands = split_deck(deck, seats, hand_size=hand_size)
    coordinator = RoundCoordinator(
        rule_set=DEFAULT_REGISTRY.resolve(rule_set_id),
        hands=hands,
        turn_order=seats,
        lead_policy=LEAD_POLICIES[lead_policy],
    )
    results = play_out(coordinator, dict(zip(seats, bots)))
    return {
        "rule_set": rule_set_id,
        "winners": [result.winner for result in results],
        "history": results,
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Let four bots play a table.")
    parser.add_argument("--bots", nargs=4, default=["greedy", "random", "greedy", "random"], choices=BOT_REGISTRY.keys())
    parser.add_argument("--rule-set", default="spades-trump", choices=[rs.id for rs in DEFAULT_REGISTRY.list()])
    parser.add_argument("--hand-size", type=int, default=7)
    parser.add_argument("--lead-policy", default="winner", choices=LEAD_POLICIES.keys())
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    bots = [BOT_REGISTRY[name]() for name in args.bots]
    results = run_table(
        bots,
        rule_set_id=args.rule_set,
        hand_size=args.hand_size,
        seed=args.seed,
        lead_policy=args.lead_policy,
    )
    print(f"Rule set: {results['rule_set']}")
    for index, winner in enumerate(results["winners"], start=1):
        print(f"Trick {index}: won by {winner}")


if __name__ == "__main__":
    main()
