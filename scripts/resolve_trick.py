#!/usr/bin/env python3
"""Resolve a recorded trick from the command line.

Example::

    python scripts/resolve_trick.py --rule-set spades-trump N=7C E=3S S=KS W=9C
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from engine.cards import Card, card_label, parse_card
from engine.registry import DEFAULT_REGISTRY, RuleSetRegistry, UnknownRuleSetError
from engine.resolution import winning_play
from engine.trick import Trick, TrickError


def parse_play(token: str) -> Tuple[str, Card]:
    seat, sep, code = token.partition("=")
    if not sep or not seat or not code:
        raise ValueError(f"Expected SEAT=CARD, got {token!r}")
    return seat, parse_card(code)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve the winner of a trick.")
    parser.add_argument("plays", nargs="*", help="Plays in order, as SEAT=CARD (e.g. N=7C E=KS).")
    parser.add_argument("--rule-set", default="highest-card", help="Rule set id.")
    parser.add_argument("--rules-file", type=Path, default=None, help="JSON rule set catalog to use instead of the built-ins.")
    parser.add_argument("--list", action="store_true", help="List the available rule sets and exit.")
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    registry = RuleSetRegistry.from_file(args.rules_file) if args.rules_file else DEFAULT_REGISTRY

    if args.list:
        for index, rule_set in enumerate(registry.list()):
            print(f"[{index}] {rule_set.id}: {rule_set.name} - {rule_set.description}")
        return 0

    try:
        rule_set = registry.resolve(args.rule_set)
        plays: List[Tuple[str, Card]] = [parse_play(token) for token in args.plays]
        play = winning_play(Trick.from_plays(plays), rule_set)
    except (UnknownRuleSetError, TrickError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(f"{play.seat} wins with the {card_label(play.card)} under {rule_set.name}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
