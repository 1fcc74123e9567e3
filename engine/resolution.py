"""Trick resolution.

A rule set picks its ranking behaviour through field values only. Resolution
runs a fixed cascade of candidate filters:

1. trumps, when the rule set names a trump suit and one was played;
2. lead-suit plays, when the rule set ranks within the lead suit;
3. every play in the trick.

The first filter that yields candidates decides, and the highest rank among
those candidates wins. Equal ranks can only meet across suits, and then the
earlier play keeps the trick.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from .cards import Suit, rank_value
from .rules_schema import RuleSet
from .trick import IncompleteTrickError, Play, Seat, Trick, TrickError

CandidateFilter = Callable[[Sequence[Play], Suit, RuleSet], Optional[Sequence[Play]]]


def trump_candidates(plays: Sequence[Play], led: Suit, rule_set: RuleSet) -> Optional[Sequence[Play]]:
    if rule_set.trump_suit is None:
        return None
    return [play for play in plays if play.card.suit is rule_set.trump_suit]


def lead_suit_candidates(plays: Sequence[Play], led: Suit, rule_set: RuleSet) -> Optional[Sequence[Play]]:
    if rule_set.ranking_scope != "lead_suit":
        return None
    return [play for play in plays if play.card.suit is led]


def trick_candidates(plays: Sequence[Play], led: Suit, rule_set: RuleSet) -> Optional[Sequence[Play]]:
    return list(plays)


CASCADE: Tuple[CandidateFilter, ...] = (trump_candidates, lead_suit_candidates, trick_candidates)


def highest_play(plays: Sequence[Play]) -> Play:
    best = plays[0]
    for play in plays[1:]:
        if rank_value(play.card) > rank_value(best.card):
            best = play
    return best


def leading_play(trick: Trick, rule_set: RuleSet) -> Play:
    """Return the play currently holding the trick; works on open tricks too."""
    if trick.is_empty():
        raise TrickError("Cannot determine winner on empty trick.")
    trick.check_shape()
    led = trick.lead_suit()
    assert led is not None
    for candidates_for in CASCADE:
        candidates = candidates_for(trick.plays, led, rule_set)
        if candidates:
            return highest_play(candidates)
    # trick_candidates never comes back empty for a non-empty trick.
    raise AssertionError("Resolution cascade produced no candidates.")


def winning_play(trick: Trick, rule_set: RuleSet) -> Play:
    if not trick.is_full():
        raise IncompleteTrickError(
            f"Trick has {len(trick.plays)} of {trick.table_size} plays; cannot resolve winner."
        )
    return leading_play(trick, rule_set)


def resolve_winner(trick: Trick, rule_set: RuleSet) -> Seat:
    """Return the seat that wins a closed trick under ``rule_set``."""
    return winning_play(trick, rule_set).seat
