"""Read-only catalog of the rule sets a table can be played under."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Tuple, Union

from .cards import Suit
from .rules_schema import RuleSet, RuleSetCatalog, load_catalog


class UnknownRuleSetError(LookupError):
    """Raised when a rule set id (or picker index) is not registered."""


HIGHEST_CARD = RuleSet(
    id="highest-card",
    name="Highest Card Wins",
    description="The highest card value wins the trick",
    follow_suit_required=False,
    trump_suit=None,
)

SUIT_FOLLOWS = RuleSet(
    id="suit-follows",
    name="Suit Follows",
    description="Must follow lead suit, highest of lead suit wins",
    follow_suit_required=True,
    trump_suit=None,
)

SPADES_TRUMP = RuleSet(
    id="spades-trump",
    name="Spades Trump",
    description="Spades are trump cards and beat all other suits",
    follow_suit_required=True,
    trump_suit=Suit.SPADES,
)

DEFAULT_RULE_SETS: Tuple[RuleSet, ...] = (HIGHEST_CARD, SUIT_FOLLOWS, SPADES_TRUMP)


class RuleSetRegistry:
    """Rule sets in registration order, keyed by id.

    Populated once in ``__init__``; there is no way to add or remove entries
    afterwards, so one instance can be shared by any number of tables.
    """

    def __init__(self, rule_sets: Iterable[RuleSet]) -> None:
        ordered = tuple(rule_sets)
        if not ordered:
            raise ValueError("Registry needs at least one rule set.")
        by_id: Dict[str, RuleSet] = {}
        for rule_set in ordered:
            if rule_set.id in by_id:
                raise ValueError(f"Duplicate rule set id: {rule_set.id!r}")
            by_id[rule_set.id] = rule_set
        self._ordered = ordered
        self._by_id = by_id

    @classmethod
    def from_catalog(cls, catalog: RuleSetCatalog) -> "RuleSetRegistry":
        return cls(catalog.rule_sets)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RuleSetRegistry":
        return cls.from_catalog(load_catalog(path))

    def resolve(self, rule_set_id: str) -> RuleSet:
        try:
            return self._by_id[rule_set_id]
        except KeyError:
            raise UnknownRuleSetError(f"Unknown rule set: {rule_set_id!r}") from None

    def list(self) -> Tuple[RuleSet, ...]:
        return self._ordered

    def by_index(self, index: int) -> RuleSet:
        """Map a picker position to its rule set."""
        if not 0 <= index < len(self._ordered):
            raise UnknownRuleSetError(f"No rule set at position {index}.")
        return self._ordered[index]

    def index_of(self, rule_set_id: str) -> int:
        return self._ordered.index(self.resolve(rule_set_id))

    def summaries(self) -> list[dict[str, str]]:
        return [rule_set.summary() for rule_set in self._ordered]

    def __contains__(self, rule_set_id: object) -> bool:
        return rule_set_id in self._by_id

    def __len__(self) -> int:
        return len(self._ordered)


DEFAULT_REGISTRY = RuleSetRegistry(DEFAULT_RULE_SETS)
