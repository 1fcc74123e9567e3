"""Validation schema for rule set configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .cards import Suit, parse_suit

RankingScope = Literal["trick", "lead_suit"]


class RuleSet(BaseModel):
    """One named rule policy.

    The resolver reads only the policy fields (``trump_suit``,
    ``follow_suit_required``, ``ranking_scope``); ``id`` is a lookup key.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable identifier used for lookup.")
    name: str = Field(..., min_length=1)
    description: str = ""
    follow_suit_required: bool = Field(False, description="Players must follow the lead suit when able.")
    trump_suit: Optional[Suit] = Field(None, description="Suit whose cards beat every other suit.")
    ranking_scope: Optional[RankingScope] = Field(
        None,
        description="Which plays compete on rank once trumps are settled. Defaults from follow_suit_required.",
    )

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized or any(ch.isspace() for ch in normalized):
            raise ValueError(f"Rule set id must be a single token: {value!r}")
        return normalized

    @field_validator("trump_suit", mode="before")
    @classmethod
    def validate_trump_suit(cls, value: Union[str, Suit, None]) -> Optional[Suit]:
        if value is None or value == "":
            return None
        return parse_suit(value)

    @model_validator(mode="after")
    def fill_ranking_scope(self) -> "RuleSet":
        if self.ranking_scope is None:
            # Frozen model: the default is derived from the parsed flag.
            scope = "lead_suit" if self.follow_suit_required else "trick"
            object.__setattr__(self, "ranking_scope", scope)
        return self

    def summary(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "description": self.description}


class RuleSetCatalog(BaseModel):
    rule_sets: list[RuleSet]

    @field_validator("rule_sets")
    def ensure_unique_ids(cls, value: list[RuleSet]) -> list[RuleSet]:
        if not value:
            raise ValueError("Catalog must define at least one rule set.")
        seen: set[str] = set()
        for rule_set in value:
            if rule_set.id in seen:
                raise ValueError(f"Duplicate rule set id: {rule_set.id!r}")
            seen.add(rule_set.id)
        return value


def load_catalog(path: Union[str, Path]) -> RuleSetCatalog:
    """Read a JSON catalog: either ``{"rule_sets": [...]}`` or a bare list."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, list):
        payload = {"rule_sets": payload}
    return RuleSetCatalog.model_validate(payload)
