"""Rule-set driven trick-taking engine."""

__all__ = [
    "cards",
    "deck",
    "rules_schema",
    "registry",
    "trick",
    "mechanics",
    "resolution",
    "state",
    "game",
    "service",
]
