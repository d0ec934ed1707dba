"""Core rules engine package for Wizard."""

__all__ = [
    "cards",
    "deck",
    "trick",
    "mechanics",
    "bidding",
    "scoring",
    "errors",
    "events",
    "state",
    "rules_schema",
    "game",
    "lobby",
    "play",
    "undo",
    "social",
    "encode",
    "service",
]
