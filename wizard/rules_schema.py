"""Validation schema for Wizard rules and room configuration."""

from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .deck import DECK_SIZE

ABSOLUTE_MIN_PLAYERS = 3
ABSOLUTE_MAX_PLAYERS = 6


class RuleSet(BaseModel):
    """Table rules shared by every game of a room."""

    model_config = ConfigDict(frozen=True)

    min_players: int = Field(
        ABSOLUTE_MIN_PLAYERS,
        ge=ABSOLUTE_MIN_PLAYERS,
        le=ABSOLUTE_MAX_PLAYERS,
        description="Minimum number of seated players required to start.",
    )
    max_players: int = Field(
        ABSOLUTE_MAX_PLAYERS,
        ge=ABSOLUTE_MIN_PLAYERS,
        le=ABSOLUTE_MAX_PLAYERS,
        description="Maximum number of seats at the table.",
    )
    max_rounds: Optional[int] = Field(
        None,
        ge=1,
        description="Rounds to play; defaults to 60 // player count when unset.",
    )
    forbidden_bid_rule: Literal["last_bidder", "off"] = Field(
        "last_bidder",
        description="Whether the last bidder may make total bids equal the tricks available.",
    )
    auto_advance_rounds: bool = Field(
        True,
        description="Deal the next round as soon as a round is scored instead of waiting for the host.",
    )
    chat_max_length: int = Field(100, ge=1, description="Chat messages are truncated to this length.")
    host_transfer: Literal["next_seat", "first_joined"] = Field(
        "next_seat",
        description="Who becomes host when the host leaves: next connected seat clockwise, or earliest seat.",
    )

    @model_validator(mode="after")
    def check_player_bounds(self) -> "RuleSet":
        if self.max_players < self.min_players:
            raise ValueError(f"max_players ({self.max_players}) must be >= min_players ({self.min_players})")
        return self

    def rounds_for(self, player_count: int) -> int:
        available = DECK_SIZE // player_count
        if self.max_rounds is None:
            return available
        return min(self.max_rounds, available)


class RoomSettings(BaseModel):
    """Per-room lobby settings chosen by the host."""

    model_config = ConfigDict(frozen=True)

    name: str = Field("Wizard table", min_length=1, max_length=40)
    is_public: bool = True
    max_players: Optional[int] = Field(
        None,
        ge=ABSOLUTE_MIN_PLAYERS,
        le=ABSOLUTE_MAX_PLAYERS,
        description="Seat limit for this room; falls back to the rule set's limit.",
    )
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def blank_password_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    def seat_limit(self, rules: RuleSet) -> int:
        if self.max_players is None:
            return rules.max_players
        return min(self.max_players, rules.max_players)


DEFAULT_RULES = RuleSet()
DEFAULT_ROOM = RoomSettings()


def load_rules(config: Optional[Mapping[str, Any]] = None) -> RuleSet:
    """Validate a plain mapping (e.g. parsed JSON) into a RuleSet."""
    if not config:
        return DEFAULT_RULES
    return RuleSet.model_validate(dict(config))
