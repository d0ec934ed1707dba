"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .cards import Card, Suit, beats


class TrickError(RuntimeError):
    """Raised when trick resolution is asked of an empty trick."""


@dataclass(frozen=True)
class Trick:
    plays: Tuple[Tuple[str, Card], ...] = ()
    lead_suit: Optional[Suit] = None

    def is_empty(self) -> bool:
        return not self.plays

    def with_play(self, player_id: str, card: Card) -> "Trick":
        # The first number card sets the lead suit; specials leave it open.
        lead = self.lead_suit
        if lead is None and card.is_number():
            lead = card.suit
        return replace(self, plays=self.plays + ((player_id, card),), lead_suit=lead)

    def is_complete(self, player_count: int) -> bool:
        return len(self.plays) == player_count

    def cards(self) -> Tuple[Card, ...]:
        return tuple(card for _, card in self.plays)

    def winning_play(self, trump: Optional[Suit]) -> Tuple[str, Card]:
        if not self.plays:
            raise TrickError("Cannot determine winner on empty trick.")
        winning_player, winning_card = self.plays[0]
        for player_id, card in self.plays[1:]:
            if beats(card, winning_card, self.lead_suit, trump):
                winning_player, winning_card = player_id, card
        return winning_player, winning_card
