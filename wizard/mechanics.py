"""Legal move generation for Wizard."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import Card, Suit


def can_follow(hand: Iterable[Card], lead_suit: Suit) -> bool:
    return any(card.is_number() and card.suit is lead_suit for card in hand)


def legal_moves(hand: Iterable[Card], lead_suit: Optional[Suit]) -> List[Card]:
    """Return the subset of cards that are legal to play given the lead suit.

    Wizards and Jesters may always be played. Holding the lead suit obliges
    the player to follow it; otherwise any card goes.
    """
    cards = list(hand)
    if lead_suit is None or not can_follow(cards, lead_suit):
        return cards
    return [card for card in cards if not card.is_number() or card.suit is lead_suit]
