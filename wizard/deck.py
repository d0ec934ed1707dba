"""Deck creation and dealing utilities for Wizard."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import MAX_VALUE, MIN_VALUE, SPECIAL_COPIES, Card, Suit, jester, number_card, wizard

DECK_SIZE = 60


def build_deck() -> List[Card]:
    """Return the ordered 60-card deck: 52 number cards, 4 Wizards, 4 Jesters."""
    cards = [number_card(suit, value) for suit in Suit for value in range(MIN_VALUE, MAX_VALUE + 1)]
    cards.extend(wizard(copy) for copy in range(SPECIAL_COPIES))
    cards.extend(jester(copy) for copy in range(SPECIAL_COPIES))
    return cards


def round_seed(seed: int, round_number: int) -> int:
    """Derive the shuffle seed of one round from the game seed."""
    return seed * 1_000 + round_number


def deal_round(
    cards_per_player: int,
    player_count: int,
    *,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
) -> Tuple[List[List[Card]], Optional[Card]]:
    """Deal ``cards_per_player`` cards to each seat and flip the trump card.

    The trump card is None when the whole deck has been dealt.
    """
    if deck is not None:
        cards = list(deck)
    else:
        cards = build_deck()
        if rng is None:
            rng = Random()
        rng.shuffle(cards)
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")
    if cards_per_player * player_count > DECK_SIZE:
        raise ValueError(f"Cannot deal {cards_per_player} cards to {player_count} players.")

    hands = [
        cards[seat * cards_per_player : (seat + 1) * cards_per_player]
        for seat in range(player_count)
    ]
    dealt = cards_per_player * player_count
    trump_card = cards[dealt] if dealt < DECK_SIZE else None
    return hands, trump_card
