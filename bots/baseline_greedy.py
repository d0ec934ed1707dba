"""Baseline greedy bot."""

from __future__ import annotations

from typing import List, Optional

from wizard.cards import Card, Suit
from wizard.state import Game

from .base import BotStrategy, allowed_bids, playable_cards


def _strength(card: Card, trump: Optional[Suit]) -> int:
    if card.is_wizard():
        return 100
    if card.is_jester():
        return 0
    assert card.value is not None
    return card.value + (20 if trump is not None and card.suit is trump else 0)


def _likely_winners(hand: List[Card], trump: Optional[Suit]) -> int:
    count = 0
    for card in hand:
        if card.is_wizard():
            count += 1
        elif card.is_number() and card.value is not None:
            if trump is not None and card.suit is trump and card.value >= 10:
                count += 1
            elif card.value == 13:
                count += 1
    return count


class GreedyBot(BotStrategy):
    name = "Greedy"

    def choose_trump(self, game: Game, player_id: str) -> Suit:
        hand = game.require_player(player_id).hand
        counts = {suit: 0 for suit in Suit}
        for card in hand:
            if card.suit is not None:
                counts[card.suit] += 1
        return max(Suit, key=lambda suit: counts[suit])

    def choose_bid(self, game: Game, player_id: str) -> int:
        hand = list(game.require_player(player_id).hand)
        target = _likely_winners(hand, game.trump_suit)
        options = allowed_bids(game)
        return min(options, key=lambda bid: (abs(bid - target), bid))

    def choose_card(self, game: Game, player_id: str) -> Card:
        player = game.require_player(player_id)
        legal = playable_cards(game, player_id)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        trump = game.trump_suit
        ranked = sorted(legal, key=lambda card: _strength(card, trump))
        wants_tricks = player.bid is not None and player.tricks_won < player.bid

        if not wants_tricks:
            return ranked[0]

        winners = [card for card in ranked if self._would_lead_trick(game, player_id, card)]
        return winners[0] if winners else ranked[0]

    @staticmethod
    def _would_lead_trick(game: Game, player_id: str, card: Card) -> bool:
        trick = game.current_trick.with_play(player_id, card)
        winner_id, _ = trick.winning_play(game.trump_suit)
        return winner_id == player_id
