"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import List

from wizard.bidding import forbidden_bid
from wizard.cards import Card, Suit
from wizard.mechanics import legal_moves
from wizard.state import Game


def playable_cards(game: Game, player_id: str) -> List[Card]:
    player = game.require_player(player_id)
    return legal_moves(player.hand, game.current_trick.lead_suit)


def allowed_bids(game: Game) -> List[int]:
    blocked = forbidden_bid(game)
    return [bid for bid in range(game.cards_this_round() + 1) if bid != blocked]


class BotStrategy:
    """Base class for bot policies.

    Strategies only decide; the caller submits the decision through the same
    use-cases a human goes through.
    """

    name: str = "BaseBot"

    def choose_trump(self, game: Game, player_id: str) -> Suit:
        """Return the trump suit to name after a Wizard is turned up."""
        return Suit.GIANTS

    def choose_bid(self, game: Game, player_id: str) -> int:
        """Return a bid that the forbidden-bid rule allows."""
        return allowed_bids(game)[0]

    def choose_card(self, game: Game, player_id: str) -> Card:
        """Return a card that is legal in the current trick."""
        legal = playable_cards(game, player_id)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return legal[0]
