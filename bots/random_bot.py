"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from wizard.cards import Card, Suit
from wizard.state import Game

from .base import BotStrategy, allowed_bids, playable_cards


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_trump(self, game: Game, player_id: str) -> Suit:
        return self._rng.choice(list(Suit))

    def choose_bid(self, game: Game, player_id: str) -> int:
        return self._rng.choice(allowed_bids(game))

    def choose_card(self, game: Game, player_id: str) -> Card:
        legal = playable_cards(game, player_id)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return self._rng.choice(legal)
