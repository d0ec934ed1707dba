"""Round scoring helpers for Wizard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Tuple

if TYPE_CHECKING:
    from .state import Player

BASE_BONUS = 20
POINTS_PER_TRICK = 10


class ScoringError(ValueError):
    """Raised when a round is scored before every player has bid."""


@dataclass(frozen=True)
class RoundScore:
    player_id: str
    bid: int
    tricks_won: int
    delta: int
    total: int


def round_score(bid: int, tricks_won: int) -> int:
    if tricks_won == bid:
        return BASE_BONUS + POINTS_PER_TRICK * bid
    return -POINTS_PER_TRICK * abs(tricks_won - bid)


def score_round(players: Iterable["Player"]) -> Tuple[RoundScore, ...]:
    results = []
    for player in players:
        if player.bid is None:
            raise ScoringError(f"Player {player.id} has no bid to score.")
        delta = round_score(player.bid, player.tricks_won)
        results.append(
            RoundScore(
                player_id=player.id,
                bid=player.bid,
                tricks_won=player.tricks_won,
                delta=delta,
                total=player.score + delta,
            )
        )
    return tuple(results)
