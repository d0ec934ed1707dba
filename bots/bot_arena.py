"""Simple bot arena for Wizard.

Drives a bot-only table through the public use-cases, exactly as a
transport would submit intents on the bots' behalf.
"""

from __future__ import annotations

import argparse
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from wizard import lobby, play
from wizard.events import GameEvent
from wizard.rules_schema import RuleSet
from wizard.state import Game, GamePhase

from .base import BotStrategy
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "greedy": GreedyBot,
    "random": RandomBot,
}


def take_bot_turn(game: Game, bots: Mapping[str, BotStrategy]) -> Tuple[Game, List[GameEvent]]:
    """Apply the decision of whichever bot is due to act."""
    if game.phase is GamePhase.TRUMP_SELECTION:
        dealer = game.dealer()
        assert dealer is not None
        suit = bots[dealer.id].choose_trump(game, dealer.id)
        return play.select_trump(game, dealer.id, suit)
    if game.phase is GamePhase.ROUND_END:
        return play.end_round(game, game.host_id)

    current = game.current_player()
    if current is None:
        raise RuntimeError(f"No bot can act in phase {game.phase}.")
    strategy = bots[current.id]
    if game.phase is GamePhase.BIDDING:
        return play.place_bid(game, current.id, strategy.choose_bid(game, current.id))
    card = strategy.choose_card(game, current.id)
    return play.play_card(game, current.id, card.id)


def play_game(
    strategies: Sequence[BotStrategy],
    *,
    seed: Optional[int] = None,
    rules: Optional[RuleSet] = None,
) -> Tuple[Game, List[GameEvent]]:
    """Seat one bot per strategy and play a full game to the end."""
    if not strategies:
        raise ValueError("At least one strategy is required.")
    seats = [(f"seat-{index + 1}", f"{strategy.name} {index + 1}") for index, strategy in enumerate(strategies)]
    host_id, host_name = seats[0]
    game, events = lobby.create_game("arena", host_id, host_name, rules=rules, seed=seed)
    for player_id, name in seats[1:]:
        game, seat_events = lobby.join_game(game, player_id, name)
        events.extend(seat_events)
    bots: Dict[str, BotStrategy] = {player_id: strategy for (player_id, _), strategy in zip(seats, strategies)}

    game, started = play.start_game(game, host_id)
    events.extend(started)
    while game.phase is not GamePhase.GAME_END:
        game, step_events = take_bot_turn(game, bots)
        events.extend(step_events)
    return game, events


def run_match(
    strategies: Sequence[BotStrategy],
    *,
    n_games: int = 1,
    seed: Optional[int] = None,
    rules: Optional[RuleSet] = None,
) -> dict:
    wins = [0] * len(strategies)
    history = []
    for idx in range(n_games):
        game_seed = None if seed is None else seed + idx
        game, _ = play_game(strategies, seed=game_seed, rules=rules)
        scores = [player.score for player in game.players]
        winner = game.winner()
        assert winner is not None
        wins[game.seat_of(winner.id)] += 1
        history.append({"scores": scores, "winner": winner.id})
    return {"wins": wins, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument("--bots", nargs="+", default=["greedy", "random", "random"], choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    strategies = [BOT_REGISTRY[name]() for name in args.bots]
    results = run_match(strategies, n_games=args.n, seed=args.seed)

    print(f"Wins after {args.n} games: {dict(zip(args.bots, results['wins']))}")
    for entry in results["history"]:
        print(f"  scores {entry['scores']} winner {entry['winner']}")


if __name__ == "__main__":
    main()
