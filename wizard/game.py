"""Round orchestration shared by the Wizard use-cases.

These are pure transitions: each takes a Game snapshot and returns a new
snapshot together with the events describing what happened. Validation
lives in the use-case modules; nothing here raises GameError.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from random import Random
from typing import List, Optional, Tuple

from .deck import deal_round as deal_cards, round_seed
from .events import (
    BiddingComplete,
    GameComplete,
    GameEvent,
    HostChanged,
    RoundComplete,
    RoundStarted,
    TrickComplete,
    TrumpRevealed,
    UndoRejected,
)
from .scoring import score_round
from .state import Game, GamePhase, Player
from .trick import Trick

logger = logging.getLogger(__name__)

Transition = Tuple[Game, List[GameEvent]]


def next_seat(game: Game, index: int) -> int:
    return (index + 1) % len(game.players)


def deal_round(game: Game, round_number: int, dealer_index: int) -> Transition:
    """Shuffle, deal ``round_number`` cards to every seat and reveal trump."""
    rng = Random(round_seed(game.seed, round_number))
    hands, trump_card = deal_cards(round_number, len(game.players), rng=rng)
    players = tuple(
        player.reset_for_round(tuple(hand)) for player, hand in zip(game.players, hands)
    )

    dealer_must_choose = trump_card is not None and trump_card.is_wizard()
    if trump_card is None or trump_card.is_jester() or dealer_must_choose:
        trump_suit = None
    else:
        trump_suit = trump_card.suit
    phase = GamePhase.TRUMP_SELECTION if dealer_must_choose else GamePhase.BIDDING

    dealt = replace(
        game,
        phase=phase,
        players=players,
        round=round_number,
        trump_card=trump_card,
        trump_suit=trump_suit,
        dealer_index=dealer_index,
        turn_index=(dealer_index + 1) % len(players),
        current_trick=Trick(),
        tricks_played=0,
        undo_request=None,
        previous=None,
        last_actor_id=None,
    )
    logger.debug(
        "Game %s: dealt round %d (dealer %s, trump card %s)",
        game.id,
        round_number,
        players[dealer_index].id,
        trump_card,
    )
    events: List[GameEvent] = [
        RoundStarted(round=round_number, dealer_id=players[dealer_index].id),
        TrumpRevealed(trump_card=trump_card, trump_suit=trump_suit, dealer_must_choose=dealer_must_choose),
    ]
    return dealt, events


def advance_round(game: Game) -> Transition:
    return deal_round(game, game.round + 1, next_seat(game, game.dealer_index))


def start_play(game: Game) -> Transition:
    """All bids are in: the seat left of the dealer leads the first trick."""
    leader = next_seat(game, game.dealer_index)
    started = replace(game, phase=GamePhase.PLAYING, turn_index=leader, current_trick=Trick())
    return started, [BiddingComplete(first_player_id=game.players[leader].id, total_bids=started.total_bids())]


def resolve_trick(game: Game) -> Transition:
    """Award the completed trick and either continue the round or close it."""
    trick = game.current_trick
    winner_id, winning_card = trick.winning_play(game.trump_suit)
    winner = game.require_player(winner_id)
    resolved = game.with_player(replace(winner, tricks_won=winner.tricks_won + 1))
    resolved = replace(
        resolved,
        current_trick=Trick(),
        tricks_played=game.tricks_played + 1,
        turn_index=game.seat_of(winner_id),
    )
    logger.debug("Game %s: trick %d won by %s with %s", game.id, game.tricks_played, winner_id, winning_card)
    events: List[GameEvent] = [
        TrickComplete(winner_id=winner_id, trick_index=game.tricks_played, plays=trick.plays)
    ]

    if resolved.tricks_played < resolved.cards_this_round():
        return resolved, events

    closed, close_events = close_round(resolved)
    return closed, events + close_events


def close_round(game: Game) -> Transition:
    """Apply the round's scores to every player at once, then move on."""
    scores = score_round(game.players)
    players = tuple(
        replace(player, score=result.total, round_history=player.round_history + (result,))
        for player, result in zip(game.players, scores)
    )
    scored = replace(
        game,
        players=players,
        phase=GamePhase.ROUND_END,
        undo_request=None,
        previous=None,
        last_actor_id=None,
    )
    logger.debug("Game %s: round %d scored %s", game.id, game.round, [s.delta for s in scores])
    events: List[GameEvent] = [RoundComplete(round=game.round, scores=scores)]

    if scored.round >= scored.max_rounds:
        finished = replace(scored, phase=GamePhase.GAME_END)
        winner = finished.winner()
        assert winner is not None
        events.append(
            GameComplete(
                winner_id=winner.id,
                final_scores=tuple((player.id, player.score) for player in finished.players),
            )
        )
        return finished, events

    if scored.rules.auto_advance_rounds:
        advanced, deal_events = advance_round(scored)
        return advanced, events + deal_events
    return scored, events


def choose_new_host(game: Game, leaving_id: str) -> Optional[Player]:
    """Pick a successor for a departing host according to the room policy.

    Connected humans are preferred over bots. A disconnected human is only
    chosen when nobody else is left, so the host always holds a seat while
    any seat remains.
    """
    seat = game.seat_of(leaving_id)
    if game.rules.host_transfer == "next_seat":
        count = len(game.players)
        order = [game.players[(seat + step) % count] for step in range(1, count)]
    else:
        order = [player for player in game.players if player.id != leaving_id]

    humans = [player for player in order if not player.is_bot and player.is_connected]
    if humans:
        return humans[0]
    bots = [player for player in order if player.is_bot]
    if bots:
        return bots[0]
    return order[0] if order else None


def transfer_host(game: Game, leaving_id: str) -> Transition:
    if game.host_id != leaving_id:
        return game, []
    successor = choose_new_host(game, leaving_id)
    if successor is None:
        return game, []
    logger.debug("Game %s: host moved from %s to %s", game.id, leaving_id, successor.id)
    return replace(game, host_id=successor.id), [
        HostChanged(previous_host_id=leaving_id, new_host_id=successor.id)
    ]


def reject_pending_undo(game: Game, reason: str, player_id: Optional[str] = None) -> Transition:
    if game.undo_request is None:
        return game, []
    return replace(game, undo_request=None), [UndoRejected(player_id=player_id, reason=reason)]


def record_undoable(before: Game, after: Game, actor_id: str) -> Game:
    """Attach the single retained snapshot that the undo protocol can restore.

    Actions that closed a round already dropped their snapshot and stay
    irreversible.
    """
    if after.round != before.round or after.phase in (GamePhase.ROUND_END, GamePhase.GAME_END):
        return after
    snapshot = replace(before, previous=None, undo_request=None)
    return replace(after, previous=snapshot, last_actor_id=actor_id)


def drop_snapshot(game: Game) -> Game:
    if game.previous is None and game.last_actor_id is None:
        return game
    return replace(game, previous=None, last_actor_id=None)
