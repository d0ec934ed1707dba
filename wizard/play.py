"""Game-flow use-cases: starting, trump selection, bidding, card play and round advance."""

from __future__ import annotations

from dataclasses import replace
from typing import List

from .bidding import validate_bid
from .cards import Suit
from .errors import (
    CardNotFoundError,
    CardNotPlayableError,
    GameAlreadyStartedError,
    InvalidPhaseError,
    InvalidSuitError,
    MaxPlayersReachedError,
    NotDealerError,
    NotEnoughPlayersError,
    NotHostError,
    NotYourTurnError,
)
from .events import BidPlaced, CardPlayed, GameEvent, GameStarted, PlayerLeft, TrumpSelected
from .game import (
    Transition,
    advance_round,
    deal_round,
    next_seat,
    record_undoable,
    reject_pending_undo,
    resolve_trick,
    start_play,
)
from .mechanics import legal_moves
from .state import Game, GamePhase


def _require_phase(game: Game, expected: GamePhase) -> None:
    if game.phase is not expected:
        raise InvalidPhaseError(expected.value, game.phase.value)


def _require_turn(game: Game, player_id: str, action: str) -> None:
    current = game.current_player()
    if current is None or current.id != player_id:
        raise NotYourTurnError(action)


def start_game(game: Game, player_id: str) -> Transition:
    """Host starts the game: seats are fixed and round one is dealt.

    Disconnected seats carried over from a rematch are released first; only
    connected players and bots count towards the minimum.
    """
    if game.phase is not GamePhase.WAITING:
        raise GameAlreadyStartedError()
    if game.host_id != player_id:
        raise NotHostError("start the game")
    seated = tuple(player for player in game.players if player.is_present())
    if len(seated) < game.rules.min_players:
        raise NotEnoughPlayersError(game.rules.min_players, len(seated))
    if len(seated) > game.seat_limit():
        raise MaxPlayersReachedError(game.seat_limit())

    events: List[GameEvent] = [
        PlayerLeft(player_id=player.id, removed=True) for player in game.players if not player.is_present()
    ]
    seated_game = replace(
        game,
        players=seated,
        max_rounds=game.rules.rounds_for(len(seated)),
        round=0,
        dealer_index=0,
    )
    events.append(GameStarted(player_ids=tuple(p.id for p in seated), max_rounds=seated_game.max_rounds))
    dealt, deal_events = deal_round(seated_game, 1, 0)
    return dealt, events + deal_events


def select_trump(game: Game, player_id: str, suit: Suit) -> Transition:
    """The dealer names trump after a Wizard was turned up."""
    _require_phase(game, GamePhase.TRUMP_SELECTION)
    game.require_player(player_id)
    dealer = game.dealer()
    if dealer is None or dealer.id != player_id:
        raise NotDealerError()
    try:
        suit = Suit(suit)
    except ValueError as exc:
        raise InvalidSuitError(suit) from exc

    cleared, events = reject_pending_undo(game, "superseded")
    selected = replace(cleared, trump_suit=suit, phase=GamePhase.BIDDING)
    events.append(TrumpSelected(player_id=player_id, trump_suit=suit))
    return record_undoable(game, selected, player_id), events


def place_bid(game: Game, player_id: str, bid: int) -> Transition:
    """Record one player's bid; the last bid of the round starts trick play."""
    _require_phase(game, GamePhase.BIDDING)
    player = game.require_player(player_id)
    _require_turn(game, player_id, "bid")
    validate_bid(game, bid)

    cleared, events = reject_pending_undo(game, "superseded")
    updated = cleared.with_player(replace(player, bid=bid))

    if updated.bids_placed() == len(updated.players):
        started, start_events = start_play(updated)
        events.append(BidPlaced(player_id=player_id, bid=bid, next_player_id=None))
        events.extend(start_events)
        return record_undoable(game, started, player_id), events

    advanced = replace(updated, turn_index=next_seat(updated, updated.turn_index))
    events.append(
        BidPlaced(player_id=player_id, bid=bid, next_player_id=advanced.players[advanced.turn_index].id)
    )
    return record_undoable(game, advanced, player_id), events


def play_card(game: Game, player_id: str, card_id: str) -> Transition:
    """Play one card into the current trick, resolving tricks and rounds as they complete."""
    _require_phase(game, GamePhase.PLAYING)
    player = game.require_player(player_id)
    _require_turn(game, player_id, "play")
    card = player.find_card(card_id)
    if card is None:
        raise CardNotFoundError(card_id)
    if card not in legal_moves(player.hand, game.current_trick.lead_suit):
        raise CardNotPlayableError(card_id)

    cleared, events = reject_pending_undo(game, "superseded")
    played = cleared.with_player(player.without_card(card))
    trick = game.current_trick.with_play(player_id, card)
    played = replace(played, current_trick=trick)

    if trick.is_complete(len(played.players)):
        resolved, trick_events = resolve_trick(played)
    else:
        resolved, trick_events = replace(played, turn_index=next_seat(played, played.turn_index)), []

    next_player = resolved.current_player() if resolved.phase is GamePhase.PLAYING else None
    events.append(
        CardPlayed(player_id=player_id, card=card, next_player_id=next_player.id if next_player else None)
    )
    events.extend(trick_events)
    return record_undoable(game, resolved, player_id), events


def end_round(game: Game, player_id: str) -> Transition:
    """Host deals the next round once the scores have been shown."""
    _require_phase(game, GamePhase.ROUND_END)
    if game.host_id != player_id:
        raise NotHostError("start the next round")
    return advance_round(game)
