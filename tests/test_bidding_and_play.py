from dataclasses import replace

import pytest

from conftest import any_allowed_bid, bid_all, make_lobby, start
from wizard import play
from wizard.bidding import forbidden_bid
from wizard.cards import Suit, number_card
from wizard.errors import (
    CardNotFoundError,
    CardNotPlayableError,
    ForbiddenBidError,
    GameAlreadyStartedError,
    InvalidBidError,
    InvalidPhaseError,
    InvalidSuitError,
    NotDealerError,
    NotEnoughPlayersError,
    NotHostError,
    NotYourTurnError,
)
from wizard.events import BiddingComplete, GameEventType, GameStarted
from wizard.mechanics import legal_moves
from wizard.rules_schema import RuleSet
from wizard.state import GamePhase
from wizard.trick import Trick


def test_start_game_deals_round_one(lobby_game):
    game, events = play.start_game(lobby_game, "p1")
    assert isinstance(events[0], GameStarted)
    assert events[0].max_rounds == 20
    assert game.round == 1
    assert game.max_rounds == 20
    assert game.phase in (GamePhase.BIDDING, GamePhase.TRUMP_SELECTION)
    assert all(len(player.hand) == 1 for player in game.players)
    assert game.dealer().id == "p1"
    assert game.players[game.turn_index].id == "p2"


def test_start_game_guards(lobby_game):
    with pytest.raises(NotHostError):
        play.start_game(lobby_game, "p2")
    with pytest.raises(NotEnoughPlayersError):
        play.start_game(make_lobby(2), "p1")
    started, _ = play.start_game(lobby_game, "p1")
    with pytest.raises(GameAlreadyStartedError):
        play.start_game(started, "p1")


def test_bid_must_be_within_round(started_game):
    current = started_game.current_player()
    with pytest.raises(InvalidBidError):
        play.place_bid(started_game, current.id, 2)
    with pytest.raises(InvalidBidError):
        play.place_bid(started_game, current.id, -1)
    assert started_game.current_player() == current
    assert current.bid is None


def test_bid_out_of_turn(started_game):
    assert started_game.current_player().id == "p2"
    with pytest.raises(NotYourTurnError):
        play.place_bid(started_game, "p3", 0)


def test_last_bidder_cannot_even_out_the_round(started_game):
    game, _ = play.place_bid(started_game, "p2", 0)
    game, _ = play.place_bid(game, "p3", 0)
    assert forbidden_bid(game) == 1
    with pytest.raises(ForbiddenBidError):
        play.place_bid(game, "p1", 1)

    game, events = play.place_bid(game, "p1", 0)
    assert game.phase is GamePhase.PLAYING
    assert isinstance(events[-1], BiddingComplete)
    assert events[-1].first_player_id == "p2"
    assert game.current_player().id == "p2"


def test_forbidden_bid_rule_can_be_switched_off():
    game = start(make_lobby(rules=RuleSet(forbidden_bid_rule="off")))
    game, _ = play.place_bid(game, "p2", 0)
    game, _ = play.place_bid(game, "p3", 0)
    assert forbidden_bid(game) is None
    game, _ = play.place_bid(game, "p1", 1)
    assert game.phase is GamePhase.PLAYING


def test_bid_placed_names_the_next_bidder(started_game):
    _, events = play.place_bid(started_game, "p2", any_allowed_bid(started_game))
    assert events[-1].type is GameEventType.BID_PLACED
    assert events[-1].next_player_id == "p3"


def test_card_must_be_in_hand_and_turn(playing_game):
    leader = playing_game.current_player()
    other = playing_game.require_player("p3")
    with pytest.raises(CardNotFoundError):
        play.play_card(playing_game, leader.id, other.hand[0].id)
    with pytest.raises(NotYourTurnError):
        play.play_card(playing_game, "p3", other.hand[0].id)
    with pytest.raises(InvalidPhaseError):
        play.place_bid(playing_game, leader.id, 0)


def test_must_follow_suit(playing_game):
    game = playing_game.with_player(replace(playing_game.require_player("p2"), hand=(number_card(Suit.GIANTS, 5),)))
    game = game.with_player(
        replace(game.require_player("p3"), hand=(number_card(Suit.GIANTS, 2), number_card(Suit.ELVES, 9)))
    )
    game = replace(game, current_trick=Trick(), trump_suit=None)
    game, _ = play.play_card(game, "p2", "GIANTS-5")
    assert game.current_trick.lead_suit is Suit.GIANTS
    with pytest.raises(CardNotPlayableError):
        play.play_card(game, "p3", "ELVES-9")
    game, events = play.play_card(game, "p3", "GIANTS-2")
    assert events[-1].next_player_id == "p1"


def test_round_one_plays_out_and_deals_round_two(playing_game):
    game = playing_game
    all_events = []
    while game.round == 1:
        current = game.current_player()
        card = legal_moves(current.hand, game.current_trick.lead_suit)[0]
        game, events = play.play_card(game, current.id, card.id)
        all_events.extend(events)

    types = [event.type for event in all_events]
    assert types.count(GameEventType.CARD_PLAYED) == 3
    assert GameEventType.TRICK_COMPLETE in types
    assert GameEventType.ROUND_COMPLETE in types
    assert types[-2:] == [GameEventType.ROUND_STARTED, GameEventType.TRUMP_REVEALED]

    assert game.round == 2
    assert game.dealer().id == "p2"
    assert game.phase in (GamePhase.BIDDING, GamePhase.TRUMP_SELECTION)
    assert sum(player.round_history[0].tricks_won for player in game.players) == 1
    assert all(len(player.hand) == 2 and player.bid is None for player in game.players)
    assert sum(player.score for player in game.players) == sum(
        player.round_history[0].delta for player in game.players
    )


def test_host_advances_round_when_auto_advance_is_off():
    game = bid_all(start(make_lobby(rules=RuleSet(auto_advance_rounds=False))))
    while game.phase is GamePhase.PLAYING:
        current = game.current_player()
        card = legal_moves(current.hand, game.current_trick.lead_suit)[0]
        game, _ = play.play_card(game, current.id, card.id)

    assert game.phase is GamePhase.ROUND_END
    with pytest.raises(NotHostError):
        play.end_round(game, "p2")
    game, events = play.end_round(game, "p1")
    assert game.round == 2
    assert events[0].type is GameEventType.ROUND_STARTED


def test_only_the_dealer_names_trump(started_game):
    game = replace(started_game, phase=GamePhase.TRUMP_SELECTION, trump_suit=None)
    with pytest.raises(NotDealerError):
        play.select_trump(game, "p2", Suit.ELVES)
    game, events = play.select_trump(game, "p1", Suit.ELVES)
    assert game.phase is GamePhase.BIDDING
    assert game.trump_suit is Suit.ELVES
    assert events[-1].type is GameEventType.TRUMP_SELECTED


def test_unknown_trump_suit_is_rejected(started_game):
    game = replace(started_game, phase=GamePhase.TRUMP_SELECTION, trump_suit=None)
    with pytest.raises(InvalidSuitError):
        play.select_trump(game, "p1", "DRAGONS")
    game, _ = play.select_trump(game, "p1", "HUMANS")
    assert game.trump_suit is Suit.HUMANS
