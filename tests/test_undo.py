import pytest

from conftest import make_lobby, settle_trump
from wizard import lobby, play, undo
from wizard.errors import (
    GameNotStartedError,
    NoActiveUndoRequestError,
    UndoAlreadyPendingError,
    UndoNotAvailableError,
)
from wizard.events import GameEventType
from wizard.mechanics import legal_moves
from wizard.state import GamePhase


def _after_first_bid(game):
    bid_game, _ = play.place_bid(game, "p2", 0)
    return bid_game


def test_every_connected_player_must_approve(started_game):
    game = _after_first_bid(started_game)
    assert game.last_actor_id == "p2"

    game, events = undo.request_undo(game, "p2", "misclick")
    assert events[0].type is GameEventType.UNDO_REQUESTED
    assert events[0].required_approvals == 3

    game, events = undo.approve_undo(game, "p3")
    assert game.undo_request is not None
    assert (events[0].approvals, events[0].required_approvals) == (2, 3)
    with pytest.raises(UndoNotAvailableError):
        undo.approve_undo(game, "p3")

    game, events = undo.approve_undo(game, "p1")
    assert events[-1].type is GameEventType.UNDO_APPLIED
    assert game.players == started_game.players
    assert game.require_player("p2").bid is None
    assert game.current_player().id == "p2"
    assert game.undo_request is None and game.previous is None


def test_only_last_actor_may_ask(started_game):
    game = _after_first_bid(started_game)
    with pytest.raises(UndoNotAvailableError):
        undo.request_undo(game, "p3")


def test_nothing_to_undo_in_lobby_or_before_any_action(lobby_game, started_game):
    with pytest.raises(GameNotStartedError):
        undo.request_undo(lobby_game, "p1")
    with pytest.raises(UndoNotAvailableError):
        undo.request_undo(started_game, "p2")


def test_single_pending_request(started_game):
    game, _ = undo.request_undo(_after_first_bid(started_game), "p2")
    with pytest.raises(UndoAlreadyPendingError):
        undo.request_undo(game, "p2")


def test_rejection_keeps_the_action(started_game):
    with pytest.raises(NoActiveUndoRequestError):
        undo.reject_undo(started_game, "p1")
    with pytest.raises(NoActiveUndoRequestError):
        undo.approve_undo(started_game, "p1")

    game, _ = undo.request_undo(_after_first_bid(started_game), "p2")
    game, events = undo.reject_undo(game, "p1")
    assert events[0].type is GameEventType.UNDO_REJECTED
    assert events[0].reason == "rejected"
    assert game.undo_request is None
    assert game.require_player("p2").bid == 0


def test_next_action_supersedes_pending_request(started_game):
    game, _ = undo.request_undo(_after_first_bid(started_game), "p2")
    game, events = play.place_bid(game, "p3", 0)
    assert events[0].type is GameEventType.UNDO_REJECTED
    assert events[0].reason == "superseded"
    assert game.undo_request is None
    assert game.last_actor_id == "p3"


def test_disconnect_rejects_pending_request(started_game):
    game, _ = undo.request_undo(_after_first_bid(started_game), "p2")
    game, events = lobby.leave_game(game, "p3")
    assert GameEventType.UNDO_REJECTED in [event.type for event in events]
    assert game.undo_request is None
    assert game.previous is None


def test_bots_approve_automatically():
    game = make_lobby(1)
    game, _ = lobby.add_bot(game, "p1")
    game, _ = lobby.add_bot(game, "p1")
    game, _ = play.start_game(game, "p1")
    game = settle_trump(game)
    game, _ = play.place_bid(game, "bot-1", 0)
    game, _ = play.place_bid(game, "bot-2", 0)
    before = game
    game, _ = play.place_bid(game, "p1", 0)
    assert game.phase is GamePhase.PLAYING

    game, events = undo.request_undo(game, "p1")
    assert [event.type for event in events] == [GameEventType.UNDO_REQUESTED, GameEventType.UNDO_APPLIED]
    assert game.phase is GamePhase.BIDDING
    assert game.players == before.players


def test_round_closing_card_cannot_be_undone(playing_game):
    game = playing_game
    actor = None
    while game.round == 1:
        current = game.current_player()
        actor = current.id
        card = legal_moves(current.hand, game.current_trick.lead_suit)[0]
        game, _ = play.play_card(game, current.id, card.id)
    with pytest.raises(UndoNotAvailableError):
        undo.request_undo(game, actor)
