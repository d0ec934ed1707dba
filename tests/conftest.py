from typing import Optional

import pytest

from wizard import lobby, play
from wizard.bidding import forbidden_bid
from wizard.cards import Suit
from wizard.rules_schema import RoomSettings, RuleSet
from wizard.state import Game, GamePhase

NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank"]


def make_lobby(
    n_players: int = 3,
    *,
    rules: Optional[RuleSet] = None,
    room: Optional[RoomSettings] = None,
    seed: int = 11,
) -> Game:
    game, _ = lobby.create_game("g1", "p1", NAMES[0], rules=rules, room=room, seed=seed)
    for index in range(1, n_players):
        game, _ = lobby.join_game(game, f"p{index + 1}", NAMES[index], password=room.password if room else None)
    return game


def settle_trump(game: Game) -> Game:
    if game.phase is GamePhase.TRUMP_SELECTION:
        dealer = game.dealer()
        assert dealer is not None
        game, _ = play.select_trump(game, dealer.id, Suit.GIANTS)
    return game


def start(game: Game) -> Game:
    game, _ = play.start_game(game, game.host_id)
    return settle_trump(game)


def any_allowed_bid(game: Game) -> int:
    blocked = forbidden_bid(game)
    return 0 if blocked != 0 else 1


def bid_all(game: Game) -> Game:
    while game.phase is GamePhase.BIDDING:
        current = game.current_player()
        assert current is not None
        game, _ = play.place_bid(game, current.id, any_allowed_bid(game))
    return game


@pytest.fixture
def lobby_game() -> Game:
    return make_lobby()


@pytest.fixture
def started_game() -> Game:
    return start(make_lobby())


@pytest.fixture
def playing_game() -> Game:
    return bid_all(start(make_lobby()))
