"""Lobby and seat management use-cases.

Each use-case takes the current Game snapshot and returns ``(new_game,
events)`` or raises a GameError without producing anything.
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import List, Optional

from .errors import (
    GameAlreadyStartedError,
    InvalidPhaseError,
    InvalidRoomPasswordError,
    MaxPlayersReachedError,
    NotHostError,
    PlayerAlreadyInGameError,
    PlayerNotFoundError,
    RoomFullError,
)
from .events import (
    GameEvent,
    GamePaused,
    GameResumed,
    HostChanged,
    PlayerJoined,
    PlayerLeft,
    PlayerReconnected,
)
from .game import Transition, drop_snapshot, reject_pending_undo, transfer_host
from .rules_schema import DEFAULT_ROOM, DEFAULT_RULES, RoomSettings, RuleSet
from .state import Game, GamePhase, Player

BOT_NAMES = [
    "WizardBot", "MagicBot", "TrickBot", "CardBot", "BidBot",
    "JesterBot", "TrumpBot", "DealerBot", "ShuffleBot", "AceBot",
    "SpellBot", "MysticBot", "SorcererBot", "EnchantBot", "CharmBot",
]


def create_game(
    game_id: str,
    host_id: str,
    host_name: str,
    *,
    rules: Optional[RuleSet] = None,
    room: Optional[RoomSettings] = None,
    seed: Optional[int] = None,
) -> Transition:
    """Open a lobby with the host already seated."""
    if seed is None:
        seed = random.SystemRandom().randrange(2**31)
    game = Game(
        id=game_id,
        host_id=host_id,
        players=(Player(id=host_id, name=host_name),),
        rules=rules or DEFAULT_RULES,
        room=room or DEFAULT_ROOM,
        seed=seed,
    )
    return game, [PlayerJoined(player_id=host_id, player_name=host_name)]


def join_game(game: Game, player_id: str, player_name: str, *, password: Optional[str] = None) -> Transition:
    """Seat a new player in the lobby, or bring a disconnected player back."""
    existing = game.get_player(player_id)
    if existing is not None:
        if existing.is_present():
            raise PlayerAlreadyInGameError(player_id)
        return _reconnect(game, existing, player_name)

    if game.phase is not GamePhase.WAITING:
        raise GameAlreadyStartedError()
    if game.room.password is not None and password != game.room.password:
        raise InvalidRoomPasswordError()
    if len(game.players) >= game.seat_limit():
        raise RoomFullError()

    joined = replace(game, players=game.players + (Player(id=player_id, name=player_name),))
    if not game.players:
        joined = replace(joined, host_id=player_id)
    return joined, [PlayerJoined(player_id=player_id, player_name=player_name)]


def _reconnect(game: Game, player: Player, player_name: str) -> Transition:
    returned = game.with_player(replace(player, is_connected=True, name=player_name))
    events: List[GameEvent] = [PlayerReconnected(player_id=player.id, player_name=player_name)]

    host = returned.get_player(returned.host_id)
    if host is None or not host.is_connected:
        # Nobody connected holds the host seat; the returning player takes it.
        returned = replace(returned, host_id=player.id)
        events.append(HostChanged(previous_host_id=game.host_id, new_host_id=player.id))

    resumed, resume_events = _resume_if_complete(returned, player.id, player_name)
    return resumed, events + resume_events


def _resume_if_complete(game: Game, player_id: str, player_name: str, *, replaced: bool = False) -> Transition:
    if game.phase is not GamePhase.PAUSED:
        return game, []
    if any(not player.is_present() for player in game.players):
        return game, []
    assert game.paused_phase is not None
    resumed = replace(game, phase=game.paused_phase, paused_phase=None)
    return resumed, [GameResumed(player_id=player_id, player_name=player_name, replaced_with_bot=replaced)]


def leave_game(game: Game, player_id: str) -> Transition:
    """Handle a player leaving or dropping their connection.

    In the lobby the seat is freed. Once the game has started nobody is
    removed: the player is marked disconnected, any pending undo is rejected
    and the game pauses until they come back or are replaced by a bot.
    """
    player = game.require_player(player_id)

    if game.phase is GamePhase.WAITING:
        handed_over, events = transfer_host(game, player_id)
        remaining = tuple(seat for seat in handed_over.players if seat.id != player_id)
        left: List[GameEvent] = [PlayerLeft(player_id=player_id, removed=True)]
        return replace(handed_over, players=remaining), left + events

    if not player.is_connected or player.is_bot:
        return game, []

    marked = game.with_player(replace(player, is_connected=False))
    events: List[GameEvent] = [PlayerLeft(player_id=player_id, removed=False)]

    marked, undo_events = reject_pending_undo(marked, "disconnected", player_id)
    events.extend(undo_events)
    marked = drop_snapshot(marked)

    marked, host_events = transfer_host(marked, player_id)
    events.extend(host_events)

    if marked.is_active():
        marked = replace(marked, phase=GamePhase.PAUSED, paused_phase=marked.phase)
        events.append(GamePaused(player_id=player_id, player_name=player.name))
    return marked, events


def replace_with_bot(game: Game, player_id: str) -> Transition:
    """Hand a disconnected player's seat to a bot after the reconnect window ran out."""
    if game.phase is not GamePhase.PAUSED:
        raise InvalidPhaseError(GamePhase.PAUSED.value, game.phase.value)
    player = game.require_player(player_id)
    if player.is_present():
        raise PlayerAlreadyInGameError(player_id)

    bot_name = f"Bot {player.name}"
    converted = game.with_player(replace(player, name=bot_name, is_bot=True, is_connected=True))
    events: List[GameEvent] = [PlayerJoined(player_id=player_id, player_name=bot_name, is_bot=True)]
    resumed, resume_events = _resume_if_complete(converted, player_id, bot_name, replaced=True)
    return resumed, events + resume_events


def add_bot(game: Game, player_id: str) -> Transition:
    if game.host_id != player_id:
        raise NotHostError("add bots")
    if game.phase is not GamePhase.WAITING:
        raise InvalidPhaseError(GamePhase.WAITING.value, game.phase.value)
    limit = game.seat_limit()
    if len(game.players) >= limit:
        raise MaxPlayersReachedError(limit)

    counter = game.bot_counter + 1
    bot_id = f"bot-{counter}"
    while game.get_player(bot_id) is not None:
        counter += 1
        bot_id = f"bot-{counter}"
    bot_name = BOT_NAMES[counter % len(BOT_NAMES)]

    bot = Player(id=bot_id, name=bot_name, is_bot=True)
    added = replace(game, players=game.players + (bot,), bot_counter=counter)
    return added, [PlayerJoined(player_id=bot_id, player_name=bot_name, is_bot=True)]


def remove_bot(game: Game, player_id: str, bot_id: str) -> Transition:
    if game.host_id != player_id:
        raise NotHostError("remove bots")
    if game.phase is not GamePhase.WAITING:
        raise InvalidPhaseError(GamePhase.WAITING.value, game.phase.value)
    bot = game.get_player(bot_id)
    if bot is None or not bot.is_bot:
        raise PlayerNotFoundError(bot_id)

    remaining = tuple(seat for seat in game.players if seat.id != bot_id)
    return replace(game, players=remaining), [PlayerLeft(player_id=bot_id, removed=True)]
