"""Social use-cases: chat, emotes and rematch."""

from __future__ import annotations

import re
from typing import Optional

from .errors import InvalidPhaseError, NotHostError
from .events import ChatMessage, Emote, RematchStarted
from .game import Transition
from .state import Game, GamePhase

_MARKUP = re.compile(r"[<>]")


def sanitize_chat(message: str, max_length: int = 100) -> str:
    """Truncate first, then strip angle brackets."""
    return _MARKUP.sub("", message[:max_length])


def send_chat(game: Game, player_id: str, message: str) -> Transition:
    player = game.require_player(player_id)
    text = sanitize_chat(message, game.rules.chat_max_length)
    return game, [ChatMessage(player_id=player_id, player_name=player.name, message=text)]


def send_emote(game: Game, player_id: str, emote_id: str) -> Transition:
    player = game.require_player(player_id)
    return game, [Emote(player_id=player_id, player_name=player.name, emote_id=emote_id)]


def request_rematch(game: Game, player_id: str, *, seed: Optional[int] = None) -> Transition:
    """Build a fresh lobby with the same roster once a game is over.

    The finished game is left untouched; the caller replaces it with the
    returned one.
    """
    if game.phase is not GamePhase.GAME_END:
        raise InvalidPhaseError(GamePhase.GAME_END.value, game.phase.value)
    if game.host_id != player_id:
        raise NotHostError("start a rematch")

    rematch = Game(
        id=game.id,
        host_id=game.host_id,
        players=tuple(player.fresh_seat() for player in game.players),
        rules=game.rules,
        room=game.room,
        seed=seed if seed is not None else game.seed + 1,
        bot_counter=game.bot_counter,
    )
    return rematch, [RematchStarted()]
