"""Convenience service layer for transports and bots.

The engine itself is pure; this facade is the single writer for each hosted
game. It keeps the latest snapshot per game id, applies one intent at a time
under that game's lock, swaps the snapshot in only when the use-case
succeeds, and forwards the emitted events to subscribers before releasing
the lock. Listeners therefore must not submit intents for the same game from
inside the callback.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from . import lobby, play, social, undo
from .cards import Suit
from .encode import game_to_dict
from .errors import GameError, GameNotFoundError
from .events import GameEvent
from .game import Transition
from .rules_schema import RoomSettings, RuleSet
from .state import Game

logger = logging.getLogger(__name__)

EventListener = Callable[[str, GameEvent], None]

INTENTS = frozenset(
    {
        "join",
        "leave",
        "add_bot",
        "remove_bot",
        "replace_with_bot",
        "start",
        "select_trump",
        "place_bid",
        "play_card",
        "end_round",
        "request_undo",
        "approve_undo",
        "reject_undo",
        "request_rematch",
        "send_chat",
        "send_emote",
    }
)


class GameService:
    """Facade hosting many games, serializing intents per game."""

    def __init__(self) -> None:
        self._games: Dict[str, Game] = {}
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._registry_lock = threading.Lock()
        self._listeners: List[EventListener] = []

    # Registry ----------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def create_game(
        self,
        game_id: str,
        host_id: str,
        host_name: str,
        *,
        rules: Optional[RuleSet] = None,
        room: Optional[RoomSettings] = None,
        seed: Optional[int] = None,
    ) -> List[GameEvent]:
        with self._registry_lock:
            if game_id in self._games:
                raise ValueError(f"Game {game_id} already exists.")
            game, events = lobby.create_game(game_id, host_id, host_name, rules=rules, room=room, seed=seed)
            self._games[game_id] = game
        logger.info("Game %s created by %s", game_id, host_id)
        self._publish(game_id, events)
        return events

    def get_game(self, game_id: str) -> Game:
        game = self._games.get(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def discard_game(self, game_id: str) -> None:
        with self._registry_lock:
            if self._games.pop(game_id, None) is None:
                raise GameNotFoundError(game_id)
            self._locks.pop(game_id, None)

    def game_ids(self) -> List[str]:
        return sorted(self._games)

    def get_view(self, game_id: str, perspective: Optional[str] = None) -> Dict[str, Any]:
        return game_to_dict(self.get_game(game_id), perspective)

    # Intents -----------------------------------------------------------

    def dispatch(self, game_id: str, intent: str, **payload: Any) -> List[GameEvent]:
        """Route a named intent, e.g. ``dispatch("g1", "place_bid", player_id="p2", bid=1)``."""
        if intent not in INTENTS:
            raise ValueError(f"Unknown intent: {intent}")
        return getattr(self, intent)(game_id, **payload)

    def join(self, game_id: str, player_id: str, name: str, password: Optional[str] = None) -> List[GameEvent]:
        return self._apply(game_id, lobby.join_game, player_id, name, password=password)

    def leave(self, game_id: str, player_id: str) -> List[GameEvent]:
        return self._apply(game_id, lobby.leave_game, player_id)

    def add_bot(self, game_id: str, player_id: str) -> List[GameEvent]:
        return self._apply(game_id, lobby.add_bot, player_id)

    def remove_bot(self, game_id: str, player_id: str, bot_id: str) -> List[GameEvent]:
        return self._apply(game_id, lobby.remove_bot, player_id, bot_id)

    def replace_with_bot(self, game_id: str, player_id: str) -> List[GameEvent]:
        return self._apply(game_id, lobby.replace_with_bot, player_id)

    def start(self, game_id: str, player_id: str) -> List[GameEvent]:
        return self._apply(game_id, play.start_game, player_id)

    def select_trump(self, game_id: str, player_id: str, suit: Suit) -> List[GameEvent]:
        return self._apply(game_id, play.select_trump, player_id, suit)

    def place_bid(self, game_id: str, player_id: str, bid: int) -> List[GameEvent]:
        return self._apply(game_id, play.place_bid, player_id, bid)

    def play_card(self, game_id: str, player_id: str, card_id: str) -> List[GameEvent]:
        return self._apply(game_id, play.play_card, player_id, card_id)

    def end_round(self, game_id: str, player_id: str) -> List[GameEvent]:
        return self._apply(game_id, play.end_round, player_id)

    def request_undo(self, game_id: str, player_id: str, reason: str = "") -> List[GameEvent]:
        return self._apply(game_id, undo.request_undo, player_id, reason)

    def approve_undo(self, game_id: str, player_id: str) -> List[GameEvent]:
        return self._apply(game_id, undo.approve_undo, player_id)

    def reject_undo(self, game_id: str, player_id: str) -> List[GameEvent]:
        return self._apply(game_id, undo.reject_undo, player_id)

    def request_rematch(self, game_id: str, player_id: str) -> List[GameEvent]:
        return self._apply(game_id, social.request_rematch, player_id)

    def send_chat(self, game_id: str, player_id: str, message: str) -> List[GameEvent]:
        return self._apply(game_id, social.send_chat, player_id, message)

    def send_emote(self, game_id: str, player_id: str, emote_id: str) -> List[GameEvent]:
        return self._apply(game_id, social.send_emote, player_id, emote_id)

    # Helpers -----------------------------------------------------------

    def _apply(self, game_id: str, use_case: Callable[..., Transition], *args: Any, **kwargs: Any) -> List[GameEvent]:
        with self._lock_for(game_id):
            game = self.get_game(game_id)
            try:
                new_game, events = use_case(game, *args, **kwargs)
            except GameError as exc:
                logger.info("Game %s: %s rejected (%s)", game_id, use_case.__name__, exc.code)
                raise
            self._games[game_id] = new_game
            # Listeners see each game's events in the order its intents were applied.
            self._publish(game_id, events)
        return events

    def _lock_for(self, game_id: str) -> threading.Lock:
        with self._registry_lock:
            if game_id not in self._games:
                raise GameNotFoundError(game_id)
            return self._locks[game_id]

    def _publish(self, game_id: str, events: List[GameEvent]) -> None:
        for event in events:
            for listener in self._listeners:
                listener(game_id, event)
