"""Domain events emitted by the Wizard use-cases.

Each event is a frozen dataclass tagged with a ``GameEventType``; ``GameEvent``
is the closed union consumers match on.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from .cards import Card, Suit
from .scoring import RoundScore


class GameEventType(Enum):
    # Lobby
    PLAYER_JOINED = "PLAYER_JOINED"
    PLAYER_LEFT = "PLAYER_LEFT"
    PLAYER_RECONNECTED = "PLAYER_RECONNECTED"
    HOST_CHANGED = "HOST_CHANGED"

    # Game flow
    GAME_STARTED = "GAME_STARTED"
    ROUND_STARTED = "ROUND_STARTED"
    TRUMP_REVEALED = "TRUMP_REVEALED"
    TRUMP_SELECTED = "TRUMP_SELECTED"
    GAME_PAUSED = "GAME_PAUSED"
    GAME_RESUMED = "GAME_RESUMED"

    # Bidding
    BID_PLACED = "BID_PLACED"
    BIDDING_COMPLETE = "BIDDING_COMPLETE"

    # Playing
    CARD_PLAYED = "CARD_PLAYED"
    TRICK_COMPLETE = "TRICK_COMPLETE"
    ROUND_COMPLETE = "ROUND_COMPLETE"
    GAME_COMPLETE = "GAME_COMPLETE"

    # Social
    CHAT_MESSAGE = "CHAT_MESSAGE"
    EMOTE = "EMOTE"
    REMATCH_STARTED = "REMATCH_STARTED"

    # Undo
    UNDO_REQUESTED = "UNDO_REQUESTED"
    UNDO_APPROVED = "UNDO_APPROVED"
    UNDO_APPLIED = "UNDO_APPLIED"
    UNDO_REJECTED = "UNDO_REJECTED"


@dataclass(frozen=True, kw_only=True)
class BaseEvent:
    timestamp: float = field(default_factory=time.time)


# Lobby -------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class PlayerJoined(BaseEvent):
    type: GameEventType = field(default=GameEventType.PLAYER_JOINED, init=False)
    player_id: str
    player_name: str
    is_bot: bool = False


@dataclass(frozen=True, kw_only=True)
class PlayerLeft(BaseEvent):
    type: GameEventType = field(default=GameEventType.PLAYER_LEFT, init=False)
    player_id: str
    removed: bool


@dataclass(frozen=True, kw_only=True)
class PlayerReconnected(BaseEvent):
    type: GameEventType = field(default=GameEventType.PLAYER_RECONNECTED, init=False)
    player_id: str
    player_name: str


@dataclass(frozen=True, kw_only=True)
class HostChanged(BaseEvent):
    type: GameEventType = field(default=GameEventType.HOST_CHANGED, init=False)
    previous_host_id: str
    new_host_id: str


# Game flow ---------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class GameStarted(BaseEvent):
    type: GameEventType = field(default=GameEventType.GAME_STARTED, init=False)
    player_ids: Tuple[str, ...]
    max_rounds: int


@dataclass(frozen=True, kw_only=True)
class RoundStarted(BaseEvent):
    type: GameEventType = field(default=GameEventType.ROUND_STARTED, init=False)
    round: int
    dealer_id: str


@dataclass(frozen=True, kw_only=True)
class TrumpRevealed(BaseEvent):
    type: GameEventType = field(default=GameEventType.TRUMP_REVEALED, init=False)
    trump_card: Optional[Card]
    trump_suit: Optional[Suit]
    dealer_must_choose: bool


@dataclass(frozen=True, kw_only=True)
class TrumpSelected(BaseEvent):
    type: GameEventType = field(default=GameEventType.TRUMP_SELECTED, init=False)
    player_id: str
    trump_suit: Suit


@dataclass(frozen=True, kw_only=True)
class GamePaused(BaseEvent):
    type: GameEventType = field(default=GameEventType.GAME_PAUSED, init=False)
    player_id: str
    player_name: str


@dataclass(frozen=True, kw_only=True)
class GameResumed(BaseEvent):
    type: GameEventType = field(default=GameEventType.GAME_RESUMED, init=False)
    player_id: str
    player_name: str
    replaced_with_bot: bool = False


# Bidding -----------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class BidPlaced(BaseEvent):
    type: GameEventType = field(default=GameEventType.BID_PLACED, init=False)
    player_id: str
    bid: int
    next_player_id: Optional[str]


@dataclass(frozen=True, kw_only=True)
class BiddingComplete(BaseEvent):
    type: GameEventType = field(default=GameEventType.BIDDING_COMPLETE, init=False)
    first_player_id: str
    total_bids: int


# Playing -----------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class CardPlayed(BaseEvent):
    type: GameEventType = field(default=GameEventType.CARD_PLAYED, init=False)
    player_id: str
    card: Card
    next_player_id: Optional[str]


@dataclass(frozen=True, kw_only=True)
class TrickComplete(BaseEvent):
    type: GameEventType = field(default=GameEventType.TRICK_COMPLETE, init=False)
    winner_id: str
    trick_index: int
    plays: Tuple[Tuple[str, Card], ...]


@dataclass(frozen=True, kw_only=True)
class RoundComplete(BaseEvent):
    type: GameEventType = field(default=GameEventType.ROUND_COMPLETE, init=False)
    round: int
    scores: Tuple[RoundScore, ...]


@dataclass(frozen=True, kw_only=True)
class GameComplete(BaseEvent):
    type: GameEventType = field(default=GameEventType.GAME_COMPLETE, init=False)
    winner_id: str
    final_scores: Tuple[Tuple[str, int], ...]


# Social ------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class ChatMessage(BaseEvent):
    type: GameEventType = field(default=GameEventType.CHAT_MESSAGE, init=False)
    player_id: str
    player_name: str
    message: str


@dataclass(frozen=True, kw_only=True)
class Emote(BaseEvent):
    type: GameEventType = field(default=GameEventType.EMOTE, init=False)
    player_id: str
    player_name: str
    emote_id: str


@dataclass(frozen=True, kw_only=True)
class RematchStarted(BaseEvent):
    type: GameEventType = field(default=GameEventType.REMATCH_STARTED, init=False)


# Undo --------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class UndoRequested(BaseEvent):
    type: GameEventType = field(default=GameEventType.UNDO_REQUESTED, init=False)
    requester_id: str
    requester_name: str
    reason: str
    required_approvals: int


@dataclass(frozen=True, kw_only=True)
class UndoApproved(BaseEvent):
    type: GameEventType = field(default=GameEventType.UNDO_APPROVED, init=False)
    player_id: str
    approvals: int
    required_approvals: int


@dataclass(frozen=True, kw_only=True)
class UndoApplied(BaseEvent):
    type: GameEventType = field(default=GameEventType.UNDO_APPLIED, init=False)
    requester_id: str


@dataclass(frozen=True, kw_only=True)
class UndoRejected(BaseEvent):
    type: GameEventType = field(default=GameEventType.UNDO_REJECTED, init=False)
    player_id: Optional[str]
    reason: str


GameEvent = Union[
    PlayerJoined,
    PlayerLeft,
    PlayerReconnected,
    HostChanged,
    GameStarted,
    RoundStarted,
    TrumpRevealed,
    TrumpSelected,
    GamePaused,
    GameResumed,
    BidPlaced,
    BiddingComplete,
    CardPlayed,
    TrickComplete,
    RoundComplete,
    GameComplete,
    ChatMessage,
    Emote,
    RematchStarted,
    UndoRequested,
    UndoApproved,
    UndoApplied,
    UndoRejected,
]
