"""Game state for Wizard: the Player entity and the Game aggregate.

Both are frozen dataclasses. Use-cases never patch a snapshot; they build a
new one with ``dataclasses.replace`` and hand it back to the caller, which
makes every intent all-or-nothing and lets the undo protocol restore the
previous snapshot as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .cards import Card, Suit
from .errors import PlayerNotFoundError
from .rules_schema import DEFAULT_ROOM, DEFAULT_RULES, RoomSettings, RuleSet
from .scoring import RoundScore
from .trick import Trick


class GamePhase(Enum):
    WAITING = "WAITING"
    TRUMP_SELECTION = "TRUMP_SELECTION"
    BIDDING = "BIDDING"
    PLAYING = "PLAYING"
    ROUND_END = "ROUND_END"
    PAUSED = "PAUSED"
    GAME_END = "GAME_END"

    def __str__(self) -> str:
        return self.value


ACTIVE_PHASES = frozenset(
    {GamePhase.TRUMP_SELECTION, GamePhase.BIDDING, GamePhase.PLAYING, GamePhase.ROUND_END}
)


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    is_bot: bool = False
    is_connected: bool = True
    hand: Tuple[Card, ...] = ()
    bid: Optional[int] = None
    tricks_won: int = 0
    score: int = 0
    round_history: Tuple[RoundScore, ...] = ()

    def has_card(self, card_id: str) -> bool:
        return any(card.id == card_id for card in self.hand)

    def find_card(self, card_id: str) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def without_card(self, card: Card) -> "Player":
        hand = list(self.hand)
        hand.remove(card)
        return replace(self, hand=tuple(hand))

    def is_present(self) -> bool:
        """Bots are always present; humans only while connected."""
        return self.is_bot or self.is_connected

    def reset_for_round(self, hand: Tuple[Card, ...] = ()) -> "Player":
        return replace(self, hand=hand, bid=None, tricks_won=0)

    def fresh_seat(self) -> "Player":
        """Same identity and connection, everything earned in play cleared."""
        return Player(id=self.id, name=self.name, is_bot=self.is_bot, is_connected=self.is_connected)


@dataclass(frozen=True)
class UndoRequest:
    requester_id: str
    reason: str = ""
    approvals: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class Game:
    id: str
    host_id: str
    phase: GamePhase = GamePhase.WAITING
    players: Tuple[Player, ...] = ()
    round: int = 0
    max_rounds: int = 0
    trump_suit: Optional[Suit] = None
    trump_card: Optional[Card] = None
    dealer_index: int = 0
    turn_index: int = 0
    current_trick: Trick = field(default_factory=Trick)
    tricks_played: int = 0
    undo_request: Optional[UndoRequest] = None
    rules: RuleSet = DEFAULT_RULES
    room: RoomSettings = DEFAULT_ROOM
    seed: int = 0
    bot_counter: int = 0
    paused_phase: Optional[GamePhase] = None
    last_actor_id: Optional[str] = None
    previous: Optional["Game"] = field(default=None, compare=False, repr=False)

    # Lookups -----------------------------------------------------------

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def require_player(self, player_id: str) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    def seat_of(self, player_id: str) -> int:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        raise PlayerNotFoundError(player_id)

    def current_player(self) -> Optional[Player]:
        if not self.players or self.phase not in (GamePhase.BIDDING, GamePhase.PLAYING):
            return None
        return self.players[self.turn_index]

    def dealer(self) -> Optional[Player]:
        if not self.players or self.phase is GamePhase.WAITING:
            return None
        return self.players[self.dealer_index]

    def connected_players(self) -> Tuple[Player, ...]:
        return tuple(player for player in self.players if player.is_present())

    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    def seat_limit(self) -> int:
        return self.room.seat_limit(self.rules)

    # Round facts -------------------------------------------------------

    def cards_this_round(self) -> int:
        return self.round

    def bids_placed(self) -> int:
        return sum(1 for player in self.players if player.bid is not None)

    def total_bids(self) -> int:
        return sum(player.bid or 0 for player in self.players)

    def winner(self) -> Optional[Player]:
        if self.phase is not GamePhase.GAME_END or not self.players:
            return None
        best = self.players[0]
        for player in self.players[1:]:
            if player.score > best.score:
                best = player
        return best

    # Structural helpers ------------------------------------------------

    def with_player(self, player: Player) -> "Game":
        players = tuple(player if seat.id == player.id else seat for seat in self.players)
        return replace(self, players=players)
