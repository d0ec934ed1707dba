"""Typed rule violations raised by the Wizard use-cases.

Every error is a validation failure: it is raised before any new state is
built, carries a stable ``code`` for clients plus the structured context
needed to phrase a message, and is never retried by the engine.
"""

from __future__ import annotations

from typing import Optional


class GameError(Exception):
    """Base class for all game rule violations."""

    code = "GAME_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"[{self.code}] {message}")


# Authorization -----------------------------------------------------------


class NotHostError(GameError):
    code = "NOT_HOST"

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Only the host can {action}.")


class NotYourTurnError(GameError):
    code = "NOT_YOUR_TURN"

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Not your turn to {action}.")


class NotDealerError(GameError):
    code = "NOT_DEALER"

    def __init__(self) -> None:
        super().__init__("Only the dealer can select trump.")


# Game state --------------------------------------------------------------


class InvalidPhaseError(GameError):
    code = "INVALID_PHASE"

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Cannot perform this action. Expected phase: {expected}, current: {actual}.")


class GameNotStartedError(GameError):
    code = "GAME_NOT_STARTED"

    def __init__(self) -> None:
        super().__init__("Game has not started yet.")


class GameAlreadyStartedError(GameError):
    code = "GAME_ALREADY_STARTED"

    def __init__(self) -> None:
        super().__init__("Game has already started.")


class GameNotFoundError(GameError):
    code = "GAME_NOT_FOUND"

    def __init__(self, game_id: str) -> None:
        self.game_id = game_id
        super().__init__(f"Game not found: {game_id}")


# Players -----------------------------------------------------------------


class PlayerNotFoundError(GameError):
    code = "PLAYER_NOT_FOUND"

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Player not found: {player_id}")


class PlayerAlreadyInGameError(GameError):
    code = "PLAYER_ALREADY_IN_GAME"

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Player already in game: {player_id}")


class MaxPlayersReachedError(GameError):
    code = "MAX_PLAYERS_REACHED"

    def __init__(self, max_players: int) -> None:
        self.max_players = max_players
        super().__init__(f"Maximum {max_players} players allowed.")


class NotEnoughPlayersError(GameError):
    code = "NOT_ENOUGH_PLAYERS"

    def __init__(self, min_players: int, current_players: int) -> None:
        self.min_players = min_players
        self.current_players = current_players
        super().__init__(f"Need at least {min_players} players to start (currently {current_players}).")


# Cards -------------------------------------------------------------------


class CardNotFoundError(GameError):
    code = "CARD_NOT_FOUND"

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(f"Card not in hand: {card_id}")


class CardNotPlayableError(GameError):
    code = "CARD_NOT_PLAYABLE"

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(f"Cannot play card {card_id} - must follow suit.")


class InvalidCardValueError(GameError):
    code = "INVALID_CARD_VALUE"

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Invalid card value: {value}. Must be between 1 and 13.")


class InvalidSuitError(GameError):
    code = "INVALID_SUIT"

    def __init__(self, suit: object) -> None:
        self.suit = suit
        super().__init__(f"Unknown suit: {suit}")


# Bidding -----------------------------------------------------------------


class InvalidBidError(GameError):
    code = "INVALID_BID"

    def __init__(self, bid: int, max_bid: int) -> None:
        self.bid = bid
        self.max_bid = max_bid
        super().__init__(f"Invalid bid: {bid}. Must be between 0 and {max_bid}.")


class ForbiddenBidError(GameError):
    code = "FORBIDDEN_BID"

    def __init__(self, bid: int, round_number: int) -> None:
        self.bid = bid
        self.round_number = round_number
        super().__init__(f"Cannot bid {bid} - total bids cannot equal {round_number}.")


# Undo --------------------------------------------------------------------


class UndoNotAvailableError(GameError):
    code = "UNDO_NOT_AVAILABLE"

    def __init__(self, reason: Optional[str] = None) -> None:
        self.reason = reason or "Nothing to undo."
        super().__init__(self.reason)


class UndoAlreadyPendingError(GameError):
    code = "UNDO_ALREADY_PENDING"

    def __init__(self) -> None:
        super().__init__("An undo request is already pending.")


class NoActiveUndoRequestError(GameError):
    code = "NO_ACTIVE_UNDO_REQUEST"

    def __init__(self) -> None:
        super().__init__("No active undo request.")


# Room --------------------------------------------------------------------


class RoomFullError(GameError):
    code = "ROOM_FULL"

    def __init__(self) -> None:
        super().__init__("Room is full.")


class InvalidRoomPasswordError(GameError):
    code = "INVALID_ROOM_PASSWORD"

    def __init__(self) -> None:
        super().__init__("Invalid room password.")
