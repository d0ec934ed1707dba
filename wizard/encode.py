"""Plain-dict encoding of game snapshots and events for transports."""

from __future__ import annotations

from dataclasses import fields
from enum import Enum
from typing import Any, Dict, Optional

from .bidding import forbidden_bid
from .cards import Card, card_label, serialize_card
from .events import GameEvent
from .mechanics import legal_moves
from .scoring import RoundScore
from .state import Game, GamePhase, Player


def encode_value(value: Any) -> Any:
    if isinstance(value, Card):
        return serialize_card(value)
    if isinstance(value, RoundScore):
        return {
            "playerId": value.player_id,
            "bid": value.bid,
            "tricksWon": value.tricks_won,
            "delta": value.delta,
            "total": value.total,
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, list)):
        return [encode_value(item) for item in value]
    return value


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def event_to_dict(event: GameEvent) -> Dict[str, Any]:
    return {_camel(f.name): encode_value(getattr(event, f.name)) for f in fields(event)}


def player_to_dict(player: Player, *, reveal_hand: bool) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": player.id,
        "name": player.name,
        "isBot": player.is_bot,
        "isConnected": player.is_connected,
        "handCount": len(player.hand),
        "bid": player.bid,
        "tricksWon": player.tricks_won,
        "score": player.score,
        "roundHistory": encode_value(player.round_history),
    }
    if reveal_hand:
        payload["hand"] = [serialize_card(card) for card in player.hand]
        payload["handLabels"] = [card_label(card) for card in player.hand]
    return payload


def game_to_dict(game: Game, perspective: Optional[str] = None) -> Dict[str, Any]:
    """Render a snapshot; only ``perspective``'s own hand is revealed."""
    current = game.current_player()
    dealer = game.dealer()
    payload: Dict[str, Any] = {
        "id": game.id,
        "hostId": game.host_id,
        "phase": game.phase.value,
        "pausedPhase": game.paused_phase.value if game.paused_phase else None,
        "round": game.round,
        "maxRounds": game.max_rounds,
        "trumpSuit": game.trump_suit.value if game.trump_suit else None,
        "trumpCard": serialize_card(game.trump_card) if game.trump_card else None,
        "dealerId": dealer.id if dealer else None,
        "currentPlayerId": current.id if current else None,
        "players": [player_to_dict(p, reveal_hand=p.id == perspective) for p in game.players],
        "currentTrick": {
            "leadSuit": game.current_trick.lead_suit.value if game.current_trick.lead_suit else None,
            "plays": [
                {"playerId": player_id, "card": serialize_card(card)}
                for player_id, card in game.current_trick.plays
            ],
        },
        "tricksPlayed": game.tricks_played,
        "forbiddenBid": forbidden_bid(game) if game.phase is GamePhase.BIDDING else None,
        "undoRequest": None,
        "canUndo": game.previous is not None and game.last_actor_id == perspective,
        "room": {
            "name": game.room.name,
            "isPublic": game.room.is_public,
            "maxPlayers": game.seat_limit(),
            "hasPassword": game.room.password is not None,
        },
    }
    if game.undo_request is not None:
        payload["undoRequest"] = {
            "requesterId": game.undo_request.requester_id,
            "reason": game.undo_request.reason,
            "approvals": sorted(game.undo_request.approvals),
        }
    if perspective is not None and current is not None and current.id == perspective:
        if game.phase is GamePhase.PLAYING:
            payload["legalMoves"] = [
                serialize_card(card) for card in legal_moves(current.hand, game.current_trick.lead_suit)
            ]
    return payload
