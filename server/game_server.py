"""REST service hosting Wizard tables."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from wizard.cards import Suit
from wizard.encode import event_to_dict
from wizard.errors import (
    GameError,
    GameNotFoundError,
    InvalidRoomPasswordError,
    NotDealerError,
    NotHostError,
    NotYourTurnError,
    PlayerNotFoundError,
)
from wizard.events import GameEvent
from wizard.rules_schema import RoomSettings, RuleSet
from wizard.service import GameService

logger = logging.getLogger(__name__)


class CreateGameRequest(BaseModel):
    host_id: str = Field(..., min_length=1)
    host_name: str = Field(..., min_length=1, max_length=32)
    game_id: Optional[str] = None
    rules: Optional[RuleSet] = None
    room: Optional[RoomSettings] = None
    seed: Optional[int] = None


class PlayerRequest(BaseModel):
    player_id: str


class JoinRequest(PlayerRequest):
    name: str = Field(..., min_length=1, max_length=32)
    password: Optional[str] = None


class BotRequest(PlayerRequest):
    bot_id: str


class TrumpRequest(PlayerRequest):
    suit: Suit


class BidRequest(PlayerRequest):
    bid: int


class PlayRequest(PlayerRequest):
    card_id: str


class UndoRequestBody(PlayerRequest):
    reason: str = ""


class ChatRequest(PlayerRequest):
    message: str


class EmoteRequest(PlayerRequest):
    emote_id: str


ERROR_STATUS: Dict[type, int] = {
    GameNotFoundError: 404,
    PlayerNotFoundError: 404,
    NotHostError: 403,
    NotYourTurnError: 403,
    NotDealerError: 403,
    InvalidRoomPasswordError: 403,
}

service = GameService()

app = FastAPI(title="Wizard Game Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def status_for(error: GameError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 409


def run_intent(game_id: str, player_id: Optional[str], action: Callable[[], List[GameEvent]]) -> Dict[str, Any]:
    try:
        events = action()
        state = service.get_view(game_id, player_id)
    except GameError as exc:
        raise HTTPException(status_code=status_for(exc), detail={"code": exc.code, "message": exc.message}) from exc
    return {"events": [event_to_dict(event) for event in events], "state": state}


@app.post("/games")
def create_game(request: CreateGameRequest) -> Dict[str, Any]:
    game_id = request.game_id or uuid.uuid4().hex
    try:
        events = service.create_game(
            game_id,
            request.host_id,
            request.host_name,
            rules=request.rules,
            room=request.room,
            seed=request.seed,
        )
    except ValueError as exc:
        logger.info("Refused to create game %s: id already taken", game_id)
        raise HTTPException(status_code=409, detail={"code": "GAME_EXISTS", "message": str(exc)}) from exc
    return {
        "game_id": game_id,
        "events": [event_to_dict(event) for event in events],
        "state": service.get_view(game_id, request.host_id),
    }


@app.get("/games/{game_id}")
def get_game(game_id: str, player_id: Optional[str] = None) -> Dict[str, Any]:
    try:
        return service.get_view(game_id, player_id)
    except GameError as exc:
        raise HTTPException(status_code=status_for(exc), detail={"code": exc.code, "message": exc.message}) from exc


@app.post("/games/{game_id}/join")
def join_game(game_id: str, request: JoinRequest) -> Dict[str, Any]:
    return run_intent(
        game_id, request.player_id, lambda: service.join(game_id, request.player_id, request.name, request.password)
    )


@app.post("/games/{game_id}/leave")
def leave_game(game_id: str, request: PlayerRequest) -> Dict[str, Any]:
    return run_intent(game_id, None, lambda: service.leave(game_id, request.player_id))


@app.post("/games/{game_id}/bots")
def add_bot(game_id: str, request: PlayerRequest) -> Dict[str, Any]:
    return run_intent(game_id, request.player_id, lambda: service.add_bot(game_id, request.player_id))


@app.post("/games/{game_id}/bots/remove")
def remove_bot(game_id: str, request: BotRequest) -> Dict[str, Any]:
    return run_intent(
        game_id, request.player_id, lambda: service.remove_bot(game_id, request.player_id, request.bot_id)
    )


@app.post("/games/{game_id}/players/{player_id}/replace-with-bot")
def replace_with_bot(game_id: str, player_id: str) -> Dict[str, Any]:
    return run_intent(game_id, None, lambda: service.replace_with_bot(game_id, player_id))


@app.post("/games/{game_id}/start")
def start_game(game_id: str, request: PlayerRequest) -> Dict[str, Any]:
    return run_intent(game_id, request.player_id, lambda: service.start(game_id, request.player_id))


@app.post("/games/{game_id}/trump")
def select_trump(game_id: str, request: TrumpRequest) -> Dict[str, Any]:
    return run_intent(
        game_id, request.player_id, lambda: service.select_trump(game_id, request.player_id, request.suit)
    )


@app.post("/games/{game_id}/bid")
def place_bid(game_id: str, request: BidRequest) -> Dict[str, Any]:
    return run_intent(game_id, request.player_id, lambda: service.place_bid(game_id, request.player_id, request.bid))


@app.post("/games/{game_id}/play")
def play_card(game_id: str, request: PlayRequest) -> Dict[str, Any]:
    return run_intent(
        game_id, request.player_id, lambda: service.play_card(game_id, request.player_id, request.card_id)
    )


@app.post("/games/{game_id}/next-round")
def end_round(game_id: str, request: PlayerRequest) -> Dict[str, Any]:
    return run_intent(game_id, request.player_id, lambda: service.end_round(game_id, request.player_id))


@app.post("/games/{game_id}/undo")
def request_undo(game_id: str, request: UndoRequestBody) -> Dict[str, Any]:
    return run_intent(
        game_id, request.player_id, lambda: service.request_undo(game_id, request.player_id, request.reason)
    )


@app.post("/games/{game_id}/undo/approve")
def approve_undo(game_id: str, request: PlayerRequest) -> Dict[str, Any]:
    return run_intent(game_id, request.player_id, lambda: service.approve_undo(game_id, request.player_id))


@app.post("/games/{game_id}/undo/reject")
def reject_undo(game_id: str, request: PlayerRequest) -> Dict[str, Any]:
    return run_intent(game_id, request.player_id, lambda: service.reject_undo(game_id, request.player_id))


@app.post("/games/{game_id}/rematch")
def request_rematch(game_id: str, request: PlayerRequest) -> Dict[str, Any]:
    return run_intent(game_id, request.player_id, lambda: service.request_rematch(game_id, request.player_id))


@app.post("/games/{game_id}/chat")
def send_chat(game_id: str, request: ChatRequest) -> Dict[str, Any]:
    return run_intent(
        game_id, request.player_id, lambda: service.send_chat(game_id, request.player_id, request.message)
    )


@app.post("/games/{game_id}/emote")
def send_emote(game_id: str, request: EmoteRequest) -> Dict[str, Any]:
    return run_intent(
        game_id, request.player_id, lambda: service.send_emote(game_id, request.player_id, request.emote_id)
    )
