"""Cooperative undo negotiation.

Only the most recent undoable action (trump selection, a bid or a card) can
be taken back. Its actor asks, every connected player has to agree, and the
game then returns to the snapshot retained before that action. Bots agree
automatically; anyone may refuse.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import FrozenSet, List

from .errors import (
    GameNotStartedError,
    NoActiveUndoRequestError,
    UndoAlreadyPendingError,
    UndoNotAvailableError,
)
from .events import GameEvent, UndoApplied, UndoApproved, UndoRejected, UndoRequested
from .game import Transition
from .state import Game, GamePhase, UndoRequest

logger = logging.getLogger(__name__)


def required_approvers(game: Game) -> FrozenSet[str]:
    return frozenset(player.id for player in game.connected_players())


def request_undo(game: Game, player_id: str, reason: str = "") -> Transition:
    if game.phase is GamePhase.WAITING:
        raise GameNotStartedError()
    requester = game.require_player(player_id)
    if game.undo_request is not None:
        raise UndoAlreadyPendingError()
    if game.previous is None:
        raise UndoNotAvailableError("The last action can no longer be undone.")
    if game.last_actor_id != player_id:
        raise UndoNotAvailableError("Only the player who acted last can ask to undo it.")

    bots = frozenset(player.id for player in game.players if player.is_bot)
    request = UndoRequest(requester_id=player_id, reason=reason, approvals=frozenset({player_id}) | bots)
    required = required_approvers(game)
    pending = replace(game, undo_request=request)
    events: List[GameEvent] = [
        UndoRequested(
            requester_id=player_id,
            requester_name=requester.name,
            reason=reason,
            required_approvals=len(required),
        )
    ]
    if required <= request.approvals:
        restored, applied = _apply(pending)
        return restored, events + applied
    return pending, events


def approve_undo(game: Game, player_id: str) -> Transition:
    request = game.undo_request
    if request is None:
        raise NoActiveUndoRequestError()
    game.require_player(player_id)
    if player_id in request.approvals:
        raise UndoNotAvailableError("You already approved this undo request.")
    if game.previous is None:
        raise UndoNotAvailableError("The last action can no longer be undone.")

    approvals = request.approvals | {player_id}
    approved = replace(game, undo_request=replace(request, approvals=approvals))
    required = required_approvers(game)
    events: List[GameEvent] = [
        UndoApproved(
            player_id=player_id,
            approvals=len(approvals & required),
            required_approvals=len(required),
        )
    ]
    if required <= approvals:
        restored, applied = _apply(approved)
        return restored, events + applied
    return approved, events


def reject_undo(game: Game, player_id: str) -> Transition:
    if game.undo_request is None:
        raise NoActiveUndoRequestError()
    game.require_player(player_id)
    return replace(game, undo_request=None), [UndoRejected(player_id=player_id, reason="rejected")]


def _apply(game: Game) -> Transition:
    assert game.previous is not None and game.undo_request is not None
    requester_id = game.undo_request.requester_id
    restored = replace(game.previous, previous=None, undo_request=None, last_actor_id=None)
    logger.debug("Game %s: undo applied for %s", game.id, requester_id)
    return restored, [UndoApplied(requester_id=requester_id)]
