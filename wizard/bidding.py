"""Bid validation, including the configurable forbidden-bid rule."""

from __future__ import annotations

from typing import Optional

from .errors import ForbiddenBidError, InvalidBidError
from .state import Game


def is_last_bidder(game: Game) -> bool:
    return game.bids_placed() == len(game.players) - 1


def forbidden_bid(game: Game) -> Optional[int]:
    """Return the bid the current bidder may not make, or None.

    Under the ``last_bidder`` rule the final bidder of a round may not bring
    the total of all bids to exactly the number of tricks available.
    """
    if game.rules.forbidden_bid_rule == "off" or not is_last_bidder(game):
        return None
    blocked = game.cards_this_round() - game.total_bids()
    if 0 <= blocked <= game.cards_this_round():
        return blocked
    return None


def validate_bid(game: Game, bid: int) -> None:
    """Raise InvalidBidError or ForbiddenBidError for an unacceptable bid.

    Phase and turn checks are the caller's responsibility.
    """
    max_bid = game.cards_this_round()
    if isinstance(bid, bool) or not isinstance(bid, int) or not 0 <= bid <= max_bid:
        raise InvalidBidError(bid, max_bid)
    blocked = forbidden_bid(game)
    if blocked is not None and bid == blocked:
        raise ForbiddenBidError(bid, game.round)
