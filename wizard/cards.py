"""Card-related data structures and helpers for Wizard."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from .errors import InvalidCardValueError


class Suit(Enum):
    GIANTS = "GIANTS"
    ELVES = "ELVES"
    DWARVES = "DWARVES"
    HUMANS = "HUMANS"

    def __str__(self) -> str:
        return self.name.lower()


class CardType(Enum):
    NUMBER = "NUMBER"
    WIZARD = "WIZARD"
    JESTER = "JESTER"


MIN_VALUE = 1
MAX_VALUE = 13
SPECIAL_COPIES = 4

SUIT_NAMES: dict[Suit, str] = {
    Suit.GIANTS: "Giants",
    Suit.ELVES: "Elves",
    Suit.DWARVES: "Dwarves",
    Suit.HUMANS: "Humans",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a Wizard card.

    Number cards carry a suit and a value; Wizards and Jesters carry neither
    and use ``copy`` to tell the four identical specials apart.
    """

    kind: CardType
    suit: Optional[Suit] = None
    value: Optional[int] = None
    copy: int = 0

    @property
    def id(self) -> str:
        if self.kind is CardType.NUMBER:
            assert self.suit is not None
            return f"{self.suit.value}-{self.value}"
        return f"{self.kind.value}-{self.copy}"

    def is_wizard(self) -> bool:
        return self.kind is CardType.WIZARD

    def is_jester(self) -> bool:
        return self.kind is CardType.JESTER

    def is_number(self) -> bool:
        return self.kind is CardType.NUMBER

    def __str__(self) -> str:
        return self.id


def number_card(suit: Suit, value: int) -> Card:
    if not MIN_VALUE <= value <= MAX_VALUE:
        raise InvalidCardValueError(value)
    return Card(CardType.NUMBER, suit, value)


def wizard(copy: int = 0) -> Card:
    return Card(CardType.WIZARD, copy=copy)


def jester(copy: int = 0) -> Card:
    return Card(CardType.JESTER, copy=copy)


def beats(candidate: Card, current: Card, lead_suit: Optional[Suit], trump: Optional[Suit]) -> bool:
    """Return True if ``candidate``, played after ``current``, takes the trick from it."""
    if current.is_wizard():
        return False
    if candidate.is_wizard():
        return True
    if candidate.is_jester():
        return False
    if current.is_jester():
        return True

    candidate_trump = trump is not None and candidate.suit is trump
    current_trump = trump is not None and current.suit is trump
    if candidate_trump and not current_trump:
        return True
    if current_trump and not candidate_trump:
        return False

    if candidate.suit is current.suit:
        assert candidate.value is not None and current.value is not None
        return candidate.value > current.value

    if candidate.suit is lead_suit and current.suit is not lead_suit:
        return True

    return False


def parse_card_id(card_id: str) -> Card:
    """Inverse of ``Card.id``; raises ValueError on malformed ids."""
    head, sep, tail = card_id.rpartition("-")
    if not sep or not tail.isdigit():
        raise ValueError(f"Malformed card id: {card_id!r}")
    number = int(tail)
    if head in (CardType.WIZARD.value, CardType.JESTER.value):
        if not 0 <= number < SPECIAL_COPIES:
            raise ValueError(f"Malformed card id: {card_id!r}")
        return Card(CardType(head), copy=number)
    try:
        suit = Suit(head)
    except ValueError as exc:
        raise ValueError(f"Malformed card id: {card_id!r}") from exc
    return number_card(suit, number)


def serialize_card(card: Card) -> dict[str, object]:
    return {
        "id": card.id,
        "type": card.kind.value,
        "suit": card.suit.value if card.suit else None,
        "value": card.value,
    }


def deserialize_card(payload: Mapping[str, object]) -> Card:
    card_id = payload.get("id")
    if isinstance(card_id, str):
        return parse_card_id(card_id)
    kind = CardType(str(payload["type"]).upper())
    if kind is CardType.NUMBER:
        return number_card(Suit(str(payload["suit"]).upper()), int(payload["value"]))  # type: ignore[arg-type]
    return Card(kind, copy=int(payload.get("copy", 0)))  # type: ignore[arg-type]


def card_label(card: Card) -> str:
    if card.is_wizard():
        return "Wizard"
    if card.is_jester():
        return "Jester"
    assert card.suit is not None
    return f"{card.value} of {SUIT_NAMES[card.suit]}"
