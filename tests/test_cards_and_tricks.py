import pytest

from wizard.cards import (
    Suit,
    beats,
    card_label,
    deserialize_card,
    jester,
    number_card,
    parse_card_id,
    serialize_card,
    wizard,
)
from wizard.errors import InvalidCardValueError
from wizard.trick import Trick, TrickError


def _trick(*plays):
    trick = Trick()
    for player_id, card in plays:
        trick = trick.with_play(player_id, card)
    return trick


def test_card_ids_and_labels():
    assert number_card(Suit.GIANTS, 7).id == "GIANTS-7"
    assert wizard(2).id == "WIZARD-2"
    assert card_label(number_card(Suit.ELVES, 12)) == "12 of Elves"
    assert card_label(jester(0)) == "Jester"


def test_number_card_rejects_out_of_range_values():
    with pytest.raises(InvalidCardValueError):
        number_card(Suit.HUMANS, 14)
    with pytest.raises(InvalidCardValueError):
        number_card(Suit.HUMANS, 0)


def test_card_id_parsing():
    assert parse_card_id("DWARVES-13") == number_card(Suit.DWARVES, 13)
    assert parse_card_id("JESTER-3") == jester(3)
    with pytest.raises(ValueError):
        parse_card_id("DRAGONS-3")
    with pytest.raises(ValueError):
        parse_card_id("WIZARD-9")


def test_serialized_card_shape():
    payload = serialize_card(number_card(Suit.ELVES, 4))
    assert payload == {"id": "ELVES-4", "type": "NUMBER", "suit": "ELVES", "value": 4}
    assert deserialize_card({"type": "number", "suit": "elves", "value": 4}) == number_card(Suit.ELVES, 4)


def test_first_wizard_wins_regardless_of_trump():
    trick = _trick(
        ("p1", number_card(Suit.GIANTS, 13)),
        ("p2", wizard(0)),
        ("p3", wizard(1)),
    )
    assert trick.winning_play(Suit.GIANTS) == ("p2", wizard(0))


def test_all_jesters_go_to_the_first_player():
    trick = _trick(("p1", jester(0)), ("p2", jester(1)), ("p3", jester(2)))
    assert trick.lead_suit is None
    assert trick.winning_play(Suit.ELVES)[0] == "p1"


def test_trump_beats_higher_lead_suit_card():
    trick = _trick(
        ("p1", number_card(Suit.ELVES, 13)),
        ("p2", number_card(Suit.GIANTS, 2)),
        ("p3", number_card(Suit.ELVES, 12)),
    )
    assert trick.winning_play(Suit.GIANTS)[0] == "p2"


def test_off_suit_card_never_wins_without_trump():
    trick = _trick(
        ("p1", number_card(Suit.ELVES, 3)),
        ("p2", number_card(Suit.HUMANS, 13)),
        ("p3", number_card(Suit.ELVES, 2)),
    )
    assert trick.winning_play(None)[0] == "p1"


def test_jester_lead_leaves_suit_to_first_number_card():
    trick = _trick(
        ("p1", jester(0)),
        ("p2", number_card(Suit.DWARVES, 4)),
        ("p3", number_card(Suit.DWARVES, 9)),
    )
    assert trick.lead_suit is Suit.DWARVES
    assert trick.winning_play(Suit.HUMANS)[0] == "p3"


def test_beats_is_strict_for_identical_strength():
    assert not beats(wizard(1), wizard(0), None, None)
    assert not beats(jester(1), jester(0), None, None)
    assert beats(number_card(Suit.ELVES, 1), jester(0), None, None)


def test_empty_trick_has_no_winner():
    with pytest.raises(TrickError):
        Trick().winning_play(None)


def test_wizard_beats_trump_when_trump_differs_from_lead():
    trick = _trick(
        ("p1", number_card(Suit.ELVES, 13)),
        ("p2", number_card(Suit.HUMANS, 13)),
        ("p3", wizard(0)),
    )
    assert trick.lead_suit is Suit.ELVES
    assert trick.winning_play(Suit.HUMANS) == ("p3", wizard(0))
