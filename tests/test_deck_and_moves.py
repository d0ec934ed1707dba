from collections import Counter
from random import Random

import pytest

from wizard.cards import CardType, Suit, jester, number_card, wizard
from wizard.deck import DECK_SIZE, build_deck, deal_round, round_seed
from wizard.mechanics import legal_moves


def test_deck_composition():
    deck = build_deck()
    assert len(deck) == DECK_SIZE == 60
    assert len({card.id for card in deck}) == 60
    kinds = Counter(card.kind for card in deck)
    assert kinds[CardType.WIZARD] == 4
    assert kinds[CardType.JESTER] == 4
    assert kinds[CardType.NUMBER] == 52


def test_deal_is_deterministic_for_a_seed():
    first = deal_round(5, 4, rng=Random(round_seed(3, 5)))
    second = deal_round(5, 4, rng=Random(round_seed(3, 5)))
    assert first == second
    hands, trump_card = first
    assert [len(hand) for hand in hands] == [5, 5, 5, 5]
    dealt = {card.id for hand in hands for card in hand}
    assert len(dealt) == 20
    assert trump_card is not None and trump_card.id not in dealt


def test_last_round_has_no_trump_card():
    hands, trump_card = deal_round(20, 3, rng=Random(1))
    assert trump_card is None
    assert sum(len(hand) for hand in hands) == 60


def test_deal_rejects_impossible_requests():
    with pytest.raises(ValueError):
        deal_round(11, 6, rng=Random(1))
    with pytest.raises(ValueError):
        deal_round(1, 3, deck=build_deck()[:-1])


def test_must_follow_lead_suit_but_specials_stay_legal():
    hand = [
        number_card(Suit.GIANTS, 3),
        number_card(Suit.ELVES, 9),
        wizard(0),
        jester(1),
    ]
    legal = legal_moves(hand, Suit.GIANTS)
    assert number_card(Suit.ELVES, 9) not in legal
    assert set(legal) == {number_card(Suit.GIANTS, 3), wizard(0), jester(1)}


def test_any_card_when_void_or_no_lead():
    hand = [number_card(Suit.HUMANS, 3), number_card(Suit.ELVES, 9)]
    assert legal_moves(hand, Suit.DWARVES) == hand
    assert legal_moves(hand, None) == hand
