import random
from collections import Counter

import pytest

from acegame.common.card import Card, Rank, Suit
from acegame.common.deck import Deck, build_shuffled_deck


def test_deck_initialization():
    deck = Deck()
    assert isinstance(deck.cards, list)
    assert len(deck.cards) == 52
    assert len(set(deck.cards)) == 52


def test_deck_initialization_with_custom_cards():
    cards = [
        Card(Suit.HEARTS, Rank.TWO),
        Card(Suit.DIAMOND, Rank.ACE),
        Card(Suit.CLOVER, Rank.JACK),
    ]
    deck = Deck(cards)
    assert deck.cards == cards
    assert deck.cards is not cards


def test_default_deck_order():
    deck = Deck()
    assert deck.cards[0] == Card(Suit.SPADE, Rank.ACE)
    assert deck.cards[12] == Card(Suit.SPADE, Rank.TWO)
    assert deck.cards[-1] == Card(Suit.HEARTS, Rank.TWO)


def test_deck_shuffle_keeps_cards():
    deck = Deck(rng=random.Random(3))
    original_order = deck.cards.copy()
    deck.shuffle()
    assert deck.cards != original_order
    assert Counter(deck.cards) == Counter(original_order)


def test_deck_deal_from_front():
    deck = Deck()
    card = deck.deal()
    assert card == Card(Suit.SPADE, Rank.ACE)
    assert deck.size == 51
    cards = deck.deal(2)
    assert cards == [Card(Suit.SPADE, Rank.KING), Card(Suit.SPADE, Rank.QUEEN)]
    assert deck.size == 49


def test_deck_deal_until_empty():
    deck = Deck()
    for _ in range(deck.size):
        assert isinstance(deck.deal(), Card)
    assert deck.is_empty()
    with pytest.raises(IndexError):
        deck.deal()


def test_deck_reset_after_draw():
    deck = Deck()
    deck.deal(5)
    deck.reset()
    assert deck.size == 52
    assert deck.cards == deck.initialize_default_deck()


def test_deck_repr_and_str():
    deck = Deck()
    assert repr(deck) == f"Deck({[repr(card) for card in deck.cards]})"
    assert str(deck) == "Deck of 52 cards"


@pytest.mark.parametrize("seed", [0, 1, 42, 2024, 99999])
def test_build_shuffled_deck_integrity(seed):
    cards = build_shuffled_deck(random.Random(seed))
    assert len(cards) == 52
    counts = Counter((card.suit, card.rank) for card in cards)
    assert len(counts) == 52
    assert set(counts.values()) == {1}


def test_build_shuffled_deck_is_reproducible_with_seed():
    assert build_shuffled_deck(random.Random(7)) == build_shuffled_deck(
        random.Random(7)
    )
    assert build_shuffled_deck(random.Random(7)) != build_shuffled_deck(
        random.Random(8)
    )


def test_build_shuffled_deck_without_rng():
    cards = build_shuffled_deck()
    assert set(cards) == set(Deck().cards)
