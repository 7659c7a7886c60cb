"""
This module contains the Deck class and the `build_shuffled_deck` helper.

>>> deck = Deck()
>>> deck.size
52
>>> deck.deal()
Card(Suit.SPADE, Rank.ACE)
>>> deck.size
51
"""

import random
from typing import List, Optional, Sequence, Union

from acegame.common.card import Card, Rank, Suit


class Deck:
    """
    A class representing a standard pack of 4 suits x 13 ranks.

    Cards are dealt from the front of the deck, so an unshuffled deck deals
    the Ace of Spade first.
    """

    # Precompute the default deck
    _default_deck = [Card(suit, rank) for suit in Suit for rank in Rank]

    def __init__(
        self,
        cards: Optional[Sequence[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Deck instance.

        :param cards: Cards to populate the deck (optional). If not provided,
                      the full 52-card pack is constructed.
        :param rng: Random generator used by `shuffle` (optional).
        """
        if cards is None:
            self.cards: List[Card] = self.initialize_default_deck()
        else:
            self.cards = list(cards)
        self.rng = rng or random.Random()

    def initialize_default_deck(self) -> List[Card]:
        """
        Construct a deck with every (suit, rank) pair exactly once.

        >>> len(Deck().initialize_default_deck())
        52
        """
        return self._default_deck.copy()

    def shuffle(self) -> "Deck":
        """
        Shuffle the whole deck in place with a Fisher-Yates permutation.

        Every position is drawn from the full remaining range, which keeps
        all 52! orderings equally likely.
        """
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = self.rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]
        return self

    def deal(self, num_cards: int = 1) -> Union[Card, List[Card]]:
        """
        Take cards from the front of the deck.

        :return: A card instance or a list of card instances.
        :raises IndexError: If the deck does not hold enough cards.
        """
        if num_cards > len(self.cards):
            raise IndexError("Not enough cards left in the deck")
        if num_cards == 1:
            return self.cards.pop(0)
        dealt, self.cards = self.cards[:num_cards], self.cards[num_cards:]
        return dealt

    @property
    def size(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def reset(self):
        """Restore the full, ordered pack."""
        self.cards = self.initialize_default_deck()

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"


def build_shuffled_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """
    Return the 52 unique cards in a uniformly random order.

    :param rng: Random generator to draw the permutation from. A fresh,
                system-seeded generator is used when omitted.
    """
    return Deck(rng=rng).shuffle().cards
