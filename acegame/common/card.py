"""
This module defines the `Suit`, `Rank`, and `Card` classes used by the ACE engine.

- `Suit`: An enum representing the four suits of the ACE pack: Spade, Diamond,
Clover and Hearts.

- `Rank`: An enum representing the thirteen ranks, ordered from the heaviest
(Ace) to the lightest (Two). Each rank carries a `weight`; a lower weight
means a heavier card.

- `Card`: A value object representing a playing card. Two cards are equal when
their suit and rank are equal, and cards are hashable so they can be counted
and placed in sets.

This module is part of the `acegame` package.
"""

from enum import Enum, unique
from typing import Any, Dict


@unique
class Suit(Enum):
    """
    Enum for suits in the ACE pack.
    """

    SPADE = "Spade"
    DIAMOND = "Diamond"
    CLOVER = "Clover"
    HEARTS = "Hearts"

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks, declared from heaviest to lightest.
    """

    ACE = "A"
    KING = "K"
    QUEEN = "Q"
    JACK = "J"
    TEN = "10"
    NINE = "9"
    EIGHT = "8"
    SEVEN = "7"
    SIX = "6"
    FIVE = "5"
    FOUR = "4"
    THREE = "3"
    TWO = "2"

    @property
    def weight(self) -> int:
        """Position in the rank order; 0 is the Ace, 12 is the Two."""
        return _RANK_WEIGHTS[self]

    @property
    def rank_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.rank_str


_RANK_WEIGHTS = {rank: index for index, rank in enumerate(Rank)}


class Card:
    """
    Class representing a playing card.

    >>> card = Card(Suit.DIAMOND, Rank.SEVEN)
    >>> print(card)
    7 of Diamond
    >>> card.short_id
    '7D'
    """

    __slots__ = ("suit", "rank", "str_rep")

    def __init__(self, suit: Suit, rank: Rank):
        """
        Initialize a Card instance.

        :param suit: Suit of the card (one of the Suit enums)
        :param rank: Rank of the card (one of the Rank enums)
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        object.__setattr__(self, "suit", suit)
        object.__setattr__(self, "rank", rank)
        object.__setattr__(self, "str_rep", f"{rank.rank_str} of {suit}")

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @property
    def weight(self) -> int:
        """Weight of the card's rank; lower is heavier."""
        return self.rank.weight

    @property
    def short_id(self) -> str:
        """Compact identifier, first character of the rank then of the suit."""
        return f"{self.rank.value[0]}{self.suit.value[0]}"

    def is_heavier_than(self, other: "Card") -> bool:
        return self.rank.weight < other.rank.weight

    def to_dict(self) -> Dict[str, str]:
        return {"suit": self.suit.value, "rank": self.rank.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Card":
        """
        Build a card from the output of `to_dict`.

        :param data: Mapping with "suit" and "rank" keys holding enum values.
        :return: The matching Card.
        :raises ValueError: If either value is not a known suit or rank.
        """
        return cls(Suit(data["suit"]), Rank(data["rank"]))

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self.rank == other.rank and self.suit == other.suit
        return NotImplemented

    def __hash__(self):
        return hash((self.suit, self.rank))

    def __repr__(self) -> str:
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        return self.str_rep
