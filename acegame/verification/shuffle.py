"""
Statistical validation of deck shuffling.

A uniform shuffle places every card in every position with probability
1/52. The validator shuffles many decks, tallies a card-by-position count
matrix and runs a chi-square goodness-of-fit test against that uniform
expectation. Biased or partial shuffles show up as a vanishing p-value.
"""

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import scipy.stats as stats

from acegame.common.card import Card
from acegame.common.deck import Deck, build_shuffled_deck


@dataclass
class ShuffleReport:
    """
    Result of a shuffle uniformity test.

    Attributes:
        trials: Number of decks shuffled
        chi_square: Chi-square statistic over the card/position matrix
        degrees_of_freedom: Degrees of freedom of the test
        p_value: Probability of a statistic at least this large under a
            uniform shuffle
        max_deviation: Largest relative deviation of a single cell from its
            expected count
    """

    trials: int
    chi_square: float
    degrees_of_freedom: int
    p_value: float
    max_deviation: float

    def is_uniform(self, alpha: float = 0.001) -> bool:
        return self.p_value >= alpha

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trials": self.trials,
            "chi_square": self.chi_square,
            "degrees_of_freedom": self.degrees_of_freedom,
            "p_value": self.p_value,
            "max_deviation": self.max_deviation,
        }


class ShuffleValidator:
    """
    Validates that a shuffle function produces uniform permutations.

    Args:
        shuffle: Function taking a random.Random and returning a list of
            cards; defaults to `build_shuffled_deck`
        seed: Seed for the generator handed to the shuffle function
    """

    def __init__(
        self,
        shuffle: Optional[Callable[[random.Random], List[Card]]] = None,
        seed: Optional[int] = None,
    ):
        self.shuffle = shuffle or build_shuffled_deck
        self.rng = random.Random(seed)
        self._reference = Deck().initialize_default_deck()
        self._index = {card: i for i, card in enumerate(self._reference)}

    def position_counts(self, trials: int) -> np.ndarray:
        """
        Count how often each card lands in each position.

        Returns:
            Matrix of shape (cards, positions)

        Raises:
            ValueError: If a shuffle returns a deck that is not a permutation
                of the full pack
        """
        size = len(self._reference)
        counts = np.zeros((size, size), dtype=np.int64)
        for _ in range(trials):
            deck = self.shuffle(self.rng)
            if len(deck) != size or set(deck) != set(self._reference):
                raise ValueError("Shuffle did not return a permutation of the pack")
            rows = [self._index[card] for card in deck]
            counts[rows, np.arange(size)] += 1
        return counts

    def validate(self, trials: int = 2000) -> ShuffleReport:
        """
        Run the chi-square uniformity test.

        Args:
            trials: Number of decks to shuffle; at least 52 per cell keeps
                the chi-square approximation sound at the default size

        Returns:
            ShuffleReport with the test results
        """
        if trials <= 0:
            raise ValueError("trials must be positive")

        counts = self.position_counts(trials)
        expected = trials / counts.shape[1]
        observed = counts.ravel()

        chi_square, p_value = stats.chisquare(
            observed,
            f_exp=np.full(observed.shape, expected),
            # Rows and columns both sum to `trials`
            ddof=2 * (counts.shape[0] - 1),
        )
        dof = (counts.shape[0] - 1) ** 2
        max_deviation = float(np.max(np.abs(counts - expected)) / expected)

        return ShuffleReport(
            trials=trials,
            chi_square=float(chi_square),
            degrees_of_freedom=dof,
            p_value=float(p_value),
            max_deviation=max_deviation,
        )
