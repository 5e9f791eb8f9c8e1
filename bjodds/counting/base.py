"""Abstract base class for card counting systems."""

from abc import ABC, abstractmethod
from typing import Mapping

from bjodds.cards import Card, Rank


class CountingSystem(ABC):
    """
    Abstract base class for card counting systems.

    All counting systems track a running count and can compute a true count
    based on decks remaining.
    """

    def __init__(self) -> None:
        """Initialize the counting system."""
        self._running_count: int = 0

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """
        Return the tag value mapping for this system.

        Maps each Rank to its count value.
        """
        ...

    def count_card(self, card: Card) -> int:
        """
        Count a single card and update the running count.

        Args:
            card: The card to count

        Returns:
            The tag value of the card
        """
        tag_value = self.tag_values[card.rank]
        self._running_count += tag_value
        return tag_value

    @property
    def running_count(self) -> int:
        """Return the current running count."""
        return self._running_count

    def true_count(self, decks_remaining: float) -> float:
        """
        Calculate the true count.

        Args:
            decks_remaining: Number of decks remaining in the shoe

        Returns:
            The true count (running count / decks remaining), 0 for an
            exhausted shoe
        """
        if decks_remaining <= 0:
            return 0.0
        return self._running_count / decks_remaining

    def reset(self) -> None:
        """Reset the count to zero."""
        self._running_count = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"


def describe_true_count(true_count: float) -> str:
    """Return a short label for how strongly the count leans either way."""
    magnitude = abs(true_count)
    if magnitude < 1:
        return "Neutral"
    if magnitude < 2:
        return "Slightly positive" if true_count > 0 else "Slightly negative"
    if magnitude < 3:
        return "Positive" if true_count > 0 else "Negative"
    if magnitude < 5:
        return "Very positive" if true_count > 0 else "Very negative"
    return "Extremely positive" if true_count > 0 else "Extremely negative"
