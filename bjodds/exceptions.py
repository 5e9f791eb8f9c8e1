"""Exception and warning types raised or reported by the engine."""

from dataclasses import dataclass

from bjodds.cards import Card


class BJOddsError(Exception):
    """Base class for engine errors."""


class InvalidRulesError(BJOddsError, ValueError):
    """A rule or configuration value cannot be used to build a shoe."""


@dataclass(frozen=True)
class InvalidRankDepletion:
    """
    A dealt card whose rank was already exhausted in the tracked shoe.

    This is reported back to the caller, never raised: it means the dealer
    feeding the tracker is out of sync, not that the engine is broken.
    """

    card: Card
    cards_dealt: int

    def __str__(self) -> str:
        return (
            f"{self.card.rank} dealt after all {self.card.rank}s were "
            f"accounted for (card #{self.cards_dealt + 1} of the shoe)"
        )
