"""Shoe composition tracking - remaining cards per rank and Hi-Lo count."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from bjodds.cards import Card, Rank
from bjodds.counting import HiLoSystem, describe_true_count
from bjodds.exceptions import InvalidRankDepletion, InvalidRulesError

log = logging.getLogger(__name__)

CARDS_PER_DECK = 52
CARDS_PER_RANK_PER_DECK = 4


@dataclass(frozen=True)
class DeckComposition:
    """Immutable snapshot of what is left in the shoe."""

    total_cards: int
    remaining_cards: Mapping[Rank, int]
    card_percentages: Mapping[Rank, float]
    running_count: int
    true_count: float
    decks_remaining: float
    num_decks: int
    # Not part of equality: two snapshots with identical contents are the
    # same composition whatever their history.
    version: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        # Snapshots are shared through the engine caches; keep them read-only
        object.__setattr__(self, "remaining_cards", MappingProxyType(dict(self.remaining_cards)))
        object.__setattr__(self, "card_percentages", MappingProxyType(dict(self.card_percentages)))

    @property
    def initial_cards(self) -> int:
        """Return the size of the full shoe."""
        return self.num_decks * CARDS_PER_DECK

    @property
    def cards_dealt(self) -> int:
        """Return how many cards have left the shoe."""
        return self.initial_cards - self.total_cards

    @property
    def penetration(self) -> float:
        """Return the fraction of the shoe already dealt."""
        if self.initial_cards == 0:
            return 0.0
        return self.cards_dealt / self.initial_cards

    def remaining_of(self, ranks: Iterable[Rank]) -> int:
        """Return how many cards of the given ranks remain."""
        return sum(self.remaining_cards[rank] for rank in ranks)


class ShoeTracker:
    """
    Authoritative count of the cards left in one shoe.

    The tracker is mutated only by ``apply_dealt`` (in dealing order) and by
    ``reset``/``initialize``. Every mutation bumps ``version`` so cached
    results computed from an older shoe state can be discarded.
    """

    def __init__(self, num_decks: int = 6) -> None:
        """
        Initialize a tracker for a fresh shoe.

        Args:
            num_decks: Number of decks in the shoe
        """
        self._counter = HiLoSystem()
        self._remaining: dict[Rank, int] = {}
        self._total_cards = 0
        self._num_decks = 0
        self._version = 0
        self._snapshot: DeckComposition | None = None
        self.initialize(num_decks)

    def initialize(self, num_decks: int) -> None:
        """Build a full shoe of ``num_decks`` decks with zero counts."""
        if num_decks < 1:
            raise InvalidRulesError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._remaining = {
            rank: CARDS_PER_RANK_PER_DECK * num_decks for rank in Rank
        }
        self._total_cards = CARDS_PER_DECK * num_decks
        self._counter.reset()
        self._touch()

    def reset(self) -> None:
        """Restore the shoe produced by the most recent ``initialize``."""
        self.initialize(self._num_decks)

    def apply_dealt(self, cards: Iterable[Card]) -> list[InvalidRankDepletion]:
        """
        Remove dealt cards from the shoe and update the running count.

        A card whose rank is already exhausted is not removed or counted;
        it is logged and returned so the caller can flag the upstream
        dealing bug.

        Args:
            cards: Cards in the order they were dealt

        Returns:
            One record per card that could not be removed (usually empty)
        """
        problems: list[InvalidRankDepletion] = []
        for card in cards:
            if self._remaining[card.rank] <= 0:
                problem = InvalidRankDepletion(card, self.cards_dealt)
                log.warning("Shoe out of sync: %s", problem)
                problems.append(problem)
                continue
            self._remaining[card.rank] -= 1
            self._total_cards -= 1
            self._counter.count_card(card)

        self._touch()
        return problems

    def _touch(self) -> None:
        self._version += 1
        self._snapshot = None

    @property
    def composition(self) -> DeckComposition:
        """Return an immutable snapshot of the current shoe."""
        if self._snapshot is None:
            total = self._total_cards
            percentages = {
                rank: (count / total if total > 0 else 0.0)
                for rank, count in self._remaining.items()
            }
            decks_remaining = total / CARDS_PER_DECK
            self._snapshot = DeckComposition(
                total_cards=total,
                remaining_cards=self._remaining,
                card_percentages=percentages,
                running_count=self._counter.running_count,
                true_count=self._counter.true_count(decks_remaining),
                decks_remaining=decks_remaining,
                num_decks=self._num_decks,
                version=self._version,
            )
        return self._snapshot

    @property
    def version(self) -> int:
        """Return the mutation counter for this shoe."""
        return self._version

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    @property
    def total_cards(self) -> int:
        """Return the number of cards remaining."""
        return self._total_cards

    @property
    def cards_dealt(self) -> int:
        """Return the number of cards dealt."""
        return self._num_decks * CARDS_PER_DECK - self._total_cards

    @property
    def decks_remaining(self) -> float:
        """Return the number of decks remaining."""
        return self._total_cards / CARDS_PER_DECK

    @property
    def penetration(self) -> float:
        """Return the fraction of the shoe already dealt."""
        return self.composition.penetration

    @property
    def running_count(self) -> int:
        """Return the Hi-Lo running count."""
        return self._counter.running_count

    @property
    def true_count(self) -> float:
        """Return the Hi-Lo true count."""
        return self._counter.true_count(self.decks_remaining)

    @property
    def count_description(self) -> str:
        """Return a label for the current true count, e.g. "Positive"."""
        return describe_true_count(self.true_count)

    def __repr__(self) -> str:
        return (
            f"ShoeTracker(num_decks={self._num_decks}, "
            f"total_cards={self._total_cards}, "
            f"running_count={self.running_count})"
        )
