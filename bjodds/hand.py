"""Hand totals for blackjack.

Aces make a hand's value ambiguous, so a hand is described by the set of
every total it can reach rather than a single number.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from bjodds.cards import Card, Rank


def resulting_totals(totals: Iterable[int], values: Iterable[int]) -> frozenset[int]:
    """Cross every current total with every value of the incoming card."""
    values = tuple(values)
    return frozenset(total + value for total in totals for value in values)


def hand_totals(cards: Iterable[Card]) -> frozenset[int]:
    """
    Return every total the cards can make.

    An empty hand has the single total 0.
    """
    totals = frozenset({0})
    for card in cards:
        totals = resulting_totals(totals, card.values)
    return totals


def best_total(totals: Iterable[int]) -> int:
    """
    Return the highest non-busting total.

    If every total busts, the lowest bust total is returned.
    """
    ordered = sorted(totals, reverse=True)
    if not ordered:
        raise ValueError("A hand needs at least one total")
    for total in ordered:
        if total <= 21:
            return total
    return ordered[-1]


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def totals(self) -> frozenset[int]:
        """Return every total the hand can make."""
        return hand_totals(self.cards)

    @property
    def value(self) -> int:
        """Return the best hand value."""
        return best_total(self.totals)

    @property
    def is_soft(self) -> bool:
        """
        Check if the hand is soft (has an ace counted as 11).

        A hand is soft if it contains an ace that can be counted as 11
        without busting.
        """
        if not any(card.is_ace for card in self.cards):
            return False

        total_hard = min(self.totals)
        return total_hard + 10 <= 21

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a pair (two cards of same rank)."""
        return (
            len(self.cards) == 2
            and self.cards[0].rank == self.cards[1].rank
        )

    @property
    def pair_rank(self) -> Rank | None:
        """Return the shared rank of a pair, or None."""
        return self.cards[0].rank if self.is_pair else None

    @property
    def signature(self) -> tuple:
        """
        Cache key describing everything the evaluator reads from the hand.

        Suits are irrelevant; the pair rank matters because it drives the
        split value.
        """
        pair = self.pair_rank.name if self.pair_rank is not None else None
        return (tuple(sorted(self.totals)), pair)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
