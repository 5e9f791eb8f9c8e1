"""Next-card probabilities for a hand against the current shoe."""

from dataclasses import dataclass
from typing import Iterable

from bjodds.cards import Rank
from bjodds.composition import DeckComposition
from bjodds.hand import resulting_totals


@dataclass(frozen=True)
class DrawProbability:
    """Probability of drawing one rank next, and what it does to the hand."""

    rank: Rank
    probability: float
    remaining: int
    resulting_totals: frozenset[int]
    would_bust: bool


def draw_probabilities(
    totals: Iterable[int],
    composition: DeckComposition,
) -> list[DrawProbability]:
    """
    Get the probability of drawing each rank still in the shoe.

    Args:
        totals: Every total the hand can currently make
        composition: Current shoe snapshot

    Returns:
        One entry per rank with cards remaining, in rank order. Empty when
        the shoe is exhausted.
    """
    totals = tuple(totals)
    if composition.total_cards <= 0:
        return []

    results = []
    for rank in Rank:
        remaining = composition.remaining_cards[rank]
        if remaining <= 0:
            continue
        new_totals = resulting_totals(totals, rank.values)
        results.append(
            DrawProbability(
                rank=rank,
                probability=remaining / composition.total_cards,
                remaining=remaining,
                resulting_totals=new_totals,
                would_bust=all(total > 21 for total in new_totals),
            )
        )
    return results


def bust_probability(draws: Iterable[DrawProbability]) -> float:
    """Return the total probability that the next card busts the hand."""
    return sum(draw.probability for draw in draws if draw.would_bust)
