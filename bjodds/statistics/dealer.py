"""Monte-Carlo simulation of the dealer's final hand."""

import logging
from dataclasses import dataclass, field
from itertools import accumulate
from random import Random
from types import MappingProxyType
from typing import Mapping

from bjodds.cards import TEN_VALUE_RANKS, Rank
from bjodds.composition import DeckComposition
from bjodds.exceptions import InvalidRulesError

log = logging.getLogger(__name__)

DEALER_TOTALS: tuple[int, ...] = (17, 18, 19, 20, 21)
DEFAULT_TRIALS = 10_000


@dataclass(frozen=True)
class DealerOutcomeProbabilities:
    """Distribution of the dealer's final result for one upcard."""

    upcard: int  # 2-11 (11 = Ace)
    bust_probability: float
    final_total_probabilities: Mapping[int, float] = field(
        default_factory=lambda: dict.fromkeys(DEALER_TOTALS, 0.0)
    )
    expected_value: float = 0.0
    blackjack_probability: float = 0.0
    trials: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "final_total_probabilities",
            MappingProxyType(dict(self.final_total_probabilities)),
        )

    @property
    def total_probability(self) -> float:
        """Return bust plus every final total; ~1.0 for a non-empty shoe."""
        return self.bust_probability + sum(self.final_total_probabilities.values())


def hole_card_probability(count: int, composition: DeckComposition) -> float:
    """
    Probability that the unseen hole card is one of ``count`` cards.

    The hole card comes from the remaining pool minus one card, matching
    how the insurance side bet is priced.
    """
    pool = composition.total_cards - 1
    if pool <= 0:
        return 0.0
    return min(1.0, count / pool)


def blackjack_probability(upcard: Rank, composition: DeckComposition) -> float:
    """
    Probability the dealer holds a natural given the upcard.

    Args:
        upcard: Dealer's visible rank
        composition: Current shoe snapshot

    Returns:
        0 for upcards that cannot make a natural
    """
    if upcard.is_ace:
        return hole_card_probability(composition.remaining_of(TEN_VALUE_RANKS), composition)
    if upcard.is_ten_value:
        return hole_card_probability(composition.remaining_cards[Rank.ACE], composition)
    return 0.0


class DealerSimulator:
    """
    Estimate dealer outcomes by sampling from the remaining shoe.

    Draws are weighted by the shoe's remaining rank counts; the shoe itself
    is not depleted within a trial. The random source is injected so runs
    can be reproduced.
    """

    _RANKS: tuple[Rank, ...] = tuple(Rank)

    def __init__(self, rng: Random | None = None, trials: int = DEFAULT_TRIALS) -> None:
        """
        Initialize the simulator.

        Args:
            rng: Random number generator used for every draw
            trials: Number of dealer hands played per simulation
        """
        if trials < 1:
            raise InvalidRulesError("trials must be at least 1")
        self._rng = rng or Random()
        self._trials = trials

    @property
    def trials(self) -> int:
        """Return the number of trials per simulation."""
        return self._trials

    def simulate(
        self,
        upcard: Rank,
        composition: DeckComposition,
        dealer_hits_soft_17: bool,
    ) -> DealerOutcomeProbabilities:
        """
        Simulate the dealer's final total from an upcard.

        Args:
            upcard: Dealer's visible rank
            composition: Current shoe snapshot
            dealer_hits_soft_17: Whether the dealer draws on soft 17

        Returns:
            Dealer outcome distribution. All zeros for an empty shoe.
        """
        upcard_value = upcard.blackjack_value
        if composition.total_cards <= 0:
            return DealerOutcomeProbabilities(upcard=upcard_value, bust_probability=0.0)

        cum_weights = list(
            accumulate(composition.remaining_cards[rank] for rank in self._RANKS)
        )
        finals = dict.fromkeys(DEALER_TOTALS, 0)
        busts = 0

        for _ in range(self._trials):
            total = self._play_hand(upcard, cum_weights, dealer_hits_soft_17)
            if total > 21:
                busts += 1
            else:
                finals[total] += 1

        final_probs = {total: count / self._trials for total, count in finals.items()}
        expected_value = sum(total * prob for total, prob in final_probs.items())

        log.debug(
            "Simulated %d dealer hands from %s with %d cards left",
            self._trials, upcard, composition.total_cards,
        )
        return DealerOutcomeProbabilities(
            upcard=upcard_value,
            bust_probability=busts / self._trials,
            final_total_probabilities=final_probs,
            expected_value=expected_value,
            blackjack_probability=blackjack_probability(upcard, composition),
            trials=self._trials,
        )

    def _play_hand(
        self,
        upcard: Rank,
        cum_weights: list[int],
        dealer_hits_soft_17: bool,
    ) -> int:
        """Play out one dealer hand and return its final total."""
        total = upcard.blackjack_value
        is_soft = upcard.is_ace

        while total < 17 or (total == 17 and is_soft and dealer_hits_soft_17):
            rank = self._rng.choices(self._RANKS, cum_weights=cum_weights)[0]
            if rank.is_ace and not is_soft and total + 11 <= 21:
                total += 11
                is_soft = True
            elif rank.is_ace:
                total += 1
            else:
                total += rank.blackjack_value

            # Soft hand over 21: the ace drops from 11 to 1
            if is_soft and total > 21:
                total -= 10
                is_soft = False

        return total
