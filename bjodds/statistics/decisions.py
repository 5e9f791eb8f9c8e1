"""Expected value of every player decision at a decision point."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from bjodds.cards import TEN_VALUE_RANKS, Rank
from bjodds.composition import DeckComposition
from bjodds.hand import Hand, best_total
from bjodds.statistics.dealer import DealerOutcomeProbabilities, hole_card_probability
from bjodds.statistics.draw import DrawProbability, bust_probability, draw_probabilities
from bjodds.strategy.rules import GameRules

# EVs closer than this are treated as equal
EV_EPSILON = 1e-9

SURRENDER_EV = -0.5
INSURANCE_WIN = 1.0  # Half-bet side wager paid 2:1
INSURANCE_LOSS = -0.5


class Decision(Enum):
    """Actions a player can be advised to take."""

    STAND = "stand"
    HIT = "hit"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"
    INSURANCE = "insurance"

    def __str__(self) -> str:
        return self.value


# Static split values per pair rank. A simplification: the two post-split
# hands are not played out against the dealer distribution.
_SPLIT_EV: dict[Rank, float] = {
    Rank.ACE: 1.5,
    Rank.EIGHT: 0.8,
    Rank.NINE: 0.6,
    Rank.SEVEN: 0.4,
    Rank.SIX: 0.2,
    Rank.TWO: 0.1,
    Rank.THREE: 0.1,
    Rank.TEN: -0.5,
    Rank.JACK: -0.5,
    Rank.QUEEN: -0.5,
    Rank.KING: -0.5,
}
_DEFAULT_SPLIT_EV = -0.2


@dataclass(frozen=True)
class BustProbabilities:
    """Chance of busting on the next card."""

    after_hit: float
    after_double_down: float


@dataclass(frozen=True)
class PlayerDecisionProbabilities:
    """EV of each decision plus the recommended one."""

    stand_ev: float
    hit_ev: float
    double_down_ev: float
    split_ev: float | None
    insurance_ev: float | None
    surrender_ev: float | None
    optimal_decision: Decision
    bust_probabilities: BustProbabilities

    def ev_for(self, decision: Decision) -> float | None:
        """Return the EV of a decision, or None if it is not available."""
        return {
            Decision.STAND: self.stand_ev,
            Decision.HIT: self.hit_ev,
            Decision.DOUBLE: self.double_down_ev,
            Decision.SPLIT: self.split_ev,
            Decision.SURRENDER: self.surrender_ev,
            Decision.INSURANCE: self.insurance_ev,
        }[decision]

    def available_decisions(self) -> list[Decision]:
        """Return every decision with a defined EV."""
        return [d for d in Decision if self.ev_for(d) is not None]


def hit_continuation(total: int) -> float:
    """
    Single-ply value of a non-busting hand after one more card.

    A rough estimate used instead of playing the hand out recursively.
    """
    if total >= 21:
        return 0.8
    if total >= 17:
        return 0.5
    return 0.2


def choose_decision(
    stand_ev: float,
    hit_ev: float,
    double_down_ev: float,
    surrender_ev: float | None = None,
    split_ev: float | None = None,
    insurance_ev: float | None = None,
) -> Decision:
    """
    Pick the decision with the highest EV.

    Stand, hit, double and surrender compete directly; ties resolve in that
    order. Split wins if it beats the best of them. Insurance is a separate
    side bet and is reported whenever its EV is positive.
    """
    candidates = [
        (Decision.STAND, stand_ev),
        (Decision.HIT, hit_ev),
        (Decision.DOUBLE, double_down_ev),
    ]
    if surrender_ev is not None:
        candidates.append((Decision.SURRENDER, surrender_ev))

    best_ev = max(ev for _, ev in candidates)
    best = next(d for d, ev in candidates if ev >= best_ev - EV_EPSILON)

    if split_ev is not None and split_ev > best_ev + EV_EPSILON:
        best = Decision.SPLIT
    if insurance_ev is not None and insurance_ev > 0:
        best = Decision.INSURANCE
    return best


class DecisionEvaluator:
    """
    Expected values for stand, hit, double, split, surrender and insurance.

    EVs are per unit of the original bet.
    """

    def __init__(self, rules: GameRules | None = None) -> None:
        """
        Initialize the evaluator.

        Args:
            rules: Rule set deciding which actions are available
        """
        self.rules = rules or GameRules()

    @staticmethod
    def stand_ev(total: int, dealer: DealerOutcomeProbabilities) -> float:
        """
        EV of standing on ``total`` against a dealer distribution.

        A busted hand loses outright.
        """
        if total > 21:
            return -1.0

        ev = dealer.bust_probability
        for dealer_total, prob in dealer.final_total_probabilities.items():
            if total > dealer_total:
                ev += prob
            elif total < dealer_total:
                ev -= prob
        return ev

    @staticmethod
    def hit_ev(draws: Iterable[DrawProbability]) -> float:
        """EV of taking exactly one card, valued with ``hit_continuation``."""
        ev = 0.0
        for draw in draws:
            if draw.would_bust:
                ev -= draw.probability
            else:
                ev += draw.probability * hit_continuation(best_total(draw.resulting_totals))
        return ev

    def double_down_ev(
        self,
        draws: Iterable[DrawProbability],
        dealer: DealerOutcomeProbabilities,
    ) -> float:
        """EV of doubling the bet, taking one card and standing."""
        ev = 0.0
        for draw in draws:
            if draw.would_bust:
                ev -= 2 * draw.probability
            else:
                total = best_total(draw.resulting_totals)
                ev += draw.probability * 2 * self.stand_ev(total, dealer)
        return ev

    @staticmethod
    def split_ev(hand: Hand) -> float | None:
        """Return the split value of a pair, or None for any other hand."""
        rank = hand.pair_rank
        if rank is None:
            return None
        return _SPLIT_EV.get(rank, _DEFAULT_SPLIT_EV)

    @staticmethod
    def insurance_ev(upcard: Rank, composition: DeckComposition) -> float | None:
        """
        EV of the insurance side bet, only offered against an Ace.

        The upcard is expected to be dealt out of ``composition`` already.
        """
        if not upcard.is_ace:
            return None
        p_ten = hole_card_probability(composition.remaining_of(TEN_VALUE_RANKS), composition)
        return p_ten * INSURANCE_WIN + (1 - p_ten) * INSURANCE_LOSS

    def surrender_ev(self) -> float | None:
        """Return the surrender EV, or None when the table disallows it."""
        if not self.rules.surrender_allowed:
            return None
        return SURRENDER_EV

    def evaluate(
        self,
        hand: Hand,
        upcard: Rank,
        composition: DeckComposition,
        dealer: DealerOutcomeProbabilities,
    ) -> PlayerDecisionProbabilities:
        """
        Compute every decision EV for a hand against a dealer upcard.

        Args:
            hand: Player's current hand
            upcard: Dealer's visible rank
            composition: Current shoe snapshot
            dealer: Dealer outcome distribution for the upcard

        Returns:
            PlayerDecisionProbabilities with the optimal decision
        """
        draws = draw_probabilities(hand.totals, composition)
        busting = bust_probability(draws)

        stand_ev = self.stand_ev(hand.value, dealer)
        hit_ev = self.hit_ev(draws)
        double_down_ev = self.double_down_ev(draws, dealer)
        split_ev = self.split_ev(hand)
        insurance_ev = self.insurance_ev(upcard, composition)
        surrender_ev = self.surrender_ev()

        return PlayerDecisionProbabilities(
            stand_ev=stand_ev,
            hit_ev=hit_ev,
            double_down_ev=double_down_ev,
            split_ev=split_ev,
            insurance_ev=insurance_ev,
            surrender_ev=surrender_ev,
            optimal_decision=choose_decision(
                stand_ev,
                hit_ev,
                double_down_ev,
                surrender_ev=surrender_ev,
                split_ev=split_ev,
                insurance_ev=insurance_ev,
            ),
            bust_probabilities=BustProbabilities(
                after_hit=busting,
                after_double_down=busting,
            ),
        )


def insurance_worthwhile(true_count: float, threshold: float = 3.0) -> bool:
    """Count-based rule of thumb: insure at a true count of +3 or more."""
    return true_count >= threshold
