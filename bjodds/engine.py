"""Probability engine facade - one shoe, one rule set, one cache."""

import logging
from random import Random
from typing import Iterable

from bjodds.cache import ResultCache
from bjodds.cards import Card, Rank
from bjodds.composition import DeckComposition, ShoeTracker
from bjodds.config import EngineConfig, config as default_config
from bjodds.exceptions import InvalidRankDepletion
from bjodds.hand import Hand
from bjodds.statistics.dealer import DealerOutcomeProbabilities, DealerSimulator
from bjodds.statistics.decisions import Decision, DecisionEvaluator, PlayerDecisionProbabilities
from bjodds.statistics.draw import DrawProbability, draw_probabilities
from bjodds.statistics.house_edge import HouseEdgeCalculator, HouseEdgeInfo
from bjodds.strategy.deviations import play_recommendation
from bjodds.strategy.rules import GameRules

log = logging.getLogger(__name__)

UpCard = Card | Rank


def _upcard_rank(upcard: UpCard) -> Rank:
    return upcard.rank if isinstance(upcard, Card) else upcard


class ProbabilityEngine:
    """
    Advisory engine for one table.

    The turn state machine reports every dealt card through ``apply_dealt``
    in dealing order; display code then pulls snapshots and EVs on demand.
    Results are cached per engine, so separate tables never share them.
    """

    def __init__(
        self,
        rules: GameRules | None = None,
        rng: Random | None = None,
        engine_config: EngineConfig | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            rules: Table rules. Built from configuration if None.
            rng: Random source for dealer simulation. Seeded from
                configuration if None.
            engine_config: Configuration to read defaults from
        """
        cfg = engine_config or default_config
        self._rules = rules or cfg.rules.to_rules()
        self._tracker = ShoeTracker(self._rules.num_decks)
        self._simulator = DealerSimulator(
            rng=rng or Random(cfg.simulation.seed),
            trials=cfg.simulation.trials,
        )
        self._evaluator = DecisionEvaluator(self._rules)
        self._dealer_cache = ResultCache(cfg.simulation.cache_size)
        self._decision_cache = ResultCache(cfg.simulation.cache_size)

    @property
    def rules(self) -> GameRules:
        """Return the active rule snapshot."""
        return self._rules

    @property
    def tracker(self) -> ShoeTracker:
        """Return the shoe tracker."""
        return self._tracker

    def update_rules(self, rules: GameRules) -> None:
        """
        Switch to a new rule snapshot.

        A change in deck count starts a fresh shoe.
        """
        if rules.num_decks != self._rules.num_decks:
            log.info("Deck count %d -> %d, rebuilding shoe",
                     self._rules.num_decks, rules.num_decks)
            self._tracker.initialize(rules.num_decks)
        self._rules = rules
        self._evaluator = DecisionEvaluator(rules)
        self._dealer_cache.clear()
        self._decision_cache.clear()

    def apply_dealt(self, cards: Iterable[Card]) -> list[InvalidRankDepletion]:
        """Record dealt cards; returns any cards the shoe could not account for."""
        return self._tracker.apply_dealt(cards)

    def reset_shoe(self) -> None:
        """Start a freshly shuffled shoe."""
        self._tracker.reset()

    def deck_composition(self) -> DeckComposition:
        """Return the current shoe snapshot."""
        return self._tracker.composition

    def draw_probabilities(self, cards: Iterable[Card]) -> list[DrawProbability]:
        """Return next-card probabilities for a hand."""
        return draw_probabilities(Hand(list(cards)).totals, self._tracker.composition)

    def dealer_probabilities(self, upcard: UpCard) -> DealerOutcomeProbabilities:
        """
        Return the dealer outcome distribution for an upcard.

        Cached by upcard value, cards remaining and true count.
        """
        rank = _upcard_rank(upcard)
        composition = self._tracker.composition
        key = (
            rank.blackjack_value,
            composition.total_cards,
            composition.true_count,
        )
        return self._dealer_cache.get_or_compute(
            key,
            lambda: self._simulator.simulate(
                rank, composition, self._rules.dealer_hits_soft_17
            ),
        )

    def player_decisions(
        self,
        cards: Iterable[Card],
        upcard: UpCard,
    ) -> PlayerDecisionProbabilities:
        """
        Return the EV of every decision for a hand against an upcard.

        Cached by hand signature, upcard value and shoe version.
        """
        hand = Hand(list(cards))
        rank = _upcard_rank(upcard)
        composition = self._tracker.composition
        return self._decision_cache.get_or_compute(
            (hand.signature, rank.blackjack_value),
            lambda: self._evaluator.evaluate(
                hand, rank, composition, self.dealer_probabilities(rank)
            ),
            version=composition.version,
        )

    def house_edge(self) -> HouseEdgeInfo:
        """Return the house edge for the rules at the current true count."""
        return HouseEdgeCalculator(self._rules).edge_at_count(
            self._tracker.true_count
        )

    def play_recommendation(self, cards: Iterable[Card], upcard: UpCard) -> Decision:
        """Return the count-adjusted hit/stand play for a hand."""
        hand = Hand(list(cards))
        return play_recommendation(
            self._tracker.true_count,
            hand.value,
            _upcard_rank(upcard).blackjack_value,
        )

    def __repr__(self) -> str:
        return f"ProbabilityEngine(rules={self._rules!r}, shoe={self._tracker!r})"
