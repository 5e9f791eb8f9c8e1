"""Pytest fixtures for probability engine tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from bjodds.cards import Card, Rank, Suit, build_shoe
from bjodds.composition import CARDS_PER_DECK, DeckComposition, ShoeTracker
from bjodds.config import EngineConfig, RulesConfig, SimulationConfig
from bjodds.counting import HiLoSystem
from bjodds.engine import ProbabilityEngine
from bjodds.hand import Hand
from bjodds.strategy.rules import GameRules


def make_hand(*symbols: str) -> Hand:
    """Build a hand from card strings like 'AS', '10H'."""
    return Hand([Card.from_string(s) for s in symbols])


def make_composition(counts: dict[Rank, int], running_count: int = 0) -> DeckComposition:
    """Build a shoe snapshot holding exactly ``counts`` cards."""
    remaining = {rank: counts.get(rank, 0) for rank in Rank}
    total = sum(remaining.values())
    decks_remaining = total / CARDS_PER_DECK
    return DeckComposition(
        total_cards=total,
        remaining_cards=remaining,
        card_percentages={
            rank: (n / total if total else 0.0) for rank, n in remaining.items()
        },
        running_count=running_count,
        true_count=running_count / decks_remaining if decks_remaining else 0.0,
        decks_remaining=decks_remaining,
        num_decks=max(1, -(-total // CARDS_PER_DECK)),
    )


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def tracker():
    """A fresh 6-deck shoe tracker."""
    return ShoeTracker(6)


@pytest.fixture
def single_deck_tracker():
    """A fresh single-deck shoe tracker."""
    return ShoeTracker(1)


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def rules():
    """Default rule set."""
    return GameRules()


@pytest.fixture
def s17_no_surrender_rules():
    """6 decks, S17, 3:2, no DAS, no surrender."""
    return GameRules(
        num_decks=6,
        blackjack_payout=1.5,
        dealer_hits_soft_17=False,
        double_after_split=False,
        surrender_allowed=False,
    )


@pytest.fixture
def engine_config():
    """Engine configuration with a fixed seed and the default trial count."""
    return EngineConfig(
        log_level="WARNING",
        simulation=SimulationConfig(trials=10_000, seed=42, cache_size=256),
        rules=RulesConfig(),
    )


@pytest.fixture
def engine(rules, engine_config):
    """A seeded engine on a fresh 6-deck shoe."""
    return ProbabilityEngine(rules, rng=Random(42), engine_config=engine_config)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def pair_aces_hand():
    """A pair of Aces."""
    return make_hand("AS", "AH")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10S", "6H", "KC")


# Hypothesis strategies for property-based testing
@st.composite
def dealt_cards_strategy(draw, num_decks=1, max_size=80):
    """Generate a dealing sequence, possibly over-dealing some ranks."""
    return draw(
        st.lists(st.sampled_from(build_shoe(num_decks)), max_size=max_size)
    )


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)
