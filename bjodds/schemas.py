"""Pydantic schemas for handing engine results to display collaborators."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from bjodds.cards import Card
from bjodds.composition import DeckComposition
from bjodds.statistics.dealer import DealerOutcomeProbabilities
from bjodds.statistics.decisions import PlayerDecisionProbabilities
from bjodds.statistics.draw import DrawProbability
from bjodds.statistics.house_edge import HouseEdgeInfo
from bjodds.strategy.rules import GameRules


class GameRulesRequest(BaseModel):
    """Rule snapshot coming from the settings layer."""

    num_decks: int = Field(default=6, ge=1, description="Decks in the shoe")
    blackjack_payout: float = Field(default=1.5, ge=1.0)
    dealer_hits_soft_17: bool = True
    double_after_split: bool = True
    surrender_allowed: bool = True
    max_splits: int = Field(default=4, ge=1)

    def to_rules(self) -> GameRules:
        """Convert to the engine's rule snapshot."""
        return GameRules(**self.model_dump())


class DealtCardRequest(BaseModel):
    """One dealt-card event from the turn state machine."""

    card: str = Field(..., min_length=2, max_length=3, description="e.g. 'AS', '10h'")

    def to_card(self) -> Card:
        """Parse into a Card."""
        return Card.from_string(self.card)


class DeckCompositionResponse(BaseModel):
    """Count-tracking snapshot."""

    total_cards: int
    remaining_cards: dict[str, int]
    card_percentages: dict[str, float]
    running_count: int
    true_count: float
    decks_remaining: float
    penetration: float


class DrawProbabilityResponse(BaseModel):
    """Next-card outcome for one rank."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    probability: float
    remaining: int
    resulting_totals: list[int]
    would_bust: bool


class DealerOutcomeResponse(BaseModel):
    """Dealer outcome distribution."""

    upcard: int
    bust_probability: float
    final_total_probabilities: dict[int, float]
    expected_value: float
    blackjack_probability: float


class BustProbabilitiesResponse(BaseModel):
    """Bust chances after drawing."""

    model_config = ConfigDict(from_attributes=True)

    after_hit: float
    after_double_down: float


class PlayerDecisionResponse(BaseModel):
    """Decision EVs and advice."""

    stand_ev: float
    hit_ev: float
    double_down_ev: float
    split_ev: float | None
    insurance_ev: float | None
    surrender_ev: float | None
    optimal_decision: str
    bust_probabilities: BustProbabilitiesResponse


class EdgeFactorsResponse(BaseModel):
    """House edge contributions in percent."""

    model_config = ConfigDict(from_attributes=True)

    blackjack_payout: Decimal
    dealer_hits_soft_17: Decimal
    deck_count: Decimal
    other_rules: Decimal


class HouseEdgeResponse(BaseModel):
    """House edge in percent."""

    model_config = ConfigDict(from_attributes=True)

    base_house_edge: Decimal
    current_house_edge: Decimal
    edge_factors: EdgeFactorsResponse
    deck_favors_player: bool


def deck_composition_response(composition: DeckComposition) -> DeckCompositionResponse:
    """Build a DeckCompositionResponse keyed by rank symbol."""
    return DeckCompositionResponse(
        total_cards=composition.total_cards,
        remaining_cards={str(rank): n for rank, n in composition.remaining_cards.items()},
        card_percentages={str(rank): p for rank, p in composition.card_percentages.items()},
        running_count=composition.running_count,
        true_count=composition.true_count,
        decks_remaining=composition.decks_remaining,
        penetration=composition.penetration,
    )


def draw_probability_response(draw: DrawProbability) -> DrawProbabilityResponse:
    """Build a DrawProbabilityResponse."""
    return DrawProbabilityResponse(
        rank=str(draw.rank),
        probability=draw.probability,
        remaining=draw.remaining,
        resulting_totals=sorted(draw.resulting_totals),
        would_bust=draw.would_bust,
    )


def dealer_outcome_response(outcome: DealerOutcomeProbabilities) -> DealerOutcomeResponse:
    """Build a DealerOutcomeResponse."""
    return DealerOutcomeResponse(
        upcard=outcome.upcard,
        bust_probability=outcome.bust_probability,
        final_total_probabilities=dict(outcome.final_total_probabilities),
        expected_value=outcome.expected_value,
        blackjack_probability=outcome.blackjack_probability,
    )


def player_decision_response(decisions: PlayerDecisionProbabilities) -> PlayerDecisionResponse:
    """Build a PlayerDecisionResponse."""
    return PlayerDecisionResponse(
        stand_ev=decisions.stand_ev,
        hit_ev=decisions.hit_ev,
        double_down_ev=decisions.double_down_ev,
        split_ev=decisions.split_ev,
        insurance_ev=decisions.insurance_ev,
        surrender_ev=decisions.surrender_ev,
        optimal_decision=str(decisions.optimal_decision),
        bust_probabilities=BustProbabilitiesResponse.model_validate(
            decisions.bust_probabilities
        ),
    )


def house_edge_response(info: HouseEdgeInfo) -> HouseEdgeResponse:
    """Build a HouseEdgeResponse."""
    return HouseEdgeResponse.model_validate(info)
