"""Statistical calculations for blackjack."""

from bjodds.statistics.dealer import DealerOutcomeProbabilities, DealerSimulator
from bjodds.statistics.decisions import Decision, DecisionEvaluator, PlayerDecisionProbabilities
from bjodds.statistics.draw import DrawProbability, draw_probabilities
from bjodds.statistics.house_edge import HouseEdgeCalculator, HouseEdgeInfo

__all__ = [
    "DealerOutcomeProbabilities",
    "DealerSimulator",
    "Decision",
    "DecisionEvaluator",
    "DrawProbability",
    "HouseEdgeCalculator",
    "HouseEdgeInfo",
    "PlayerDecisionProbabilities",
    "draw_probabilities",
]
