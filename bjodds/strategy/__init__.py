"""Table rules and count-based playing deviations."""

from bjodds.strategy.deviations import IndexPlay, play_recommendation
from bjodds.strategy.rules import GameRules

__all__ = [
    "GameRules",
    "IndexPlay",
    "play_recommendation",
]
