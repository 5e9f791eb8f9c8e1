"""Shoe-aware blackjack probability and advisory engine - 100% UI-agnostic."""

from bjodds.cards import Card, Rank, Suit
from bjodds.composition import DeckComposition, ShoeTracker
from bjodds.engine import ProbabilityEngine
from bjodds.hand import Hand
from bjodds.statistics import Decision
from bjodds.strategy import GameRules

__all__ = [
    "Card",
    "DeckComposition",
    "Decision",
    "GameRules",
    "Hand",
    "ProbabilityEngine",
    "Rank",
    "ShoeTracker",
    "Suit",
]
