"""Blackjack rule variations."""

from dataclasses import dataclass

from bjodds.exceptions import InvalidRulesError


@dataclass(frozen=True)
class GameRules:
    """
    Blackjack table rules snapshot.

    All rules that affect probabilities, decision EVs and house edge.
    """

    # Deck configuration
    num_decks: int = 6

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Double down rules
    double_after_split: bool = True  # DAS

    # Surrender rules
    surrender_allowed: bool = True

    # Split rules
    max_splits: int = 4  # Maximum number of hands from splitting

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1:
            raise InvalidRulesError("num_decks must be at least 1")
        if self.blackjack_payout < 1.0:
            raise InvalidRulesError("blackjack_payout must be at least 1.0")
        if self.max_splits < 1:
            raise InvalidRulesError("max_splits must be at least 1")

    @classmethod
    def vegas_strip(cls) -> "GameRules":
        """Standard Vegas Strip rules."""
        return cls(
            num_decks=6,
            dealer_hits_soft_17=False,
            blackjack_payout=1.5,
            double_after_split=True,
            surrender_allowed=True,
        )

    @classmethod
    def downtown_vegas(cls) -> "GameRules":
        """Downtown Las Vegas rules (typically H17)."""
        return cls(
            num_decks=6,
            dealer_hits_soft_17=True,
            blackjack_payout=1.5,
            double_after_split=True,
            surrender_allowed=True,
        )

    @classmethod
    def single_deck(cls) -> "GameRules":
        """Single deck rules."""
        return cls(
            num_decks=1,
            dealer_hits_soft_17=True,
            blackjack_payout=1.5,
            double_after_split=False,
            surrender_allowed=False,
        )

    @classmethod
    def atlantic_city(cls) -> "GameRules":
        """Atlantic City rules."""
        return cls(
            num_decks=8,
            dealer_hits_soft_17=False,
            blackjack_payout=1.5,
            double_after_split=True,
            surrender_allowed=True,
        )
