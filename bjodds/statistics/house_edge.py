"""House edge calculations."""

from dataclasses import dataclass
from decimal import Decimal

from bjodds.strategy.rules import GameRules


@dataclass(frozen=True)
class EdgeFactors:
    """Contribution of each rule group to the base edge, in percent."""

    blackjack_payout: Decimal
    dealer_hits_soft_17: Decimal
    deck_count: Decimal
    other_rules: Decimal


@dataclass(frozen=True)
class HouseEdgeInfo:
    """House edge for a rule set at the current count, in percent."""

    base_house_edge: Decimal
    current_house_edge: Decimal
    edge_factors: EdgeFactors
    deck_favors_player: bool


class HouseEdgeCalculator:
    """
    Calculate house edge based on rule variations.

    Starts from a 0.50% baseline (6+ decks, S17, 3:2, no DAS, no surrender)
    and adds a fixed effect per rule.
    """

    # Rule effects on house edge (in percentage points)
    # Positive = increases house edge (bad for player)
    # Negative = decreases house edge (good for player)
    _RULE_EFFECTS = {
        "bj_6_5": Decimal("1.70"),
        "bj_worse": Decimal("2.50"),  # Anything below 6:5, e.g. even money
        "h17": Decimal("0.20"),
        "single_deck": Decimal("-0.50"),
        "double_deck": Decimal("-0.20"),
        "das": Decimal("-0.15"),
        "surrender": Decimal("-0.10"),
    }

    _BASELINE = Decimal("0.50")

    # Each true count point moves the edge this far toward the player
    _TRUE_COUNT_VALUE = Decimal("0.5")

    def __init__(self, rules: GameRules) -> None:
        """
        Initialize calculator with rule set.

        Args:
            rules: The rule set to calculate edge for
        """
        self.rules = rules

    def factors(self) -> EdgeFactors:
        """Return the per-rule contributions to the base edge."""
        payout = self.rules.blackjack_payout
        if payout >= 1.5:
            payout_effect = Decimal("0")
        elif payout >= 1.2:
            payout_effect = self._RULE_EFFECTS["bj_6_5"]
        else:
            payout_effect = self._RULE_EFFECTS["bj_worse"]

        soft_17_effect = self._RULE_EFFECTS["h17"] if self.rules.dealer_hits_soft_17 else Decimal("0")

        deck_effects = {
            1: self._RULE_EFFECTS["single_deck"],
            2: self._RULE_EFFECTS["double_deck"],
        }
        deck_effect = deck_effects.get(self.rules.num_decks, Decimal("0"))

        other_effect = Decimal("0")
        if self.rules.double_after_split:
            other_effect += self._RULE_EFFECTS["das"]
        if self.rules.surrender_allowed:
            other_effect += self._RULE_EFFECTS["surrender"]

        return EdgeFactors(
            blackjack_payout=payout_effect,
            dealer_hits_soft_17=soft_17_effect,
            deck_count=deck_effect,
            other_rules=other_effect,
        )

    def calculate(self) -> Decimal:
        """
        Calculate the house edge for the configured rules.

        Returns:
            House edge as a percentage (e.g., 0.50 for 0.50%)
        """
        factors = self.factors()
        return (
            self._BASELINE
            + factors.blackjack_payout
            + factors.dealer_hits_soft_17
            + factors.deck_count
            + factors.other_rules
        )

    def edge_at_count(self, true_count: float) -> HouseEdgeInfo:
        """
        Calculate the house edge adjusted for the current true count.

        Args:
            true_count: The current true count

        Returns:
            HouseEdgeInfo with base and count-adjusted edge
        """
        base_edge = self.calculate()
        adjustment = Decimal(str(true_count)) * self._TRUE_COUNT_VALUE
        return HouseEdgeInfo(
            base_house_edge=base_edge,
            current_house_edge=base_edge - adjustment,
            edge_factors=self.factors(),
            deck_favors_player=true_count > 0,
        )

    def player_advantage(self, true_count: float) -> Decimal:
        """
        Calculate player advantage for a given true count.

        Returns:
            Player advantage in percent (positive = player advantage)
        """
        return -self.edge_at_count(true_count).current_house_edge
