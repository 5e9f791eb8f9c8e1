"""Strategy deviations based on true count."""

from dataclasses import dataclass

from bjodds.statistics.decisions import Decision


@dataclass(frozen=True)
class IndexPlay:
    """
    An index play (strategy deviation based on count).

    When the true count meets or exceeds the index, deviate from basic strategy.
    """

    # Best hand total, hard or soft, against a dealer upcard (2-11, 11 = Ace)
    player_total: int
    dealer_upcard: int

    # Basic strategy action (what you'd normally do)
    basic_action: Decision

    # Deviation action (what to do at/above the index)
    deviation_action: Decision

    # True count threshold
    index: float

    description: str = ""

    def should_deviate(self, true_count: float) -> bool:
        """Check if the deviation should be taken at the given true count."""
        return true_count >= self.index

    def get_action(self, true_count: float) -> Decision:
        """Get the correct action for the given true count."""
        if self.should_deviate(true_count):
            return self.deviation_action
        return self.basic_action


INDEX_PLAYS: list[IndexPlay] = [
    IndexPlay(
        player_total=16,
        dealer_upcard=10,
        basic_action=Decision.HIT,
        deviation_action=Decision.STAND,
        index=0.0,
        description="Stand on 16 vs 10 at TC 0 or higher",
    ),
    IndexPlay(
        player_total=15,
        dealer_upcard=10,
        basic_action=Decision.HIT,
        deviation_action=Decision.STAND,
        index=4.0,
        description="Stand on 15 vs 10 at TC +4 or higher",
    ),
    IndexPlay(
        player_total=12,
        dealer_upcard=3,
        basic_action=Decision.HIT,
        deviation_action=Decision.STAND,
        index=2.0,
        description="Stand on 12 vs 3 at TC +2 or higher",
    ),
    IndexPlay(
        player_total=12,
        dealer_upcard=2,
        basic_action=Decision.HIT,
        deviation_action=Decision.STAND,
        index=3.0,
        description="Stand on 12 vs 2 at TC +3 or higher",
    ),
]

_INDEX_LOOKUP: dict[tuple[int, int], IndexPlay] = {
    (play.player_total, play.dealer_upcard): play for play in INDEX_PLAYS
}


def basic_play(player_total: int, dealer_upcard: int) -> Decision:
    """Simplified hit/stand chart used when no index play applies."""
    if player_total >= 17:
        return Decision.STAND
    if player_total <= 8:
        return Decision.HIT
    if dealer_upcard >= 7:
        return Decision.HIT
    if player_total >= 13:
        return Decision.STAND
    if player_total == 12 and dealer_upcard <= 3:
        return Decision.HIT
    # 9-11 and 12 vs 4-6
    return Decision.STAND


def play_recommendation(
    true_count: float,
    player_total: int,
    dealer_upcard: int,
) -> Decision:
    """
    Recommend hit or stand, applying index plays before the basic chart.

    Args:
        true_count: Current true count
        player_total: Player's best total
        dealer_upcard: Dealer upcard value (2-11, 11 = Ace)
    """
    play = _INDEX_LOOKUP.get((player_total, dealer_upcard))
    if play is not None:
        return play.get_action(true_count)
    return basic_play(player_total, dealer_upcard)
