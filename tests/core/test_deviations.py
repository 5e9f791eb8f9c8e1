"""Tests for count-based index plays."""

import pytest

from bjodds.statistics.decisions import Decision
from bjodds.strategy.deviations import INDEX_PLAYS, basic_play, play_recommendation


class TestIndexPlays:
    """Tests for index play thresholds."""

    @pytest.mark.parametrize(
        "total, upcard, index",
        [(16, 10, 0.0), (15, 10, 4.0), (12, 3, 2.0), (12, 2, 3.0)],
    )
    def test_stand_at_index(self, total, upcard, index):
        """Test each play flips from hit to stand at its index."""
        assert play_recommendation(index, total, upcard) == Decision.STAND
        assert play_recommendation(index - 0.5, total, upcard) == Decision.HIT

    def test_every_play_deviates_from_basic(self):
        """Test each index play's basic action matches the basic chart."""
        for play in INDEX_PLAYS:
            assert play.basic_action == basic_play(play.player_total, play.dealer_upcard)
            assert play.deviation_action != play.basic_action

    def test_deviates_at_or_above_index(self):
        """Test the index itself triggers the deviation."""
        play = INDEX_PLAYS[1]
        assert play.should_deviate(4.0)
        assert play.should_deviate(6.5)
        assert not play.should_deviate(3.9)


class TestBasicPlay:
    """Tests for the fallback hit/stand chart."""

    @pytest.mark.parametrize(
        "total, upcard, action",
        [
            (17, 10, Decision.STAND),
            (8, 6, Decision.HIT),
            (14, 7, Decision.HIT),
            (13, 6, Decision.STAND),
            (12, 2, Decision.HIT),
            (12, 5, Decision.STAND),
        ],
    )
    def test_chart(self, total, upcard, action):
        """Test the chart cells."""
        assert basic_play(total, upcard) == action

    def test_no_index_play_uses_chart(self):
        """Test hands without an index play ignore the count."""
        assert play_recommendation(10.0, 14, 7) == Decision.HIT
        assert play_recommendation(-10.0, 18, 9) == Decision.STAND
