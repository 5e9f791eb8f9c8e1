"""Tests for the shoe composition tracker."""

import logging

import pytest
from hypothesis import given, settings

from bjodds.cards import Card, Rank, Suit, build_shoe
from bjodds.composition import ShoeTracker
from bjodds.exceptions import InvalidRankDepletion, InvalidRulesError

from conftest import dealt_cards_strategy


def _cards(*symbols):
    return [Card.from_string(s) for s in symbols]


class TestInitialize:
    """Tests for a fresh shoe."""

    def test_fresh_six_deck_shoe(self, tracker):
        """Test a 6-deck shoe starts with 24 of every rank."""
        comp = tracker.composition
        assert comp.total_cards == 312
        assert all(n == 24 for n in comp.remaining_cards.values())
        assert all(p == pytest.approx(1 / 13) for p in comp.card_percentages.values())
        assert comp.running_count == 0
        assert comp.true_count == 0
        assert comp.decks_remaining == 6
        assert comp.penetration == 0

    @pytest.mark.parametrize("num_decks", [0, -1])
    def test_rejects_non_positive_deck_count(self, num_decks):
        """Test invalid deck counts fail fast."""
        with pytest.raises(InvalidRulesError):
            ShoeTracker(num_decks)

    def test_initialize_switches_deck_count(self, tracker):
        """Test reinitializing builds a shoe of the new size."""
        tracker.apply_dealt(_cards("5H"))
        tracker.initialize(2)
        assert tracker.num_decks == 2
        assert tracker.total_cards == 104
        assert tracker.running_count == 0


class TestApplyDealt:
    """Tests for depleting the shoe."""

    def test_five_and_king(self, tracker):
        """Test dealing a 5 and a K from a fresh 6-deck shoe."""
        problems = tracker.apply_dealt(_cards("5H", "KS"))
        comp = tracker.composition

        assert problems == []
        assert comp.remaining_cards[Rank.FIVE] == 23
        assert comp.remaining_cards[Rank.KING] == 23
        assert comp.total_cards == 310
        assert comp.running_count == 0
        assert comp.true_count == 0

    def test_true_count_follows_decks_remaining(self, tracker):
        """Test true count is running count over decks remaining."""
        tracker.apply_dealt([Card(Rank.TWO, Suit.CLUBS)] * 10)
        comp = tracker.composition
        assert comp.running_count == 10
        assert comp.decks_remaining == pytest.approx(302 / 52)
        assert comp.true_count == pytest.approx(10 / (302 / 52))

    def test_percentages_recomputed(self, single_deck_tracker):
        """Test percentages reflect the depleted shoe."""
        single_deck_tracker.apply_dealt(_cards("AS", "AH"))
        comp = single_deck_tracker.composition
        assert comp.card_percentages[Rank.ACE] == pytest.approx(2 / 50)
        assert comp.card_percentages[Rank.TWO] == pytest.approx(4 / 50)

    def test_deal_entire_shoe(self):
        """Test dealing every card leaves an empty shoe with zero count."""
        tracker = ShoeTracker(2)
        problems = tracker.apply_dealt(build_shoe(2))
        comp = tracker.composition

        assert problems == []
        assert comp.total_cards == 0
        assert all(n == 0 for n in comp.remaining_cards.values())
        assert all(p == 0 for p in comp.card_percentages.values())
        assert comp.decks_remaining == 0
        assert comp.true_count == 0
        assert comp.running_count == 0
        assert comp.penetration == 1.0

    def test_over_dealt_rank_is_clamped_and_reported(self, single_deck_tracker, caplog):
        """Test a fifth Ace from one deck is reported, not removed."""
        aces = [Card(Rank.ACE, suit) for suit in Suit] + [Card(Rank.ACE, Suit.SPADES)]

        with caplog.at_level(logging.WARNING, logger="bjodds.composition"):
            problems = single_deck_tracker.apply_dealt(aces)

        comp = single_deck_tracker.composition
        assert len(problems) == 1
        assert isinstance(problems[0], InvalidRankDepletion)
        assert problems[0].card.rank == Rank.ACE
        assert comp.remaining_cards[Rank.ACE] == 0
        assert comp.total_cards == 48
        assert comp.running_count == -4
        assert "out of sync" in caplog.text

    def test_version_bumps_on_every_mutation(self, tracker):
        """Test every mutation moves the version forward."""
        start = tracker.version
        tracker.apply_dealt(_cards("2C"))
        after_deal = tracker.version
        tracker.reset()
        assert start < after_deal < tracker.version

    def test_count_description(self, single_deck_tracker):
        """Test the count label follows the true count."""
        assert single_deck_tracker.count_description == "Neutral"
        single_deck_tracker.apply_dealt(
            [Card(rank, suit) for rank in (Rank.TWO, Rank.THREE) for suit in Suit]
        )
        assert single_deck_tracker.count_description == "Extremely positive"

    def test_snapshot_mappings_are_read_only(self, tracker):
        """Test a shared snapshot cannot be edited by its readers."""
        comp = tracker.composition
        with pytest.raises(TypeError):
            comp.remaining_cards[Rank.ACE] = 0
        with pytest.raises(TypeError):
            comp.card_percentages[Rank.ACE] = 0.0
        assert sum(tracker.composition.remaining_cards.values()) == 312

    def test_snapshot_is_detached(self, tracker):
        """Test a snapshot does not change when the shoe is dealt from."""
        before = tracker.composition
        tracker.apply_dealt(_cards("2C"))
        assert before.total_cards == 312
        assert tracker.composition.total_cards == 311


class TestReset:
    """Tests for reshuffling."""

    def test_reset_restores_fresh_shoe(self, tracker):
        """Test reset matches a freshly initialized shoe."""
        tracker.apply_dealt(build_shoe(1)[:30])
        tracker.reset()
        assert tracker.composition == ShoeTracker(6).composition

    @given(dealt=dealt_cards_strategy())
    @settings(max_examples=50)
    def test_reset_after_any_sequence(self, dealt):
        """Test reset restores the initial state after any deal sequence."""
        tracker = ShoeTracker(1)
        tracker.apply_dealt(dealt)
        tracker.reset()
        assert tracker.composition == ShoeTracker(1).composition


class TestInvariants:
    """Property tests for every reachable composition."""

    @given(dealt=dealt_cards_strategy())
    @settings(max_examples=100)
    def test_remaining_sums_to_total(self, dealt):
        """Test remaining cards always sum to the total."""
        tracker = ShoeTracker(1)
        tracker.apply_dealt(dealt)
        comp = tracker.composition

        assert sum(comp.remaining_cards.values()) == comp.total_cards
        assert all(n >= 0 for n in comp.remaining_cards.values())
        if comp.total_cards > 0:
            assert sum(comp.card_percentages.values()) == pytest.approx(1.0, abs=1e-9)

    @given(dealt=dealt_cards_strategy())
    @settings(max_examples=100)
    def test_true_count_invariant(self, dealt):
        """Test true count is running count over decks remaining, or 0."""
        tracker = ShoeTracker(1)
        tracker.apply_dealt(dealt)
        comp = tracker.composition

        if comp.decks_remaining > 0:
            assert comp.true_count == pytest.approx(comp.running_count / comp.decks_remaining)
        else:
            assert comp.true_count == 0
