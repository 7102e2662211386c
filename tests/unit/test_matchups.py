"""Unit tests for matchup primitives."""

import numpy as np
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from first_and_ten.enums import HoleSize, PassType, Separation
from first_and_ten.matchups import (
    matchup_diff, tier_to_rating, tier_name, roll_normal,
    calculate_protection, calculate_coverage, calculate_throw, calculate_catch,
    calculate_run_blocking, calculate_rush, calculate_qb_run,
)


class TestTierToRating:
    """Test the tier curve lookup."""

    def test_integer_tiers(self):
        """Integer tiers hit the table exactly."""
        assert tier_to_rating(1) == pytest.approx(0.28)
        assert tier_to_rating(5) == pytest.approx(0.60)
        assert tier_to_rating(11) == pytest.approx(1.00)

    def test_fractional_tiers_interpolate(self):
        """Fractional tiers sit between their neighbours."""
        assert tier_to_rating(5.5) == pytest.approx(0.64)
        assert tier_to_rating(10.5) == pytest.approx(0.98)

    def test_out_of_range_clamps(self):
        """Tiers outside [1, 11] clamp to the ends."""
        assert tier_to_rating(0) == pytest.approx(0.28)
        assert tier_to_rating(11.07) == pytest.approx(1.00)
        assert tier_to_rating(99) == pytest.approx(1.00)

    @pytest.mark.parametrize("bad", [None, "abc", float("nan"), object()])
    def test_junk_is_neutral(self, bad):
        """Non-numeric input rates 0.5."""
        assert tier_to_rating(bad) == 0.5

    def test_monotonic(self):
        """Rating never drops as tier rises."""
        ratings = [tier_to_rating(t) for t in np.linspace(1, 11, 101)]
        assert all(b >= a for a, b in zip(ratings, ratings[1:]))

    def test_tier_name(self):
        """Names round to the nearest tier."""
        assert tier_name(8) == "Ultra Rare"
        assert tier_name(10.6) == "Mythic"
        assert tier_name("junk") == "Uncommon+"

    def test_matchup_diff_defaults(self):
        """Missing tiers count as tier 5."""
        assert matchup_diff(8, None) == 3.0
        assert matchup_diff(0, 7) == -2.0


class TestPassPrimitives:
    """Test protection, coverage, throw and catch."""

    def test_sack(self, scripted_rng):
        """A low roll sacks; the loss comes from the sack range."""
        result = calculate_protection(5, 5, scripted_rng([0.0]))
        assert result.sacked
        assert result.sack_yards == -3

    def test_pressure_without_sack(self, scripted_rng):
        """Past the sack check, a low roll is pressure."""
        result = calculate_protection(5, 5, scripted_rng([0.5, 0.0, 0.5]))
        assert not result.sacked
        assert result.pressured
        assert result.sack_yards == 0
        assert 1.5 <= result.time_in_pocket <= 4.5

    def test_separation_bands(self, scripted_rng):
        """Coverage roll maps onto open / contested / covered."""
        assert calculate_coverage(5, 5, scripted_rng([0.9])).separation is Separation.OPEN
        assert calculate_coverage(5, 5, scripted_rng([0.5])).separation is Separation.CONTESTED
        assert calculate_coverage(5, 5, scripted_rng([0.1])).separation is Separation.COVERED

    def test_receiver_edge_shifts_separation(self, scripted_rng):
        """A big WR edge turns a covered roll into open."""
        assert calculate_coverage(11, 1, scripted_rng([0.1])).separation is Separation.OPEN

    def test_throw_accuracy(self, scripted_rng):
        """Accuracy = base + rating term, less pressure, plus separation and depth terms."""
        clean = calculate_throw(5, False, Separation.CONTESTED, PassType.MEDIUM, scripted_rng([0.5]))
        assert clean.accuracy == pytest.approx(0.79)
        assert clean.quality == "good"

        pressured = calculate_throw(5, True, Separation.CONTESTED, PassType.MEDIUM, scripted_rng([0.5]))
        assert pressured.accuracy == pytest.approx(0.64)
        assert pressured.quality == "decent"

        worst = calculate_throw(1, True, Separation.COVERED, PassType.DEEP, scripted_rng([0.0]))
        assert worst.accuracy == pytest.approx(0.192)
        assert worst.quality == "poor"

    def test_catch_yards(self, scripted_rng):
        """A completion on minimum rolls gains the bottom of the air-yards band."""
        result = calculate_catch(5, 5, 0.79, Separation.CONTESTED, PassType.MEDIUM, scripted_rng([0.0, 0.0, 0.0]))
        assert result.caught
        assert not result.intercepted
        assert result.yards == 8

    def test_interception(self, scripted_rng):
        """After a miss, a low roll is an interception."""
        result = calculate_catch(5, 5, 0.79, Separation.CONTESTED, PassType.MEDIUM, scripted_rng([0.99, 0.0]))
        assert not result.caught
        assert result.intercepted
        assert not result.pass_defended

    def test_pass_defended(self, scripted_rng):
        """A miss that is not picked can be defended."""
        result = calculate_catch(5, 5, 0.79, Separation.COVERED, PassType.DEEP, scripted_rng([0.99, 0.99, 0.0]))
        assert not result.caught and not result.intercepted
        assert result.pass_defended

    def test_better_receivers_catch_more(self):
        """Completion rate rises with WR tier over many seeded throws."""
        def rate(wr_tier):
            rng = np.random.RandomState(7)
            hits = [calculate_catch(wr_tier, 5, 0.7, Separation.CONTESTED, PassType.MEDIUM, rng).caught
                    for _ in range(3000)]
            return np.mean(hits)
        assert rate(10) > rate(2)


class TestRunPrimitives:
    """Test run blocking, rushing and QB runs."""

    def test_stuff(self, scripted_rng):
        """A low roll is a tackle for loss."""
        result = calculate_run_blocking(5, 5, scripted_rng([0.0]))
        assert result.stuffed
        assert result.hole_size is HoleSize.NONE
        assert result.tfl_yards == -1

    def test_hole_sizes(self, scripted_rng):
        """Hole roll maps onto big / small / tight."""
        assert calculate_run_blocking(5, 5, scripted_rng([0.5, 0.9])).hole_size is HoleSize.BIG
        assert calculate_run_blocking(5, 5, scripted_rng([0.5, 0.5])).hole_size is HoleSize.SMALL
        assert calculate_run_blocking(5, 5, scripted_rng([0.5, 0.1])).hole_size is HoleSize.TIGHT

    def test_rush_floor(self):
        """Runs never lose more than 5 yards."""
        rng = np.random.RandomState(11)
        yards = [calculate_rush(1, 11, HoleSize.TIGHT, rng).yards for _ in range(2000)]
        assert min(yards) >= -5

    def test_rush_tier_ordering(self):
        """Better backs average more yards against the same linebacker."""
        def mean_yards(rb_tier):
            rng = np.random.RandomState(3)
            return np.mean([calculate_rush(rb_tier, 5, HoleSize.SMALL, rng).yards for _ in range(3000)])
        assert mean_yards(10) > mean_yards(2)

    def test_qb_run(self):
        """Designed QB runs out-gain scrambles on average and respect the floor."""
        rng = np.random.RandomState(5)
        designed = [calculate_qb_run(5, 5, True, rng).yards for _ in range(2000)]
        scrambles = [calculate_qb_run(5, 5, False, rng).yards for _ in range(2000)]
        assert min(designed + scrambles) >= -3
        assert np.mean(designed) > np.mean(scrambles)

    def test_roll_normal_clipped(self):
        """Normal draws are clipped to [0, 1]."""
        rng = np.random.RandomState(1)
        draws = [roll_normal(rng, 0.5, 2.0) for _ in range(500)]
        assert min(draws) >= 0.0 and max(draws) <= 1.0
