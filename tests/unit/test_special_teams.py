"""Unit tests for special teams."""

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from first_and_ten.enums import PlayResultKind, PlayType
from first_and_ten.special_teams import (
    fg_make_prob, simulate_extra_point, simulate_field_goal, simulate_kickoff, simulate_punt,
)


class TestFieldGoals:
    """Test field goal and extra point kicks."""

    def test_distance_bands(self):
        """Base accuracy drops with distance for an average kicker."""
        assert fg_make_prob(5, 19) == pytest.approx(0.98)
        assert fg_make_prob(5, 30) == pytest.approx(0.88)
        assert fg_make_prob(5, 49) == pytest.approx(0.78)
        assert fg_make_prob(5, 58) == pytest.approx(0.62)

    def test_kicker_tier_and_caps(self):
        """Tier adds 0.02 per tier; probability stays within [0.05, 0.99]."""
        assert fg_make_prob(8, 45) == pytest.approx(0.84)
        assert fg_make_prob(11, 19) == pytest.approx(0.99)
        assert fg_make_prob(1, 60) == pytest.approx(0.54)

    def test_made_field_goal(self, scripted_rng):
        """A made kick scores 3 and takes 8 seconds."""
        play = simulate_field_goal(5, 40, scripted_rng([0.0]))
        assert play.play_type is PlayType.FIELD_GOAL
        assert play.result is PlayResultKind.GOOD
        assert play.points == 3
        assert play.distance == 40
        assert play.time_elapsed == 8.0

    def test_missed_field_goal(self, scripted_rng):
        """A miss scores nothing."""
        play = simulate_field_goal(5, 40, scripted_rng([0.99]))
        assert play.result is PlayResultKind.MISSED
        assert play.points == 0

    def test_extra_point(self, scripted_rng):
        """Extra points are worth 1 and take 5 seconds."""
        good = simulate_extra_point(5, scripted_rng([0.5]))
        assert good.result is PlayResultKind.GOOD and good.points == 1
        assert good.time_elapsed == 5.0
        miss = simulate_extra_point(5, scripted_rng([0.97]))
        assert miss.result is PlayResultKind.MISSED and miss.points == 0


class TestPunts:
    """Test punts."""

    def test_touchback(self, scripted_rng):
        """A punt that reaches the end zone comes out at the 25."""
        play = simulate_punt(5, 80, scripted_rng([0.5, 0.5]))
        assert play.result is PlayResultKind.TOUCHBACK
        assert play.new_field_position == 25
        assert 40.0 <= play.time_elapsed <= 48.0

    def test_fair_catch(self, scripted_rng):
        """Fair catch: receiving spot is the mirror of the landing spot."""
        play = simulate_punt(5, 20, scripted_rng([0.5, 0.5, 0.0]))
        assert play.result is PlayResultKind.RETURN
        assert play.distance == 42
        assert play.return_yards == 0
        assert play.new_field_position == 38

    def test_return(self, scripted_rng):
        """A returned punt adds the return yards to the receiving spot."""
        play = simulate_punt(5, 20, scripted_rng([0.5, 0.5, 0.9]))
        assert play.return_yards == 5
        assert play.new_field_position == 43

    def test_spot_stays_on_field(self):
        """Receiving spots are always between the 1 and the 99."""
        import numpy as np
        rng = np.random.RandomState(9)
        for fp in (1, 10, 30, 50, 57):
            for _ in range(200):
                play = simulate_punt(1, fp, rng)
                assert 1 <= play.new_field_position <= 99


class TestKickoffs:
    """Test kickoffs."""

    def test_touchback(self, scripted_rng):
        """Touchbacks put the receiver at the 25 and take 8 seconds."""
        play = simulate_kickoff(5, scripted_rng([0.0]))
        assert play.result is PlayResultKind.TOUCHBACK
        assert play.new_field_position == 25
        assert play.time_elapsed == 8.0

    def test_return(self, scripted_rng):
        """Returns land around the 22."""
        play = simulate_kickoff(5, scripted_rng([0.99, 0.5, 0.5]))
        assert play.result is PlayResultKind.RETURN
        assert play.new_field_position == 22
        assert 10.0 <= play.time_elapsed <= 20.0

    def test_return_capped(self, scripted_rng):
        """Long returns stop at midfield."""
        play = simulate_kickoff(1, scripted_rng([0.99, 1.0, 0.5]))
        assert play.new_field_position <= 50
