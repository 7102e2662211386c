"""Unit tests for configuration tables."""

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from first_and_ten.config import (
    TIERS, MIN_TIER, MAX_TIER, QB_PLAYSTYLES, BOOST_MULTIPLIERS, OFFENSE_MATCHUPS, DEFENSE_MATCHUPS,
    OFFENSE_STRATEGY_POSITIONS, DEFENSE_STRATEGY_POSITIONS, PLAY_TIME, POSITION_WEIGHTS,
    FG_BASE_ACCURACY,
)
from first_and_ten.enums import (
    DefensiveStrategy, MatchupOutcome, OffensiveStrategy, Playstyle, PosGroup,
)


class TestTierTable:
    """Test the tier curve."""

    def test_covers_every_tier(self):
        """Every integer tier has a name and multiplier."""
        assert sorted(TIERS) == list(range(MIN_TIER, MAX_TIER + 1))

    def test_multipliers_increase(self):
        """Higher tiers never rate lower."""
        mults = [TIERS[t][1] for t in range(MIN_TIER, MAX_TIER + 1)]
        assert mults == sorted(mults)
        assert TIERS[1] == ("Basic", 0.28)
        assert TIERS[11] == ("Mythic", 1.00)


class TestStrategyTables:
    """Test the rock-paper-scissors tables."""

    def test_boost_is_symmetric(self):
        """Advantage and captured sit equally either side of 1.0."""
        adv = BOOST_MULTIPLIERS[MatchupOutcome.ADVANTAGE]
        cap = BOOST_MULTIPLIERS[MatchupOutcome.CAPTURED]
        assert adv == pytest.approx(1.007)
        assert cap == pytest.approx(0.993)
        assert BOOST_MULTIPLIERS[MatchupOutcome.NEUTRAL] == 1.0

    def test_each_row_is_a_cycle(self):
        """Every strategy beats one, loses to one and ties one."""
        for table in (OFFENSE_MATCHUPS, DEFENSE_MATCHUPS):
            for row in table.values():
                assert sorted(o.value for o in row.values()) == sorted(o.value for o in MatchupOutcome)

    def test_tables_are_complete(self):
        """Every offense/defense pairing has an entry."""
        for off in OffensiveStrategy:
            assert set(OFFENSE_MATCHUPS[off]) == set(DefensiveStrategy)
        for dfn in DefensiveStrategy:
            assert set(DEFENSE_MATCHUPS[dfn]) == set(OffensiveStrategy)

    def test_kickers_never_boosted(self):
        """K and P appear in no strategy's position list."""
        boosted = set()
        for positions in list(OFFENSE_STRATEGY_POSITIONS.values()) + list(DEFENSE_STRATEGY_POSITIONS.values()):
            boosted.update(positions)
        assert PosGroup.K not in boosted
        assert PosGroup.P not in boosted


class TestMiscTables:
    """Test remaining constant tables."""

    def test_every_playstyle_has_a_profile(self):
        """Each QB playstyle resolves to a profile."""
        assert set(QB_PLAYSTYLES) == set(Playstyle)

    def test_position_weights_sum_to_one(self):
        """Rating weights are convex combinations."""
        for weights in POSITION_WEIGHTS.values():
            assert sum(weights.values()) == pytest.approx(1.0)

    def test_play_time_ranges_ordered(self):
        """Elapsed-time ranges are (lo, hi) with lo <= hi."""
        for lo, hi in PLAY_TIME.values():
            assert 0 < lo <= hi

    def test_fg_bands_decline_with_distance(self):
        """Longer kicks are never easier."""
        accuracies = [acc for _, acc in FG_BASE_ACCURACY]
        assert accuracies == sorted(accuracies, reverse=True)
        assert FG_BASE_ACCURACY[-1][0] is None
