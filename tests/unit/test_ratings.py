"""Unit tests for team ratings and strategy derivation."""

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from first_and_ten.enums import (
    DefensiveStrategy, MatchupOutcome, OffensiveStrategy, Playstyle, PosGroup,
)
from first_and_ten.players import Player, create_test_roster
from first_and_ten.ratings import (
    StrategyContext, calculate_team_ratings, calculate_offensive_ratings, calculate_defensive_ratings,
    classify_qb_playstyle, derive_strategies, strategy_rating_multipliers,
)


def _qb(**stats):
    return Player("QB", tier=5, pos_group=PosGroup.QB, stats=stats)


class TestPlaystyle:
    """Test QB playstyle classification."""

    def test_no_stats_is_balanced(self):
        """Cards without volume stats default to balanced."""
        assert classify_qb_playstyle(_qb()) is Playstyle.BALANCED
        assert classify_qb_playstyle(None) is Playstyle.BALANCED

    def test_dual_threat(self):
        """Heavy rushing volume wins first."""
        assert classify_qb_playstyle(_qb(att_pg=30, rush_att_pg=6, rush_yds_pg=30)) is Playstyle.DUAL_THREAT

    def test_pass_heavy(self):
        """High attempts with a high pass ratio."""
        assert classify_qb_playstyle(_qb(att_pg=35, rush_att_pg=2)) is Playstyle.PASS_HEAVY

    def test_game_manager(self):
        """Low volume, rarely runs."""
        assert classify_qb_playstyle(_qb(passing_att_pg=20, rush_att_pg=1)) is Playstyle.GAME_MANAGER

    def test_everything_else_balanced(self):
        """Middle-of-the-road volume is balanced."""
        assert classify_qb_playstyle(_qb(att_pg=30, rush_att_pg=5, rush_yds_pg=15)) is Playstyle.BALANCED


class TestRatings:
    """Test rating aggregation."""

    def test_average_roster(self, average_roster):
        """An all-tier-5 roster rates 5 everywhere."""
        ratings = calculate_team_ratings(average_roster)
        assert ratings.offense.pass_rating == pytest.approx(5.0)
        assert ratings.offense.run_rating == pytest.approx(5.0)
        assert ratings.defense.pass_defense_rating == pytest.approx(5.0)
        assert ratings.defense.run_defense_rating == pytest.approx(5.0)
        assert ratings.special_teams.kicker_rating == 5.0
        assert ratings.overall.total == pytest.approx(5.0)
        assert ratings.strategy is None

    def test_wr_synergy(self):
        """Elite receivers multiply the pass rating; weak ones shrink it."""
        strong = calculate_offensive_ratings(create_test_roster(WR=8))
        weak = calculate_offensive_ratings(create_test_roster(WR=2))
        base = 5 * 0.55
        assert strong.pass_rating == pytest.approx((base + 8 * 0.45) * 1.08)
        assert weak.pass_rating == pytest.approx((base + 2 * 0.45) * 0.92)

    def test_te_bonus(self):
        """A better TE lifts both phases."""
        ratings = calculate_offensive_ratings(create_test_roster(TE=7))
        assert ratings.pass_rating == pytest.approx(5.2)
        assert ratings.run_rating == pytest.approx(5.1)

    def test_defensive_weights(self):
        """Defensive ratings use the position weight tables."""
        ratings = calculate_defensive_ratings(create_test_roster(DB=9, DL=7, LB=3))
        assert ratings.pass_defense_rating == pytest.approx(9 * 0.5 + 7 * 0.3 + 3 * 0.2)
        assert ratings.run_defense_rating == pytest.approx(7 * 0.4 + 3 * 0.4 + 9 * 0.2)
        assert ratings.pass_rush_rating == pytest.approx(7 * 0.7 + 3 * 0.3)

    def test_accepts_raw_mapping(self):
        """Ratings coerce mappings to rosters."""
        ratings = calculate_team_ratings({"QB": {"player": "Q", "tier": 9}})
        assert ratings.offense.qb_tier == 9.0


class TestStrategies:
    """Test strategy derivation and rock-paper-scissors multipliers."""

    def test_even_roster(self, average_roster):
        """Even rosters are balanced / base defense."""
        base = calculate_team_ratings(average_roster)
        assert derive_strategies(base) == (OffensiveStrategy.BALANCED, DefensiveStrategy.BASE_DEFENSE)

    def test_pass_and_coverage(self):
        """Strong QB/WR and DBs lean pass-heavy and coverage shell."""
        base = calculate_team_ratings(create_test_roster(QB=8, WR=8, DB=8))
        assert derive_strategies(base) == (OffensiveStrategy.PASS_HEAVY, DefensiveStrategy.COVERAGE_SHELL)

    def test_run_and_front(self):
        """Strong RB/OL and front seven lean run-heavy and run stuff."""
        base = calculate_team_ratings(create_test_roster(RB=8, OL=8, DL=8, LB=8))
        assert derive_strategies(base) == (OffensiveStrategy.RUN_HEAVY, DefensiveStrategy.RUN_STUFF)

    def test_force_balanced(self):
        """Forcing overrides the derived pair."""
        base = calculate_team_ratings(create_test_roster(QB=8, WR=8, DB=8))
        assert derive_strategies(base, force_balanced=True) == (
            OffensiveStrategy.BALANCED, DefensiveStrategy.BASE_DEFENSE)

    def test_multipliers(self):
        """Pass-heavy into base defense boosts QB/WR/TE; base vs balanced boosts the front and DBs."""
        mults = strategy_rating_multipliers(
            OffensiveStrategy.PASS_HEAVY, DefensiveStrategy.BASE_DEFENSE,
            OffensiveStrategy.BALANCED, DefensiveStrategy.BASE_DEFENSE,
        )
        for pos in (PosGroup.QB, PosGroup.WR, PosGroup.TE, PosGroup.DL, PosGroup.LB, PosGroup.DB):
            assert mults[pos] == pytest.approx(1.007)
        for pos in (PosGroup.RB, PosGroup.OL, PosGroup.K, PosGroup.P):
            assert mults[pos] == 1.0

    def test_neutral_is_exactly_one(self):
        """Neutral matchups leave tiers untouched."""
        mults = strategy_rating_multipliers(
            OffensiveStrategy.PASS_HEAVY, DefensiveStrategy.COVERAGE_SHELL,
            OffensiveStrategy.BALANCED, DefensiveStrategy.RUN_STUFF,
        )
        assert mults[PosGroup.QB] == 1.0
        assert mults[PosGroup.DB] == 1.0

    def test_context_breakdown(self, average_roster):
        """With a context, ratings carry the boost and its breakdown."""
        ctx = StrategyContext(
            my_offense=OffensiveStrategy.BALANCED, my_defense=DefensiveStrategy.RUN_STUFF,
            their_offense=OffensiveStrategy.BALANCED, their_defense=DefensiveStrategy.RUN_STUFF,
        )
        ratings = calculate_team_ratings(average_roster, ctx)
        assert ratings.strategy is not None
        assert ratings.strategy.offense_outcome is MatchupOutcome.ADVANTAGE
        assert ratings.strategy.defense_outcome is MatchupOutcome.CAPTURED
        assert ratings.offense.qb_tier == pytest.approx(5.035)
        assert ratings.defense.dl_avg_tier == pytest.approx(4.965)
        assert ratings.defense.db_avg_tier == 5.0
