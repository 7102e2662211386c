"""Unit tests for game reporting."""

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from first_and_ten.box_score import format_game_result, format_play_by_play, team_box, team_summary
from first_and_ten.engine import simulate_game
from first_and_ten.players import create_test_roster


class TestBoxScore:
    """Test text and frame output for a finished game."""

    def setup_method(self):
        """Simulate one seeded game."""
        roster = create_test_roster()
        self.result = simulate_game(roster, roster, seed=17)

    def test_format_game_result(self):
        """The score block lists both scores and the key counters."""
        text = format_game_result(self.result)
        assert text.startswith("=")
        assert "FINAL" in text
        assert f"Home {self.result.home_score:>3}" in text
        assert "Time of possession" in text
        top = self.result.home_stats.time_of_possession
        assert f"{int(round(top)) // 60}:{int(round(top)) % 60:02d}" in text
        assert "Strategies:" in text

    def test_format_play_by_play_limit(self):
        """Only the first `limit` plays are printed, plus a trailer."""
        lines = format_play_by_play(self.result, limit=5).splitlines()
        assert len(lines) == 6
        assert lines[0].startswith("Q1")
        assert lines[-1].endswith("more plays")

    def test_team_box(self):
        """Two rows whose points match the final score."""
        box = team_box(self.result)
        assert list(box.index) == ["home", "away"]
        assert box.loc["home", "points"] == self.result.home_score
        assert box.loc["away", "total_yards"] == self.result.away_stats.total_yards
        assert "time_of_possession" in box.columns


class TestTeamSummary:
    """Test roster summaries."""

    def test_slots_and_ratings(self):
        """Every slot is listed, doubled slots numbered."""
        summary = team_summary(create_test_roster(QB=8, WR=7))
        assert summary["tiers"]["QB"] == 8.0
        assert summary["tiers"]["WR1"] == 7.0
        assert summary["tiers"]["WR2"] == 7.0
        assert set(summary["tiers"]) == {"QB", "RB", "WR1", "WR2", "TE", "OL", "DL", "LB", "DB1", "DB2", "K", "P"}
        assert summary["qb_playstyle"] == "BALANCED"
        assert summary["pass_rating"] > summary["run_rating"]

    def test_tier_names_and_sum(self):
        """Slot tiers are labelled by name and summed over the starters."""
        summary = team_summary(create_test_roster(QB=8, WR=7, P=9))
        assert summary["tier_names"]["QB"] == "Ultra Rare"
        assert summary["tier_names"]["WR2"] == "Very Rare"
        assert summary["tier_names"]["RB"] == "Uncommon+"
        assert summary["tier_sum"] == 62.0

    def test_accepts_mapping(self):
        """Summaries coerce raw mappings."""
        summary = team_summary({"K": {"player": "Leg", "tier": 9}})
        assert summary["kicker_rating"] == pytest.approx(9.0)
