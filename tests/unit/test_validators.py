"""Unit tests for roster tier-spec validation."""

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from first_and_ten.utils.validators import TierSpecValidator
from first_and_ten.utils.exceptions import FirstAndTenError, RosterSpecError


class TestTierSpecValidator:
    """Test tier spec validation."""

    def setup_method(self):
        """Set up test validator."""
        self.validator = TierSpecValidator()

    def test_validate_position(self):
        """Test position labels, case-insensitive."""
        assert self.validator.validate_position("QB")
        assert self.validator.validate_position("wr")
        assert self.validator.validate_position(" db ")
        assert self.validator.validate_position("P")

        assert not self.validator.validate_position("FB")
        assert not self.validator.validate_position("")

    def test_validate_tier(self):
        """Test tier range and numeric parsing."""
        assert self.validator.validate_tier("1")
        assert self.validator.validate_tier("11")
        assert self.validator.validate_tier("7.5")

        assert not self.validator.validate_tier("0")
        assert not self.validator.validate_tier("12")
        assert not self.validator.validate_tier("abc")
        assert not self.validator.validate_tier(None)

    def test_parse_valid(self):
        """Test parsing a well-formed spec."""
        tiers = self.validator.parse("QB=8, wr=7,DB=6.5")
        assert tiers == {"QB": 8.0, "WR": 7.0, "DB": 6.5}

    def test_parse_empty(self):
        """Empty or missing specs mean all defaults."""
        assert self.validator.parse("") == {}
        assert self.validator.parse(None) == {}
        assert self.validator.parse("  ") == {}

    def test_parse_ignores_trailing_comma(self):
        """Test stray separators are skipped."""
        assert self.validator.parse("QB=8,") == {"QB": 8.0}

    @pytest.mark.parametrize("spec", ["QB8", "XX=5", "QB=15", "QB=fast"])
    def test_parse_invalid(self, spec):
        """Test malformed specs raise RosterSpecError."""
        with pytest.raises(RosterSpecError):
            self.validator.parse(spec)

    def test_error_hierarchy(self):
        """RosterSpecError is a package error."""
        assert issubclass(RosterSpecError, FirstAndTenError)
