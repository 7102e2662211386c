"""Input validation utilities."""

from typing import Dict, Optional

from ..config import MIN_TIER, MAX_TIER
from ..enums import PosGroup
from .exceptions import RosterSpecError


class TierSpecValidator:
    """Validates roster tier specs ("QB=8,WR=7,DB=6") for the CLI."""

    def validate_position(self, pos: str) -> bool:
        """Validate a position group label.

        Args:
            pos: Position label, case-insensitive

        Returns:
            True if it names a roster position group
        """
        try:
            PosGroup(pos.strip().upper())
            return True
        except ValueError:
            return False

    def validate_tier(self, tier_str: str) -> bool:
        """Validate a tier value.

        Args:
            tier_str: Tier as string, fractional allowed

        Returns:
            True if the tier lies within the tier table
        """
        try:
            tier = float(tier_str)
        except (TypeError, ValueError):
            return False
        return MIN_TIER <= tier <= MAX_TIER

    def parse(self, spec: Optional[str]) -> Dict[str, float]:
        """Parse a spec into {position: tier}.

        Args:
            spec: Comma-separated POS=TIER pairs; empty or None means all defaults

        Returns:
            Mapping of upper-case position label to tier

        Raises:
            RosterSpecError: If any pair is malformed
        """
        tiers: Dict[str, float] = {}
        if not spec or not spec.strip():
            return tiers

        for chunk in spec.split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            if "=" not in chunk:
                raise RosterSpecError(f"Expected POS=TIER, got '{chunk}'")
            pos, tier = (part.strip() for part in chunk.split("=", 1))
            if not self.validate_position(pos):
                raise RosterSpecError(f"Unknown position '{pos}'")
            if not self.validate_tier(tier):
                raise RosterSpecError(f"Tier for {pos.upper()} must be between {MIN_TIER} and {MAX_TIER}, got '{tier}'")
            tiers[pos.upper()] = float(tier)
        return tiers
