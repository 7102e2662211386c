# src/first_and_ten/__init__.py

from .engine import simulate_game, GameEngine, GameResult
from .players import Player, Roster, build_roster, create_test_roster
from .ratings import (
    calculate_team_ratings, calculate_offensive_ratings, calculate_defensive_ratings,
    classify_qb_playstyle, StrategyContext, TeamRatings,
)
from .matchups import tier_to_rating

__version__ = "1.0.0"

__all__ = [
    "simulate_game",
    "GameEngine",
    "GameResult",
    "Player",
    "Roster",
    "build_roster",
    "create_test_roster",
    "calculate_team_ratings",
    "calculate_offensive_ratings",
    "calculate_defensive_ratings",
    "classify_qb_playstyle",
    "StrategyContext",
    "TeamRatings",
    "tier_to_rating",
]

# Batch helpers pull in joblib/tqdm; keep them out of the base import
def simulate_many(*args, **kwargs):
    from .batch import simulate_many as _fn
    return _fn(*args, **kwargs)

__all__ += ["simulate_many"]
