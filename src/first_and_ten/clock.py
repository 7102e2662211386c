from __future__ import annotations
from typing import Tuple
import numpy as np

from .config import QUARTER_SECONDS
from .state import GameState


def format_clock(seconds: float) -> str:
    """m:ss, e.g. 905 -> '15:05'. Negative input shows as 0:00."""
    s = max(0, int(seconds))
    return f"{s // 60}:{s % 60:02d}"


def sample_seconds(bounds: Tuple[float, float], rng: np.random.RandomState) -> float:
    lo, hi = bounds
    return float(lo + rng.rand() * (hi - lo))


def burn_clock(state: GameState, seconds: float) -> None:
    """
    Run the clock and credit possession time to whoever has the ball.
    Quarter expiry is left to the engine, which processes it after the play.
    """
    used = min(float(seconds), state.time_remaining)
    state.time_remaining -= used
    state.offense.stats.time_of_possession += used
    if state.current_drive is not None:
        state.current_drive.time_elapsed += used


def next_quarter(state: GameState) -> None:
    state.quarter += 1
    state.time_remaining = float(QUARTER_SECONDS)


def reset_period(state: GameState) -> None:
    state.time_remaining = float(QUARTER_SECONDS)
