from __future__ import annotations
import numpy as np

from .config import (
    DEFAULT_TIER, GOAL_LINE, STARTING_FIELD_POSITION,
    FG_BASE_ACCURACY, FG_TIER_BONUS, FG_PROB_MIN, FG_PROB_MAX, FG_POINTS,
    XP_SUCCESS, XP_TIER_BONUS, XP_PROB_MIN, XP_PROB_MAX, XP_POINTS,
    PUNT_DISTANCE_BASE, PUNT_DISTANCE_PER_TIER, PUNT_DISTANCE_SPREAD, PUNT_FAIR_CATCH, PUNT_RETURN_YARDS,
    TOUCHBACK_CHANCE, TOUCHBACK_PER_TIER, TOUCHBACK_PROB_MIN, TOUCHBACK_PROB_MAX,
    RETURN_YARDS_BASE, RETURN_YARDS_SPREAD, MAX_RETURN_SPOT,
    FIELD_GOAL_TIME, EXTRA_POINT_TIME, PUNT_TIME, KICKOFF_TOUCHBACK_TIME, KICKOFF_RETURN_TIME,
)
from .enums import PlayResultKind, PlayType
from .matchups import roll
from .clock import sample_seconds
from .state import Play


def _tier(t) -> float:
    return float(t) if t else float(DEFAULT_TIER)


def fg_make_prob(kicker_tier: float, distance: int) -> float:
    """Distance-banded base accuracy plus the kicker's tier bonus."""
    base = FG_BASE_ACCURACY[-1][1]
    for max_distance, accuracy in FG_BASE_ACCURACY:
        if max_distance is None or distance <= max_distance:
            base = accuracy
            break
    p = base + (_tier(kicker_tier) - DEFAULT_TIER) * FG_TIER_BONUS
    return float(np.clip(p, FG_PROB_MIN, FG_PROB_MAX))


def simulate_field_goal(kicker_tier: float, distance: int, rng: np.random.RandomState) -> Play:
    distance = int(distance)
    made = roll(rng) < fg_make_prob(kicker_tier, distance)
    return Play(
        play_type=PlayType.FIELD_GOAL,
        result=PlayResultKind.GOOD if made else PlayResultKind.MISSED,
        description=f"{distance} yard field goal {'is GOOD!' if made else 'NO GOOD'}",
        distance=distance,
        points=FG_POINTS if made else 0,
        time_elapsed=FIELD_GOAL_TIME,
    )


def simulate_extra_point(kicker_tier: float, rng: np.random.RandomState) -> Play:
    p = float(np.clip(XP_SUCCESS + (_tier(kicker_tier) - DEFAULT_TIER) * XP_TIER_BONUS, XP_PROB_MIN, XP_PROB_MAX))
    made = roll(rng) < p
    return Play(
        play_type=PlayType.EXTRA_POINT,
        result=PlayResultKind.GOOD if made else PlayResultKind.MISSED,
        description=f"Extra point {'is GOOD' if made else 'NO GOOD'}",
        points=XP_POINTS if made else 0,
        time_elapsed=EXTRA_POINT_TIME,
    )


def simulate_punt(punter_tier: float, field_position: int, rng: np.random.RandomState) -> Play:
    """
    new_field_position is the receiving team's spot (own-goal perspective).
    End-zone landings are touchbacks at the 25.
    """
    distance = (PUNT_DISTANCE_BASE
                + (_tier(punter_tier) - DEFAULT_TIER) * PUNT_DISTANCE_PER_TIER
                + (roll(rng) - 0.5) * PUNT_DISTANCE_SPREAD)
    landing = field_position + distance
    elapsed = sample_seconds(PUNT_TIME, rng)

    if landing >= GOAL_LINE:
        return Play(
            play_type=PlayType.PUNT,
            result=PlayResultKind.TOUCHBACK,
            description=f"Punt for {int(round(distance))} yards, touchback",
            distance=int(round(distance)),
            new_field_position=STARTING_FIELD_POSITION,
            time_elapsed=elapsed,
        )

    if roll(rng) < PUNT_FAIR_CATCH:
        return_yards = 0
    else:
        return_yards = int(rng.randint(PUNT_RETURN_YARDS[0], PUNT_RETURN_YARDS[1]))
    spot = int(np.clip(round(GOAL_LINE - landing + return_yards), 1, GOAL_LINE - 1))
    tail = f", returned {return_yards} yards" if return_yards > 0 else ", fair catch"
    return Play(
        play_type=PlayType.PUNT,
        result=PlayResultKind.RETURN,
        description=f"Punt for {int(round(distance))} yards{tail}",
        distance=int(round(distance)),
        return_yards=return_yards,
        new_field_position=spot,
        time_elapsed=elapsed,
    )


def simulate_kickoff(kicker_tier: float, rng: np.random.RandomState) -> Play:
    p_touchback = float(np.clip(TOUCHBACK_CHANCE + (_tier(kicker_tier) - DEFAULT_TIER) * TOUCHBACK_PER_TIER,
                                TOUCHBACK_PROB_MIN, TOUCHBACK_PROB_MAX))
    if roll(rng) < p_touchback:
        return Play(
            play_type=PlayType.KICKOFF,
            result=PlayResultKind.TOUCHBACK,
            description="Kickoff, touchback",
            new_field_position=STARTING_FIELD_POSITION,
            time_elapsed=KICKOFF_TOUCHBACK_TIME,
        )

    return_yards = int(round(RETURN_YARDS_BASE + (roll(rng) - 0.5) * RETURN_YARDS_SPREAD))
    return Play(
        play_type=PlayType.KICKOFF,
        result=PlayResultKind.RETURN,
        description=f"Kickoff returned to the {return_yards} yard line",
        return_yards=return_yards,
        new_field_position=min(MAX_RETURN_SPOT, return_yards),
        time_elapsed=sample_seconds(KICKOFF_RETURN_TIME, rng),
    )
