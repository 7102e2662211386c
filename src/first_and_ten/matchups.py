"""
Matchup primitives: two tiers in, one structured outcome out.

Every function draws from the RandomState passed in; nothing here keeps state.
Differentials are offense-minus-defense, so a positive diff favors the offense.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional
import numpy as np

from .config import (
    DEFAULT_TIER, MIN_TIER, MAX_TIER, NEUTRAL_RATING, TIERS,
    SACK_BASE, SACK_PER_DIFF, SACK_PROB_MIN, SACK_PROB_MAX, SACK_YARDS,
    PRESSURE_BASE, PRESSURE_PER_DIFF, PRESSURE_PROB_MIN, PRESSURE_PROB_MAX, PRESSURE_ACCURACY_PENALTY,
    POCKET_TIME_BASE, POCKET_TIME_PER_DIFF, POCKET_TIME_SPREAD, POCKET_TIME_MIN, POCKET_TIME_MAX,
    SEPARATION_PER_DIFF, SEPARATION_OPEN_THRESHOLD, SEPARATION_CONTESTED_THRESHOLD,
    ACCURACY_BASE, ACCURACY_PER_RATING, ACCURACY_SEPARATION, ACCURACY_PASS_TYPE,
    ACCURACY_VARIANCE, ACCURACY_MIN, ACCURACY_MAX,
    CATCH_ABILITY_BASE, CATCH_ABILITY_PER_RATING, COMPLETION_SEPARATION_MULT,
    COMPLETION_PROB_MIN, COMPLETION_PROB_MAX, PASS_YARDS, YAC_BASE, YAC_PER_TIER, YAC_SEPARATION_MULT,
    INT_BASE, INT_COVERAGE_BONUS, INT_PROB_MIN, INT_PROB_MAX, DB_BALL_SKILLS_BASE, DB_BALL_SKILLS_PER_RATING,
    TFL_BASE, TFL_PER_DIFF, TFL_PROB_MIN, TFL_PROB_MAX, TFL_YARDS,
    HOLE_PER_DIFF, HOLE_BIG_THRESHOLD, HOLE_SMALL_THRESHOLD,
    RUN_YARDS_BASE, RUN_YARDS_PER_TIER, BIG_HOLE_BONUS, TIGHT_HOLE_PENALTY,
    BROKEN_TACKLE_BASE, BROKEN_TACKLE_PER_TIER, BROKEN_TACKLE_PROB_MIN, BROKEN_TACKLE_PROB_MAX,
    BROKEN_TACKLE_YARDS, BREAKAWAY_CHANCE, BREAKAWAY_PER_TIER, BREAKAWAY_PROB_MIN, BREAKAWAY_PROB_MAX,
    BREAKAWAY_YARDS, FUMBLE_BASE, MIN_RUN_YARDS,
    QB_RUN_BASE, QB_RUN_PER_TIER, QB_RUN_SPREAD, QB_DESIGNED_BONUS, QB_SCRAMBLE_VARIANCE,
    QB_FUMBLE, MIN_QB_RUN_YARDS,
)
from .enums import HoleSize, PassType, Separation

__all__ = [
    "roll", "roll_normal", "matchup_diff", "tier_to_rating", "tier_name",
    "ProtectionResult", "CoverageResult", "ThrowResult", "CatchResult",
    "BlockingResult", "RushResult", "QBRunResult",
    "calculate_protection", "calculate_coverage", "calculate_throw", "calculate_catch",
    "calculate_run_blocking", "calculate_rush", "calculate_qb_run",
]


# ---------- draws ----------

def roll(rng: np.random.RandomState) -> float:
    return float(rng.rand())


def roll_normal(rng: np.random.RandomState, mean: float = 0.5, sd: float = 0.15) -> float:
    """Bell-curve draw clipped to [0, 1]."""
    return float(np.clip(rng.normal(mean, sd), 0.0, 1.0))


def _clip(x: float, lo: float, hi: float) -> float:
    return float(np.clip(x, lo, hi))


def _uniform(lo: float, hi: float, rng: np.random.RandomState) -> float:
    return lo + roll(rng) * (hi - lo)


def _tier(t: Optional[float]) -> float:
    return float(t) if t else float(DEFAULT_TIER)


def matchup_diff(offense_tier: Optional[float], defense_tier: Optional[float]) -> float:
    return _tier(offense_tier) - _tier(defense_tier)


# ---------- tier curve ----------

def _clamped_tier(tier) -> Optional[float]:
    try:
        t = float(tier)
    except (TypeError, ValueError):
        return None
    if math.isnan(t):
        return None
    return min(max(t, float(MIN_TIER)), float(MAX_TIER))


def tier_to_rating(tier) -> float:
    """
    Map a tier (fractional allowed) onto the 0-1 rating curve.
    Input clamps to [MIN_TIER, MAX_TIER]; NaN / non-numeric input returns NEUTRAL_RATING.
    """
    t = _clamped_tier(tier)
    if t is None:
        return NEUTRAL_RATING
    lo = int(math.floor(t))
    hi = min(lo + 1, MAX_TIER)
    lo_r = TIERS[lo][1]
    hi_r = TIERS[hi][1]
    return float(lo_r + (hi_r - lo_r) * (t - lo))


def tier_name(tier) -> str:
    t = _clamped_tier(tier)
    if t is None:
        return TIERS[DEFAULT_TIER][0]
    return TIERS[int(round(t))][0]


# ---------- pass game ----------

@dataclass(frozen=True)
class ProtectionResult:
    sacked: bool
    pressured: bool
    time_in_pocket: float
    sack_yards: int = 0        # negative on a sack


@dataclass(frozen=True)
class CoverageResult:
    separation: Separation


@dataclass(frozen=True)
class ThrowResult:
    accuracy: float
    quality: str               # good / decent / poor


@dataclass(frozen=True)
class CatchResult:
    caught: bool
    intercepted: bool
    pass_defended: bool
    yards: int = 0


def calculate_protection(ol_tier: float, dl_tier: float, rng: np.random.RandomState) -> ProtectionResult:
    """OL vs DL: sack check first; a sack ends resolution, otherwise pressure and pocket time."""
    diff = matchup_diff(ol_tier, dl_tier)

    p_sack = _clip(SACK_BASE - diff * SACK_PER_DIFF, SACK_PROB_MIN, SACK_PROB_MAX)
    if roll(rng) < p_sack:
        loss = int(rng.randint(SACK_YARDS[0], SACK_YARDS[1]))
        return ProtectionResult(sacked=True, pressured=True, time_in_pocket=POCKET_TIME_MIN, sack_yards=-loss)

    p_pressure = _clip(PRESSURE_BASE - diff * PRESSURE_PER_DIFF, PRESSURE_PROB_MIN, PRESSURE_PROB_MAX)
    pressured = roll(rng) < p_pressure
    pocket = POCKET_TIME_BASE + diff * POCKET_TIME_PER_DIFF + roll(rng) * POCKET_TIME_SPREAD
    return ProtectionResult(
        sacked=False,
        pressured=pressured,
        time_in_pocket=_clip(pocket, POCKET_TIME_MIN, POCKET_TIME_MAX),
    )


def calculate_coverage(wr_tier: float, db_tier: float, rng: np.random.RandomState) -> CoverageResult:
    diff = matchup_diff(wr_tier, db_tier)
    sep_roll = roll(rng) + diff * SEPARATION_PER_DIFF
    if sep_roll > SEPARATION_OPEN_THRESHOLD:
        separation = Separation.OPEN
    elif sep_roll > SEPARATION_CONTESTED_THRESHOLD:
        separation = Separation.CONTESTED
    else:
        separation = Separation.COVERED
    return CoverageResult(separation=separation)


def calculate_throw(
    qb_tier: float,
    pressured: bool,
    separation: Separation,
    pass_type: PassType,
    rng: np.random.RandomState,
) -> ThrowResult:
    accuracy = ACCURACY_BASE + tier_to_rating(_tier(qb_tier)) * ACCURACY_PER_RATING
    if pressured:
        accuracy -= PRESSURE_ACCURACY_PENALTY
    accuracy += ACCURACY_SEPARATION[separation]
    accuracy += ACCURACY_PASS_TYPE[pass_type]
    accuracy += (roll(rng) - 0.5) * ACCURACY_VARIANCE

    if accuracy > 0.7:
        quality = "good"
    elif accuracy > 0.5:
        quality = "decent"
    else:
        quality = "poor"
    return ThrowResult(accuracy=_clip(accuracy, ACCURACY_MIN, ACCURACY_MAX), quality=quality)


def calculate_catch(
    wr_tier: float,
    db_tier: float,
    accuracy: float,
    separation: Separation,
    pass_type: PassType,
    rng: np.random.RandomState,
) -> CatchResult:
    """
    Completion = accuracy x catch ability x separation multiplier.
    On a miss the DB gets an interception chance scaled by (DB tier - WR tier),
    then a pass-defended flag from DB ball skills.
    """
    wr_tier, db_tier = _tier(wr_tier), _tier(db_tier)
    catch_ability = CATCH_ABILITY_BASE + tier_to_rating(wr_tier) * CATCH_ABILITY_PER_RATING
    ball_skills = DB_BALL_SKILLS_BASE + tier_to_rating(db_tier) * DB_BALL_SKILLS_PER_RATING

    p_complete = _clip(
        accuracy * catch_ability * COMPLETION_SEPARATION_MULT[separation],
        COMPLETION_PROB_MIN, COMPLETION_PROB_MAX,
    )
    if roll(rng) < p_complete:
        lo, hi = PASS_YARDS[pass_type]
        air = _uniform(lo, hi, rng)
        yac = (YAC_BASE + (wr_tier - DEFAULT_TIER) * YAC_PER_TIER) * YAC_SEPARATION_MULT[separation]
        yac *= roll(rng)
        return CatchResult(caught=True, intercepted=False, pass_defended=False, yards=int(round(air + yac)))

    p_int = _clip(INT_BASE + (db_tier - wr_tier) * INT_COVERAGE_BONUS, INT_PROB_MIN, INT_PROB_MAX)
    if roll(rng) < p_int:
        return CatchResult(caught=False, intercepted=True, pass_defended=False)

    return CatchResult(caught=False, intercepted=False, pass_defended=roll(rng) < ball_skills)


# ---------- run game ----------

@dataclass(frozen=True)
class BlockingResult:
    stuffed: bool
    hole_size: HoleSize
    tfl_yards: int = 0         # negative on a stuff


@dataclass(frozen=True)
class RushResult:
    yards: int
    broken_tackle: bool
    fumbled: bool


@dataclass(frozen=True)
class QBRunResult:
    yards: int
    fumbled: bool


def calculate_run_blocking(ol_tier: float, dl_tier: float, rng: np.random.RandomState) -> BlockingResult:
    diff = matchup_diff(ol_tier, dl_tier)

    p_tfl = _clip(TFL_BASE - diff * TFL_PER_DIFF, TFL_PROB_MIN, TFL_PROB_MAX)
    if roll(rng) < p_tfl:
        loss = int(rng.randint(TFL_YARDS[0], TFL_YARDS[1]))
        return BlockingResult(stuffed=True, hole_size=HoleSize.NONE, tfl_yards=-loss)

    hole_roll = roll(rng) + diff * HOLE_PER_DIFF
    if hole_roll > HOLE_BIG_THRESHOLD:
        hole = HoleSize.BIG
    elif hole_roll > HOLE_SMALL_THRESHOLD:
        hole = HoleSize.SMALL
    else:
        hole = HoleSize.TIGHT
    return BlockingResult(stuffed=False, hole_size=hole)


def calculate_rush(rb_tier: float, lb_tier: float, hole_size: HoleSize, rng: np.random.RandomState) -> RushResult:
    """RB vs LB at first contact: base yards, hole modifier, broken tackle, breakaway, fumble."""
    rb_tier = _tier(rb_tier)
    diff = matchup_diff(rb_tier, lb_tier)

    yards = RUN_YARDS_BASE + diff * RUN_YARDS_PER_TIER
    if hole_size is HoleSize.BIG:
        yards += _uniform(*BIG_HOLE_BONUS, rng)
    elif hole_size is HoleSize.TIGHT:
        yards -= _uniform(*TIGHT_HOLE_PENALTY, rng)

    p_broken = _clip(BROKEN_TACKLE_BASE + (rb_tier - DEFAULT_TIER) * BROKEN_TACKLE_PER_TIER,
                     BROKEN_TACKLE_PROB_MIN, BROKEN_TACKLE_PROB_MAX)
    broken_tackle = roll(rng) < p_broken
    if broken_tackle:
        yards += _uniform(*BROKEN_TACKLE_YARDS, rng)

    p_breakaway = _clip(BREAKAWAY_CHANCE + (rb_tier - DEFAULT_TIER) * BREAKAWAY_PER_TIER,
                        BREAKAWAY_PROB_MIN, BREAKAWAY_PROB_MAX)
    if roll(rng) < p_breakaway:
        # breakaway replaces the yardage outright
        yards = _uniform(*BREAKAWAY_YARDS, rng)

    fumbled = roll(rng) < FUMBLE_BASE
    return RushResult(yards=int(round(max(MIN_RUN_YARDS, yards))), broken_tackle=broken_tackle, fumbled=fumbled)


def calculate_qb_run(qb_tier: float, defense_tier: float, designed: bool, rng: np.random.RandomState) -> QBRunResult:
    """Scrambles swing wider than designed runs; QBs rarely fumble."""
    diff = matchup_diff(qb_tier, defense_tier)
    yards = QB_RUN_BASE + diff * QB_RUN_PER_TIER + roll(rng) * QB_RUN_SPREAD
    if designed:
        yards += QB_DESIGNED_BONUS
    else:
        yards += (roll(rng) - 0.5) * QB_SCRAMBLE_VARIANCE
    fumbled = roll(rng) < QB_FUMBLE
    return QBRunResult(yards=int(round(max(MIN_QB_RUN_YARDS, yards))), fumbled=fumbled)
