from __future__ import annotations
import numpy as np

from .config import (
    PASS_TENDENCY_MIN, PASS_TENDENCY_MAX, PASS_TENDENCY_MATCHUP_SHIFT, PASS_TENDENCY_MATCHUP_MARGIN,
    STRATEGY_PASS_OFFSET, SITUATION, SITUATIONAL_TENDENCY_MIN, SITUATIONAL_TENDENCY_MAX,
    DEEP_CHANCE, SHORT_CHANCE, RED_ZONE_LINE, REGULATION_QUARTERS,
    SHORT_YARDAGE, GO_FOR_IT, FG_RANGE_SPOT, FG_MAX_ATTEMPT_DISTANCE, GOAL_LINE, FG_SNAP_AND_HOLD_YARDS,
    DESPERATION_SECONDS, DESPERATION_SPOT, DESPERATION_YARDS,
)
from .enums import FourthDownDecision, OffensiveStrategy, PassType, PlayType
from .matchups import roll
from .ratings import DefenseRatings, OffenseRatings
from .state import Situation, TeamContext


def pass_tendency(offense: OffenseRatings, defense: DefenseRatings, strategy: OffensiveStrategy) -> float:
    """
    Base pass rate: the QB playstyle's frequency, shifted by the offensive strategy,
    then leaned toward whichever phase has the clearly better matchup.
    """
    tendency = offense.config.pass_frequency + STRATEGY_PASS_OFFSET[strategy]

    pass_adv = offense.pass_rating - defense.pass_defense_rating
    run_adv = offense.run_rating - defense.run_defense_rating
    if pass_adv > run_adv + PASS_TENDENCY_MATCHUP_MARGIN:
        tendency += PASS_TENDENCY_MATCHUP_SHIFT
    elif run_adv > pass_adv + PASS_TENDENCY_MATCHUP_MARGIN:
        tendency -= PASS_TENDENCY_MATCHUP_SHIFT

    return float(np.clip(tendency, PASS_TENDENCY_MIN, PASS_TENDENCY_MAX))


def situational_pass_tendency(base: float, situation: Situation) -> float:
    s = situation
    tendency = base

    long_ytg, delta = SITUATION["third_and_long"]
    if s.down == 3 and s.yards_to_go > long_ytg:
        tendency += delta
    short_ytg, delta = SITUATION["third_and_short"]
    if s.down == 3 and s.yards_to_go <= short_ytg:
        tendency += delta
    spot, ytg, delta = SITUATION["goal_line"]
    if s.field_position > spot and s.yards_to_go <= ytg:
        tendency += delta
    secs, delta = SITUATION["two_minute"]
    if s.quarter == REGULATION_QUARTERS and s.time_remaining < secs and s.score_diff < 0:
        tendency += delta
    secs, delta = SITUATION["protect_lead"]
    if s.quarter == REGULATION_QUARTERS and s.time_remaining < secs and s.score_diff > 0:
        tendency += delta

    return float(np.clip(tendency, SITUATIONAL_TENDENCY_MIN, SITUATIONAL_TENDENCY_MAX))


def choose_play_type(offense: TeamContext, defense: TeamContext, situation: Situation,
                     rng: np.random.RandomState) -> PlayType:
    base = pass_tendency(offense.ratings.offense, defense.ratings.defense, offense.offensive_strategy)
    p_pass = situational_pass_tendency(base, situation)
    return PlayType.PASS if roll(rng) < p_pass else PlayType.RUN


def choose_pass_type(down: int, yards_to_go: int, field_position: int, rng: np.random.RandomState) -> PassType:
    deep, short = DEEP_CHANCE, SHORT_CHANCE
    if down == 3 and yards_to_go > 8:
        deep += 0.15
        short -= 0.10
    if down == 3 and yards_to_go <= 3:
        short += 0.20
        deep -= 0.10
    if field_position > RED_ZONE_LINE:
        deep -= 0.10
    if down == 1:
        deep += 0.05

    r = roll(rng)
    if r < deep:
        return PassType.DEEP
    if r < deep + short:
        return PassType.SHORT
    return PassType.MEDIUM


def decide_fourth_down(situation: Situation, rng: np.random.RandomState) -> FourthDownDecision:
    """
    Field-position bands for short yardage, then field goal range, else punt.
    Late in the 4th quarter a trailing offense goes for it when close enough.
    """
    fp = situation.field_position
    ytg = situation.yards_to_go
    in_fg_range = fp >= FG_RANGE_SPOT
    fg_distance = GOAL_LINE - fp + FG_SNAP_AND_HOLD_YARDS

    desperate = (situation.quarter == REGULATION_QUARTERS
                 and situation.time_remaining < DESPERATION_SECONDS
                 and situation.score_diff < 0)
    if desperate and (fp > DESPERATION_SPOT or ytg <= DESPERATION_YARDS):
        return FourthDownDecision.GO_FOR_IT

    if ytg <= SHORT_YARDAGE:
        own_line, p_go = GO_FOR_IT["own_territory"]
        if fp < own_line:
            return FourthDownDecision.GO_FOR_IT if roll(rng) < p_go else FourthDownDecision.PUNT
        mid_line, p_go = GO_FOR_IT["midfield"]
        if fp < mid_line:
            if roll(rng) < p_go:
                return FourthDownDecision.GO_FOR_IT
            return FourthDownDecision.FIELD_GOAL if in_fg_range else FourthDownDecision.PUNT
        if roll(rng) < GO_FOR_IT["in_range"]:
            return FourthDownDecision.GO_FOR_IT
        return FourthDownDecision.FIELD_GOAL

    if in_fg_range and fg_distance <= FG_MAX_ATTEMPT_DISTANCE:
        return FourthDownDecision.FIELD_GOAL
    return FourthDownDecision.PUNT
