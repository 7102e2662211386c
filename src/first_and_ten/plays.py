"""Scrimmage play resolution: pass or run, built from the matchup primitives."""
from __future__ import annotations
from typing import Tuple
import numpy as np

from .config import (
    RED_ZONE_LINE, RED_ZONE_TE_WEIGHT, TARGET_WEIGHT_NOISE, SCRAMBLE_CAP,
    MOBILITY_MULT_MIN, MOBILITY_MULT_MAX, PLAY_TIME, BIG_GAIN_YARDS,
    DESIGNED_QB_RUN_SCALE, GOAL_LINE, GOAL_LINE_SPOT, QB_SNEAK_CHANCE, PlaystyleProfile,
)
from .enums import DriveResult, PlayResultKind, PlayType, PosGroup
from .matchups import (
    roll, calculate_protection, calculate_coverage, calculate_throw, calculate_catch,
    calculate_run_blocking, calculate_rush, calculate_qb_run,
)
from .players import Player, Roster
from .policies import choose_pass_type, choose_play_type
from .ratings import avg_tier
from .clock import sample_seconds
from .state import Play, Situation, TeamContext


def _elapsed(kind: PlayResultKind, rng: np.random.RandomState) -> float:
    return sample_seconds(PLAY_TIME[kind], rng)


def _on_field(yards: int, field_position: int) -> int:
    """Yards a snap can be credited with: no further than either goal line."""
    return int(np.clip(yards, -field_position, GOAL_LINE - field_position))


def select_target(offense: Roster, defense: Roster, field_position: int,
                  rng: np.random.RandomState) -> Tuple[Player, Player]:
    """Tier-weighted pick among WRs and the TE (TE favored in the red zone); covering DB at random."""
    targets = offense.targets()
    weights = []
    for p in targets:
        w = p.tier + roll(rng) * TARGET_WEIGHT_NOISE
        if p.pos_group is PosGroup.TE and field_position > RED_ZONE_LINE:
            w *= RED_ZONE_TE_WEIGHT
        weights.append(w)

    selection = roll(rng) * sum(weights)
    idx = 0
    for i, w in enumerate(weights):
        selection -= w
        if selection <= 0:
            idx = i
            break

    dbs = defense.dbs
    db = dbs[min(int(roll(rng) * len(dbs)), len(dbs) - 1)]
    return targets[idx], db


def scramble_chance(qb: Player, style: PlaystyleProfile) -> float:
    mobility = qb.trait("mobility")
    mult = 1.0 if mobility is None else float(np.clip(0.5 + mobility / 100.0, MOBILITY_MULT_MIN, MOBILITY_MULT_MAX))
    return min(SCRAMBLE_CAP, style.scramble_chance * mult)


def simulate_pass_play(offense: TeamContext, defense: TeamContext, situation: Situation,
                       rng: np.random.RandomState) -> Play:
    off, dfn = offense.roster, defense.roster
    qb = off.qb

    protection = calculate_protection(off.ol.tier, dfn.dl.tier, rng)
    fp = situation.field_position
    if protection.sacked:
        lost = _on_field(protection.sack_yards, fp)
        return Play(
            play_type=PlayType.PASS,
            result=PlayResultKind.SACK,
            yards=lost,
            description=f"{qb.name} sacked for a loss of {-lost} yards",
            time_elapsed=_elapsed(PlayResultKind.SACK, rng),
        )

    pass_type = choose_pass_type(situation.down, situation.yards_to_go, fp, rng)
    target, db = select_target(off, dfn, fp, rng)
    coverage = calculate_coverage(target.tier, db.tier, rng)

    style = offense.ratings.offense.config
    if protection.pressured and roll(rng) < scramble_chance(qb, style):
        run = calculate_qb_run(qb.tier, avg_tier([dfn.dl, dfn.lb]), False, rng)
        gained = _on_field(run.yards, fp)
        return Play(
            play_type=PlayType.PASS,
            result=PlayResultKind.SCRAMBLE,
            yards=gained,
            description=f"{qb.name} scrambles for {gained} yards",
            carrier=qb.name,
            turnover=run.fumbled,
            turnover_type=DriveResult.FUMBLE if run.fumbled else None,
            time_elapsed=_elapsed(PlayResultKind.SCRAMBLE, rng),
        )

    throw = calculate_throw(qb.tier, protection.pressured, coverage.separation, pass_type, rng)
    catch = calculate_catch(target.tier, db.tier, throw.accuracy, coverage.separation, pass_type, rng)

    if catch.caught:
        gained = _on_field(catch.yards, fp)
        return Play(
            play_type=PlayType.PASS,
            result=PlayResultKind.COMPLETE,
            yards=gained,
            pass_type=pass_type,
            target=target.name,
            description=f"{qb.name} completes {pass_type.value} pass to {target.name} for {gained} yards",
            time_elapsed=_elapsed(PlayResultKind.COMPLETE, rng),
        )

    if catch.intercepted:
        return Play(
            play_type=PlayType.PASS,
            result=PlayResultKind.INTERCEPTION,
            pass_type=pass_type,
            target=target.name,
            description=f"{qb.name} intercepted by {db.name}",
            turnover=True,
            turnover_type=DriveResult.INTERCEPTION,
            time_elapsed=_elapsed(PlayResultKind.INTERCEPTION, rng),
        )

    return Play(
        play_type=PlayType.PASS,
        result=PlayResultKind.INCOMPLETE,
        pass_type=pass_type,
        target=target.name,
        pass_defended=catch.pass_defended,
        description=f"{qb.name} pass incomplete{' (defended)' if catch.pass_defended else ''}",
        time_elapsed=_elapsed(PlayResultKind.INCOMPLETE, rng),
    )


def _qb_carries(offense: TeamContext, situation: Situation, rng: np.random.RandomState) -> bool:
    if situation.field_position > GOAL_LINE_SPOT and situation.yards_to_go <= 1:
        if roll(rng) < QB_SNEAK_CHANCE:
            return True
    style = offense.ratings.offense.config
    return roll(rng) < style.rush_contribution * DESIGNED_QB_RUN_SCALE


def simulate_run_play(offense: TeamContext, defense: TeamContext, situation: Situation,
                      rng: np.random.RandomState) -> Play:
    off, dfn = offense.roster, defense.roster
    carrier = off.qb if _qb_carries(offense, situation, rng) else off.rb

    blocking = calculate_run_blocking(off.ol.tier, dfn.dl.tier, rng)
    fp = situation.field_position
    if blocking.stuffed:
        lost = _on_field(blocking.tfl_yards, fp)
        return Play(
            play_type=PlayType.RUN,
            result=PlayResultKind.TFL,
            yards=lost,
            carrier=carrier.name,
            description=f"{carrier.name} stuffed for {lost} yards",
            time_elapsed=_elapsed(PlayResultKind.TFL, rng),
        )

    if carrier is off.qb:
        qb_run = calculate_qb_run(carrier.tier, avg_tier([dfn.dl, dfn.lb]), True, rng)
        yards, fumbled, broken_tackle = qb_run.yards, qb_run.fumbled, False
    else:
        rush = calculate_rush(carrier.tier, dfn.lb.tier, blocking.hole_size, rng)
        yards, fumbled, broken_tackle = rush.yards, rush.fumbled, rush.broken_tackle
    yards = _on_field(yards, fp)

    if fumbled:
        kept = yards // 2
        return Play(
            play_type=PlayType.RUN,
            result=PlayResultKind.FUMBLE,
            yards=kept,
            carrier=carrier.name,
            description=f"{carrier.name} fumbles after {kept} yards",
            turnover=True,
            turnover_type=DriveResult.FUMBLE,
            time_elapsed=_elapsed(PlayResultKind.FUMBLE, rng),
        )

    return Play(
        play_type=PlayType.RUN,
        result=PlayResultKind.BIG_GAIN if yards >= BIG_GAIN_YARDS else PlayResultKind.GAIN,
        yards=yards,
        carrier=carrier.name,
        broken_tackle=broken_tackle,
        description=f"{carrier.name} rushes for {yards} yards{' (broken tackle)' if broken_tackle else ''}",
        time_elapsed=_elapsed(PlayResultKind.GAIN, rng),
    )


def simulate_play(offense: TeamContext, defense: TeamContext, situation: Situation,
                  rng: np.random.RandomState) -> Play:
    """Pick pass or run from the offense's tendency in this situation, then resolve it."""
    if choose_play_type(offense, defense, situation, rng) is PlayType.PASS:
        return simulate_pass_play(offense, defense, situation, rng)
    return simulate_run_play(offense, defense, situation, rng)
