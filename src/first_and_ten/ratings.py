from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple
import numpy as np

from .config import (
    DEFAULT_TIER, QB_PLAYSTYLES, PlaystyleProfile,
    DUAL_THREAT_RUSH_YDS_PG, DUAL_THREAT_RUSH_ATT_PG, PASS_HEAVY_ATT_PG, PASS_HEAVY_PASS_RATIO,
    GAME_MANAGER_ATT_PG, GAME_MANAGER_PASS_RATIO,
    WR_SYNERGY_BONUS_TIER, WR_SYNERGY_PENALTY_TIER, RATING_FLOOR, RATING_CEILING,
    POSITION_WEIGHTS, TE_PASS_BONUS_PER_TIER, TE_RUN_BONUS_PER_TIER,
    PASS_STRATEGY_THRESHOLD, RUN_STRATEGY_THRESHOLD, DEFENSIVE_STRATEGY_MARGIN,
    BOOST_MULTIPLIERS, OFFENSE_MATCHUPS, DEFENSE_MATCHUPS,
    OFFENSE_STRATEGY_POSITIONS, DEFENSE_STRATEGY_POSITIONS,
)
from .enums import DefensiveStrategy, MatchupOutcome, OffensiveStrategy, Playstyle, PosGroup
from .players import Player, Roster

__all__ = [
    "OffenseRatings", "DefenseRatings", "SpecialTeamsRatings", "OverallRating",
    "StrategyContext", "StrategyBreakdown", "TeamRatings",
    "avg_tier", "classify_qb_playstyle",
    "calculate_offensive_ratings", "calculate_defensive_ratings", "calculate_special_teams_ratings",
    "calculate_team_ratings",
    "offensive_strategy_from_ratings", "defensive_strategy_from_ratings", "derive_strategies",
    "offense_matchup", "defense_matchup", "boost_multiplier", "strategy_rating_multipliers",
]


@dataclass(frozen=True)
class OffenseRatings:
    pass_rating: float
    run_rating: float
    protection_rating: float
    qb_tier: float
    wr_avg_tier: float
    rb_avg_tier: float
    te_tier: float
    ol_avg_tier: float
    style: Playstyle
    config: PlaystyleProfile


@dataclass(frozen=True)
class DefenseRatings:
    pass_defense_rating: float
    run_defense_rating: float
    pass_rush_rating: float
    coverage_rating: float
    dl_avg_tier: float
    lb_avg_tier: float
    db_avg_tier: float


@dataclass(frozen=True)
class SpecialTeamsRatings:
    kicker_rating: float
    punter_rating: float


@dataclass(frozen=True)
class OverallRating:
    offense: float
    defense: float
    total: float


@dataclass(frozen=True)
class StrategyContext:
    my_offense: OffensiveStrategy
    my_defense: DefensiveStrategy
    their_offense: OffensiveStrategy
    their_defense: DefensiveStrategy


@dataclass(frozen=True)
class StrategyBreakdown:
    context: StrategyContext
    offense_outcome: MatchupOutcome
    defense_outcome: MatchupOutcome
    multipliers: Dict[PosGroup, float]


@dataclass(frozen=True)
class TeamRatings:
    offense: OffenseRatings
    defense: DefenseRatings
    special_teams: SpecialTeamsRatings
    overall: OverallRating
    strategy: Optional[StrategyBreakdown] = None


# ---------- playstyle ----------

def avg_tier(players: Iterable[Optional[Player]]) -> float:
    tiers = [p.tier if p is not None and p.tier else DEFAULT_TIER for p in players]
    return float(np.mean(tiers)) if tiers else float(DEFAULT_TIER)


def classify_qb_playstyle(qb: Optional[Player]) -> Playstyle:
    """Bucket a QB by per-game volume. No stats on the card -> BALANCED."""
    if qb is None:
        return Playstyle.BALANCED
    stats = qb.stats
    att = stats.get("att_pg") or stats.get("passing_att_pg") or 0.0
    rush_att = stats.get("rush_att_pg") or 0.0
    rush_yds = stats.get("rush_yds_pg") or 0.0

    total = att + rush_att
    if total <= 0:
        return Playstyle.BALANCED
    pass_ratio = att / total

    if rush_yds >= DUAL_THREAT_RUSH_YDS_PG and rush_att >= DUAL_THREAT_RUSH_ATT_PG:
        return Playstyle.DUAL_THREAT
    if pass_ratio > PASS_HEAVY_PASS_RATIO and att >= PASS_HEAVY_ATT_PG:
        return Playstyle.PASS_HEAVY
    if att < GAME_MANAGER_ATT_PG and pass_ratio > GAME_MANAGER_PASS_RATIO:
        return Playstyle.GAME_MANAGER
    return Playstyle.BALANCED


# ---------- ratings ----------

def _weighted(weights: Dict[PosGroup, float], tiers: Dict[PosGroup, float]) -> float:
    return float(sum(w * tiers[pos] for pos, w in weights.items()))


def calculate_offensive_ratings(roster: Roster) -> OffenseRatings:
    style = classify_qb_playstyle(roster.qb)
    cfg = QB_PLAYSTYLES[style]

    qb_tier = avg_tier([roster.qb])
    wr_tier = avg_tier(roster.wrs)
    rb_tier = avg_tier([roster.rb])
    te_tier = avg_tier([roster.te])
    ol_tier = avg_tier([roster.ol])

    pass_rating = qb_tier * cfg.qb_dependency + wr_tier * cfg.wr_dependency
    if wr_tier >= WR_SYNERGY_BONUS_TIER:
        pass_rating *= cfg.wr_synergy_bonus
    elif wr_tier <= WR_SYNERGY_PENALTY_TIER:
        pass_rating *= cfg.wr_synergy_penalty
    pass_rating += (te_tier - DEFAULT_TIER) * TE_PASS_BONUS_PER_TIER

    run_rating = _weighted(POSITION_WEIGHTS["RUN_OFFENSE"], {PosGroup.RB: rb_tier, PosGroup.OL: ol_tier})
    if cfg.rush_contribution > 0:
        # mobile QBs carry part of the run game
        run_rating = run_rating * (1 - cfg.rush_contribution) + qb_tier * cfg.rush_contribution
    run_rating += (te_tier - DEFAULT_TIER) * TE_RUN_BONUS_PER_TIER

    return OffenseRatings(
        pass_rating=float(np.clip(pass_rating, RATING_FLOOR, RATING_CEILING)),
        run_rating=float(np.clip(run_rating, RATING_FLOOR, RATING_CEILING)),
        protection_rating=ol_tier,
        qb_tier=qb_tier,
        wr_avg_tier=wr_tier,
        rb_avg_tier=rb_tier,
        te_tier=te_tier,
        ol_avg_tier=ol_tier,
        style=style,
        config=cfg,
    )


def calculate_defensive_ratings(roster: Roster) -> DefenseRatings:
    tiers = {
        PosGroup.DL: avg_tier([roster.dl]),
        PosGroup.LB: avg_tier([roster.lb]),
        PosGroup.DB: avg_tier(roster.dbs),
    }
    return DefenseRatings(
        pass_defense_rating=_weighted(POSITION_WEIGHTS["PASS_DEFENSE"], tiers),
        run_defense_rating=_weighted(POSITION_WEIGHTS["RUN_DEFENSE"], tiers),
        pass_rush_rating=_weighted(POSITION_WEIGHTS["PASS_RUSH"], tiers),
        coverage_rating=_weighted(POSITION_WEIGHTS["COVERAGE"], tiers),
        dl_avg_tier=tiers[PosGroup.DL],
        lb_avg_tier=tiers[PosGroup.LB],
        db_avg_tier=tiers[PosGroup.DB],
    )


def calculate_special_teams_ratings(roster: Roster) -> SpecialTeamsRatings:
    return SpecialTeamsRatings(kicker_rating=avg_tier([roster.k]), punter_rating=avg_tier([roster.p]))


def calculate_team_ratings(roster: Any, strategy_context: Optional[StrategyContext] = None) -> TeamRatings:
    """
    Aggregate a roster into offense / defense / special-teams ratings.

    With a strategy context the roster is first boosted by the rock-paper-scissors
    multipliers for that matchup, and the breakdown is attached to the result.
    """
    roster = Roster.coerce(roster)
    breakdown = None
    if strategy_context is not None:
        ctx = strategy_context
        mults = strategy_rating_multipliers(ctx.my_offense, ctx.my_defense, ctx.their_offense, ctx.their_defense)
        roster = roster.with_multipliers(mults)
        breakdown = StrategyBreakdown(
            context=ctx,
            offense_outcome=offense_matchup(ctx.my_offense, ctx.their_defense),
            defense_outcome=defense_matchup(ctx.my_defense, ctx.their_offense),
            multipliers=mults,
        )

    offense = calculate_offensive_ratings(roster)
    defense = calculate_defensive_ratings(roster)
    special = calculate_special_teams_ratings(roster)

    overall_off = (offense.pass_rating + offense.run_rating) / 2
    overall_def = (defense.pass_defense_rating + defense.run_defense_rating) / 2
    return TeamRatings(
        offense=offense,
        defense=defense,
        special_teams=special,
        overall=OverallRating(offense=overall_off, defense=overall_def, total=(overall_off + overall_def) / 2),
        strategy=breakdown,
    )


# ---------- strategy derivation (tier-based) ----------

def offensive_strategy_from_ratings(offense: OffenseRatings) -> OffensiveStrategy:
    pass_sum = offense.qb_tier + offense.wr_avg_tier
    run_sum = offense.rb_avg_tier + offense.ol_avg_tier
    ratio = pass_sum / max(1.0, run_sum)
    if ratio > PASS_STRATEGY_THRESHOLD:
        return OffensiveStrategy.PASS_HEAVY
    if ratio < RUN_STRATEGY_THRESHOLD:
        return OffensiveStrategy.RUN_HEAVY
    return OffensiveStrategy.BALANCED


def defensive_strategy_from_ratings(defense: DefenseRatings) -> DefensiveStrategy:
    coverage = defense.db_avg_tier
    run_stuff = (defense.dl_avg_tier + defense.lb_avg_tier) / 2
    if coverage > run_stuff + DEFENSIVE_STRATEGY_MARGIN:
        return DefensiveStrategy.COVERAGE_SHELL
    if run_stuff > coverage + DEFENSIVE_STRATEGY_MARGIN:
        return DefensiveStrategy.RUN_STUFF
    return DefensiveStrategy.BASE_DEFENSE


def derive_strategies(base: TeamRatings, force_balanced: bool = False) -> Tuple[OffensiveStrategy, DefensiveStrategy]:
    if force_balanced:
        return OffensiveStrategy.BALANCED, DefensiveStrategy.BASE_DEFENSE
    return offensive_strategy_from_ratings(base.offense), defensive_strategy_from_ratings(base.defense)


# ---------- rock-paper-scissors ----------

def offense_matchup(my_offense: OffensiveStrategy, their_defense: DefensiveStrategy) -> MatchupOutcome:
    return OFFENSE_MATCHUPS[my_offense][their_defense]


def defense_matchup(my_defense: DefensiveStrategy, their_offense: OffensiveStrategy) -> MatchupOutcome:
    return DEFENSE_MATCHUPS[my_defense][their_offense]


def boost_multiplier(outcome: MatchupOutcome) -> float:
    return BOOST_MULTIPLIERS[outcome]


def strategy_rating_multipliers(
    my_offense: OffensiveStrategy,
    my_defense: DefensiveStrategy,
    their_offense: OffensiveStrategy,
    their_defense: DefensiveStrategy,
) -> Dict[PosGroup, float]:
    """Per-position tier multipliers for one team; groups its strategies don't touch stay at 1.0."""
    mults = {pos: 1.0 for pos in PosGroup}
    off_mult = boost_multiplier(offense_matchup(my_offense, their_defense))
    for pos in OFFENSE_STRATEGY_POSITIONS[my_offense]:
        mults[pos] = off_mult
    def_mult = boost_multiplier(defense_matchup(my_defense, their_offense))
    for pos in DEFENSE_STRATEGY_POSITIONS[my_defense]:
        mults[pos] = def_mult
    return mults
