from __future__ import annotations
from dataclasses import dataclass

from .enums import (
    DefensiveStrategy, MatchupOutcome, OffensiveStrategy, PassType, Playstyle,
    PlayResultKind, PosGroup, Separation,
)

# --------- General ----------
DEFAULT_SEED = 2025
DEFAULT_TIER = 5
MIN_TIER = 1
MAX_TIER = 11
NEUTRAL_RATING = 0.50          # tier_to_rating fallback for junk input
NEUTRAL_TRAIT_SCORE = 50.0
WITHIN_TIER_MAX_OFFSET = 0.01  # traits/composite shift a tier by at most this much

# --------- Game / clock ----------
QUARTER_SECONDS = 15 * 60
REGULATION_QUARTERS = 4
HALFTIME_AFTER_QUARTER = 2
OVERTIME_QUARTER = 5
STARTING_FIELD_POSITION = 25   # touchback spot
YARDS_FOR_FIRST_DOWN = 10
GOAL_LINE = 100
FG_SNAP_AND_HOLD_YARDS = 17    # end zone + hold

MAX_REGULATION_PLAYS = 300     # guardrail
MAX_OVERTIME_PLAYS = 100       # guardrail
VERBOSE_LOG_EVERY = 20

# --------- Tier curve ----------
# tier -> (name, rating multiplier); fractional tiers interpolate
TIERS = {
    11: ("Mythic", 1.00),
    10: ("Legendary", 0.96),
    9: ("Epic", 0.92),
    8: ("Ultra Rare", 0.84),
    7: ("Very Rare", 0.76),
    6: ("Rare", 0.68),
    5: ("Uncommon+", 0.60),
    4: ("Uncommon", 0.52),
    3: ("Common+", 0.44),
    2: ("Common", 0.36),
    1: ("Basic", 0.28),
}


# --------- QB playstyles ----------
@dataclass(frozen=True)
class PlaystyleProfile:
    name: str
    pass_frequency: float      # base pass play %
    wr_dependency: float       # weight of WR tier in pass rating
    qb_dependency: float       # weight of QB tier in pass rating
    wr_synergy_bonus: float    # WRs at T7+
    wr_synergy_penalty: float  # WRs at T3 or below
    scramble_chance: float     # when pressured
    rush_contribution: float   # share of run rating taken from the QB


QB_PLAYSTYLES = {
    Playstyle.PASS_HEAVY: PlaystyleProfile(
        name="Pass Heavy", pass_frequency=0.68, wr_dependency=0.50, qb_dependency=0.50,
        wr_synergy_bonus=1.15, wr_synergy_penalty=0.85, scramble_chance=0.05, rush_contribution=0.0,
    ),
    Playstyle.DUAL_THREAT: PlaystyleProfile(
        name="Dual Threat", pass_frequency=0.50, wr_dependency=0.35, qb_dependency=0.65,
        wr_synergy_bonus=1.0, wr_synergy_penalty=1.0, scramble_chance=0.30, rush_contribution=0.40,
    ),
    Playstyle.BALANCED: PlaystyleProfile(
        name="Balanced", pass_frequency=0.58, wr_dependency=0.45, qb_dependency=0.55,
        wr_synergy_bonus=1.08, wr_synergy_penalty=0.92, scramble_chance=0.12, rush_contribution=0.15,
    ),
    Playstyle.GAME_MANAGER: PlaystyleProfile(
        name="Game Manager", pass_frequency=0.52, wr_dependency=0.60, qb_dependency=0.40,
        wr_synergy_bonus=1.20, wr_synergy_penalty=0.90, scramble_chance=0.03, rush_contribution=0.0,
    ),
}

# Classification thresholds (per-game volume)
DUAL_THREAT_RUSH_YDS_PG = 25.0
DUAL_THREAT_RUSH_ATT_PG = 4.0
PASS_HEAVY_ATT_PG = 28.0
PASS_HEAVY_PASS_RATIO = 0.92
GAME_MANAGER_ATT_PG = 25.0
GAME_MANAGER_PASS_RATIO = 0.85

WR_SYNERGY_BONUS_TIER = 7
WR_SYNERGY_PENALTY_TIER = 3
RATING_FLOOR = 1.0
RATING_CEILING = 12.0

# --------- Position weights ----------
POSITION_WEIGHTS = {
    "PASS_DEFENSE": {PosGroup.DB: 0.50, PosGroup.DL: 0.30, PosGroup.LB: 0.20},
    "RUN_DEFENSE": {PosGroup.DL: 0.40, PosGroup.LB: 0.40, PosGroup.DB: 0.20},
    "PASS_RUSH": {PosGroup.DL: 0.70, PosGroup.LB: 0.30},
    "COVERAGE": {PosGroup.DB: 0.70, PosGroup.LB: 0.30},
    "RUN_OFFENSE": {PosGroup.RB: 0.50, PosGroup.OL: 0.50},
}
TE_PASS_BONUS_PER_TIER = 0.10
TE_RUN_BONUS_PER_TIER = 0.05

# --------- Passing ----------
SACK_BASE = 0.07
SACK_PER_DIFF = 0.03
SACK_PROB_MIN, SACK_PROB_MAX = 0.02, 0.25
SACK_YARDS = (3, 10)            # loss sampled uniformly, upper bound exclusive

PRESSURE_BASE = 0.25
PRESSURE_PER_DIFF = 0.05
PRESSURE_PROB_MIN, PRESSURE_PROB_MAX = 0.10, 0.50
PRESSURE_ACCURACY_PENALTY = 0.15
POCKET_TIME_BASE = 2.0
POCKET_TIME_PER_DIFF = 0.2
POCKET_TIME_SPREAD = 1.5
POCKET_TIME_MIN, POCKET_TIME_MAX = 1.5, 4.5

SEPARATION_PER_DIFF = 0.08
SEPARATION_OPEN_THRESHOLD = 0.65
SEPARATION_CONTESTED_THRESHOLD = 0.35

ACCURACY_BASE = 0.55
ACCURACY_PER_RATING = 0.40
ACCURACY_SEPARATION = {Separation.OPEN: 0.15, Separation.CONTESTED: 0.0, Separation.COVERED: -0.15}
ACCURACY_PASS_TYPE = {PassType.SHORT: 0.08, PassType.MEDIUM: 0.0, PassType.DEEP: -0.12}
ACCURACY_VARIANCE = 0.10
ACCURACY_MIN, ACCURACY_MAX = 0.15, 0.95

CATCH_ABILITY_BASE = 0.70
CATCH_ABILITY_PER_RATING = 0.25
COMPLETION_SEPARATION_MULT = {Separation.OPEN: 1.15, Separation.CONTESTED: 1.0, Separation.COVERED: 0.70}
COMPLETION_PROB_MIN, COMPLETION_PROB_MAX = 0.05, 0.95

PASS_YARDS = {PassType.SHORT: (2, 8), PassType.MEDIUM: (8, 18), PassType.DEEP: (18, 45)}
YAC_BASE = 3.0
YAC_PER_TIER = 1.5
YAC_SEPARATION_MULT = {Separation.OPEN: 1.5, Separation.CONTESTED: 1.0, Separation.COVERED: 0.3}

INT_BASE = 0.025
INT_COVERAGE_BONUS = 0.015      # per tier DB > WR
INT_PROB_MIN, INT_PROB_MAX = 0.01, 0.15
DB_BALL_SKILLS_BASE = 0.05
DB_BALL_SKILLS_PER_RATING = 0.10

# pass depth
DEEP_CHANCE = 0.15
SHORT_CHANCE = 0.35
RED_ZONE_LINE = 80
RED_ZONE_TE_WEIGHT = 1.3
TARGET_WEIGHT_NOISE = 3.0

# scramble
SCRAMBLE_CAP = 0.60
MOBILITY_MULT_MIN, MOBILITY_MULT_MAX = 0.5, 1.6

# --------- Rushing ----------
TFL_BASE = 0.08
TFL_PER_DIFF = 0.04
TFL_PROB_MIN, TFL_PROB_MAX = 0.03, 0.20
TFL_YARDS = (1, 5)              # loss sampled uniformly, upper bound exclusive
HOLE_PER_DIFF = 0.10
HOLE_BIG_THRESHOLD = 0.70
HOLE_SMALL_THRESHOLD = 0.35

RUN_YARDS_BASE = 3.5
RUN_YARDS_PER_TIER = 0.8
BIG_HOLE_BONUS = (3.0, 7.0)
TIGHT_HOLE_PENALTY = (1.0, 3.0)
BROKEN_TACKLE_BASE = 0.10
BROKEN_TACKLE_PER_TIER = 0.03
BROKEN_TACKLE_PROB_MIN, BROKEN_TACKLE_PROB_MAX = 0.02, 0.40
BROKEN_TACKLE_YARDS = (3.0, 9.0)
BREAKAWAY_CHANCE = 0.05
BREAKAWAY_PER_TIER = 0.01
BREAKAWAY_PROB_MIN, BREAKAWAY_PROB_MAX = 0.01, 0.15
BREAKAWAY_YARDS = (15.0, 50.0)
FUMBLE_BASE = 0.015
MIN_RUN_YARDS = -5
BIG_GAIN_YARDS = 15

QB_RUN_BASE = 3.0
QB_RUN_PER_TIER = 0.5
QB_RUN_SPREAD = 5.0
QB_DESIGNED_BONUS = 2.0
QB_SCRAMBLE_VARIANCE = 8.0
QB_FUMBLE = 0.01
MIN_QB_RUN_YARDS = -3
DESIGNED_QB_RUN_SCALE = 0.25    # x rush_contribution
GOAL_LINE_SPOT = 95
QB_SNEAK_CHANCE = 0.15

# --------- Special teams ----------
FG_BASE_ACCURACY = (
    (19, 0.98),
    (29, 0.95),
    (39, 0.88),
    (49, 0.78),
    (None, 0.62),
)
FG_TIER_BONUS = 0.02
FG_PROB_MIN, FG_PROB_MAX = 0.05, 0.99
FG_MAX_ATTEMPT_DISTANCE = 55

XP_SUCCESS = 0.94
XP_TIER_BONUS = 0.01
XP_PROB_MIN, XP_PROB_MAX = 0.50, 0.99

PUNT_DISTANCE_BASE = 42.0
PUNT_DISTANCE_PER_TIER = 3.0
PUNT_DISTANCE_SPREAD = 15.0
PUNT_FAIR_CATCH = 0.60
PUNT_RETURN_YARDS = (5, 20)

TOUCHBACK_CHANCE = 0.60
TOUCHBACK_PER_TIER = 0.03
TOUCHBACK_PROB_MIN, TOUCHBACK_PROB_MAX = 0.05, 0.95
RETURN_YARDS_BASE = 22.0
RETURN_YARDS_SPREAD = 20.0
MAX_RETURN_SPOT = 50

# --------- Elapsed time per play (seconds, uniform lo..hi) ----------
PLAY_TIME = {
    PlayResultKind.SACK: (25.0, 35.0),
    PlayResultKind.SCRAMBLE: (28.0, 40.0),
    PlayResultKind.COMPLETE: (25.0, 40.0),
    PlayResultKind.INTERCEPTION: (25.0, 35.0),
    PlayResultKind.INCOMPLETE: (22.0, 30.0),
    PlayResultKind.TFL: (28.0, 40.0),
    PlayResultKind.FUMBLE: (30.0, 40.0),
    PlayResultKind.GAIN: (32.0, 42.0),
}
PUNT_TIME = (40.0, 48.0)
KICKOFF_RETURN_TIME = (10.0, 20.0)
FIELD_GOAL_TIME = 8.0
EXTRA_POINT_TIME = 5.0
KICKOFF_TOUCHBACK_TIME = 8.0

# --------- Play-call policy ----------
PASS_TENDENCY_MIN, PASS_TENDENCY_MAX = 0.35, 0.75
PASS_TENDENCY_MATCHUP_SHIFT = 0.08
PASS_TENDENCY_MATCHUP_MARGIN = 1.0
STRATEGY_PASS_OFFSET = {
    OffensiveStrategy.PASS_HEAVY: 0.06,
    OffensiveStrategy.BALANCED: 0.0,
    OffensiveStrategy.RUN_HEAVY: -0.08,
}
SITUATION = {
    "third_and_long": (5, 0.20),      # 3rd and > 5
    "third_and_short": (2, -0.10),    # 3rd and <= 2
    "goal_line": (90, 3, -0.15),      # field pos > 90 and <= 3 to go
    "two_minute": (120, 0.25),        # Q4, < 120 s, trailing
    "protect_lead": (300, -0.20),     # Q4, < 300 s, leading
}
SITUATIONAL_TENDENCY_MIN, SITUATIONAL_TENDENCY_MAX = 0.05, 0.95

# --------- 4th down ----------
SHORT_YARDAGE = 2
GO_FOR_IT = {
    "own_territory": (40, 0.15),   # field pos < 40
    "midfield": (60, 0.40),        # field pos < 60
    "in_range": 0.50,              # field pos >= 60
}
FG_RANGE_SPOT = 55
DESPERATION_SECONDS = 120
DESPERATION_SPOT = 60
DESPERATION_YARDS = 3

# --------- Scoring ----------
TD_POINTS = 6
XP_POINTS = 1
TWO_POINT_POINTS = 2   # no 2-pt decision is made
FG_POINTS = 3
SAFETY_POINTS = 2

# --------- Strategy (rock-paper-scissors) ----------
STRATEGY_BOOST_AMOUNT = 0.007
PASS_STRATEGY_THRESHOLD = 1.20     # (QB + WR) / (RB + OL) above -> pass_heavy
RUN_STRATEGY_THRESHOLD = 0.80      # below -> run_heavy
DEFENSIVE_STRATEGY_MARGIN = 0.8    # DB vs avg(DL, LB) in tiers

BOOST_MULTIPLIERS = {
    MatchupOutcome.ADVANTAGE: 1.0 + STRATEGY_BOOST_AMOUNT,
    MatchupOutcome.CAPTURED: 1.0 - STRATEGY_BOOST_AMOUNT,
    MatchupOutcome.NEUTRAL: 1.0,
}

# my offense -> their defense -> outcome for my offense
OFFENSE_MATCHUPS = {
    OffensiveStrategy.PASS_HEAVY: {
        DefensiveStrategy.BASE_DEFENSE: MatchupOutcome.ADVANTAGE,
        DefensiveStrategy.COVERAGE_SHELL: MatchupOutcome.CAPTURED,
        DefensiveStrategy.RUN_STUFF: MatchupOutcome.NEUTRAL,
    },
    OffensiveStrategy.BALANCED: {
        DefensiveStrategy.RUN_STUFF: MatchupOutcome.ADVANTAGE,
        DefensiveStrategy.BASE_DEFENSE: MatchupOutcome.CAPTURED,
        DefensiveStrategy.COVERAGE_SHELL: MatchupOutcome.NEUTRAL,
    },
    OffensiveStrategy.RUN_HEAVY: {
        DefensiveStrategy.COVERAGE_SHELL: MatchupOutcome.ADVANTAGE,
        DefensiveStrategy.RUN_STUFF: MatchupOutcome.CAPTURED,
        DefensiveStrategy.BASE_DEFENSE: MatchupOutcome.NEUTRAL,
    },
}

# my defense -> their offense -> outcome for my defense
DEFENSE_MATCHUPS = {
    DefensiveStrategy.COVERAGE_SHELL: {
        OffensiveStrategy.PASS_HEAVY: MatchupOutcome.ADVANTAGE,
        OffensiveStrategy.RUN_HEAVY: MatchupOutcome.CAPTURED,
        OffensiveStrategy.BALANCED: MatchupOutcome.NEUTRAL,
    },
    DefensiveStrategy.RUN_STUFF: {
        OffensiveStrategy.RUN_HEAVY: MatchupOutcome.ADVANTAGE,
        OffensiveStrategy.BALANCED: MatchupOutcome.CAPTURED,
        OffensiveStrategy.PASS_HEAVY: MatchupOutcome.NEUTRAL,
    },
    DefensiveStrategy.BASE_DEFENSE: {
        OffensiveStrategy.BALANCED: MatchupOutcome.ADVANTAGE,
        OffensiveStrategy.PASS_HEAVY: MatchupOutcome.CAPTURED,
        OffensiveStrategy.RUN_HEAVY: MatchupOutcome.NEUTRAL,
    },
}

OFFENSE_STRATEGY_POSITIONS = {
    OffensiveStrategy.PASS_HEAVY: (PosGroup.QB, PosGroup.WR, PosGroup.TE),
    OffensiveStrategy.BALANCED: (PosGroup.QB, PosGroup.RB, PosGroup.WR, PosGroup.TE, PosGroup.OL),
    OffensiveStrategy.RUN_HEAVY: (PosGroup.RB, PosGroup.OL, PosGroup.TE),
}
DEFENSE_STRATEGY_POSITIONS = {
    DefensiveStrategy.COVERAGE_SHELL: (PosGroup.DB,),
    DefensiveStrategy.RUN_STUFF: (PosGroup.DL, PosGroup.LB),
    DefensiveStrategy.BASE_DEFENSE: (PosGroup.DL, PosGroup.LB, PosGroup.DB),
}
