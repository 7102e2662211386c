from __future__ import annotations
from enum import Enum


class Side(str, Enum):
    HOME = "home"
    AWAY = "away"

    @property
    def other(self) -> "Side":
        return Side.AWAY if self is Side.HOME else Side.HOME


class PosGroup(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    OL = "OL"
    DL = "DL"
    LB = "LB"
    DB = "DB"
    K = "K"
    P = "P"


class Playstyle(str, Enum):
    PASS_HEAVY = "PASS_HEAVY"
    DUAL_THREAT = "DUAL_THREAT"
    BALANCED = "BALANCED"
    GAME_MANAGER = "GAME_MANAGER"


class OffensiveStrategy(str, Enum):
    PASS_HEAVY = "pass_heavy"
    BALANCED = "balanced"
    RUN_HEAVY = "run_heavy"


class DefensiveStrategy(str, Enum):
    COVERAGE_SHELL = "coverage_shell"
    RUN_STUFF = "run_stuff"
    BASE_DEFENSE = "base_defense"


class MatchupOutcome(str, Enum):
    ADVANTAGE = "advantage"
    CAPTURED = "captured"
    NEUTRAL = "neutral"


class PassType(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    DEEP = "deep"


class Separation(str, Enum):
    OPEN = "open"
    CONTESTED = "contested"
    COVERED = "covered"


class HoleSize(str, Enum):
    BIG = "big"
    SMALL = "small"
    TIGHT = "tight"
    NONE = "none"


class PlayType(str, Enum):
    PASS = "pass"
    RUN = "run"
    FIELD_GOAL = "field_goal"
    EXTRA_POINT = "extra_point"
    PUNT = "punt"
    KICKOFF = "kickoff"
    OVERTIME_START = "overtime_start"
    OVERTIME_END = "overtime_end"


class PlayResultKind(str, Enum):
    # pass
    SACK = "sack"
    SCRAMBLE = "scramble"
    COMPLETE = "complete"
    INTERCEPTION = "interception"
    INCOMPLETE = "incomplete"
    # run
    TFL = "tfl"
    GAIN = "gain"
    BIG_GAIN = "big_gain"
    FUMBLE = "fumble"
    # kicks
    GOOD = "good"
    MISSED = "missed"
    TOUCHBACK = "touchback"
    RETURN = "return"
    # markers
    INFO = "info"


class DriveResult(str, Enum):
    TOUCHDOWN = "touchdown"
    FIELD_GOAL = "field_goal"
    MISSED_FG = "missed_fg"
    PUNT = "punt"
    INTERCEPTION = "interception"
    FUMBLE = "fumble"
    DOWNS = "downs"
    SAFETY = "safety"
    END_OF_HALF = "end_of_half"
    END_OF_REGULATION = "end_of_regulation"
    END_OF_GAME = "end_of_game"


class FourthDownDecision(str, Enum):
    GO_FOR_IT = "go_for_it"
    FIELD_GOAL = "field_goal"
    PUNT = "punt"


class GamePhase(str, Enum):
    REGULATION = "regulation"
    OVERTIME = "overtime"
    SUDDEN_DEATH = "sudden_death"
    FINAL = "final"


class DriveStart(str, Enum):
    KICKOFF = "kickoff"
    HALFTIME_KICKOFF = "halftime_kickoff"
    OVERTIME_KICKOFF = "overtime_kickoff"
    PUNT = "punt"
    TURNOVER = "turnover"
    MISSED_FG = "missed_fg"
    DOWNS = "downs"
    SAFETY_KICK = "safety_kick"
