from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .config import GOAL_LINE, QUARTER_SECONDS, STARTING_FIELD_POSITION, YARDS_FOR_FIRST_DOWN
from .enums import (
    DefensiveStrategy, DriveResult, DriveStart, GamePhase, OffensiveStrategy,
    PassType, PlayResultKind, PlayType, Side,
)
from .players import Roster
from .ratings import TeamRatings
from .utils.exceptions import GameStateError

__all__ = [
    "Play", "Drive", "TeamStats", "TeamContext", "Situation", "PendingKickoff",
    "GameState", "PHASE_TRANSITIONS",
]

PHASE_TRANSITIONS = {
    GamePhase.REGULATION: frozenset({GamePhase.OVERTIME, GamePhase.FINAL}),
    GamePhase.OVERTIME: frozenset({GamePhase.SUDDEN_DEATH, GamePhase.FINAL}),
    GamePhase.SUDDEN_DEATH: frozenset({GamePhase.FINAL}),
    GamePhase.FINAL: frozenset(),
}

OVERTIME_PHASES = (GamePhase.OVERTIME, GamePhase.SUDDEN_DEATH)


@dataclass(frozen=True)
class Play:
    play_type: PlayType
    result: PlayResultKind
    description: str
    yards: int = 0
    time_elapsed: float = 0.0
    turnover: bool = False
    turnover_type: Optional[DriveResult] = None     # INTERCEPTION or FUMBLE
    pass_type: Optional[PassType] = None
    target: Optional[str] = None
    carrier: Optional[str] = None
    broken_tackle: bool = False
    pass_defended: bool = False
    distance: Optional[int] = None                  # kicks
    points: int = 0
    return_yards: Optional[int] = None
    new_field_position: Optional[int] = None        # receiving team's spot after a kick
    # game context, stamped when the play is logged
    quarter: Optional[int] = None
    time: Optional[str] = None
    possession: Optional[Side] = None
    down: Optional[int] = None
    yards_to_go: Optional[int] = None
    field_position: Optional[int] = None
    play_number: Optional[int] = None

    @property
    def is_scrimmage(self) -> bool:
        return self.play_type in (PlayType.PASS, PlayType.RUN)

    def as_row(self) -> Dict[str, Any]:
        row = asdict(self)
        for k, v in row.items():
            if hasattr(v, "value"):
                row[k] = v.value
        return row


@dataclass
class Drive:
    team: Side
    start_position: int
    start_reason: DriveStart
    start_quarter: int
    start_time: float
    plays: List[Play] = field(default_factory=list)
    yards: int = 0
    time_elapsed: float = 0.0
    result: Optional[DriveResult] = None
    end_quarter: Optional[int] = None
    end_time: Optional[float] = None

    def as_row(self) -> Dict[str, Any]:
        return {
            "team": self.team.value,
            "start_position": self.start_position,
            "start_reason": self.start_reason.value,
            "start_quarter": self.start_quarter,
            "start_time": self.start_time,
            "end_quarter": self.end_quarter,
            "end_time": self.end_time,
            "n_plays": len(self.plays),
            "yards": self.yards,
            "time_elapsed": self.time_elapsed,
            "result": self.result.value if self.result is not None else None,
        }


@dataclass
class TeamStats:
    passing_yards: int = 0
    rushing_yards: int = 0
    passing_tds: int = 0
    rushing_tds: int = 0
    pass_attempts: int = 0
    completions: int = 0
    rush_attempts: int = 0
    interceptions: int = 0
    fumbles_lost: int = 0
    sacks: int = 0
    field_goals_made: int = 0
    field_goals_attempted: int = 0
    punts: int = 0
    first_downs: int = 0
    plays: int = 0
    time_of_possession: float = 0.0

    @property
    def total_yards(self) -> int:
        return self.passing_yards + self.rushing_yards

    @property
    def turnovers(self) -> int:
        return self.interceptions + self.fumbles_lost

    def record(self, play: Play) -> None:
        """Box-score counters for one scrimmage snap."""
        self.plays += 1
        if play.play_type is PlayType.PASS:
            if play.result is PlayResultKind.SACK:
                self.sacks += 1
            elif play.result is PlayResultKind.SCRAMBLE:
                # scrambles count as runs
                self.rush_attempts += 1
                self.rushing_yards += play.yards
            else:
                self.pass_attempts += 1
                if play.result is PlayResultKind.COMPLETE:
                    self.completions += 1
                    self.passing_yards += play.yards
                elif play.result is PlayResultKind.INTERCEPTION:
                    self.interceptions += 1
        elif play.play_type is PlayType.RUN:
            self.rush_attempts += 1
            self.rushing_yards += play.yards
        if play.turnover_type is DriveResult.FUMBLE:
            self.fumbles_lost += 1

    def as_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["total_yards"] = self.total_yards
        out["turnovers"] = self.turnovers
        return out


@dataclass
class TeamContext:
    """One side of the game: boosted roster + ratings, fixed strategies, running stats."""
    side: Side
    roster: Roster
    ratings: TeamRatings
    offensive_strategy: OffensiveStrategy
    defensive_strategy: DefensiveStrategy
    stats: TeamStats = field(default_factory=TeamStats)


@dataclass(frozen=True)
class Situation:
    down: int
    yards_to_go: int
    field_position: int
    quarter: int
    time_remaining: float
    score_diff: int          # offense minus defense


@dataclass(frozen=True)
class PendingKickoff:
    kicking: Side
    reason: DriveStart
    runs_clock: bool


@dataclass
class GameState:
    home: TeamContext
    away: TeamContext
    possession: Side
    second_half_receiver: Side
    phase: GamePhase = GamePhase.REGULATION
    quarter: int = 1
    time_remaining: float = float(QUARTER_SECONDS)
    field_position: int = STARTING_FIELD_POSITION
    down: int = 1
    yards_to_go: int = YARDS_FOR_FIRST_DOWN
    home_score: int = 0
    away_score: int = 0
    plays: List[Play] = field(default_factory=list)
    drives: List[Drive] = field(default_factory=list)
    current_drive: Optional[Drive] = None
    pending_kickoff: Optional[PendingKickoff] = None
    conversion_attempt: bool = False        # True while a 4th-down go-for-it snap is pending
    ot_possessions: Dict[Side, int] = field(default_factory=dict)
    winner: Optional[str] = None

    # ---------- views ----------
    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.FINAL

    @property
    def in_overtime(self) -> bool:
        return self.phase in OVERTIME_PHASES

    @property
    def overtime(self) -> bool:
        return bool(self.ot_possessions)

    def team(self, side: Side) -> TeamContext:
        return self.home if side is Side.HOME else self.away

    @property
    def offense(self) -> TeamContext:
        return self.team(self.possession)

    @property
    def defense(self) -> TeamContext:
        return self.team(self.possession.other)

    def score(self, side: Side) -> int:
        return self.home_score if side is Side.HOME else self.away_score

    def score_diff(self, side: Side) -> int:
        return self.score(side) - self.score(side.other)

    def situation(self) -> Situation:
        return Situation(
            down=self.down,
            yards_to_go=self.yards_to_go,
            field_position=self.field_position,
            quarter=self.quarter,
            time_remaining=self.time_remaining,
            score_diff=self.score_diff(self.possession),
        )

    # ---------- mutations ----------
    def transition(self, phase: GamePhase) -> None:
        if phase not in PHASE_TRANSITIONS[self.phase]:
            raise GameStateError(f"Illegal phase transition {self.phase.value} -> {phase.value}")
        self.phase = phase

    def add_points(self, side: Side, points: int) -> None:
        if side is Side.HOME:
            self.home_score += int(points)
        else:
            self.away_score += int(points)

    def start_drive(self, start_position: int, reason: DriveStart) -> Drive:
        if self.current_drive is not None:
            raise GameStateError("Cannot start a drive while another is open")
        drive = Drive(
            team=self.possession,
            start_position=int(start_position),
            start_reason=reason,
            start_quarter=self.quarter,
            start_time=self.time_remaining,
        )
        self.current_drive = drive
        self.field_position = int(start_position)
        self.down = 1
        self.yards_to_go = min(YARDS_FOR_FIRST_DOWN, GOAL_LINE - int(start_position))
        self.conversion_attempt = False
        return drive

    def end_drive(self, result: DriveResult) -> Optional[Drive]:
        drive = self.current_drive
        if drive is None:
            return None
        drive.result = result
        drive.end_quarter = self.quarter
        drive.end_time = self.time_remaining
        self.drives.append(drive)
        self.current_drive = None
        return drive

    def switch_possession(self) -> None:
        self.possession = self.possession.other
