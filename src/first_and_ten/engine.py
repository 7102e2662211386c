"""
Game state machine: owns a GameState and drives it snap by snap from the
opening kickoff to FINAL, including overtime.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple
import numpy as np
import pandas as pd

from .config import (
    GOAL_LINE, QUARTER_SECONDS, REGULATION_QUARTERS, HALFTIME_AFTER_QUARTER, OVERTIME_QUARTER,
    YARDS_FOR_FIRST_DOWN, FG_SNAP_AND_HOLD_YARDS, MAX_REGULATION_PLAYS, MAX_OVERTIME_PLAYS,
    VERBOSE_LOG_EVERY, TD_POINTS, SAFETY_POINTS,
)
from .enums import (
    DefensiveStrategy, DriveResult, DriveStart, FourthDownDecision, GamePhase,
    OffensiveStrategy, PlayResultKind, PlayType, Side,
)
from .players import Roster
from .ratings import (
    StrategyContext, TeamRatings, calculate_team_ratings, derive_strategies,
    strategy_rating_multipliers,
)
from .plays import simulate_play
from .policies import decide_fourth_down
from .special_teams import simulate_extra_point, simulate_field_goal, simulate_kickoff, simulate_punt
from .clock import burn_clock, format_clock, next_quarter, reset_period
from .state import Drive, GameState, PendingKickoff, Play, TeamContext, TeamStats

logger = logging.getLogger(__name__)

__all__ = ["GameEngine", "GameResult", "simulate_game"]


@dataclass(frozen=True)
class GameResult:
    home_score: int
    away_score: int
    winner: str                      # "home" | "away" | "tie"
    overtime: bool
    plays: Tuple[Play, ...]
    drives: Tuple[Drive, ...]
    home_stats: TeamStats
    away_stats: TeamStats
    home_ratings: TeamRatings
    away_ratings: TeamRatings
    home_strategy: Tuple[OffensiveStrategy, DefensiveStrategy]
    away_strategy: Tuple[OffensiveStrategy, DefensiveStrategy]
    ot_possessions: Dict[Side, int] = field(default_factory=dict)

    @property
    def total_points(self) -> int:
        return self.home_score + self.away_score

    def plays_frame(self) -> pd.DataFrame:
        return pd.DataFrame([p.as_row() for p in self.plays])

    def drives_frame(self) -> pd.DataFrame:
        return pd.DataFrame([d.as_row() for d in self.drives])


def _build_sides(home: Any, away: Any, home_force_balanced: bool,
                 away_force_balanced: bool) -> Tuple[TeamContext, TeamContext]:
    """
    Rosters -> effective tiers -> base ratings -> strategies -> boosted rosters/ratings.
    Strategies are derived from unboosted ratings and stay fixed for the game.
    """
    rosters = {
        Side.HOME: Roster.coerce(home).with_effective_tiers(),
        Side.AWAY: Roster.coerce(away).with_effective_tiers(),
    }
    forced = {Side.HOME: home_force_balanced, Side.AWAY: away_force_balanced}
    strategies = {
        side: derive_strategies(calculate_team_ratings(rosters[side]), forced[side])
        for side in Side
    }

    teams = {}
    for side in Side:
        my_off, my_def = strategies[side]
        their_off, their_def = strategies[side.other]
        ctx = StrategyContext(my_off, my_def, their_off, their_def)
        boosted = rosters[side].with_multipliers(strategy_rating_multipliers(my_off, my_def, their_off, their_def))
        teams[side] = TeamContext(
            side=side,
            roster=boosted,
            ratings=calculate_team_ratings(rosters[side], ctx),
            offensive_strategy=my_off,
            defensive_strategy=my_def,
        )
        logger.debug(f"{side.value} strategy: offense={my_off.value} defense={my_def.value}")
    return teams[Side.HOME], teams[Side.AWAY]


class GameEngine:
    """One game. Build it, call run(), get a GameResult."""

    def __init__(
        self,
        home: Any,
        away: Any,
        *,
        max_plays: int = MAX_REGULATION_PLAYS,
        home_force_balanced: bool = False,
        away_force_balanced: bool = False,
        rng: Optional[np.random.RandomState] = None,
        seed: Optional[int] = None,
        verbose: bool = False,
    ):
        self.rng = rng if rng is not None else np.random.RandomState(seed)
        self.max_plays = int(max_plays)
        self.verbose = verbose

        home_ctx, away_ctx = _build_sides(home, away, home_force_balanced, away_force_balanced)
        receiver = Side.HOME if self.rng.rand() < 0.5 else Side.AWAY
        self.state = GameState(
            home=home_ctx,
            away=away_ctx,
            possession=receiver,
            second_half_receiver=receiver.other,
        )
        self.state.pending_kickoff = PendingKickoff(receiver.other, DriveStart.KICKOFF, runs_clock=False)

    # ---------- main loops ----------
    def run(self) -> GameResult:
        st = self.state
        steps = 0
        while st.phase is GamePhase.REGULATION and steps < self.max_plays:
            self.step()
            steps += 1
            if self.verbose and steps % VERBOSE_LOG_EVERY == 0:
                logger.info(f"Q{st.quarter} {format_clock(st.time_remaining)} - "
                            f"Home: {st.home_score}, Away: {st.away_score}")

        if st.phase is GamePhase.REGULATION:
            logger.warning(f"Regulation stopped at the {self.max_plays}-play ceiling")
            self._end_regulation()

        if st.in_overtime:
            self._run_overtime()

        return self.result()

    def _run_overtime(self) -> None:
        st = self.state
        steps = 0
        while st.in_overtime and steps < MAX_OVERTIME_PLAYS:
            self.step()
            steps += 1

        if st.in_overtime:
            logger.warning(f"Overtime stopped at the {MAX_OVERTIME_PLAYS}-play ceiling")
            st.end_drive(DriveResult.END_OF_GAME)
            coin_flip = None
            if st.home_score == st.away_score:
                coin_flip = Side.HOME if self.rng.rand() < 0.5 else Side.AWAY
            self._finish(coin_flip)

    def step(self) -> None:
        """One unit of the main loop: a pending kickoff or a scrimmage snap."""
        if self.state.pending_kickoff is not None:
            self._kickoff()
        else:
            self.run_play()
        self._process_clock()

    # ---------- recording ----------
    def _record(self, play: Play) -> Play:
        st = self.state
        play = replace(
            play,
            quarter=st.quarter,
            time=format_clock(st.time_remaining),
            possession=st.possession,
            down=min(st.down, 4),
            yards_to_go=st.yards_to_go,
            field_position=st.field_position,
            play_number=len(st.plays) + 1,
        )
        st.plays.append(play)
        if st.current_drive is not None:
            st.current_drive.plays.append(play)
            st.current_drive.yards += play.yards if play.is_scrimmage else 0
        return play

    def _marker(self, play_type: PlayType, description: str) -> None:
        self._record(Play(play_type=play_type, result=PlayResultKind.INFO, description=description))

    # ---------- drives ----------
    def _start_drive(self, start_position: int, reason: DriveStart) -> None:
        st = self.state
        st.start_drive(start_position, reason)
        if st.in_overtime:
            st.ot_possessions[st.possession] += 1
            if st.phase is GamePhase.OVERTIME and all(n >= 1 for n in st.ot_possessions.values()):
                st.transition(GamePhase.SUDDEN_DEATH)

    def _end_drive(self, result: DriveResult) -> None:
        st = self.state
        st.end_drive(result)
        if st.in_overtime and all(n >= 1 for n in st.ot_possessions.values()) \
                and st.home_score != st.away_score:
            self._marker(PlayType.OVERTIME_END, "Overtime ends")
            self._finish()

    def _change_of_possession(self, result: DriveResult, spot: int, reason: DriveStart) -> None:
        self._end_drive(result)
        if self.state.game_over:
            return
        self.state.switch_possession()
        self._start_drive(spot, reason)

    # ---------- kicks ----------
    def _kickoff(self) -> None:
        st = self.state
        pk = st.pending_kickoff
        st.pending_kickoff = None

        play = simulate_kickoff(st.team(pk.kicking).roster.k.tier, self.rng)
        st.possession = pk.kicking.other
        self._start_drive(play.new_field_position, pk.reason)
        self._record(play)
        if pk.runs_clock:
            burn_clock(st, play.time_elapsed)

    def _field_goal(self) -> None:
        st = self.state
        offense = st.offense
        distance = GOAL_LINE - st.field_position + FG_SNAP_AND_HOLD_YARDS
        play = self._record(simulate_field_goal(offense.roster.k.tier, distance, self.rng))
        burn_clock(st, play.time_elapsed)
        offense.stats.field_goals_attempted += 1

        if play.result is PlayResultKind.GOOD:
            offense.stats.field_goals_made += 1
            st.add_points(st.possession, play.points)
            self._end_drive(DriveResult.FIELD_GOAL)
            if not st.game_over:
                st.pending_kickoff = PendingKickoff(st.possession, DriveStart.KICKOFF, runs_clock=True)
        else:
            spot = max(20, GOAL_LINE - st.field_position)
            self._change_of_possession(DriveResult.MISSED_FG, spot, DriveStart.MISSED_FG)

    def _punt(self) -> None:
        st = self.state
        play = self._record(simulate_punt(st.offense.roster.p.tier, st.field_position, self.rng))
        burn_clock(st, play.time_elapsed)
        st.offense.stats.punts += 1
        self._change_of_possession(DriveResult.PUNT, play.new_field_position, DriveStart.PUNT)

    # ---------- scoring ----------
    def _touchdown(self, play: Play) -> None:
        st = self.state
        scorer = st.possession
        st.add_points(scorer, TD_POINTS)
        if play.play_type is PlayType.PASS and play.result is PlayResultKind.COMPLETE:
            st.offense.stats.passing_tds += 1
        else:
            st.offense.stats.rushing_tds += 1

        xp = self._record(simulate_extra_point(st.offense.roster.k.tier, self.rng))
        burn_clock(st, xp.time_elapsed)
        st.add_points(scorer, xp.points)

        self._end_drive(DriveResult.TOUCHDOWN)
        if not st.game_over:
            st.pending_kickoff = PendingKickoff(scorer, DriveStart.KICKOFF, runs_clock=True)

    def _safety(self) -> None:
        st = self.state
        safetied = st.possession
        st.add_points(safetied.other, SAFETY_POINTS)
        self._end_drive(DriveResult.SAFETY)
        if not st.game_over:
            st.pending_kickoff = PendingKickoff(safetied, DriveStart.SAFETY_KICK, runs_clock=True)

    # ---------- scrimmage ----------
    def run_play(self) -> Play:
        """Run one scrimmage snap for the team in possession and apply its consequences."""
        st = self.state
        offense, defense = st.offense, st.defense

        play = simulate_play(offense, defense, st.situation(), self.rng)
        play = self._record(play)
        offense.stats.record(play)
        burn_clock(st, play.time_elapsed)

        if play.turnover:
            spot = int(np.clip(GOAL_LINE - st.field_position - play.yards, 20, 80))
            self._change_of_possession(play.turnover_type or DriveResult.FUMBLE, spot, DriveStart.TURNOVER)
            return play

        st.field_position = int(np.clip(st.field_position + play.yards, 0, GOAL_LINE))

        if st.field_position >= GOAL_LINE:
            self._touchdown(play)
        elif st.field_position <= 0:
            self._safety()
        elif play.yards >= st.yards_to_go:
            st.down = 1
            st.yards_to_go = min(YARDS_FOR_FIRST_DOWN, GOAL_LINE - st.field_position)
            st.conversion_attempt = False
            offense.stats.first_downs += 1
        else:
            st.down += 1
            st.yards_to_go -= play.yards
            if st.down > 4:
                self._fourth_down()
        return play

    def _fourth_down(self) -> None:
        st = self.state
        if st.conversion_attempt:
            self._change_of_possession(DriveResult.DOWNS, GOAL_LINE - st.field_position, DriveStart.DOWNS)
            return

        decision = decide_fourth_down(st.situation(), self.rng)
        if decision is FourthDownDecision.GO_FOR_IT:
            st.down = 4
            st.conversion_attempt = True
        elif decision is FourthDownDecision.FIELD_GOAL:
            self._field_goal()
        else:
            self._punt()

    # ---------- clock ----------
    def _process_clock(self) -> None:
        st = self.state
        if st.game_over or st.time_remaining > 0:
            return

        if st.in_overtime:
            reset_period(st)
        elif st.quarter == HALFTIME_AFTER_QUARTER:
            st.end_drive(DriveResult.END_OF_HALF)
            next_quarter(st)
            st.pending_kickoff = PendingKickoff(st.second_half_receiver.other, DriveStart.HALFTIME_KICKOFF,
                                                runs_clock=False)
        elif st.quarter >= REGULATION_QUARTERS:
            self._end_regulation()
        else:
            next_quarter(st)

    def _end_regulation(self) -> None:
        st = self.state
        st.end_drive(DriveResult.END_OF_REGULATION)
        st.pending_kickoff = None
        if st.home_score == st.away_score:
            self._start_overtime()
        else:
            self._finish()

    def _start_overtime(self) -> None:
        st = self.state
        st.transition(GamePhase.OVERTIME)
        st.quarter = OVERTIME_QUARTER
        st.time_remaining = float(QUARTER_SECONDS)
        st.ot_possessions = {Side.HOME: 0, Side.AWAY: 0}

        receiver = Side.HOME if self.rng.rand() < 0.5 else Side.AWAY
        st.possession = receiver
        self._marker(PlayType.OVERTIME_START, f"Overtime: {receiver.value} receives")
        st.pending_kickoff = PendingKickoff(receiver.other, DriveStart.OVERTIME_KICKOFF, runs_clock=False)
        logger.debug(f"Overtime at {st.home_score}-{st.away_score}, {receiver.value} receives")

    def _finish(self, coin_flip: Optional[Side] = None) -> None:
        st = self.state
        st.pending_kickoff = None
        st.transition(GamePhase.FINAL)
        if coin_flip is not None:
            st.winner = coin_flip.value
        elif st.home_score > st.away_score:
            st.winner = Side.HOME.value
        elif st.away_score > st.home_score:
            st.winner = Side.AWAY.value
        else:
            st.winner = "tie"

    # ---------- output ----------
    def result(self) -> GameResult:
        st = self.state
        return GameResult(
            home_score=st.home_score,
            away_score=st.away_score,
            winner=st.winner or "tie",
            overtime=st.overtime,
            plays=tuple(st.plays),
            drives=tuple(st.drives),
            home_stats=st.home.stats,
            away_stats=st.away.stats,
            home_ratings=st.home.ratings,
            away_ratings=st.away.ratings,
            home_strategy=(st.home.offensive_strategy, st.home.defensive_strategy),
            away_strategy=(st.away.offensive_strategy, st.away.defensive_strategy),
            ot_possessions=dict(st.ot_possessions),
        )


def simulate_game(
    home_roster: Any,
    away_roster: Any,
    *,
    verbose: bool = False,
    max_plays: int = MAX_REGULATION_PLAYS,
    home_force_balanced: bool = False,
    away_force_balanced: bool = False,
    seed: Optional[int] = None,
    rng: Optional[np.random.RandomState] = None,
) -> GameResult:
    """
    Simulate a full game between two rosters.

    Rosters may be Roster objects, position mappings (canonical or legacy arrays)
    or lists of player cards. rng wins over seed; with neither the game is unseeded.
    """
    engine = GameEngine(
        home_roster,
        away_roster,
        max_plays=max_plays,
        home_force_balanced=home_force_balanced,
        away_force_balanced=away_force_balanced,
        rng=rng,
        seed=seed,
        verbose=verbose,
    )
    return engine.run()
