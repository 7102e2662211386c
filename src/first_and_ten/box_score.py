"""Text and DataFrame views of a finished game."""
from __future__ import annotations
from typing import Any, Dict, List
import pandas as pd

from .clock import format_clock
from .enums import PosGroup, Side
from .engine import GameResult
from .matchups import tier_name
from .players import Roster
from .ratings import calculate_team_ratings, classify_qb_playstyle


def team_box(result: GameResult) -> pd.DataFrame:
    """Two rows (home, away) of box-score counters plus points."""
    rows = []
    for side, stats, points in (
        (Side.HOME, result.home_stats, result.home_score),
        (Side.AWAY, result.away_stats, result.away_score),
    ):
        row = {"team": side.value, "points": points}
        row.update(stats.as_dict())
        rows.append(row)
    return pd.DataFrame(rows).set_index("team")


def format_game_result(result: GameResult) -> str:
    lines: List[str] = []
    lines.append("=" * 50)
    lines.append("FINAL" + (" (OT)" if result.overtime else ""))
    lines.append(f"  Home {result.home_score:>3}")
    lines.append(f"  Away {result.away_score:>3}")
    lines.append(f"  Winner: {result.winner}")
    lines.append("=" * 50)

    home, away = result.home_stats, result.away_stats
    lines.append(f"{'':<22}{'Home':>10}{'Away':>10}")
    for label, h, a in (
        ("Total yards", home.total_yards, away.total_yards),
        ("Passing yards", home.passing_yards, away.passing_yards),
        ("Rushing yards", home.rushing_yards, away.rushing_yards),
        ("Comp/Att", f"{home.completions}/{home.pass_attempts}", f"{away.completions}/{away.pass_attempts}"),
        ("Rush attempts", home.rush_attempts, away.rush_attempts),
        ("First downs", home.first_downs, away.first_downs),
        ("Sacks taken", home.sacks, away.sacks),
        ("Turnovers", home.turnovers, away.turnovers),
        ("FG made/att", f"{home.field_goals_made}/{home.field_goals_attempted}",
         f"{away.field_goals_made}/{away.field_goals_attempted}"),
        ("Punts", home.punts, away.punts),
        ("Time of possession", format_clock(round(home.time_of_possession)),
         format_clock(round(away.time_of_possession))),
    ):
        lines.append(f"{label:<22}{str(h):>10}{str(a):>10}")

    lines.append("")
    lines.append(f"Strategies: home {result.home_strategy[0].value}/{result.home_strategy[1].value}, "
                 f"away {result.away_strategy[0].value}/{result.away_strategy[1].value}")
    return "\n".join(lines)


def format_play_by_play(result: GameResult, limit: int = 50) -> str:
    lines = []
    for play in result.plays[:max(0, int(limit))]:
        side = play.possession.value.upper() if play.possession is not None else ""
        if play.is_scrimmage:
            where = f"{play.down}&{play.yards_to_go} at {play.field_position}"
        else:
            where = ""
        lines.append(f"Q{play.quarter} {play.time:>5} {side:<4} {where:<14} {play.description}")
    if len(result.plays) > limit:
        lines.append(f"... {len(result.plays) - limit} more plays")
    return "\n".join(lines)


def team_summary(roster: Any) -> Dict[str, Any]:
    """Roster overview: slot tiers, QB playstyle and base ratings."""
    roster = Roster.coerce(roster)
    ratings = calculate_team_ratings(roster)
    tiers = _slot_tiers(roster)
    return {
        "tiers": tiers,
        "tier_names": {slot: tier_name(t) for slot, t in tiers.items()},
        "tier_sum": roster.tier_sum(),
        "qb_playstyle": classify_qb_playstyle(roster.qb).value,
        "pass_rating": ratings.offense.pass_rating,
        "run_rating": ratings.offense.run_rating,
        "pass_defense_rating": ratings.defense.pass_defense_rating,
        "run_defense_rating": ratings.defense.run_defense_rating,
        "kicker_rating": ratings.special_teams.kicker_rating,
        "overall": ratings.overall.total,
    }


def _slot_tiers(roster: Roster) -> Dict[str, float]:
    """{"QB": 5.0, "WR1": 7.0, "WR2": 5.0, ...}"""
    tiers: Dict[str, float] = {}
    for pos, p in roster.slots():
        label = pos.value
        if pos in (PosGroup.WR, PosGroup.DB):
            label += "2" if label + "1" in tiers else "1"
        tiers[label] = p.tier
    return tiers
