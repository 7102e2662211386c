"""Monte-Carlo batches of seeded games, plus pandas summaries."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Sequence
import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from tqdm import tqdm

from .config import DEFAULT_SEED
from .engine import GameResult, simulate_game

logger = logging.getLogger(__name__)


def _one_game(home: Any, away: Any, seed: int, k: int, game_kwargs: Dict[str, Any]) -> GameResult:
    # per-game stream, independent of worker scheduling
    rng = np.random.RandomState(seed + 37 * k)
    return simulate_game(home, away, rng=rng, **game_kwargs)


def simulate_many(
    home: Any,
    away: Any,
    n_games: int,
    seed: int = DEFAULT_SEED,
    n_jobs: int = 1,
    progress: bool = False,
    **game_kwargs: Any,
) -> List[GameResult]:
    """
    Simulate n_games between the same two rosters.

    Game k draws from RandomState(seed + 37*k), so the batch is identical for any n_jobs.
    Extra keyword arguments go to simulate_game (rng/seed are managed here).
    """
    game_kwargs.pop("rng", None)
    game_kwargs.pop("seed", None)
    games = range(int(n_games))
    if progress:
        games = tqdm(games, desc="Simulating", unit="game")

    logger.info(f"Simulating {int(n_games)} games (seed={seed}, n_jobs={n_jobs})")
    if n_jobs == 1:
        results = [_one_game(home, away, seed, k, game_kwargs) for k in games]
    else:
        results = Parallel(n_jobs=n_jobs)(
            delayed(_one_game)(home, away, seed, k, game_kwargs) for k in games
        )
    logger.info(f"Finished {len(results)} games")
    return list(results)


def results_frame(results: Sequence[GameResult]) -> pd.DataFrame:
    """One row per game."""
    rows = []
    for i, r in enumerate(results):
        rows.append({
            "game": i,
            "home_score": r.home_score,
            "away_score": r.away_score,
            "total_points": r.total_points,
            "winner": r.winner,
            "overtime": r.overtime,
            "n_plays": len(r.plays),
            "n_drives": len(r.drives),
            "home_yards": r.home_stats.total_yards,
            "away_yards": r.away_stats.total_yards,
            "home_turnovers": r.home_stats.turnovers,
            "away_turnovers": r.away_stats.turnovers,
        })
    return pd.DataFrame(rows)


def _dist(values: np.ndarray) -> Dict[str, float]:
    p10, p50, p90 = np.percentile(values, [10, 50, 90])
    return {"mean": float(values.mean()), "p10": float(p10), "p50": float(p50), "p90": float(p90)}


def summarize_results(results: Sequence[GameResult]) -> Dict[str, Any]:
    if not results:
        return {"n_games": 0}
    df = results_frame(results)
    return {
        "n_games": int(len(df)),
        "home_win_rate": float((df["winner"] == "home").mean()),
        "away_win_rate": float((df["winner"] == "away").mean()),
        "tie_rate": float((df["winner"] == "tie").mean()),
        "overtime_rate": float(df["overtime"].mean()),
        "home_points": _dist(df["home_score"].to_numpy(dtype=float)),
        "away_points": _dist(df["away_score"].to_numpy(dtype=float)),
        "total_points": _dist(df["total_points"].to_numpy(dtype=float)),
    }
