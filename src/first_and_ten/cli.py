"""Command-line interface for First and Ten."""

import logging
import sys

import click

from .batch import simulate_many, summarize_results
from .box_score import format_game_result, format_play_by_play, team_summary
from .config import DEFAULT_SEED
from .engine import simulate_game
from .players import create_test_roster
from .utils.exceptions import RosterSpecError
from .utils.validators import TierSpecValidator

logger = logging.getLogger(__name__)

SPEC_HELP = "Comma list of POS=TIER, e.g. 'QB=8,WR=7'. Unspecified slots are tier 5."


def _roster_from_spec(spec, param_name):
    try:
        return create_test_roster(TierSpecValidator().parse(spec))
    except RosterSpecError as e:
        raise click.BadParameter(str(e), param_hint=param_name)


@click.group()
@click.option("--debug", is_flag=True, help="Log at DEBUG level.")
def main(debug):
    """Tier-based football game simulator."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@main.command()
@click.option("--home", "home_spec", default="", help=SPEC_HELP)
@click.option("--away", "away_spec", default="", help=SPEC_HELP)
@click.option("--seed", type=int, default=DEFAULT_SEED, show_default=True)
@click.option("--plays", "n_plays", type=int, default=50, show_default=True,
              help="Number of plays of play-by-play to print.")
@click.option("--verbose", is_flag=True, help="Log score progress during the game.")
def simulate(home_spec, away_spec, seed, n_plays, verbose):
    """Simulate one game and print the box score."""
    home = _roster_from_spec(home_spec, "--home")
    away = _roster_from_spec(away_spec, "--away")

    try:
        result = simulate_game(home, away, seed=seed, verbose=verbose)
    except Exception as e:
        click.secho(f"\nError: {str(e)}", fg='red')
        logger.exception("Unexpected error")
        sys.exit(1)

    for label, roster in (("Home", home), ("Away", away)):
        summary = team_summary(roster)
        click.echo(f"{label}: tier sum {summary['tier_sum']:.1f}, "
                   f"QB {summary['tier_names']['QB']} ({summary['qb_playstyle']})")
    click.echo(format_game_result(result))
    if n_plays > 0:
        click.echo("")
        click.secho("Play-by-play", bold=True, fg='cyan')
        click.echo(format_play_by_play(result, limit=n_plays))


@main.command()
@click.option("--home", "home_spec", default="", help=SPEC_HELP)
@click.option("--away", "away_spec", default="", help=SPEC_HELP)
@click.option("--games", "n_games", type=click.IntRange(min=1), default=100, show_default=True)
@click.option("--seed", type=int, default=DEFAULT_SEED, show_default=True)
@click.option("--jobs", "n_jobs", type=int, default=1, show_default=True)
def batch(home_spec, away_spec, n_games, seed, n_jobs):
    """Simulate many games and print win rates and scoring distribution."""
    home = _roster_from_spec(home_spec, "--home")
    away = _roster_from_spec(away_spec, "--away")

    results = simulate_many(home, away, n_games, seed=seed, n_jobs=n_jobs, progress=True)
    summary = summarize_results(results)

    click.echo("=" * 50)
    click.secho(f"{summary['n_games']} games", bold=True, fg='green')
    click.echo("=" * 50)
    click.echo(f"Home win rate: {summary['home_win_rate']:.3f}")
    click.echo(f"Away win rate: {summary['away_win_rate']:.3f}")
    click.echo(f"Overtime rate: {summary['overtime_rate']:.3f}")
    for key in ("home_points", "away_points", "total_points"):
        d = summary[key]
        click.echo(f"{key:<13} mean {d['mean']:.1f}  p10 {d['p10']:.0f}  p50 {d['p50']:.0f}  p90 {d['p90']:.0f}")


if __name__ == "__main__":
    main()
