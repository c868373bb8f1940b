"""Check the long-run coverage of bootstrap intervals for a proportion.

Examples
--------
  bootci coverage --p 0.3 --n 261
  bootci coverage --p 0.5 --n 50 --trials 1000 --reps 2000 --level 0.90
"""

from __future__ import annotations

import click

from bootci.config import Config, SUPPORTED_CI_METHODS
from bootci.coverage import simulate_proportion_coverage
from bootci.errors import BootstrapError


@click.command(name="coverage")
@click.option("p", "--p", type=click.FloatRange(0.0, 1.0), required=True, help="True population proportion")
@click.option("n", "--n", type=click.IntRange(min=1), required=True, help="Sample size per trial")
@click.option(
    "trials",
    "--trials",
    type=click.IntRange(min=1),
    default=Config.DEFAULT_COVERAGE_TRIALS,
    show_default=True,
    help="Number of simulated samples",
)
@click.option(
    "reps",
    "--reps",
    type=click.IntRange(min=1),
    default=Config.MIN_RECOMMENDED_REPETITIONS,
    show_default=True,
    help="Bootstrap resamples per trial",
)
@click.option(
    "level",
    "--level",
    type=float,
    default=Config.DEFAULT_CONFIDENCE_LEVEL,
    show_default=True,
    help="Confidence level in (0, 1)",
)
@click.option("seed", "--seed", type=int, default=Config.RANDOM_SEED, show_default=True, help="Root random seed")
@click.option(
    "method",
    "--method",
    type=click.Choice(SUPPORTED_CI_METHODS, case_sensitive=False),
    default=Config.DEFAULT_CI_METHOD,
    show_default=True,
    help="Interval method",
)
def coverage(p: float, n: int, trials: int, reps: int, level: float, seed: int, method: str) -> None:
    """Simulate repeated samples and count how often the interval covers p."""

    click.echo(f"Simulating {trials} samples of size {n} from Bernoulli({p}) with R={reps}...")
    try:
        result = simulate_proportion_coverage(
            p,
            n,
            trials=trials,
            repetitions=reps,
            level=level,
            seed=seed,
            method=method.lower(),
        )
    except BootstrapError as e:
        raise click.ClickException(str(e))

    click.echo(f"Coverage: {result.hits}/{result.trials} = {result.coverage:.1%} (nominal {result.level:.1%})")
    click.echo(f"Mean interval width: {result.mean_width:.4f}")
