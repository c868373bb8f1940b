"""Bootstrap a statistic of one data column and report confidence intervals.

Examples
--------
  bootci ci --data rents.csv --column rent --stat mean
  bootci ci --data rents.csv --column rent --stat median --level 0.90 --level 0.99
  bootci ci --data survey.csv --column died --stat prop --success yes --reps 10000 --seed 2024
  bootci ci --data https://example.org/data.csv --column x --plot figs/x.png --report out/x.md
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from bootci.config import Config, SUPPORTED_CI_METHODS, SUPPORTED_STATISTICS
from bootci.engine import BootstrapDistribution, confidence_interval, generate
from bootci.errors import BootstrapError
from bootci.sample import Sample
from bootci.statistics import get_statistic
from bootci.utils import write_json


def _coerce_success(sample: Sample, success: str) -> Any:
    """Match the success token to the column type (``"1"`` -> 1.0 for numeric data)."""

    if sample.is_numeric:
        try:
            return float(success)
        except ValueError:
            raise click.ClickException(
                f"--success {success!r} is not numeric but column {sample.name!r} is"
            ) from None
    return success


def _run_generation(sample: Sample, statistic: Any, reps: int, seed: int, workers: int) -> BootstrapDistribution:
    if workers > 1:
        from bootci.parallel import generate_parallel

        return generate_parallel(sample, statistic, reps, seed, n_workers=workers)
    return generate(sample, statistic, reps, seed)


@click.command(name="ci")
@click.option("data", "--data", type=str, required=True, help="CSV file path or HTTP(S) URL")
@click.option("column", "--column", type=str, required=True, help="Column to bootstrap")
@click.option(
    "stat",
    "--stat",
    type=click.Choice(SUPPORTED_STATISTICS, case_sensitive=False),
    default="mean",
    show_default=True,
    help="Statistic computed on each resample",
)
@click.option("success", "--success", type=str, required=False, help="Success category (required for --stat prop)")
@click.option(
    "reps",
    "--reps",
    type=click.IntRange(min=1),
    default=Config.DEFAULT_REPETITIONS,
    show_default=True,
    help="Number of bootstrap resamples",
)
@click.option(
    "levels",
    "--level",
    type=float,
    multiple=True,
    help=f"Confidence level in (0, 1); repeatable [default: {Config.DEFAULT_CONFIDENCE_LEVEL}]",
)
@click.option("seed", "--seed", type=int, default=Config.RANDOM_SEED, show_default=True, help="Random seed")
@click.option(
    "method",
    "--method",
    type=click.Choice(SUPPORTED_CI_METHODS, case_sensitive=False),
    default=Config.DEFAULT_CI_METHOD,
    show_default=True,
    help="Interval method",
)
@click.option(
    "workers",
    "--workers",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Worker processes (>1 enables chunked parallel generation)",
)
@click.option("plot", "--plot", type=click.Path(path_type=Path), required=False, help="Write a histogram PNG")
@click.option("report_path", "--report", type=click.Path(path_type=Path), required=False, help="Write a Markdown summary")
@click.option("output", "--output", type=click.Path(path_type=Path), required=False, help="Write results JSON")
def ci(
    data: str,
    column: str,
    stat: str,
    success: str | None,
    reps: int,
    levels: tuple[float, ...],
    seed: int,
    method: str,
    workers: int,
    plot: Path | None,
    report_path: Path | None,
    output: Path | None,
) -> None:
    """Compute bootstrap confidence intervals for a column of data."""

    stat = stat.lower()
    method = method.lower()
    if stat == "prop" and success is None:
        raise click.UsageError("--stat prop requires --success")
    levels = levels or (Config.DEFAULT_CONFIDENCE_LEVEL,)

    try:
        from bootci.data import load_column

        sample = load_column(data, column)
        statistic = get_statistic(stat, _coerce_success(sample, success) if success is not None else None)

        click.echo(f"Bootstrapping {stat} of {column!r}: n={sample.size}, R={reps}, seed={seed}")
        dist = _run_generation(sample, statistic, reps, seed, workers)
        intervals = [confidence_interval(dist, lv, method=method) for lv in levels]
    except (BootstrapError, FileNotFoundError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Observed {stat}: {dist.observed:.6g}")
    click.echo(f"Bootstrap SE: {dist.std:.6g}")
    for interval in intervals:
        click.echo(f"  {interval.level:.1%} CI ({interval.method}): [{interval.lower:.6g}, {interval.upper:.6g}]")

    if plot is not None:
        from bootci.plots import plot_distribution

        plot_distribution(dist, intervals[0], plot, xlabel=f"Bootstrap {stat} of {column}")
        click.echo(f"Generated figure: {plot}")

    if report_path is not None:
        from bootci.report import build_summary_context, render_summary

        context = build_summary_context(sample, dist, intervals, source=data, figure=plot)
        render_summary(context, report_path)
        click.echo(f"Generated report: {report_path}")

    if output is not None:
        result = {
            "source": data,
            "column": column,
            "sample": sample.to_dict(),
            "distribution": dist.to_dict(),
            "intervals": [interval.to_dict() for interval in intervals],
        }
        write_json(output, result)
        click.echo(f"Results written to: {output}")
