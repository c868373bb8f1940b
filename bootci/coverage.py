"""Coverage simulation for bootstrap confidence intervals.

Repeatedly draws a fresh sample from a known population, bootstraps it, and
records whether the resulting interval contains the true parameter. Over many
trials the hit rate should sit near the nominal confidence level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import logging
import numbers

import numpy as np

from bootci.config import Config
from bootci.engine import validate_level, confidence_interval, generate
from bootci.errors import InvalidInput
from bootci.statistics import Proportion, StatisticFunction, statistic_name


_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoverageResult:
    trials: int
    hits: int
    level: float
    mean_width: float
    statistic: str
    true_value: float

    @property
    def coverage(self) -> float:
        return self.hits / self.trials

    def to_dict(self) -> dict[str, Any]:
        return {
            "trials": self.trials,
            "hits": self.hits,
            "coverage": self.coverage,
            "level": self.level,
            "mean_width": self.mean_width,
            "statistic": self.statistic,
            "true_value": self.true_value,
        }


def simulate_coverage(
    draw_sample: Callable[[np.random.Generator], Any],
    statistic: StatisticFunction,
    true_value: float,
    *,
    trials: int = Config.DEFAULT_COVERAGE_TRIALS,
    repetitions: int = Config.MIN_RECOMMENDED_REPETITIONS,
    level: float = Config.DEFAULT_CONFIDENCE_LEVEL,
    seed: int = Config.RANDOM_SEED,
    method: str = Config.DEFAULT_CI_METHOD,
) -> CoverageResult:
    """Estimate how often the bootstrap interval contains ``true_value``.

    Parameters
    ----------
    draw_sample:
        Called with a trial-specific generator; returns one sample drawn from
        the population.
    statistic:
        Statistic whose population value is ``true_value``.
    trials:
        Number of independent experiments.
    repetitions, level, method:
        Passed through to `generate` and `confidence_interval`.
    seed:
        Root seed. Each trial gets two spawned child seeds: one to draw the
        sample, one to bootstrap it.
    """

    if isinstance(trials, bool) or not isinstance(trials, numbers.Integral) or trials <= 0:
        raise InvalidInput(f"trials must be a positive integer, got {trials!r}")
    trials = int(trials)
    lv = validate_level(level)

    root = np.random.SeedSequence(int(seed))
    hits = 0
    widths: list[float] = []
    for trial, child in enumerate(root.spawn(trials)):
        draw_seq, boot_seq = child.spawn(2)
        values = draw_sample(np.random.default_rng(draw_seq))
        dist = generate(values, statistic, repetitions, np.random.default_rng(boot_seq))
        ci = confidence_interval(dist, lv, method=method)
        widths.append(ci.width)
        if ci.contains(true_value):
            hits += 1
        _LOGGER.debug("Trial %d: [%.6g, %.6g] contains=%s", trial, ci.lower, ci.upper, ci.contains(true_value))

    return CoverageResult(
        trials=trials,
        hits=hits,
        level=lv,
        mean_width=float(np.mean(widths)),
        statistic=statistic_name(statistic),
        true_value=float(true_value),
    )


def simulate_proportion_coverage(
    p: float,
    n: int,
    *,
    trials: int = Config.DEFAULT_COVERAGE_TRIALS,
    repetitions: int = Config.MIN_RECOMMENDED_REPETITIONS,
    level: float = Config.DEFAULT_CONFIDENCE_LEVEL,
    seed: int = Config.RANDOM_SEED,
    method: str = Config.DEFAULT_CI_METHOD,
) -> CoverageResult:
    """Coverage of the proportion interval for Bernoulli(``p``) samples of size ``n``.

    Observations are coded 1 (success) and 0 (failure).
    """

    if not (0.0 <= p <= 1.0):
        raise InvalidInput(f"p must be in [0, 1], got {p}")
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
        raise InvalidInput(f"n must be a positive integer, got {n!r}")
    n = int(n)

    def _draw(rng: np.random.Generator) -> np.ndarray:
        return (rng.random(n) < p).astype(int)

    return simulate_coverage(
        _draw,
        Proportion(1),
        p,
        trials=trials,
        repetitions=repetitions,
        level=level,
        seed=seed,
        method=method,
    )


__all__ = ["CoverageResult", "simulate_coverage", "simulate_proportion_coverage"]
