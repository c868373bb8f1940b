"""Nonparametric bootstrap: resample, compute a statistic, extract intervals.

Resamples of size n are drawn with replacement from the original sample of
size n, a statistic is computed on each, and confidence intervals are read off
the resulting empirical distribution.

References
----------
- Efron, B., & Tibshirani, R. J. (1993). An Introduction to the Bootstrap.
- Hyndman, R. J., & Fan, Y. (1996). Sample Quantiles in Statistical Packages.
  The American Statistician 50(4). (Definition 7 is used here.)

Examples
--------
>>> from bootci.engine import generate, confidence_interval
>>> from bootci.statistics import Mean
>>> dist = generate([2.0, 4.0, 4.0, 5.0, 7.0], Mean(), 2000, 42)
>>> ci = confidence_interval(dist, 0.95)
>>> ci.lower <= ci.upper
True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from statistics import NormalDist
from typing import Any, Iterator, Sequence
import logging
import math
import numbers

import numpy as np

from bootci.config import Config, SUPPORTED_CI_METHODS
from bootci.errors import InvalidInput, StatisticError
from bootci.sample import Sample, as_sample
from bootci.statistics import StatisticFunction, statistic_name


_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfidenceInterval:
    """Closed interval ``[lower, upper]`` tagged with its confidence level."""

    lower: float
    upper: float
    level: float
    method: str = "percentile"

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise InvalidInput(f"lower bound {self.lower} exceeds upper bound {self.upper}")

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def midpoint(self) -> float:
        return (self.lower + self.upper) / 2.0

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def to_dict(self) -> dict[str, float | str]:
        return {
            "lower": self.lower,
            "upper": self.upper,
            "level": self.level,
            "method": self.method,
            "width": self.width,
        }


@dataclass(frozen=True, eq=False)
class BootstrapDistribution:
    """Statistic values, one per resample, in generation order.

    The ``values`` array is read-only; extract as many intervals as needed
    from a single distribution without regenerating it.
    """

    values: np.ndarray
    statistic: str
    sample_size: int
    seed: int | None = None
    observed: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        arr = np.array(self.values, dtype=float, copy=True)
        arr.setflags(write=False)
        object.__setattr__(self, "values", arr)

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def __iter__(self) -> Iterator[float]:
        return iter(self.values.tolist())

    @property
    def repetitions(self) -> int:
        return len(self)

    @property
    def mean(self) -> float:
        return float(np.mean(self.values))

    @property
    def std(self) -> float:
        """Bootstrap standard error (sample standard deviation, ddof=1)."""

        return float(np.std(self.values, ddof=1)) if len(self) > 1 else 0.0

    def confidence_interval(
        self,
        level: float = Config.DEFAULT_CONFIDENCE_LEVEL,
        method: str = Config.DEFAULT_CI_METHOD,
    ) -> ConfidenceInterval:
        return confidence_interval(self, level, method=method)

    def to_dict(self) -> dict[str, Any]:
        return {
            "statistic": self.statistic,
            "sample_size": self.sample_size,
            "repetitions": self.repetitions,
            "seed": self.seed,
            "observed": self.observed,
            "mean": self.mean,
            "std": self.std,
            **self.metadata,
        }


def validate_repetitions(repetitions: Any) -> int:
    if isinstance(repetitions, bool) or not isinstance(repetitions, numbers.Integral):
        raise InvalidInput(f"repetitions must be an integer, got {repetitions!r}")
    if repetitions <= 0:
        raise InvalidInput(f"repetitions must be > 0, got {repetitions}")
    reps = int(repetitions)
    if reps < Config.MIN_RECOMMENDED_REPETITIONS:
        _LOGGER.warning(
            "Only %d repetitions requested; at least %d are recommended for stable quantiles",
            reps,
            Config.MIN_RECOMMENDED_REPETITIONS,
        )
    return reps


def validate_level(level: Any) -> float:
    if isinstance(level, bool) or not isinstance(level, numbers.Real):
        raise InvalidInput(f"level must be a real number, got {level!r}")
    lv = float(level)
    if not (0.0 < lv < 1.0):
        raise InvalidInput(f"level must be in (0, 1), got {level}")
    return lv


def _as_generator(rng_seed: int | np.random.Generator | None) -> np.random.Generator:
    if isinstance(rng_seed, np.random.Generator):
        return rng_seed
    if rng_seed is None:
        rng_seed = Config.RANDOM_SEED
    if isinstance(rng_seed, bool) or not isinstance(rng_seed, numbers.Integral):
        raise InvalidInput(f"rng_seed must be an integer or numpy Generator, got {rng_seed!r}")
    return np.random.default_rng(int(rng_seed))


def evaluate_statistic(statistic: StatisticFunction, values: np.ndarray, index: int) -> float:
    """Apply ``statistic`` to one resample and validate the result.

    ``index`` is the zero-based resample index; -1 denotes the original sample.

    Raises
    ------
    StatisticError
        If the statistic raises, or returns something that is not a real
        number, or returns NaN or an infinity.
    """

    where = "the original sample" if index < 0 else f"resample {index}"
    try:
        raw = statistic(values)
    except Exception as exc:
        raise StatisticError(
            f"Statistic {statistic_name(statistic)!r} failed on {where}: {exc}",
            resample_index=index,
        ) from exc
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise StatisticError(
            f"Statistic {statistic_name(statistic)!r} returned non-numeric {raw!r} on {where}",
            resample_index=index,
        ) from exc
    if not math.isfinite(value):
        raise StatisticError(
            f"Statistic {statistic_name(statistic)!r} returned non-finite {value!r} on {where}",
            resample_index=index,
        )
    return value


def draw_resample(sample: Sample, rng: np.random.Generator) -> np.ndarray:
    """Draw n observations uniformly, with replacement, from ``sample``."""

    n = sample.size
    idx = rng.integers(0, n, size=n)
    return sample.values[idx]


def resample_statistics(
    sample: Sample,
    statistic: StatisticFunction,
    repetitions: int,
    rng: np.random.Generator,
    *,
    start_index: int = 0,
) -> np.ndarray:
    """Return ``repetitions`` statistic values drawn sequentially from ``rng``.

    ``start_index`` offsets the resample index reported in a `StatisticError`.
    """

    out = np.empty(repetitions, dtype=float)
    for i in range(repetitions):
        out[i] = evaluate_statistic(statistic, draw_resample(sample, rng), start_index + i)
    return out


def generate(
    sample: Sample | Sequence[Any] | np.ndarray,
    statistic: StatisticFunction,
    repetitions: int = Config.DEFAULT_REPETITIONS,
    rng_seed: int | np.random.Generator | None = None,
) -> BootstrapDistribution:
    """Generate a bootstrap distribution of ``statistic`` over ``sample``.

    Parameters
    ----------
    sample:
        Original observations (a `Sample` or any one-dimensional sequence).
    statistic:
        Callable mapping a resample to a real number.
    repetitions:
        Number of resamples R. Defaults to Config.DEFAULT_REPETITIONS.
    rng_seed:
        Integer seed, or a numpy ``Generator`` owned by the caller (advanced
        in place). Defaults to Config.RANDOM_SEED.

    Returns
    -------
    BootstrapDistribution
        Exactly R statistic values in generation order.

    Raises
    ------
    InvalidInput
        Empty sample or non-positive repetitions.
    StatisticError
        The statistic failed on some resample; no partial result is returned.
    """

    smp = as_sample(sample)
    reps = validate_repetitions(repetitions)
    rng = _as_generator(rng_seed)
    seed = None if isinstance(rng_seed, np.random.Generator) else int(rng_seed if rng_seed is not None else Config.RANDOM_SEED)

    name = statistic_name(statistic)
    _LOGGER.debug("Generating %d resamples of size %d for statistic %s", reps, smp.size, name)
    observed = evaluate_statistic(statistic, smp.values, -1)
    values = resample_statistics(smp, statistic, reps, rng)
    _LOGGER.debug("Finished %d resamples for statistic %s", reps, name)

    return BootstrapDistribution(
        values=values,
        statistic=name,
        sample_size=smp.size,
        seed=seed,
        observed=observed,
    )


def quantile(values: Sequence[float] | np.ndarray, p: float) -> float:
    """Type-7 sample quantile: linear interpolation between order statistics.

    For the sorted values ``x`` of length R, ``h = (R - 1) * p`` and the result
    is ``x[floor(h)] + (h - floor(h)) * (x[ceil(h)] - x[floor(h)])``, which is
    numpy's ``"linear"`` method.
    """

    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise InvalidInput("Cannot compute a quantile of an empty distribution")
    if not (0.0 <= p <= 1.0):
        raise InvalidInput(f"p must be in [0, 1], got {p}")
    return float(np.quantile(arr, p, method="linear"))


def confidence_interval(
    distribution: BootstrapDistribution | Sequence[float] | np.ndarray,
    level: float = Config.DEFAULT_CONFIDENCE_LEVEL,
    method: str = Config.DEFAULT_CI_METHOD,
    point_estimate: float | None = None,
) -> ConfidenceInterval:
    """Extract a confidence interval from a bootstrap distribution.

    Parameters
    ----------
    distribution:
        A `BootstrapDistribution` or a non-empty sequence of statistic values.
        It is never modified.
    level:
        Confidence level in the open interval (0, 1), e.g. 0.95.
    method:
        ``"percentile"`` takes the alpha/2 and 1 - alpha/2 type-7 quantiles.
        ``"se"`` uses ``point_estimate +/- z * SE`` with SE the bootstrap
        standard deviation and z the standard normal quantile.
    point_estimate:
        Center for the ``"se"`` method. Defaults to the observed statistic
        stored on a `BootstrapDistribution`.
    """

    lv = validate_level(level)
    if method not in SUPPORTED_CI_METHODS:
        raise InvalidInput(f"Unknown interval method {method!r}; expected one of {SUPPORTED_CI_METHODS}")

    if isinstance(distribution, BootstrapDistribution):
        arr = distribution.values
        if point_estimate is None:
            point_estimate = distribution.observed
    else:
        arr = np.asarray(distribution, dtype=float)
    if arr.ndim != 1 or arr.size == 0:
        raise InvalidInput("distribution must be a non-empty one-dimensional sequence")
    if not np.all(np.isfinite(arr)):
        raise InvalidInput("distribution contains non-finite values")

    alpha = 1.0 - lv
    if method == "percentile":
        lower = quantile(arr, alpha / 2.0)
        upper = quantile(arr, 1.0 - alpha / 2.0)
        return ConfidenceInterval(lower=lower, upper=upper, level=lv, method=method)

    if point_estimate is None:
        raise InvalidInput("The 'se' method requires a point estimate")
    se = float(np.std(arr, ddof=1)) if arr.size > 1 else 0.0
    z = NormalDist().inv_cdf(1.0 - alpha / 2.0)
    center = float(point_estimate)
    return ConfidenceInterval(lower=center - z * se, upper=center + z * se, level=lv, method=method)


__all__ = [
    "BootstrapDistribution",
    "ConfidenceInterval",
    "generate",
    "confidence_interval",
    "quantile",
    "draw_resample",
    "resample_statistics",
    "evaluate_statistic",
    "validate_level",
    "validate_repetitions",
]
