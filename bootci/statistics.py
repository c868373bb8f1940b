"""Statistic functions applied to a sample or to each bootstrap resample.

A statistic is any callable mapping a one-dimensional array of size n to a
single real number. The built-ins below are small callable classes rather
than lambdas so they can be pickled into worker processes and carry a
``name`` used in logs, reports, and JSON output.

Examples
--------
>>> import numpy as np
>>> from bootci.statistics import Mean, Proportion
>>> Mean()(np.array([1.0, 2.0, 3.0]))
2.0
>>> Proportion("yes")(np.array(["yes", "no", "no", "yes"]))
0.5
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from bootci.errors import InvalidInput


StatisticFunction = Callable[[np.ndarray], float]


class Mean:
    """Arithmetic mean."""

    name = "mean"

    def __call__(self, values: np.ndarray) -> float:
        return float(np.mean(values))

    def __repr__(self) -> str:
        return "Mean()"


class Median:
    """Sample median (midpoint of the two central values for even n)."""

    name = "median"

    def __call__(self, values: np.ndarray) -> float:
        return float(np.median(values))

    def __repr__(self) -> str:
        return "Median()"


class Proportion:
    """Fraction of observations equal to an explicit success category.

    Parameters
    ----------
    success:
        The category counted as a "success". It is required: which label
        counts as success is a labeling convention (e.g. ``died == "yes"``
        versus ``lived == "no"``) that must not be guessed.
    """

    name = "prop"

    def __init__(self, success: Any) -> None:
        if success is None:
            raise InvalidInput("Proportion requires an explicit success category")
        self.success = success

    def __call__(self, values: np.ndarray) -> float:
        arr = np.asarray(values)
        if arr.size == 0:
            raise InvalidInput("Proportion is undefined for an empty sample")
        return float(np.count_nonzero(arr == self.success) / arr.size)

    def __repr__(self) -> str:
        return f"Proportion(success={self.success!r})"


def get_statistic(name: str, success: Any = None) -> StatisticFunction:
    """Resolve a statistic by name (``mean``, ``median``, ``prop``).

    Raises
    ------
    InvalidInput
        For unknown names, or ``prop`` without a success category.
    """

    key = name.strip().lower()
    if key == "mean":
        return Mean()
    if key == "median":
        return Median()
    if key in {"prop", "proportion"}:
        if success is None:
            raise InvalidInput("Statistic 'prop' requires a success category")
        return Proportion(success)
    raise InvalidInput(f"Unknown statistic: {name!r} (expected mean, median, or prop)")


def statistic_name(fn: Callable[..., Any]) -> str:
    """Return a display name for ``fn``."""

    name = getattr(fn, "name", None)
    if isinstance(name, str) and name:
        return name
    name = getattr(fn, "__name__", None)
    if isinstance(name, str) and name:
        return name
    return type(fn).__name__


__all__ = [
    "StatisticFunction",
    "Mean",
    "Median",
    "Proportion",
    "get_statistic",
    "statistic_name",
]
