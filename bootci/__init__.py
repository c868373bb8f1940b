"""
bootci: Simulation-based inference with the nonparametric bootstrap.

Resamples a sample with replacement, computes a statistic on each resample,
and reads confidence intervals off the empirical distribution of those
statistics.
"""

__all__ = [
    "Config",
    "RANDOM_SEED",
    "__version__",
    # Core (eager imports; lightweight)
    "Sample",
    "BootstrapDistribution",
    "ConfidenceInterval",
    "generate",
    "confidence_interval",
    "quantile",
    "Mean",
    "Median",
    "Proportion",
    "get_statistic",
    "BootstrapError",
    "InvalidInput",
    "StatisticError",
    # Extras (lazy-imported via __getattr__)
    "generate_parallel",
    "simulate_coverage",
    "simulate_proportion_coverage",
    "load_column",
    "plot_distribution",
    "render_summary",
]

__version__ = "0.1.0"

from typing import Any

from bootci.config import Config, RANDOM_SEED
from bootci.engine import (
    BootstrapDistribution,
    ConfidenceInterval,
    confidence_interval,
    generate,
    quantile,
)
from bootci.errors import BootstrapError, InvalidInput, StatisticError
from bootci.sample import Sample
from bootci.statistics import Mean, Median, Proportion, get_statistic


def __getattr__(name: str) -> Any:  # lazy attribute access to avoid heavy deps at import time
    if name == "generate_parallel":
        from bootci.parallel import generate_parallel as _gp

        return _gp
    if name == "simulate_coverage":
        from bootci.coverage import simulate_coverage as _sc

        return _sc
    if name == "simulate_proportion_coverage":
        from bootci.coverage import simulate_proportion_coverage as _spc

        return _spc
    if name == "load_column":
        # Requires requests/tqdm; import only on demand
        from bootci.data.loader import load_column as _lc

        return _lc
    if name == "plot_distribution":
        # Requires matplotlib; import only on demand
        from bootci.plots import plot_distribution as _pd

        return _pd
    if name == "render_summary":
        from bootci.report import render_summary as _rs

        return _rs
    raise AttributeError(f"module 'bootci' has no attribute {name!r}")
