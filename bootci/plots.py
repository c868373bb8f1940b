"""Histogram of a bootstrap distribution with the confidence interval shaded."""

from __future__ import annotations

from pathlib import Path
import logging

import matplotlib.pyplot as plt

from bootci.engine import BootstrapDistribution, ConfidenceInterval
from bootci.utils import ensure_dir


_LOGGER = logging.getLogger(__name__)


def plot_distribution(
    distribution: BootstrapDistribution,
    interval: ConfidenceInterval,
    output_path: Path,
    *,
    bins: int = 30,
    title: str | None = None,
    xlabel: str | None = None,
) -> Path:
    """Save a histogram of ``distribution`` with ``interval`` shaded.

    Vertical lines mark both bounds and, when known, the observed statistic.
    Returns ``output_path``.
    """

    ensure_dir(output_path.parent)

    fig, ax = plt.subplots(figsize=(7.0, 4.0))
    ax.hist(distribution.values, bins=bins, color="#9ecae1", edgecolor="white")
    ax.axvspan(interval.lower, interval.upper, color="#31a354", alpha=0.25, label=f"{interval.level:.0%} CI")
    ax.axvline(interval.lower, color="#31a354", linewidth=2)
    ax.axvline(interval.upper, color="#31a354", linewidth=2)
    if distribution.observed is not None:
        ax.axvline(distribution.observed, color="#de2d26", linestyle="--", label="Observed")
    ax.set_xlabel(xlabel or f"Bootstrap {distribution.statistic}")
    ax.set_ylabel("Count")
    ax.set_title(title or f"Simulation-based bootstrap distribution (R={distribution.repetitions})")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(output_path, dpi=200)
    plt.close(fig)

    _LOGGER.info("Wrote figure %s", output_path)
    return output_path


__all__ = ["plot_distribution"]
