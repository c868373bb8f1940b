"""Centralized configuration for reproducible bootstrap runs.

Defines immutable defaults for random seeds, repetition counts, confidence
levels, parallel chunking, and the download cache so that every entry point
(library calls, CLI, tests) resamples the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Random seeds
    RANDOM_SEED: int = 42

    # Bootstrap settings
    DEFAULT_REPETITIONS: int = 10_000
    MIN_RECOMMENDED_REPETITIONS: int = 1_000
    DEFAULT_CONFIDENCE_LEVEL: float = 0.95
    DEFAULT_CI_METHOD: str = "percentile"

    # Parallel generation
    PARALLEL_CHUNK_SIZE: int = 1_000

    # Coverage simulation
    DEFAULT_COVERAGE_TRIALS: int = 200

    # Data loading
    DEFAULT_CACHE_DIR: Path = Path(".cache/bootci")
    MISSING_VALUES: tuple[str, ...] = ("", "NA", "NaN", "nan", "null")


# Convenience re-exports and constants
RANDOM_SEED: int = Config.RANDOM_SEED
SUPPORTED_STATISTICS: list[str] = ["mean", "median", "prop"]
SUPPORTED_CI_METHODS: list[str] = ["percentile", "se"]
