import numpy as np
import pytest

from bootci.coverage import CoverageResult, simulate_coverage, simulate_proportion_coverage
from bootci.errors import InvalidInput
from bootci.statistics import Mean


def test_proportion_coverage_near_nominal():
    """Most 95% intervals for Bernoulli(0.3), n=261 contain 0.3."""

    result = simulate_proportion_coverage(0.3, 261, trials=100, repetitions=500, level=0.95, seed=7)
    assert isinstance(result, CoverageResult)
    assert result.trials == 100
    assert 0.85 <= result.coverage <= 1.0
    assert 0.0 < result.mean_width < 0.2


def test_mean_coverage_normal_population():
    def draw(rng: np.random.Generator) -> np.ndarray:
        return rng.normal(10.0, 2.0, size=40)

    result = simulate_coverage(draw, Mean(), 10.0, trials=50, repetitions=300, level=0.9, seed=3)
    assert result.coverage >= 0.75
    assert result.statistic == "mean"


def test_coverage_reproducible():
    r1 = simulate_proportion_coverage(0.5, 50, trials=10, repetitions=200, seed=42)
    r2 = simulate_proportion_coverage(0.5, 50, trials=10, repetitions=200, seed=42)
    assert r1.to_dict() == r2.to_dict()


def test_higher_level_gives_wider_intervals():
    narrow = simulate_proportion_coverage(0.4, 80, trials=10, repetitions=300, level=0.8, seed=5)
    wide = simulate_proportion_coverage(0.4, 80, trials=10, repetitions=300, level=0.99, seed=5)
    assert wide.mean_width > narrow.mean_width


def test_coverage_invalid_arguments():
    with pytest.raises(InvalidInput):
        simulate_proportion_coverage(1.5, 10, trials=5, repetitions=50)
    with pytest.raises(InvalidInput):
        simulate_proportion_coverage(0.5, 0, trials=5, repetitions=50)
    with pytest.raises(InvalidInput):
        simulate_proportion_coverage(0.5, 10, trials=0, repetitions=50)
    with pytest.raises(InvalidInput):
        simulate_proportion_coverage(0.5, 10, trials=5, repetitions=50, level=1.0)


def test_coverage_accepts_numpy_integers():
    result = simulate_proportion_coverage(np.float64(0.5), np.int64(40), trials=np.int32(5), repetitions=100, seed=1)
    assert result.trials == 5
    assert type(result.trials) is int
    with pytest.raises(InvalidInput):
        simulate_proportion_coverage(0.5, 40, trials=True, repetitions=100)
    with pytest.raises(InvalidInput):
        simulate_proportion_coverage(0.5, 40.0, trials=5, repetitions=100)
