import pickle

import numpy as np
import pytest

from bootci.errors import InvalidInput
from bootci.statistics import Mean, Median, Proportion, get_statistic, statistic_name


def test_mean_and_median():
    values = np.array([1.0, 2.0, 3.0, 10.0])
    assert Mean()(values) == pytest.approx(4.0)
    assert Median()(values) == pytest.approx(2.5)


def test_proportion_categorical_and_numeric():
    assert Proportion("yes")(np.array(["yes", "no", "no", "yes"])) == pytest.approx(0.5)
    assert Proportion(1)(np.array([1, 0, 0, 0])) == pytest.approx(0.25)
    assert Proportion("maybe")(np.array(["yes", "no"])) == 0.0


def test_proportion_requires_success_category():
    with pytest.raises(InvalidInput):
        Proportion(None)


def test_success_convention_is_explicit():
    """'died == yes' and 'lived == no' describe the same proportion."""

    died = np.array(["yes", "no", "no", "yes", "no"])
    lived = np.where(died == "yes", "no", "yes")
    assert Proportion("yes")(died) == pytest.approx(Proportion("no")(lived))


def test_get_statistic_by_name():
    assert isinstance(get_statistic("mean"), Mean)
    assert isinstance(get_statistic("MEDIAN"), Median)
    prop = get_statistic("prop", success="yes")
    assert isinstance(prop, Proportion) and prop.success == "yes"
    assert isinstance(get_statistic("proportion", success=1), Proportion)


def test_get_statistic_errors():
    with pytest.raises(InvalidInput):
        get_statistic("prop")
    with pytest.raises(InvalidInput):
        get_statistic("variance")


def test_statistic_name():
    assert statistic_name(Mean()) == "mean"
    assert statistic_name(Proportion("a")) == "prop"
    assert statistic_name(np.std) == "std"

    class _Custom:
        def __call__(self, values):
            return 0.0

    assert statistic_name(_Custom()) == "_Custom"


def test_builtins_are_picklable():
    for stat in (Mean(), Median(), Proportion("yes")):
        clone = pickle.loads(pickle.dumps(stat))
        assert statistic_name(clone) == statistic_name(stat)
