"""Immutable sample of observations drawn from a population."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Sequence

import numpy as np

from bootci.errors import InvalidInput


@dataclass(frozen=True, eq=False)
class Sample:
    """Ordered, read-only collection of scalar or categorical observations.

    Parameters
    ----------
    values:
        One-dimensional sequence of observations. It is copied into a numpy
        array that is then marked read-only.
    name:
        Optional label, typically the source column name.
    """

    values: np.ndarray
    name: str | None = None

    def __post_init__(self) -> None:
        arr = np.array(self.values, copy=True)
        if arr.ndim != 1:
            raise InvalidInput(f"Sample must be one-dimensional, got shape {arr.shape}")
        if arr.size == 0:
            raise InvalidInput("Sample must contain at least one observation")
        arr.setflags(write=False)
        object.__setattr__(self, "values", arr)

    @property
    def size(self) -> int:
        return int(self.values.shape[0])

    @property
    def is_numeric(self) -> bool:
        return bool(np.issubdtype(self.values.dtype, np.number))

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values.tolist())

    def to_dict(self) -> dict[str, Any]:
        """Return summary metadata suitable for JSON serialization."""

        out: dict[str, Any] = {"name": self.name, "size": self.size, "dtype": str(self.values.dtype)}
        if self.is_numeric:
            out["min"] = float(np.min(self.values))
            out["max"] = float(np.max(self.values))
        else:
            categories, counts = np.unique(self.values.astype(str), return_counts=True)
            out["counts"] = {str(c): int(k) for c, k in zip(categories, counts)}
        return out


def as_sample(data: Sample | Sequence[Any] | np.ndarray, name: str | None = None) -> Sample:
    """Return ``data`` as a `Sample`, constructing one when needed.

    Raises
    ------
    InvalidInput
        If ``data`` is empty or not one-dimensional.
    """

    if isinstance(data, Sample):
        return data
    return Sample(np.asarray(data), name=name)


__all__ = ["Sample", "as_sample"]
