"""Exception types raised by the bootstrap engine and its collaborators."""

from __future__ import annotations


class BootstrapError(Exception):
    """Base class for all bootci errors."""


class InvalidInput(BootstrapError, ValueError):
    """Raised when arguments are out of range or otherwise unusable.

    Examples: an empty sample, a non-positive number of repetitions, or a
    confidence level outside the open interval (0, 1).
    """


class StatisticError(BootstrapError, RuntimeError):
    """Raised when a statistic function fails on a particular resample.

    Parameters
    ----------
    message:
        Human-readable description of the failure.
    resample_index:
        Zero-based index of the resample that triggered the failure.
    """

    def __init__(self, message: str, *, resample_index: int) -> None:
        super().__init__(message)
        self.resample_index: int = resample_index


__all__ = ["BootstrapError", "InvalidInput", "StatisticError"]
