"""Load one column of a CSV file (local or remote) into a `Sample`."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlparse
import csv
import logging

from bootci.config import Config
from bootci.data.downloader import download_file
from bootci.errors import InvalidInput
from bootci.sample import Sample


_LOGGER = logging.getLogger(__name__)


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and urlparse(source).scheme in {"http", "https"}


def resolve_source(source: str | Path, cache_dir: Path | None = None) -> Path:
    """Return a local path for ``source``, downloading URLs into ``cache_dir``."""

    if is_url(source):
        name = Path(urlparse(str(source)).path).name or "data.csv"
        dest = (cache_dir or Config.DEFAULT_CACHE_DIR) / name
        return download_file(str(source), dest)
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    return path


def _parse_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def read_column(path: Path, column: str) -> list[str]:
    """Return the raw, stripped string values of ``column`` from a CSV file."""

    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        fields = reader.fieldnames or []
        if column not in fields:
            raise InvalidInput(f"Column {column!r} not found in {path.name}; available: {', '.join(fields)}")
        return [(row.get(column) or "").strip() for row in reader]


def load_column(
    source: str | Path,
    column: str,
    *,
    cache_dir: Path | None = None,
    numeric: bool | None = None,
) -> Sample:
    """Load ``column`` from a CSV path or HTTP(S) URL as a `Sample`.

    Missing tokens (Config.MISSING_VALUES) are dropped. With ``numeric=None``
    the column is numeric when every remaining value parses as a float;
    ``True`` forces numeric parsing and ``False`` keeps strings.
    """

    path = resolve_source(source, cache_dir)
    raw = read_column(path, column)

    missing = set(Config.MISSING_VALUES)
    kept: list[tuple[int, str]] = [(i, v) for i, v in enumerate(raw, start=2) if v not in missing]
    dropped = len(raw) - len(kept)
    if dropped:
        _LOGGER.warning("Dropped %d missing value(s) from column %r", dropped, column)
    if not kept:
        raise InvalidInput(f"Column {column!r} has no non-missing values")

    values: list[Any]
    if numeric is False:
        values = [v for _, v in kept]
    else:
        parsed = [(line, v, _parse_float(v)) for line, v in kept]
        bad = [(line, v) for line, v, x in parsed if x is None]
        if not bad:
            values = [x for _, _, x in parsed]
        elif numeric:
            line, v = bad[0]
            raise InvalidInput(f"Non-numeric value {v!r} in column {column!r} at line {line}")
        else:
            values = [v for _, v in kept]

    _LOGGER.debug("Loaded %d values from column %r of %s", len(values), column, path)
    return Sample(values, name=column)


__all__ = ["is_url", "resolve_source", "read_column", "load_column"]
