"""Shared filesystem helpers used by the data loader and output writers."""

from __future__ import annotations

from hashlib import sha256 as _sha256
from pathlib import Path
from typing import Any
import json


def compute_sha256(path: Path, chunk_size: int = 1024 * 1024) -> str:
    """Return the SHA256 hex digest for the file at ``path``.

    Parameters
    ----------
    path:
        File to hash.
    chunk_size:
        Bytes read per iteration (default: 1 MiB).
    """

    h = _sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def ensure_dir(path: Path) -> None:
    """Create directory ``path`` and parents if they don't exist."""

    path.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, obj: dict[str, Any]) -> Path:
    """Write ``obj`` as indented UTF-8 JSON, creating parent directories."""

    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
    return path
