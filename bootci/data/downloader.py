"""HTTP downloader with resume, progress, and SHA256 verification."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
import logging
import time

import requests
from tqdm import tqdm

from bootci.utils import compute_sha256, ensure_dir


_LOGGER = logging.getLogger(__name__)


def _sha256_sidecar_path(dest: Path) -> Path:
    return dest.with_suffix(dest.suffix + ".sha256")


def _read_expected_sha256_from_sidecar(dest: Path) -> Optional[str]:
    sidecar = _sha256_sidecar_path(dest)
    if not sidecar.exists():
        return None
    try:
        value = sidecar.read_text(encoding="utf-8").strip()
    except OSError as e:
        _LOGGER.warning("Could not read checksum sidecar %s: %s", sidecar, e)
        return None
    return value or None


def _with_retries(fn: Callable[[], None], max_retries: int = 3, backoff_base: float = 1.0) -> None:
    """Execute ``fn`` with exponential backoff retries on network errors."""

    attempt = 0
    while True:
        try:
            fn()
            return
        except (requests.ConnectionError, requests.Timeout) as e:
            attempt += 1
            if attempt >= max_retries:
                raise
            delay = backoff_base * (2 ** (attempt - 1))
            _LOGGER.warning("Download attempt %d failed (%s); retrying in %.1fs", attempt, e, delay)
            time.sleep(delay)


def _resume_offset(status_code: int, content_range: str, resume_pos: int) -> int:
    """Return the byte offset the response body starts at (0 means rewrite)."""

    if resume_pos <= 0 or status_code != 206:
        return 0
    if not content_range:
        return resume_pos
    # "bytes <start>-<end>/<total>"
    try:
        start = int(content_range.split()[1].split("-")[0])
    except (IndexError, ValueError):
        return 0
    return start if start == resume_pos else 0


def download_file(
    url: str,
    dest: Path,
    expected_sha256: Optional[str] = None,
    *,
    force: bool = False,
) -> Path:
    """Download ``url`` to ``dest`` with resume and optional SHA256 verification.

    Parameters
    ----------
    url:
        HTTP(S) URL to download.
    dest:
        Destination file path; parent directories are created.
    expected_sha256:
        Optional expected SHA256 digest. If provided, verify after download.
    force:
        If True, re-download even if the file exists.
    """

    ensure_dir(dest.parent)

    if dest.exists() and not force:
        # The sidecar is written only after a complete download, so a file
        # without one (and no caller digest) is treated as partial.
        effective_expected = expected_sha256 or _read_expected_sha256_from_sidecar(dest)
        if effective_expected is not None and compute_sha256(dest) == effective_expected:
            _LOGGER.info("Using cached %s", dest)
            return dest
        if effective_expected is None:
            _LOGGER.info("No checksum for %s; resuming as a partial download", dest)

    resume_pos = dest.stat().st_size if (dest.exists() and not force) else 0

    def _do_download() -> None:
        nonlocal resume_pos
        headers = {"Range": f"bytes={resume_pos}-"} if resume_pos > 0 else {}
        with requests.get(url, stream=True, headers=headers, timeout=30) as r:
            if r.status_code == 416 and resume_pos > 0:
                # Range starts at or past the end: the local file is already whole.
                return
            if r.status_code not in (200, 206):
                r.raise_for_status()

            offset = _resume_offset(r.status_code, r.headers.get("Content-Range", ""), resume_pos)
            open_mode = "ab" if offset > 0 else "wb"
            resume_pos = offset

            try:
                total: int | None = int(r.headers.get("Content-Length"))
            except (TypeError, ValueError):
                total = None
            if total is not None and offset:
                total += offset

            with dest.open(open_mode) as f, tqdm(
                total=total, unit="B", unit_scale=True, initial=offset, desc=dest.name
            ) as pbar:
                for chunk in r.iter_content(chunk_size=1024 * 1024):
                    if not chunk:
                        continue
                    f.write(chunk)
                    pbar.update(len(chunk))

    _with_retries(_do_download)

    actual_sha256 = compute_sha256(dest)
    if expected_sha256 is not None and actual_sha256 != expected_sha256:
        dest.unlink(missing_ok=True)
        raise ValueError(f"SHA256 mismatch for {url}: expected {expected_sha256}, got {actual_sha256}")

    _sha256_sidecar_path(dest).write_text(actual_sha256, encoding="utf-8")
    return dest


__all__ = ["download_file"]
