"""Data access: cached HTTP downloads and CSV column loading.

Public API:
- download_file
- load_column, read_column, resolve_source
"""

from __future__ import annotations

from bootci.data.downloader import download_file
from bootci.data.loader import load_column, read_column, resolve_source

__all__ = [
    "download_file",
    "load_column",
    "read_column",
    "resolve_source",
]
