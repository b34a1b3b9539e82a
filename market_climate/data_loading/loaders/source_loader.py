"""
Source loader: fetch the raw price table once, before any derivation.

``http://`` and ``https://`` locations are fetched with ``requests``; anything
else is read as a local UTF-8 file. Failures surface as ``DataFetchError``.
There is no retry; reporting the failure is the caller's job.
"""
from __future__ import annotations

import logging
from pathlib import Path

import requests

from ...services.errors import DataFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def is_remote(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def _fetch_remote(location: str, timeout: float) -> str:
    """
    HTTP GET with timeout.

    Raises:
        DataFetchError: On connection errors, timeouts and 4xx/5xx status
    """
    try:
        response = requests.get(location, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise DataFetchError(location=location, reason=f"{type(e).__name__}: {e}") from e

    response.encoding = response.encoding or "utf-8"
    return response.text


def _read_local(location: str) -> str:
    path = Path(location)
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise DataFetchError(location=str(path), reason=f"{type(e).__name__}: {e}") from e


def fetch_table_text(location: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """
    Fetch the raw delimited table.

    Args:
        location: URL or local file path
        timeout: HTTP timeout in seconds (ignored for local files)

    Returns:
        Table text with any UTF-8 BOM removed

    Raises:
        DataFetchError: If the table cannot be fetched or read
    """
    logger.info(f"📥 Fetching price table from {location}")

    if is_remote(location):
        text = _fetch_remote(location, timeout)
    else:
        text = _read_local(location)

    text = text.lstrip("\ufeff")
    logger.info(f"✅ Fetched {len(text)} characters from {location}")
    return text
