from __future__ import annotations

"""
Reader for the raw recommendation exports.

HTTP(S) locators are fetched with ``httpx`` using the hardened settings
from :mod:`rec_ingest.config` (timeouts, limited redirects, a maximum
download size).  Anything else is treated as a local path so the
pipeline can run against files on disk.  Every failure is raised as a
:class:`~rec_ingest.errors.TransportError`; there are no retries, a
single attempt is made per call.
"""

import asyncio
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx
from loguru import logger

from .config import (
    HTTP_CONNECT_TIMEOUT,
    HTTP_READ_TIMEOUT,
    HTTP_MAX_REDIRECTS,
    HTTP_MAX_BYTES,
    HTTP_USER_AGENT,
)
from .errors import TransportError


def is_http_locator(locator: str) -> bool:
    return urlparse(locator).scheme in {"http", "https"}


def build_client(**kwargs) -> httpx.AsyncClient:
    """Create an ``AsyncClient`` with the project's HTTP hardening applied."""
    kwargs.setdefault("follow_redirects", True)
    kwargs.setdefault("timeout", httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT))
    kwargs.setdefault("max_redirects", HTTP_MAX_REDIRECTS)
    kwargs.setdefault("headers", {"User-Agent": HTTP_USER_AGENT})
    return httpx.AsyncClient(**kwargs)


async def _fetch_http(url: str, client: httpx.AsyncClient) -> str:
    try:
        r = await client.get(url)
    except httpx.TimeoutException as e:
        logger.warning("Source fetch timeout for {}", url)
        raise TransportError(f"Timed out fetching {url}") from e
    except httpx.HTTPError as e:
        logger.warning("Source fetch exception for {}: {}", url, e)
        raise TransportError(f"Network error fetching {url}: {e}") from e

    if not r.is_success:
        logger.warning("Source fetch: HTTP {} for {}", r.status_code, url)
        raise TransportError(f"HTTP error! Status: {r.status_code}", status_code=r.status_code)

    if len(r.content) > HTTP_MAX_BYTES:
        logger.warning("Source fetch aborted: {} bytes > {} limit", len(r.content), HTTP_MAX_BYTES)
        raise TransportError(
            f"Response from {url} exceeds {HTTP_MAX_BYTES} bytes",
            status_code=r.status_code,
        )
    return r.text


def _read_local(locator: str) -> str:
    parsed = urlparse(locator)
    path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(locator)
    if not path.is_file():
        logger.warning("Source file not found: {}", path)
        raise TransportError(f"File not found: {path}", status_code=404)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Source file unreadable {}: {}", path, e)
        raise TransportError(f"Could not read {path}: {e}") from e


async def read_source(locator: str, client: httpx.AsyncClient | None = None) -> str:
    """
    Return the full text of the resource at ``locator``.

    Parameters
    ----------
    locator : str
        An ``http(s)://`` URL, a ``file://`` URL or a filesystem path.
    client : httpx.AsyncClient, optional
        Client to reuse.  When omitted a hardened client is created for
        this single call and closed afterwards.

    Raises
    ------
    TransportError
        On a non-2xx response, a network failure or timeout, an oversized
        body, or a missing/unreadable local file.
    """
    if not is_http_locator(locator):
        return await asyncio.to_thread(_read_local, locator)

    if client is not None:
        return await _fetch_http(locator, client)
    async with build_client() as own_client:
        return await _fetch_http(locator, own_client)
