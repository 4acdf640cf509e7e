"""Data source resolution and raw JSON reads.

A source is either an HTTP(S) URL, fetched with :mod:`httpx`, or a local
path, read with :class:`anyio.Path`.  Relative sources resolve against the
page they belong to, the way a browser resolves a relative fetch.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urljoin, urlparse

import anyio
import httpx

_HTTP_SCHEMES = frozenset({"http", "https"})


def is_url(location: str | Path) -> bool:
    return isinstance(location, str) and urlparse(location).scheme in _HTTP_SCHEMES


def resolve_source(source: str, page_location: str | Path | None = None) -> str | Path:
    """Resolve *source* relative to *page_location*.

    Returns a URL string for remote sources and a :class:`Path` otherwise.
    """
    if is_url(source):
        return source
    if page_location is None:
        return Path(source)
    if is_url(page_location):
        return urljoin(str(page_location), source)
    page = Path(page_location)
    return (page.parent / source).resolve()


async def read_json(
    location: str | Path,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Any:
    """Read and decode a JSON document from *location*.

    Raises:
        httpx.HTTPError: transport failure or non-success status.
        httpx.InvalidURL: the URL cannot be parsed.
        OSError: the local file could not be read.
        ValueError: the body is not valid JSON.
    """
    if is_url(location):
        if client is not None:
            return await _fetch(client, str(location))
        async with httpx.AsyncClient(timeout=timeout) as owned:
            return await _fetch(owned, str(location))

    raw = await anyio.Path(location).read_text(encoding="utf-8")
    return json.loads(raw)


async def _fetch(client: httpx.AsyncClient, url: str) -> Any:
    resp = await client.get(url)
    resp.raise_for_status()
    return resp.json()
