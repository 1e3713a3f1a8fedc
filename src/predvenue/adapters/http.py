"""Shared async JSON fetch for venue REST APIs.

Every failure (transport, HTTP status, bad JSON) is logged and returned as a
failed FetchResult; nothing here raises on network errors.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from predvenue.adapters.rate_limit import TokenBucket
from predvenue.models.result import FetchResult

log = structlog.get_logger(__name__)

# Staleness windows (seconds) per endpoint class. Advisory, not a consistency guarantee.
PRICE_MAX_AGE = 10.0
MARKET_MAX_AGE = 30.0
LISTING_MAX_AGE = 60.0

DEFAULT_TIMEOUT_SEC = 10.0
DEFAULT_CACHE_ENTRIES = 2048


def _encode_params(params: dict[str, Any] | None) -> dict[str, str]:
    """Drop unset values; render booleans the way the venue APIs expect."""
    out: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            out[key] = "true" if value else "false"
        else:
            out[key] = str(value)
    return out


class ResponseCache:
    """In-memory payload cache keyed by URL + params, honouring a per-call max age.

    Entries older than ``ttl`` are never served and are pruned on write; past
    ``max_entries`` the oldest writes are evicted first.
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_ENTRIES, ttl: float = LISTING_MAX_AGE) -> None:
        self.max_entries = max_entries
        self.ttl = ttl
        self._entries: dict[tuple[str, tuple[tuple[str, str], ...]], tuple[float, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _key(url: str, params: dict[str, str]) -> tuple[str, tuple[tuple[str, str], ...]]:
        return url, tuple(sorted(params.items()))

    def get(self, url: str, params: dict[str, str], max_age: float) -> Any | None:
        key = self._key(url, params)
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, payload = entry
        age = time.monotonic() - stored_at
        if age > self.ttl:
            del self._entries[key]
            return None
        if age > max_age:
            return None
        return payload

    def set(self, url: str, params: dict[str, str], payload: Any) -> None:
        key = self._key(url, params)
        # re-insert so dict order stays oldest-write first
        self._entries.pop(key, None)
        self._entries[key] = (time.monotonic(), payload)
        if len(self._entries) > self.max_entries:
            self._evict()

    def _evict(self) -> None:
        now = time.monotonic()
        for key in [k for k, (stored_at, _) in self._entries.items() if now - stored_at > self.ttl]:
            del self._entries[key]
        while len(self._entries) > self.max_entries:
            del self._entries[next(iter(self._entries))]

    def clear(self) -> None:
        self._entries.clear()


class VenueHttpClient:
    """GET-only JSON client bound to one API base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        venue: str,
        client: httpx.AsyncClient | None = None,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        rate_limiter: TokenBucket | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.venue = venue
        self.timeout_sec = timeout_sec
        self.rate_limiter = rate_limiter
        self.cache = cache
        self._client = client

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        max_age: float = 0.0,
        not_found_ok: bool = False,
    ) -> FetchResult[Any]:
        """GET path and decode JSON. A 404 is an empty success when not_found_ok."""
        url = self.url_for(path)
        query = _encode_params(params)
        if self.cache is not None and max_age > 0:
            cached = self.cache.get(url, query, max_age)
            if cached is not None:
                return FetchResult.success(cached)
        if self.rate_limiter is not None:
            await self.rate_limiter.wait_for_token()
        try:
            resp = await self._get(url, query)
            if resp.status_code == 404 and not_found_ok:
                log.debug("venue_not_found", venue=self.venue, path=path)
                return FetchResult.success(None)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            log.warning("venue_request_failed", venue=self.venue, path=path, error=str(e))
            return FetchResult.failure(f"{self.venue} {path}: {e}")
        except ValueError as e:
            log.warning("venue_bad_json", venue=self.venue, path=path, error=str(e))
            return FetchResult.failure(f"{self.venue} {path}: invalid JSON ({e})")
        if self.cache is not None and max_age > 0 and data is not None:
            self.cache.set(url, query, data)
        return FetchResult.success(data)

    async def _get(self, url: str, query: dict[str, str]) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if self._client is not None:
            return await self._client.get(url, params=query, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout_sec) as client:
            return await client.get(url, params=query, headers=headers)
