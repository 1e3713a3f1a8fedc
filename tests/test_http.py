"""Shared fetch layer: param encoding, error degradation, staleness windows, rate limiting."""

import asyncio

import httpx
from structlog.testing import capture_logs

from predvenue.adapters import http
from predvenue.adapters.http import ResponseCache, VenueHttpClient
from predvenue.adapters.rate_limit import TokenBucket


def _client(handler, **kwargs) -> VenueHttpClient:
    transport = httpx.MockTransport(handler)
    return VenueHttpClient(
        "https://api.example.com/v2/", venue="test", client=httpx.AsyncClient(transport=transport), **kwargs
    )


def test_params_encoding_and_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        seen["params"] = dict(request.url.params)
        seen["accept"] = request.headers["accept"]
        return httpx.Response(200, json={"ok": True})

    result = asyncio.run(_client(handler).get_json("/markets", {"active": True, "limit": 5, "search": None}))
    assert result.ok and result.value == {"ok": True}
    assert seen["url"] == "https://api.example.com/v2/markets"
    assert seen["params"] == {"active": "true", "limit": "5"}
    assert seen["accept"] == "application/json"


def test_http_error_is_logged_and_returned():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="slow down")

    with capture_logs() as logs:
        result = asyncio.run(_client(handler).get_json("/markets"))
    assert not result.ok
    assert "429" in result.error
    assert logs[0]["event"] == "venue_request_failed"
    assert logs[0]["venue"] == "test"


def test_not_found_ok():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    client = _client(handler)
    assert asyncio.run(client.get_json("/markets/x", not_found_ok=True)).value is None
    assert asyncio.run(client.get_json("/markets/x", not_found_ok=True)).ok
    assert not asyncio.run(client.get_json("/markets/x")).ok


def test_cache_honours_max_age():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.params.get("token_id"))
        return httpx.Response(200, json={"price": "0.5"})

    client = _client(handler, cache=ResponseCache())

    async def run():
        await client.get_json("/price", {"token_id": "1"}, max_age=10)
        await client.get_json("/price", {"token_id": "1"}, max_age=10)
        await client.get_json("/price", {"token_id": "2"}, max_age=10)
        await client.get_json("/price", {"token_id": "1"}, max_age=0)

    asyncio.run(run())
    assert calls == ["1", "2", "1"]


def test_failures_are_not_cached():
    responses = [httpx.Response(500), httpx.Response(200, json=[1])]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    client = _client(handler, cache=ResponseCache())

    async def run():
        first = await client.get_json("/markets", max_age=60)
        second = await client.get_json("/markets", max_age=60)
        return first, second

    first, second = asyncio.run(run())
    assert not first.ok
    assert second.value == [1]


def test_cache_evicts_oldest_past_capacity():
    cache = ResponseCache(max_entries=2)
    for token in ("1", "2", "3"):
        cache.set("u", {"token_id": token}, token)
    assert len(cache) == 2
    assert cache.get("u", {"token_id": "1"}, max_age=60) is None
    assert cache.get("u", {"token_id": "3"}, max_age=60) == "3"


def test_cache_drops_expired_entries(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr(http.time, "monotonic", lambda: clock[0])
    cache = ResponseCache(max_entries=2, ttl=60)
    cache.set("u", {"token_id": "old"}, "old")
    clock[0] += 61
    cache.set("u", {"token_id": "a"}, "a")
    cache.set("u", {"token_id": "b"}, "b")
    # the expired entry goes first, both fresh ones survive
    assert len(cache) == 2
    assert cache.get("u", {"token_id": "a"}, max_age=60) == "a"

    clock[0] += 61
    assert cache.get("u", {"token_id": "a"}, max_age=600) is None
    assert len(cache) == 1


def test_token_bucket_per_minute():
    bucket = TokenBucket.per_minute(3)
    assert bucket.capacity == 3
    assert [bucket.consume() for _ in range(4)] == [True, True, True, False]


def test_rate_limited_client_still_fetches():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    client = _client(handler, rate_limiter=TokenBucket.per_minute(60))
    assert asyncio.run(client.get_json("/markets")).ok
