"""Token-bucket rate limiter for venue REST APIs."""

from __future__ import annotations

import asyncio
import time


class TokenBucket:
    """Simple token bucket: refill rate per second, max burst."""

    def __init__(self, rate: float = 10.0, capacity: int | None = None) -> None:
        self.rate = rate
        self.capacity = capacity or max(1, int(rate * 2))
        self.tokens = float(self.capacity)
        self.last = time.monotonic()

    @classmethod
    def per_minute(cls, requests_per_minute: int) -> TokenBucket:
        """Bucket allowing a full minute's budget as burst."""
        return cls(rate=requests_per_minute / 60.0, capacity=max(1, requests_per_minute))

    def consume(self, n: int = 1) -> bool:
        """Consume n tokens. Return True if allowed, False if not enough."""
        now = time.monotonic()
        self.tokens = min(self.capacity, self.tokens + (now - self.last) * self.rate)
        self.last = now
        if self.tokens >= n:
            self.tokens -= n
            return True
        return False

    async def wait_for_token(self, n: int = 1) -> None:
        """Sleep until n tokens are available, then take them."""
        while not self.consume(n):
            missing = n - self.tokens
            await asyncio.sleep(max(missing / self.rate, 0.05) if self.rate > 0 else 0.1)
