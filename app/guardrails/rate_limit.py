import time
from collections import defaultdict
from fastapi import HTTPException
from starlette.requests import Request


class SimpleRateLimiter:
    """Sliding-window rate limiter; in-memory (per process). Used by API to cap analysis requests per client IP.
    Why available: Analysis is CPU-bound, so one client should not be able to monopolize the workers."""

    def __init__(self, max_requests: int, window_seconds: int):
        """Configure limiter: max_requests per window_seconds per client IP."""
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.storage = defaultdict(list)  # ip -> [timestamps]

    def check(self, request: Request):
        """Raise 429 if the client has exceeded the rate limit; otherwise record the request. Called on each protected endpoint."""
        now = time.time()
        ip = request.client.host if request.client else "unknown"

        # Drop timestamps outside the window
        recent = [t for t in self.storage[ip] if now - t < self.window_seconds]
        self.storage[ip] = recent

        if len(recent) >= self.max_requests:
            raise HTTPException(
                status_code=429,
                detail="Rate limit exceeded. Please retry later.",
                headers={"Retry-After": str(self.window_seconds)},
            )

        recent.append(now)

    def reset(self):
        """Forget all recorded requests."""
        self.storage.clear()
