"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules (auth, webhooks)
can use the same instance without circular imports. Central limit strings and
decorators keep rate limits DRY.
"""

import time
from collections.abc import Callable
from threading import Lock

from fastapi import HTTPException
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
LOGIN_LIMIT = "10/minute"
WEBHOOK_LIMIT = "60/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"
LOGIN_PER_USERNAME_LIMIT = 20  # attempts per window per username
LOGIN_PER_USERNAME_WINDOW_SEC = 15 * 60

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_webhook = limiter.limit(WEBHOOK_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)

class UsernameAttemptWindow:
    """Sliding window of login attempts keyed by normalized username.

    Keys whose attempts have all aged out are dropped on a sweep at most once
    per window, so usernames tried once do not accumulate.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._attempts: dict[str, list[float]] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._attempts)

    def hit(self, username: str) -> bool:
        """Record an attempt; return False if the username is already at the limit."""
        now = self._clock()
        cutoff = now - self.window_seconds
        key = username.strip().lower()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now
            recent = [t for t in self._attempts.get(key, ()) if t > cutoff]
            if len(recent) >= self.limit:
                self._attempts[key] = recent
                return False
            recent.append(now)
            self._attempts[key] = recent
            return True

    def _sweep(self, cutoff: float) -> None:
        for key in [k for k, ts in self._attempts.items() if not ts or ts[-1] <= cutoff]:
            del self._attempts[key]


# Per-username login attempts (client and admin), process-local.
_login_attempts = UsernameAttemptWindow(LOGIN_PER_USERNAME_LIMIT, LOGIN_PER_USERNAME_WINDOW_SEC)


def check_login_rate_per_username(username: str) -> None:
    """Raise 429 if too many login attempts for this username in the window.

    Counts every attempt regardless of outcome so the response does not
    depend on whether the account exists.
    """
    if not username or not limiter.enabled:
        return
    if not _login_attempts.hit(username):
        raise HTTPException(
            status_code=429,
            detail="Too many login attempts; try again later",
        )
