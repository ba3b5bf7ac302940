import asyncio
import logging
import time
from typing import Awaitable, Callable

from aven_support.config import RATE_LIMIT_INTERVAL

logger = logging.getLogger(__name__)


class RateLimiter:
    """Enforces a minimum delay between consecutive calls.

    The first ``wait()`` returns immediately; later ones sleep for whatever
    is left of ``min_interval`` since the previous call. ``sleep`` and
    ``clock`` are injectable so tests never wait on the wall clock.
    """

    def __init__(
        self,
        min_interval: float = RATE_LIMIT_INTERVAL,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.min_interval = min_interval
        self._sleep = sleep
        self._clock = clock
        self._last_call: float | None = None

    async def wait(self) -> None:
        if self._last_call is not None:
            remaining = self.min_interval - (self._clock() - self._last_call)
            if remaining > 0:
                logger.info("Waiting %.1f seconds for rate limit...", remaining)
                await self._sleep(remaining)
        self._last_call = self._clock()
