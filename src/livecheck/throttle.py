"""Fixed-delay pacing between page lifecycles.

The target site is third-party and rate-limits aggressive clients, so
every test sleeps a fixed amount after its page is created and again
after the page is closed.
"""

import asyncio
import logging
import time

from livecheck.config import SuiteConfig

logger = logging.getLogger(__name__)


class Throttle:
    """Sleeps ``inter_test_delay`` seconds per pause.

    Uses an asyncio.Lock so concurrent callers are spaced out one after
    another rather than sleeping in parallel.
    """

    def __init__(self, config: SuiteConfig | None = None):
        if config is None:
            config = SuiteConfig()

        self._delay = config.inter_test_delay
        self._pauses = 0
        self._total_slept = 0.0
        self._lock = asyncio.Lock()

    @property
    def delay(self) -> float:
        """Configured delay in seconds."""
        return self._delay

    @property
    def stats(self) -> dict:
        return {"pauses": self._pauses, "total_slept": self._total_slept}

    async def pause(self, reason: str = "") -> float:
        """Sleep for the configured delay.

        Returns:
            Seconds actually slept (measured).
        """
        async with self._lock:
            if self._delay <= 0:
                return 0.0
            logger.debug("Throttle: sleeping %.1fs %s", self._delay, reason)
            started = time.monotonic()
            await asyncio.sleep(self._delay)
            slept = time.monotonic() - started
            self._pauses += 1
            self._total_slept += slept
            return slept
