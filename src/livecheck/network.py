"""Per-page network observation over CDP.

``NetworkObserver`` keeps an ordered list of ``NetworkRequest`` records for
one page: a record is appended on ``Network.requestWillBeSent`` and
completed by the first ``Network.responseReceived`` whose URL equals it
among records still waiting for a response.

Known approximations, kept deliberately:

* URL equality is the only correlation. Two in-flight requests for the
  same URL can have their responses swapped.
* ``cached`` is True when the response carries a ``cache-control`` or
  ``etag`` header. That says the resource is cacheable, not that it came
  from a cache (304s and memory-cache hits are not inspected).

Listeners are registered by ``attach()`` and removed by ``detach()``;
``observe()`` wraps both so every test tears its handlers down.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Callable

from nodriver import cdp

from livecheck.models import NetworkRequest

logger = logging.getLogger(__name__)

CACHE_HEADERS = ("cache-control", "etag")

# Responses the caching check counts (widget data, not static assets)
INTERESTING_KEYWORDS = ("api", "data", "match", "live")


def _now_ms() -> float:
    return time.time() * 1000


def has_cache_headers(headers: Any) -> bool:
    """True if any cache header is present (names compared case-insensitively)."""
    if not headers:
        return False
    names = {str(name).lower() for name in headers}
    return any(h in names for h in CACHE_HEADERS)


class _CdpListener:
    """Deterministic add/remove of CDP event handlers on one tab."""

    def __init__(self) -> None:
        self._tab = None

    def _handlers(self) -> dict[type, Callable]:
        raise NotImplementedError

    @property
    def attached(self) -> bool:
        return self._tab is not None

    async def attach(self, tab) -> None:
        """Enable the Network domain and register this listener's handlers."""
        if self._tab is not None:
            raise RuntimeError(f"{type(self).__name__} is already attached")
        await tab.send(cdp.network.enable())
        for event_type, handler in self._handlers().items():
            tab.add_handler(event_type, handler)
        self._tab = tab

    def detach(self) -> None:
        """Remove exactly the handlers ``attach()`` registered."""
        if self._tab is None:
            return
        tab = self._tab
        self._tab = None
        for event_type, handler in self._handlers().items():
            try:
                tab.remove_handler(event_type, handler)
            except (KeyError, ValueError):
                logger.debug("Handler for %s already gone", event_type.__name__)

    @asynccontextmanager
    async def observe(self, tab):
        """Attach for the duration of the ``async with`` block."""
        await self.attach(tab)
        try:
            yield self
        finally:
            self.detach()


class NetworkObserver(_CdpListener):
    """Ordered request/response records for a single page.

    The event-independent ``record_request`` / ``record_response`` methods
    carry the logic; the CDP handlers only unpack events into them.

    Usage::

        observer = NetworkObserver()
        async with observer.observe(page.tab):
            await page.goto(url)
        report = build_report(observer.requests)
    """

    def __init__(self, clock: Callable[[], float] | None = None):
        super().__init__()
        self.requests: list[NetworkRequest] = []
        self._clock = clock or _now_ms

    def _handlers(self) -> dict[type, Callable]:
        return {
            cdp.network.RequestWillBeSent: self._on_request_will_be_sent,
            cdp.network.ResponseReceived: self._on_response_received,
        }

    def record_request(self, url: str, method: str) -> NetworkRequest:
        request = NetworkRequest(url=url, method=method, timestamp=self._clock())
        self.requests.append(request)
        return request

    def record_response(
        self, url: str, status: int | None, headers: Any = None
    ) -> NetworkRequest | None:
        """Complete the earliest unresolved record for ``url``.

        Returns the updated record, or None when nothing was waiting.
        """
        for request in self.requests:
            if request.url == url and not request.resolved:
                request.status = status
                request.response_time = self._clock() - request.timestamp
                request.cached = has_cache_headers(headers)
                return request
        return None

    def clear(self) -> None:
        self.requests.clear()

    def _on_request_will_be_sent(self, event) -> None:
        self.record_request(event.request.url, event.request.method)

    def _on_response_received(self, event) -> None:
        response = event.response
        self.record_response(response.url, response.status, response.headers)


class ResponseTap(_CdpListener):
    """Collects URLs of widget-data responses during one load.

    Used by the caching check to compare how much the widget fetched on a
    first and a repeat visit.
    """

    def __init__(self, keywords: tuple[str, ...] = INTERESTING_KEYWORDS):
        super().__init__()
        self.keywords = keywords
        self.urls: list[str] = []

    def _handlers(self) -> dict[type, Callable]:
        return {cdp.network.ResponseReceived: self._on_response_received}

    def record(self, url: str) -> bool:
        if any(k in url for k in self.keywords):
            self.urls.append(url)
            return True
        return False

    def _on_response_received(self, event) -> None:
        self.record(event.response.url)
