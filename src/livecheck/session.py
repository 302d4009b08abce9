"""Browser session and per-test pages, driven by nodriver (real Chrome).

One ``BrowserSession`` owns a single Chrome process for the whole suite.
Each test gets its own tab through ``session.page()``, which paces the
target site with a fixed delay after the tab opens and another after it
closes.

Navigation (``LivePage.goto``) returns once the document leaves the
``loading`` state, i.e. the DOMContentLoaded milestone. If that does not
happen within the timeout a ``NavigationTimeout`` propagates: the current
test fails, nothing is retried, and other tests are unaffected.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import nodriver
from nodriver import cdp
from tenacity import AsyncRetrying, RetryError, retry_if_result, stop_after_delay, wait_fixed

from livecheck.config import SuiteConfig
from livecheck.exceptions import BrowserNotStarted, NavigationError, NavigationTimeout
from livecheck.throttle import Throttle

logger = logging.getLogger(__name__)

_DOM_READY_JS = (
    "document.readyState !== 'loading' && window.location.href !== 'about:blank'"
)


def _css_string(value: str) -> str:
    """Quote ``value`` for use inside a CSS attribute selector."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _is_ready(result: Any) -> bool:
    # nodriver may hand back ExceptionDetails instead of a bool
    return result is True


class LivePage:
    """A single browser tab used by one test."""

    def __init__(self, tab, config: SuiteConfig):
        self.tab = tab
        self._config = config
        self._viewport: tuple[int, int] | None = None
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def goto(self, url: str, timeout: float | None = None) -> None:
        """Navigate and wait for DOMContentLoaded.

        Raises:
            NavigationTimeout: The milestone was not reached within ``timeout``.
            NavigationError: The browser rejected the navigation.
        """
        if timeout is None:
            timeout = self._config.navigation_timeout
        started = time.monotonic()
        try:
            await asyncio.wait_for(self.tab.get(url), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise NavigationTimeout(
                f"Navigation to {url} timed out after {timeout:.0f}s",
                url=url,
                timeout=timeout,
            ) from exc
        except Exception as exc:
            raise NavigationError(f"Failed to navigate to {url}: {exc}", url=url) from exc

        remaining = max(0.0, timeout - (time.monotonic() - started))
        await self.wait_for_dom_ready(url, remaining)
        logger.debug("Loaded %s in %.2fs", url, time.monotonic() - started)

    async def wait_for_dom_ready(self, url: str, timeout: float) -> None:
        """Poll ``document.readyState`` until the DOM is parsed."""
        retrying = AsyncRetrying(
            retry=retry_if_result(lambda ready: not _is_ready(ready)),
            stop=stop_after_delay(timeout),
            wait=wait_fixed(self._config.ready_poll_interval),
        )
        try:
            await retrying(self.tab.evaluate, _DOM_READY_JS)
        except RetryError as exc:
            raise NavigationTimeout(
                f"{url} did not reach DOMContentLoaded within {timeout:.0f}s",
                url=url,
                timeout=timeout,
            ) from exc
        except Exception as exc:
            raise NavigationError(f"Lost the page while loading {url}: {exc}", url=url) from exc

    async def settle(self, seconds: float | None = None) -> None:
        """Give the widget's scripts time to render after navigation."""
        await asyncio.sleep(self._config.settle_wait if seconds is None else seconds)

    async def evaluate(self, expression: str) -> Any:
        return await self.tab.evaluate(expression)

    async def html(self) -> str:
        """Snapshot of the live DOM (``""`` if the page returned nothing)."""
        html = await self.tab.evaluate("document.documentElement.outerHTML")
        return html if isinstance(html, str) else ""

    async def current_url(self) -> str:
        url = await self.tab.evaluate("window.location.href")
        return url if isinstance(url, str) else ""

    async def set_viewport(self, width: int, height: int, mobile: bool = True) -> None:
        await self.tab.send(
            cdp.emulation.set_device_metrics_override(
                width=width, height=height, device_scale_factor=0, mobile=mobile
            )
        )
        self._viewport = (width, height)

    async def viewport_size(self) -> tuple[int, int] | None:
        """Emulated viewport if one was set, else the window's inner size."""
        if self._viewport is not None:
            return self._viewport
        width = await self.tab.evaluate("window.innerWidth")
        height = await self.tab.evaluate("window.innerHeight")
        if isinstance(width, int) and isinstance(height, int):
            return width, height
        return None

    async def screenshot(self, path: str) -> Path | None:
        """Save a PNG; best-effort, returns None instead of raising."""
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            await self.tab.save_screenshot(filename=path, format="png")
        except Exception as exc:
            logger.warning("Screenshot to %s skipped: %s", path, exc)
            return None
        return Path(path)

    async def click_link(self, href: str, timeout: float | None = None) -> bool:
        """Click the anchor for ``href`` and wait for the load, best-effort.

        Looks for an exact ``href`` match first, then for any anchor whose
        href contains the last path segment. Returns False when no anchor
        was found; navigation that never settles is only logged, since
        the page may be a single-page app using hash routing.
        """
        if timeout is None:
            timeout = self._config.link_navigation_timeout

        candidates = [f"a[href={_css_string(href)}]"]
        tail = href.rstrip("/").split("/")[-1]
        if tail:
            candidates.append(f"a[href*={_css_string(tail)}]")

        element = None
        for selector in candidates:
            try:
                element = await self.tab.query_selector(selector)
            except Exception as exc:
                logger.debug("query_selector(%r) failed: %s", selector, exc)
                element = None
            if element is not None:
                break
        if element is None:
            return False

        await element.click()
        try:
            await self.wait_for_dom_ready(href, timeout)
        except NavigationError as exc:
            logger.info("Navigation after click inconclusive: %s", exc)
        return True

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.tab.close()


async def timed_load(page: LivePage, url: str, settle: float | None = None) -> float:
    """Navigate and settle, returning the elapsed wall time in milliseconds."""
    started = time.monotonic()
    await page.goto(url)
    await page.settle(settle)
    return (time.monotonic() - started) * 1000


class BrowserSession:
    """One Chrome process shared by every test in the suite.

    Usage:
        async with BrowserSession(config) as session:
            async with session.page() as page:
                await page.goto(config.base_url)
    """

    def __init__(self, config: SuiteConfig | None = None):
        if config is None:
            config = SuiteConfig()

        self._config = config
        self.throttle = Throttle(config)
        self._browser: nodriver.Browser | None = None
        self._pages: list[LivePage] = []

    @property
    def config(self) -> SuiteConfig:
        return self._config

    @property
    def is_started(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        """Launch Chrome."""
        if self._browser is not None:
            return
        logger.info("Launching browser (headless=%s)...", self._config.headless)
        self._browser = await nodriver.start(
            headless=self._config.headless,
            browser_args=list(self._config.browser_args),
            no_sandbox=True,
        )
        logger.info("Browser launched")

    async def open_page(self) -> LivePage:
        """Open a fresh tab."""
        if self._browser is None:
            raise BrowserNotStarted("Browser not started. Call start() first.")
        tab = await self._browser.get("about:blank", new_tab=True)
        page = LivePage(tab, self._config)
        self._pages.append(page)
        return page

    async def close_page(self, page: LivePage) -> None:
        if page in self._pages:
            self._pages.remove(page)
        if not page.is_closed:
            await page.close()
            logger.debug("Page closed")

    @asynccontextmanager
    async def page(self):
        """Per-test page lifecycle: open, pause, yield, close, pause."""
        page = await self.open_page()
        try:
            await self.throttle.pause("after opening page")
            yield page
        finally:
            try:
                await self.close_page(page)
            finally:
                await self.throttle.pause("between tests")

    async def close(self) -> None:
        """Close any pages still open and stop Chrome."""
        if self._browser is None:
            return

        browser = self._browser
        for page in list(self._pages):
            try:
                await self.close_page(page)
            except Exception as exc:
                logger.debug("Ignoring error closing page: %s", exc)
        self._pages.clear()
        self._browser = None
        browser.stop()
        logger.info("Browser closed")

    async def __aenter__(self) -> "BrowserSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
