"""Custom exception hierarchy for the live widget suite.

Exception tree:
    LiveCheckError
    +-- BrowserNotStarted    (session used before start())
    +-- NavigationError      (page could not be loaded)
        +-- NavigationTimeout  (DOMContentLoaded not reached in time)

Extraction misses and screenshot failures are deliberately not errors;
they are logged and the caller carries on.
"""

from typing import Optional


class LiveCheckError(Exception):
    """Base exception for all livecheck errors."""

    def __init__(self, message: str, *, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class BrowserNotStarted(LiveCheckError):
    """The browser session was used before ``start()`` or after ``close()``."""

    pass


class NavigationError(LiveCheckError):
    """Navigation to a page failed.

    Not retried -- the current test fails and sibling tests carry on.
    """

    pass


class NavigationTimeout(NavigationError):
    """The page did not reach DOMContentLoaded within the timeout."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.timeout = timeout
        super().__init__(message, url=url)
