"""Suite configuration with sensible defaults for the live widget checks."""

import os
from dataclasses import dataclass, field

LIVE_WIDGET_URL = "https://www.one.co.il/live/#.match.basketball"


def _default_browser_args() -> list[str]:
    return [
        "--window-size=1280,900",
        "--no-first-run",
        "--no-default-browser-check",
        "--disable-infobars",
        "--lang=he-IL,he,en-US,en",
    ]


@dataclass
class SuiteConfig:
    """Configuration for the live widget suite.

    All timing values are in seconds.
    """

    # Target page (single-page suite)
    base_url: str = LIVE_WIDGET_URL

    # Show the browser window; set True for CI
    headless: bool = False

    # Navigation waits for DOMContentLoaded or fails after this long
    navigation_timeout: float = 60.0
    mobile_navigation_timeout: float = 30.0
    link_navigation_timeout: float = 30.0

    # Time given to the widget's scripts to render after DOMContentLoaded
    settle_wait: float = 5.0
    short_settle_wait: float = 3.0

    # Fixed pacing before and after every test to avoid IP blocking
    inter_test_delay: float = 2.0

    # Pause between the two loads of the caching check
    reload_pause: float = 2.0

    # readyState polling interval while waiting for DOMContentLoaded
    ready_poll_interval: float = 0.1

    # iPhone-sized viewport (width, height) in CSS pixels
    mobile_viewport: tuple[int, int] = (375, 667)

    # Output artifacts
    report_dir: str = "reports"
    report_filename: str = "test-report.html"
    screenshot_filename: str = "mobile-viewport.png"

    browser_args: list[str] = field(default_factory=_default_browser_args)

    @property
    def report_path(self) -> str:
        return os.path.join(self.report_dir, self.report_filename)

    @property
    def screenshot_path(self) -> str:
        return os.path.join(self.report_dir, self.screenshot_filename)

    @classmethod
    def from_env(cls, **overrides) -> "SuiteConfig":
        """Build a config honouring ``LIVECHECK_URL`` and ``LIVECHECK_HEADLESS``.

        Explicit keyword overrides win over the environment.
        """
        env: dict = {}
        url = os.environ.get("LIVECHECK_URL")
        if url:
            env["base_url"] = url
        headless = os.environ.get("LIVECHECK_HEADLESS")
        if headless is not None:
            env["headless"] = headless.strip().lower() in ("1", "true", "yes")
        env.update(overrides)
        return cls(**env)


def apply_html_report_defaults(option, config: SuiteConfig) -> bool:
    """Point pytest-html at ``config.report_path`` unless ``--html`` was given.

    ``option`` is pytest's ``config.option`` namespace. Nothing happens
    when pytest-html is not installed (no ``htmlpath`` attribute).

    Returns:
        True when the report path was filled in.
    """
    if not hasattr(option, "htmlpath") or option.htmlpath:
        return False
    option.htmlpath = config.report_path
    option.self_contained_html = True
    return True
