"""Fixtures for the live widget suite.

One browser for the whole session; a fresh page and network observer per
test. Page creation and teardown are paced by the session's throttle.
Report lines stream through pytest's live log and are also kept in a
per-run file under ``{report_dir}/logs/``.
"""

import logging

import pytest
import pytest_asyncio

from livecheck.config import SuiteConfig
from livecheck.logging_config import setup_logging, teardown_logging
from livecheck.network import NetworkObserver
from livecheck.session import BrowserSession

logger = logging.getLogger("livecheck.e2e")


@pytest.fixture(scope="session")
def suite_config() -> SuiteConfig:
    return SuiteConfig.from_env()


@pytest.fixture(scope="session")
def run_log(suite_config):
    log_file = setup_logging(suite_config.report_dir, console=False)
    logger.info("[SETUP] Run log: %s", log_file)
    yield log_file
    teardown_logging()


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_session(suite_config, run_log):
    logger.info("[SETUP] Starting E2E Test Suite - Launching browser...")
    session = BrowserSession(suite_config)
    await session.start()
    logger.info("[SETUP] Browser launched successfully")
    yield session
    logger.info("[TEARDOWN] Closing browser...")
    await session.close()
    logger.info("[TEARDOWN] Browser closed")


@pytest_asyncio.fixture(loop_scope="session")
async def live_page(browser_session):
    logger.info("[SETUP] Creating new page for test...")
    async with browser_session.page() as page:
        logger.info("[SETUP] Page created and ready")
        yield page
        logger.info("[CLEANUP] Cleaning up page...")


@pytest_asyncio.fixture(loop_scope="session")
async def network_observer(live_page):
    observer = NetworkObserver()
    async with observer.observe(live_page.tab):
        yield observer
