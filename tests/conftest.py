"""Suite-wide pytest hooks."""

import pytest

from livecheck.config import SuiteConfig, apply_html_report_defaults


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config):
    # must run before pytest-html reads --html in its own pytest_configure
    apply_html_report_defaults(config.option, SuiteConfig.from_env())
