"""Tests for the CLI argument parsing and command wiring.

The browser is replaced by a mocked BrowserSession; no Chrome is started.
"""

import json
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from livecheck.cli import _config_from_args, build_parser, run_matches, run_report
from livecheck.config import LIVE_WIDGET_URL, SuiteConfig

MATCH_HTML = """
<html><body>
  <div class="match-item">
    <span class="home-team">Maccabi Tel Aviv</span>
    <span class="away-team">Hapoel Jerusalem</span>
    <span class="score">85-80</span>
    <span class="date">12/03</span>
  </div>
  <div class="match-item">
    <span class="home-team">Hapoel Holon</span>
    <span class="away-team">Bnei Herzliya</span>
    <span class="date">13/03</span>
    <span class="time">20:30</span>
  </div>
</body></html>
"""


class TestBuildParser:
    """Tests for CLI argument parsing."""

    def test_report_defaults(self):
        args = build_parser().parse_args(["report"])
        assert args.command == "report"
        assert args.url is None
        assert args.headless is False
        assert args.output is None
        assert args.report_dir == "reports"

    def test_matches_with_global_flags(self):
        args = build_parser().parse_args(
            ["--url", "https://x.test/live", "--headless", "--settle", "1.5", "matches"]
        )
        assert args.command == "matches"
        assert args.url == "https://x.test/live"
        assert args.headless is True
        assert args.settle == 1.5

    def test_report_output(self):
        args = build_parser().parse_args(["report", "--output", "out/report.json"])
        assert args.output == "out/report.json"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestConfigFromArgs:

    def test_defaults(self):
        config = _config_from_args(build_parser().parse_args(["report"]))
        assert config.base_url == LIVE_WIDGET_URL
        assert config.headless is False
        assert config.inter_test_delay == 0.0

    def test_overrides(self):
        args = build_parser().parse_args(
            ["--url", "https://x.test/", "--headless", "--settle", "0", "matches"]
        )
        config = _config_from_args(args)
        assert config.base_url == "https://x.test/"
        assert config.headless is True
        assert config.settle_wait == 0.0


# ---------------------------------------------------------------------------
# Commands against a mocked session
# ---------------------------------------------------------------------------

def _mock_session(html: str = "<html><body></body></html>"):
    page = MagicMock()
    page.tab = MagicMock()
    page.tab.send = AsyncMock()
    page.goto = AsyncMock()
    page.settle = AsyncMock()
    page.html = AsyncMock(return_value=html)

    session = MagicMock()
    session.config = SuiteConfig(base_url="https://x.test/live", settle_wait=0.0)

    @asynccontextmanager
    async def _page():
        yield page

    session.page = _page
    return session, page


class TestRunReport:

    @pytest.mark.asyncio
    async def test_report_written_as_json(self, tmp_path):
        session, page = _mock_session()
        out = tmp_path / "report.json"

        result = await run_report(session, output=str(out))

        page.goto.assert_awaited_once_with("https://x.test/live")
        assert result["total_requests"] == 0
        written = json.loads(out.read_text(encoding="utf-8"))
        assert written["requests_by_type"] == {"api": 0, "data": 0, "assets": 0, "other": 0}

    @pytest.mark.asyncio
    async def test_observer_detached_after_load(self):
        session, page = _mock_session()
        await run_report(session)
        assert page.tab.add_handler.call_count == 2
        assert page.tab.remove_handler.call_count == 2


class TestRunMatches:

    @pytest.mark.asyncio
    async def test_summary(self):
        session, _ = _mock_session(MATCH_HTML)
        summary = await run_matches(session)
        assert summary == {
            "total": 2,
            "valid": 2,
            "with_teams": 2,
            "played": 1,
            "upcoming": 1,
        }

    @pytest.mark.asyncio
    async def test_no_matches(self):
        session, _ = _mock_session()
        summary = await run_matches(session)
        assert summary["total"] == 0
