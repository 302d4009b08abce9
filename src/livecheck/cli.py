"""CLI entry point for one-off runs against the live widget.

Provides ``main()`` as the sync entry point for the ``livecheck`` console
script and ``async_main(args)`` which sets up logging, opens a browser,
runs the selected command and closes everything again.

Usage::

    livecheck report                         # network report for one load
    livecheck report --output report.json    # ... also written as JSON
    livecheck matches --headless             # extracted matches, classified
    livecheck matches --url https://example.org/live
"""

import argparse
import asyncio
import logging
from pathlib import Path

from livecheck.config import SuiteConfig
from livecheck.dom_extractor import extract_matches
from livecheck.logging_config import setup_logging
from livecheck.network import NetworkObserver
from livecheck.report import build_report, format_report
from livecheck.session import BrowserSession
from livecheck.validation import is_played_match, is_upcoming_match, summarize_matches

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the livecheck CLI."""
    parser = argparse.ArgumentParser(
        prog="livecheck",
        description="Inspect the live-sports widget page outside the test suite",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Page to load (default: the configured live widget URL)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run Chrome without a visible window",
    )
    parser.add_argument(
        "--settle",
        type=float,
        default=None,
        help="Seconds to wait after DOMContentLoaded (default: 5.0)",
    )
    parser.add_argument(
        "--report-dir",
        type=str,
        default="reports",
        help="Directory for logs and artifacts (default: reports)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Print the HTTP request report for one load")
    report.add_argument(
        "--output",
        type=str,
        default=None,
        help="Also write the report as JSON to this file",
    )

    sub.add_parser("matches", help="Print matches extracted from the page")
    return parser


def _config_from_args(args: argparse.Namespace) -> SuiteConfig:
    overrides = {"report_dir": args.report_dir}
    if args.url:
        overrides["base_url"] = args.url
    if args.headless:
        overrides["headless"] = True
    if args.settle is not None:
        overrides["settle_wait"] = args.settle
    # one-off run: no pacing needed
    overrides["inter_test_delay"] = 0.0
    return SuiteConfig(**overrides)


async def run_report(session: BrowserSession, output: str | None = None) -> dict:
    """Load the page once with a network observer attached."""
    config = session.config
    observer = NetworkObserver()
    async with session.page() as page:
        async with observer.observe(page.tab):
            await page.goto(config.base_url)
            await page.settle()

    report = build_report(observer.requests)
    for line in format_report(report):
        logger.info("%s", line)

    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        Path(output).write_text(report.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Report written to %s", output)
    return report.model_dump()


async def run_matches(session: BrowserSession) -> dict:
    """Load the page and log every extracted match with its classification."""
    config = session.config
    async with session.page() as page:
        await page.goto(config.base_url)
        await page.settle()
        html = await page.html()

    matches = extract_matches(html)
    for match in matches:
        if is_played_match(match):
            kind = "played"
        elif is_upcoming_match(match):
            kind = "upcoming"
        else:
            kind = match.state or "unknown"
        logger.info(
            "%-9s %s vs %s  %s %s",
            kind, match.home_team or "?", match.away_team or "?",
            match.date, match.time or "",
        )

    summary = summarize_matches(matches)
    logger.info(
        "%d matches: %d valid, %d played, %d upcoming",
        summary["total"], summary["valid"], summary["played"], summary["upcoming"],
    )
    return summary


async def async_main(args: argparse.Namespace) -> dict:
    """Async entry point: set up logging and the browser, run the command."""
    log_file = setup_logging(report_dir=args.report_dir)
    config = _config_from_args(args)
    logger.info(
        "livecheck %s: url=%s, headless=%s, log=%s",
        args.command, config.base_url, config.headless, log_file,
    )

    async with BrowserSession(config) as session:
        if args.command == "report":
            return await run_report(session, output=args.output)
        return await run_matches(session)


def main() -> None:
    """Sync entry point for the livecheck console script."""
    parser = build_parser()
    args = parser.parse_args()
    try:
        asyncio.run(async_main(args))
    except KeyboardInterrupt:
        pass
    finally:
        logging.shutdown()


if __name__ == "__main__":
    main()
