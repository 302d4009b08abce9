"""Best-effort match extraction from the live widget's HTML.

Provides:
- find_match_elements: first-success-wins walk over the match-item selectors
- extract_raw_matches: per-element field scraping into plain dicts
- extract_matches: the same, converted to MatchModel
- count_match_items: how many candidate elements the page has
- count_league_lists: how many league containers the page has
- parse_html: the lxml parse shared with livecheck.page_probes

The HTML comes from ``LivePage.html()`` (a page-context
``document.documentElement.outerHTML`` snapshot). Nothing in this module
raises on unexpected markup: no match means an empty result.
"""

import logging
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from livecheck.models import MatchModel
from livecheck.selectors import SELECTORS, match_item_strategies

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Raw records plus the selector that produced them (None if none did)."""

    selector: str | None
    records: list[dict] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


def _select(root: Tag, selector: str) -> list[Tag]:
    try:
        return root.select(selector)
    except SelectorSyntaxError:
        logger.warning("Skipping invalid selector %r", selector)
        return []


def _select_one(root: Tag, selector: str) -> Tag | None:
    found = _select(root, selector)
    return found[0] if found else None


def _text(el: Tag | None) -> str:
    if el is None:
        return ""
    return el.get_text().strip()


def parse_html(html: str | None) -> BeautifulSoup | None:
    """Parse a page snapshot with lxml; None for empty input."""
    if not html:
        return None
    return BeautifulSoup(html, "lxml")


def find_match_elements(
    soup: Tag, strategies: list[str]
) -> tuple[str | None, list[Tag]]:
    """Try each selector in order; the first with at least one hit wins.

    Returns:
        ``(winning_selector, elements)`` or ``(None, [])``.
    """
    for selector in strategies:
        elements = _select(soup, selector)
        if elements:
            logger.debug("Selector %r matched %d elements", selector, len(elements))
            return selector, elements
        logger.debug("Selector %r matched nothing, trying next", selector)
    return None, []


def extract_fields(el: Tag, selectors: dict[str, str] | None = None) -> dict:
    """Resolve one match element's sub-fields, ``""`` for anything missing.

    Home team falls back to the first generic team element and away team
    to the second, so widgets without home/away classes still yield names.
    """
    selectors = selectors or SELECTORS
    teams = _select(el, selectors["team_name"])

    home_el = _select_one(el, selectors["home_team"]) or (teams[0] if teams else None)
    away_el = _select_one(el, selectors["away_team"]) or (
        teams[1] if len(teams) > 1 else None
    )
    link_el = _select_one(el, selectors["match_link"])

    return {
        "home_team": _text(home_el),
        "away_team": _text(away_el),
        "score_text": _text(_select_one(el, selectors["score"])),
        "date": _text(_select_one(el, selectors["match_date"])),
        "time": _text(_select_one(el, selectors["match_time"])),
        "link": (link_el.get("href") or "") if link_el is not None else "",
        "postponed": bool(_select(el, selectors["postponed"])),
        "canceled": bool(_select(el, selectors["canceled"])),
    }


def extract_raw_matches(
    html: str | None, selectors: dict[str, str] | None = None
) -> ExtractionResult:
    """Scrape every candidate match element into a raw record dict."""
    selectors = selectors or SELECTORS
    soup = parse_html(html)
    if soup is None:
        return ExtractionResult(selector=None)

    selector, elements = find_match_elements(soup, match_item_strategies(selectors))
    records = [extract_fields(el, selectors) for el in elements]
    return ExtractionResult(selector=selector, records=records)


def extract_matches(
    html: str | None, selectors: dict[str, str] | None = None
) -> list[MatchModel]:
    """Scrape candidate matches and convert them to ``MatchModel``."""
    result = extract_raw_matches(html, selectors)
    if not result.records:
        logger.info("No match elements found; page structure may differ")
        return []
    logger.info(
        "Extracted %d potential matches via %r", len(result), result.selector
    )
    return [MatchModel.from_extracted(raw) for raw in result.records]


def count_match_items(
    html: str | None, selectors: dict[str, str] | None = None
) -> tuple[int, str | None]:
    """Count candidate match elements without scraping their fields."""
    soup = parse_html(html)
    if soup is None:
        return 0, None
    selector, elements = find_match_elements(
        soup, match_item_strategies(selectors or SELECTORS)
    )
    return len(elements), selector


def count_league_lists(html: str | None, selectors: dict[str, str] | None = None) -> int:
    """Count elements matching the league-list container selector."""
    soup = parse_html(html)
    if soup is None:
        return 0
    return len(_select(soup, (selectors or SELECTORS)["league_list"]))
