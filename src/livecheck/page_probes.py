"""Lenient page inspections used by the live suite.

Pure functions: HTML string in, small dataclass or list out. They never
raise on odd markup; an empty or missing document produces zeroed
results so the suite can log and carry on.
"""

import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from livecheck.dom_extractor import parse_html
from livecheck.selectors import GOAL_SCORER_SELECTORS

logger = logging.getLogger(__name__)

# English plus the Hebrew words for "goal" and "goal/score" used on the site
GOAL_KEYWORDS = ("goal", "גול", "שער")
MATCH_LINK_KEYWORDS = ("match", "game", "stats")

_DIGITS_RE = re.compile(r"\d+")


@dataclass
class PageSummary:
    title: str = ""
    has_body: bool = False
    body_text_length: int = 0
    link_count: int = 0
    button_count: int = 0


@dataclass
class ContentAnalysis:
    has_numbers: bool = False
    has_colons: bool = False
    has_dashes: bool = False
    text_length: int = 0


@dataclass
class WordSample:
    has_text: bool = False
    word_count: int = 0
    sample: list[str] = field(default_factory=list)


@dataclass
class LinkSummary:
    link_count: int = 0
    valid_link_count: int = 0
    first_valid_link: str | None = None


@dataclass
class GoalScorer:
    text: str
    goals: int


def _body_text(soup: BeautifulSoup | None) -> str:
    if soup is None or soup.body is None:
        return ""
    return soup.body.get_text()


def summarize_page(html: str | None) -> PageSummary:
    """Title, body presence/length and link/button counts."""
    soup = parse_html(html)
    if soup is None:
        return PageSummary()
    title = soup.title.get_text().strip() if soup.title is not None else ""
    return PageSummary(
        title=title,
        has_body=soup.body is not None,
        body_text_length=len(_body_text(soup).strip()),
        link_count=len(soup.find_all("a")),
        button_count=len(soup.find_all("button")),
    )


def analyze_content(html: str | None) -> ContentAnalysis:
    """Cheap signals that scores, times or ranges are on the page."""
    text = _body_text(parse_html(html))
    return ContentAnalysis(
        has_numbers=bool(_DIGITS_RE.search(text)),
        has_colons=":" in text,
        has_dashes="-" in text,
        text_length=len(text),
    )


def sample_words(html: str | None, limit: int = 10) -> WordSample:
    """Words longer than two characters, as possible team names."""
    text = _body_text(parse_html(html))
    words = [w for w in text.split() if len(w) > 2]
    return WordSample(has_text=len(text) > 0, word_count=len(words), sample=words[:limit])


def summarize_links(html: str | None) -> LinkSummary:
    """Anchor count and the first href that actually goes somewhere."""
    soup = parse_html(html)
    if soup is None:
        return LinkSummary()
    anchors = soup.find_all("a")
    valid = [a.get("href") for a in anchors if a.get("href") not in (None, "", "#")]
    return LinkSummary(
        link_count=len(anchors),
        valid_link_count=len(valid),
        first_valid_link=valid[0] if valid else None,
    )


def find_match_links(html: str | None, limit: int = 3) -> list[str]:
    """Hrefs that look like match, game or stats pages."""
    soup = parse_html(html)
    if soup is None:
        return []
    links = []
    for a in soup.find_all("a"):
        href = a.get("href")
        if href and any(k in href for k in MATCH_LINK_KEYWORDS):
            links.append(href)
            if len(links) >= limit:
                break
    return links


def find_goal_scorers(html: str | None) -> list[GoalScorer]:
    """Locate a top-scorers list and read each row's goal count.

    Walks ``GOAL_SCORER_SELECTORS`` in order; the first selector with more
    than one row mentioning a goal keyword and a number wins. The goal
    count is the first integer in the row's text.
    """
    soup = parse_html(html)
    if soup is None:
        return []

    for selector in GOAL_SCORER_SELECTORS:
        rows = []
        for el in soup.select(selector):
            text = el.get_text().strip()
            lowered = text.lower()
            if _DIGITS_RE.search(text) and any(k in lowered for k in GOAL_KEYWORDS):
                rows.append(text)
        if len(rows) > 1:
            logger.debug("Goal scorers found via %r (%d rows)", selector, len(rows))
            return [
                GoalScorer(text=t, goals=int(_DIGITS_RE.search(t).group()))
                for t in rows
            ]
    return []
