"""CSS selector guesses for the live widget's match list.

The widget's markup is undocumented and changes without notice, so each
selector is a comma-separated list of plausible class/attribute names.
Adjust here when the page changes; nothing else hard-codes markup.
"""

SELECTORS: dict[str, str] = {
    # Containers
    "league_list": '[data-league*="football"], [data-league*="soccer"], .league-list, .matches-list',
    "match_item": '.match-item, .match, [class*="match"], [data-match]',
    # Per-match fields
    "team_name": '.team-name, .team, [class*="team"]',
    "home_team": '.home-team, [class*="home"]',
    "away_team": '.away-team, [class*="away"]',
    "score": '.score, .result, [class*="score"]',
    "match_date": '.date, .match-date, [class*="date"]',
    "match_time": '.time, .match-time, [class*="time"]',
    "match_link": 'a[href*="match"], .match-link, [class*="link"]',
    # Status markers
    "postponed": '[class*="postponed"], [class*="delay"]',
    "canceled": '[class*="canceled"], [class*="cancel"]',
}

# Tried in order, only when SELECTORS["match_item"] finds nothing.
MATCH_ITEM_FALLBACKS: tuple[str, ...] = (
    'div[class*="match"]',
    'div[class*="Match"]',
    "[data-match]",
    'li[class*="match"]',
    'tr[class*="match"]',
)

# Top-scorer list candidates, most specific first.
GOAL_SCORER_SELECTORS: tuple[str, ...] = (
    '[class*="scorer"]',
    '[class*="goals"]',
    '[class*="top-scorer"]',
    "[data-scorer]",
    "table tr",
    "ul li",
)


def match_item_strategies(selectors: dict[str, str] | None = None) -> list[str]:
    """Ordered match-item selectors: the primary guess, then the fallbacks."""
    selectors = selectors or SELECTORS
    return [selectors["match_item"], *MATCH_ITEM_FALLBACKS]
