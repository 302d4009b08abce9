"""Pydantic v2 model for match records scraped off the live widget.

The widget's DOM is not ours, so the model is permissive: every text
field accepts ``""`` and nothing is rejected. Classification happens in
``livecheck.validation``; malformed records are only logged.
"""

import re
from typing import Literal

from pydantic import BaseModel

MatchState = Literal["played", "upcoming", "postponed", "canceled"]

# "2-1", "2 : 1", "2–1" (en dash)
_SCORE_RE = re.compile(r"^\s*(\d+)\s*[-:–]\s*(\d+)\s*$")


def parse_score(score_text: str | None) -> tuple[int | None, int | None]:
    """Split a ``N-M`` / ``N:M`` score string into two ints.

    The text comes from the score element only, so a colon form is taken
    as a score, never a kickoff time. Returns ``(None, None)`` when the
    text does not look like a score ("vs", "-", empty).
    """
    if not score_text:
        return None, None
    m = _SCORE_RE.match(score_text)
    if not m:
        return None, None
    return int(m.group(1)), int(m.group(2))


class MatchModel(BaseModel):
    """A single scheduled or completed game extracted from the page."""

    home_team: str = ""
    away_team: str = ""
    home_score: int | None = None
    away_score: int | None = None
    date: str = ""
    time: str | None = None
    state: MatchState | None = None
    link: str | None = None

    @classmethod
    def from_extracted(cls, raw: dict) -> "MatchModel":
        """Build a match from a raw extraction record.

        ``raw`` carries ``home_team``, ``away_team``, ``score_text``,
        ``date``, ``time``, ``link`` (all strings, ``""`` when missing) and
        optional ``postponed`` / ``canceled`` marker flags.
        """
        home_score, away_score = parse_score(raw.get("score_text", ""))
        time_text = raw.get("time", "") or ""

        state: MatchState | None = None
        if raw.get("canceled"):
            state = "canceled"
        elif raw.get("postponed"):
            state = "postponed"
        elif home_score is not None and away_score is not None:
            state = "played"
        elif time_text.strip():
            state = "upcoming"

        return cls(
            home_team=raw.get("home_team", "") or "",
            away_team=raw.get("away_team", "") or "",
            home_score=home_score,
            away_score=away_score,
            date=raw.get("date", "") or "",
            time=time_text or None,
            state=state,
            link=raw.get("link") or None,
        )
