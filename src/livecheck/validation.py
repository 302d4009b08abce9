"""Pure predicates classifying extracted match records.

Every function here is total: it accepts a ``MatchModel`` or a plain
mapping with the same keys, never raises, and has no side effects.

Usage::

    from livecheck.validation import is_played_match, validate_match

    played = [m for m in matches if validate_match(m) and is_played_match(m)]
"""

import logging
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any

logger = logging.getLogger(__name__)


def _field(match: Any, name: str) -> Any:
    if isinstance(match, Mapping):
        return match.get(name)
    return getattr(match, name, None)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a score
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_team_name(team_name: Any) -> bool:
    """True iff ``team_name`` is a string that is non-empty after trimming."""
    return isinstance(team_name, str) and len(team_name.strip()) > 0


def validate_match(match: Any) -> bool:
    """True iff both team names are valid and a date is present."""
    date = _field(match, "date")
    return (
        validate_team_name(_field(match, "home_team"))
        and validate_team_name(_field(match, "away_team"))
        and bool(date)
    )


def is_played_match(match: Any) -> bool:
    """True iff both scores are numbers."""
    return _is_number(_field(match, "home_score")) and _is_number(
        _field(match, "away_score")
    )


def is_upcoming_match(match: Any) -> bool:
    """True iff the match has no scores and a non-empty kickoff time."""
    time_text = _field(match, "time")
    return (
        not is_played_match(match)
        and isinstance(time_text, str)
        and len(time_text.strip()) > 0
    )


def is_sorted_desc(values: Sequence[float]) -> bool:
    """True iff ``values`` never increases from one item to the next."""
    return all(values[i] >= values[i + 1] for i in range(len(values) - 1))


def summarize_matches(matches: Sequence[Any]) -> dict:
    """Count how many records pass each predicate.

    Invalid records are logged at DEBUG, never rejected.

    Returns:
        Dict with ``total``, ``valid``, ``with_teams``, ``played`` and
        ``upcoming`` counts.
    """
    summary = {"total": 0, "valid": 0, "with_teams": 0, "played": 0, "upcoming": 0}
    for match in matches:
        summary["total"] += 1
        if _field(match, "home_team") and _field(match, "away_team"):
            summary["with_teams"] += 1
        if validate_match(match):
            summary["valid"] += 1
        else:
            logger.debug("Incomplete match record: %r", match)
        if is_played_match(match):
            summary["played"] += 1
        elif is_upcoming_match(match):
            summary["upcoming"] += 1
    return summary
