"""Pydantic v2 models for everything the suite records.

Re-exports all model classes for convenient import::

    from livecheck.models import MatchModel, NetworkRequest, NetworkReport
"""

from .match import MatchModel, MatchState, parse_score
from .network import REQUEST_TYPES, NetworkReport, NetworkRequest

__all__ = [
    "MatchModel",
    "MatchState",
    "NetworkRequest",
    "NetworkReport",
    "REQUEST_TYPES",
    "parse_score",
]
