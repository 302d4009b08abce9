"""Pydantic v2 models for observed network traffic and its summary report."""

from pydantic import BaseModel, Field

REQUEST_TYPES = ("api", "data", "assets", "other")


def _empty_type_counts() -> dict[str, int]:
    return {t: 0 for t in REQUEST_TYPES}


class NetworkRequest(BaseModel):
    """One request seen on a page, completed in place by its response.

    ``timestamp`` is the creation time and ``response_time`` the elapsed
    time to the matched response, both in milliseconds. ``cached`` is a
    header-presence heuristic, not a verified cache hit.
    """

    url: str
    method: str
    timestamp: float
    response_time: float | None = None
    cached: bool | None = None
    status: int | None = None

    @property
    def resolved(self) -> bool:
        """True once a response has been attributed to this request."""
        return self.response_time is not None


class NetworkReport(BaseModel):
    """Counts over a page load's requests."""

    total_requests: int = 0
    requests_by_method: dict[str, int] = Field(default_factory=dict)
    requests_by_domain: dict[str, int] = Field(default_factory=dict)
    requests_by_type: dict[str, int] = Field(default_factory=_empty_type_counts)
    status_codes: dict[int, int] = Field(default_factory=dict)

    def top_domains(self, n: int = 5) -> list[tuple[str, int]]:
        """Busiest hostnames, descending; ties keep first-seen order."""
        ranked = sorted(
            self.requests_by_domain.items(), key=lambda item: item[1], reverse=True
        )
        return ranked[:n]
