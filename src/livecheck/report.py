"""HTTP request report built from a page load's network records.

Provides:
- classify_request: coarse api/assets/data/other bucket for a URL
- build_report: counts by method, hostname, bucket and status code
- format_report: the report as log-ready lines

Pure functions; malformed URLs are skipped, never raised on.
"""

import logging
from collections.abc import Iterable
from urllib.parse import urlsplit

from livecheck.models import NetworkReport, NetworkRequest

logger = logging.getLogger(__name__)

# Checked in order; the first bucket with a matching substring wins.
_TYPE_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("api", ("api", "data")),
    ("assets", (".js", ".css", ".png", ".jpg")),
    ("data", ("match", "live")),
)


def classify_request(url: str) -> str:
    """Bucket a URL by substring; ``other`` when no rule matches."""
    for bucket, needles in _TYPE_RULES:
        if any(n in url for n in needles):
            return bucket
    return "other"


def hostname_of(url: str) -> str | None:
    """Hostname of an absolute URL, or None if it has none / won't parse."""
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


def build_report(requests: Iterable[NetworkRequest]) -> NetworkReport:
    """Aggregate request records into a ``NetworkReport``.

    Status codes are only counted for requests that got a matched response.
    """
    report = NetworkReport()
    for req in requests:
        report.total_requests += 1

        by_method = report.requests_by_method
        by_method[req.method] = by_method.get(req.method, 0) + 1

        host = hostname_of(req.url)
        if host is None:
            logger.debug("Skipping domain count for unparsable URL %r", req.url)
        else:
            report.requests_by_domain[host] = report.requests_by_domain.get(host, 0) + 1

        report.requests_by_type[classify_request(req.url)] += 1

        if req.status:
            report.status_codes[req.status] = report.status_codes.get(req.status, 0) + 1
    return report


def format_report(report: NetworkReport, top: int = 5) -> list[str]:
    """Render the report as the summary lines the suite logs."""
    domains = ", ".join(f"{host}: {count}" for host, count in report.top_domains(top))
    return [
        "HTTP Request Report:",
        f"  Total Requests: {report.total_requests}",
        f"  Requests by Method: {report.requests_by_method}",
        f"  Requests by Type: {report.requests_by_type}",
        f"  Status Codes: {report.status_codes}",
        f"  Top Domains: {domains}",
    ]
