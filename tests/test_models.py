"""Unit tests for the pydantic models in livecheck.models."""

import pytest

from livecheck.models import (
    REQUEST_TYPES,
    MatchModel,
    NetworkReport,
    NetworkRequest,
    parse_score,
)


class TestParseScore:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("2-1", (2, 1)),
            (" 3 : 0 ", (3, 0)),
            ("88–79", (88, 79)),
            ("", (None, None)),
            (None, (None, None)),
            ("vs", (None, None)),
            ("-", (None, None)),
            ("2-1 (OT)", (None, None)),
        ],
    )
    def test_parse(self, text, expected):
        assert parse_score(text) == expected


class TestMatchModelFromExtracted:

    def _raw(self, **overrides) -> dict:
        raw = {
            "home_team": "Maccabi Tel Aviv",
            "away_team": "Hapoel Jerusalem",
            "score_text": "",
            "date": "12/03",
            "time": "",
            "link": "",
            "postponed": False,
            "canceled": False,
        }
        raw.update(overrides)
        return raw

    def test_played_match(self):
        match = MatchModel.from_extracted(self._raw(score_text="85-80"))
        assert match.home_score == 85
        assert match.away_score == 80
        assert match.state == "played"

    def test_upcoming_match(self):
        match = MatchModel.from_extracted(self._raw(time="20:30"))
        assert match.home_score is None
        assert match.time == "20:30"
        assert match.state == "upcoming"

    def test_postponed_marker_wins(self):
        match = MatchModel.from_extracted(self._raw(time="20:30", postponed=True))
        assert match.state == "postponed"

    def test_canceled_marker_wins_over_postponed(self):
        match = MatchModel.from_extracted(self._raw(postponed=True, canceled=True))
        assert match.state == "canceled"

    def test_no_signal_leaves_state_unset(self):
        match = MatchModel.from_extracted(self._raw())
        assert match.state is None
        assert match.time is None
        assert match.link is None

    def test_missing_keys_default_to_empty(self):
        match = MatchModel.from_extracted({})
        assert match.home_team == ""
        assert match.away_team == ""
        assert match.date == ""

    def test_link_kept(self):
        match = MatchModel.from_extracted(self._raw(link="/match/1234"))
        assert match.link == "/match/1234"


class TestNetworkRequest:

    def test_unresolved_until_response_time_set(self):
        req = NetworkRequest(url="https://a.test/", method="GET", timestamp=1.0)
        assert req.resolved is False
        req.response_time = 0.0
        assert req.resolved is True


class TestNetworkReport:

    def test_defaults_have_all_type_buckets(self):
        report = NetworkReport()
        assert report.total_requests == 0
        assert set(report.requests_by_type) == set(REQUEST_TYPES)
        assert all(v == 0 for v in report.requests_by_type.values())

    def test_default_dicts_not_shared(self):
        a, b = NetworkReport(), NetworkReport()
        a.requests_by_type["api"] += 1
        assert b.requests_by_type["api"] == 0

    def test_top_domains_descending_ties_first_seen(self):
        report = NetworkReport(
            requests_by_domain={"a.test": 1, "b.test": 3, "c.test": 1, "d.test": 2}
        )
        assert report.top_domains(3) == [("b.test", 3), ("d.test", 2), ("a.test", 1)]
