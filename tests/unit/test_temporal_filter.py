"""Tests for the temporal filter builder."""

from datetime import date, datetime, timezone

from temporal_rag.models.domain import AnalyzedQuery, DateRange
from temporal_rag.query.temporal_filter import build_filter, day_bounds_ms


def _ms(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


def test_no_dates_means_no_filter():
    assert build_filter(AnalyzedQuery(clean_query="q")) is None


def test_single_day_is_inclusive_of_whole_day():
    f = build_filter(AnalyzedQuery(clean_query="q", date="2005-06-03"))
    assert f.gte == _ms(2005, 6, 3, 0, 0, 0)
    assert f.lte == _ms(2005, 6, 3, 23, 59, 59)
    assert f.gte == 1117756800000
    assert f.lte == 1117843199000


def test_date_range_bounds():
    f = build_filter(
        AnalyzedQuery(clean_query="q", date_range=DateRange(start="2020-01-01", end="2020-01-31"))
    )
    assert f.gte == _ms(2020, 1, 1, 0, 0, 0)
    assert f.lte == _ms(2020, 1, 31, 23, 59, 59)


def test_date_takes_precedence_over_range():
    f = build_filter(
        AnalyzedQuery(
            clean_query="q",
            date="2005-06-03",
            date_range=DateRange(start="2001-01-01", end="2001-12-31"),
        )
    )
    assert f.gte == _ms(2005, 6, 3, 0, 0, 0)


def test_invalid_date_means_no_filter():
    assert build_filter(AnalyzedQuery(clean_query="q", date="2005-02-30")) is None
    assert build_filter(AnalyzedQuery(clean_query="q", date="June 3rd")) is None


def test_invalid_range_end_means_no_filter():
    bad = AnalyzedQuery(clean_query="q", date_range=DateRange(start="2020-01-01", end="soon"))
    assert build_filter(bad) is None


def test_inverted_range_is_built_as_given():
    f = build_filter(
        AnalyzedQuery(clean_query="q", date_range=DateRange(start="2020-02-01", end="2020-01-01"))
    )
    assert f.gte > f.lte


def test_where_clause_shape():
    f = build_filter(AnalyzedQuery(clean_query="q", date="2005-06-03"))
    assert f.to_where() == {
        "$and": [
            {"date_ts": {"$gte": 1117756800000}},
            {"date_ts": {"$lte": 1117843199000}},
        ]
    }


def test_matches_metadata():
    f = build_filter(AnalyzedQuery(clean_query="q", date="2005-06-03"))
    start, end = day_bounds_ms(date(2005, 6, 3))
    assert f.matches({"date_ts": start})
    assert f.matches({"date_ts": end})
    assert not f.matches({"date_ts": end + 1000})
    assert not f.matches({"date_ts": "1117756800000"})
    assert not f.matches({})
