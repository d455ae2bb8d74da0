"""Translate an analyzed date or date range into an epoch-millisecond range filter."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from temporal_rag.config.constants import DATE_FORMAT, MS_PER_SECOND
from temporal_rag.models.domain import AnalyzedQuery, TemporalFilter
from temporal_rag.observability.logger import get_logger

logger = get_logger("temporal_filter")

_END_OF_DAY = time(23, 59, 59)


def _to_ms(day: date, at: time) -> int:
    moment = datetime.combine(day, at, tzinfo=timezone.utc)
    return int(moment.timestamp()) * MS_PER_SECOND


def day_bounds_ms(day: date) -> tuple[int, int]:
    """(00:00:00Z, 23:59:59Z) of `day` in epoch milliseconds."""
    return _to_ms(day, time.min), _to_ms(day, _END_OF_DAY)


def parse_day(value: str) -> date:
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def build_filter(analyzed: AnalyzedQuery) -> TemporalFilter | None:
    """Range filter for the analyzed query, or None when retrieval is unfiltered.

    A single date wins over a date range. Unparseable dates yield None.
    """
    try:
        if analyzed.date:
            day = parse_day(analyzed.date)
            start, end = day_bounds_ms(day)
        elif analyzed.date_range:
            first = parse_day(analyzed.date_range.start)
            last = parse_day(analyzed.date_range.end)
            start, _ = day_bounds_ms(first)
            _, end = day_bounds_ms(last)
            if first > last:
                logger.warning(
                    "date_range_inverted",
                    start=analyzed.date_range.start,
                    end=analyzed.date_range.end,
                )
        else:
            logger.info("no_date_filter")
            return None
    except ValueError as e:
        logger.warning(
            "invalid_date_in_query",
            date=analyzed.date,
            date_range=(
                [analyzed.date_range.start, analyzed.date_range.end]
                if analyzed.date_range
                else None
            ),
            error=str(e),
        )
        return None

    temporal_filter = TemporalFilter(gte=start, lte=end)
    logger.info("date_filter_applied", gte=start, lte=end)
    return temporal_filter
