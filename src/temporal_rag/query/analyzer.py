"""Query analysis: pull a date or date range out of the question via the LLM.

Two stages: a completion call that returns raw text, then a strict parser
that returns a tagged outcome. The parser never raises; a malformed model
response degrades to the original question with no temporal constraint.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from temporal_rag.config.settings import Settings
from temporal_rag.generation.prompt_templates import QUERY_PARSER_PROMPT
from temporal_rag.models.domain import (
    AnalyzedQuery,
    DateRange,
    ParsedQuery,
    ParseOutcome,
    QueryFallback,
    QueryType,
)
from temporal_rag.models.schemas import ParserPayload
from temporal_rag.observability.logger import get_logger
from temporal_rag.protocols.llm import LLMProvider
from temporal_rag.query.json_extract import extract_json_object

logger = get_logger("query_analyzer")


def parse_analyzer_output(
    raw_text: str,
    raw_query: str,
    query_type: QueryType = QueryType.BROAD_TEMPORAL,
) -> ParseOutcome:
    original = raw_query.strip()

    def fallback(reason: str) -> QueryFallback:
        return QueryFallback(
            query=AnalyzedQuery(clean_query=original, query_type=query_type),
            reason=reason,
        )

    candidate = extract_json_object(raw_text)
    if candidate is None:
        return fallback("no_json_object")

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return fallback("invalid_json")

    try:
        payload = ParserPayload.model_validate(data)
    except ValidationError:
        return fallback("schema_mismatch")

    clean_query = (payload.clean_query or "").strip() or original
    date = (payload.date or "").strip() or None
    date_range = None
    if payload.date_range is not None:
        start = (payload.date_range.start or "").strip()
        end = (payload.date_range.end or "").strip()
        if start and end:
            date_range = DateRange(start=start, end=end)

    if date and date_range:
        logger.info("date_and_range_both_set", date=date, keeping="date")
        date_range = None

    return ParsedQuery(
        query=AnalyzedQuery(
            clean_query=clean_query,
            date=date,
            date_range=date_range,
            query_type=query_type,
        )
    )


class QueryAnalyzer:
    def __init__(self, llm: LLMProvider, settings: Settings) -> None:
        self._llm = llm
        self._temperature = settings.parser_temperature
        self._default_type = QueryType(settings.default_query_type)

    async def analyze(
        self, raw_query: str, query_type: QueryType | None = None
    ) -> AnalyzedQuery:
        if not raw_query.strip():
            raise ValueError("query must not be blank")
        prompt = QUERY_PARSER_PROMPT.format(query=raw_query.strip())
        raw_text = await self._llm.complete(prompt, temperature=self._temperature)

        outcome = parse_analyzer_output(raw_text, raw_query, query_type or self._default_type)
        if isinstance(outcome, QueryFallback):
            logger.warning(
                "query_parser_fallback",
                reason=outcome.reason,
                response_preview=raw_text[:200],
            )
        analyzed = outcome.query

        logger.info(
            "query_analyzed",
            clean_query=analyzed.clean_query,
            date=analyzed.date,
            date_range=(
                [analyzed.date_range.start, analyzed.date_range.end]
                if analyzed.date_range
                else None
            ),
            query_type=analyzed.query_type.value,
        )
        return analyzed
