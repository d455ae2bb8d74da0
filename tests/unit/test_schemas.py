"""Tests for Pydantic schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from temporal_rag.models.domain import QueryType
from temporal_rag.models.schemas import (
    IngestRequest,
    ParserPayload,
    QueryRequest,
)


def test_query_request_defaults():
    req = QueryRequest(query="What happened on June 3, 2005?")
    assert req.query_type is None


def test_query_request_type_override():
    req = QueryRequest(query="q", query_type="specific_fact")
    assert req.query_type == QueryType.SPECIFIC_FACT


def test_query_request_empty_rejected():
    with pytest.raises(ValidationError):
        QueryRequest(query="")


def test_query_request_unknown_type_rejected():
    with pytest.raises(ValidationError):
        QueryRequest(query="q", query_type="summary")


def test_parser_payload_requires_clean_query_key():
    with pytest.raises(ValidationError):
        ParserPayload.model_validate({"date": "2005-06-03"})


def test_parser_payload_null_clean_query_allowed():
    payload = ParserPayload.model_validate({"clean_query": None})
    assert payload.date is None
    assert payload.date_range is None


def test_parser_payload_range():
    payload = ParserPayload.model_validate(
        {"clean_query": "q", "date_range": {"start": "2005-06-01", "end": "2005-06-30"}}
    )
    assert payload.date_range.end == "2005-06-30"


def test_ingest_request_parses_dates():
    req = IngestRequest.model_validate(
        {"documents": [{"text": "body", "source": "s1", "date": "2005-06-03"}]}
    )
    assert req.documents[0].date == date(2005, 6, 3)
    assert req.reset is False


def test_ingest_request_needs_documents():
    with pytest.raises(ValidationError):
        IngestRequest(documents=[])


def test_query_request_blank_rejected():
    with pytest.raises(ValidationError):
        QueryRequest(query="   ")


def test_parser_payload_range_members_optional():
    assert ParserPayload.model_validate({"clean_query": "q", "date_range": {}}).date_range.start is None
    payload = ParserPayload.model_validate(
        {"clean_query": "q", "date_range": {"start": None, "end": None}}
    )
    assert payload.date_range.end is None
