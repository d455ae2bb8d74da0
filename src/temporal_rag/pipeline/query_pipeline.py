"""Query pipeline orchestrator: analyze -> embed -> filter -> retrieve -> generate.

Each stage consumes the previous stage's output and they run strictly in
sequence; callers wanting a deadline wrap `execute` in `asyncio.timeout`.
"""

from __future__ import annotations

from dataclasses import replace

from temporal_rag.generation.answer_generator import AnswerGenerator
from temporal_rag.models.domain import QueryResult, QueryType
from temporal_rag.observability.logger import get_logger
from temporal_rag.observability.metrics import log_pipeline_trace, log_retrieval_metrics
from temporal_rag.observability.tracing import TraceContext
from temporal_rag.protocols.embedder import Embedder
from temporal_rag.query.analyzer import QueryAnalyzer
from temporal_rag.query.temporal_filter import build_filter
from temporal_rag.retrieval.registry import RetrieverRegistry

logger = get_logger("query_pipeline")


class QueryPipeline:
    def __init__(
        self,
        analyzer: QueryAnalyzer,
        embedder: Embedder,
        retrievers: RetrieverRegistry,
        generator: AnswerGenerator,
    ) -> None:
        self._analyzer = analyzer
        self._embedder = embedder
        self._retrievers = retrievers
        self._generator = generator

    async def execute(self, question: str, query_type: QueryType | None = None) -> QueryResult:
        trace = TraceContext()

        # STEP 1: Query analysis
        with trace.span("analyze"):
            analyzed = await self._analyzer.analyze(question, query_type)

        # STEP 2: Embed the date-free query
        with trace.span("embed"):
            query_embedding = await self._embedder.embed_query(analyzed.clean_query)

        # STEP 3: Temporal filter
        with trace.span("filter"):
            temporal_filter = build_filter(analyzed)

        analyzed = replace(analyzed, query_embedding=query_embedding, filter=temporal_filter)

        # STEP 4: Retrieval by query type
        with trace.span("retrieve", query_type=analyzed.query_type.value) as span:
            retriever = self._retrievers.get(analyzed.query_type)
            documents = await retriever.retrieve(analyzed)
            span.metadata["documents"] = len(documents)

        # STEP 5: Answer generation
        with trace.span("generate"):
            generation = await self._generator.generate(
                analyzed.clean_query, documents, analyzed.query_type
            )

        log_retrieval_metrics(
            trace.trace_id,
            analyzed.query_type.value,
            temporal_filter is not None,
            len(documents),
            len(generation.sources),
        )
        result_trace = trace.to_trace(
            query=question,
            query_type=analyzed.query_type.value,
            filter_applied=temporal_filter is not None,
            documents_retrieved=len(documents),
        )
        log_pipeline_trace(result_trace)

        return QueryResult(
            question=question,
            analyzed=analyzed,
            answer=generation.answer,
            documents=documents,
            sources=generation.sources,
            trace=result_trace,
        )
