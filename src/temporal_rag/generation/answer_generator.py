"""Answer generation over the retrieved context."""

from __future__ import annotations

from dataclasses import dataclass

from temporal_rag.config.constants import NO_DOCUMENTS_ANSWER
from temporal_rag.generation.prompt_templates import (
    format_context,
    get_answer_prompt,
    unique_sources,
)
from temporal_rag.models.domain import QueryType, SelectedDocument
from temporal_rag.observability.logger import get_logger
from temporal_rag.protocols.llm import LLMProvider

logger = get_logger("generation")


@dataclass
class GenerationResult:
    answer: str
    sources: list[str]
    context: str


class AnswerGenerator:
    def __init__(self, llm: LLMProvider, temperature: float = 0.0) -> None:
        self._llm = llm
        self._temperature = temperature

    async def generate(
        self,
        query: str,
        documents: list[SelectedDocument],
        query_type: QueryType = QueryType.BROAD_TEMPORAL,
    ) -> GenerationResult:
        if not documents:
            logger.info("no_documents_for_answer", query=query)
            return GenerationResult(answer=NO_DOCUMENTS_ANSWER, sources=[], context="")

        context = format_context(documents)
        prompt = get_answer_prompt(query_type).format(context=context, query=query)
        answer = (await self._llm.complete(prompt, temperature=self._temperature)).strip()
        sources = unique_sources(documents)

        logger.info(
            "generated_answer",
            query_len=len(query),
            documents=len(documents),
            answer_len=len(answer),
            sources=len(sources),
        )
        return GenerationResult(answer=answer, sources=sources, context=context)
