"""All prompt templates for the temporal RAG system."""

from __future__ import annotations

from temporal_rag.config.constants import CONTEXT_SEPARATOR, SOURCE_FIELD
from temporal_rag.models.domain import QueryType, SelectedDocument

QUERY_PARSER_PROMPT = """You are a query parser.

From the user query:
- Extract any referenced date or date range.
- Remove the date information from the query.
- Do not answer the question.

Output JSON with this exact schema:
{{
  "clean_query": string,
  "date": string | null,
  "date_range": {{ "start": string, "end": string }} | null
}}
Dates must be in ISO format (YYYY-MM-DD).

User query: {query}

Output only valid JSON, no additional text."""

SPECIFIC_FACT_PROMPT = """You are a helpful assistant. Answer the question using ONLY the provided context.
If the context does not contain the answer, say you don't know.
Quote the exact sentence from the context that answers the question. Do not paraphrase unnecessarily.

<context>
{context}
</context>

Question: {query}
Answer:"""

BROAD_TEMPORAL_PROMPT = """You are a helpful assistant. Answer the question using ONLY the provided context.
If the context does not contain the answer, say you don't know.
Do not use prior knowledge. Always quote the sentence(s) you used.
Do not make up information. Do not use any other information than the context provided.
You are given multiple news articles, separated by lines containing only "---".
Each article represents ONE distinct news event.
Your task:
- For EACH article, extract exactly ONE main event.
- Do NOT skip any article.
- Do NOT extract multiple events from the same article.
- Ignore background or explanatory details.
Output:
- One bullet per article
- Each bullet must include the article title

<context>
{context}
</context>

Question: {query}
Answer:"""

_ANSWER_PROMPTS: dict[QueryType, str] = {
    QueryType.BROAD_TEMPORAL: BROAD_TEMPORAL_PROMPT,
    QueryType.SPECIFIC_FACT: SPECIFIC_FACT_PROMPT,
}


def get_answer_prompt(query_type: QueryType) -> str:
    try:
        return _ANSWER_PROMPTS[query_type]
    except KeyError:
        raise ValueError(f"Unknown query type: {query_type}") from None


def format_context(documents: list[SelectedDocument]) -> str:
    """Join document contents into a single context block."""
    parts = []
    for doc in documents:
        title = str(doc.metadata.get("title") or "").strip()
        parts.append(f"Title: {title}\n{doc.content}" if title else doc.content)
    return CONTEXT_SEPARATOR.join(parts)


def unique_sources(documents: list[SelectedDocument]) -> list[str]:
    """Distinct non-blank source identifiers in first-seen order."""
    seen: set[str] = set()
    sources: list[str] = []
    for doc in documents:
        source = str(doc.metadata.get(SOURCE_FIELD) or "").strip()
        if not source or source in seen:
            continue
        seen.add(source)
        sources.append(source)
    return sources
