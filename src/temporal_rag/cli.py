"""Command-line interface: ask, ingest, inspect, serve.

Usage:
    temporal-rag ask "What happened on June 3, 2005?"
    temporal-rag ingest --wikinews-date 2005-06-03 --reset
    temporal-rag ingest --file corpus.jsonl
    temporal-rag inspect
    temporal-rag serve
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

from temporal_rag.bootstrap import build_components
from temporal_rag.config.settings import Settings
from temporal_rag.exceptions import TemporalRAGError
from temporal_rag.ingestion.loaders import WikinewsLoader, load_jsonl
from temporal_rag.models.domain import QueryType
from temporal_rag.observability.logger import setup_logging
from temporal_rag.query.temporal_filter import parse_day


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="temporal-rag", description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Answer a question from the indexed documents")
    ask.add_argument("question", nargs="*", help="Question text (or set QUESTION)")
    ask.add_argument(
        "--query-type",
        choices=[t.value for t in QueryType],
        default=None,
        help="Retrieval strategy (default: RAG_DEFAULT_QUERY_TYPE)",
    )

    ingest = sub.add_parser("ingest", help="Chunk, embed and index documents")
    source = ingest.add_mutually_exclusive_group(required=True)
    source.add_argument("--wikinews-date", help="Wikinews day to ingest (YYYY-MM-DD)")
    source.add_argument("--file", help="JSONL file with text/source/title/date records")
    ingest.add_argument("--reset", action="store_true", help="Delete the collection first")

    sub.add_parser("inspect", help="Show the vector index size")
    sub.add_parser("serve", help="Run the HTTP API")
    return parser


async def run_ask(settings: Settings, question: str, query_type: str | None) -> int:
    components = build_components(settings)
    result = await components.query_pipeline.execute(
        question, QueryType(query_type) if query_type else None
    )
    print(result.answer)
    if result.sources:
        print("\nSources:")
        for source in result.sources:
            print(f"- {source}")
    return 0


async def run_ingest(settings: Settings, wikinews_date: str | None, file: str | None, reset: bool) -> int:
    components = build_components(settings)
    if wikinews_date:
        loader = WikinewsLoader(api_url=settings.wikinews_api_url)
        try:
            documents = await loader.load_day(parse_day(wikinews_date))
        finally:
            await loader.aclose()
    else:
        documents = load_jsonl(file)

    if not documents:
        print("No documents loaded. Nothing to ingest.", file=sys.stderr)
        return 1

    result = await components.ingest_pipeline.ingest(documents, reset=reset)
    print(f"Upserted {result.chunks_created} chunk(s) from {result.documents} document(s)")
    return 0


async def run_inspect(settings: Settings) -> int:
    components = build_components(settings)
    size = await components.index.count()
    print(f"Backend {settings.vector_backend}: {size} record(s)")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings.log_level, settings.log_json)

    if args.command == "serve":
        from temporal_rag.main import main as serve

        serve()
        return 0

    try:
        if args.command == "ask":
            question = " ".join(args.question).strip() or os.environ.get("QUESTION", "").strip()
            if not question:
                print(
                    'No question provided.\n\nUsage: temporal-rag ask "Your question here"\n'
                    'Or: QUESTION="Your question" temporal-rag ask',
                    file=sys.stderr,
                )
                return 1
            return asyncio.run(run_ask(settings, question, args.query_type))
        if args.command == "ingest":
            return asyncio.run(run_ingest(settings, args.wikinews_date, args.file, args.reset))
        return asyncio.run(run_inspect(settings))
    except (TemporalRAGError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
