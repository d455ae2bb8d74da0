"""Document loaders: local JSONL corpora and Wikinews day categories."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import httpx

from temporal_rag.exceptions import IngestionError
from temporal_rag.models.domain import SourceDocument
from temporal_rag.observability.logger import get_logger
from temporal_rag.query.temporal_filter import parse_day

logger = get_logger("loaders")


def load_jsonl(path: str | Path) -> list[SourceDocument]:
    """Read one JSON object per line with `text`, `source`, and optional `title`/`date`."""
    documents = []
    with open(path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                record = json.loads(line)
                published = parse_day(str(record["date"])) if record.get("date") else None
                documents.append(
                    SourceDocument(
                        text=record["text"],
                        source=record["source"],
                        title=record.get("title", ""),
                        published=published,
                        metadata=record.get("metadata", {}),
                    )
                )
            except (json.JSONDecodeError, KeyError, ValueError) as e:
                raise IngestionError(f"{path}:{line_no}: bad record: {e}") from e
    logger.info("jsonl_loaded", path=str(path), documents=len(documents))
    return documents


def wikinews_category(day: date) -> str:
    """Wikinews day category title, e.g. ``June_3,_2005``."""
    return f"{day.strftime('%B')}_{day.day},_{day.year}"


class WikinewsLoader:
    def __init__(
        self,
        api_url: str = "https://en.wikinews.org/w/api.php",
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 30.0,
    ) -> None:
        self._api_url = api_url
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    async def _get(self, params: dict) -> dict:
        try:
            response = await self._client.get(self._api_url, params={**params, "format": "json"})
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise IngestionError(f"Wikinews request failed: {e}") from e

    async def page_ids(self, day: date) -> list[int]:
        data = await self._get(
            {
                "action": "query",
                "list": "categorymembers",
                "cmtitle": f"Category:{wikinews_category(day)}",
                "cmnamespace": 0,
                "cmlimit": 50,
            }
        )
        members = data.get("query", {}).get("categorymembers", [])
        return [m["pageid"] for m in members if m.get("pageid") is not None]

    async def load_day(self, day: date) -> list[SourceDocument]:
        documents = []
        for page_id in await self.page_ids(day):
            data = await self._get(
                {
                    "action": "query",
                    "pageids": page_id,
                    "prop": "extracts",
                    "explaintext": "true",
                }
            )
            page = data.get("query", {}).get("pages", {}).get(str(page_id), {})
            extract = page.get("extract")
            if not extract:
                continue
            documents.append(
                SourceDocument(
                    text=extract,
                    source=f"https://en.wikinews.org/?curid={page_id}",
                    title=page.get("title", ""),
                    published=day,
                    metadata={"page_id": page_id, "publisher": "Wikinews"},
                )
            )
        logger.info("wikinews_loaded", day=day.isoformat(), documents=len(documents))
        return documents

    async def aclose(self) -> None:
        await self._client.aclose()
