"""Entrypoint: run the Temporal RAG API server."""

import uvicorn

from temporal_rag.api.app import create_app
from temporal_rag.config.settings import Settings


def main() -> None:
    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
