"""Module executed when running ``python -m cataloog``."""

from __future__ import annotations

import logging
import sys

import uvicorn

from app.config import settings

logger = logging.getLogger("cataloog")


def main() -> None:
    """Start the uvicorn server using the configured settings."""

    if not settings.tmdb_api_key:
        logging.basicConfig(level=logging.ERROR)
        logger.error("TMDB_API_KEY is not set; refusing to start")
        sys.exit(1)

    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
