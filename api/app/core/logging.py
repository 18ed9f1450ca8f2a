"""Process-wide logging setup shared by the API and scripts."""

from __future__ import annotations

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a root handler once; leave existing handlers (uvicorn, pytest) alone."""
    root = logging.getLogger()
    resolved = level or settings.log_level
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("app").setLevel(resolved)
