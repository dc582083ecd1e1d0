"""Logging setup for the API server and CLI."""

import logging
import sys

from assistant.config import settings


def setup_logging(level: str | None = None):
    """Configure root logging once from settings.log_level."""
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
