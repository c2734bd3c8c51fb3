import logging

from oddsboard.config import settings


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level or settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    # httpx logs every request URL at INFO, query string (apiKey) included.
    logging.getLogger("httpx").setLevel(logging.WARNING)
