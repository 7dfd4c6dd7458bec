"""Logging setup for the CLI and host programs"""

import logging


LOG_FORMAT = "[Pensieve] %(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Attach one stderr handler to the pensieve logger; DEBUG when debug is set, else WARNING."""
    logger = logging.getLogger("pensieve")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
