"""Logging configuration helpers."""

import logging

# The Supabase client logs every PostgREST request through these at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure the tile_match logger with a single stream handler.

    Safe to call more than once: the level is updated but no second
    handler is attached.
    """
    logger = logging.getLogger("tile_match")
    logger.setLevel(level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
