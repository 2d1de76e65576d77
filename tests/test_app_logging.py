"""Tests for logging configuration."""

import logging

from tile_match.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("tile_match")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_stops_propagation() -> None:
    logger = logging.getLogger("tile_match")
    logger.handlers.clear()

    configure_logging()

    assert logger.propagate is False
    assert logger.level == logging.INFO
    assert logger.handlers[0].formatter is not None


def test_configure_logging_applies_level_and_quiets_http_client() -> None:
    logger = logging.getLogger("tile_match")
    logger.handlers.clear()

    configure_logging("DEBUG")
    configure_logging(logging.WARNING)

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logging.getLogger("httpx").level == logging.WARNING
