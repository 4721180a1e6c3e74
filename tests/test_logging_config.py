"""Tests for CLI logging setup."""

import logging

from ledgerit.logging_config import setup_logging, teardown_logging


def test_setup_logging_levels():
    handler = setup_logging(verbose=False)
    try:
        assert logging.getLogger("ledgerit").level == logging.WARNING
        assert handler in logging.getLogger("ledgerit").handlers
    finally:
        teardown_logging(handler)

    handler = setup_logging(verbose=True)
    try:
        assert logging.getLogger("ledgerit").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        teardown_logging(handler)


def test_teardown_logging_detaches_handler():
    handler = setup_logging(verbose=True)
    teardown_logging(handler)

    logger = logging.getLogger("ledgerit")
    assert handler not in logger.handlers
    assert logger.level == logging.NOTSET
