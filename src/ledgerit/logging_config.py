"""Logging setup for the command line.

Modules log through ``logging.getLogger(__name__)``; only the CLI entry
point installs a handler.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at DEBUG
NOISY_LOGGERS = ["sqlalchemy.engine", "sqlalchemy.pool"]


def setup_logging(verbose: bool = False) -> logging.Handler:
    """Attach a stderr handler to the ``ledgerit`` logger.

    Args:
        verbose: Log at DEBUG instead of WARNING

    Returns:
        The installed handler, to be passed to :func:`teardown_logging`
    """
    logger = logging.getLogger("ledgerit")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return handler


def teardown_logging(handler: logging.Handler) -> None:
    """Detach a handler installed by :func:`setup_logging`."""
    logger = logging.getLogger("ledgerit")
    logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    handler.close()
