"""
Logging for bloqrent.

One line per record on stdout. Rent and locker ids are logged, request bodies never are.
Chatty third-party loggers are capped at WARNING; which ones is a setting
(`BLOQRENT_QUIET_LOGGERS`, a JSON list).
"""

import logging
import sys
from collections.abc import Iterable

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", quiet_loggers: Iterable[str] = ()) -> None:
    """Configure root logging for the service.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR), case-insensitive.
        quiet_loggers: Logger names that only get WARNING and above.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("bloqrent").debug("Logging configured at %s", level.upper())
