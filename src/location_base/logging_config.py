"""
Logging for the location_base package.

Every module logs under the "location_base" namespace. What ends up there:
    - capture flow: permission status, each fix, each stored record id
    - storage: schema creation, database open/close, preference writes
    - alerts: every failure that is shown to the user is also logged,
      permission denials at WARNING, everything else at ERROR

The log file keeps full detail (DEBUG and up, with module, function and
line); the console only shows the configured level.
"""

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "location_base"

# Third-party loggers that flood DEBUG output during a capture
QUIET_LOGGERS = ("sqlalchemy.engine", "filelock", "uvicorn.access")


def setup_logging(level: str = "INFO", log_file: str = "logs/location_base.log") -> None:
    """
    Attach a file handler and a console handler to the package logger.

    Called once by the entry point before the server starts; tests call it
    with a temporary log_file.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        log_file: Path of the detailed log; its directory is created.
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )

    # Full trail of captures and storage calls, kept for later inspection
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    # Operator view while the screen surface is being served
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(console_formatter)

    package_logger = logging.getLogger(ROOT_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(file_handler)
    package_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    package_logger.info("Logging configured: level=%s, file=%s", level, log_path)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the location_base namespace.

    Module names that already start with the package name are used as is,
    so get_logger(__name__) in location_base.controller yields
    "location_base.controller" rather than a doubled prefix.

    Usage:
        logger = get_logger(__name__)
        logger.info("Captured location %d", record.id)
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
