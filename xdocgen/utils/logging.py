"""Logging for the VBA documentation extractor.

Everything logs under the ``xdocgen`` logger. Console output goes to
stderr because ``xdoc show`` writes its JSON document to stdout.
"""

import logging
import sys
from typing import Optional

from xdocgen.utils.config import LoggingConfig

PACKAGE_LOGGER = "xdocgen"


def _resolve_level(level: str) -> int:
    """Map a level name to its numeric value, INFO when unknown."""
    numeric_level = logging.getLevelName(level.upper())
    return numeric_level if isinstance(numeric_level, int) else logging.INFO


def _build_handlers(log_file: Optional[str]) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(
    level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Attach fresh handlers to the package logger.

    Repeated calls replace the previous handlers instead of stacking
    them. Module loggers (``xdocgen.parsers.*`` and friends) propagate
    here.

    Args:
        level: Level name such as DEBUG or WARNING. Unknown names mean INFO.
        log_format: ``logging.Formatter`` format string.
        log_file: Also append records to this file when given.

    Returns:
        The ``xdocgen`` logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    numeric_level = _resolve_level(level)
    package_logger.setLevel(numeric_level)

    formatter = logging.Formatter(log_format)
    for handler in _build_handlers(log_file):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.debug(
        "Logging to %d handler(s) at %s", len(package_logger.handlers), level
    )
    return package_logger


def setup_logging_from_config(config: LoggingConfig) -> logging.Logger:
    """Configure the package logger from the ``logging`` config section."""
    return setup_logging(
        level=config.level, log_format=config.format, log_file=config.file
    )
