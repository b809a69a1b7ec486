"""
Logging setup for applications embedding kpi_outliers.

Modules of the package only create loggers with ``logging.getLogger(__name__)``.
Handlers are installed on the package logger by `setup_rich_logger`, leaving the
root logger to the host application.
"""

import logging
import sys
from functools import lru_cache

from pydantic import BaseModel

PACKAGE_LOGGER = "kpi_outliers"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
LOGGER_FORMAT = "%(name)s | %(levelname)s | %(asctime)s | %(filename)s | %(funcName)s:%(lineno)d | %(message)s"
# rich prints time, level and source location in its own columns
RICH_FORMAT = "%(name)s | %(message)s"


class LoggerConfig(BaseModel):
    use_rich: bool
    format: str
    date_format: str | None = None
    level: str | int = logging.INFO

    def build_formatter(self) -> logging.Formatter:
        return logging.Formatter(self.format, datefmt=self.date_format)

    def build_handlers(self) -> list[logging.Handler]:
        """Create new handler instances; handlers are never shared between loggers."""
        if self.use_rich:
            from rich.logging import RichHandler

            handler: logging.Handler = RichHandler(rich_tracebacks=True, show_time=True, show_path=True)
        else:
            handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(self.build_formatter())
        return [handler]


@lru_cache
def get_logger_config(env: str = "dev", logging_level: str | int = logging.INFO) -> LoggerConfig:
    """Rich console output outside production, plain lines on stdout in production."""

    if env != "prod":
        return LoggerConfig(use_rich=True, format=RICH_FORMAT, level=logging_level)

    return LoggerConfig(use_rich=False, format=LOGGER_FORMAT, date_format=DATE_FORMAT, level=logging_level)


def setup_rich_logger(settings, logger_name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Attach the handlers for ``settings.ENV`` to the package logger.

    Calling it again replaces the handlers installed before, so records are never
    emitted twice. The logger stops propagating to avoid duplicates in hosts
    that also configure the root logger.

    Returns:
        The configured logger
    """
    logger_config = get_logger_config(env=settings.ENV, logging_level=settings.LOGGING_LEVEL)

    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    for handler in logger_config.build_handlers():
        logger.addHandler(handler)

    logger.setLevel(logger_config.level)
    logger.propagate = False
    return logger
