"""Shell logging on top of loguru.

Every module logs through ``logger.bind(component=...)`` so records from the
store, writer, persistence port and snapshot parser can be told apart in one
stream.  ``setup_logging`` installs the sinks described by the settings:

    12:00:01.204 | DEBUG    | writer      | snapshot scheduled in 0.5s
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from devcore.shell.settings import DevcoreSettings

_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[component]: <11}</magenta> | "
    "<level>{message}</level>"
)


class _StdlibBridge(logging.Handler):
    """Forward stdlib records (asyncio, anyio) into loguru under their logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.bind(component=record.name).opt(exception=record.exc_info).log(level, record.getMessage())


def setup_logging(settings: DevcoreSettings) -> None:
    """Replace loguru's default sink with the shell's stderr (and optional file) sinks.

    Call once at process startup, before the workspace store is opened.
    """
    level = settings.log_level.upper()

    logger.remove()
    logger.configure(extra={"component": "shell"})
    logger.add(sys.stderr, level=level, format=_FORMAT)
    if settings.log_file:
        logger.add(
            settings.log_file,
            level=level,
            format=_FORMAT,
            rotation=settings.log_rotation,
            colorize=False,
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=logging.WARNING, force=True)
    logger.bind(component="shell").debug("logging initialised (level={}, file={})", level, settings.log_file)
