"""Logging setup for applications embedding Schema Studio."""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the ``schemastudio`` logger.

    Calling it again only updates the level. Unknown level names fall
    back to WARNING.

    Args:
        level: Log level name. Defaults to SCHEMASTUDIO_LOG_LEVEL, then WARNING.

    Returns:
        The package logger.
    """
    global _handler

    logger = logging.getLogger("schemastudio")
    logger.setLevel(_resolve_level(level or os.environ.get("SCHEMASTUDIO_LOG_LEVEL") or "WARNING"))

    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in logger.handlers:
        logger.addHandler(_handler)

    return logger
