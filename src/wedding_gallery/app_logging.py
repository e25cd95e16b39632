"""Logging setup for the gallery service."""

import logging

LOGGER_NAME = "wedding_gallery"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# httpx logs every request line at INFO, Drive upload URLs included.
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger and apply ``level``.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def resolve_level(level: str | int) -> int:
    """Translate a level name such as ``"debug"`` into its number."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved
