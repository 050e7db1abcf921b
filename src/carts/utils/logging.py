"""Logging configuration for the Carts domain."""

import os

import structlog
from protean.utils.logging import configure_logging as configure_protean_logging

# Framework internals are chatty at INFO
_QUIET_LOGGERS = {"protean": "WARNING"}


def configure_logging(level: str | None = None, format: str | None = None) -> None:
    """Set up structlog for the process.

    Output format and default level follow ``PROTEAN_ENV`` (JSON in production,
    console in development, WARNING in test). ``LOG_FORMAT`` (``json`` or
    ``console``) forces the renderer and ``PROTEAN_LOG_LEVEL`` the level.
    """
    configure_protean_logging(
        level=level,
        format=format or os.environ.get("LOG_FORMAT", "auto"),
        per_logger=_QUIET_LOGGERS,
    )


def get_logger(name: str):
    return structlog.get_logger(name)
