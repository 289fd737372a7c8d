"""Logging helpers shared across the package."""

from __future__ import annotations

import logging

_ROOT_LOGGER_NAME = "iCrop"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger or one of its children.

    A :class:`logging.NullHandler` is attached to the package logger so library
    use stays silent until the host application configures logging.
    """

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    if not name:
        return root
    if name == _ROOT_LOGGER_NAME or name.startswith(f"{_ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return root.getChild(name)


def configure_logging(verbose: bool = False) -> None:
    """Send package log records to stderr, used by the command line entry point."""

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(_ROOT_LOGGER_NAME).setLevel(level)


__all__ = ["configure_logging", "get_logger"]
