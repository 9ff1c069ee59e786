"""
Library logging.

Modules log under the `ez_opendata` hierarchy (`get_logger(__name__)`). The
package root carries a NullHandler, so nothing is printed unless the
application configures logging, either its own way or with `setup_logger`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "ez_opendata"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Logger for a module of this package.

    `get_logger(__name__)` inside ez_opendata gives e.g.
    `ez_opendata.infrastructure.http`; anything else is nested under the
    package logger.
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def install_null_handler() -> None:
    """Silence the package logger until an application adds handlers."""
    log = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in log.handlers):
        log.addHandler(logging.NullHandler())


def setup_logger(
    level: int = logging.INFO,
    log_file: Path | str | None = None,
    stream=None,
) -> logging.Logger:
    """
    Opt-in console/file output for applications and scripts.

    Adds one stream handler (stderr by default) and optionally a file
    handler to the package logger. Calling it again only updates the level.

    Returns:
        The `ez_opendata` logger.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level)
    if any(getattr(h, "_ez_opendata", False) for h in log.handlers):
        return log

    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for h in handlers:
        h.setFormatter(fmt)
        h._ez_opendata = True  # type: ignore[attr-defined]
        log.addHandler(h)
    return log
